"""Exception types raised by tempwrite."""


class TempWriteError(Exception):
    """Base class for all tempwrite errors."""


class InvalidArgument(TempWriteError, ValueError):
    """Raised when an argument is missing or has the wrong type."""


class InvalidFormat(InvalidArgument):
    """Raised when structured input (e.g. CSV rows) has an unsupported shape."""


class NotFound(TempWriteError, FileNotFoundError):
    """Raised when a copy source does not exist."""


class WriteFailure(TempWriteError):
    """Raised when creating a temporary file or directory fails.

    The underlying ``OSError`` is available as ``__cause__``.
    """
