"""Process-termination hooks that drain the registry before exit."""

from __future__ import annotations

import atexit
import os
import signal
import sys
import threading
from typing import TYPE_CHECKING, Any

import structlog

if TYPE_CHECKING:
    from collections.abc import Callable
    from types import FrameType, TracebackType

logger = structlog.get_logger(__name__)


def _termination_signals() -> list[signal.Signals]:
    signals = [signal.SIGINT, signal.SIGTERM]
    if hasattr(signal, "SIGHUP"):
        signals.append(signal.SIGHUP)
    return signals


class LifecycleManager:
    """Installs exit, signal and fault hooks exactly once.

    Every hook runs the same cleanup callback. Interrupt and termination
    signals then exit with status 0; uncaught faults keep a non-zero exit
    status. Nothing is installed until ``ensure_installed`` is called, which
    the writer does on the first tracked creation.

    Embedders that cannot rely on these hooks call ``shutdown`` themselves.
    """

    def __init__(
        self,
        cleanup: Callable[[], int],
        *,
        install_signals: bool = True,
        exit_process: Callable[[int], Any] = os._exit,
    ) -> None:
        self._cleanup = cleanup
        self._install_signals = install_signals
        self._exit_process = exit_process
        self._installed = False
        self._lock = threading.Lock()
        self._previous_signals: dict[signal.Signals, Any] = {}
        self._previous_excepthook: Callable[..., Any] | None = None
        self._previous_threading_excepthook: Callable[..., Any] | None = None

    @property
    def installed(self) -> bool:
        return self._installed

    def ensure_installed(self) -> None:
        """Install all hooks on the first call; later calls do nothing."""
        if self._installed:
            return

        with self._lock:
            if self._installed:
                return

            atexit.register(self._on_exit)

            if self._install_signals:
                self._install_signal_handlers()

            self._previous_excepthook = sys.excepthook
            sys.excepthook = self._on_uncaught_exception

            self._previous_threading_excepthook = threading.excepthook
            threading.excepthook = self._on_thread_exception

            self._installed = True

    def shutdown(self) -> int:
        """Run cleanup now.

        Returns:
            Number of paths removed
        """
        return self._cleanup()

    def uninstall(self) -> None:
        """Restore the hooks that were in place before installation."""
        with self._lock:
            if not self._installed:
                return

            atexit.unregister(self._on_exit)

            if self._previous_signals and _on_main_thread():
                for signum, previous in self._previous_signals.items():
                    signal.signal(signum, previous)
                self._previous_signals.clear()

            if sys.excepthook == self._on_uncaught_exception:
                sys.excepthook = self._previous_excepthook or sys.__excepthook__
            if threading.excepthook == self._on_thread_exception:
                threading.excepthook = (
                    self._previous_threading_excepthook or threading.__excepthook__
                )

            self._previous_excepthook = None
            self._previous_threading_excepthook = None
            self._installed = False

    def _install_signal_handlers(self) -> None:
        # signal.signal only works from the main thread; elsewhere the exit hook
        # and excepthooks still apply
        if not _on_main_thread():
            return

        for signum in _termination_signals():
            self._previous_signals[signum] = signal.getsignal(signum)
            signal.signal(signum, self._on_signal)

    def _on_exit(self) -> None:
        self._cleanup()

    def _on_signal(self, signum: int, frame: FrameType | None) -> None:
        logger.info("lifecycle_signal_received", signal=signal.Signals(signum).name)
        self._cleanup()
        sys.exit(0)

    def _on_uncaught_exception(
        self,
        exc_type: type[BaseException],
        exc: BaseException,
        tb: TracebackType | None,
    ) -> None:
        logger.error("lifecycle_uncaught_fault", error=f"{exc_type.__name__}: {exc}")
        self._cleanup()
        previous = self._previous_excepthook or sys.__excepthook__
        # The interpreter exits with status 1 after this hook returns
        previous(exc_type, exc, tb)

    def _on_thread_exception(self, args: Any) -> None:
        previous = self._previous_threading_excepthook or threading.__excepthook__

        # SystemExit in a worker thread is a silent, normal thread exit
        if args.exc_type is SystemExit:
            previous(args)
            return

        thread_name = args.thread.name if args.thread is not None else None
        logger.error(
            "lifecycle_uncaught_fault",
            error=f"{args.exc_type.__name__}: {args.exc_value}",
            thread=thread_name,
        )
        self._cleanup()
        previous(args)
        self._exit_process(1)


def _on_main_thread() -> bool:
    return threading.current_thread() is threading.main_thread()
