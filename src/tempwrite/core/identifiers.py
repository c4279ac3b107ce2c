"""Filename fragments for temporary resources."""

from __future__ import annotations

import secrets
import time
from typing import TYPE_CHECKING, NamedTuple

if TYPE_CHECKING:
    from collections.abc import Callable

_BASE36_DIGITS = "0123456789abcdefghijklmnopqrstuvwxyz"

# Lower bound on random bytes per name
MIN_RANDOM_BYTES = 6


class Fragments(NamedTuple):
    """Timestamp and random parts of a generated name."""

    timestamp: str
    random: str


def to_base36(value: int) -> str:
    """Render a non-negative integer in lowercase base 36."""
    if value < 0:
        raise ValueError("value must be non-negative")
    if value == 0:
        return "0"

    digits: list[str] = []
    while value:
        value, rem = divmod(value, 36)
        digits.append(_BASE36_DIGITS[rem])
    return "".join(reversed(digits))


class IdentifierGenerator:
    """Produces collision-resistant filename fragments.

    The timestamp fragment is the wall clock in milliseconds (base 36), the
    random fragment is hex from the system CSPRNG. Two calls in the same
    millisecond still differ in their random part.
    """

    __slots__ = ("_clock", "_token_hex", "_nbytes")

    def __init__(
        self,
        clock: Callable[[], float] = time.time,
        token_hex: Callable[[int], str] = secrets.token_hex,
        nbytes: int = MIN_RANDOM_BYTES,
    ) -> None:
        if nbytes < MIN_RANDOM_BYTES:
            raise ValueError(f"nbytes must be at least {MIN_RANDOM_BYTES}")
        self._clock = clock
        self._token_hex = token_hex
        self._nbytes = nbytes

    def generate(self) -> Fragments:
        """Return fresh timestamp and random fragments."""
        millis = int(self._clock() * 1000)
        return Fragments(timestamp=to_base36(millis), random=self._token_hex(self._nbytes))
