"""
random_source.py - The one place randomness comes from.

How this works:
1. On construction we probe the OS entropy pool (os.urandom). If the OS
   can't give us cryptographic randomness we raise EntropySourceError
   and stop there. There is deliberately no fallback to `random`.
2. After that, every draw goes through secrets.SystemRandom, which reads
   from the same OS source (/dev/urandom, getrandom(), BCryptGenRandom).
3. The generator is handed a SecureRandomSource explicitly instead of
   reaching for a module-level global, so tests can substitute their own.

A SecureRandomSource is meant to be owned by one caller at a time. It is
not designed to be shared between two generate() calls running in
parallel without the caller adding its own locking.
"""

import logging
import os
import secrets
from typing import MutableSequence, Sequence, TypeVar


logger = logging.getLogger(__name__)

T = TypeVar("T")

# Bytes read from the OS during the startup probe
PROBE_BYTES = 32


class EntropySourceError(RuntimeError):
    """The OS could not provide cryptographically secure randomness."""


class SecureRandomSource:
    """
    Uniform integer draws backed by the OS CSPRNG.

    Raises:
        EntropySourceError: If the OS entropy source is unavailable.
    """

    def __init__(self):
        try:
            os.urandom(PROBE_BYTES)
        except (OSError, NotImplementedError) as exc:
            logger.error("OS entropy source unavailable: %s", exc)
            raise EntropySourceError(
                "No cryptographically secure random source is available."
            ) from exc
        self._rng = secrets.SystemRandom()

    def next_index(self, bound: int) -> int:
        """
        Return a uniformly distributed integer in [0, bound).

        Raises:
            ValueError: If bound is not positive (caller error).
        """
        if bound <= 0:
            raise ValueError(f"bound must be positive, got {bound}")
        return self._rng.randrange(bound)

    def choice(self, seq: Sequence[T]) -> T:
        """Pick one element of a non-empty sequence."""
        return seq[self.next_index(len(seq))]

    def shuffle(self, items: MutableSequence) -> None:
        """In-place Fisher-Yates shuffle driven by next_index."""
        for i in range(len(items) - 1, 0, -1):
            j = self.next_index(i + 1)
            items[i], items[j] = items[j], items[i]
