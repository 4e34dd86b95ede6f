"""
secure_buffer.py - Overwritable storage for secret text.

Python strings are immutable, so there is no way to scrub one in place.
What we *can* do is keep the long-lived copy of a secret in a bytearray,
hand out short-lived str views of it when the UI needs one, and overwrite
the bytearray before we let go of it. That way the copies that stick
around (history entries, the armed clipboard secret) never outlive their
owner in readable form, regardless of when the garbage collector runs.
"""

from core.config import ERASE_SENTINEL


ENCODING = "utf-8"


class SecretBuffer:
    """
    A mutable, wipeable holder for one secret.

    Usage:
        buf = SecretBuffer("hunter2")
        buf.reveal()   # -> "hunter2"
        buf.wipe()     # every byte is now b"X", reveal() raises
    """

    __slots__ = ("_data", "_wiped")

    def __init__(self, secret: str):
        self._data = bytearray(secret.encode(ENCODING))
        self._wiped = False

    def reveal(self) -> str:
        """Return the secret as a str. Raises ValueError once wiped."""
        if self._wiped:
            raise ValueError("Secret has been wiped.")
        return self._data.decode(ENCODING)

    def matches(self, text: str) -> bool:
        """Compare against text without decoding the buffer."""
        if self._wiped:
            return False
        return self._data == text.encode(ENCODING)

    def wipe(self, sentinel: str = ERASE_SENTINEL):
        """Overwrite every byte with the sentinel, then mark as wiped."""
        fill = ord(sentinel)
        for i in range(len(self._data)):
            self._data[i] = fill
        self._wiped = True

    @property
    def wiped(self) -> bool:
        return self._wiped

    def raw(self) -> bytes:
        """Snapshot of the backing bytes (used to verify a wipe)."""
        return bytes(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        # Never leak the secret into logs or tracebacks
        state = "wiped" if self._wiped else "live"
        return f"<SecretBuffer {state} len={len(self._data)}>"
