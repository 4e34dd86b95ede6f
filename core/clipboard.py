"""
clipboard.py - Time-limited exposure of passwords in the system clipboard.

How this works:
1. arm(secret, timeout) writes the secret to the clipboard and schedules
   a wipe `timeout` seconds later. Each arm() gets a fresh token.
2. Arming again (or calling cancel()) throws the old token away. If the
   old timer still fires it finds its token stale and does nothing, so a
   late timer can never clear a newer password.
3. When the live timer fires we read the clipboard first and only clear
   it if it still holds our secret. If the user has copied something
   else in the meantime (from any app), we leave it alone.

The controller doesn't know how to talk to a clipboard or how to run a
timer. It is given a clipboard (set_text / get_text) and a scheduler
(schedule / cancel), so the terminal tool can use pyperclip plus
threading.Timer while the desktop window uses Tk's own clipboard and
after() loop.

Clipboard failures are logged and swallowed: the password is already on
screen, the clipboard is only a convenience.
"""

import itertools
import logging
import threading
import time
from dataclasses import dataclass
from typing import Any, Callable, Optional

import pyperclip

from core.secure_buffer import SecretBuffer


logger = logging.getLogger(__name__)


class ClipboardError(Exception):
    """A clipboard backend could not read or write."""


# ------------------------------------------------------------------
# Backends
# ------------------------------------------------------------------

class PyperclipClipboard:
    """System clipboard through pyperclip (xclip/xsel, pbcopy, win32)."""

    def set_text(self, text: str):
        try:
            pyperclip.copy(text)
        except pyperclip.PyperclipException as exc:
            raise ClipboardError(str(exc)) from exc

    def get_text(self) -> str:
        try:
            return pyperclip.paste()
        except pyperclip.PyperclipException as exc:
            raise ClipboardError(str(exc)) from exc


class ThreadingScheduler:
    """Runs callbacks on daemon threading.Timer threads."""

    def schedule(self, delay_seconds: float, callback: Callable[[], None]) -> threading.Timer:
        timer = threading.Timer(delay_seconds, callback)
        timer.daemon = True
        timer.start()
        return timer

    def cancel(self, handle: threading.Timer):
        handle.cancel()


# ------------------------------------------------------------------
# Controller
# ------------------------------------------------------------------

@dataclass
class ClipboardClaim:
    """The most recent arm() call. Only its token may trigger a wipe."""

    token: int
    expires_at: float
    secret: SecretBuffer
    handle: Any = None


class ClipboardRetentionController:
    """
    Arms and cancels delayed clipboard wipes.

    Args:
        clipboard: Object with set_text(str) and get_text() -> str
        scheduler: Object with schedule(delay, callback) -> handle and
            cancel(handle). Defaults to ThreadingScheduler.
        clock: Monotonic time source, used for expiry bookkeeping
    """

    def __init__(self, clipboard, scheduler=None, clock: Callable[[], float] = time.monotonic):
        self.clipboard = clipboard
        self.scheduler = scheduler if scheduler is not None else ThreadingScheduler()
        self.clock = clock
        # Re-entrant: a Tk clipboard write pumps the event loop, which can
        # run a due wipe or a queued user action on this same thread
        self._lock = threading.RLock()
        self._tokens = itertools.count(1)
        self._claim: Optional[ClipboardClaim] = None
        self._resolved = threading.Event()
        self._resolved.set()
        # Outcome of the most recent wipe that actually ran
        self.last_cleared = False

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def arm(self, secret: str, timeout_seconds: int) -> bool:
        """
        Copy secret to the clipboard and schedule its wipe.

        Any previously armed wipe is superseded.

        Args:
            secret: The text to expose
            timeout_seconds: Delay before the wipe, must be positive

        Returns:
            True if the clipboard write succeeded. A wipe is then pending
            unless a nested call made during the write superseded it.

        Raises:
            ValueError: If timeout_seconds is not positive
        """
        if timeout_seconds <= 0:
            raise ValueError(f"timeout_seconds must be positive, got {timeout_seconds}")

        with self._lock:
            self._drop_claim()

            # Claim first: the write may pump the event loop and run a
            # nested arm()/copy_plain()/cancel() that supersedes this one
            claim = ClipboardClaim(
                token=next(self._tokens),
                expires_at=self.clock() + timeout_seconds,
                secret=SecretBuffer(secret),
            )
            self._claim = claim
            self._resolved.clear()

            if not self._write(secret):
                if self._claim is claim:
                    self._drop_claim()
                return False

            if self._claim is not claim:
                logger.debug("Clipboard claim %d superseded during write", claim.token)
                return True

            claim.handle = self.scheduler.schedule(
                timeout_seconds, lambda: self._expire(claim.token)
            )
            logger.debug("Clipboard wipe armed (token %d, %ss)", claim.token, timeout_seconds)
            return True

    def copy_plain(self, text: str) -> bool:
        """Copy without auto-clear. Cancels any pending wipe."""
        with self._lock:
            self._drop_claim()
            return self._write(text)

    def cancel(self):
        """Forget the pending wipe. The clipboard content is left untouched."""
        with self._lock:
            self._drop_claim()

    def flush(self):
        """
        Cancel the pending wipe and clear the clipboard right now, if it
        still holds the armed secret. Used when the app shuts down.
        """
        with self._lock:
            claim = self._claim
            if claim is None:
                return
            self._drop_claim(wipe=False)
            self.last_cleared = self._clear_if_unchanged(claim)
            claim.secret.wipe()

    def wait(self, timeout: Optional[float] = None) -> bool:
        """
        Block until the current claim resolves (fired, cancelled or
        flushed).

        Returns:
            False if the timeout ran out first
        """
        return self._resolved.wait(timeout)

    @property
    def pending(self) -> bool:
        return self._claim is not None

    @property
    def expires_at(self) -> Optional[float]:
        claim = self._claim
        return claim.expires_at if claim else None

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _expire(self, token: int):
        """Timer callback. Only the live token gets to clear anything."""
        with self._lock:
            claim = self._claim
            if claim is None or claim.token != token:
                logger.debug("Ignoring stale clipboard wipe (token %d)", token)
                return
            self._claim = None
            self.last_cleared = self._clear_if_unchanged(claim)
            claim.secret.wipe()
            self._resolved.set()

    def _clear_if_unchanged(self, claim: ClipboardClaim) -> bool:
        try:
            current = self.clipboard.get_text()
        except ClipboardError as exc:
            logger.warning("Could not read clipboard, leaving it alone: %s", exc)
            return False

        if not claim.secret.matches(current):
            logger.debug("Clipboard changed since token %d was armed; not clearing", claim.token)
            return False

        if not self._write(""):
            return False
        logger.info("Clipboard cleared")
        return True

    def _drop_claim(self, wipe: bool = True):
        claim = self._claim
        if claim is None:
            return
        self._claim = None
        if claim.handle is not None:
            self.scheduler.cancel(claim.handle)
        if wipe:
            claim.secret.wipe()
        self._resolved.set()
        logger.debug("Clipboard wipe for token %d cancelled", claim.token)

    def _write(self, text: str) -> bool:
        try:
            self.clipboard.set_text(text)
        except ClipboardError as exc:
            logger.warning("Clipboard write failed: %s", exc)
            return False
        return True
