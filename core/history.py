"""
history.py - Bounded undo/browse history of generated passwords.

How this works:
1. Every time the displayed password is about to be replaced, the caller
   push()es the old one. Entries are kept most-recent-first.
2. Only HISTORY_CAPACITY entries are kept. When a push overflows, the
   oldest entry is overwritten with the erase sentinel before it is
   dropped, so evicted passwords can't be read back from memory.
3. A cursor tracks where the user is while browsing:
       -1              idle (showing a fresh password)
       0 .. size - 1   browsing; 0 is the newest entry

Direction convention: moving "forward" or undoing always walks toward
OLDER entries (higher index). Scrolling back walks toward newer ones.
Nothing ever wraps around; both ends saturate.

The store does not reset the cursor on push. That is the caller's call:
a fresh generation pushes and then calls reset_cursor(), while browsing
through history only reads.
"""

import logging
from typing import List, Optional

from core.config import HISTORY_CAPACITY
from core.secure_buffer import SecretBuffer


logger = logging.getLogger(__name__)

IDLE = -1


class HistoryStore:
    """Most-recent-first, securely erasable password history."""

    def __init__(self, capacity: int = HISTORY_CAPACITY):
        if capacity < 1:
            raise ValueError("History capacity must be at least 1.")
        self.capacity = capacity
        self._entries: List[SecretBuffer] = []
        self.cursor = IDLE

    # ------------------------------------------------------------------
    # Writing
    # ------------------------------------------------------------------

    def push(self, password: str) -> bool:
        """
        Remember a password at the front of the history.

        Empty strings are ignored (there was nothing displayed yet).

        Returns:
            True if the password was stored
        """
        if not password:
            return False

        self._entries.insert(0, SecretBuffer(password))
        while len(self._entries) > self.capacity:
            evicted = self._entries.pop()
            evicted.wipe()
            logger.debug("Evicted oldest history entry (%d stored)", len(self._entries))
        return True

    def clear(self):
        """Securely erase every entry and go back to idle."""
        for entry in self._entries:
            entry.wipe()
        self._entries.clear()
        self.cursor = IDLE

    def reset_cursor(self):
        self.cursor = IDLE

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def undo_step(self) -> Optional[str]:
        """
        Step one entry further into the past.

        The first undo after idle shows the newest entry; repeated undos
        walk toward the oldest and then stay there.

        Returns:
            The entry now under the cursor, or None if history is empty
        """
        if not self._entries:
            return None
        if self.cursor == IDLE:
            self.cursor = 0
        else:
            self.cursor = min(self.cursor + 1, len(self._entries) - 1)
        return self._entries[self.cursor].reveal()

    def scroll(self, forward: bool) -> Optional[str]:
        """
        Mouse-wheel navigation.

        From idle, forward jumps straight to the oldest entry and backward
        to the newest. While browsing it moves one step, clamped to the
        ends.

        Args:
            forward: True to move toward older entries

        Returns:
            The entry now under the cursor, or None if history is empty
        """
        if not self._entries:
            return None
        last = len(self._entries) - 1
        if self.cursor == IDLE:
            self.cursor = last if forward else 0
        elif forward:
            self.cursor = min(self.cursor + 1, last)
        else:
            self.cursor = max(self.cursor - 1, 0)
        return self._entries[self.cursor].reveal()

    def select_direct(self, index: int) -> str:
        """
        Jump to a specific entry (e.g. picked from the history list).

        Raises:
            IndexError: If index is outside [0, size)
        """
        if not 0 <= index < len(self._entries):
            raise IndexError(f"History index {index} out of range (size {len(self._entries)})")
        self.cursor = index
        return self._entries[index].reveal()

    # ------------------------------------------------------------------
    # Inspection
    # ------------------------------------------------------------------

    def entries(self) -> List[str]:
        """Snapshot of all entries, newest first, for the history list."""
        return [entry.reveal() for entry in self._entries]

    @property
    def browsing(self) -> bool:
        return self.cursor != IDLE

    @property
    def can_undo(self) -> bool:
        """False when empty or already showing the oldest entry."""
        if not self._entries:
            return False
        return self.cursor < len(self._entries) - 1

    def __len__(self) -> int:
        return len(self._entries)
