"""
tk_bridge.py - Clipboard and timer backends for the Tk event loop.

Tk is not thread-safe, so the desktop window must not let a
threading.Timer touch the clipboard. These adapters route both the
clipboard and the delayed wipe through the widget itself
(clipboard_* and after()), which keeps everything on the UI thread.
"""

import tkinter

from core.clipboard import ClipboardError


class TkClipboard:
    """Clipboard access through any Tk widget."""

    def __init__(self, widget: tkinter.Misc):
        self.widget = widget

    def set_text(self, text: str):
        try:
            self.widget.clipboard_clear()
            self.widget.clipboard_append(text)
            self.widget.update()  # Required for clipboard to actually update
        except tkinter.TclError as exc:
            raise ClipboardError(str(exc)) from exc

    def get_text(self) -> str:
        try:
            return self.widget.clipboard_get()
        except tkinter.TclError:
            # Empty clipboard or non-text content; either way it isn't ours
            return ""


class TkScheduler:
    """Delayed callbacks on the Tk event loop."""

    def __init__(self, widget: tkinter.Misc):
        self.widget = widget

    def schedule(self, delay_seconds: float, callback) -> str:
        return self.widget.after(int(delay_seconds * 1000), callback)

    def cancel(self, handle: str):
        try:
            self.widget.after_cancel(handle)
        except tkinter.TclError:
            pass  # Window already gone


def wheel_forward(event) -> bool:
    """
    Direction of a mouse-wheel event for HistoryStore.scroll().

    Wheel up means forward, i.e. toward older passwords. Windows and macOS
    report <MouseWheel> with a signed delta; X11 sends <Button-4> (up)
    and <Button-5> (down) with no delta.
    """
    if event.num == 4:
        return True
    if event.num == 5:
        return False
    return (getattr(event, "delta", 0) or 0) > 0
