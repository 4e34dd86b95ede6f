"""Tests for the Tk clipboard/timer adapters and wheel mapping (no display needed)."""

from __future__ import annotations

from types import SimpleNamespace

import pytest

tkinter = pytest.importorskip("tkinter")

from core.clipboard import ClipboardError  # noqa: E402
from gui.tk_bridge import TkClipboard, TkScheduler, wheel_forward  # noqa: E402


class FakeWidget:
    """Just enough of tkinter.Misc for the adapters."""

    def __init__(self):
        self.clip = ""
        self.updates = 0
        self.fail = False
        self.after_calls = []
        self.cancelled = []

    def clipboard_clear(self):
        if self.fail:
            raise tkinter.TclError("clipboard locked")
        self.clip = ""

    def clipboard_append(self, text):
        self.clip += text

    def clipboard_get(self):
        if not self.clip:
            raise tkinter.TclError("CLIPBOARD selection doesn't exist")
        return self.clip

    def update(self):
        self.updates += 1

    def after(self, ms, callback):
        self.after_calls.append((ms, callback))
        return f"after#{len(self.after_calls)}"

    def after_cancel(self, handle):
        if handle == "gone":
            raise tkinter.TclError("application has been destroyed")
        self.cancelled.append(handle)


class TestWheelForward:
    @pytest.mark.parametrize("num, delta, expected", [
        (4, 0, True),        # X11 wheel up
        (5, 0, False),       # X11 wheel down
        ("??", 120, True),   # Windows/macOS wheel up
        ("??", -120, False), # Windows/macOS wheel down
        ("??", 0, False),
    ])
    def test_up_means_older(self, num, delta, expected):
        assert wheel_forward(SimpleNamespace(num=num, delta=delta)) is expected

    def test_missing_delta(self):
        assert wheel_forward(SimpleNamespace(num="??")) is False


class TestTkClipboard:
    def test_write_and_read(self):
        widget = FakeWidget()
        clipboard = TkClipboard(widget)
        clipboard.set_text("secret")
        assert clipboard.get_text() == "secret"
        assert widget.updates == 1

    def test_empty_clipboard_reads_blank(self):
        assert TkClipboard(FakeWidget()).get_text() == ""

    def test_write_failure_becomes_clipboard_error(self):
        widget = FakeWidget()
        widget.fail = True
        with pytest.raises(ClipboardError, match="locked"):
            TkClipboard(widget).set_text("secret")


class TestTkScheduler:
    def test_schedule_in_milliseconds(self):
        widget = FakeWidget()
        handle = TkScheduler(widget).schedule(1.5, print)
        assert widget.after_calls == [(1500, print)]
        assert handle == "after#1"

    def test_cancel_after_destroy_is_ignored(self):
        widget = FakeWidget()
        scheduler = TkScheduler(widget)
        scheduler.cancel("after#1")
        scheduler.cancel("gone")
        assert widget.cancelled == ["after#1"]
