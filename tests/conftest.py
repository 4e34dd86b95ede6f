"""Shared fakes for the clipboard and randomness seams."""

from __future__ import annotations

import pytest

from core.clipboard import ClipboardError, ClipboardRetentionController
from core.random_source import SecureRandomSource


class FakeClipboard:
    """In-memory clipboard that can be told to fail."""

    def __init__(self, text: str = ""):
        self.text = text
        self.fail_writes = False
        self.fail_reads = False
        self.writes = []

    def set_text(self, text: str):
        if self.fail_writes:
            raise ClipboardError("write refused")
        self.text = text
        self.writes.append(text)

    def get_text(self) -> str:
        if self.fail_reads:
            raise ClipboardError("read refused")
        return self.text


class ReentrantClipboard(FakeClipboard):
    """Runs `action` once from inside the next write, like Tk's update()."""

    def __init__(self):
        super().__init__()
        self.action = None

    def set_text(self, text: str):
        super().set_text(text)
        action, self.action = self.action, None
        if action:
            action()


class ManualScheduler:
    """Scheduler driven by an explicit clock; nothing fires until advance()."""

    def __init__(self):
        self.now = 0.0
        self.jobs = []

    def clock(self) -> float:
        return self.now

    def schedule(self, delay_seconds, callback):
        job = {"due": self.now + delay_seconds, "callback": callback, "cancelled": False}
        self.jobs.append(job)
        return job

    def cancel(self, handle):
        handle["cancelled"] = True

    def advance(self, to: float):
        self.now = to
        for job in sorted(self.jobs, key=lambda j: j["due"]):
            if not job["cancelled"] and not job.get("fired") and job["due"] <= to:
                job["fired"] = True
                job["callback"]()


class InstantScheduler:
    """Runs the callback as soon as it's scheduled."""

    def schedule(self, delay_seconds, callback):
        callback()
        return None

    def cancel(self, handle):
        pass


class ZeroSource(SecureRandomSource):
    """Always draws index 0, so generation becomes predictable."""

    def __init__(self):
        self.bounds = []

    def next_index(self, bound: int) -> int:
        if bound <= 0:
            raise ValueError(f"bound must be positive, got {bound}")
        self.bounds.append(bound)
        return 0


@pytest.fixture
def fake_clipboard():
    return FakeClipboard()


@pytest.fixture
def reentrant_clipboard():
    return ReentrantClipboard()


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def controller(fake_clipboard, scheduler):
    return ClipboardRetentionController(fake_clipboard, scheduler=scheduler, clock=scheduler.clock)


@pytest.fixture
def instant_controller(fake_clipboard):
    return ClipboardRetentionController(fake_clipboard, scheduler=InstantScheduler())


@pytest.fixture
def zero_source():
    return ZeroSource()
