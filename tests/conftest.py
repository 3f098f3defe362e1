# -*- coding: utf-8 -*-

from datetime import datetime, timedelta

import pytest

from ui.events import Event
from ui.terminal_display import DisplayError


@pytest.fixture
def t0() -> datetime:
    return datetime(2026, 10, 18, 9, 0, 0)


class FakeClock:
    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def step(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


class FakeEvents:
    """
    Replays a script of (event, seconds to move the clock) pairs.
    Runs out into INTERRUPT.
    """

    def __init__(self, clock: FakeClock, script):
        self.clock = clock
        self.script = list(script)
        self.timeouts = []
        self.entered = 0
        self.exited = 0

    def __enter__(self):
        self.entered += 1
        return self

    def __exit__(self, exc_type, exc, tb):
        self.exited += 1

    def wait(self, timeout: float) -> Event:
        self.timeouts.append(timeout)
        if not self.script:
            return Event.INTERRUPT
        event, seconds = self.script.pop(0)
        self.clock.step(seconds=seconds)
        return event


class FakeDisplay:
    def __init__(self, fail_on_render: int = 0, on_render=None):
        self.frames = []
        self.bells = []
        self.opened = 0
        self.restored = 0
        self.fail_on_render = fail_on_render
        self.on_render = on_render

    def __enter__(self):
        self.opened += 1
        return self

    def __exit__(self, exc_type, exc, tb):
        self.restored += 1

    def render(self, snap) -> None:
        self.frames.append(snap)
        if self.on_render is not None:
            self.on_render(snap)
        if self.fail_on_render and len(self.frames) >= self.fail_on_render:
            raise DisplayError("terminal went away")

    def bell(self, snap) -> None:
        self.bells.append(snap)


@pytest.fixture
def clock(t0) -> FakeClock:
    return FakeClock(t0)
