# -*- coding: utf-8 -*-

from datetime import datetime, timedelta
from typing import Optional

from domain.models import DisplaySnapshot, Phase

_SECOND = timedelta(seconds=1)


def local_now() -> datetime:
    """Timezone-aware local time; differences stay correct across DST changes."""
    return datetime.now().astimezone()


def format_remaining(duration: timedelta) -> str:
    """
    MM:SS, floored to the whole second (never rounded up).
    9:59.1 renders as "09:59".
    """
    total = max(0, duration // _SECOND)
    m, s = divmod(total, 60)
    return f"{m:02d}:{s:02d}"


def progress_fraction(remaining: timedelta, duration: timedelta) -> float:
    if duration <= timedelta(0):
        return 1.0
    done = 1.0 - remaining / duration
    return min(1.0, max(0.0, done))


class TimerEngine:
    """
    Pure countdown engine (no terminal I/O).
    Time only moves forward by querying it with the current instant.
    """

    def __init__(self, now: datetime, task_label: Optional[str] = None):
        self.phase = Phase.WORK
        self.phase_start = now
        self.phase_duration = Phase.WORK.duration
        self.task_label = task_label or ""
        self.completed_pomodoros = 0

    @property
    def phase_end(self) -> datetime:
        return self.phase_start + self.phase_duration

    def elapsed_at(self, now: datetime) -> timedelta:
        return now - self.phase_start

    def is_expired_at(self, now: datetime) -> bool:
        return self.elapsed_at(now) >= self.phase_duration

    def remaining_at(self, now: datetime) -> timedelta:
        left = self.phase_duration - self.elapsed_at(now)
        if left <= timedelta(0):
            return timedelta(0)
        # clamp to whole seconds so every caller sees the same value
        return timedelta(seconds=left // _SECOND)

    def advance(self, now: datetime) -> bool:
        """
        Returns True if the phase changed.
        Flips at most once per call.
        """
        if not self.is_expired_at(now):
            return False

        if self.phase is Phase.WORK:
            self.completed_pomodoros += 1

        self.phase = self.phase.other
        self.phase_start = now
        self.phase_duration = self.phase.duration
        return True

    def snapshot(self, now: datetime) -> DisplaySnapshot:
        remaining = self.remaining_at(now)
        return DisplaySnapshot(
            phase=self.phase,
            task_label=self.task_label,
            remaining=remaining,
            phase_start=self.phase_start,
            phase_duration=self.phase_duration,
            progress=progress_fraction(remaining, self.phase_duration),
            completed_pomodoros=self.completed_pomodoros,
        )
