# -*- coding: utf-8 -*-

from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum

from config import BREAK_DURATION, WORK_DURATION


class Phase(Enum):
    WORK = "work"
    BREAK = "break"

    @property
    def label(self) -> str:
        return "Work" if self is Phase.WORK else "Break"

    @property
    def duration(self) -> timedelta:
        return WORK_DURATION if self is Phase.WORK else BREAK_DURATION

    @property
    def other(self) -> "Phase":
        return Phase.BREAK if self is Phase.WORK else Phase.WORK


@dataclass(frozen=True)
class DisplaySnapshot:
    phase: Phase
    task_label: str
    remaining: timedelta
    phase_start: datetime
    phase_duration: timedelta
    progress: float  # 0.0 .. 1.0 of the phase elapsed
    completed_pomodoros: int = 0

    @property
    def phase_end(self) -> datetime:
        return self.phase_start + self.phase_duration
