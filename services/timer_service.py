# -*- coding: utf-8 -*-

import logging
from datetime import datetime, timedelta
from typing import Callable, Optional

from config import FINAL_STRETCH, FINAL_TICK_INTERVAL, TICK_INTERVAL
from core.timer_engine import TimerEngine, format_remaining
from domain.models import DisplaySnapshot

logger = logging.getLogger(__name__)


class TimerService:
    """
    Orchestrates:
    - TimerEngine rollover at each refresh
    - Redraw cadence (tick interval, final stretch, phase end)
    - Callbacks for UI
    """

    def __init__(self, engine: TimerEngine):
        self.engine = engine
        self._on_phase_change: Optional[Callable[[DisplaySnapshot], None]] = None

    # ----- Callbacks -----
    def set_on_phase_change(self, fn: Callable[[DisplaySnapshot], None]) -> None:
        self._on_phase_change = fn

    def _emit_phase_change(self, snap: DisplaySnapshot) -> None:
        if self._on_phase_change:
            self._on_phase_change(snap)

    # ----- Public API -----
    def refresh(self, now: datetime) -> DisplaySnapshot:
        """
        Advance the engine to `now` and return a fresh snapshot.
        Every redraw, whatever triggered it, goes through here.
        """
        phase_changed = self.engine.advance(now)
        snap = self.engine.snapshot(now)

        if phase_changed:
            logger.info(
                "phase -> %s (%s), pomodoros completed: %d",
                snap.phase.label,
                format_remaining(snap.remaining),
                snap.completed_pomodoros,
            )
            self._emit_phase_change(snap)

        return snap

    def next_refresh_in(self, now: datetime) -> timedelta:
        """
        Delay until the next scheduled redraw.
        Never later than the end of the current phase.
        """
        remaining = self.engine.phase_end - now
        if remaining <= timedelta(0):
            return timedelta(0)

        interval = FINAL_TICK_INTERVAL if remaining <= FINAL_STRETCH else TICK_INTERVAL
        return min(interval, remaining)
