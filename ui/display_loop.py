# -*- coding: utf-8 -*-

import logging
from datetime import datetime
from typing import Callable

from core.timer_engine import local_now
from domain.models import DisplaySnapshot
from services.timer_service import TimerService
from ui.events import Event, SignalEventSource
from ui.terminal_display import TerminalDisplay

logger = logging.getLogger(__name__)


class DisplayLoop:
    """
    Owns the render cadence.

    Sleeps in a single wait until the next tick is due, the terminal is
    resized, or an interrupt arrives. Ticks and resizes both end in the
    same full redraw; an interrupt leaves the loop. The terminal is put
    back on every way out, errors included.
    """

    def __init__(
        self,
        service: TimerService,
        display: TerminalDisplay,
        events: SignalEventSource,
        clock: Callable[[], datetime] = local_now,
    ):
        self.service = service
        self.display = display
        self.events = events
        self.clock = clock

    def redraw(self, reason: Event) -> DisplaySnapshot:
        now = self.clock()
        snap = self.service.refresh(now)
        logger.debug("redraw (%s) at %s: %s", reason.value, now, snap.remaining)
        self.display.render(snap)
        return snap

    def run(self) -> None:
        with self.events, self.display:
            self.redraw(Event.TICK)

            while True:
                delay = self.service.next_refresh_in(self.clock())
                event = self.events.wait(delay.total_seconds())

                if event is Event.INTERRUPT:
                    logger.info("interrupted, leaving display loop")
                    return

                self.redraw(event)
