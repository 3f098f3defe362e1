# -*- coding: utf-8 -*-

import logging
import os
import select
import signal
from enum import Enum
from typing import Dict, Optional

logger = logging.getLogger(__name__)

_INTERRUPT_SIGNALS = (signal.SIGINT, signal.SIGTERM)


class Event(Enum):
    TICK = "tick"
    RESIZE = "resize"
    INTERRUPT = "interrupt"


class SignalEventSource:
    """
    One blocking wait over three sources:
    - the tick deadline (select timeout)
    - SIGWINCH (terminal resized)
    - SIGINT / SIGTERM (stop)

    Signal handlers do nothing themselves; the interpreter writes the signal
    number to the wakeup pipe and select() returns.
    """

    def __init__(self):
        self._read_fd: Optional[int] = None
        self._write_fd: Optional[int] = None
        self._prev_handlers: Dict[int, object] = {}
        self._prev_wakeup_fd = -1

    def __enter__(self) -> "SignalEventSource":
        self._read_fd, self._write_fd = os.pipe()
        os.set_blocking(self._read_fd, False)
        os.set_blocking(self._write_fd, False)

        self._prev_wakeup_fd = signal.set_wakeup_fd(
            self._write_fd, warn_on_full_buffer=False
        )
        for sig in (signal.SIGWINCH,) + _INTERRUPT_SIGNALS:
            self._prev_handlers[sig] = signal.signal(sig, self._on_signal)
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def close(self) -> None:
        if self._read_fd is None:
            return

        for sig, handler in self._prev_handlers.items():
            signal.signal(sig, handler)
        self._prev_handlers.clear()
        signal.set_wakeup_fd(self._prev_wakeup_fd)

        os.close(self._read_fd)
        os.close(self._write_fd)
        self._read_fd = None
        self._write_fd = None

    @staticmethod
    def _on_signal(signum, frame) -> None:
        # wakeup fd already carries the signal number
        pass

    def _drain(self) -> set:
        received = set()
        while True:
            try:
                data = os.read(self._read_fd, 512)
            except BlockingIOError:
                break
            if not data:
                break
            received.update(data)
        return received

    def wait(self, timeout: float) -> Event:
        """
        Block until a signal arrives or `timeout` seconds pass.
        INTERRUPT takes precedence over RESIZE when both are pending.
        """
        if self._read_fd is None:
            raise RuntimeError("SignalEventSource used outside its context")

        ready, _, _ = select.select([self._read_fd], [], [], max(0.0, timeout))
        if not ready:
            return Event.TICK

        received = self._drain()
        if any(sig in received for sig in _INTERRUPT_SIGNALS):
            logger.debug("interrupt signal received")
            return Event.INTERRUPT
        if signal.SIGWINCH in received:
            logger.debug("terminal resized")
            return Event.RESIZE
        return Event.TICK
