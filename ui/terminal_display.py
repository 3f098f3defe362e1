# -*- coding: utf-8 -*-

import io
import logging
import os
import sys
import termios
import tty
from datetime import datetime
from typing import Optional

from rich.align import Align
from rich.console import Console, Group
from rich.layout import Layout
from rich.live import Live
from rich.progress_bar import ProgressBar
from rich.table import Table
from rich.text import Text

from core.timer_engine import format_remaining
from domain.models import DisplaySnapshot, Phase

logger = logging.getLogger(__name__)


class DisplayError(Exception):
    """The terminal can't be drawn on. Nothing to fall back to."""


def format_clock(t: datetime) -> str:
    # 12h, no leading zero on the hour
    return f"{t.hour % 12 or 12}:{t.minute:02d}"


class TerminalDisplay:
    """
    Full-screen status view.

    Used as a context manager: entering switches to the alternate screen,
    hides the cursor and turns off keyboard echo; leaving puts all of it back.
    """

    def __init__(self, console: Optional[Console] = None, stdin=None):
        self.console = console or Console()
        self.stdin = sys.stdin if stdin is None else stdin

        self._live: Optional[Live] = None
        self._saved_tty = None
        self._tty_fd: Optional[int] = None
        self._active = False

    # ---- scoped terminal mode ----
    def __enter__(self) -> "TerminalDisplay":
        self.open()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.restore()

    def open(self) -> None:
        if not self.console.is_terminal:
            raise DisplayError("output is not a terminal")
        self._check_size()

        self._active = True
        try:
            self._enter_cbreak()
            self._live = Live(
                console=self.console,
                screen=True,
                auto_refresh=False,
                transient=False,
                redirect_stdout=False,
                redirect_stderr=False,
            )
            self._live.start()
        except (OSError, termios.error) as e:
            self.restore()
            raise DisplayError(f"cannot set up terminal: {e}") from e

    def restore(self) -> None:
        """Put the terminal back. Safe to call more than once."""
        if not self._active:
            return
        self._active = False

        try:
            if self._live is not None:
                self._live.stop()
        finally:
            self._live = None
            self._leave_cbreak()
        logger.debug("terminal restored")

    def _enter_cbreak(self) -> None:
        if self.stdin is None or not self.stdin.isatty():
            return
        fd = self.stdin.fileno()
        self._saved_tty = termios.tcgetattr(fd)
        self._tty_fd = fd
        # cbreak keeps ISIG, so Ctrl-C still raises SIGINT
        tty.setcbreak(fd)

    def _leave_cbreak(self) -> None:
        if self._saved_tty is None:
            return
        try:
            termios.tcsetattr(self._tty_fd, termios.TCSADRAIN, self._saved_tty)
        except termios.error as e:
            logger.warning("could not restore terminal attributes: %s", e)
        finally:
            self._saved_tty = None
            self._tty_fd = None

    def _check_size(self) -> None:
        try:
            fd = self.console.file.fileno()
        except (AttributeError, io.UnsupportedOperation):
            # in-memory stream; the console's own width/height apply
            return
        try:
            os.get_terminal_size(fd)
        except OSError as e:
            raise DisplayError(f"cannot read terminal size: {e}") from e

    # ---- drawing ----
    def render(self, snap: DisplaySnapshot) -> None:
        """One complete redraw of the screen."""
        if self._live is None:
            raise DisplayError("display is not open")
        self._check_size()
        try:
            self._live.update(self.build(snap), refresh=True)
        except OSError as e:
            raise DisplayError(f"redraw failed: {e}") from e

    def bell(self, snap: DisplaySnapshot) -> None:
        try:
            self.console.bell()
        except OSError as e:
            raise DisplayError(f"bell failed: {e}") from e

    def build(self, snap: DisplaySnapshot) -> Layout:
        width = self.console.size.width

        header = Table.grid(expand=True, padding=(0, 4))
        for justify in ("left", "center", "center", "right"):
            header.add_column(justify=justify)
        header.add_row(
            _field("Start", format_clock(snap.phase_start)),
            _field("Duration", f"{int(snap.phase_duration.total_seconds()) // 60}m"),
            _field("End", format_clock(snap.phase_end)),
            _field("Pomodoros", str(snap.completed_pomodoros)),
        )

        lines = []
        if snap.task_label:
            lines.append(Text(snap.task_label, style="bold bright_red", justify="center"))
        phase_style = "bold green" if snap.phase is Phase.WORK else "bold cyan"
        lines.append(Text(snap.phase.label, style=phase_style, justify="center"))
        lines.append(_field("Remaining", format_remaining(snap.remaining), justify="center"))
        lines.append(
            ProgressBar(
                total=1.0,
                completed=snap.progress,
                width=max(10, width - 8),
                complete_style="blue",
                finished_style="blue",
            )
        )

        layout = Layout()
        layout.split_column(
            Layout(header, name="header", size=1),
            Layout(Align.center(Group(*lines), vertical="middle"), name="body"),
        )
        return layout


def _field(name: str, value: str, justify: Optional[str] = None) -> Text:
    text = Text(f"{name}: ", justify=justify)
    text.append(value, style="bright_blue")
    return text
