# -*- coding: utf-8 -*-

from datetime import timedelta

APP_VERSION = "0.5.0"

# Phase lengths
WORK_DURATION = timedelta(minutes=25)
BREAK_DURATION = timedelta(minutes=5)

# Redraw cadence; faster once the phase is nearly over
TICK_INTERVAL = timedelta(seconds=10)
FINAL_STRETCH = timedelta(minutes=2)
FINAL_TICK_INTERVAL = timedelta(seconds=1)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
