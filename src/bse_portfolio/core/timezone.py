"""Timezone utilities for India market time."""

import time
from datetime import datetime

import pytz

INDIA_TZ = pytz.timezone("Asia/Kolkata")


def now_india() -> datetime:
    """Return current time in Asia/Kolkata timezone."""
    return datetime.now(INDIA_TZ)


def epoch_millis() -> int:
    """Return wall-clock time as milliseconds since the epoch (cache timestamps)."""
    return int(time.time() * 1000)
