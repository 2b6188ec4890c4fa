"""
Utilities for the ballot engine.

18-10-2026
"""

import pytz

from datetime import datetime
from app.config import TIMEZONE


# -- Datetime --


def tz_now():
    tz = pytz.timezone(TIMEZONE)
    return datetime.now(tz)
