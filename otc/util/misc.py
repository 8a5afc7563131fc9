import math
import time
from datetime import date, datetime


# Simply returns the current instant as epoch milliseconds. This is the default clock handed to the Tracker.
def now_ms() -> int:
    return int(time.time() * 1000)

# Converts an epoch millisecond instant to a naive local datetime.
def from_ms(timestamp) -> datetime:
    return datetime.fromtimestamp(timestamp / 1000)

# Converts a naive local datetime to epoch milliseconds.
def to_ms(dt: datetime) -> int:
    return int(round(dt.timestamp() * 1000))

# Returns the YYYY-MM-DD local calendar-day key for the given instant.
def date_key(timestamp) -> str:
    return from_ms(timestamp).date().isoformat()

# Returns the local calendar date the given instant falls on.
def local_date(timestamp) -> date:
    return from_ms(timestamp).date()


# Format elapsed milliseconds as HH:MM:SS. Negative or non-numeric values clamp to zero.
def format_duration(milliseconds) -> str:
    try:
        milliseconds = float(milliseconds)
    except (TypeError, ValueError):
        milliseconds = 0.0
    if not math.isfinite(milliseconds):
        milliseconds = 0.0
    total_seconds = int(max(0.0, milliseconds) // 1000)
    h, rem = divmod(total_seconds, 3600)
    m, s = divmod(rem, 60)
    return f"{h:02d}:{m:02d}:{s:02d}"

# Format an instant as a local wall-clock time, "-" when there's nothing to show.
def format_clock_time(timestamp, show_seconds=False) -> str:
    if not timestamp:
        return "-"
    try:
        dt = from_ms(timestamp)
    except (OverflowError, OSError, ValueError, TypeError):
        return "-"
    return dt.strftime("%H:%M:%S" if show_seconds else "%H:%M")

# HH:MM string used to pre-fill the time edit form.
def format_time_for_input(timestamp) -> str:
    return from_ms(timestamp).strftime("%H:%M")
