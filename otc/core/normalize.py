import math
import re
from collections.abc import Mapping
from datetime import date, datetime
from otc.common.logger import log
from otc.core.accounting import completed_break_time
from otc.core.session import Break, Session
from otc.util.misc import date_key

_DATE_KEY = re.compile(r"^\d{4}-\d{2}-\d{2}$")

#region === Coercion helpers ===

# Coerces anything number-like into a positive finite number, or None. Zero and negatives count as absent, and so do
# booleans even though Python happens to treat them as ints.
def to_number_or_none(value):
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number) or number <= 0:
        return None
    return int(number) if number.is_integer() else number

# Clamps a cached number to >= 0, with garbage becoming 0.
def _non_negative(value):
    if isinstance(value, bool):
        return 0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0
    if not math.isfinite(number) or number <= 0:
        return 0
    return int(number) if number.is_integer() else number

# Coerces a stored date into a YYYY-MM-DD key. Accepts the key itself, an ISO date/datetime string, or an epoch
# millisecond number. Returns None for anything else.
def to_date_key(value):
    if isinstance(value, str):
        value = value.strip()
        if _DATE_KEY.match(value):
            try:
                return date.fromisoformat(value).isoformat()
            except ValueError:
                return None
        try:
            return datetime.fromisoformat(value).date().isoformat()
        except ValueError:
            return None
    number = to_number_or_none(value)
    if number is None:
        return None
    try:
        return date_key(number)
    except (OverflowError, OSError, ValueError):
        return None

#endregion === Coercion helpers ===

#region === Session normalization ===

def create_empty_session(today_key: str) -> Session:
    return Session(date=today_key)

# Keeps only valid {start, end} pairs, sorted by start. Entries that overlap one already kept are dropped too, so the
# result always satisfies the sorted/non-overlapping invariant.
def normalize_breaks(raw_breaks) -> list[Break]:
    if not isinstance(raw_breaks, (list, tuple)):
        return []

    candidates = []
    for item in raw_breaks:
        if isinstance(item, Break):
            item = item.to_dict()
        if not isinstance(item, Mapping):
            continue
        start = to_number_or_none(item.get("start"))
        end = to_number_or_none(item.get("end"))
        if start is None or end is None or end <= start:
            continue
        candidates.append(Break(start, end))
    candidates.sort(key=lambda b: (b.start, b.end))

    kept = []
    for brk in candidates:
        if kept and brk.start < kept[-1].end:
            continue
        kept.append(brk)

    dropped = len(raw_breaks) - len(kept)
    if dropped:
        log.warning(f"Dropped {dropped} invalid or overlapping break entries while normalizing session.")
    return kept

# Turns a possibly-malformed stored session (dict) or an in-memory Session into a well-formed Session. Returns None
# when there isn't even a usable date to hang it on.
def normalize_session(raw) -> Session | None:
    if isinstance(raw, Session):
        raw = raw.to_dict()
    if not isinstance(raw, Mapping):
        return None

    day = to_date_key(raw.get("date"))
    if day is None:
        return None

    session = Session(
        date=day,
        check_in_time=to_number_or_none(raw.get("checkInTime")),
        check_out_time=to_number_or_none(raw.get("checkOutTime")),
        break_start_time=to_number_or_none(raw.get("breakStartTime")),
        breaks=normalize_breaks(raw.get("breaks")),
        total_break_time=_non_negative(raw.get("totalBreakTime")),
        worked_time=_non_negative(raw.get("workedTime")),
    )

    # A check-out has to sit on top of an earlier check-in.
    if session.check_out_time is not None and (
            session.check_in_time is None or session.check_out_time < session.check_in_time):
        log.warning(f"Discarding stored check-out {session.check_out_time} that has no valid check-in before it.")
        session.check_out_time = None
    # Can't still be on a break after checking out.
    if session.break_start_time is not None and session.check_out_time is not None:
        log.warning(f"Discarding open break start {session.break_start_time} on an already completed session.")
        session.break_start_time = None

    if session.breaks:
        session.total_break_time = completed_break_time(session)
    return session

#endregion === Session normalization ===
