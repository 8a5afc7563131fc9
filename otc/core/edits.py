"""Manual time edits.

Users type hour:minute values for today's check-in, check-out and breaks.
``validate_time_edit()`` turns those into epoch milliseconds on the given day
and either returns the complete result or raises ``TimeEditError`` for the
first rule that fails. Nothing is ever half applied.
"""

import re
from dataclasses import dataclass, field
from datetime import date, datetime, time
from otc.core.session import Break
from otc.util.misc import to_ms

_HH_MM = re.compile(r"^\s*(\d{1,2}):(\d{2})\s*$")


class TimeEditError(ValueError):
    """An edit that can't be applied, with a message meant for the user."""

    def __init__(self, message, title="Invalid Time"):
        super().__init__(message)
        self.message = message
        self.title = title


@dataclass
class TimeEdit:
    """Raw form values, "" meaning unset. Each break row is a (start, end) pair."""
    check_in: str = ""
    check_out: str = ""
    breaks: list[tuple[str, str]] = field(default_factory=list)


@dataclass
class ValidatedEdit:
    check_in_time: int | None
    check_out_time: int | None
    breaks: list[Break]
    break_start_time: int | None


def parse_time_input(value, day: date):
    """Parses "HH:MM" on `day` into epoch milliseconds, None when blank or malformed."""
    if not value:
        return None
    match = _HH_MM.match(value)
    if match is None:
        return None
    hours, minutes = int(match.group(1)), int(match.group(2))
    if hours > 23 or minutes > 59:
        return None
    return to_ms(datetime.combine(day, time(hours, minutes)))


def validate_time_edit(edit: TimeEdit, now: int, day: date) -> ValidatedEdit:
    check_in = parse_time_input(edit.check_in, day)
    check_out = parse_time_input(edit.check_out, day)

    if ((edit.check_in or "").strip() and check_in is None) or ((edit.check_out or "").strip() and check_out is None):
        raise TimeEditError("Enter check-in and check-out times as HH:MM.")
    if check_out and not check_in:
        raise TimeEditError("Set check-in time before check-out time.")
    if check_in and check_out and check_out <= check_in:
        raise TimeEditError("Check-out time must be after check-in time.")
    if check_out and check_out > now:
        raise TimeEditError("Check-out time cannot be in the future. Clear check-out to keep the timer running.")
    if check_in and not check_out and check_in > now:
        raise TimeEditError("Check-in time cannot be in the future. Use current or earlier machine time.")

    completed = []
    ongoing_start = None
    for start_value, end_value in edit.breaks:
        start_value = (start_value or "").strip()
        end_value = (end_value or "").strip()
        if not start_value and not end_value:
            continue

        start = parse_time_input(start_value, day)
        end = parse_time_input(end_value, day)

        # Typed but unreadable is an error, never the same as left blank
        if (start_value and start is None) or (end_value and end is None):
            raise TimeEditError("Enter break times as HH:MM.")
        if not start:
            raise TimeEditError("Each break must have a valid start time.")
        if check_in and start <= check_in:
            raise TimeEditError("Break start time must be after check-in time.")

        # No end means the break is still going
        if not end:
            if check_out:
                raise TimeEditError("Break end time is required when check-out time is set.")
            if ongoing_start:
                raise TimeEditError("Only one ongoing break is allowed.")
            if start > now:
                raise TimeEditError("Ongoing break start cannot be in the future.")
            ongoing_start = start
            continue

        if end <= start:
            raise TimeEditError("Break end time must be after break start time.")
        if check_out and end > check_out:
            raise TimeEditError("Break end time must be before check-out time.")
        if not check_out and end > now:
            raise TimeEditError("Break end time cannot be in the future for an active session.")
        completed.append(Break(start, end))

    completed.sort(key=lambda b: b.start)
    for previous, current in zip(completed, completed[1:]):
        if current.start < previous.end:
            raise TimeEditError("Break times cannot overlap.")
    # The ongoing break runs up to now, so it has to start after every completed one ends
    if ongoing_start and any(ongoing_start < b.end for b in completed):
        raise TimeEditError("Break times cannot overlap.")

    if not check_in and (completed or ongoing_start):
        raise TimeEditError("Set check-in time before adding breaks.")

    return ValidatedEdit(
        check_in_time=check_in,
        check_out_time=check_out,
        breaks=completed,
        break_start_time=ongoing_start,
    )
