"""Session record, settings, and the four-way session state.

The state is never stored on its own. ``reconcile_state()`` derives it from the
session's timestamps every time it's needed, and whatever label lands in
storage is only a cache of that derivation.
"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Break:
    """One completed break, epoch milliseconds."""
    start: int
    end: int

    @property
    def duration(self):
        return max(0, self.end - self.start)

    def to_dict(self):
        return {"start": self.start, "end": self.end}


@dataclass
class Session:
    """Everything tracked for a single calendar day."""
    date: str
    check_in_time: int | None = None
    check_out_time: int | None = None
    break_start_time: int | None = None
    breaks: list[Break] = field(default_factory=list)
    total_break_time: int = 0
    worked_time: int = 0

    # Persisted with the camelCase keys the stored format has always used.
    def to_dict(self):
        return {
            "date": self.date,
            "checkInTime": self.check_in_time,
            "checkOutTime": self.check_out_time,
            "breakStartTime": self.break_start_time,
            "breaks": [b.to_dict() for b in self.breaks],
            "totalBreakTime": self.total_break_time,
            "workedTime": self.worked_time,
        }


@dataclass
class Settings:
    ramadan_mode: bool = False

    def to_dict(self):
        return {"ramadanMode": self.ramadan_mode}


#region === Session states ===

@dataclass(frozen=True)
class NotStarted:
    label = "not_started"
    title = "Not Started"


@dataclass(frozen=True)
class CheckedIn:
    check_in_time: int
    label = "checked_in"
    title = "Working"


@dataclass(frozen=True)
class OnBreak:
    check_in_time: int
    break_start_time: int
    label = "on_break"
    title = "On Break"


@dataclass(frozen=True)
class Completed:
    check_in_time: int
    check_out_time: int
    label = "completed"
    title = "Completed"


SessionState = NotStarted | CheckedIn | OnBreak | Completed

STATE_LABELS = (NotStarted.label, CheckedIn.label, OnBreak.label, Completed.label)

# Derives the one canonical state from the session's timestamps. Precedence: no check-in, then check-out, then an
# open break. Breaks themselves never change the state, only the open break start does.
def reconcile_state(session: Session) -> SessionState:
    if not session.check_in_time:
        return NotStarted()
    if session.check_out_time:
        return Completed(session.check_in_time, session.check_out_time)
    if session.break_start_time:
        return OnBreak(session.check_in_time, session.break_start_time)
    return CheckedIn(session.check_in_time)

#endregion === Session states ===
