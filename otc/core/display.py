"""Display values for the shell, all recomputed from (session, settings, now)."""

from dataclasses import dataclass, field
from otc.core import accounting
from otc.core.session import Session, Settings, reconcile_state
from otc.util.misc import format_clock_time, format_duration


@dataclass(frozen=True)
class BreakEntry:
    label: str
    start: str
    end: str
    duration: str


@dataclass(frozen=True)
class DisplaySnapshot:
    state_label: str
    status: str
    worked: str
    remaining: str
    target: str
    estimated_checkout: str
    progress: float
    check_in: str
    current_break_start: str
    break_count: int
    break_total: str
    breaks: list[BreakEntry] = field(default_factory=list)


def break_entries(session: Session, now: int) -> list[BreakEntry]:
    entries = [
        BreakEntry(
            label=f"Break {index}",
            start=format_clock_time(brk.start),
            end=format_clock_time(brk.end),
            duration=format_duration(brk.duration),
        )
        for index, brk in enumerate(session.breaks, start=1)
    ]
    if session.break_start_time:
        entries.append(BreakEntry(
            label=f"Break {len(entries) + 1}",
            start=format_clock_time(session.break_start_time),
            end="In progress",
            duration=format_duration(max(0, now - session.break_start_time)),
        ))
    return entries


def build_display(session: Session, settings: Settings, now: int) -> DisplaySnapshot:
    state = reconcile_state(session)
    target = accounting.daily_target(settings)
    estimate = accounting.estimated_checkout(session, target, now)
    entries = break_entries(session, now)
    return DisplaySnapshot(
        state_label=state.label,
        status=state.title,
        worked=format_duration(accounting.worked_time(session, now)),
        remaining=format_duration(accounting.remaining_time(session, target, now)),
        target=format_duration(target),
        estimated_checkout=format_clock_time(estimate, show_seconds=True) if estimate else "-",
        progress=accounting.progress(session, target, now),
        check_in=format_clock_time(session.check_in_time),
        current_break_start=format_clock_time(session.break_start_time),
        break_count=len(entries),
        break_total=format_duration(accounting.active_break_total(session, now)),
        breaks=entries,
    )
