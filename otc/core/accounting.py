"""Time accounting. Pure functions of (session, now), all in milliseconds."""

from otc.core.session import Session, Settings

NORMAL_TARGET = 8 * 60 * 60 * 1000
RAMADAN_TARGET = int(7.5 * 60 * 60 * 1000)


def daily_target(settings: Settings) -> int:
    return RAMADAN_TARGET if settings.ramadan_mode else NORMAL_TARGET


def completed_break_time(session: Session) -> int:
    """Sum of all completed breaks. Entries that aren't ``end > start > 0`` count for nothing."""
    total = 0
    for brk in session.breaks:
        if brk.start and brk.start > 0 and brk.end and brk.end > brk.start:
            total += brk.end - brk.start
    return total


def active_break_total(session: Session, now: int) -> int:
    """Completed breaks plus however long the open break has been running, if any."""
    completed = completed_break_time(session)
    if not session.break_start_time or session.check_out_time:
        return completed
    return completed + max(0, now - session.break_start_time)


def worked_time(session: Session, now: int) -> int:
    if not session.check_in_time:
        return 0
    end_time = session.check_out_time or now
    total_time = max(0, end_time - session.check_in_time)
    return max(0, total_time - active_break_total(session, now))


def remaining_time(session: Session, target: int, now: int) -> int:
    return max(0, target - worked_time(session, now))


def estimated_checkout(session: Session, target: int, now: int) -> int | None:
    """When the target will be reached if the rest of the day has no more breaks."""
    if not session.check_in_time:
        return None
    return session.check_in_time + target + active_break_total(session, now)


def progress(session: Session, target: int, now: int) -> float:
    if target <= 0:
        return 0.0
    return min(1.0, worked_time(session, now) / target)
