from collections.abc import Callable
from dataclasses import dataclass
from otc.common.logger import log
from otc.core import accounting, config
from otc.core.display import DisplaySnapshot, build_display
from otc.core.edits import TimeEdit, validate_time_edit
from otc.core.normalize import create_empty_session
from otc.core.session import Break, CheckedIn, NotStarted, OnBreak, Session, Settings, reconcile_state
from otc.core.store import Store
from otc.util.misc import date_key, format_time_for_input, local_date, now_ms

CHECKOUT_MESSAGE = "Are you sure you want to check out? This will complete today's session."
CHECKOUT_TITLE = "Confirm Check Out"


# One outstanding checkout confirmation. Handed out by Tracker.request_checkout() and given back, with the user's
# answer, to Tracker.resolve_checkout().
@dataclass
class PendingCheckout:
    message: str = CHECKOUT_MESSAGE
    title: str = CHECKOUT_TITLE
    resolved: bool = False


# Owns today's session and settings, and is the only thing allowed to change them. Every transition is a no-op when
# its preconditions don't hold: it returns False instead of raising, so buttons can be wired straight to it.
class Tracker:

    def __init__(self, store: Store, clock: Callable[[], int] = now_ms):
        self.store = store
        self.clock = clock

        persisted = config.load_state(store, self.today_key())
        self.schema_version = persisted.schema_version
        self.session: Session = persisted.session
        self.settings: Settings = persisted.settings
        self.state = reconcile_state(self.session)
        self.theme = config.load_theme(store)
        self._pending_checkout = None

        self.check_daily_reset()
        log.debug(f"Initialized tracker for {self.session.date} in state '{self.state.label}'")

    # ------------------------------------------------------------------ #
    #  Helpers                                                             #
    # ------------------------------------------------------------------ #

    def today_key(self):
        return date_key(self.clock())

    @property
    def target(self):
        return accounting.daily_target(self.settings)

    @property
    def checkout_pending(self):
        return self._pending_checkout is not None

    # Re-derives the state from the timestamps, then writes everything through to the store.
    def _commit(self):
        self.state = reconcile_state(self.session)
        config.save_state(self.store, config.PersistedState(
            schema_version=self.schema_version,
            state_label=self.state.label,
            session=self.session,
            settings=self.settings,
        ))

    def display(self) -> DisplaySnapshot:
        return build_display(self.session, self.settings, self.clock())

    # ------------------------------------------------------------------ #
    #  Transitions                                                         #
    # ------------------------------------------------------------------ #

    def check_in(self):
        if not isinstance(self.state, NotStarted) or self.session.check_in_time:
            return False
        now = self.clock()
        self.session.check_in_time = now
        self.session.check_out_time = None
        self.session.break_start_time = None
        self.session.breaks = []
        self.session.total_break_time = 0
        self.session.worked_time = 0
        self._commit()
        log.info(f"Checked in at {now}")
        return True

    def start_break(self):
        if (not isinstance(self.state, CheckedIn) or not self.session.check_in_time
                or self.session.break_start_time):
            return False
        now = self.clock()
        self.session.break_start_time = now
        self._commit()
        log.info(f"Started break at {now}")
        return True

    def stop_break(self):
        if not isinstance(self.state, OnBreak) or not self.session.break_start_time:
            return False
        now = self.clock()
        self.session.breaks.append(Break(self.session.break_start_time, now))
        self.session.break_start_time = None
        self.session.total_break_time = accounting.completed_break_time(self.session)
        self._commit()
        log.info(f"Stopped break at {now}, {len(self.session.breaks)} breaks so far")
        return True

    def _can_check_out(self):
        return isinstance(self.state, (CheckedIn, OnBreak)) and bool(self.session.check_in_time)

    # First half of checking out. Returns the confirmation to show the user, or None if checking out isn't allowed
    # right now (wrong state, or a confirmation is already waiting for an answer).
    def request_checkout(self):
        if not self._can_check_out() or self._pending_checkout is not None:
            return None
        self._pending_checkout = PendingCheckout()
        log.debug("Requested checkout confirmation")
        return self._pending_checkout

    # Second half of checking out. A declined, stale, or already-resolved request changes nothing.
    def resolve_checkout(self, pending: PendingCheckout, confirmed: bool):
        if pending is None or pending is not self._pending_checkout or pending.resolved:
            return False
        pending.resolved = True
        self._pending_checkout = None
        if not confirmed:
            log.debug("Checkout declined")
            return False
        if not self._can_check_out():
            return False

        now = self.clock()
        if isinstance(self.state, OnBreak) and self.session.break_start_time:
            self.session.breaks.append(Break(self.session.break_start_time, now))
            self.session.break_start_time = None
        self.session.total_break_time = accounting.completed_break_time(self.session)
        self.session.check_out_time = now
        self.session.worked_time = accounting.worked_time(self.session, now)
        self._commit()
        log.info(f"Checked out at {now} after {self.session.worked_time} ms of work")
        return True

    # Both halves in one go, for callers whose `ask(message, title)` can block for the answer.
    def check_out(self, ask: Callable[[str, str], bool]):
        pending = self.request_checkout()
        if pending is None:
            return False
        try:
            confirmed = bool(ask(pending.message, pending.title))
        except BaseException:
            self.resolve_checkout(pending, False)
            raise
        return self.resolve_checkout(pending, confirmed)

    # ------------------------------------------------------------------ #
    #  Daily reset                                                         #
    # ------------------------------------------------------------------ #

    # Throws away a session from any other day and starts today's empty one. Runs at startup and whenever the
    # window comes back into view.
    def check_daily_reset(self):
        today = self.today_key()
        if self.session.date == today:
            return False
        log.info(f"Daily reset: discarding session for {self.session.date}, starting {today}")
        self.session = create_empty_session(today)
        self._pending_checkout = None
        self._commit()
        return True

    # ------------------------------------------------------------------ #
    #  Manual edits and settings                                           #
    # ------------------------------------------------------------------ #

    # Current session as form values: completed breaks first, then the open break with an empty end.
    def edit_form(self) -> TimeEdit:
        s = self.session
        rows = [(format_time_for_input(b.start), format_time_for_input(b.end)) for b in s.breaks]
        if s.break_start_time:
            rows.append((format_time_for_input(s.break_start_time), ""))
        return TimeEdit(
            check_in=format_time_for_input(s.check_in_time) if s.check_in_time else "",
            check_out=format_time_for_input(s.check_out_time) if s.check_out_time else "",
            breaks=rows,
        )

    # Validates and applies a manual edit as one unit. Raises TimeEditError without touching anything if the edit
    # is invalid.
    def apply_time_edit(self, edit: TimeEdit):
        now = self.clock()
        validated = validate_time_edit(edit, now, local_date(now))

        self.session.date = date_key(now)
        self.session.check_in_time = validated.check_in_time
        self.session.check_out_time = validated.check_out_time
        self.session.breaks = list(validated.breaks)
        self.session.break_start_time = validated.break_start_time
        self.session.total_break_time = accounting.completed_break_time(self.session)
        self.session.worked_time = (accounting.worked_time(self.session, now)
                                    if self.session.check_in_time else 0)
        self._pending_checkout = None
        self._commit()
        log.info(f"Applied manual time edit, now in state '{self.state.label}'")
        return True

    def set_ramadan_mode(self, enabled):
        enabled = bool(enabled)
        if self.settings.ramadan_mode == enabled:
            return False
        self.settings.ramadan_mode = enabled
        self._commit()
        log.info(f"Ramadan mode set to {enabled}")
        return True

    def toggle_theme(self):
        self.theme = config.save_theme(self.store, "dark" if self.theme == "light" else "light")
        log.debug(f"Switched theme to '{self.theme}'")
        return self.theme
