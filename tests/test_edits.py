"""Tests for manual time edit validation in otc.core.edits."""

import os
import tempfile
import unittest
from datetime import date, datetime, time

os.environ.setdefault("OTC_DATA_DIR", tempfile.mkdtemp(prefix="otc_test_"))

DAY = date(2026, 10, 19)


def at(hour, minute=0):
    from otc.util.misc import to_ms
    return to_ms(datetime.combine(DAY, time(hour, minute)))


class TestParseTimeInput(unittest.TestCase):

    def test_valid_values(self):
        from otc.core.edits import parse_time_input
        self.assertEqual(parse_time_input("09:30", DAY), at(9, 30))
        self.assertEqual(parse_time_input("9:05", DAY), at(9, 5))
        self.assertEqual(parse_time_input(" 23:59 ", DAY), at(23, 59))
        self.assertEqual(parse_time_input("00:00", DAY), at(0))

    def test_invalid_values(self):
        from otc.core.edits import parse_time_input
        for value in ("", None, "24:00", "12:60", "noon", "9", "09:5", "-1:00", "09:30:00"):
            self.assertIsNone(parse_time_input(value, DAY), value)


class TestValidateTimeEdit(unittest.TestCase):

    def _assert_rejected(self, edit, message, now=None):
        from otc.core.edits import TimeEditError, validate_time_edit
        with self.assertRaises(TimeEditError) as ctx:
            validate_time_edit(edit, now or at(17), DAY)
        self.assertEqual(ctx.exception.message, message)
        self.assertEqual(ctx.exception.title, "Invalid Time")
        self.assertEqual(str(ctx.exception), message)

    def test_full_day(self):
        from otc.core.edits import TimeEdit, validate_time_edit
        from otc.core.session import Break
        result = validate_time_edit(TimeEdit("08:30", "16:45", [("12:00", "12:30"), ("10:00", "10:10")]),
                                    at(17), DAY)
        self.assertEqual(result.check_in_time, at(8, 30))
        self.assertEqual(result.check_out_time, at(16, 45))
        self.assertEqual(result.breaks, [Break(at(10), at(10, 10)), Break(at(12), at(12, 30))])
        self.assertIsNone(result.break_start_time)

    def test_everything_blank_clears_the_day(self):
        from otc.core.edits import TimeEdit, validate_time_edit
        result = validate_time_edit(TimeEdit("", "", [("", ""), ("  ", "")]), at(17), DAY)
        self.assertIsNone(result.check_in_time)
        self.assertIsNone(result.check_out_time)
        self.assertEqual(result.breaks, [])
        self.assertIsNone(result.break_start_time)

    def test_ongoing_break(self):
        from otc.core.edits import TimeEdit, validate_time_edit
        result = validate_time_edit(TimeEdit("09:00", "", [("14:00", "")]), at(15), DAY)
        self.assertEqual(result.break_start_time, at(14))
        self.assertEqual(result.breaks, [])

    def test_malformed_times(self):
        from otc.core.edits import TimeEdit
        self._assert_rejected(TimeEdit("9am", ""), "Enter check-in and check-out times as HH:MM.")
        self._assert_rejected(TimeEdit("09:00", "25:00"), "Enter check-in and check-out times as HH:MM.")

    def test_check_out_needs_check_in(self):
        from otc.core.edits import TimeEdit
        self._assert_rejected(TimeEdit("", "16:00"), "Set check-in time before check-out time.")

    def test_check_out_after_check_in(self):
        from otc.core.edits import TimeEdit
        self._assert_rejected(TimeEdit("09:00", "08:00"), "Check-out time must be after check-in time.")
        self._assert_rejected(TimeEdit("09:00", "09:00"), "Check-out time must be after check-in time.")

    def test_times_in_the_future(self):
        from otc.core.edits import TimeEdit
        self._assert_rejected(TimeEdit("09:00", "18:00"),
                              "Check-out time cannot be in the future. Clear check-out to keep the timer running.")
        self._assert_rejected(TimeEdit("18:00", ""),
                              "Check-in time cannot be in the future. Use current or earlier machine time.")

    def test_break_needs_valid_start(self):
        from otc.core.edits import TimeEdit
        self._assert_rejected(TimeEdit("09:00", "", [("", "10:00")]), "Each break must have a valid start time.")

    def test_malformed_break_times(self):
        """A mistyped break time is rejected, never read as a blank field."""
        from otc.core.edits import TimeEdit
        self._assert_rejected(TimeEdit("09:00", "", [("12:00", "12:6O")]), "Enter break times as HH:MM.")
        self._assert_rejected(TimeEdit("09:00", "16:00", [("12:00", "12:6O")]), "Enter break times as HH:MM.")
        self._assert_rejected(TimeEdit("09:00", "", [("ten", "")]), "Enter break times as HH:MM.")
        self._assert_rejected(TimeEdit("09:00", "", [("25:00", "10:00")]), "Enter break times as HH:MM.")

    def test_mistyped_break_end_changes_nothing(self):
        from otc.core.edits import TimeEdit, TimeEditError
        from otc.core.store import MemoryStore
        from otc.core.tracker import Tracker
        tracker = Tracker(MemoryStore(), clock=lambda: at(17))
        tracker.apply_time_edit(TimeEdit("09:00", ""))
        before = tracker.session.to_dict()
        with self.assertRaises(TimeEditError):
            tracker.apply_time_edit(TimeEdit("09:00", "", [("12:00", "12:6O")]))
        self.assertIsNone(tracker.session.break_start_time)
        self.assertEqual(tracker.session.to_dict(), before)
        self.assertEqual(tracker.state.label, "checked_in")

    def test_break_after_check_in(self):
        from otc.core.edits import TimeEdit
        self._assert_rejected(TimeEdit("09:00", "", [("08:30", "08:45")]),
                              "Break start time must be after check-in time.")
        self._assert_rejected(TimeEdit("09:00", "", [("09:00", "09:15")]),
                              "Break start time must be after check-in time.")

    def test_ongoing_break_rules(self):
        from otc.core.edits import TimeEdit
        self._assert_rejected(TimeEdit("09:00", "16:00", [("12:00", "")]),
                              "Break end time is required when check-out time is set.")
        self._assert_rejected(TimeEdit("09:00", "", [("12:00", ""), ("13:00", "")]),
                              "Only one ongoing break is allowed.")
        self._assert_rejected(TimeEdit("09:00", "", [("16:00", "")]),
                              "Ongoing break start cannot be in the future.", now=at(15))

    def test_completed_break_rules(self):
        from otc.core.edits import TimeEdit
        self._assert_rejected(TimeEdit("09:00", "", [("12:00", "11:00")]),
                              "Break end time must be after break start time.")
        self._assert_rejected(TimeEdit("09:00", "15:00", [("14:30", "15:30")]),
                              "Break end time must be before check-out time.")
        self._assert_rejected(TimeEdit("09:00", "", [("14:30", "15:30")]),
                              "Break end time cannot be in the future for an active session.", now=at(15))

    def test_overlapping_breaks_are_rejected(self):
        """Breaks 10:00-11:00 and 10:30-11:30 overlap, whichever order they were typed in."""
        from otc.core.edits import TimeEdit
        self._assert_rejected(TimeEdit("09:00", "17:00", [("10:00", "11:00"), ("10:30", "11:30")]),
                              "Break times cannot overlap.")
        self._assert_rejected(TimeEdit("09:00", "17:00", [("10:30", "11:30"), ("10:00", "11:00")]),
                              "Break times cannot overlap.")
        self._assert_rejected(TimeEdit("08:00", "", [("09:00", "09:30"), ("09:15", "09:45")]),
                              "Break times cannot overlap.")

    def test_ongoing_break_cannot_overlap_completed_ones(self):
        from otc.core.edits import TimeEdit, validate_time_edit
        self._assert_rejected(TimeEdit("09:00", "", [("10:00", "11:00"), ("10:30", "")]),
                              "Break times cannot overlap.")
        self._assert_rejected(TimeEdit("09:00", "", [("10:30", ""), ("11:00", "11:30")]),
                              "Break times cannot overlap.")
        result = validate_time_edit(TimeEdit("09:00", "", [("10:00", "11:00"), ("11:00", "")]), at(17), DAY)
        self.assertEqual(result.break_start_time, at(11))

    def test_touching_breaks_are_fine(self):
        from otc.core.edits import TimeEdit, validate_time_edit
        result = validate_time_edit(TimeEdit("09:00", "17:00", [("10:00", "11:00"), ("11:00", "11:30")]),
                                    at(17), DAY)
        self.assertEqual(len(result.breaks), 2)

    def test_breaks_need_check_in(self):
        from otc.core.edits import TimeEdit
        self._assert_rejected(TimeEdit("", "", [("10:00", "10:15")]), "Set check-in time before adding breaks.")
        self._assert_rejected(TimeEdit("", "", [("10:00", "")]), "Set check-in time before adding breaks.")

    def test_error_is_a_value_error(self):
        from otc.core.edits import TimeEditError
        err = TimeEditError("Bad", title="Nope")
        self.assertIsInstance(err, ValueError)
        self.assertEqual((err.message, err.title), ("Bad", "Nope"))


if __name__ == "__main__":
    unittest.main()
