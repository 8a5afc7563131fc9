"""Tests for on-disk storage: otc.core.store and the data folder in otc.common.setup."""

import json
import os
import shutil
import tempfile
import unittest
from datetime import date, datetime, time
from pathlib import Path
from unittest.mock import patch

os.environ.setdefault("OTC_DATA_DIR", tempfile.mkdtemp(prefix="otc_test_"))


# ──────────────────────────────────────────────────────────────────────────
# store.py tests
# ──────────────────────────────────────────────────────────────────────────

class TestMemoryStore(unittest.TestCase):

    def test_get_set_remove(self):
        from otc.core.store import MemoryStore
        store = MemoryStore({"a": "1"})
        self.assertEqual(store.get("a"), "1")
        self.assertIsNone(store.get("b"))
        store.set("b", "2")
        self.assertEqual(store.get("b"), "2")
        store.remove("a")
        store.remove("missing")
        self.assertEqual(store.data, {"b": "2"})


class TestJsonFileStore(unittest.TestCase):

    def setUp(self):
        self.tmpdir = tempfile.mkdtemp()
        self._tmppath = Path(self.tmpdir)
        self.path = self._tmppath / "current" / "store.json"

    def tearDown(self):
        shutil.rmtree(self.tmpdir, ignore_errors=True)

    def test_missing_file_starts_empty(self):
        from otc.core.store import JsonFileStore
        store = JsonFileStore(self.path)
        self.assertEqual(store.data, {})
        self.assertFalse(self.path.exists())

    def test_writes_through_and_reloads(self):
        from otc.core.store import JsonFileStore
        store = JsonFileStore(self.path)
        store.set("otc_theme", "dark")
        store.set("otc_current_state", "checked_in")
        store.remove("otc_current_state")

        with open(self.path, "r", encoding="utf-8") as f:
            self.assertEqual(json.load(f), {"otc_theme": "dark"})
        self.assertEqual(JsonFileStore(self.path).get("otc_theme"), "dark")

    def test_corrupt_file_starts_empty(self):
        from otc.core.store import JsonFileStore
        self.path.parent.mkdir(parents=True)
        self.path.write_text("{ this is not json", encoding="utf-8")
        self.assertEqual(JsonFileStore(self.path).data, {})

    def test_non_object_and_non_string_values_are_ignored(self):
        from otc.core.store import JsonFileStore
        self.path.parent.mkdir(parents=True)
        self.path.write_text(json.dumps(["a", "b"]), encoding="utf-8")
        self.assertEqual(JsonFileStore(self.path).data, {})

        self.path.write_text(json.dumps({"otc_theme": "dark", "otc_schema_version": 3}), encoding="utf-8")
        self.assertEqual(JsonFileStore(self.path).data, {"otc_theme": "dark"})

    def test_failed_write_keeps_values_in_memory(self):
        """A path that can't be written to never raises, the store just runs from memory."""
        from otc.core.store import JsonFileStore
        # A directory where the file should be
        self.path.mkdir(parents=True)
        store = JsonFileStore(self.path)
        store.set("otc_theme", "dark")
        self.assertEqual(store.get("otc_theme"), "dark")
        self.assertTrue(self.path.is_dir())

    def test_tracker_on_file_store(self):
        """Full run through a JSON file: check in, close, reopen, still checked in."""
        from otc.core.session import CheckedIn
        from otc.core.store import JsonFileStore
        from otc.core.tracker import Tracker
        from otc.util.misc import to_ms

        now = to_ms(datetime.combine(date(2026, 10, 19), time(9)))
        tracker = Tracker(JsonFileStore(self.path), clock=lambda: now)
        tracker.check_in()

        reopened = Tracker(JsonFileStore(self.path), clock=lambda: now + 60000)
        self.assertEqual(reopened.state, CheckedIn(now))
        with open(self.path, "r", encoding="utf-8") as f:
            raw = json.load(f)
        self.assertEqual(raw["otc_schema_version"], "3")
        self.assertEqual(raw["otc_current_state"], "checked_in")


# ──────────────────────────────────────────────────────────────────────────
# setup.py tests
# ──────────────────────────────────────────────────────────────────────────

class TestDataDir(unittest.TestCase):

    def test_override_wins(self):
        from otc.common import setup
        with patch.dict(os.environ, {"OTC_DATA_DIR": "/tmp/otc_override", "APPDATA": "/tmp/appdata"}):
            self.assertEqual(setup._resolve_data_dir(), Path("/tmp/otc_override"))

    def test_appdata_then_home(self):
        from otc.common import setup
        with patch.dict(os.environ, {"APPDATA": "/tmp/appdata"}):
            os.environ.pop("OTC_DATA_DIR", None)
            self.assertEqual(setup._resolve_data_dir(), Path("/tmp/appdata") / "OfficeTimeCalculator")
        with patch.dict(os.environ, {}):
            os.environ.pop("OTC_DATA_DIR", None)
            os.environ.pop("APPDATA", None)
            self.assertEqual(setup._resolve_data_dir(), Path.home() / ".office_time_calculator")

    def test_ensure_directory(self):
        from otc.common.setup import ensure_directory
        tmp = Path(tempfile.mkdtemp())
        try:
            target = tmp / "a" / "b"
            self.assertEqual(ensure_directory(target), target)
            self.assertTrue(target.is_dir())
            # Already there is fine
            self.assertEqual(ensure_directory(target), target)
        finally:
            shutil.rmtree(tmp, ignore_errors=True)


if __name__ == "__main__":
    unittest.main()
