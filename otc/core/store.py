"""Keyed string storage.

Every store swallows its own I/O failures. A failed write is logged and the
in-memory copy stays authoritative until the next write that does succeed.
"""

import json
from pathlib import Path
from typing import Protocol
from otc.common.logger import log


class Store(Protocol):
    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def remove(self, key: str) -> None: ...


class MemoryStore:
    """Plain dict store, used for tests and as the fallback behaviour of the file store."""

    def __init__(self, initial=None):
        self.data = dict(initial or {})

    def get(self, key):
        return self.data.get(key)

    def set(self, key, value):
        self.data[key] = str(value)

    def remove(self, key):
        self.data.pop(key, None)


class JsonFileStore(MemoryStore):
    """Keeps all keys in one JSON object on disk, rewritten on every change."""

    def __init__(self, path: Path):
        super().__init__()
        self.path = Path(path)
        self.data = self._read()

    def _read(self):
        if not self.path.exists():
            log.info(f"No existing store found at '{self.path}', starting from an empty store.")
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                raw = json.load(f)
        except (json.JSONDecodeError, OSError, UnicodeDecodeError):
            log.warning(f"Ran into an error while reading '{self.path}', starting from an empty store.", exc_info=True)
            return {}
        if not isinstance(raw, dict):
            log.warning(f"Store at '{self.path}' did not contain a JSON object, starting from an empty store.")
            return {}
        # Anything that isn't a string value didn't come from us
        return {str(k): v for k, v in raw.items() if isinstance(v, str)}

    def _write(self):
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump(self.data, f, indent=2)
        except OSError:
            log.warning(f"Failed to write store to '{self.path}', keeping in-memory values only.", exc_info=True)
            return False
        return True

    def set(self, key, value):
        super().set(key, value)
        self._write()

    def remove(self, key):
        if key in self.data:
            super().remove(key)
            self._write()
