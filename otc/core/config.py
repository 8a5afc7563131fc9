import json
from dataclasses import dataclass
from otc.common.logger import log
from otc.common.setup import PATHS
from otc.core.normalize import create_empty_session, normalize_session, to_number_or_none
from otc.core.session import STATE_LABELS, Session, Settings, reconcile_state


SCHEMA_VERSION = 3

#region === Keys and Paths ===

STORE_PATH = PATHS.current / "store.json"

STORAGE_KEYS = {
    "schema_version": "otc_schema_version",
    "current_state": "otc_current_state",
    "today_data": "otc_today_data",
    "settings": "otc_settings",
    "theme": "otc_theme",
}
# Left behind by schema versions before 3, removed during migration.
LEGACY_HISTORY_KEY = "otc_history"

# Default values for the settings entry, in their stored (camelCase) form.
_SETTINGS_DEFAULTS = {
    "ramadanMode": False,
}

THEMES = ("light", "dark")
DEFAULT_THEME = "light"

#endregion === Keys and Paths ===

# Everything that makes up one saved envelope, minus the theme which lives on its own.
@dataclass
class PersistedState:
    schema_version: int
    state_label: str
    session: Session
    settings: Settings

#region === Helpers ===

# Parses a stored JSON string, falling back (and logging) on anything unreadable.
def _safe_parse(value, fallback):
    if not value:
        return fallback
    try:
        return json.loads(value)
    except (json.JSONDecodeError, TypeError):
        log.warning(f"Failed to parse stored value {value!r}, using fallback.", exc_info=True)
        return fallback

def _settings_from_dict(raw, defaulted_values):
    if not isinstance(raw, dict):
        defaulted_values.add("settings")
        raw = {}
    values = {}
    for key, default in _SETTINGS_DEFAULTS.items():
        if key not in raw:
            defaulted_values.add(f"settings.{key}")
        values[key] = raw.get(key, default)
    return Settings(ramadan_mode=bool(values["ramadanMode"]))

#endregion === Helpers ===

#region === Saving and Loading State ===

# Loads the persisted envelope from the store, normalizing every part of it. Never raises: anything unreadable
# falls back to a fresh session for `today_key` and the default settings. Older schema versions get migrated and
# immediately rewritten.
def load_state(store, today_key: str) -> PersistedState:
    stored_version = 1
    stored_label = None
    session = None
    settings = Settings()
    defaulted_values = set()

    try:
        version = to_number_or_none(store.get(STORAGE_KEYS["schema_version"]))
        if version is None:
            defaulted_values.add("schema_version")
        else:
            stored_version = int(version)

        stored_label = store.get(STORAGE_KEYS["current_state"])
        if stored_label not in STATE_LABELS:
            defaulted_values.add("current_state")
            stored_label = None

        session = normalize_session(_safe_parse(store.get(STORAGE_KEYS["today_data"]), None))
        if session is None:
            defaulted_values.add("today_data")

        settings = _settings_from_dict(_safe_parse(store.get(STORAGE_KEYS["settings"]), {}), defaulted_values)
    # Fall back to a fresh session in case of error, but warn in log
    except (TypeError, ValueError, AttributeError):
        log.warning("Ran into an error while loading stored data, falling back to a fresh session.", exc_info=True)
        session = None
        stored_label = None

    if session is None:
        session = create_empty_session(today_key)

    # The stored label is only a cache, the timestamps decide.
    label = reconcile_state(session).label
    if stored_label is not None and stored_label != label:
        log.warning(f"Stored state '{stored_label}' disagreed with session data, using '{label}'.")

    if defaulted_values:
        log.warning(f"Loaded stored data, but with missing values that were defaulted: {', '.join(sorted(defaulted_values))}")
    else:
        log.info("Successfully loaded stored data.")

    # Never write a version lower than the one already on disk.
    state = PersistedState(
        schema_version=max(stored_version, SCHEMA_VERSION),
        state_label=label,
        session=session,
        settings=settings,
    )
    if stored_version < SCHEMA_VERSION:
        migrate(store, state, stored_version)
    return state

# Moves stored data forward to SCHEMA_VERSION. Old versions kept a multi-day history that this version no longer
# understands, so it's dropped.
def migrate(store, state: PersistedState, stored_version: int):
    store.remove(LEGACY_HISTORY_KEY)
    state.schema_version = max(state.schema_version, SCHEMA_VERSION)
    save_state(store, state)
    log.info(f"Migrated stored data from schema version {stored_version} to {state.schema_version}.")

# Writes the whole envelope through to the store.
def save_state(store, state: PersistedState):
    store.set(STORAGE_KEYS["schema_version"], str(state.schema_version))
    store.set(STORAGE_KEYS["current_state"], state.state_label)
    store.set(STORAGE_KEYS["today_data"], json.dumps(state.session.to_dict()))
    store.set(STORAGE_KEYS["settings"], json.dumps(state.settings.to_dict()))
    log.debug(f"Saved state '{state.state_label}' for {state.session.date}.")

#endregion === Saving and Loading State ===

#region === Theme ===

def load_theme(store) -> str:
    theme = store.get(STORAGE_KEYS["theme"])
    return theme if theme in THEMES else DEFAULT_THEME

def save_theme(store, theme: str):
    if theme not in THEMES:
        theme = DEFAULT_THEME
    store.set(STORAGE_KEYS["theme"], theme)
    return theme

#endregion === Theme ===
