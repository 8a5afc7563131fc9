import os
import sys
from pathlib import Path
from dataclasses import dataclass

# Creates the folder (and any missing parents) if it isn't there yet.
def ensure_directory(path: Path) -> Path:
    path.mkdir(parents=True, exist_ok=True)
    return path

# Picks the folder that holds all user-specific data. OTC_DATA_DIR wins so tests and portable installs can redirect
# everything, then APPDATA on Windows, then a dot folder in the home directory.
def _resolve_data_dir() -> Path:
    override = os.getenv("OTC_DATA_DIR")
    if override:
        return Path(override)
    if os.getenv("APPDATA"):
        return Path(os.environ["APPDATA"]) / "OfficeTimeCalculator"
    return Path.home() / ".office_time_calculator"

# Where the program lives and where it keeps its logs and today's stored data.
@dataclass(frozen=True)
class ProjectPaths:

    root: Path
    data: Path
    logs: Path
    current: Path

    @classmethod
    def build(cls):
        # Bundled executables keep their files next to the binary
        frozen = getattr(sys, "frozen", False)
        install_dir = Path(sys.executable).resolve().parent if frozen else Path(__file__).resolve().parents[2]

        data_dir = ensure_directory(_resolve_data_dir())
        return cls(
            root=install_dir,
            data=data_dir,
            logs=ensure_directory(data_dir / "logs"),
            current=ensure_directory(data_dir / "current"),
        )

PATHS = ProjectPaths.build()
