import os
import sys
from pathlib import Path
from dataclasses import dataclass

# Lil helper function to create a directory (and parents) if missing.
def ensure_directory(path: Path):
    path.mkdir(parents=True,exist_ok=True)
    return path

# Works out the per-user base folder. CDT_HOME always wins, then the platform's usual spot.
def _data_root():
    override = os.getenv("CDT_HOME")
    if override:
        return Path(override)
    if sys.platform == "win32":
        appdata = os.getenv("APPDATA")
        if not appdata:
            raise RuntimeError("Missing APPDATA environment variable, cannot determine data directories.")
        return Path(appdata) / "cdt"
    state_home = os.getenv("XDG_STATE_HOME")
    if state_home:
        return Path(state_home) / "cdt"
    return Path.home() / ".local" / "state" / "cdt"

# Dataclass for accessing paths across program.
@dataclass(frozen=False)
class ProjectPaths:

    data: Path
    logs: Path
    settings: Path

    @staticmethod
    def build():
        data = ensure_directory(_data_root())
        logs = ensure_directory(data / "logs")

        # Settings file is optional, so only its location is fixed here.
        settings = data / "settings.json"

        return ProjectPaths(
            data = data,
            logs = logs,
            settings = settings,
        )
PATHS = ProjectPaths.build()
