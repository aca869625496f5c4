"""
Centralized filesystem paths for runtime data.
"""
import os
from pathlib import Path

PROJECT_ROOT = Path(__file__).parent.parent


def get_data_dir() -> Path:
    """
    Return runtime data directory.

    Priority:
    1. MINDTRACK_DATA_DIR env var
    2. <project_root>/data
    """
    raw = os.getenv("MINDTRACK_DATA_DIR", "").strip()
    if raw:
        return Path(raw).expanduser()
    return PROJECT_ROOT / "data"


def get_goals_dir() -> Path:
    """One JSON document per goal lives here."""
    return get_data_dir() / "goals"
