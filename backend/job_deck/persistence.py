"""Best-effort mirror of the job and activity caches into a local JSON file.

Reads and writes never raise: failures are logged as PersistenceWarning and
the caller carries on as if there were no snapshot.
"""

import json
import logging
from pathlib import Path
from typing import Optional, Union

from job_deck.errors import PersistenceWarning

logger = logging.getLogger(__name__)

SNAPSHOT_KEYS = ("jobs", "activities")


class LocalSnapshot:
    """A single durable slot holding exactly the jobs and activities state."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path).expanduser()

    def load(self) -> Optional[dict]:
        """Return {"jobs": ..., "activities": ...} or None if absent or unreadable."""
        if not self.path.exists():
            return None
        try:
            data = json.loads(self.path.read_text())
        except (json.JSONDecodeError, OSError, UnicodeDecodeError) as e:
            logger.warning("%s", PersistenceWarning(f"Failed to load state from {self.path}: {e}"))
            return None
        # Must be a dict carrying both slices
        if not isinstance(data, dict) or not all(isinstance(data.get(k), dict) for k in SNAPSHOT_KEYS):
            logger.warning("%s", PersistenceWarning(f"Ignoring malformed snapshot at {self.path}"))
            return None
        return {k: data[k] for k in SNAPSHOT_KEYS}

    def save(self, jobs: dict, activities: dict) -> bool:
        """Write the snapshot through a temp file. Returns False if the write failed."""
        tmp = self.path.with_name(self.path.name + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp.write_text(json.dumps({"jobs": jobs, "activities": activities}, indent=2))
            tmp.replace(self.path)
        except (OSError, TypeError, ValueError) as e:
            logger.warning("%s", PersistenceWarning(f"Failed to save state to {self.path}: {e}"))
            return False
        return True

    def clear(self) -> None:
        try:
            self.path.unlink(missing_ok=True)
        except OSError as e:
            logger.warning("%s", PersistenceWarning(f"Failed to clear {self.path}: {e}"))
