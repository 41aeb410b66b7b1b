"""Per-stage dirty/lastSync tracking persisted in data/.admin-state.json."""

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict

from .config import STAGES

logger = logging.getLogger(__name__)


class SyncState:
    """
    Tracks whether DynamoDB has edits that are not yet exported to S3.

    Every console mutation marks its stage dirty; export-upload clears it.
    """

    def __init__(self, path: Path):
        self.path = path
        self.state: Dict[str, Dict[str, Any]] = self._default()

    @staticmethod
    def _default() -> Dict[str, Dict[str, Any]]:
        return {stage: {"isDirty": False, "lastSync": None} for stage in STAGES}

    def load(self) -> None:
        """Load state from disk; a missing or unreadable file keeps the defaults."""
        try:
            loaded = json.loads(self.path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("Ignoring unreadable sync state %s: %s", self.path, e)
            return
        if not isinstance(loaded, dict):
            logger.warning("Ignoring malformed sync state %s: expected an object", self.path)
            return
        for stage, value in loaded.items():
            if not isinstance(value, dict):
                logger.warning("Ignoring malformed sync state for %s", stage)
                continue
            self.state[stage] = {"isDirty": bool(value.get("isDirty")), "lastSync": value.get("lastSync")}

    def save(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(self.state, indent=2), encoding="utf-8")

    def get(self, stage: str) -> Dict[str, Any]:
        return dict(self.state.get(stage) or {"isDirty": False, "lastSync": None})

    def mark_dirty(self, stage: str) -> None:
        self.state.setdefault(stage, {"isDirty": False, "lastSync": None})["isDirty"] = True
        self.save()

    def mark_synced(self, stage: str) -> str:
        """Clear the dirty flag and stamp lastSync. Returns the timestamp."""
        synced_at = datetime.now(timezone.utc).isoformat()
        self.state[stage] = {"isDirty": False, "lastSync": synced_at}
        self.save()
        return synced_at
