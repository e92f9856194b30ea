# Session Store
"""
Local persistence for the interview session.

One JSON record under a fixed key, overwritten on every change and deleted
on reset. There is no schema versioning: a record that no longer matches the
Session shape is discarded and the user starts over.
"""

import json
import logging
import os
from pathlib import Path
from typing import Optional, Union

from pydantic import ValidationError

from interview_prep.config import STORAGE_CONFIG
from interview_prep.session.models import Session

logger = logging.getLogger(__name__)


class SessionStore:
    """Reads and writes the single persisted session record."""

    def __init__(
        self,
        directory: Optional[Union[str, Path]] = None,
        key: str = STORAGE_CONFIG["session_key"]
    ):
        """
        Args:
            directory: Where the record lives (defaults to value from config)
            key: Storage key; the record is saved as <key>.json
        """
        if directory is None:
            directory = STORAGE_CONFIG["directory"]

        self.directory = Path(directory)
        self.key = key

    @property
    def path(self) -> Path:
        return self.directory / f"{self.key}.json"

    def exists(self) -> bool:
        return self.path.exists()

    def load(self) -> Optional[Session]:
        """
        Load the stored session.

        Returns:
            The session, or None if nothing is stored or the stored record
            is unreadable (in which case it is removed)
        """
        if not self.path.exists():
            return None

        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
            session = Session.model_validate(data)
        except (json.JSONDecodeError, UnicodeDecodeError, ValidationError) as e:
            logger.warning(f"⚠️ Discarding incompatible stored session at {self.path}: {e}")
            self.clear()
            return None

        logger.info(f"📂 Restored session from {self.path}")
        return session

    def save(self, session: Session) -> None:
        """Overwrite the stored record with the full session."""
        self.directory.mkdir(parents=True, exist_ok=True)
        payload = session.model_dump(mode="json", by_alias=True)

        tmp_path = self.path.with_suffix(".json.tmp")
        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump(payload, f, indent=2)
        os.replace(tmp_path, self.path)

    def clear(self) -> None:
        """Delete the stored record, if any."""
        if self.path.exists():
            self.path.unlink()
            logger.info(f"🗑️ Cleared stored session at {self.path}")
