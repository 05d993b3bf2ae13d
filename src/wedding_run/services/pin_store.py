"""Remembers the event PIN once it has been entered on this kiosk."""

import json
import logging
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)


class PinStore:
    """Small JSON file of ``{event_id: pin}`` under the data directory."""

    FILENAME = "pins.json"

    def __init__(self, data_path: Path):
        self._path = data_path / self.FILENAME

    def _read(self) -> dict:
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Ignoring unreadable PIN store {self._path}: {e}")
            return {}
        return data if isinstance(data, dict) else {}

    def get(self, event_id: str) -> Optional[str]:
        value = self._read().get(event_id)
        return str(value) if value is not None else None

    def remember(self, event_id: str, pin: str) -> None:
        data = self._read()
        data[event_id] = pin
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_text(json.dumps(data, indent=2), encoding="utf-8")
        except OSError as e:
            # The gate still opens; the PIN is just asked again next start.
            logger.error(f"Could not save PIN store {self._path}: {e}")

    def is_unlocked(self, event_id: str, pin: str) -> bool:
        return self.get(event_id) == pin
