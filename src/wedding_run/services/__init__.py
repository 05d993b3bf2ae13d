"""External collaborators: score API and local PIN memory."""

from .pin_store import PinStore
from .scores import SaveResult, ScoreEntry, ScoreService

__all__ = ["PinStore", "SaveResult", "ScoreEntry", "ScoreService"]
