"""Score service for saving results and reading the event ranking.

Talks to a small REST API:

    POST {api_url}/scores             {"eventId", "name", "score"}
    GET  {api_url}/scores?eventId=..&limit=..   -> {"scores": [...]}

Failures never raise to the caller; they are logged and reported in the
returned value.
"""

import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, List, Optional

import aiohttp

from wedding_run.config.settings import ScoreServiceSettings

logger = logging.getLogger(__name__)


@dataclass
class SaveResult:
    """Result of a score submission."""
    success: bool
    entry_id: Optional[str] = None
    error: Optional[str] = None


@dataclass
class ScoreEntry:
    """One row of the ranking."""
    name: str
    score: int
    event_id: str
    id: Optional[str] = None
    timestamp: Optional[datetime] = None

    @classmethod
    def from_json(cls, data: dict) -> "ScoreEntry":
        return cls(
            id=data.get("id"),
            name=str(data.get("name", "")),
            score=int(data.get("score", 0)),
            event_id=str(data.get("eventId", "")),
            timestamp=parse_timestamp(data.get("timestamp")),
        )


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Read an ISO 8601 string, epoch seconds or ``{"seconds": n}``.

    Returns None for a missing or unreadable value (a write the server
    has not stamped yet).
    """
    if isinstance(value, dict):
        value = value.get("seconds")
    try:
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return datetime.fromtimestamp(value, tz=timezone.utc)
        if isinstance(value, str):
            parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
            return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)
    except (ValueError, OverflowError, OSError) as e:
        logger.warning(f"Ignoring bad score timestamp {value!r}: {e}")
    return None


class ScoreService:
    """Async client for the score API."""

    def __init__(self, settings: Optional[ScoreServiceSettings] = None):
        self.settings = settings or ScoreServiceSettings()
        self._api_url = self.settings.api_url.rstrip("/")
        self._session: Optional[aiohttp.ClientSession] = None

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create aiohttp session."""
        if self._session is None or self._session.closed:
            headers = {"Content-Type": "application/json"}
            if self.settings.api_key:
                headers["Authorization"] = f"Bearer {self.settings.api_key}"
            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self.settings.timeout),
                headers=headers,
            )
        return self._session

    async def save_score(self, event_id: str, name: str, score: int) -> SaveResult:
        """Submit a final score.

        Args:
            event_id: Event the score belongs to
            name: Participant name picked on the result screen
            score: Final integer score

        Returns:
            SaveResult with the new entry id or an error code
        """
        payload = {"eventId": event_id, "name": name, "score": int(score)}
        try:
            session = await self._get_session()
            async with session.post(f"{self._api_url}/scores", json=payload) as response:
                if response.status not in (200, 201):
                    logger.error(f"Failed to save score: HTTP {response.status}")
                    return SaveResult(success=False, error=f"HTTP {response.status}")

                data = await response.json()
                logger.info(f"Score saved: {name} {score} ({event_id})")
                return SaveResult(success=True, entry_id=data.get("id"))

        except asyncio.TimeoutError:
            logger.error("Timeout saving score")
            return SaveResult(success=False, error="TIMEOUT")
        except aiohttp.ClientError as e:
            logger.error(f"Network error saving score: {e}")
            return SaveResult(success=False, error="NETWORK_ERROR")

    async def get_ranking(self, event_id: str) -> List[ScoreEntry]:
        """Fetch the event's top scores, highest first. Empty on failure."""
        params = {"eventId": event_id, "limit": str(self.settings.ranking_limit)}
        try:
            session = await self._get_session()
            async with session.get(f"{self._api_url}/scores", params=params) as response:
                if response.status != 200:
                    logger.error(f"Failed to load ranking: HTTP {response.status}")
                    return []
                data = await response.json()

        except asyncio.TimeoutError:
            logger.error("Timeout loading ranking")
            return []
        except aiohttp.ClientError as e:
            logger.error(f"Network error loading ranking: {e}")
            return []

        entries = [ScoreEntry.from_json(row) for row in data.get("scores", [])]
        entries = [e for e in entries if e.event_id == event_id]
        entries.sort(key=lambda e: e.score, reverse=True)
        return entries[: self.settings.ranking_limit]

    async def close(self) -> None:
        """Close the HTTP session."""
        if self._session and not self._session.closed:
            await self._session.close()
            self._session = None
