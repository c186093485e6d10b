from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any


class MalformedTimestamp(ValueError):
    pass


def parse_timestamp(raw: str) -> datetime:
    """Parse a GitHub RFC 3339 timestamp such as ``2024-05-01T12:00:00Z``."""
    if not isinstance(raw, str) or not raw:
        raise MalformedTimestamp(f"Error parsing date-time: {raw!r}")
    value = raw[:-1] + "+00:00" if raw.endswith("Z") else raw
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError as e:
        raise MalformedTimestamp(f"Error parsing date-time: {raw!r}") from e
    if parsed.tzinfo is None:
        raise MalformedTimestamp(f"Error parsing date-time (no UTC offset): {raw!r}")
    return parsed


@dataclass(frozen=True)
class PullRequest:
    number: int
    title: str
    url: str
    author: str
    created_at: datetime

    def to_dict(self) -> dict[str, Any]:
        return {
            "number": self.number,
            "title": self.title,
            "url": self.url,
            "author": self.author,
            "created_at": self.created_at.isoformat(),
        }


class SyncOutcome(str, Enum):
    ADDED = "added"
    PRESENT = "present"
    ERROR = "error"


@dataclass(frozen=True)
class SyncResult:
    number: int
    outcome: SyncOutcome
    reason: str | None = None

    @property
    def ok(self) -> bool:
        return self.outcome is not SyncOutcome.ERROR
