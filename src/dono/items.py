"""Items submitted for logging."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict


class ItemKind(Enum):
    YOUTUBE = "youtube"
    LOCAL = "local"


@dataclass(frozen=True)
class Item:
    """A play reported by a client: what was played and when it started."""

    kind: ItemKind
    source: str  # link for youtube items, file path for local ones
    ts: int

    @classmethod
    def youtube(cls, url: str, ts: int) -> "Item":
        return cls(ItemKind.YOUTUBE, url, ts)

    @classmethod
    def local(cls, path: str, ts: int) -> "Item":
        return cls(ItemKind.LOCAL, path, ts)

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "Item":
        """Build an item from a request payload, raising ValueError when malformed."""
        if not isinstance(data, dict):
            raise ValueError("expected a JSON object")
        try:
            kind = ItemKind(data.get("kind"))
        except ValueError:
            raise ValueError(f"unknown kind: {data.get('kind')!r}") from None

        source = data.get("source")
        if not isinstance(source, str) or not source.strip():
            raise ValueError("missing required field: source")

        ts = data.get("ts")
        if isinstance(ts, bool) or not isinstance(ts, int) or ts < 0:
            raise ValueError("ts must be a non-negative integer (epoch seconds)")

        return cls(kind, source.strip(), ts)
