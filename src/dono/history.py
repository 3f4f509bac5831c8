"""Play history across media kinds."""

import heapq
import logging
from typing import Dict, List, Optional

from .items import Item, ItemKind
from .storage import MediaLog, Record

logger = logging.getLogger(__name__)


class History:
    """Routes submitted items to the log for their kind."""

    def __init__(self, *logs: MediaLog):
        self.logs: Dict[ItemKind, MediaLog] = {log.kind: log for log in logs}

    def log(self, kind: ItemKind) -> MediaLog:
        try:
            return self.logs[kind]
        except KeyError:
            raise ValueError(f"no log configured for {kind.value} items") from None

    def add(self, item: Item) -> Record:
        """Resolve and store a submitted item."""
        logger.info(f"Received {item.kind.value} item: {item.source}")
        return self.log(item.kind).insert(item)

    def merged(self, limit: Optional[int] = None) -> List[Record]:
        """Every logged play, newest first, across all kinds.

        "current" and "previous" stay per kind; this is only a combined view.
        """
        streams = [log.all() for log in self.logs.values()]
        merged = heapq.merge(*streams, key=lambda r: r.timestamp, reverse=True)
        records = list(merged)
        return records if limit is None else records[:limit]
