"""Append-only, timestamp-ordered play logs.

One generic log implementation serves every media kind. Each kind provides a
row model, an immutable record type that knows how to build itself from a row,
and a ``resolve`` step that turns a submitted item into column values.
Records are ordered by ``ts``; two plays with the same ``ts`` are ordered by
row id, so the later insertion is considered the newer one.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import asdict, dataclass
from typing import Any, Callable, ClassVar, Dict, Generic, List, Pattern, Type, TypeVar

from sqlalchemy.exc import SQLAlchemyError

from .errors import NotFoundError, StorageError
from .items import Item, ItemKind
from .local import SongInfo, probe_song
from .models import LocalSong, Store, YoutubeVideo
from .youtube import VIDEO_URL_PATTERN, YouTubeClient, extract_video_id

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Record:
    """A stored play."""

    kind: ClassVar[ItemKind]

    id: int
    external_id: str
    timestamp: int
    duration: int
    title: str

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": self.kind.value, **asdict(self)}


@dataclass(frozen=True)
class Video(Record):
    """A play of a YouTube video; ``external_id`` is the video id."""

    kind = ItemKind.YOUTUBE

    @classmethod
    def from_row(cls, row: YoutubeVideo) -> "Video":
        return cls(id=row.id, external_id=row.vid, timestamp=row.ts,
                   duration=row.duration, title=row.title)

    @property
    def url(self) -> str:
        return f"https://youtu.be/{self.external_id}"

    def to_dict(self) -> Dict[str, Any]:
        return {**super().to_dict(), "url": self.url}


@dataclass(frozen=True)
class Song(Record):
    """A play of a local file; ``external_id`` is its path."""

    kind = ItemKind.LOCAL
    artist: str = ""
    album: str = ""

    @classmethod
    def from_row(cls, row: LocalSong) -> "Song":
        return cls(id=row.id, external_id=row.path, timestamp=row.ts,
                   duration=row.duration, title=row.title,
                   artist=row.artist, album=row.album)


R = TypeVar("R", bound=Record)


class Storage(ABC, Generic[R]):
    """Query surface shared by every media kind."""

    @abstractmethod
    def insert(self, item: Item) -> R:
        ...

    @abstractmethod
    def current(self) -> R:
        ...

    @abstractmethod
    def previous(self) -> R:
        ...

    @abstractmethod
    def all(self) -> List[R]:
        ...


class MediaLog(Storage[R]):
    """Generic append-only log over one table."""

    kind: ItemKind
    model: Type[Any]
    record: Type[R]

    def __init__(self, store: Store):
        self.store = store

    @abstractmethod
    def resolve(self, item: Item) -> Dict[str, Any]:
        """Resolve an item into the column values of its row (without ``ts``)."""

    def insert(self, item: Item) -> R:
        if item.kind is not self.kind:
            raise ValueError(f"{type(self).__name__} cannot store {item.kind.value} items")

        # Metadata lookups may block on the network, keep them outside the store lock
        values = self.resolve(item)

        try:
            with self.store.session() as session:
                row = self.model(ts=item.ts, **values)
                session.add(row)
                session.flush()
                record = self.record.from_row(row)
        except SQLAlchemyError as e:
            logger.error(f"Failed to store {item.kind.value} item {item.source}: {e}")
            raise StorageError(str(e)) from e

        logger.info(f"Logged {self.kind.value} play: {record.title} (ts={record.timestamp})")
        return record

    def current(self) -> R:
        records = self._newest(1)
        if not records:
            raise NotFoundError(f"no {self.kind.value} plays logged")
        return records[0]

    def previous(self) -> R:
        records = self._newest(2)
        if len(records) < 2:
            raise NotFoundError(f"no previous {self.kind.value} play logged")
        return records[1]

    def all(self) -> List[R]:
        return self._newest(None)

    def _newest(self, limit) -> List[R]:
        try:
            with self.store.session() as session:
                query = session.query(self.model).order_by(self.model.ts.desc(), self.model.id.desc())
                if limit is not None:
                    query = query.limit(limit)
                return [self.record.from_row(row) for row in query.all()]
        except SQLAlchemyError as e:
            logger.error(f"Failed to query {self.kind.value} plays: {e}")
            raise StorageError(str(e)) from e


class YoutubeLog(MediaLog[Video]):
    """Plays of YouTube videos, resolved through the Data API."""

    kind = ItemKind.YOUTUBE
    model = YoutubeVideo
    record = Video

    def __init__(self, store: Store, client: YouTubeClient, pattern: Pattern = VIDEO_URL_PATTERN):
        super().__init__(store)
        self.client = client
        self.pattern = pattern

    def resolve(self, item: Item) -> Dict[str, Any]:
        vid = extract_video_id(item.source, self.pattern)
        info = self.client.fetch(vid)
        return {"vid": vid, "duration": info.duration, "title": info.title}


class LocalLog(MediaLog[Song]):
    """Plays of local audio files, resolved by reading their tags."""

    kind = ItemKind.LOCAL
    model = LocalSong
    record = Song

    def __init__(self, store: Store, probe: Callable[[str], SongInfo] = probe_song):
        super().__init__(store)
        self.probe = probe

    def resolve(self, item: Item) -> Dict[str, Any]:
        info = self.probe(item.source)
        return {
            "path": item.source,
            "duration": info.duration,
            "title": info.title,
            "artist": info.artist,
            "album": info.album,
        }
