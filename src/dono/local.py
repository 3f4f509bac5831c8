"""Metadata probe for local audio files."""

import logging
from dataclasses import dataclass
from pathlib import Path

from mutagen import File as MutagenFile
from mutagen import MutagenError

from .errors import InvalidSourceError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SongInfo:
    """Tags and length read from an audio file."""

    title: str
    artist: str
    album: str
    duration: int


def _first_tag(tags, key: str) -> str:
    if not tags:
        return ""
    values = tags.get(key) or []
    if isinstance(values, str):
        return values.strip()
    for value in values:
        text = str(value).strip()
        if text:
            return text
    return ""


def probe_song(path: str) -> SongInfo:
    """Read title, artist, album and duration from an audio file."""
    try:
        audio = MutagenFile(path, easy=True)
    except (MutagenError, OSError) as e:
        logger.warning(f"Failed to read tags for {path}: {e}")
        raise InvalidSourceError(path) from e
    if audio is None:
        logger.warning(f"Mutagen could not identify {path}")
        raise InvalidSourceError(path)

    tags = getattr(audio, "tags", None)
    length = getattr(getattr(audio, "info", None), "length", None) or 0

    return SongInfo(
        title=_first_tag(tags, "title") or Path(path).stem,
        artist=_first_tag(tags, "artist"),
        album=_first_tag(tags, "album"),
        duration=max(0, int(round(float(length)))),
    )
