"""YouTube integration: link parsing, duration decoding and metadata lookup."""

import logging
import re
from dataclasses import dataclass
from typing import Optional, Pattern
from urllib.parse import quote

import requests

from .errors import (
    DeserializationError,
    EmptyCatalogError,
    InvalidSourceError,
    RemoteStatusError,
    TransportError,
)

logger = logging.getLogger(__name__)

DEFAULT_API_BASE = "https://www.googleapis.com/youtube/v3"

# youtu.be/<id>, youtube.com/{embed,v,shorts,live}/<id> and youtube.com/watch?...v=<id>
VIDEO_URL_PATTERN = re.compile(
    r"^(?:https?://)?(?:(?:www|m|music)\.)?"
    r"(?:youtu\.be/|youtube\.com/(?:(?:embed|v|shorts|live)/|watch\?(?:[^#]*?&)?v=))"
    r"(?P<id>[A-Za-z0-9_-]{11})(?![A-Za-z0-9_-])"
)

_SECONDS_PER_UNIT = {"H": 60 * 60, "M": 60, "S": 1}


def extract_video_id(url: str, pattern: Pattern = VIDEO_URL_PATTERN) -> str:
    """Extract the 11 character video id from a YouTube link."""
    match = pattern.search(url.strip())
    if not match:
        raise InvalidSourceError(url)
    return match.group("id")


def parse_duration(period: str) -> int:
    """Decode an ISO-8601 duration such as ``PT1H2M3S`` into seconds.

    Only the H, M and S designators contribute. Anything unparsable counts as
    zero, so this never raises; a warning is logged when a designator has no
    usable digits in front of it.
    """
    total = 0
    start = 0
    for i, ch in enumerate(period):
        if ch.isdigit():
            continue
        if ch in _SECONDS_PER_UNIT:
            digits = period[start:i]
            try:
                value = int(digits)
            except ValueError:
                logger.warning(f"Unparsable duration segment {digits!r} in {period!r}, counting as 0")
                value = 0
            total += value * _SECONDS_PER_UNIT[ch]
        start = i + 1
    return total


def encode(value: str) -> str:
    """Percent-encode every byte outside ``[A-Za-z0-9-_.~]`` as uppercase ``%XX``."""
    return quote(value.encode("utf-8"), safe="")


@dataclass(frozen=True)
class VideoInfo:
    """Metadata resolved from the catalog for one video."""

    title: str
    duration: int


class YouTubeClient:
    """Looks up video metadata through the YouTube Data API."""

    PART = "snippet,contentDetails"
    FIELDS = "items(id,snippet(title),contentDetails(duration))"

    def __init__(self, api_key: str, base_url: str = DEFAULT_API_BASE,
                 timeout: Optional[float] = None, session: Optional[requests.Session] = None):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def build_query(self, video_id: str) -> str:
        """Build the encoded query string for a video lookup."""
        params = [
            ("id", video_id),
            ("part", self.PART),
            ("fields", self.FIELDS),
            ("key", self.api_key),
        ]
        return "&".join(f"{encode(k)}={encode(v)}" for k, v in params)

    def fetch(self, video_id: str) -> VideoInfo:
        """Fetch the title and duration of a video."""
        url = f"{self.base_url}/videos/?{self.build_query(video_id)}"
        logger.debug(f"Fetching metadata for {video_id}")

        try:
            response = self.session.get(url, timeout=self.timeout)
        except requests.RequestException as e:
            logger.error(f"YouTube API request failed for {video_id}: {e}")
            raise TransportError(str(e)) from e

        if not 200 <= response.status_code < 300:
            logger.warning(f"YouTube API returned {response.status_code} {response.reason} for {video_id}")
            raise RemoteStatusError(response.status_code, response.reason or "")

        return self.parse_response(video_id, response)

    @staticmethod
    def parse_response(video_id: str, response: requests.Response) -> VideoInfo:
        """Turn a catalog response into a VideoInfo for its first item."""
        try:
            data = response.json()
        except ValueError as e:
            raise DeserializationError(f"response is not valid JSON: {e}") from e

        items = data.get("items") if isinstance(data, dict) else None
        if not isinstance(items, list):
            raise DeserializationError("response has no `items` list")
        if not items:
            raise EmptyCatalogError(video_id)

        try:
            title = items[0]["snippet"]["title"]
            duration = items[0]["contentDetails"]["duration"]
        except (KeyError, TypeError) as e:
            raise DeserializationError(f"unexpected item shape: {e!r}") from e
        if not isinstance(title, str) or not isinstance(duration, str):
            raise DeserializationError("title and duration must be strings")
        if not title.strip():
            raise DeserializationError(f"catalog entry for {video_id} has an empty title")

        return VideoInfo(title=title, duration=parse_duration(duration))
