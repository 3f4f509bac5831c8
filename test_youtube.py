#!/usr/bin/env python3
"""Tests for YouTube link parsing, duration decoding and metadata lookup."""

import sys
import os
import json
import logging

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), 'src'))

import pytest
import requests

from dono.errors import (
    DeserializationError,
    EmptyCatalogError,
    InvalidSourceError,
    RemoteStatusError,
    TransportError,
)
from dono.youtube import YouTubeClient, VideoInfo, encode, extract_video_id, parse_duration

VIDEO_ID = "dQw4w9WgXcQ"

def make_response(status=200, reason="OK", body=None):
    """Build a real requests.Response with the given status and body."""
    response = requests.Response()
    response.status_code = status
    response.reason = reason
    if body is None:
        body = {}
    response._content = body if isinstance(body, bytes) else json.dumps(body).encode("utf-8")
    response.encoding = "utf-8"
    return response

class FakeSession:
    """Stands in for requests.Session, returning canned responses."""

    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []

    def get(self, url, timeout=None):
        self.calls.append((url, timeout))
        if self.error:
            raise self.error
        return self.response

def catalog_body(title="Never Gonna Give You Up", duration="PT3M33S"):
    return {"items": [{"id": VIDEO_ID, "snippet": {"title": title},
                       "contentDetails": {"duration": duration}}]}

# Link parsing

@pytest.mark.parametrize("url", [
    "https://youtu.be/dQw4w9WgXcQ",
    "youtu.be/dQw4w9WgXcQ?t=30",
    "https://www.youtube.com/watch?v=dQw4w9WgXcQ",
    "https://www.youtube.com/watch?feature=share&v=dQw4w9WgXcQ&t=42",
    "http://youtube.com/embed/dQw4w9WgXcQ",
    "https://m.youtube.com/shorts/dQw4w9WgXcQ?si=abc",
    "https://music.youtube.com/watch?v=dQw4w9WgXcQ&list=RD",
    "  https://youtu.be/dQw4w9WgXcQ  ",
])
def test_extract_video_id(url):
    """Every accepted link shape yields the embedded id."""
    assert extract_video_id(url) == VIDEO_ID

def test_extract_keeps_id_characters():
    assert extract_video_id("https://youtu.be/a-_0Z9zAbC1") == "a-_0Z9zAbC1"

@pytest.mark.parametrize("url", [
    "",
    "not a link",
    "https://youtu.be/dQw4w9WgXc",
    "https://youtu.be/dQw4w9WgXcQQ",
    "https://www.youtube.com/watch?v=dQw4w9WgX!Q",
    "https://www.youtube.com/watch?xv=dQw4w9WgXcQ",
    "https://vimeo.com/dQw4w9WgXcQ",
    "https://example.com/?u=https://youtu.be/dQw4w9WgXcQ",
])
def test_extract_rejects_other_links(url):
    """Anything else fails with the original string attached."""
    with pytest.raises(InvalidSourceError) as excinfo:
        extract_video_id(url)
    assert excinfo.value.source == url

# Duration decoding

@pytest.mark.parametrize("period, seconds", [
    ("PT1H2M3S", 3723),
    ("PT5M", 300),
    ("PT45S", 45),
    ("PT10H", 36000),
    ("PT1H30S", 3630),
    ("P0D", 0),
    ("", 0),
    ("garbage", 0),
    ("PTHMS", 0),
    ("PT5M3", 300),
])
def test_parse_duration(period, seconds):
    assert parse_duration(period) == seconds

def test_parse_duration_warns_on_missing_digits(caplog):
    with caplog.at_level(logging.WARNING, logger="dono.youtube"):
        assert parse_duration("PTHMS") == 0
    assert any(r.levelno == logging.WARNING and "PTHMS" in r.getMessage() for r in caplog.records)

def test_parse_duration_well_formed_is_quiet(caplog):
    with caplog.at_level(logging.WARNING, logger="dono.youtube"):
        assert parse_duration("PT1H2M3S") == 3723
    assert caplog.records == []

def test_parse_duration_never_raises_on_junk():
    for junk in ["P", "T", "PT-1M", "PT1.5S", "H", "1H2", "PT²M"]:
        assert parse_duration(junk) >= 0

# Percent-encoding

def test_encode_reserved_bytes():
    assert encode("snippet,contentDetails") == "snippet%2CcontentDetails"
    assert encode("items(id)") == "items%28id%29"
    assert encode("a b/c") == "a%20b%2Fc"

def test_encode_utf8_bytes_uppercase_hex():
    assert encode("é") == "%C3%A9"
    assert encode("☃") == "%E2%98%83"

def test_encode_safe_string_is_unchanged():
    safe = "AZaz09-_.~"
    assert encode(safe) == safe
    assert encode(encode(safe)) == safe

# Metadata lookup

def test_build_query_encodes_every_parameter():
    client = YouTubeClient("se cret", session=FakeSession())
    assert client.build_query(VIDEO_ID) == (
        "id=dQw4w9WgXcQ"
        "&part=snippet%2CcontentDetails"
        "&fields=items%28id%2Csnippet%28title%29%2CcontentDetails%28duration%29%29"
        "&key=se%20cret"
    )

def test_fetch_returns_title_and_decoded_duration():
    session = FakeSession(make_response(body=catalog_body()))
    client = YouTubeClient("key", base_url="https://catalog.test/v3/", timeout=5, session=session)

    info = client.fetch(VIDEO_ID)

    assert info == VideoInfo(title="Never Gonna Give You Up", duration=213)
    url, timeout = session.calls[0]
    assert url.startswith("https://catalog.test/v3/videos/?id=dQw4w9WgXcQ&")
    assert timeout == 5

def test_fetch_uses_first_item_only():
    body = catalog_body()
    body["items"].append({"snippet": {"title": "second"}, "contentDetails": {"duration": "PT1S"}})
    client = YouTubeClient("key", session=FakeSession(make_response(body=body)))
    assert client.fetch(VIDEO_ID).title == "Never Gonna Give You Up"

def test_fetch_non_2xx_is_remote_status_error():
    session = FakeSession(make_response(404, "Not Found", b"<html>nope</html>"))
    with pytest.raises(RemoteStatusError) as excinfo:
        YouTubeClient("key", session=session).fetch(VIDEO_ID)
    assert excinfo.value.status == 404
    assert excinfo.value.reason == "Not Found"

def test_fetch_empty_items_is_empty_catalog_error():
    session = FakeSession(make_response(body={"items": []}))
    with pytest.raises(EmptyCatalogError) as excinfo:
        YouTubeClient("key", session=session).fetch(VIDEO_ID)
    assert excinfo.value.video_id == VIDEO_ID

@pytest.mark.parametrize("body", [
    b"not json",
    {},
    {"items": "nope"},
    [1, 2, 3],
    {"items": [{"snippet": {"title": "x"}}]},
    {"items": [{"snippet": {}, "contentDetails": {"duration": "PT1S"}}]},
    {"items": [{"snippet": {"title": 7}, "contentDetails": {"duration": "PT1S"}}]},
    {"items": [{"snippet": {"title": ""}, "contentDetails": {"duration": "PT1S"}}]},
    {"items": [{"snippet": {"title": "   "}, "contentDetails": {"duration": "PT1S"}}]},
])
def test_fetch_bad_shape_is_deserialization_error(body):
    session = FakeSession(make_response(body=body))
    with pytest.raises(DeserializationError):
        YouTubeClient("key", session=session).fetch(VIDEO_ID)

def test_fetch_network_failure_is_transport_error():
    session = FakeSession(error=requests.ConnectionError("connection refused"))
    with pytest.raises(TransportError):
        YouTubeClient("key", session=session).fetch(VIDEO_ID)
    assert len(session.calls) == 1

def main():
    """Run the tests through pytest."""
    return pytest.main([__file__, "-v"])

if __name__ == "__main__":
    sys.exit(main())
