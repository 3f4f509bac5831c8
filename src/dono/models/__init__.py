"""Database models for Dono."""

from .base import Base, Store
from .youtube_video import YoutubeVideo
from .local_song import LocalSong

__all__ = ["Base", "Store", "YoutubeVideo", "LocalSong"]
