"""YouTube play log model."""

from sqlalchemy import Column, Integer, String, Text
from .base import Base

class YoutubeVideo(Base):
    """One play of a YouTube video."""
    
    __tablename__ = "youtube_videos"
    
    id = Column(Integer, primary_key=True, autoincrement=True)
    vid = Column(String(11), nullable=False)
    ts = Column(Integer, nullable=False, index=True)
    duration = Column(Integer, nullable=False)
    title = Column(Text, nullable=False)
    
    def __repr__(self):
        return f"<YoutubeVideo(vid='{self.vid}', ts={self.ts})>"
