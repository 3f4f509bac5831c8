"""Local song play log model."""

from sqlalchemy import Column, Integer, Text
from .base import Base

class LocalSong(Base):
    """One play of a local audio file."""
    
    __tablename__ = "local_songs"
    
    id = Column(Integer, primary_key=True, autoincrement=True)
    path = Column(Text, nullable=False)
    ts = Column(Integer, nullable=False, index=True)
    duration = Column(Integer, nullable=False, default=0)
    title = Column(Text, nullable=False)
    artist = Column(Text, nullable=False, default="")  # empty when untagged
    album = Column(Text, nullable=False, default="")
    
    def __repr__(self):
        return f"<LocalSong(title='{self.title}', ts={self.ts})>"
