"""Database base configuration."""

import threading
from typing import Iterator
from contextlib import contextmanager

from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker, Session
from sqlalchemy.pool import StaticPool

Base = declarative_base()

def _is_memory_url(database_url: str) -> bool:
    return database_url in ("sqlite://", "sqlite:///:memory:")

class Store:
    """Owns the database engine; every session is opened under one lock."""
    
    def __init__(self, database_url: str, echo: bool = False):
        if _is_memory_url(database_url):
            # A single shared connection, otherwise each session sees its own empty database
            self.engine = create_engine(
                database_url, echo=echo,
                connect_args={"check_same_thread": False}, poolclass=StaticPool,
            )
        else:
            self.engine = create_engine(database_url, echo=echo)
        self._session_factory = sessionmaker(autoflush=False, bind=self.engine)
        self._lock = threading.RLock()
    
    @contextmanager
    def session(self) -> Iterator[Session]:
        """Get a database session, holding the store lock until it is closed."""
        with self._lock:
            session = self._session_factory()
            try:
                yield session
                session.commit()
            except Exception:
                session.rollback()
                raise
            finally:
                session.close()
    
    def init_db(self):
        """Create tables that don't exist yet."""
        Base.metadata.create_all(bind=self.engine)
    
    def dispose(self):
        self.engine.dispose()
