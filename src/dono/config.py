"""Configuration management for Dono."""

import logging
import os
from pathlib import Path
from dotenv import load_dotenv

from .errors import ConfigurationError

logger = logging.getLogger(__name__)

load_dotenv()

class Config:
    """Application configuration."""
    
    # Base paths
    BASE_DIR = Path(__file__).resolve().parent.parent.parent
    DATA_DIR = BASE_DIR / "data"
    LOG_DIR = BASE_DIR / "logs"
    
    # Database
    DATABASE_URL = os.getenv("DATABASE_URL", f"sqlite:///{DATA_DIR}/dono.db")
    
    # Flask settings
    FLASK_HOST = os.getenv("FLASK_HOST", "localhost")
    FLASK_PORT = int(os.getenv("FLASK_PORT", "50006"))
    DEBUG = os.getenv("DEBUG", "False").lower() == "true"
    
    # YouTube settings
    YOUTUBE_API_KEY_VAR = "YOUTUBE_API_KEY"
    YOUTUBE_API_KEY = os.getenv(YOUTUBE_API_KEY_VAR, "")
    YOUTUBE_API_BASE = os.getenv("YOUTUBE_API_BASE", "https://www.googleapis.com/youtube/v3")
    # Seconds to wait on the catalog; 0 disables the timeout. Failed fetches are never retried.
    DEFAULT_YOUTUBE_TIMEOUT = 10.0
    YOUTUBE_TIMEOUT = os.getenv("YOUTUBE_TIMEOUT", "")
    
    # Logging
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    LOG_FILE = LOG_DIR / "dono.log"
    
    @classmethod
    def ensure_directories(cls):
        """Create necessary directories if they don't exist."""
        cls.DATA_DIR.mkdir(parents=True, exist_ok=True)
        cls.LOG_DIR.mkdir(parents=True, exist_ok=True)
    
    @classmethod
    def require_api_key(cls) -> str:
        """Return the YouTube API key, failing if it was not configured."""
        if not cls.YOUTUBE_API_KEY:
            raise ConfigurationError(f"environment var `{cls.YOUTUBE_API_KEY_VAR}` must be set")
        return cls.YOUTUBE_API_KEY
    
    @classmethod
    def fetch_timeout(cls):
        """Timeout handed to requests, None when disabled."""
        raw = str(cls.YOUTUBE_TIMEOUT).strip()
        if not raw:
            return cls.DEFAULT_YOUTUBE_TIMEOUT
        try:
            timeout = float(raw)
        except ValueError:
            logger.warning(f"Invalid YOUTUBE_TIMEOUT {raw!r}, using {cls.DEFAULT_YOUTUBE_TIMEOUT}s")
            return cls.DEFAULT_YOUTUBE_TIMEOUT
        if timeout < 0:
            logger.warning(f"Negative YOUTUBE_TIMEOUT {raw!r}, using {cls.DEFAULT_YOUTUBE_TIMEOUT}s")
            return cls.DEFAULT_YOUTUBE_TIMEOUT
        return timeout or None

config = Config()
