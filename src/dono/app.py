"""Application entry point: wires the history logs into the web server."""

import logging
import sys

from .config import config
from .errors import ConfigurationError
from .history import History
from .models import Store
from .storage import LocalLog, YoutubeLog
from .web import create_app, socketio
from .youtube import VIDEO_URL_PATTERN, YouTubeClient

logger = logging.getLogger(__name__)

def setup_logging():
    """Setup logging configuration."""
    config.ensure_directories()

    logging.basicConfig(
        level=getattr(logging, config.LOG_LEVEL.upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.FileHandler(config.LOG_FILE),
            logging.StreamHandler(sys.stdout)
        ]
    )

def build_history(store: Store, api_key: str) -> History:
    """Create the per-kind logs sharing one store."""
    client = YouTubeClient(
        api_key,
        base_url=config.YOUTUBE_API_BASE,
        timeout=config.fetch_timeout(),
    )
    return History(
        YoutubeLog(store, client, VIDEO_URL_PATTERN),
        LocalLog(store),
    )

def main():
    """Main entry point."""
    setup_logging()
    logger.info("Starting Dono")

    try:
        api_key = config.require_api_key()
    except ConfigurationError as e:
        logger.error(str(e))
        sys.exit(1)

    store = Store(config.DATABASE_URL, echo=config.DEBUG)
    try:
        store.init_db()
    except Exception as e:
        logger.error(f"Cannot create tables: {e}")
        sys.exit(1)

    app = create_app(build_history(store, api_key))

    logger.info(f"Starting web server on {config.FLASK_HOST}:{config.FLASK_PORT}")
    try:
        socketio.run(
            app,
            host=config.FLASK_HOST,
            port=config.FLASK_PORT,
            debug=config.DEBUG,
            use_reloader=False,
            allow_unsafe_werkzeug=True
        )
    except KeyboardInterrupt:
        logger.info("Dono stopped by user")
    finally:
        store.dispose()

if __name__ == "__main__":
    main()
