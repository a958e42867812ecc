"""
CLI entrypoint for the token retention job. Run from cron, e.g.:

  python -m book_network.retention

Or hourly: 0 * * * * cd /path/to/book-network && .venv/bin/python -m book_network.retention
"""

import logging
import sys

from book_network.core.config import get_settings
from book_network.core.database import SessionLocal
from book_network.core.logging import configure_logging
from book_network.services.retention import run_token_retention

logger = logging.getLogger(__name__)


def main() -> int:
    """Run retention: delete tokens expired for longer than TOKEN_RETENTION_HOURS."""
    settings = get_settings()
    configure_logging(settings.LOG_LEVEL)
    db = SessionLocal()
    try:
        tokens_deleted = run_token_retention(db, settings)
        logger.info("Token retention completed: tokens_deleted=%s", tokens_deleted)
        return 0
    except Exception as e:
        logger.exception("Token retention job failed: %s", e)
        return 1
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
