"""Token retention: delete tokens that expired more than TOKEN_RETENTION_HOURS ago."""

import logging
from datetime import timedelta
from typing import TYPE_CHECKING

from sqlalchemy.orm import Session

from book_network.models.base import utcnow
from book_network.repositories import TokenRepository

if TYPE_CHECKING:
    from book_network.core.config import Settings

logger = logging.getLogger(__name__)


def run_token_retention(session: Session, settings: "Settings") -> int:
    """
    Delete long-expired tokens and return how many were removed.

    Idempotent: safe to run repeatedly.
    """
    if not settings.TOKEN_RETENTION_ENABLED:
        logger.info("Token retention is disabled (TOKEN_RETENTION_ENABLED=false); skipping.")
        return 0

    cutoff = utcnow() - timedelta(hours=settings.TOKEN_RETENTION_HOURS)
    deleted_count = TokenRepository(session).delete_expired_before(cutoff)
    session.commit()

    if deleted_count > 0:
        logger.info(
            "Token retention run: cutoff=%s, tokens_deleted=%s",
            cutoff.isoformat(),
            deleted_count,
        )
    return deleted_count
