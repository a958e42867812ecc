"""Process-wide logging setup shared by the API and the CLI entrypoints."""

import logging

from book_network.core.config import get_settings


def configure_logging(level: str | None = None) -> None:
    """Configure root logging once; later calls are no-ops (logging.basicConfig semantics)."""
    logging.basicConfig(
        level=level or get_settings().LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%SZ",
    )
