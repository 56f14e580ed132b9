"""
Shared helpers: logging setup and slug generation.
"""
import logging
import re
import unicodedata

from app.core import config


_configured = False


def get_logger(name: str) -> logging.Logger:
    """
    Return a module logger, configuring the root handler on first use.

    Usage:
        from app.utils import get_logger

        log = get_logger(__name__)
        log.info("Something happened")
    """
    global _configured
    if not _configured:
        logging.basicConfig(
            level=config.LOG_LEVEL,
            format="%(asctime)s %(levelname)s %(name)s %(message)s",
        )
        _configured = True
    return logging.getLogger(name)


def create_slug(text: str) -> str:
    """Turn an organization name into a URL-safe slug ("Acme Inc." -> "acme-inc")."""
    normalized = unicodedata.normalize("NFKD", text)
    ascii_text = normalized.encode("ascii", "ignore").decode("ascii")
    slug = re.sub(r"[^a-z0-9]+", "-", ascii_text.lower())
    return slug.strip("-")
