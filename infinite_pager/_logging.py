import hashlib
import logging
from typing import Any

# Create the library logger
logger = logging.getLogger("infinite_pager")

# Add NullHandler to prevent "No handlers could be found" warnings
# if the application doesn't configure logging.
logger.addHandler(logging.NullHandler())


def redact_cursor(cursor: Any) -> str | None:
    """
    Redacts an opaque cursor token for logging.
    Hashes the token to allow correlation between pages without revealing its content.
    """
    if cursor is None:
        return None
    try:
        if isinstance(cursor, dict):
            # Sort keys so equal cursors always hash the same
            cursor = sorted(cursor.items())
        return hashlib.sha256(str(cursor).encode("utf-8")).hexdigest()[:8]
    except Exception:
        return "<redaction_failed>"
