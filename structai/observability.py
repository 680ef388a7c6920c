"""
Request context and log sanitizing for AI calls.

Correlation ids travel as an explicit RequestContext value passed by the
caller; nothing here holds per-request process state.
"""

import re
import uuid
from dataclasses import dataclass, field

MAX_LOG_LENGTH = 500

# Matches "api_key=...", "secret: ...", "token=..." style fragments
_KEY_LIKE = re.compile(r"(?i)(api[-_ ]?key|secret|token)\s*[:=]\s*[^\s\"']+")


def new_correlation_id() -> str:
    """Generate a fresh correlation id."""
    return uuid.uuid4().hex


@dataclass(frozen=True)
class RequestContext:
    """Per-request values threaded through an orchestrator call."""

    correlation_id: str = field(default_factory=new_correlation_id)

    def tag(self, message: str) -> str:
        """Prefix a log message with the correlation id."""
        return f"[{self.correlation_id}] {message}"


def sanitize(text: str | None, max_length: int = MAX_LOG_LENGTH) -> str | None:
    """Truncate text and redact key-like fragments before logging it."""
    if text is None:
        return None

    trimmed = text.strip()
    if len(trimmed) > max_length:
        trimmed = trimmed[:max_length] + "..."

    return _KEY_LIKE.sub("[REDACTED]", trimmed)
