"""Provider wire types and client interface."""

from dataclasses import dataclass, field
from typing import Protocol


@dataclass(frozen=True)
class ContentBlock:
    """One typed unit of message content."""

    type: str
    text: str | None = None


@dataclass(frozen=True)
class Message:
    """A role-tagged chat message."""

    role: str
    content: list[ContentBlock] = field(default_factory=list)


@dataclass(frozen=True)
class ProviderRequest:
    """Chat-style request sent to the provider."""

    model: str
    max_tokens: int
    temperature: float
    system: str
    messages: list[Message] = field(default_factory=list)


@dataclass(frozen=True)
class Usage:
    """Token accounting reported by the provider."""

    input_tokens: int = 0
    output_tokens: int = 0


@dataclass(frozen=True)
class ProviderResponse:
    """Provider-agnostic response from a chat call."""

    content: list[ContentBlock] = field(default_factory=list)
    stop_reason: str | None = None
    usage: Usage = field(default_factory=Usage)


class ProviderClient(Protocol):
    """Protocol that provider clients must implement.

    Implementations raise ``AIError`` with ``PROVIDER_ERROR``, ``TIMEOUT`` or
    ``RATE_LIMITED`` on transport failure.
    """

    def send(self, request: ProviderRequest) -> ProviderResponse:
        """Send one request and return the normalized response."""
        ...
