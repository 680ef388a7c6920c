"""Provider client factory and shared exports."""

from .base import (
    ContentBlock,
    Message,
    ProviderClient,
    ProviderRequest,
    ProviderResponse,
    Usage,
)

DEFAULT_MODEL = "claude-sonnet-4-20250514"


def create_client(
    api_key: str,
    base_url: str | None = None,
    timeout_seconds: float = 60.0,
) -> ProviderClient:
    """Create the Anthropic provider client."""
    from .anthropic import AnthropicClient

    return AnthropicClient(
        api_key=api_key,
        base_url=base_url,
        timeout_seconds=timeout_seconds,
    )


__all__ = [
    "ContentBlock",
    "DEFAULT_MODEL",
    "Message",
    "ProviderClient",
    "ProviderRequest",
    "ProviderResponse",
    "Usage",
    "create_client",
]
