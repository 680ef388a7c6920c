"""Anthropic implementation of the provider client interface."""

from typing import Any

import anthropic
from anthropic import Anthropic

from structai.errors import AIError, ErrorKind
from structai.logging_config import get_logger

from .base import ContentBlock, ProviderRequest, ProviderResponse, Usage

logger = get_logger("llm.anthropic")


class AnthropicClient:
    """Anthropic Messages API provider.

    SDK retries default to zero: retrying transport faults belongs to a layer
    around this client, never inside the JSON pipeline.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str | None = None,
        timeout_seconds: float = 60.0,
        max_retries: int = 0,
        client: Any | None = None,
    ):
        self.timeout_seconds = timeout_seconds
        self.client = client or Anthropic(
            api_key=api_key,
            base_url=base_url,
            timeout=timeout_seconds,
            max_retries=max_retries,
        )

    def send(self, request: ProviderRequest) -> ProviderResponse:
        """Send a request to Anthropic and normalize the response."""
        try:
            response = self.client.messages.create(**_to_payload(request))
        except anthropic.APITimeoutError as exc:
            raise AIError(
                ErrorKind.TIMEOUT,
                f"Anthropic request timed out after {self.timeout_seconds}s",
            ) from exc
        except anthropic.RateLimitError as exc:
            raise AIError(
                ErrorKind.RATE_LIMITED,
                f"Anthropic rate limit reached: {exc}",
            ) from exc
        except anthropic.APIStatusError as exc:
            raise AIError(
                ErrorKind.PROVIDER_ERROR,
                f"Anthropic returned HTTP {exc.status_code}",
            ) from exc
        except anthropic.APIConnectionError as exc:
            raise AIError(
                ErrorKind.PROVIDER_ERROR,
                f"Anthropic request failed (network): {exc}",
            ) from exc
        except Exception as exc:
            raise AIError(
                ErrorKind.PROVIDER_ERROR,
                f"Anthropic request failed: {exc}",
            ) from exc

        return _from_response(response)


def _to_payload(request: ProviderRequest) -> dict[str, Any]:
    """Build ``messages.create`` keyword arguments from a request."""
    return {
        "model": request.model,
        "max_tokens": request.max_tokens,
        "temperature": request.temperature,
        "system": request.system,
        "messages": [
            {
                "role": message.role,
                "content": [
                    {"type": block.type, "text": block.text or ""}
                    for block in message.content
                ],
            }
            for message in request.messages
        ],
    }


def _from_response(response: Any) -> ProviderResponse:
    """Normalize an SDK response (object or dict) into a ProviderResponse."""
    blocks: list[ContentBlock] = []
    for block in _field(response, "content") or []:
        block_type = _field(block, "type")
        if not isinstance(block_type, str):
            continue
        block_text = _field(block, "text")
        blocks.append(
            ContentBlock(
                type=block_type,
                text=block_text if isinstance(block_text, str) else None,
            )
        )

    usage = _field(response, "usage")
    input_tokens = int(_field(usage, "input_tokens") or 0) if usage else 0
    output_tokens = int(_field(usage, "output_tokens") or 0) if usage else 0

    logger.debug(
        f"Anthropic response: {len(blocks)} blocks, "
        f"{input_tokens} in / {output_tokens} out tokens"
    )

    return ProviderResponse(
        content=blocks,
        stop_reason=_field(response, "stop_reason"),
        usage=Usage(input_tokens=input_tokens, output_tokens=output_tokens),
    )


def _field(obj: Any, name: str) -> Any:
    if isinstance(obj, dict):
        return obj.get(name)
    return getattr(obj, name, None)
