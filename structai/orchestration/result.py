"""Call options and result wrapper for orchestrated AI calls."""

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class CallOptions:
    """Model settings for one AI call, always supplied by the caller."""

    model: str
    max_tokens: int
    temperature: float


@dataclass(frozen=True)
class AIResult(Generic[T]):
    """Parsed and validated output of an AI call.

    ``raw_text`` is the first provider response's text, even when the value
    came from the repair round; token counts and stop reason describe the
    response that produced ``value``.
    """

    value: T
    raw_text: str
    input_tokens: int
    output_tokens: int
    stop_reason: str | None
    repaired: bool = False

    @property
    def total_tokens(self) -> int:
        return self.input_tokens + self.output_tokens
