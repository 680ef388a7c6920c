"""Text and JSON extraction from provider responses."""

from structai.errors import AIError, ErrorKind
from structai.llm.base import ProviderResponse

FENCE = "```"


def extract_text(response: ProviderResponse) -> str:
    """Join the text of all text-typed content blocks, in order."""
    if not response.content:
        return ""

    text_parts = [
        block.text
        for block in response.content
        if block.type == "text" and isinstance(block.text, str)
    ]
    return "\n".join(text_parts).strip()


def extract_json_object(raw: str | None) -> str:
    """
    Recover a single JSON object substring from free-form model text.

    Tolerates one wrapping code fence and surrounding prose. Brace balance is
    not checked here; parsing the result is the real correctness check.

    Raises:
        AIError: BAD_OUTPUT when no ``{...}`` span can be located.
    """
    if raw is None:
        raise AIError(ErrorKind.BAD_OUTPUT, "AI returned no text to extract JSON from")

    text = raw.strip()

    if text.startswith(FENCE):
        newline = text.find("\n")
        text = text[newline + 1 :] if newline != -1 else ""
        closing = text.rfind(FENCE)
        if closing != -1:
            text = text[:closing]
        text = text.strip()

    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end == -1 or end <= start:
        raise AIError(
            ErrorKind.BAD_OUTPUT,
            "AI output does not contain a JSON object",
            raw_text=raw,
        )

    return text[start : end + 1].strip()
