"""
Central orchestration for structured AI calls.

One call runs RENDER -> CALL_PROVIDER -> EXTRACT_TEXT -> EXTRACT_JSON ->
DESERIALIZE -> VALIDATE. A BAD_OUTPUT failure in any step after the provider
call triggers a single repair round using the format repair prompt. Provider
faults (PROVIDER_ERROR, TIMEOUT, RATE_LIMITED) are never retried here.
"""

import time
from collections.abc import Mapping
from functools import lru_cache
from typing import Any, TypeVar

from pydantic import TypeAdapter, ValidationError

from structai.errors import AIError, ErrorKind
from structai.llm.base import (
    ContentBlock,
    Message,
    ProviderClient,
    ProviderRequest,
    ProviderResponse,
)
from structai.logging_config import get_logger
from structai.observability import RequestContext, sanitize
from structai.prompting import REPAIR_PROMPT, REPAIR_VARIABLE, PromptId, render
from structai.prompting.templates import FileTemplateSource, TemplateSource

from .extract import extract_json_object, extract_text
from .result import AIResult, CallOptions
from .validation import OutputValidator, ValidatorRegistry

logger = get_logger("orchestrator")

T = TypeVar("T")


@lru_cache(maxsize=128)
def _adapter_for(target_type: Any) -> TypeAdapter:
    return TypeAdapter(target_type)


class AIOrchestrator:
    """Renders prompts, calls the provider, and returns validated JSON output.

    Holds no per-call state, so one instance can serve concurrent callers as
    long as its client and template source can.
    """

    def __init__(
        self,
        client: ProviderClient,
        templates: TemplateSource | None = None,
        validators: ValidatorRegistry | None = None,
    ):
        self.client = client
        self.templates = FileTemplateSource() if templates is None else templates
        self.validators = ValidatorRegistry() if validators is None else validators

    def call_for_json(
        self,
        prompt_id: PromptId,
        variables: Mapping[str, str] | None,
        target_type: type[T],
        options: CallOptions,
        validator: OutputValidator[T] | None = None,
        context: RequestContext | None = None,
    ) -> AIResult[T]:
        """
        Run a prompt and parse the model's answer into ``target_type``.

        Args:
            prompt_id: Prompt pair to render
            variables: Values for ``{{name}}`` placeholders
            target_type: Type the JSON answer is parsed into
            options: Model, max tokens and temperature for the call
            validator: Validator for the parsed value; defaults to the
                registry entry for ``target_type``
            context: Request context carrying the correlation id

        Returns:
            AIResult whose ``raw_text`` is the first response's text

        Raises:
            AIError: Provider faults immediately; BAD_OUTPUT after a failed
                repair round
        """
        if context is None:
            context = RequestContext()
        if validator is None:
            validator = self.validators.get(target_type)

        system, user = self._render(prompt_id, variables, context)
        response = self._send(system, user, options, context)
        raw_text = extract_text(response)

        try:
            value = self._parse(raw_text, target_type, validator, context)
        except AIError as exc:
            if not exc.kind.repairable:
                raise
            logger.warning(context.tag(f"Bad output from {prompt_id.name}, attempting repair: {exc}"))
            return self._repair(raw_text, exc, target_type, validator, options, context)

        logger.info(
            context.tag(
                f"{prompt_id.name} succeeded ({response.usage.input_tokens} in / "
                f"{response.usage.output_tokens} out tokens)"
            )
        )
        return AIResult(
            value=value,
            raw_text=raw_text,
            input_tokens=response.usage.input_tokens,
            output_tokens=response.usage.output_tokens,
            stop_reason=response.stop_reason,
        )

    def _repair(
        self,
        raw_text: str,
        failure: AIError,
        target_type: type[T],
        validator: OutputValidator[T],
        options: CallOptions,
        context: RequestContext,
    ) -> AIResult[T]:
        """Run the single repair round seeded with the first raw output."""
        system, user = self._render(REPAIR_PROMPT, {REPAIR_VARIABLE: raw_text or ""}, context)

        try:
            response = self._send(system, user, options, context)
        except AIError as exc:
            exc.repair_attempted = True
            if exc.raw_text is None:
                exc.raw_text = raw_text
            raise

        repaired_text = extract_text(response)
        try:
            value = self._parse(repaired_text, target_type, validator, context)
        except AIError as exc:
            logger.error(
                context.tag(f"Repair failed: {exc}. Raw response: {sanitize(raw_text)}")
            )
            raise AIError(
                ErrorKind.BAD_OUTPUT,
                f"AI output invalid after repair attempt: {failure.message} "
                f"(repair: {exc.message})",
                raw_text=raw_text,
                repair_attempted=True,
                original_error=failure,
            ) from exc

        logger.info(context.tag("Repair round produced valid output"))
        return AIResult(
            value=value,
            raw_text=raw_text,
            input_tokens=response.usage.input_tokens,
            output_tokens=response.usage.output_tokens,
            stop_reason=response.stop_reason,
            repaired=True,
        )

    def _render(
        self,
        prompt_id: PromptId,
        variables: Mapping[str, str] | None,
        context: RequestContext,
    ) -> tuple[str, str]:
        system_template, user_template = self.templates.resolve(prompt_id)
        logger.debug(context.tag(f"Rendering {prompt_id.name}"))
        return (
            render(system_template, variables) or "",
            render(user_template, variables) or "",
        )

    def _send(
        self,
        system: str,
        user: str,
        options: CallOptions,
        context: RequestContext,
    ) -> ProviderResponse:
        request = ProviderRequest(
            model=options.model,
            max_tokens=options.max_tokens,
            temperature=options.temperature,
            system=system,
            messages=[Message(role="user", content=[ContentBlock(type="text", text=user)])],
        )

        start = time.perf_counter()
        try:
            response = self.client.send(request)
        except AIError as exc:
            logger.error(context.tag(f"Provider call failed ({exc.kind.name}): {exc}"))
            raise
        except Exception as exc:
            logger.error(context.tag(f"Provider call failed: {exc}"))
            raise AIError(ErrorKind.PROVIDER_ERROR, f"Provider call failed: {exc}") from exc

        latency_ms = int((time.perf_counter() - start) * 1000)
        logger.debug(
            context.tag(f"Provider responded in {latency_ms}ms (stop_reason={response.stop_reason})")
        )
        return response

    def _parse(
        self,
        raw_text: str,
        target_type: type[T],
        validator: OutputValidator[T],
        context: RequestContext,
    ) -> T:
        """Extract, deserialize and validate; every failure is BAD_OUTPUT."""
        if not raw_text or not raw_text.strip():
            raise AIError(ErrorKind.BAD_OUTPUT, "AI returned empty response", raw_text=raw_text)

        json_text = extract_json_object(raw_text)
        logger.debug(context.tag(f"Extracted JSON: {sanitize(json_text)}"))

        try:
            value = _adapter_for(target_type).validate_json(json_text)
        except ValidationError as exc:
            raise AIError(
                ErrorKind.BAD_OUTPUT,
                f"AI output could not be parsed as {_type_name(target_type)}: "
                f"{exc.error_count()} error(s), first: {exc.errors()[0]['msg']}",
                raw_text=raw_text,
            ) from exc
        except Exception as exc:
            raise AIError(
                ErrorKind.BAD_OUTPUT,
                f"AI output could not be converted to {_type_name(target_type)}: "
                f"{type(exc).__name__}: {exc}",
                raw_text=raw_text,
            ) from exc

        try:
            validator.validate(value)
        except Exception as exc:
            raise AIError(
                ErrorKind.BAD_OUTPUT,
                f"AI output failed validation: {exc}",
                raw_text=raw_text,
            ) from exc

        return value


def _type_name(target_type: Any) -> str:
    return getattr(target_type, "__name__", None) or str(target_type)
