"""
Model invocation boundary.

Text prompts run through a LangChain chain on Ollama; prompts carrying a
screenshot go straight to the Ollama chat API with the image attached.
Every answer is validated against the prompt's output schema before it
reaches the caller.
"""
import logging
import re
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import ollama
from langchain_community.llms import Ollama
from pydantic import BaseModel, ValidationError

from ..config import settings
from ..utils.exceptions import GenerationError, ModelOutputError
from ..utils.helpers import extract_json_object, truncate_text
from .prompts import PromptInput, PromptSpec
from .retry import Action, Attempt, Outcome, next_action

logger = logging.getLogger(__name__)

_DATA_URI_RE = re.compile(r"^data:(?P<mime>[\w/+.-]+);base64,(?P<data>.+)$", re.DOTALL)

_ROLE_MAP = {"system": "system", "human": "user", "ai": "assistant"}


@dataclass(frozen=True)
class ValidationOutcome:
    """Either a validated output record or the reason validation failed."""

    value: Optional[BaseModel] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def validate_output(spec: PromptSpec, raw: str) -> ValidationOutcome:
    """
    Check a raw model answer against the prompt's output schema.

    Args:
        spec: Prompt that produced the answer
        raw: Model response text

    Returns:
        ValidationOutcome holding the typed record or an error message
    """
    try:
        data = spec.parse_text(raw) if spec.parse_text else extract_json_object(raw)
        return ValidationOutcome(value=spec.output_model.model_validate(data))
    except (ValueError, ValidationError) as e:
        return ValidationOutcome(error=str(e))


def image_from_data_uri(data_uri: str) -> str:
    """Return the base64 payload of a ``data:<mime>;base64,...`` URI."""
    match = _DATA_URI_RE.match(data_uri or "")
    if not match:
        raise ValueError("Image must be a base64 data URI")
    return match.group("data")


class ModelInvoker:
    """
    Runs named prompts against the configured Ollama models.
    """

    def __init__(self, host: Optional[str] = None):
        self.host = host or settings.OLLAMA_HOST
        self.text_model = settings.OLLAMA_TEXT_MODEL
        self.vision_model = settings.OLLAMA_VISION_MODEL

    async def complete(self, spec: PromptSpec, payload: PromptInput) -> str:
        """Send the prompt and return the raw response text."""
        variables = payload.prompt_variables()
        if spec.image_field:
            image = image_from_data_uri(getattr(payload, spec.image_field))
            return await self._complete_vision(spec, variables, image)

        llm = Ollama(model=self.text_model, base_url=self.host, temperature=spec.temperature)
        chain = spec.template | llm
        response = await chain.ainvoke(variables)
        return getattr(response, "content", response)

    async def _complete_vision(self, spec: PromptSpec, variables: Dict[str, Any], image: str) -> str:
        messages: List[Dict[str, Any]] = [
            {"role": _ROLE_MAP.get(m.type, "user"), "content": m.content}
            for m in spec.template.format_messages(**variables)
        ]
        messages[-1]["images"] = [image]

        client = ollama.AsyncClient(host=self.host)
        response = await client.chat(
            model=self.vision_model,
            messages=messages,
            options={"temperature": spec.temperature},
        )
        return response["message"]["content"]

    async def invoke(self, spec: PromptSpec, payload: PromptInput) -> BaseModel:
        """
        Run one prompt and validate its answer.

        Raises:
            ModelOutputError: If the call fails or the answer does not match
                the output schema
        """
        if not isinstance(payload, spec.input_model):
            raise ModelOutputError(spec.name, f"expected {spec.input_model.__name__} input")

        logger.debug(f"Invoking {spec.name}")
        try:
            raw = await self.complete(spec, payload)
        except Exception as e:
            raise ModelOutputError(spec.name, f"model call failed: {e}") from e

        outcome = validate_output(spec, raw)
        if not outcome.ok:
            logger.debug(f"{spec.name} raw response: {truncate_text(raw, 500)}")
            raise ModelOutputError(spec.name, f"invalid output: {outcome.error}")
        return outcome.value

    async def invoke_with_fallback(
        self,
        primary: PromptSpec,
        payload: PromptInput,
        fallback: Optional[PromptSpec] = None,
    ) -> BaseModel:
        """
        Run a primary prompt, then at most one fallback prompt.

        Raises:
            GenerationError: If every permitted attempt failed
        """
        errors = []
        attempts = [(Attempt.PRIMARY, primary)]
        if fallback:
            attempts.append((Attempt.FALLBACK, fallback))

        for attempt, spec in attempts:
            result = None
            try:
                result = await self.invoke(spec, payload)
                outcome = Outcome.OK
            except ModelOutputError as e:
                logger.warning(f"{attempt.value} attempt failed: {e}")
                errors.append(str(e))
                outcome = Outcome.FAILED

            action = next_action(attempt, outcome, has_fallback=fallback is not None)
            if action is Action.RETURN:
                return result
            if action is Action.GIVE_UP:
                break

        raise GenerationError("; ".join(errors))
