"""
Structured CV extraction: prompt the model for one module, turn its answer
into JSON, then run the completeness check on the result.
"""
import json
import logging
import uuid
from typing import Any

from ..config.settings import get_settings
from ..schemas import CVModule, CompletenessCheck, ExtractionResult, LIST_MODULES
from .cv_prompts import build_extraction_prompt
from .cv_validation import validate_module
from .llm_service import LLMGateway

logger = logging.getLogger(__name__)

PARSE_ERROR_MESSAGE = (
    "Failed to parse AI response as JSON. The AI may have returned invalid JSON format. Please try again."
)


class CVExtractionError(Exception):
    """The model answered, but not with usable JSON."""


def strip_code_fence(text: str) -> str:
    """
    Removes a Markdown fence around a model answer.

    Only the opening marker line (```` ``` ```` or ```` ```json ````) and a
    closing ```` ``` ```` line are dropped; anything else is left alone.
    """
    text = text.strip()
    if not text.startswith("```"):
        return text
    lines = text.split("\n")[1:]
    if lines and lines[-1].strip() == "```":
        lines.pop()
    return "\n".join(lines).strip()


def parse_model_json(module: CVModule, content: str) -> Any:
    try:
        data = json.loads(strip_code_fence(content))
    except json.JSONDecodeError as e:
        raise CVExtractionError(PARSE_ERROR_MESSAGE) from e

    # List modules sometimes come back as the bare entries
    if module in LIST_MODULES and isinstance(data, list):
        logger.info("Wrapping bare array answer for %s in 'items'", module.value)
        data = {"items": data}
    return data


def extract_cv_module(
    gateway: LLMGateway,
    module: CVModule,
    raw_text: str,
    language: str = "en",
) -> ExtractionResult:
    request_id = uuid.uuid4().hex[:12]
    logger.info(
        "[%s] Extracting %s (language=%s, text length=%d)",
        request_id, module.value, language, len(raw_text),
    )

    system_prompt, user_prompt = build_extraction_prompt(module, raw_text, language)
    settings = get_settings()
    if settings.is_development():
        logger.debug(
            "[%s] Prompt lengths: system=%d, user=%d", request_id, len(system_prompt), len(user_prompt)
        )

    result = gateway.complete(system_prompt, user_prompt, settings.llm_extraction_temperature)
    logger.info("[%s] Model answered: %d characters, %d tokens", request_id, len(result.content), result.tokens_used)

    try:
        data = parse_model_json(module, result.content)
    except CVExtractionError:
        logger.error("[%s] Could not parse model answer: %.500s", request_id, result.content)
        raise

    completeness = validate_module(module, data, language)
    logger.info(
        "[%s] Validation complete: complete=%s, missing=%d",
        request_id, completeness.is_complete, len(completeness.missing_fields),
    )
    return ExtractionResult(data=data, completeness=completeness, tokens_used=result.tokens_used)


def check_module_completeness(module: CVModule, data: Any, language: str = "en") -> CompletenessCheck:
    """Runs only the completeness check; no model call is made."""
    return validate_module(module, data, language)
