"""
Gateway to the hosted chat model (Google Gemini).

Every call is a single attempt: no retries, no backoff. Provider failures are
re-labeled into messages that can be shown to the user as-is.
"""
import logging
from dataclasses import dataclass
from typing import Optional

import google.generativeai as genai
from google.api_core import exceptions as google_exceptions

from ..config.settings import get_settings

logger = logging.getLogger(__name__)


class LLMError(Exception):
    """Base class for gateway failures."""


class LLMConfigurationError(LLMError):
    """The API key is missing. Not retryable."""


class LLMEmptyResponseError(LLMError):
    """The provider answered without any text."""


class LLMServiceError(LLMError):
    """Transport, authentication or rate-limit failure reported by the provider."""


@dataclass
class LLMResult:
    content: str
    tokens_used: int


class LLMGateway:
    """Builds role-tagged requests (system instruction + user message) for one model."""

    def __init__(self, api_key: Optional[str], model_name: str):
        self.api_key = api_key
        self.model_name = model_name
        self._configured = False

    def _ensure_configured(self) -> None:
        if not self.api_key:
            raise LLMConfigurationError(
                "LLM API is not configured. Please set GOOGLE_API_KEY in environment variables."
            )
        if not self._configured:
            genai.configure(api_key=self.api_key)
            self._configured = True

    def complete(self, system_prompt: str, user_prompt: str, temperature: float) -> LLMResult:
        self._ensure_configured()

        model = genai.GenerativeModel(
            model_name=self.model_name,
            system_instruction=system_prompt,
        )
        logger.info(
            "Calling %s (temperature=%.1f, prompt length=%d)",
            self.model_name, temperature, len(user_prompt),
        )

        try:
            response = model.generate_content(
                user_prompt,
                generation_config=genai.GenerationConfig(temperature=temperature),
                request_options={"retry": None},
            )
        except (google_exceptions.Unauthenticated, google_exceptions.PermissionDenied) as e:
            logger.error("LLM authentication failed: %s", e)
            raise LLMServiceError(
                "API Key is invalid or unauthorized. Please check your GOOGLE_API_KEY."
            ) from e
        except google_exceptions.ResourceExhausted as e:
            logger.error("LLM rate limit exceeded: %s", e)
            raise LLMServiceError("API rate limit exceeded. Please try again later.") from e
        except (google_exceptions.ServiceUnavailable, google_exceptions.DeadlineExceeded) as e:
            logger.error("LLM network error: %s", e)
            raise LLMServiceError("Network error. Please check your internet connection.") from e
        except google_exceptions.GoogleAPIError as e:
            logger.error("LLM API error: %s", e)
            raise LLMServiceError(f"LLM API error: {e}") from e

        try:
            content = response.text
        except ValueError:
            # Raised when the candidate was blocked or carries no text parts
            content = ""
        if not content or not content.strip():
            logger.error("No content in LLM response")
            raise LLMEmptyResponseError("No response from LLM API")

        usage = getattr(response, "usage_metadata", None)
        tokens_used = int(getattr(usage, "total_token_count", 0) or 0)
        logger.info("LLM response received: %d characters, %d tokens", len(content), tokens_used)

        return LLMResult(content=content.strip(), tokens_used=tokens_used)


def get_llm_gateway() -> LLMGateway:
    settings = get_settings()
    return LLMGateway(api_key=settings.google_api_key, model_name=settings.llm_model)
