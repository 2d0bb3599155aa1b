"""
Test the Gemini gateway with the provider SDK mocked out.
"""
from unittest.mock import MagicMock, patch

import pytest
from google.api_core import exceptions as google_exceptions

from easyjob_app.backend.services import llm_service
from easyjob_app.backend.services.llm_service import (
    LLMConfigurationError,
    LLMEmptyResponseError,
    LLMGateway,
    LLMServiceError,
)


def fake_response(text="Hello", total_tokens=77):
    response = MagicMock()
    response.text = text
    response.usage_metadata.total_token_count = total_tokens
    return response


@pytest.fixture
def mock_genai():
    with patch.object(llm_service, "genai") as genai:
        yield genai


class TestLLMGateway:

    def test_missing_api_key(self, mock_genai):
        gateway = LLMGateway(api_key=None, model_name="gemini-1.5-flash")

        with pytest.raises(LLMConfigurationError, match="GOOGLE_API_KEY"):
            gateway.complete("system", "user", 0.3)
        mock_genai.GenerativeModel.assert_not_called()

    def test_successful_completion(self, mock_genai):
        model = mock_genai.GenerativeModel.return_value
        model.generate_content.return_value = fake_response("  Answer  ", 77)
        gateway = LLMGateway(api_key="key", model_name="gemini-1.5-flash")

        result = gateway.complete("system prompt", "user prompt", 0.7)

        assert result.content == "Answer"
        assert result.tokens_used == 77
        mock_genai.configure.assert_called_once_with(api_key="key")
        mock_genai.GenerativeModel.assert_called_once_with(
            model_name="gemini-1.5-flash", system_instruction="system prompt"
        )
        mock_genai.GenerationConfig.assert_called_once_with(temperature=0.7)
        args, kwargs = model.generate_content.call_args
        assert args == ("user prompt",)
        assert kwargs["request_options"] == {"retry": None}

    def test_sdk_configured_once(self, mock_genai):
        mock_genai.GenerativeModel.return_value.generate_content.return_value = fake_response()
        gateway = LLMGateway(api_key="key", model_name="m")

        gateway.complete("s", "u", 0.3)
        gateway.complete("s", "u", 0.3)

        assert mock_genai.configure.call_count == 1

    def test_missing_usage_counts_as_zero(self, mock_genai):
        response = fake_response()
        response.usage_metadata = None
        mock_genai.GenerativeModel.return_value.generate_content.return_value = response

        result = LLMGateway(api_key="key", model_name="m").complete("s", "u", 0.3)

        assert result.tokens_used == 0

    @pytest.mark.parametrize("text", ["", "   "])
    def test_empty_answer(self, mock_genai, text):
        mock_genai.GenerativeModel.return_value.generate_content.return_value = fake_response(text)

        with pytest.raises(LLMEmptyResponseError, match="No response from LLM API"):
            LLMGateway(api_key="key", model_name="m").complete("s", "u", 0.3)

    @pytest.mark.parametrize("error,message", [
        (google_exceptions.Unauthenticated("bad key"), "API Key is invalid or unauthorized"),
        (google_exceptions.PermissionDenied("denied"), "API Key is invalid or unauthorized"),
        (google_exceptions.ResourceExhausted("quota"), "API rate limit exceeded"),
        (google_exceptions.ServiceUnavailable("down"), "Network error"),
        (google_exceptions.InternalServerError("boom"), "LLM API error"),
    ])
    def test_provider_errors_relabelled(self, mock_genai, error, message):
        mock_genai.GenerativeModel.return_value.generate_content.side_effect = error

        with pytest.raises(LLMServiceError, match=message):
            LLMGateway(api_key="key", model_name="m").complete("s", "u", 0.3)
