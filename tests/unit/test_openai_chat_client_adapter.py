from unittest.mock import MagicMock, patch

import httpx
import openai
import pytest

from labelflow.processing.exceptions import ProcessingNetworkError, ProcessingResponseError
from labelflow.processing.llm.openai_client_adapter import OpenAIChatClientAdapter


def _make_mock_response(
    content: str | None,
    finish_reason: str = "stop",
    refusal: str | None = None,
) -> MagicMock:
    choice = MagicMock()
    choice.message.content = content
    choice.message.refusal = refusal
    choice.finish_reason = finish_reason
    response = MagicMock()
    response.choices = [choice]
    return response


def _call(mock_client: MagicMock, timeout: float | None = None) -> str:
    with patch(
        "labelflow.processing.llm.openai_client_adapter.openai.OpenAI",
        return_value=mock_client,
    ):
        adapter = OpenAIChatClientAdapter(api_key="k", timeout_seconds=30, base_url=None)
        return adapter.create_chat_completion(
            model="m",
            temperature=0.0,
            system_prompt="system",
            user_prompt="user",
            json_schema={"type": "object"},
            timeout=timeout,
        )


def _status_error(status_code: int) -> openai.APIStatusError:
    request = httpx.Request("POST", "https://llm.test/v1/chat/completions")
    return openai.APIStatusError(
        "rejected",
        response=httpx.Response(status_code, request=request),
        body=None,
    )


class TestOpenAIChatClientAdapter:
    def test_returns_content(self) -> None:
        mock_client = MagicMock()
        mock_client.chat.completions.create.return_value = _make_mock_response('{"ok": true}')
        assert _call(mock_client) == '{"ok": true}'

    def test_requests_json_schema_response_format(self) -> None:
        mock_client = MagicMock()
        mock_client.chat.completions.create.return_value = _make_mock_response("{}")
        _call(mock_client)
        kwargs = mock_client.chat.completions.create.call_args.kwargs
        assert kwargs["response_format"]["type"] == "json_schema"
        assert kwargs["response_format"]["json_schema"]["name"] == "label_translation"
        assert kwargs["response_format"]["json_schema"]["schema"] == {"type": "object"}
        assert kwargs["messages"][1] == {"role": "user", "content": "user"}
        assert "timeout" not in kwargs

    def test_forwards_per_call_timeout(self) -> None:
        mock_client = MagicMock()
        mock_client.chat.completions.create.return_value = _make_mock_response("{}")
        _call(mock_client, timeout=2.5)
        assert mock_client.chat.completions.create.call_args.kwargs["timeout"] == 2.5

    def test_raises_error_for_empty_content(self) -> None:
        mock_client = MagicMock()
        mock_client.chat.completions.create.return_value = _make_mock_response(None)
        with pytest.raises(ProcessingResponseError, match="empty response"):
            _call(mock_client)

    def test_raises_error_for_no_choices(self) -> None:
        mock_client = MagicMock()
        mock_client.chat.completions.create.return_value = MagicMock(choices=[])
        with pytest.raises(ProcessingResponseError, match="no choices"):
            _call(mock_client)

    def test_raises_error_for_truncated_output(self) -> None:
        mock_client = MagicMock()
        mock_client.chat.completions.create.return_value = _make_mock_response(
            '{"translated_data": {', finish_reason="length"
        )
        with pytest.raises(ProcessingResponseError, match="truncated"):
            _call(mock_client)

    def test_raises_error_for_refusal(self) -> None:
        mock_client = MagicMock()
        mock_client.chat.completions.create.return_value = _make_mock_response(
            None, refusal="cannot help"
        )
        with pytest.raises(ProcessingResponseError, match="refused the label: cannot help"):
            _call(mock_client)

    def test_raises_network_error_on_connection_failure(self) -> None:
        mock_client = MagicMock()
        mock_client.chat.completions.create.side_effect = openai.APIConnectionError(
            request=MagicMock()
        )
        with pytest.raises(ProcessingNetworkError, match="network error"):
            _call(mock_client)

    def test_raises_network_error_on_timeout(self) -> None:
        mock_client = MagicMock()
        mock_client.chat.completions.create.side_effect = httpx.TimeoutException("timeout")
        with pytest.raises(ProcessingNetworkError, match="timed out"):
            _call(mock_client)

    def test_raises_network_error_on_provider_timeout(self) -> None:
        mock_client = MagicMock()
        mock_client.chat.completions.create.side_effect = openai.APITimeoutError(
            request=httpx.Request("POST", "https://llm.test/v1/chat/completions")
        )
        with pytest.raises(ProcessingNetworkError, match="timed out"):
            _call(mock_client)

    def test_rejected_request_keeps_status_code(self) -> None:
        mock_client = MagicMock()
        mock_client.chat.completions.create.side_effect = _status_error(429)
        with pytest.raises(ProcessingResponseError, match="returned 429") as exc_info:
            _call(mock_client)
        assert exc_info.value.status_code == 429
        assert exc_info.value.is_client_error

    def test_raises_network_error_on_api_error(self) -> None:
        mock_client = MagicMock()
        mock_client.chat.completions.create.side_effect = openai.APIError(
            message="server error",
            request=MagicMock(),
            body=None,
        )
        with pytest.raises(ProcessingNetworkError, match="API error"):
            _call(mock_client)
