from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import openai
import pytest

from vdr_lite.analysis.exceptions import (
    MissingCredentialError,
    ModelError,
    ModelNetworkError,
    ModelRequestError,
    ModelResponseError,
)
from vdr_lite.analysis.openai_client_adapter import OpenAIClientAdapter
from vdr_lite.exceptions import ErrorKind, FatalPipelineError

_MESSAGES = [{"role": "system", "content": "s"}, {"role": "user", "content": "u"}]


def _make_mock_response(content: str | None) -> MagicMock:
    choice = MagicMock()
    choice.message.content = content
    response = MagicMock()
    response.choices = [choice]
    return response


def _status_error(cls: type[openai.APIStatusError], status: int) -> openai.APIStatusError:
    request = httpx.Request("POST", "https://api.example.com/v1/chat/completions")
    response = httpx.Response(status, request=request)
    return cls("error", response=response, body=None)


def _make_adapter(mock_client: MagicMock) -> OpenAIClientAdapter:
    with patch(
        "vdr_lite.analysis.openai_client_adapter.openai.AsyncOpenAI",
        return_value=mock_client,
    ):
        return OpenAIClientAdapter(api_key="k", timeout_seconds=30, base_url=None)


def _mock_client(*, return_value: object = None, side_effect: object = None) -> MagicMock:
    mock_client = MagicMock()
    mock_client.chat.completions.create = AsyncMock(
        return_value=return_value, side_effect=side_effect
    )
    return mock_client


async def _complete(adapter: OpenAIClientAdapter, json_mode: bool = True) -> str:
    return await adapter.create_chat_completion(
        model="m",
        temperature=0.0,
        max_tokens=700,
        messages=_MESSAGES,
        json_mode=json_mode,
    )


class TestOpenAIClientAdapterConstruction:
    def test_missing_api_key_is_fatal(self) -> None:
        with pytest.raises(MissingCredentialError):
            OpenAIClientAdapter(api_key="", timeout_seconds=30)
        assert issubclass(MissingCredentialError, FatalPipelineError)

    def test_disables_sdk_retries(self) -> None:
        with patch(
            "vdr_lite.analysis.openai_client_adapter.openai.AsyncOpenAI"
        ) as mock_cls:
            OpenAIClientAdapter(api_key="k", timeout_seconds=12, base_url="https://x/v1")
        kwargs = mock_cls.call_args.kwargs
        assert kwargs["max_retries"] == 0
        assert kwargs["timeout"] == 12
        assert kwargs["base_url"] == "https://x/v1"


class TestOpenAIClientAdapter:
    @pytest.mark.asyncio
    async def test_returns_content(self) -> None:
        mock_client = _mock_client(return_value=_make_mock_response('{"ok": true}'))
        adapter = _make_adapter(mock_client)
        assert await _complete(adapter) == '{"ok": true}'

    @pytest.mark.asyncio
    async def test_json_mode_sets_response_format(self) -> None:
        mock_client = _mock_client(return_value=_make_mock_response("{}"))
        adapter = _make_adapter(mock_client)
        await _complete(adapter, json_mode=True)
        kwargs = mock_client.chat.completions.create.await_args.kwargs
        assert kwargs["response_format"] == {"type": "json_object"}
        assert kwargs["messages"] == _MESSAGES
        assert kwargs["max_tokens"] == 700

    @pytest.mark.asyncio
    async def test_text_mode_has_no_response_format(self) -> None:
        mock_client = _mock_client(return_value=_make_mock_response("text"))
        adapter = _make_adapter(mock_client)
        await _complete(adapter, json_mode=False)
        kwargs = mock_client.chat.completions.create.await_args.kwargs
        assert "response_format" not in kwargs

    @pytest.mark.asyncio
    async def test_raises_transient_error_for_empty_content(self) -> None:
        adapter = _make_adapter(_mock_client(return_value=_make_mock_response(None)))
        with pytest.raises(ModelResponseError, match="empty response") as exc_info:
            await _complete(adapter)
        assert exc_info.value.kind == ErrorKind.TRANSIENT

    @pytest.mark.asyncio
    async def test_raises_for_no_choices(self) -> None:
        response = MagicMock()
        response.choices = []
        adapter = _make_adapter(_mock_client(return_value=response))
        with pytest.raises(ModelResponseError, match="no choices"):
            await _complete(adapter)

    @pytest.mark.asyncio
    async def test_raises_network_error_on_connection_failure(self) -> None:
        error = openai.APIConnectionError(request=MagicMock())
        adapter = _make_adapter(_mock_client(side_effect=error))
        with pytest.raises(ModelNetworkError, match="network error"):
            await _complete(adapter)

    @pytest.mark.asyncio
    async def test_raises_network_error_on_timeout(self) -> None:
        adapter = _make_adapter(_mock_client(side_effect=httpx.TimeoutException("slow")))
        with pytest.raises(ModelNetworkError, match="timeout") as exc_info:
            await _complete(adapter)
        assert exc_info.value.kind == ErrorKind.TRANSIENT

    @pytest.mark.asyncio
    async def test_rate_limit_is_transient(self) -> None:
        error = _status_error(openai.RateLimitError, 429)
        adapter = _make_adapter(_mock_client(side_effect=error))
        with pytest.raises(ModelNetworkError, match="rate limit") as exc_info:
            await _complete(adapter)
        assert exc_info.value.kind == ErrorKind.TRANSIENT

    @pytest.mark.asyncio
    async def test_authentication_error_is_permanent(self) -> None:
        error = _status_error(openai.AuthenticationError, 401)
        adapter = _make_adapter(_mock_client(side_effect=error))
        with pytest.raises(ModelRequestError, match="credentials") as exc_info:
            await _complete(adapter)
        assert exc_info.value.kind == ErrorKind.PERMANENT

    @pytest.mark.asyncio
    async def test_bad_request_is_permanent(self) -> None:
        error = _status_error(openai.BadRequestError, 400)
        adapter = _make_adapter(_mock_client(side_effect=error))
        with pytest.raises(ModelRequestError, match="rejected request"):
            await _complete(adapter)

    @pytest.mark.asyncio
    async def test_server_error_is_transient(self) -> None:
        error = _status_error(openai.InternalServerError, 503)
        adapter = _make_adapter(_mock_client(side_effect=error))
        with pytest.raises(ModelNetworkError, match="unavailable"):
            await _complete(adapter)

    @pytest.mark.asyncio
    async def test_generic_api_error_is_transient(self) -> None:
        error = openai.APIError(message="server error", request=MagicMock(), body=None)
        adapter = _make_adapter(_mock_client(side_effect=error))
        with pytest.raises(ModelError, match="API error") as exc_info:
            await _complete(adapter)
        assert exc_info.value.kind == ErrorKind.TRANSIENT
