from typing import Any

import httpx
import openai

from vdr_lite.analysis.client_base import BaseChatClient, ChatMessage
from vdr_lite.analysis.exceptions import (
    MissingCredentialError,
    ModelError,
    ModelNetworkError,
    ModelRequestError,
    ModelResponseError,
)
from vdr_lite.exceptions import ErrorKind


class OpenAIClientAdapter(BaseChatClient):
    """Chat client adapter built on the OpenAI-compatible async chat API.

    SDK-level retries are disabled; callers wrap this client in a RetryPolicy.
    """

    def __init__(
        self,
        *,
        api_key: str,
        timeout_seconds: float,
        base_url: str | None = None,
    ) -> None:
        if not api_key:
            raise MissingCredentialError("LLM_API_KEY environment variable is not set")
        self._client = openai.AsyncOpenAI(
            api_key=api_key,
            timeout=timeout_seconds,
            base_url=base_url,
            max_retries=0,
        )

    async def create_chat_completion(
        self,
        *,
        model: str,
        temperature: float,
        max_tokens: int,
        messages: list[ChatMessage],
        json_mode: bool,
    ) -> str:
        request: dict[str, Any] = {
            "model": model,
            "temperature": temperature,
            "max_tokens": max_tokens,
            "messages": messages,
        }
        if json_mode:
            request["response_format"] = {"type": "json_object"}

        try:
            response = await self._client.chat.completions.create(**request)
        except openai.RateLimitError as exc:
            raise ModelNetworkError(f"AI provider rate limit exceeded: {exc}") from exc
        except (openai.APITimeoutError, httpx.TimeoutException) as exc:
            raise ModelNetworkError(f"AI provider timeout: {exc}") from exc
        except (openai.APIConnectionError, httpx.ConnectError) as exc:
            raise ModelNetworkError(f"AI provider network error: {exc}") from exc
        except (openai.AuthenticationError, openai.PermissionDeniedError) as exc:
            raise ModelRequestError(f"AI provider rejected credentials: {exc}") from exc
        except (
            openai.NotFoundError,
            openai.BadRequestError,
            openai.UnprocessableEntityError,
        ) as exc:
            raise ModelRequestError(f"AI provider rejected request: {exc}") from exc
        except openai.InternalServerError as exc:
            raise ModelNetworkError(f"AI provider unavailable: {exc}") from exc
        except openai.APIError as exc:
            raise ModelError(f"AI provider API error: {exc}", kind=ErrorKind.TRANSIENT) from exc

        if not response.choices:
            raise ModelResponseError("AI returned no choices")
        content = response.choices[0].message.content
        if not content:
            raise ModelResponseError("AI returned empty response")
        return content
