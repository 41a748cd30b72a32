from abc import ABC, abstractmethod

ChatMessage = dict[str, str]


class BaseChatClient(ABC):
    """Contract for provider-specific chat completion clients."""

    @abstractmethod
    async def create_chat_completion(
        self,
        *,
        model: str,
        temperature: float,
        max_tokens: int,
        messages: list[ChatMessage],
        json_mode: bool,
    ) -> str:
        """Return provider response as plain text."""
