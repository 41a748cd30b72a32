"""Example chat client adapter.

Use this module as a reference when implementing new provider adapters.
Implement BaseChatClient and register the provider in GatewayFactory.
"""

import json
import re

from vdr_lite.analysis.client_base import BaseChatClient, ChatMessage

_FILENAME_RE = re.compile(r"^Filename: (?P<name>.+)$", re.MULTILINE)


class ExampleClientAdapter(BaseChatClient):
    """Offline adapter returning a fixed valid finding or a fixed 350-word narrative.

    No network calls. Useful for local development, tests, and as a template
    for building real provider adapters.
    """

    NARRATIVE_WORDS = 350

    async def create_chat_completion(
        self,
        *,
        model: str,
        temperature: float,
        max_tokens: int,
        messages: list[ChatMessage],
        json_mode: bool,
    ) -> str:
        _ = model, temperature, max_tokens
        if not json_mode:
            return " ".join(["finding"] * self.NARRATIVE_WORDS)
        return json.dumps(
            {
                "doc": self._filename(messages),
                "category": "other",
                "facts": ["Example adapter: no analysis performed."],
                "red_flags": [],
            }
        )

    @staticmethod
    def _filename(messages: list[ChatMessage]) -> str:
        for message in reversed(messages):
            match = _FILENAME_RE.search(message.get("content", ""))
            if match:
                return match.group("name").strip()
        return "example-document"
