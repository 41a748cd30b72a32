"""Single entry point for all language-model calls made by the pipeline."""

import asyncio
import json
from collections.abc import Sequence
from pathlib import Path

from vdr_lite.analysis.client_base import BaseChatClient, ChatMessage
from vdr_lite.analysis.exceptions import InvalidModelOutputError, ModelTimeoutError
from vdr_lite.analysis.models import DocumentFinding
from vdr_lite.analysis.prompt_loader import (
    DOCUMENT_ANALYSIS_SYSTEM,
    DOCUMENT_ANALYSIS_USER,
    SUMMARY_SYSTEM,
    SUMMARY_USER,
    load_prompt,
    render_prompt,
)
from vdr_lite.analysis.validator import validate_finding
from vdr_lite.classification.models import Category
from vdr_lite.config import constants
from vdr_lite.logging.logger import Log

JSON_REPAIR_INSTRUCTION = (
    "Your last output was invalid JSON. Return only valid JSON matching the schema, no prose."
)
SUMMARY_REPAIR_INSTRUCTION = (
    "Your previous response was too long or too short. Rewrite it in strictly "
    "{min_words}-{max_words} words. Return only the summary text, no additional "
    "words or formatting."
)


def count_words(text: str) -> int:
    return len(text.split())


class LanguageModelGateway:
    """Runs structured per-document analysis and free-text narrative synthesis.

    Structured analysis gets exactly one in-conversation repair attempt and
    then fails. Narrative synthesis gets one repair attempt for its word
    count and then returns whatever it has.
    """

    def __init__(
        self,
        *,
        client: BaseChatClient,
        model: str,
        temperature: float = 0.0,
        doc_max_tokens: int = constants.DOC_MAX_TOKENS,
        summary_max_tokens: int = constants.SUMMARY_MAX_TOKENS,
        doc_timeout_seconds: float = constants.DOC_TIMEOUT_SECONDS,
        summary_timeout_seconds: float = constants.SUMMARY_TIMEOUT_SECONDS,
        summary_min_words: int = constants.SUMMARY_MIN_WORDS,
        summary_max_words: int = constants.SUMMARY_MAX_WORDS,
        prompt_dir: Path | None = None,
    ) -> None:
        self._client = client
        self._model = model
        self._temperature = temperature
        self._doc_max_tokens = doc_max_tokens
        self._summary_max_tokens = summary_max_tokens
        self._doc_timeout = doc_timeout_seconds
        self._summary_timeout = summary_timeout_seconds
        self._min_words = summary_min_words
        self._max_words = summary_max_words
        self._doc_system_prompt = load_prompt(DOCUMENT_ANALYSIS_SYSTEM, prompt_dir)
        self._doc_user_template = load_prompt(DOCUMENT_ANALYSIS_USER, prompt_dir)
        self._summary_system_prompt = load_prompt(SUMMARY_SYSTEM, prompt_dir)
        self._summary_user_template = load_prompt(SUMMARY_USER, prompt_dir)

    async def analyze_document(
        self, filename: str, category: Category, text: str
    ) -> DocumentFinding:
        """Ask the model for a DocumentFinding.

        Raises:
            InvalidModelOutputError: if the reply is still invalid after one repair.
            ModelError: if the provider call itself fails.
        """
        user_prompt = render_prompt(
            self._doc_user_template,
            filename=filename,
            category=category.value,
            text=text,
        )
        messages: list[ChatMessage] = [
            {"role": "system", "content": self._doc_system_prompt},
            {"role": "user", "content": user_prompt},
        ]
        Log.debug(f"Analysis prompt for {filename}:\n{user_prompt}")

        raw = await self._complete_json(messages)
        try:
            return self._parse_finding(raw)
        except InvalidModelOutputError as exc:
            Log.warning(f"Invalid analysis output for {filename}, requesting repair: {exc}")

        messages += [
            {"role": "assistant", "content": raw},
            {"role": "user", "content": JSON_REPAIR_INSTRUCTION},
        ]
        raw = await self._complete_json(messages)
        try:
            finding = self._parse_finding(raw)
        except InvalidModelOutputError as exc:
            raise InvalidModelOutputError(
                f"Invalid JSON after repair attempt: {exc}"
            ) from exc
        Log.info(f"Analysis output for {filename} accepted after repair")
        return finding

    async def synthesize_narrative(self, findings: Sequence[DocumentFinding]) -> str:
        """Write the free-text summary for all findings.

        A reply outside the word bound is re-requested once; a second miss is
        returned as-is and logged.
        """
        json_array = json.dumps([finding.to_dict() for finding in findings], indent=2)
        user_prompt = render_prompt(self._summary_user_template, json_array=json_array)
        messages: list[ChatMessage] = [
            {"role": "system", "content": self._summary_system_prompt},
            {"role": "user", "content": user_prompt},
        ]

        summary = (await self._complete_text(messages)).strip()
        if self._within_word_bounds(summary):
            return summary

        Log.info(
            "Summary outside word bounds, requesting rewrite",
            word_count=count_words(summary),
        )
        messages += [
            {"role": "assistant", "content": summary},
            {
                "role": "user",
                "content": SUMMARY_REPAIR_INSTRUCTION.format(
                    min_words=self._min_words, max_words=self._max_words
                ),
            },
        ]
        summary = (await self._complete_text(messages)).strip()
        if not self._within_word_bounds(summary):
            Log.warning(
                "Summary fallback: returning summary outside word bounds after rewrite",
                word_count=count_words(summary),
            )
        return summary

    def _within_word_bounds(self, text: str) -> bool:
        return self._min_words <= count_words(text) <= self._max_words

    async def _complete_json(self, messages: list[ChatMessage]) -> str:
        return await self._complete(
            messages,
            json_mode=True,
            max_tokens=self._doc_max_tokens,
            timeout=self._doc_timeout,
        )

    async def _complete_text(self, messages: list[ChatMessage]) -> str:
        return await self._complete(
            messages,
            json_mode=False,
            max_tokens=self._summary_max_tokens,
            timeout=self._summary_timeout,
        )

    async def _complete(
        self,
        messages: list[ChatMessage],
        *,
        json_mode: bool,
        max_tokens: int,
        timeout: float,
    ) -> str:
        try:
            raw = await asyncio.wait_for(
                self._client.create_chat_completion(
                    model=self._model,
                    temperature=self._temperature,
                    max_tokens=max_tokens,
                    messages=list(messages),
                    json_mode=json_mode,
                ),
                timeout=timeout,
            )
        except asyncio.TimeoutError as exc:
            raise ModelTimeoutError(f"Model call timed out after {timeout}s") from exc
        Log.debug(f"AI raw response:\n{raw}")
        return raw

    @classmethod
    def _parse_finding(cls, raw: str) -> DocumentFinding:
        return validate_finding(cls._parse_json(raw))

    @staticmethod
    def _parse_json(raw: str) -> dict[str, object]:
        cleaned = raw.strip()
        if cleaned.startswith("```"):
            lines = cleaned.splitlines()
            if lines and lines[0].startswith("```"):
                lines = lines[1:]
            if lines and lines[-1].strip() == "```":
                lines = lines[:-1]
            cleaned = "\n".join(lines)

        try:
            parsed = json.loads(cleaned)
        except json.JSONDecodeError as exc:
            raise InvalidModelOutputError(f"Invalid JSON response: {exc}") from exc

        if not isinstance(parsed, dict):
            raise InvalidModelOutputError("JSON response must be an object")
        return parsed
