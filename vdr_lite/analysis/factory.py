from typing import ClassVar

from vdr_lite.analysis.client_base import BaseChatClient
from vdr_lite.analysis.example_client_adapter import ExampleClientAdapter
from vdr_lite.analysis.exceptions import MissingCredentialError
from vdr_lite.analysis.gateway import LanguageModelGateway
from vdr_lite.analysis.openai_client_adapter import OpenAIClientAdapter
from vdr_lite.config.settings import Settings


class GatewayFactory:
    """Creates the language-model gateway for the configured provider."""

    OPENAI_COMPATIBLE_BASE_URLS: ClassVar[dict[str, str]] = {
        "openrouter": "https://openrouter.ai/api/v1",
        "groq": "https://api.groq.com/openai/v1",
        "together": "https://api.together.xyz/v1",
        "deepseek": "https://api.deepseek.com/v1",
    }

    @classmethod
    def create(cls, settings: Settings) -> LanguageModelGateway:
        """Create a configured gateway from application settings."""
        provider = settings.llm_provider.lower()
        if provider == "example":
            return cls._build_gateway(settings, ExampleClientAdapter(), model="example")

        base_url = cls._resolve_base_url(provider, settings)
        if not settings.llm_api_key:
            raise MissingCredentialError(
                f"LLM_API_KEY environment variable is required for llm_provider={provider}"
            )
        client = OpenAIClientAdapter(
            api_key=settings.llm_api_key,
            timeout_seconds=max(settings.doc_timeout_seconds, settings.summary_timeout_seconds),
            base_url=base_url,
        )
        return cls._build_gateway(settings, client, model=settings.llm_model_name)

    @staticmethod
    def _build_gateway(
        settings: Settings, client: BaseChatClient, *, model: str
    ) -> LanguageModelGateway:
        return LanguageModelGateway(
            client=client,
            model=model,
            temperature=settings.llm_temperature,
            doc_max_tokens=settings.doc_max_tokens,
            summary_max_tokens=settings.summary_max_tokens,
            doc_timeout_seconds=settings.doc_timeout_seconds,
            summary_timeout_seconds=settings.summary_timeout_seconds,
        )

    @classmethod
    def _resolve_base_url(cls, provider: str, settings: Settings) -> str | None:
        if provider == "openai":
            return settings.llm_base_url.strip() or None
        if provider == "openai_compatible":
            url = settings.llm_base_url.strip()
            if not url:
                raise ValueError(
                    "llm_base_url is required for llm_provider=openai_compatible"
                )
            return url
        default_base_url = cls.OPENAI_COMPATIBLE_BASE_URLS.get(provider)
        if default_base_url is not None:
            return settings.llm_base_url.strip() or default_base_url
        supported = [
            "example",
            "openai",
            "openai_compatible",
            *sorted(cls.OPENAI_COMPATIBLE_BASE_URLS),
        ]
        raise ValueError(f"Unknown LLM provider '{provider}'. Choose from: {supported}")
