from typing import ClassVar

from subtitle_checker.analysis.analyzer import Analyzer, MissingCredentialsAnalyzer
from subtitle_checker.analysis.base import BaseAnalyzer
from subtitle_checker.analysis.example_client_adapter import ExampleClientAdapter
from subtitle_checker.analysis.openai_client_adapter import OpenAIClientAdapter
from subtitle_checker.config.settings import Settings
from subtitle_checker.logging.logger import Log


class AnalyzerFactory:
    """Creates the configured analyzer."""

    BASE_URLS: ClassVar[dict[str, str | None]] = {
        "openrouter": "https://openrouter.ai/api/v1",
        "openai": None,
    }
    # Local servers accept any key.
    KEYLESS_PROVIDERS: ClassVar[frozenset[str]] = frozenset({"ollama"})

    @classmethod
    def supported_providers(cls) -> list[str]:
        return ["example", "ollama", "openai_compatible", *sorted(cls.BASE_URLS)]

    @classmethod
    def create(cls, settings: Settings) -> BaseAnalyzer:
        """Create a configured analyzer from application settings."""
        provider = settings.analysis_provider.lower()
        if provider == "example":
            return Analyzer(client=ExampleClientAdapter(), model="example")

        base_url = cls._resolve_base_url(provider, settings)
        api_key = cls._resolve_api_key(provider, settings)
        if not api_key and provider not in cls.KEYLESS_PROVIDERS:
            Log.warning(f"No API key configured for provider '{provider}', analysis will be skipped")
            return MissingCredentialsAnalyzer(provider)

        client = OpenAIClientAdapter(
            api_key=api_key,
            timeout_seconds=cls._resolve_timeout_seconds(provider, settings),
            base_url=base_url,
            max_retries=settings.analysis_max_retries,
        )
        return Analyzer(
            client=client,
            model=cls._resolve_model_name(provider, settings),
            temperature=settings.analysis_temperature,
            max_tokens=settings.analysis_max_tokens,
            max_text_chars=settings.ollama_max_text_chars if provider == "ollama" else None,
        )

    @classmethod
    def _resolve_base_url(cls, provider: str, settings: Settings) -> str | None:
        if provider == "ollama":
            return settings.ollama_base_url
        if provider == "openai_compatible":
            url = settings.openai_compatible_base_url.strip()
            if not url:
                raise ValueError(
                    "openai_compatible_base_url is required for "
                    "analysis_provider=openai_compatible"
                )
            return url
        if provider in cls.BASE_URLS:
            return cls.BASE_URLS[provider]
        raise ValueError(
            f"Unknown analysis provider '{provider}'. Choose from: {cls.supported_providers()}"
        )

    @classmethod
    def _resolve_api_key(cls, provider: str, settings: Settings) -> str:
        key_map = {
            "openrouter": settings.openrouter_api_key,
            "openai": settings.openai_api_key,
            "openai_compatible": settings.openai_compatible_api_key,
        }
        return key_map.get(provider, "").strip()

    @classmethod
    def _resolve_model_name(cls, provider: str, settings: Settings) -> str:
        key_map = {
            "openrouter": settings.openrouter_model_name,
            "openai": settings.openai_model_name,
            "openai_compatible": settings.openai_compatible_model_name,
            "ollama": settings.deepseek_model,
        }
        return key_map.get(provider, "")

    @classmethod
    def _resolve_timeout_seconds(cls, provider: str, settings: Settings) -> int:
        key_map = {
            "openrouter": settings.openrouter_timeout_seconds,
            "openai": settings.openai_timeout_seconds,
            "openai_compatible": settings.openai_compatible_timeout_seconds,
            "ollama": settings.ollama_timeout_seconds,
        }
        return key_map.get(provider, 30) or 30
