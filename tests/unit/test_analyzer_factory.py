"""Tests for AnalyzerFactory."""

from unittest.mock import patch

import pytest

from subtitle_checker.analysis.analyzer import Analyzer, MissingCredentialsAnalyzer
from subtitle_checker.analysis.factory import AnalyzerFactory
from subtitle_checker.analysis.models import AnalysisStatus
from subtitle_checker.config.settings import Settings


def _settings(**overrides: object) -> Settings:
    defaults: dict[str, object] = {"openrouter_api_key": "", "openai_api_key": ""}
    defaults.update(overrides)
    return Settings(**defaults)  # type: ignore[arg-type]


class TestExampleProvider:
    @pytest.mark.asyncio
    async def test_creates_offline_analyzer(self) -> None:
        analyzer = AnalyzerFactory.create(_settings(analysis_provider="example"))
        assert isinstance(analyzer, Analyzer)
        result = await analyzer.analyze("any text", "a.vtt")
        assert result.status is AnalysisStatus.SUCCESS
        assert result.corrections == []


class TestMissingCredentials:
    def test_openrouter_without_key_skips(self) -> None:
        analyzer = AnalyzerFactory.create(_settings(analysis_provider="openrouter"))
        assert isinstance(analyzer, MissingCredentialsAnalyzer)

    def test_whitespace_key_counts_as_missing(self) -> None:
        analyzer = AnalyzerFactory.create(
            _settings(analysis_provider="openrouter", openrouter_api_key="   ")
        )
        assert isinstance(analyzer, MissingCredentialsAnalyzer)

    def test_ollama_needs_no_key(self) -> None:
        with patch("subtitle_checker.analysis.factory.OpenAIClientAdapter"):
            analyzer = AnalyzerFactory.create(_settings(analysis_provider="ollama"))
        assert isinstance(analyzer, Analyzer)


class TestProviderSettings:
    def test_uses_openrouter_settings(self) -> None:
        settings = _settings(
            analysis_provider="openrouter",
            openrouter_api_key="or-key",
            openrouter_timeout_seconds=42,
            analysis_max_retries=1,
        )
        with patch("subtitle_checker.analysis.factory.OpenAIClientAdapter") as mock_adapter:
            analyzer = AnalyzerFactory.create(settings)
        mock_adapter.assert_called_once_with(
            api_key="or-key",
            timeout_seconds=42,
            base_url="https://openrouter.ai/api/v1",
            max_retries=1,
        )
        assert isinstance(analyzer, Analyzer)
        assert analyzer.model == "deepseek/deepseek-r1-0528-qwen3-8b"

    def test_uses_openai_default_base_url(self) -> None:
        settings = _settings(analysis_provider="openai", openai_api_key="sk", openai_model_name="gpt-x")
        with patch("subtitle_checker.analysis.factory.OpenAIClientAdapter") as mock_adapter:
            analyzer = AnalyzerFactory.create(settings)
        assert mock_adapter.call_args.kwargs["base_url"] is None
        assert isinstance(analyzer, Analyzer)
        assert analyzer.model == "gpt-x"

    def test_uses_ollama_settings(self) -> None:
        settings = _settings(
            analysis_provider="ollama",
            ollama_base_url="http://gpu-box:11434/v1",
            deepseek_model="deepseek-coder:6.7b",
        )
        with patch("subtitle_checker.analysis.factory.OpenAIClientAdapter") as mock_adapter:
            analyzer = AnalyzerFactory.create(settings)
        kwargs = mock_adapter.call_args.kwargs
        assert kwargs["base_url"] == "http://gpu-box:11434/v1"
        assert kwargs["timeout_seconds"] == 60
        assert isinstance(analyzer, Analyzer)
        assert analyzer.model == "deepseek-coder:6.7b"

    def test_openai_compatible_requires_base_url(self) -> None:
        settings = _settings(analysis_provider="openai_compatible", openai_compatible_api_key="k")
        with pytest.raises(ValueError, match="openai_compatible_base_url"):
            AnalyzerFactory.create(settings)

    def test_openai_compatible_with_base_url(self) -> None:
        settings = _settings(
            analysis_provider="openai_compatible",
            openai_compatible_base_url="https://llm.example/v1",
            openai_compatible_api_key="k",
            openai_compatible_model_name="m",
        )
        with patch("subtitle_checker.analysis.factory.OpenAIClientAdapter") as mock_adapter:
            AnalyzerFactory.create(settings)
        assert mock_adapter.call_args.kwargs["base_url"] == "https://llm.example/v1"

    def test_provider_name_is_case_insensitive(self) -> None:
        analyzer = AnalyzerFactory.create(_settings(analysis_provider="EXAMPLE"))
        assert isinstance(analyzer, Analyzer)

    def test_unknown_provider_raises(self) -> None:
        with pytest.raises(ValueError, match="Unknown analysis provider"):
            AnalyzerFactory.create(_settings(analysis_provider="nope"))
