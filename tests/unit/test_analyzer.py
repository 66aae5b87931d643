"""Tests for the Analyzer (AI-powered spelling and grammar check)."""

import json
from unittest.mock import AsyncMock, patch

import pytest

from subtitle_checker.analysis.analyzer import Analyzer, MissingCredentialsAnalyzer
from subtitle_checker.analysis.exceptions import AnalysisNetworkError, AnalysisResponseError
from subtitle_checker.analysis.models import AnalysisStatus, ChatCompletion, Correction, TokenUsage


def _make_analyzer(client: AsyncMock | None = None, **kwargs: object) -> Analyzer:
    if client is None:
        client = AsyncMock()
    return Analyzer(client=client, model="test-model", **kwargs)  # type: ignore[arg-type]


def _mock_ai_response(client: AsyncMock, content: str, usage: TokenUsage | None = None) -> None:
    client.create_chat_completion.return_value = ChatCompletion(content=content, usage=usage)


def _valid_json_response(corrections: list[dict[str, object]] | None = None) -> str:
    return json.dumps({
        "summary": {"spellingErrors": 1, "grammarErrors": 0, "overallQuality": "good"},
        "corrections": corrections or [],
        "analysis": "One typo.",
    })


class TestAnalyzeSuccess:
    @pytest.mark.asyncio
    async def test_returns_structured_result(self) -> None:
        client = AsyncMock()
        _mock_ai_response(
            client,
            _valid_json_response([
                {"original": "teh", "corrected": "the", "type": "spelling", "explanation": "typo"}
            ]),
            usage=TokenUsage(10, 5, 15),
        )
        result = await _make_analyzer(client).analyze("teh cat", "a.vtt")

        assert result.status is AnalysisStatus.SUCCESS
        assert result.corrections == [Correction("teh", "the", "spelling", "typo")]
        assert result.summary is not None
        assert result.summary.spelling_errors == 1
        assert result.summary.overall_quality == "good"
        assert result.analysis_text == "One typo."
        assert result.token_usage == TokenUsage(10, 5, 15)
        assert result.model == "test-model"

    @pytest.mark.asyncio
    async def test_passes_text_and_settings_to_client(self) -> None:
        client = AsyncMock()
        _mock_ai_response(client, _valid_json_response())
        analyzer = _make_analyzer(client, temperature=0.2, max_tokens=512)
        await analyzer.analyze("subtitle words", "a.vtt")

        kwargs = client.create_chat_completion.call_args.kwargs
        assert '"subtitle words"' in kwargs["user_prompt"]
        assert '"corrections": [' in kwargs["user_prompt"]
        assert kwargs["model"] == "test-model"
        assert kwargs["temperature"] == 0.2
        assert kwargs["max_tokens"] == 512
        assert "proofreader" in kwargs["system_prompt"]

    @pytest.mark.asyncio
    async def test_empty_corrections(self) -> None:
        client = AsyncMock()
        _mock_ai_response(client, _valid_json_response())
        result = await _make_analyzer(client).analyze("fine", "a.vtt")
        assert result.status is AnalysisStatus.SUCCESS
        assert result.corrections == []


class TestResponseParsing:
    @pytest.mark.asyncio
    async def test_reads_json_from_code_fence(self) -> None:
        client = AsyncMock()
        _mock_ai_response(client, "Here you go:\n```json\n" + _valid_json_response() + "\n```")
        result = await _make_analyzer(client).analyze("text", "a.vtt")
        assert result.summary is not None
        assert result.analysis_text == "One typo."

    @pytest.mark.asyncio
    async def test_discards_think_block(self) -> None:
        client = AsyncMock()
        _mock_ai_response(client, "<think>{maybe}</think>\n" + _valid_json_response())
        result = await _make_analyzer(client).analyze("text", "a.vtt")
        assert result.summary is not None

    @pytest.mark.asyncio
    async def test_unparseable_response_becomes_raw_analysis(self) -> None:
        client = AsyncMock()
        _mock_ai_response(client, "The text looks fine to me.")
        result = await _make_analyzer(client).analyze("text", "a.vtt")
        assert result.status is AnalysisStatus.SUCCESS
        assert result.corrections == []
        assert result.summary is None
        assert result.analysis_text == "The text looks fine to me."

    @pytest.mark.asyncio
    async def test_json_array_becomes_raw_analysis(self) -> None:
        client = AsyncMock()
        _mock_ai_response(client, "[]")
        result = await _make_analyzer(client).analyze("text", "a.vtt")
        assert result.status is AnalysisStatus.SUCCESS
        assert result.analysis_text == "[]"

    @pytest.mark.asyncio
    async def test_missing_analysis_field_falls_back_to_raw(self) -> None:
        client = AsyncMock()
        raw = json.dumps({"corrections": []})
        _mock_ai_response(client, raw)
        result = await _make_analyzer(client).analyze("text", "a.vtt")
        assert result.analysis_text == raw


class TestProviderErrors:
    @pytest.mark.asyncio
    async def test_network_error_becomes_error_result(self) -> None:
        client = AsyncMock()
        client.create_chat_completion.side_effect = AnalysisNetworkError("network timeout")
        result = await _make_analyzer(client).analyze("text", "a.vtt")
        assert result.status is AnalysisStatus.ERROR
        assert "network timeout" in result.message

    @pytest.mark.asyncio
    async def test_empty_response_becomes_error_result(self) -> None:
        client = AsyncMock()
        client.create_chat_completion.side_effect = AnalysisResponseError("AI returned empty response")
        result = await _make_analyzer(client).analyze("text", "a.vtt")
        assert result.status is AnalysisStatus.ERROR

    @pytest.mark.asyncio
    async def test_unexpected_errors_propagate(self) -> None:
        client = AsyncMock()
        client.create_chat_completion.side_effect = RuntimeError("bug")
        with pytest.raises(RuntimeError):
            await _make_analyzer(client).analyze("text", "a.vtt")


class TestTruncation:
    @pytest.mark.asyncio
    async def test_truncates_long_text(self) -> None:
        client = AsyncMock()
        _mock_ai_response(client, _valid_json_response())
        analyzer = _make_analyzer(client, max_text_chars=5)
        result = await analyzer.analyze("abcdefghij", "a.vtt")
        assert result.truncated
        assert '"abcde..."' in client.create_chat_completion.call_args.kwargs["user_prompt"]

    @pytest.mark.asyncio
    async def test_short_text_not_truncated(self) -> None:
        client = AsyncMock()
        _mock_ai_response(client, _valid_json_response())
        result = await _make_analyzer(client, max_text_chars=50).analyze("short", "a.vtt")
        assert not result.truncated


class TestMissingCredentials:
    @pytest.mark.asyncio
    async def test_returns_skipped(self) -> None:
        result = await MissingCredentialsAnalyzer("openrouter").analyze("text", "a.vtt")
        assert result.status is AnalysisStatus.SKIPPED
        assert result.message == "API key not provided"


class TestDebugLogging:
    @pytest.mark.asyncio
    async def test_logs_prompt_in_debug(self) -> None:
        client = AsyncMock()
        _mock_ai_response(client, _valid_json_response())
        with patch("subtitle_checker.analysis.analyzer.Log") as mock_log:
            await _make_analyzer(client).analyze("test text", "a.vtt")
        assert "prompt" in mock_log.debug.call_args_list[0].args[0].lower()
