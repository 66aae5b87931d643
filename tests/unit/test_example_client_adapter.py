"""Tests for ExampleClientAdapter (offline reference adapter)."""

import json

import pytest

from subtitle_checker.analysis.example_client_adapter import ExampleClientAdapter


async def _complete(**overrides: object) -> str:
    kwargs: dict[str, object] = {
        "model": "any",
        "temperature": 0.0,
        "max_tokens": 100,
        "system_prompt": "sys",
        "user_prompt": "user",
    }
    kwargs.update(overrides)
    completion = await ExampleClientAdapter().create_chat_completion(**kwargs)  # type: ignore[arg-type]
    return completion.content


class TestExampleClientAdapter:
    @pytest.mark.asyncio
    async def test_returns_analysis_json(self) -> None:
        data = json.loads(await _complete())
        assert data["summary"]["spellingErrors"] == 0
        assert data["summary"]["grammarErrors"] == 0
        assert data["corrections"] == []

    @pytest.mark.asyncio
    async def test_ignores_input_parameters(self) -> None:
        first = await _complete(model="a", user_prompt="u1")
        second = await _complete(model="b", temperature=1.0, user_prompt="u2")
        assert first == second

    @pytest.mark.asyncio
    async def test_reports_no_token_usage(self) -> None:
        completion = await ExampleClientAdapter().create_chat_completion(
            model="x", temperature=0.1, max_tokens=10, system_prompt="", user_prompt=""
        )
        assert completion.usage is None
