"""AI-powered spelling and grammar analyzer for subtitle text."""

import json
import re
from pathlib import Path
from typing import Any

from subtitle_checker.analysis.base import BaseAnalyzer
from subtitle_checker.analysis.client_base import BaseAnalysisClient
from subtitle_checker.analysis.exceptions import AnalysisError
from subtitle_checker.analysis.models import AnalysisResult, AnalysisStatus
from subtitle_checker.analysis.prompt_loader import load_prompt_template, load_system_prompt
from subtitle_checker.analysis.validator import build_corrections, build_summary
from subtitle_checker.logging.logger import Log

_THINK_BLOCK = re.compile(r"<think>.*?</think>", re.DOTALL)
_FENCED_JSON = re.compile(r"```(?:json)?\s*(\{.*?\})\s*```", re.DOTALL)


class Analyzer(BaseAnalyzer):
    """Sends subtitle text to an AI provider and parses the proposed corrections."""

    def __init__(
        self,
        *,
        client: BaseAnalysisClient,
        model: str,
        temperature: float = 0.1,
        max_tokens: int = 2000,
        max_text_chars: int | None = None,
        prompt_template_path: Path | None = None,
        system_prompt_path: Path | None = None,
    ) -> None:
        self._client = client
        self._model = model
        self._temperature = max(0.0, min(1.0, temperature))
        self._max_tokens = max_tokens
        self._max_text_chars = max_text_chars
        self._prompt_template = load_prompt_template(prompt_template_path)
        self._system_prompt = load_system_prompt(system_prompt_path)

    @property
    def model(self) -> str:
        return self._model

    async def analyze(self, text: str, filename: str) -> AnalysisResult:
        text, truncated = self._limit(text)
        if truncated:
            Log.info(f"Truncated {filename} to {self._max_text_chars} chars for analysis")
        prompt = self._prompt_template.format(subtitle_text=text)
        Log.debug(f"Analysis prompt for {filename}:\n{prompt}")

        try:
            completion = await self._client.create_chat_completion(
                model=self._model,
                temperature=self._temperature,
                max_tokens=self._max_tokens,
                system_prompt=self._system_prompt,
                user_prompt=prompt,
            )
        except AnalysisError as exc:
            Log.error(f"Analysis failed for {filename}: {exc}")
            return AnalysisResult.error(str(exc), model=self._model)

        raw = completion.content
        Log.debug(f"AI raw response for {filename}:\n{raw}")

        parsed = self._parse_json(raw)
        if parsed is None:
            Log.warning(f"Could not parse structured response for {filename}, using raw analysis")
            return AnalysisResult(
                status=AnalysisStatus.SUCCESS,
                analysis_text=raw,
                token_usage=completion.usage,
                model=self._model,
                truncated=truncated,
            )

        corrections = build_corrections(parsed.get("corrections"), filename)
        analysis_text = parsed.get("analysis")
        Log.info(f"Analysis complete for {filename}: {len(corrections)} corrections proposed")
        return AnalysisResult(
            status=AnalysisStatus.SUCCESS,
            summary=build_summary(parsed.get("summary")),
            corrections=corrections,
            analysis_text=analysis_text if isinstance(analysis_text, str) and analysis_text else raw,
            token_usage=completion.usage,
            model=self._model,
            truncated=truncated,
        )

    def _limit(self, text: str) -> tuple[str, bool]:
        if self._max_text_chars is None or len(text) <= self._max_text_chars:
            return text, False
        return text[: self._max_text_chars] + "...", True

    @staticmethod
    def _parse_json(raw: str) -> dict[str, Any] | None:
        cleaned = _THINK_BLOCK.sub("", raw).strip()
        fenced = _FENCED_JSON.search(cleaned)
        if fenced:
            cleaned = fenced.group(1)
        try:
            parsed = json.loads(cleaned)
        except json.JSONDecodeError:
            return None
        if not isinstance(parsed, dict):
            return None
        return parsed


class MissingCredentialsAnalyzer(BaseAnalyzer):
    """Stands in for a provider whose API key is not configured."""

    def __init__(self, provider: str) -> None:
        self._provider = provider

    async def analyze(self, text: str, filename: str) -> AnalysisResult:
        _ = text
        Log.debug(f"Skipping analysis of {filename}: no API key for {self._provider}")
        return AnalysisResult.skipped("API key not provided")
