"""Tests for prompt template and system prompt loading."""

from pathlib import Path

import pytest

from subtitle_checker.analysis.exceptions import AnalysisError
from subtitle_checker.analysis.prompt_loader import load_prompt_template, load_system_prompt


class TestLoadPromptTemplate:
    def test_loads_default_template(self) -> None:
        template = load_prompt_template()
        assert "{subtitle_text}" in template
        assert "corrections" in template

    def test_default_template_formats(self) -> None:
        prompt = load_prompt_template().format(subtitle_text="Teh cat.")
        assert "Teh cat." in prompt
        assert "{subtitle_text}" not in prompt

    def test_loads_custom_template(self, tmp_path: Path) -> None:
        custom = tmp_path / "custom.txt"
        custom.write_text("Check {subtitle_text}", encoding="utf-8")
        assert load_prompt_template(custom) == "Check {subtitle_text}"

    def test_missing_file_raises_error(self) -> None:
        with pytest.raises(AnalysisError, match="Failed to load prompt template"):
            load_prompt_template(Path("/nonexistent/file.txt"))


class TestLoadSystemPrompt:
    def test_loads_default_prompt(self) -> None:
        prompt = load_system_prompt()
        assert prompt
        assert prompt == prompt.strip()

    def test_strips_whitespace(self, tmp_path: Path) -> None:
        custom = tmp_path / "system.txt"
        custom.write_text("\n  You proofread subtitles.  \n", encoding="utf-8")
        assert load_system_prompt(custom) == "You proofread subtitles."

    def test_missing_file_raises_error(self) -> None:
        with pytest.raises(AnalysisError, match="Failed to load system prompt"):
            load_system_prompt(Path("/nonexistent/system.txt"))
