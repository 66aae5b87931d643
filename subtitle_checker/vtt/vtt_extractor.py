import html
import re

from subtitle_checker.vtt.base import BaseCueTextExtractor

_TIMING_LINE = re.compile(
    r"^(?:\d{2,}:)?\d{2}:\d{2}\.\d{3}\s*-->\s*(?:\d{2,}:)?\d{2}:\d{2}\.\d{3}"
)
_TAG = re.compile(r"<[^>]*>")


class VttCueTextExtractor(BaseCueTextExtractor):
    """Line-oriented WebVTT reader.

    A cue's text starts after its timing line and runs until the next blank
    line. Everything outside cue text (the WEBVTT header, cue identifiers,
    NOTE, STYLE and REGION blocks) is ignored.
    """

    def extract(self, content: str) -> str:
        text_lines: list[str] = []
        in_cue_text = False
        for line in content.splitlines():
            stripped = line.strip()
            if _TIMING_LINE.match(stripped):
                in_cue_text = True
                continue
            if not stripped:
                in_cue_text = False
                continue
            if not in_cue_text:
                continue
            cleaned = self._clean(stripped)
            if cleaned:
                text_lines.append(cleaned)
        return " ".join(text_lines)

    @staticmethod
    def _clean(line: str) -> str:
        without_tags = _TAG.sub("", line)
        return html.unescape(without_tags).replace("\xa0", " ").strip()
