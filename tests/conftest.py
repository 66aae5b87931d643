from collections.abc import Callable
from pathlib import Path

import pytest

SAMPLE_VTT = """WEBVTT

1
00:00:01.000 --> 00:00:03.000
The cat sat on teh mat.

2
00:00:03.500 --> 00:00:05.000
<i>It was</i> a grate day.
"""


def vtt(*cues: str) -> str:
    """Build a WebVTT document with one cue per argument."""
    blocks = ["WEBVTT", ""]
    for index, text in enumerate(cues, start=1):
        start = f"00:00:{index:02d}.000"
        end = f"00:00:{index:02d}.900"
        blocks.extend([str(index), f"{start} --> {end}", text, ""])
    return "\n".join(blocks)


@pytest.fixture()
def sample_vtt() -> str:
    return SAMPLE_VTT


@pytest.fixture()
def subtitles_dir(tmp_path: Path) -> Path:
    directory = tmp_path / "subtitles"
    directory.mkdir()
    return directory


@pytest.fixture()
def make_vtt() -> Callable[..., str]:
    return vtt
