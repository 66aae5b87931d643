from dataclasses import dataclass, field
from enum import Enum
from typing import Literal

CorrectionKind = Literal["spelling", "grammar"]


class AnalysisStatus(str, Enum):
    SUCCESS = "success"
    ERROR = "error"
    SKIPPED = "skipped"


@dataclass(frozen=True)
class Correction:
    """A literal substitution proposed by the analysis backend."""

    original: str
    corrected: str
    kind: CorrectionKind = "spelling"
    explanation: str = ""


@dataclass(frozen=True)
class AnalysisSummary:
    spelling_errors: int = 0
    grammar_errors: int = 0
    overall_quality: str = ""


@dataclass(frozen=True)
class TokenUsage:
    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0


@dataclass(frozen=True)
class ChatCompletion:
    """Provider response reduced to what the analyzer needs."""

    content: str
    usage: TokenUsage | None = None


@dataclass(frozen=True)
class AnalysisResult:
    """Output of analyzing one file's cue text."""

    status: AnalysisStatus
    summary: AnalysisSummary | None = None
    corrections: list[Correction] = field(default_factory=list)
    analysis_text: str = ""
    token_usage: TokenUsage | None = None
    message: str = ""
    model: str = ""
    truncated: bool = False

    @classmethod
    def skipped(cls, message: str) -> "AnalysisResult":
        return cls(status=AnalysisStatus.SKIPPED, message=message)

    @classmethod
    def error(cls, message: str, model: str = "") -> "AnalysisResult":
        return cls(status=AnalysisStatus.ERROR, message=message, model=model)
