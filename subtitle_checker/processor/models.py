from dataclasses import dataclass
from enum import Enum

from subtitle_checker.analysis.models import AnalysisResult, AnalysisStatus
from subtitle_checker.correction.models import FixOutcome
from subtitle_checker.state.models import DecisionReason


class FileStatus(str, Enum):
    SUCCESS = "success"
    PARTIAL = "partial"
    NO_CONTENT = "no_content"
    SKIPPED = "skipped"
    ERROR = "error"


@dataclass(frozen=True)
class FileResult:
    """Outcome of one dispatched file, whatever happened to it."""

    filename: str
    status: FileStatus
    reason: DecisionReason
    analysis: AnalysisResult | None = None
    fix_outcome: FixOutcome | None = None
    extracted_length: int = 0
    error: str = ""

    @property
    def applied_count(self) -> int:
        return self.fix_outcome.applied_count if self.fix_outcome else 0

    @property
    def analyzed(self) -> bool:
        return (
            self.analysis is not None
            and self.analysis.status is AnalysisStatus.SUCCESS
        )
