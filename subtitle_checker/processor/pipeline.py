from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path

from subtitle_checker.analysis.models import AnalysisResult
from subtitle_checker.correction.models import FixOutcome
from subtitle_checker.processor.models import FileStatus
from subtitle_checker.state.models import DecisionReason


@dataclass(slots=True)
class PipelineContext:
    """State of one file as it moves through the pipeline steps."""

    path: Path
    reason: DecisionReason
    raw_bytes: bytes = b""
    content: str = ""
    extracted_text: str = ""
    analysis: AnalysisResult | None = None
    fix_outcome: FixOutcome | None = None
    final_bytes: bytes = b""
    status: FileStatus = FileStatus.SUCCESS
    error_message: str = ""
    halted: bool = False

    @property
    def filename(self) -> str:
        return self.path.name

    def halt(self, status: FileStatus, message: str = "") -> None:
        self.status = status
        self.error_message = message
        self.halted = True


class PipelineStep(ABC):
    @abstractmethod
    async def run(self, context: PipelineContext) -> PipelineContext:
        raise NotImplementedError
