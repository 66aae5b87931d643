from dataclasses import dataclass, field
from pathlib import Path

from subtitle_checker.processor.models import FileResult, FileStatus
from subtitle_checker.state.models import DecisionReason


@dataclass(frozen=True)
class SkippedFile:
    filename: str
    reason: DecisionReason


@dataclass(frozen=True)
class RunReport:
    """Everything the end-of-run report shows. Built after the run barrier."""

    directory: Path
    files_found: int = 0
    skipped_unchanged: list[SkippedFile] = field(default_factory=list)
    results: list[FileResult] = field(default_factory=list)
    directory_created: bool = False
    state_saved: bool = True

    @property
    def skipped_unchanged_count(self) -> int:
        return len(self.skipped_unchanged)

    @property
    def analyzed_count(self) -> int:
        # PARTIAL results are counted as errors only
        return sum(1 for r in self.results if r.status is FileStatus.SUCCESS and r.analyzed)

    @property
    def corrected_files(self) -> list[FileResult]:
        return [r for r in self.results if r.applied_count > 0]

    @property
    def corrected_count(self) -> int:
        return len(self.corrected_files)

    @property
    def total_corrections(self) -> int:
        return sum(r.applied_count for r in self.results)

    @property
    def error_count(self) -> int:
        return self._count(FileStatus.ERROR) + self._count(FileStatus.PARTIAL)

    @property
    def no_content_count(self) -> int:
        return self._count(FileStatus.NO_CONTENT)

    @property
    def analysis_skipped_count(self) -> int:
        return self._count(FileStatus.SKIPPED)

    def _count(self, status: FileStatus) -> int:
        return sum(1 for r in self.results if r.status is status)
