from dataclasses import dataclass, field
from pathlib import Path

from subtitle_checker.analysis.models import Correction


@dataclass(frozen=True)
class FixOutcome:
    """Which corrections actually landed in a file, and where the backup is."""

    applied_changes: list[Correction] = field(default_factory=list)
    backup_path: Path | None = None

    @property
    def applied_count(self) -> int:
        return len(self.applied_changes)
