from dataclasses import dataclass
from enum import Enum


class DecisionReason(str, Enum):
    """Why a file is (or is not) dispatched for analysis."""

    NEW = "new file"
    MODIFIED = "file modified"
    FORCED = "forced reprocessing"
    UNCHANGED = "already processed and unchanged"
    STATE_ERROR = "error checking file state"


@dataclass(frozen=True)
class ProcessingDecision:
    should_process: bool
    reason: DecisionReason


@dataclass(frozen=True)
class FileState:
    """Persisted record of the last successful analysis of one file."""

    content_hash: str
    last_processed_at: str
    has_unresolved_errors: bool = False
