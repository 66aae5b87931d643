from pathlib import Path

from subtitle_checker.logging.logger import Log
from subtitle_checker.processor.models import FileResult, FileStatus
from subtitle_checker.processor.processor import Processor
from subtitle_checker.state.models import DecisionReason


class FileRunner:
    """Run one file through the processor and turn any failure into a result."""

    def __init__(self, processor: Processor) -> None:
        self._processor = processor

    async def run(self, path: Path, reason: DecisionReason) -> FileResult:
        """Process a single file. Never raises for errors inside the file's pipeline."""
        try:
            result = await self._processor.process(path, reason)
        except Exception as exc:
            Log.error(f"Error processing {path.name}: {exc}")
            return FileResult(
                filename=path.name,
                status=FileStatus.ERROR,
                reason=reason,
                error=str(exc) or exc.__class__.__name__,
            )
        if result.status is FileStatus.SUCCESS:
            Log.info(f"Analysis complete for {path.name} ({result.applied_count} corrections applied)")
        return result
