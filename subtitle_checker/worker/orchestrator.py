import asyncio
from pathlib import Path

from subtitle_checker.analysis.base import BaseAnalyzer
from subtitle_checker.concurrency.limiter import ConcurrencyLimiter
from subtitle_checker.config.settings import Settings
from subtitle_checker.logging.logger import Log
from subtitle_checker.processor.exceptions import ProcessorError
from subtitle_checker.processor.file_loader import FileLoader
from subtitle_checker.processor.models import FileResult
from subtitle_checker.processor.processor import build_processor
from subtitle_checker.report.models import RunReport, SkippedFile
from subtitle_checker.state.models import DecisionReason
from subtitle_checker.state.store import ProcessingStateStore
from subtitle_checker.worker.file_runner import FileRunner


class Orchestrator:
    """One run: scan -> decide -> bounded dispatch -> barrier -> persist -> report."""

    def __init__(
        self,
        store: ProcessingStateStore,
        file_runner: FileRunner,
        file_loader: FileLoader,
        settings: Settings,
    ) -> None:
        self._store = store
        self._file_runner = file_runner
        self._file_loader = file_loader
        self._settings = settings

    async def run(
        self,
        directory: Path | None = None,
        force: bool = False,
        concurrency_limit: int | None = None,
    ) -> RunReport:
        """Check every subtitle file in directory that needs it.

        Per-file failures end up in the report. Only problems with the
        directory itself raise.

        Raises:
            ProcessorError: if the directory cannot be created or listed.
        """
        directory = directory if directory is not None else self._settings.subtitles_dir
        limit = concurrency_limit if concurrency_limit is not None else self._settings.max_concurrency

        self._store.load()

        if not directory.exists():
            self._create_directory(directory)
            return RunReport(directory=directory, directory_created=True)
        if not directory.is_dir():
            raise ProcessorError(f"Subtitles path is not a directory: {directory}")

        files = self._file_loader.list_files(directory)
        if not files:
            Log.warning(f"No subtitle files found in {directory}")
            return RunReport(directory=directory)
        Log.info(f"Found {len(files)} subtitle files to check")

        to_process: list[tuple[Path, DecisionReason]] = []
        skipped: list[SkippedFile] = []
        for path in files:
            decision = self._store.decide_file(path, force=force)
            if decision.should_process:
                to_process.append((path, decision.reason))
            else:
                skipped.append(SkippedFile(path.name, decision.reason))

        if skipped:
            Log.info(f"Skipping {len(skipped)} unchanged files")
        if not to_process:
            Log.info("All files are up to date, use --force to reprocess all files")
            return RunReport(directory=directory, files_found=len(files), skipped_unchanged=skipped)

        Log.info(f"Processing {len(to_process)} files with {limit} concurrent requests")
        limiter = ConcurrencyLimiter(limit)
        results = await asyncio.gather(
            *(self._dispatch(limiter, path, reason) for path, reason in to_process)
        )

        # Every permit has been released at this point.
        state_saved = self._store.persist()
        return RunReport(
            directory=directory,
            files_found=len(files),
            skipped_unchanged=skipped,
            results=list(results),
            state_saved=state_saved,
        )

    async def _dispatch(
        self, limiter: ConcurrencyLimiter, path: Path, reason: DecisionReason
    ) -> FileResult:
        async with limiter.permit():
            Log.debug(f"Dispatching {path.name} ({reason.value}), {limiter.in_use} in flight")
            return await self._file_runner.run(path, reason)

    @staticmethod
    def _create_directory(directory: Path) -> None:
        Log.warning(f"Subtitles directory not found: {directory}, creating it")
        try:
            directory.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise ProcessorError(f"Could not create subtitles directory {directory}: {exc}") from exc
        Log.info(f"Subtitles directory created at {directory}, add subtitle files to check")


def build_orchestrator(
    settings: Settings,
    analyzer: BaseAnalyzer | None = None,
) -> Orchestrator:
    """Build an Orchestrator and its collaborators from settings."""
    store = ProcessingStateStore(settings.state_file)
    processor = build_processor(settings, store, analyzer=analyzer)
    return Orchestrator(
        store=store,
        file_runner=FileRunner(processor),
        file_loader=FileLoader(extension=settings.subtitle_extension),
        settings=settings,
    )
