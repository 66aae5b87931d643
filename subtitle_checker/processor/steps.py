import asyncio

from subtitle_checker.analysis.base import BaseAnalyzer
from subtitle_checker.analysis.models import AnalysisStatus
from subtitle_checker.correction.engine import CorrectionEngine
from subtitle_checker.logging.logger import Log
from subtitle_checker.processor.exceptions import FileWriteError
from subtitle_checker.processor.file_loader import FileLoader
from subtitle_checker.processor.models import FileStatus
from subtitle_checker.processor.pipeline import PipelineContext, PipelineStep
from subtitle_checker.state.store import ProcessingStateStore
from subtitle_checker.vtt.base import BaseCueTextExtractor


class ReadFileStep(PipelineStep):
    def __init__(self, file_loader: FileLoader) -> None:
        self._file_loader = file_loader

    async def run(self, context: PipelineContext) -> PipelineContext:
        context.raw_bytes = await asyncio.to_thread(self._file_loader.load, context.path)
        context.content = self._file_loader.decode(context.path, context.raw_bytes)
        context.final_bytes = context.raw_bytes
        Log.debug(f"Read {len(context.raw_bytes)} bytes from {context.filename}")
        return context


class ExtractTextStep(PipelineStep):
    def __init__(self, extractor: BaseCueTextExtractor) -> None:
        self._extractor = extractor

    async def run(self, context: PipelineContext) -> PipelineContext:
        context.extracted_text = self._extractor.extract(context.content)
        if not context.extracted_text.strip():
            Log.warning(f"No text content found in {context.filename}")
            context.halt(FileStatus.NO_CONTENT, "No text content found")
            return context
        Log.debug(f"Extracted {len(context.extracted_text)} chars from {context.filename}")
        return context


class AnalyzeStep(PipelineStep):
    def __init__(self, analyzer: BaseAnalyzer) -> None:
        self._analyzer = analyzer

    async def run(self, context: PipelineContext) -> PipelineContext:
        Log.info(f"Checking: {context.filename}")
        analysis = await self._analyzer.analyze(context.extracted_text, context.filename)
        context.analysis = analysis
        if analysis.status is AnalysisStatus.SKIPPED:
            context.halt(FileStatus.SKIPPED, analysis.message)
        elif analysis.status is AnalysisStatus.ERROR:
            context.halt(FileStatus.ERROR, analysis.message)
        return context


class ApplyCorrectionsStep(PipelineStep):
    def __init__(self, engine: CorrectionEngine) -> None:
        self._engine = engine

    async def run(self, context: PipelineContext) -> PipelineContext:
        if context.analysis is None:
            raise ValueError("PipelineContext.analysis must be set before applying corrections")
        corrections = context.analysis.corrections
        if not corrections:
            return context
        Log.info(f"Applying {len(corrections)} corrections to {context.filename}")
        try:
            new_content, outcome = await asyncio.to_thread(
                self._engine.apply, context.path, context.content, corrections
            )
        except FileWriteError as exc:
            Log.error(f"Error applying corrections to {context.filename}: {exc}")
            context.halt(FileStatus.PARTIAL, str(exc))
            return context
        context.fix_outcome = outcome
        if outcome.applied_count:
            context.content = new_content
            context.final_bytes = new_content.encode("utf-8")
        return context


class RecordStateStep(PipelineStep):
    def __init__(self, store: ProcessingStateStore) -> None:
        self._store = store

    async def run(self, context: PipelineContext) -> PipelineContext:
        if context.analysis is None:
            raise ValueError("PipelineContext.analysis must be set before recording state")
        proposed = len(context.analysis.corrections)
        applied = context.fix_outcome.applied_count if context.fix_outcome else 0
        self._store.record(
            context.filename,
            context.final_bytes,
            has_unresolved_errors=applied < proposed,
        )
        return context
