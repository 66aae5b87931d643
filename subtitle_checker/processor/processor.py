from collections.abc import Sequence
from pathlib import Path

from subtitle_checker.analysis.base import BaseAnalyzer
from subtitle_checker.analysis.factory import AnalyzerFactory
from subtitle_checker.config.settings import Settings
from subtitle_checker.correction.engine import CorrectionEngine
from subtitle_checker.processor.file_loader import FileLoader
from subtitle_checker.processor.models import FileResult
from subtitle_checker.processor.pipeline import PipelineContext, PipelineStep
from subtitle_checker.processor.steps import (
    AnalyzeStep,
    ApplyCorrectionsStep,
    ExtractTextStep,
    ReadFileStep,
    RecordStateStep,
)
from subtitle_checker.state.models import DecisionReason
from subtitle_checker.state.store import ProcessingStateStore
from subtitle_checker.vtt.vtt_extractor import VttCueTextExtractor


class Processor:
    """Runs one subtitle file through its pipeline steps.

    Pipeline: read -> extract -> analyze -> correct -> record state.
    A step may halt the pipeline (no content, analysis skipped or failed,
    corrections not written); later steps then do not run and the state
    entry is left untouched.
    """

    def __init__(self, steps: Sequence[PipelineStep]) -> None:
        self._steps = list(steps)

    async def process(self, path: Path, reason: DecisionReason) -> FileResult:
        context = PipelineContext(path=path, reason=reason)
        for step in self._steps:
            context = await step.run(context)
            if context.halted:
                break
        return FileResult(
            filename=context.filename,
            status=context.status,
            reason=context.reason,
            analysis=context.analysis,
            fix_outcome=context.fix_outcome,
            extracted_length=len(context.extracted_text),
            error=context.error_message,
        )


def build_processor(
    settings: Settings,
    store: ProcessingStateStore,
    analyzer: BaseAnalyzer | None = None,
) -> Processor:
    """Build a Processor with all required adapters."""
    file_loader = FileLoader(extension=settings.subtitle_extension)
    if analyzer is None:
        analyzer = AnalyzerFactory.create(settings)
    return Processor(
        steps=[
            ReadFileStep(file_loader),
            ExtractTextStep(VttCueTextExtractor()),
            AnalyzeStep(analyzer),
            ApplyCorrectionsStep(CorrectionEngine(backup_suffix=settings.backup_suffix)),
            RecordStateStep(store),
        ]
    )
