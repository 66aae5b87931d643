from abc import ABC, abstractmethod

from subtitle_checker.analysis.models import AnalysisResult


class BaseAnalyzer(ABC):
    """Contract for all subtitle text analyzers."""

    @abstractmethod
    async def analyze(self, text: str, filename: str) -> AnalysisResult:
        """Check subtitle text for spelling and grammar mistakes.

        Args:
            text: Flattened cue text of one subtitle file.
            filename: Name of the originating file, used for diagnostics.

        Returns:
            AnalysisResult with status success, error or skipped. Provider
            failures are reported through the result, not raised.
        """
