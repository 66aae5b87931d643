from abc import ABC, abstractmethod


class BaseCueTextExtractor(ABC):
    """Contract for subtitle cue-text extractors."""

    @abstractmethod
    def extract(self, content: str) -> str:
        """Extract plain cue text from raw subtitle file content.

        Args:
            content: Whole subtitle file decoded as text.

        Returns:
            Cue text with markup, identifiers and timing lines removed,
            cue lines joined by a single space. Empty string if the file
            has no cue text.
        """
