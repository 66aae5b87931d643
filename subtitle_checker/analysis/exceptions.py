class AnalysisError(Exception):
    """Raised when analysis of a file's text fails."""


class AnalysisResponseError(AnalysisError):
    """Raised when the provider answers without usable content."""


class AnalysisNetworkError(AnalysisError):
    """Raised when the AI provider call fails due to network/infrastructure issues."""
