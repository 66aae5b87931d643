class ProcessorError(Exception):
    """Base exception for all processor-related errors."""


class FileReadError(ProcessorError):
    """Raised when a subtitle file cannot be read or decoded."""


class FileWriteError(ProcessorError):
    """Raised when a backup or corrected subtitle file cannot be written."""
