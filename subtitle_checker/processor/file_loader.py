from pathlib import Path

from subtitle_checker.processor.exceptions import FileReadError


class FileLoader:
    """Finds subtitle files in a directory and reads them."""

    def __init__(self, extension: str = ".vtt") -> None:
        self._extension = extension.lower()

    def list_files(self, directory: Path) -> list[Path]:
        """Return regular files with the subtitle extension, sorted by name.

        Raises:
            FileReadError: if the directory cannot be listed.
        """
        try:
            entries = list(directory.iterdir())
        except OSError as exc:
            raise FileReadError(f"Error reading subtitles directory {directory}: {exc}") from exc
        return sorted(
            (p for p in entries if p.name.lower().endswith(self._extension) and p.is_file()),
            key=lambda p: p.name,
        )

    def load(self, path: Path) -> bytes:
        """Read raw file bytes.

        Raises:
            FileReadError: if the file cannot be read.
        """
        try:
            return path.read_bytes()
        except OSError as exc:
            raise FileReadError(f"Could not read {path.name}: {exc}") from exc

    @staticmethod
    def decode(path: Path, raw: bytes) -> str:
        """Decode UTF-8 without newline translation so bytes round-trip on write.

        Raises:
            FileReadError: if the bytes are not valid UTF-8.
        """
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise FileReadError(f"{path.name} is not valid UTF-8: {exc}") from exc
