"""Applies proposed corrections to a subtitle file with backup-then-overwrite."""

import os
import shutil
import tempfile
from collections.abc import Sequence
from pathlib import Path

from subtitle_checker.analysis.models import Correction
from subtitle_checker.correction.models import FixOutcome
from subtitle_checker.logging.logger import Log
from subtitle_checker.processor.exceptions import FileWriteError


def backup_path_for(path: Path, suffix: str) -> Path:
    return path.with_name(path.name + suffix)


class CorrectionEngine:
    """Replaces the first occurrence of each proposed span, in the given order.

    Only the first match is touched: a span can legitimately repeat elsewhere
    in the file and the model gives no position. Spans that are not present
    verbatim in the working copy are skipped. A span found with an identical
    replacement still counts as applied.
    """

    def __init__(self, backup_suffix: str = ".backup") -> None:
        if not backup_suffix:
            raise ValueError("backup_suffix must not be empty")
        self._backup_suffix = backup_suffix

    def apply_to_text(
        self, content: str, corrections: Sequence[Correction]
    ) -> tuple[str, list[Correction]]:
        working = content
        applied: list[Correction] = []
        for correction in corrections:
            if not correction.original:
                continue
            if correction.original not in working:
                Log.debug(f"Span not found, skipping: {correction.original!r}")
                continue
            working = working.replace(correction.original, correction.corrected, 1)
            applied.append(correction)
        return working, applied

    def apply(
        self, path: Path, original_content: str, corrections: Sequence[Correction]
    ) -> tuple[str, FixOutcome]:
        """Apply corrections to the file at path.

        When at least one correction applies, the file is first copied to its
        backup path, then replaced with the corrected text. A failure while
        backing up, or corrected text that cannot be encoded, leaves the
        original untouched and writes no backup.

        Raises:
            FileWriteError: if the corrected text cannot be encoded, or the
                backup or the overwrite fails.
        """
        new_content, applied = self.apply_to_text(original_content, corrections)
        if not applied:
            return original_content, FixOutcome()

        try:
            data = new_content.encode("utf-8")
        except UnicodeEncodeError as exc:
            raise FileWriteError(f"Could not encode corrected {path.name}: {exc}") from exc

        backup_path = backup_path_for(path, self._backup_suffix)
        try:
            shutil.copyfile(path, backup_path)
        except OSError as exc:
            raise FileWriteError(f"Could not back up {path.name}: {exc}") from exc

        self._replace_contents(path, data)
        for change in applied:
            Log.info(f"{path.name}: {change.kind}: {change.original!r} -> {change.corrected!r}")
        Log.info(
            f"{len(applied)} corrections applied to {path.name}, "
            f"backup saved as {backup_path.name}"
        )
        return new_content, FixOutcome(applied_changes=applied, backup_path=backup_path)

    @staticmethod
    def _replace_contents(path: Path, data: bytes) -> None:
        tmp_name: str | None = None
        try:
            with tempfile.NamedTemporaryFile(
                "wb", dir=path.parent, prefix=f".{path.name}.", suffix=".tmp", delete=False
            ) as tmp:
                tmp_name = tmp.name
                tmp.write(data)
            shutil.copymode(path, tmp_name)
            os.replace(tmp_name, path)
        except OSError as exc:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise FileWriteError(f"Could not write corrected {path.name}: {exc}") from exc
