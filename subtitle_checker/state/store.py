"""Change-detection store: remembers which subtitle files were already analyzed."""

import hashlib
import json
import os
import tempfile
from dataclasses import asdict
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from subtitle_checker.logging.logger import Log
from subtitle_checker.state.models import DecisionReason, FileState, ProcessingDecision


def fingerprint(content: bytes) -> str:
    """Return the SHA-256 hex digest of raw file bytes."""
    return hashlib.sha256(content).hexdigest()


class ProcessingStateStore:
    """Maps filename -> FileState and decides whether a file needs analysis.

    The mapping is kept in memory between load() and persist(). Entries for
    distinct filenames may be recorded from concurrent tasks; persist() must
    only be called once all of them have finished.
    """

    def __init__(self, state_file: Path) -> None:
        self._state_file = state_file
        self._entries: dict[str, FileState] = {}

    @property
    def state_file(self) -> Path:
        return self._state_file

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, filename: str) -> FileState | None:
        return self._entries.get(filename)

    def load(self) -> None:
        """Read persisted state. A missing or unreadable file yields empty state."""
        self._entries = {}
        if not self._state_file.exists():
            Log.debug(f"No state file at {self._state_file}, starting fresh")
            return
        try:
            raw = json.loads(self._state_file.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
            Log.warning(f"Could not load state file {self._state_file}, starting fresh: {exc}")
            return
        if not isinstance(raw, dict):
            Log.warning(f"State file {self._state_file} is not an object, starting fresh")
            return
        for filename, entry in raw.items():
            state = self._parse_entry(entry)
            if state is None:
                Log.warning(f"Dropping malformed state entry for {filename}")
                continue
            self._entries[filename] = state
        Log.info(f"Loaded processing state for {len(self._entries)} files")

    def decide(
        self, filename: str, current_content: bytes, force: bool = False
    ) -> ProcessingDecision:
        if force:
            return ProcessingDecision(True, DecisionReason.FORCED)
        previous = self._entries.get(filename)
        if previous is None:
            return ProcessingDecision(True, DecisionReason.NEW)
        if previous.content_hash != fingerprint(current_content):
            return ProcessingDecision(True, DecisionReason.MODIFIED)
        return ProcessingDecision(False, DecisionReason.UNCHANGED)

    def decide_file(self, path: Path, force: bool = False) -> ProcessingDecision:
        """Decide for a file on disk; read failures mean "process it"."""
        if force:
            return ProcessingDecision(True, DecisionReason.FORCED)
        try:
            content = path.read_bytes()
        except OSError as exc:
            Log.warning(f"Could not fingerprint {path.name}: {exc}")
            return ProcessingDecision(True, DecisionReason.STATE_ERROR)
        return self.decide(path.name, content, force=False)

    def record(
        self, filename: str, final_content: bytes, has_unresolved_errors: bool
    ) -> FileState:
        """Store the fingerprint of the content as it is on disk after this run."""
        state = FileState(
            content_hash=fingerprint(final_content),
            last_processed_at=datetime.now(timezone.utc).isoformat(),
            has_unresolved_errors=has_unresolved_errors,
        )
        self._entries[filename] = state
        return state

    def persist(self) -> bool:
        """Write the whole mapping via temp file + atomic replace.

        Returns False (after logging) if the state could not be written.
        """
        payload = {name: asdict(state) for name, state in self._entries.items()}
        directory = self._state_file.parent
        tmp_name: str | None = None
        try:
            directory.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=directory,
                prefix=f".{self._state_file.name}.",
                suffix=".tmp",
                delete=False,
            ) as tmp:
                tmp_name = tmp.name
                json.dump(payload, tmp, indent=2, sort_keys=True)
                tmp.write("\n")
            os.replace(tmp_name, self._state_file)
        except OSError as exc:
            Log.error(f"Error saving state to {self._state_file}: {exc}")
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            return False
        Log.debug(f"Saved processing state for {len(payload)} files")
        return True

    @staticmethod
    def _parse_entry(entry: Any) -> FileState | None:
        if not isinstance(entry, dict):
            return None
        content_hash = entry.get("content_hash")
        last_processed_at = entry.get("last_processed_at")
        if not isinstance(content_hash, str) or not content_hash:
            return None
        if not isinstance(last_processed_at, str):
            last_processed_at = ""
        return FileState(
            content_hash=content_hash,
            last_processed_at=last_processed_at,
            has_unresolved_errors=bool(entry.get("has_unresolved_errors", False)),
        )
