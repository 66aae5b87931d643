"""Turns the provider's parsed JSON into domain objects.

The model is untrusted: malformed parts are dropped rather than failing the
whole file.
"""

from typing import Any

from subtitle_checker.analysis.models import AnalysisSummary, Correction, CorrectionKind
from subtitle_checker.logging.logger import Log

_VALID_KINDS: frozenset[str] = frozenset({"spelling", "grammar"})


def build_summary(raw: Any) -> AnalysisSummary | None:
    if not isinstance(raw, dict):
        return None
    return AnalysisSummary(
        spelling_errors=_as_count(raw.get("spellingErrors")),
        grammar_errors=_as_count(raw.get("grammarErrors")),
        overall_quality=str(raw.get("overallQuality") or ""),
    )


def build_corrections(raw: Any, filename: str = "") -> list[Correction]:
    """Build the usable corrections, in the order the model returned them."""
    if raw is None:
        return []
    if not isinstance(raw, list):
        Log.warning(f"Ignoring non-list 'corrections' for {filename}")
        return []
    corrections: list[Correction] = []
    for index, item in enumerate(raw):
        correction = _build_correction(item)
        if correction is None:
            Log.warning(f"Dropping malformed correction at index {index} for {filename}")
            continue
        corrections.append(correction)
    return corrections


def _build_correction(raw: Any) -> Correction | None:
    if not isinstance(raw, dict):
        return None
    original = raw.get("original")
    corrected = raw.get("corrected")
    if not isinstance(original, str) or not original:
        return None
    if not isinstance(corrected, str):
        return None
    explanation = raw.get("explanation")
    return Correction(
        original=original,
        corrected=corrected,
        kind=_as_kind(raw.get("type")),
        explanation=explanation if isinstance(explanation, str) else "",
    )


def _as_kind(raw: Any) -> CorrectionKind:
    kind = str(raw or "").strip().lower()
    if kind in _VALID_KINDS:
        return kind  # type: ignore[return-value]
    return "grammar" if "grammar" in kind else "spelling"


def _as_count(raw: Any) -> int:
    if isinstance(raw, bool):
        return 0
    if isinstance(raw, (int, float)):
        return max(0, int(raw))
    if isinstance(raw, str) and raw.strip().isdigit():
        return int(raw.strip())
    return 0
