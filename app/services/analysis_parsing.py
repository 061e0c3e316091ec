from __future__ import annotations

import json
import math
import re
from typing import Any

from app.ai.exceptions import AnalysisParseError

BACKFILL_ATS_OFFSET = -5
BACKFILL_KEYWORDS_OFFSET = 3
BACKFILL_READABILITY_OFFSET = 5

_JSON_OBJECT_RE = re.compile(r"\{.*\}", re.DOTALL)

_DERIVED_SCORE_OFFSETS = {
    "atsScore": BACKFILL_ATS_OFFSET,
    "keywordsScore": BACKFILL_KEYWORDS_OFFSET,
    "readabilityScore": BACKFILL_READABILITY_OFFSET,
}
_PASSTHROUGH_FIELDS = ("missingKeywords", "suggestions", "aiAnalysis")


def is_present(value: Any) -> bool:
    """Loose presence check: None, False, zero, NaN and "" count as absent.

    Empty lists and dicts are present.
    """
    if value is None or value is False:
        return False
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value != 0 and not (isinstance(value, float) and math.isnan(value))
    if isinstance(value, str):
        return value != ""
    return True


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def extract_json_object(text: str) -> dict[str, Any] | None:
    """Parse the greedy first-``{`` to last-``}`` span of ``text``.

    Returns None when the text holds no brace pair at all.
    """
    match = _JSON_OBJECT_RE.search(text or "")
    if not match:
        return None
    try:
        parsed = json.loads(match.group(0))
    except json.JSONDecodeError as exc:
        raise AnalysisParseError(f"Malformed JSON in response: {exc}") from exc
    if not isinstance(parsed, dict):
        raise AnalysisParseError("Response JSON is not an object.")
    return parsed


def backfill_analysis_fields(raw: dict[str, Any], defaults: dict[str, Any]) -> dict[str, Any]:
    overall = raw.get("overallScore")
    result: dict[str, Any] = {
        "overallScore": overall if is_present(overall) else defaults["overallScore"],
    }

    for field, offset in _DERIVED_SCORE_OFFSETS.items():
        value = raw.get(field)
        if is_present(value):
            result[field] = value
        elif is_present(overall) and _is_number(overall):
            result[field] = overall + offset
        else:
            result[field] = defaults[field]

    for field in _PASSTHROUGH_FIELDS:
        value = raw.get(field)
        result[field] = value if is_present(value) else defaults[field]

    return result
