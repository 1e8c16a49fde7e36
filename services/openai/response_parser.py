"""Helpers to parse chat completion outputs into analysis results.

The model is asked to answer in a labelled plain-text convention::

    title="..." description="..." keys=[a,b,c] categoryId="5"

Rules:
    - Labels are case-insensitive and may have whitespace around `=`.
    - A quoted value ends at the first `"` that is followed by another
      label or by the end of a line, so quotes inside a title survive.
      Separators and markdown emphasis (`,` `;` `.` `*` `_`) may sit
      between the closing quote and what follows it.
    - A title or description that still contains another `label=` means
      a closing quote was lost, and the reply is rejected.
    - `keys=[...]` may span several lines.
    - The quotes around the category id are optional.
"""

import re
from typing import Any, Dict, Optional

from models.analysis import AnalysisResult
from utils.errors import ParseError

_LABELS = r"(?:title|description|keys|categoryId)"
_SEPARATORS = r"[\s,;.*_`]*"
_VALUE_END = rf'"(?={_SEPARATORS}(?:\b{_LABELS}\s*=|$))'
_FLAGS = re.IGNORECASE | re.DOTALL | re.MULTILINE

TITLE_PATTERN = re.compile(rf'\btitle\s*=\s*"(?P<value>.*?){_VALUE_END}', _FLAGS)
DESCRIPTION_PATTERN = re.compile(rf'\bdescription\s*=\s*"(?P<value>.*?){_VALUE_END}', _FLAGS)
KEYS_PATTERN = re.compile(r"\bkeys\s*=\s*\[(?P<value>.*?)\]", _FLAGS)
CATEGORY_PATTERN = re.compile(r'\bcategoryId\s*=\s*"?\s*(?P<value>\d+)\s*"?', re.IGNORECASE)
EMBEDDED_LABEL_PATTERN = re.compile(rf"\b{_LABELS}\s*=", re.IGNORECASE)


def normalize_keywords(raw: str) -> str:
    """Clean a comma-separated keyword list without reordering or de-duplicating.

    Double quotes are removed, entries trimmed, and empty entries dropped.
    Applying it to its own output returns the same string.
    """
    cleaned = (part.replace('"', "").strip() for part in raw.split(","))
    return ",".join(part for part in cleaned if part)


def _search(pattern: re.Pattern, text: str) -> Optional[str]:
    match = pattern.search(text)
    if match is None:
        return None
    value = match.group("value").strip()
    return value or None


def parse_labelled_response(text: str) -> AnalysisResult:
    """Extract title, description, keywords and category from the model reply.

    Raises:
        ParseError: If any of the four fields is missing or empty, or if a
            quoted value runs into the next label.
    """
    title = _search(TITLE_PATTERN, text)
    description = _search(DESCRIPTION_PATTERN, text)
    raw_keys = _search(KEYS_PATTERN, text)
    keywords = normalize_keywords(raw_keys) if raw_keys else ""
    category = _search(CATEGORY_PATTERN, text)

    missing = [
        name
        for name, value in (
            ("title", title),
            ("description", description),
            ("keys", keywords),
            ("categoryId", category),
        )
        if not value
    ]
    if missing:
        raise ParseError(f"Invalid response format from the analysis model (missing: {', '.join(missing)})")

    overrun = [
        name
        for name, value in (("title", title), ("description", description))
        if EMBEDDED_LABEL_PATTERN.search(value)
    ]
    if overrun:
        raise ParseError(f"Invalid response format from the analysis model (unterminated: {', '.join(overrun)})")

    return AnalysisResult(
        title=title,
        description=description,
        keywords=keywords,
        category_id=int(category),
    )


def extract_message_text(response: Any) -> str:
    """Return the text content of the first choice, or an empty string."""
    choices = getattr(response, "choices", None) or []
    if not choices:
        return ""
    message = getattr(choices[0], "message", None)
    content = getattr(message, "content", None)
    if isinstance(content, list):
        # Some compatible providers return content parts instead of a string.
        return "".join(
            part.get("text", "") if isinstance(part, dict) else str(getattr(part, "text", ""))
            for part in content
        )
    return content or ""


def extract_usage(response: Any) -> Dict[str, Optional[int]]:
    """Return token usage information from the response, if present."""
    usage = getattr(response, "usage", None)
    return {
        "input_tokens": getattr(usage, "prompt_tokens", None) if usage else None,
        "output_tokens": getattr(usage, "completion_tokens", None) if usage else None,
    }
