"""LLM response parsing: recover findings from JSON wrapped in prose or fences."""

import json
import logging
import re
from collections.abc import Iterator
from typing import Any

from codereview.models.review import Finding, Severity

logger = logging.getLogger(__name__)

JSON_FENCE = re.compile(r"```[ \t]*json[ \t]*\r?\n?(.*?)```", re.DOTALL | re.IGNORECASE)
ANY_FENCE = re.compile(r"```(.*?)```", re.DOTALL)
FENCE_TAG = re.compile(r"^[ \t]*[\w+#.-]*[ \t]*\r?\n")

OPENERS = "{["
OPENER = re.compile(r"[{\[]")
CLOSERS = "}]"


def _fenced_json(text: str) -> str | None:
    """Interior of the first fence explicitly tagged as JSON."""
    match = JSON_FENCE.search(text)
    return match.group(1).strip() if match else None


def _fenced_structure(text: str) -> str | None:
    """Interior of the first fence (any tag) that holds an object or array."""
    for match in ANY_FENCE.finditer(text):
        interior = FENCE_TAG.sub("", match.group(1), count=1).strip()
        if interior.startswith(("{", "[")):
            return interior
    return None


def _balanced_end(text: str, start: int) -> int | None:
    """Index just past the bracket closing the one at ``start``.

    Brackets inside string literals are ignored; a backslash escapes the
    next character while inside a string.
    """
    depth = 0
    in_string = False
    escaped = False

    for i in range(start, len(text)):
        c = text[i]

        if in_string:
            if escaped:
                escaped = False
            elif c == "\\":
                escaped = True
            elif c == '"':
                in_string = False
            continue

        if c == '"':
            in_string = True
        elif c in OPENERS:
            depth += 1
        elif c in CLOSERS:
            depth -= 1
            if depth == 0:
                return i + 1
    return None


def _bracket_spans(text: str) -> Iterator[str]:
    """Yield top-level balanced ``{...}``/``[...]`` spans, left to right.

    Scanning resumes after the closing bracket of each span, so a span is
    never searched for nested candidates.
    """
    start = 0
    while True:
        opener = OPENER.search(text, start)
        if opener is None:
            return
        first = opener.start()
        end = _balanced_end(text, first)
        if end is None:
            return
        yield text[first:end]
        start = end


def _load_payload(candidate: str) -> dict[str, Any] | None:
    """Parse a candidate and accept it only if it carries a findings array."""
    try:
        data = json.loads(candidate)
    except (ValueError, RecursionError):
        return None
    if isinstance(data, dict) and isinstance(data.get("findings"), list):
        return data
    return None


def extract_json_payload(raw: str) -> dict[str, Any] | None:
    """Recover the ``{"findings": [...], "summary": ...}`` object from raw text.

    Candidates are tried in order: a ```json fence, any fence holding an
    object or array, balanced bracket spans found left to right, and finally
    the whole trimmed text.

    Returns:
        The parsed payload, or None when no candidate parses into an object
        with a ``findings`` array
    """
    if not isinstance(raw, str):
        return None
    text = raw.strip()

    fenced = _fenced_json(text)
    if fenced is None:
        fenced = _fenced_structure(text)
    if fenced is not None:
        return _load_payload(fenced)

    saw_span = False
    for span in _bracket_spans(text):
        saw_span = True
        payload = _load_payload(span)
        if payload is not None:
            return payload
    if saw_span:
        return None

    return _load_payload(text)


def _as_text(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    return ""


def _as_int(value: Any) -> int:
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return 0
    return 0


def _first(item: dict[str, Any], *keys: str) -> Any:
    for key in keys:
        if key in item and item[key] is not None:
            return item[key]
    return None


def _finding_from_dict(
    item: dict[str, Any], source_tag: str, fallback_path: str
) -> Finding:
    """Convert a raw dict to a Finding, with safe defaults for every field."""
    file_path = _as_text(_first(item, "filePath", "file_path")).strip()
    return Finding(
        file_path=file_path or fallback_path,
        line_start=_as_int(_first(item, "lineStart", "line_start")),
        line_end=_as_int(_first(item, "lineEnd", "line_end")),
        title=_as_text(item.get("title")),
        rationale=_as_text(item.get("rationale")),
        suggestion=_as_text(item.get("suggestion")),
        severity=Severity.parse(item.get("severity")),
        source_tag=source_tag,
    )


def extract_findings(
    raw: str,
    source_tag: str,
    fallback_path: str = "",
    logger: logging.Logger = logger,
) -> list[Finding]:
    """Parse an analyzer response into findings. Never raises.

    Args:
        raw: Raw text returned by the text-generation backend
        source_tag: Tag of the analyzer that produced the response
        fallback_path: File path used when a finding omits ``filePath``
        logger: Logger that receives malformed-output warnings

    Returns:
        Findings in response order; empty when nothing usable was found
    """
    try:
        payload = extract_json_payload(raw)
        if payload is None:
            preview = raw[:200] if isinstance(raw, str) else repr(raw)
            logger.warning(
                f"[{source_tag}] No findings payload in analyzer response: {preview!r}"
            )
            return []

        findings = []
        for item in payload["findings"]:
            if not isinstance(item, dict):
                logger.debug(f"[{source_tag}] Skipping non-object finding: {item!r}")
                continue
            findings.append(_finding_from_dict(item, source_tag, fallback_path))
        return findings

    except Exception as e:
        logger.warning(f"[{source_tag}] Failed to parse analyzer response: {e}")
        return []
