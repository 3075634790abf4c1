"""Merge, de-duplicate and summarize findings from multiple analyzers."""

import re
from collections.abc import Sequence

from codereview.models.review import Finding, ReviewResult, Severity

FindingKey = tuple[str, int, int, str]

_WHITESPACE = re.compile(r"\s+")


def normalize_title(title: str) -> str:
    """Lowercase a title and collapse whitespace runs to a single space."""
    return _WHITESPACE.sub(" ", (title or "").lower())


def finding_key(finding: Finding) -> FindingKey:
    return (
        finding.file_path,
        finding.line_start,
        finding.line_end,
        normalize_title(finding.title),
    )


def dedupe_findings(findings: Sequence[Finding]) -> list[Finding]:
    """Keep one finding per key, preferring the higher severity.

    On equal severity the finding seen first is kept, so the result depends
    on the order of ``findings``.
    """
    by_key: dict[FindingKey, Finding] = {}
    for finding in findings:
        key = finding_key(finding)
        existing = by_key.get(key)
        if existing is None or finding.severity.outranks(existing.severity):
            by_key[key] = finding
    return list(by_key.values())


def summarize(findings: Sequence[Finding]) -> str:
    blockers = sum(1 for f in findings if f.severity == Severity.BLOCKER)
    highs = sum(1 for f in findings if f.severity == Severity.HIGH)
    return f"Findings: {len(findings)} (BLOCKER={blockers}, HIGH={highs})"


def merge_results(parts: Sequence[ReviewResult]) -> ReviewResult:
    """Combine analyzer results into one de-duplicated, summarized result."""
    flattened = [finding for part in parts for finding in part.findings]
    deduped = dedupe_findings(flattened)
    return ReviewResult(findings=deduped, summary=summarize(deduped))
