"""Unit tests for the LLM-backed analyzers."""

import json
from unittest.mock import MagicMock

from codereview.analyzers.base import Analyzer
from codereview.analyzers.llm_analyzer import (
    PERFORMANCE_PROFILE,
    SECURITY_PROFILE,
    STYLE_PROFILE,
    LLMAnalyzer,
    build_default_analyzers,
)
from codereview.models.review import Hunk, Severity
from codereview.prompts.analyzer_prompts import NO_STANDARDS

HUNKS = [
    Hunk(file_path="app.py", start_line=1, end_line=2, text="@@ -1 +1,2 @@\n+password = 'x'\n"),
    Hunk(file_path="db.py", start_line=4, end_line=4, text="@@ -4 +4 @@\n+rows = q()\n"),
]

ONE_FINDING = json.dumps(
    {"findings": [{"title": "Hardcoded password", "severity": "HIGH", "lineStart": 1, "lineEnd": 1}]}
)
NO_FINDINGS = '{"findings": []}'


def test_one_backend_call_per_hunk_with_fallback_path():
    generate = MagicMock(side_effect=[ONE_FINDING, NO_FINDINGS])
    analyzer = LLMAnalyzer(SECURITY_PROFILE, generate)

    result = analyzer.analyze(HUNKS)

    assert generate.call_count == 2
    (finding,) = result.findings
    assert finding.file_path == "app.py"
    assert finding.severity == Severity.HIGH
    assert finding.source_tag == "SECURITY"
    assert result.summary == "Security review complete: 1 findings"


def test_prompt_contains_hunk_checklist_and_standards():
    generate = MagicMock(return_value=NO_FINDINGS)
    retriever = MagicMock()
    retriever.retrieve.return_value = "- Always use bound parameters"

    LLMAnalyzer(PERFORMANCE_PROFILE, generate, retriever=retriever, top_k=3).analyze(
        HUNKS[:1]
    )

    retriever.retrieve.assert_called_once_with(
        PERFORMANCE_PROFILE.knowledge_query, 3, "performance"
    )
    (prompt,), _ = generate.call_args
    assert "- Always use bound parameters" in prompt
    assert "File: app.py" in prompt
    assert "```diff\n@@ -1 +1,2 @@" in prompt
    assert "N+1 database queries" in prompt
    assert PERFORMANCE_PROFILE.role in prompt


def test_prompt_without_retriever_says_no_standards():
    generate = MagicMock(return_value=NO_FINDINGS)

    LLMAnalyzer(STYLE_PROFILE, generate).analyze(HUNKS[:1])

    (prompt,), _ = generate.call_args
    assert NO_STANDARDS in prompt


def test_backend_failure_skips_only_that_hunk():
    generate = MagicMock(side_effect=[RuntimeError("rate limited"), ONE_FINDING])

    result = LLMAnalyzer(SECURITY_PROFILE, generate).analyze(HUNKS)

    (finding,) = result.findings
    assert finding.file_path == "db.py"


def test_malformed_response_yields_no_findings():
    generate = MagicMock(return_value="I could not review this.")

    result = LLMAnalyzer(STYLE_PROFILE, generate).analyze(HUNKS)

    assert result.findings == []
    assert result.summary == "Style review complete: 0 findings"


def test_default_analyzers():
    analyzers = build_default_analyzers(MagicMock(return_value=NO_FINDINGS))

    assert [a.tag for a in analyzers] == ["SECURITY", "PERFORMANCE", "STYLE"]
    assert [a.profile.category_hint for a in analyzers] == [
        "security",
        "performance",
        "general",
    ]
    assert all(isinstance(a, Analyzer) for a in analyzers)
