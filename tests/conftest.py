"""Pytest configuration and fixtures."""

import time
from collections.abc import Sequence

import pytest
from fastapi.testclient import TestClient

from codereview.main import app
from codereview.models.review import Finding, Hunk, ReviewResult, Severity


class FakeAnalyzer:
    """Analyzer double that records its input and returns canned findings."""

    def __init__(
        self,
        tag: str,
        findings: Sequence[Finding] = (),
        error: Exception | None = None,
        delay: float = 0.0,
    ) -> None:
        self._tag = tag
        self.findings = list(findings)
        self.error = error
        self.delay = delay
        self.calls: list[tuple[Hunk, ...]] = []

    @property
    def tag(self) -> str:
        return self._tag

    def analyze(self, hunks: Sequence[Hunk]) -> ReviewResult:
        self.calls.append(tuple(hunks))
        if self.delay:
            time.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return ReviewResult(findings=self.findings, summary=f"{self.tag} done")


def make_finding(
    title: str = "Issue",
    severity: Severity = Severity.MEDIUM,
    source_tag: str = "SECURITY",
    file_path: str = "app.py",
    line_start: int = 1,
    line_end: int = 1,
) -> Finding:
    return Finding(
        file_path=file_path,
        line_start=line_start,
        line_end=line_end,
        title=title,
        rationale="because",
        suggestion="fix it",
        severity=severity,
        source_tag=source_tag,
    )


@pytest.fixture
def client() -> TestClient:
    """Return a FastAPI TestClient."""
    return TestClient(app)


@pytest.fixture
def fake_analyzer() -> type[FakeAnalyzer]:
    """Return the analyzer double class."""
    return FakeAnalyzer


@pytest.fixture
def finding_factory():
    """Return a Finding builder with sensible defaults."""
    return make_finding


@pytest.fixture
def sample_patch() -> str:
    """Two files, three hunks."""
    return (
        "diff --git a/app.py b/app.py\n"
        "index 1111111..2222222 100644\n"
        "--- a/app.py\n"
        "+++ b/app.py\n"
        "@@ -1,2 +1,3 @@\n"
        " import os\n"
        '+API_KEY = "sk-live-123"\n'
        ' print("hi")\n'
        "@@ -10,2 +11,2 @@ def main():\n"
        "-    pass\n"
        "+    return 1\n"
        "diff --git a/db.py b/db.py\n"
        "index 3333333..4444444 100644\n"
        "--- a/db.py\n"
        "+++ b/db.py\n"
        "@@ -5,3 +5,4 @@ def load(ids):\n"
        "     for i in ids:\n"
        "+        rows.append(query(i))\n"
    )
