"""Core review models shared by the segmenter, analyzers and aggregator."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Severity(str, Enum):
    """Severity levels for review findings (most to least critical)."""

    BLOCKER = "BLOCKER"
    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"
    INFO = "INFO"

    def __str__(self) -> str:
        return self.value

    @property
    def rank(self) -> int:
        """Position in the total order; 0 is the most critical."""
        return _SEVERITY_RANK[self]

    def outranks(self, other: "Severity") -> bool:
        """Return True if this severity is strictly more critical than ``other``."""
        return self.rank < other.rank

    @classmethod
    def parse(cls, value: Any) -> "Severity":
        """Map a raw analyzer value to a Severity, defaulting to INFO."""
        if not isinstance(value, str):
            return cls.INFO
        try:
            return cls(value.strip().upper())
        except ValueError:
            return cls.INFO


_SEVERITY_RANK: dict[Severity, int] = {
    severity: rank for rank, severity in enumerate(Severity)
}


class Hunk(BaseModel):
    """One contiguous changed region of one file, in unified-diff notation.

    ``start_line``/``end_line`` are best-effort and may both be 0 when the
    hunk header could not be resolved. Only ``file_path`` and ``text`` are
    guaranteed.
    """

    model_config = ConfigDict(frozen=True)

    file_path: str
    start_line: int = 0
    end_line: int = 0
    text: str


class Finding(BaseModel):
    """A single issue reported by one analyzer for one hunk."""

    model_config = ConfigDict(frozen=True)

    file_path: str
    line_start: int = 0
    line_end: int = 0
    title: str = ""
    rationale: str = ""
    suggestion: str = ""
    severity: Severity = Severity.INFO
    source_tag: str


class ReviewResult(BaseModel):
    """Output of one analyzer, and also the final merged output."""

    findings: list[Finding] = Field(default_factory=list)
    summary: str = ""

    @classmethod
    def empty(cls) -> "ReviewResult":
        """Return the zero value used when an analyzer fails."""
        return cls(findings=[], summary="")

    def count(self, severity: Severity) -> int:
        return sum(1 for f in self.findings if f.severity == severity)

    @property
    def total_findings(self) -> int:
        return len(self.findings)
