"""Data models for the code review service."""

from .requests import BackendCheckRequest, ReviewDiffRequest, ReviewPRRequest
from .review import Finding, Hunk, ReviewResult, Severity

__all__ = [
    "Finding",
    "Hunk",
    "ReviewResult",
    "Severity",
    "ReviewDiffRequest",
    "ReviewPRRequest",
    "BackendCheckRequest",
]
