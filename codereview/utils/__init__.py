"""Utility functions and helpers."""

from .concurrency import run_concurrently
from .logging import setup_observability
from .response_parsing import extract_findings, extract_json_payload

__all__ = [
    "setup_observability",
    "run_concurrently",
    "extract_findings",
    "extract_json_payload",
]
