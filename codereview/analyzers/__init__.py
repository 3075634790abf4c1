"""Pluggable review analyzers."""

from .base import Analyzer, ContextRetriever, TextGenerator
from .llm_analyzer import (
    DEFAULT_PROFILES,
    AnalyzerProfile,
    LLMAnalyzer,
    build_default_analyzers,
)

__all__ = [
    "Analyzer",
    "ContextRetriever",
    "TextGenerator",
    "AnalyzerProfile",
    "LLMAnalyzer",
    "DEFAULT_PROFILES",
    "build_default_analyzers",
]
