"""Capability interfaces for analyzers and their external collaborators."""

from collections.abc import Callable, Sequence
from typing import Protocol, runtime_checkable

from codereview.models.review import Hunk, ReviewResult

# Text-generation backend: prompt in, raw model text out. May raise.
TextGenerator = Callable[[str], str]


@runtime_checkable
class Analyzer(Protocol):
    """A pluggable unit that turns a sequence of hunks into a ReviewResult.

    ``tag`` identifies the analyzer on every finding it produces. The set of
    tags is open; aggregation never depends on it.
    """

    @property
    def tag(self) -> str: ...

    def analyze(self, hunks: Sequence[Hunk]) -> ReviewResult: ...


class ContextRetriever(Protocol):
    """Knowledge-base lookup used to ground analyzer prompts."""

    def retrieve(self, query: str, top_k: int, category_hint: str) -> str:
        """Return a best-effort context blob; an empty string is acceptable."""
        ...
