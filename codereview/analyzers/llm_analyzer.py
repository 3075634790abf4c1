"""LLM-backed analyzers: one prompt per hunk, JSON findings out."""

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from codereview.analyzers.base import ContextRetriever, TextGenerator
from codereview.models.review import Finding, Hunk, ReviewResult
from codereview.prompts.analyzer_prompts import (
    PERFORMANCE_CHECKLIST,
    SECURITY_CHECKLIST,
    STYLE_CHECKLIST,
    build_review_prompt,
)
from codereview.utils.response_parsing import extract_findings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AnalyzerProfile:
    """What an analyzer looks for and how it grounds its prompt."""

    tag: str
    role: str
    knowledge_query: str
    category_hint: str
    checklist: tuple[str, ...] = ()


SECURITY_PROFILE = AnalyzerProfile(
    tag="SECURITY",
    role="security expert reviewing code changes for vulnerabilities",
    knowledge_query="security review; injection; SSRF; XXE; secrets; crypto; authz; PII logging",
    category_hint="security",
    checklist=tuple(SECURITY_CHECKLIST),
)

PERFORMANCE_PROFILE = AnalyzerProfile(
    tag="PERFORMANCE",
    role="senior PERFORMANCE reviewer",
    knowledge_query="performance; allocations; memory pressure; SQL N+1; caching; pagination",
    category_hint="performance",
    checklist=tuple(PERFORMANCE_CHECKLIST),
)

STYLE_PROFILE = AnalyzerProfile(
    tag="STYLE",
    role="senior CLEAN CODE reviewer focused on readability and maintainability",
    knowledge_query="clean code; naming; complexity; duplication; comments; exceptions; logging",
    category_hint="general",
    checklist=tuple(STYLE_CHECKLIST),
)

DEFAULT_PROFILES = (SECURITY_PROFILE, PERFORMANCE_PROFILE, STYLE_PROFILE)


class LLMAnalyzer:
    """Analyzer that asks a text-generation backend to review each hunk."""

    def __init__(
        self,
        profile: AnalyzerProfile,
        generate: TextGenerator,
        retriever: ContextRetriever | None = None,
        top_k: int = 6,
        logger: logging.Logger = logger,
    ) -> None:
        self.profile = profile
        self.generate = generate
        self.retriever = retriever
        self.top_k = top_k
        self.logger = logger

    @property
    def tag(self) -> str:
        return self.profile.tag

    def analyze(self, hunks: Sequence[Hunk]) -> ReviewResult:
        """Review every hunk; a backend failure on one hunk skips only that hunk."""
        self.logger.info(f"Starting {self.tag} review for {len(hunks)} hunks")
        standards = self._grounding()

        findings: list[Finding] = []
        for i, hunk in enumerate(hunks, 1):
            self.logger.debug(
                f"Analyzing {self.tag} hunk {i}/{len(hunks)}: {hunk.file_path}"
            )
            prompt = build_review_prompt(
                role=self.profile.role,
                checklist=self.profile.checklist,
                standards=standards,
                file_path=hunk.file_path,
                diff=hunk.text,
            )
            try:
                raw = self.generate(prompt)
            except Exception as e:
                self.logger.error(
                    f"{self.tag} backend call failed for {hunk.file_path} "
                    f"(hunk {i}/{len(hunks)}): {e}"
                )
                continue

            hunk_findings = extract_findings(
                raw, self.tag, fallback_path=hunk.file_path, logger=self.logger
            )
            findings.extend(hunk_findings)
            self.logger.debug(
                f"{self.tag} hunk {i}/{len(hunks)}: {len(hunk_findings)} findings"
            )

        self.logger.info(f"{self.tag} review complete: {len(findings)} total findings")
        return ReviewResult(
            findings=findings,
            summary=f"{self.tag.title()} review complete: {len(findings)} findings",
        )

    def _grounding(self) -> str:
        if self.retriever is None:
            return ""
        context = self.retriever.retrieve(
            self.profile.knowledge_query, self.top_k, self.profile.category_hint
        )
        self.logger.debug(
            f"Retrieved {len(context)} characters of {self.tag} standards"
        )
        return context


def build_default_analyzers(
    generate: TextGenerator,
    retriever: ContextRetriever | None = None,
    top_k: int = 6,
) -> list[LLMAnalyzer]:
    """Security, performance and style analyzers sharing one backend."""
    return [
        LLMAnalyzer(profile, generate, retriever=retriever, top_k=top_k)
        for profile in DEFAULT_PROFILES
    ]
