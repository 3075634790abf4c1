"""Core review surface: patch text in, aggregated review out."""

import logging

from codereview.models.review import ReviewResult
from codereview.services.diff_segmenter import segment_patch
from codereview.services.orchestrator import ReviewOrchestrator

logger = logging.getLogger(__name__)


class ReviewService:
    """Segments a patch and runs every registered analyzer over it."""

    def __init__(
        self, orchestrator: ReviewOrchestrator, logger: logging.Logger = logger
    ) -> None:
        self.orchestrator = orchestrator
        self.logger = logger

    @property
    def analyzer_tags(self) -> list[str]:
        return self.orchestrator.tags

    def review(self, patch_text: str, run_parallel: bool = True) -> ReviewResult:
        """Review a unified-diff patch.

        Args:
            patch_text: Raw patch text; may be empty or not a diff at all
            run_parallel: Run analyzers concurrently instead of in order

        Returns:
            Merged, deduplicated findings across all analyzers

        Raises:
            ValueError: If patch_text is None or not a string
        """
        if patch_text is None:
            raise ValueError("patch_text is required")
        if not isinstance(patch_text, str):
            raise ValueError(
                f"patch_text must be a string, got {type(patch_text).__name__}"
            )

        hunks = segment_patch(patch_text)
        self.logger.info(
            f"Segmented patch ({len(patch_text)} chars) into {len(hunks)} hunks"
        )
        return self.orchestrator.run(hunks, run_parallel)


def build_review_service() -> ReviewService:
    """Wire the production analyzers, backend and knowledge base."""
    from codereview.agents.text_generator import LLMTextGenerator
    from codereview.analyzers.llm_analyzer import build_default_analyzers
    from codereview.config.settings import settings
    from codereview.services.rag_service import rag_service

    analyzers = build_default_analyzers(
        LLMTextGenerator(),
        retriever=rag_service,
        top_k=settings.rag_top_k,
    )
    orchestrator = ReviewOrchestrator(
        analyzers, max_workers=settings.review_max_workers
    )
    return ReviewService(orchestrator)
