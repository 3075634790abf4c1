"""Fan a hunk list out to every registered analyzer and merge the results."""

import logging
import time
from collections.abc import Callable, Sequence

from codereview.analyzers.base import Analyzer
from codereview.models.review import Hunk, ReviewResult
from codereview.services.aggregator import merge_results
from codereview.utils.concurrency import run_concurrently

logger = logging.getLogger(__name__)


class ReviewOrchestrator:
    """Runs analyzers sequentially or concurrently, isolating their failures.

    Results are always handed to the aggregator in registration order, so
    when two analyzers report the same finding at equal severity the one
    registered first wins, in both modes.
    """

    def __init__(
        self,
        analyzers: Sequence[Analyzer],
        merge: Callable[[Sequence[ReviewResult]], ReviewResult] = merge_results,
        max_workers: int | None = None,
        logger: logging.Logger = logger,
    ) -> None:
        self.analyzers = list(analyzers)
        self.merge = merge
        self.max_workers = max_workers
        self.logger = logger

    @property
    def tags(self) -> list[str]:
        return [analyzer.tag for analyzer in self.analyzers]

    def run(self, hunks: Sequence[Hunk], run_parallel: bool) -> ReviewResult:
        """Run every analyzer over ``hunks`` and return the merged result.

        Args:
            hunks: Hunks to review; every analyzer sees the same read-only view
            run_parallel: Run analyzers concurrently (True) or in registration order

        Returns:
            Aggregated result; a failed analyzer contributes an empty result
        """
        shared = tuple(hunks)
        mode = "parallel" if run_parallel else "sequential"
        self.logger.info(
            f"Running {len(self.analyzers)} analyzers ({mode}) over {len(shared)} hunks"
        )
        started = time.monotonic()

        if run_parallel:
            outputs = run_concurrently(
                [self._task(analyzer, shared) for analyzer in self.analyzers],
                fallback=self._on_failure,
                max_workers=self.max_workers,
                thread_name_prefix="analyzer",
            )
        else:
            outputs = []
            for index, analyzer in enumerate(self.analyzers):
                try:
                    outputs.append(analyzer.analyze(shared))
                except Exception as e:
                    outputs.append(self._on_failure(index, e))

        parts = [self._checked(index, output) for index, output in enumerate(outputs)]

        result = self.merge(parts)
        elapsed_ms = int((time.monotonic() - started) * 1000)
        self.logger.info(
            f"Review finished in {elapsed_ms}ms ({mode}): {result.summary}"
        )
        return result

    def _task(
        self, analyzer: Analyzer, hunks: tuple[Hunk, ...]
    ) -> Callable[[], ReviewResult]:
        def call() -> ReviewResult:
            return analyzer.analyze(hunks)

        return call

    def _checked(self, index: int, output: object) -> ReviewResult:
        if isinstance(output, ReviewResult):
            return output
        return self._on_failure(
            index,
            TypeError(f"analyze() returned {type(output).__name__}, not ReviewResult"),
        )

    def _on_failure(self, index: int, error: Exception) -> ReviewResult:
        analyzer = self.analyzers[index]
        tag = getattr(analyzer, "tag", type(analyzer).__name__)
        self.logger.error(
            f"Analyzer {tag} failed, continuing without its findings: {error}",
            exc_info=error,
        )
        return ReviewResult.empty()
