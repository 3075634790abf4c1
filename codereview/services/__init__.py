"""Services for segmenting, reviewing and aggregating code changes."""

from codereview.services.aggregator import merge_results
from codereview.services.diff_segmenter import segment_patch
from codereview.services.github_client import GitHubPatchClient, PatchFetchError
from codereview.services.orchestrator import ReviewOrchestrator
from codereview.services.rag_service import rag_service
from codereview.services.review_service import ReviewService, build_review_service

__all__ = [
    "segment_patch",
    "merge_results",
    "ReviewOrchestrator",
    "ReviewService",
    "build_review_service",
    "GitHubPatchClient",
    "PatchFetchError",
    "rag_service",
]
