"""Review endpoints: raw diffs, GitHub pull requests, knowledge-base admin and a backend check."""

import logging
from functools import lru_cache

import httpx
from fastapi import APIRouter, Depends, HTTPException, status

from codereview.agents.text_generator import LLMTextGenerator
from codereview.analyzers.base import TextGenerator
from codereview.config.settings import settings
from codereview.models.requests import (
    BackendCheckRequest,
    ReviewDiffRequest,
    ReviewPRRequest,
)
from codereview.models.review import ReviewResult
from codereview.prompts.analyzer_prompts import BACKEND_CHECK_TEMPLATE
from codereview.services.github_client import (
    GitHubPatchClient,
    PatchFetchError,
    PatchSource,
)
from codereview.services.rag_service import rag_service
from codereview.services.review_service import ReviewService, build_review_service
from codereview.services.standards_ingestor import StandardsIngestor

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/review", tags=["review"])


@lru_cache
def get_review_service() -> ReviewService:
    """Process-wide review service built from settings."""
    return build_review_service()


@lru_cache
def get_patch_source() -> PatchSource:
    """Process-wide GitHub patch client."""
    return GitHubPatchClient()


@lru_cache
def get_text_generator() -> TextGenerator:
    """Process-wide text-generation backend."""
    return LLMTextGenerator()


def get_standards_ingestor() -> StandardsIngestor | None:
    """Ingestor bound to the standards index, or None if RAG is unavailable."""
    if not rag_service.is_available():
        return None
    return StandardsIngestor(rag_service.vector_store())


# Sync endpoints: FastAPI runs them in its threadpool.
@router.post("/diff", response_model=ReviewResult)
def review_diff(
    request: ReviewDiffRequest,
    service: ReviewService = Depends(get_review_service),
) -> ReviewResult:
    """Review a raw unified diff."""
    logger.info(
        f"Reviewing submitted diff ({len(request.patch)} chars, "
        f"parallel={request.parallel})"
    )
    return service.review(request.patch, request.parallel)


@router.post("/pr", response_model=ReviewResult)
def review_pr(
    request: ReviewPRRequest,
    service: ReviewService = Depends(get_review_service),
    patches: PatchSource = Depends(get_patch_source),
) -> ReviewResult:
    """Fetch a pull request patch from GitHub and review it."""
    try:
        patch = patches.fetch_patch(request.repo, request.pr_number)
    except ValueError as err:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=str(err)
        ) from err
    except (PatchFetchError, httpx.HTTPError) as err:
        logger.error(
            f"Failed to fetch patch for {request.repo}#{request.pr_number}: {err}"
        )
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=f"Could not fetch patch from GitHub: {err}",
        ) from err

    logger.info(
        f"Reviewing {request.repo}#{request.pr_number} "
        f"({len(patch)} chars, parallel={request.parallel})"
    )
    return service.review(patch, request.parallel)


@router.post("/admin/reingest")
def reingest_standards(
    ingestor: StandardsIngestor | None = Depends(get_standards_ingestor),
) -> dict[str, str | int]:
    """Re-ingest the standards directory into the knowledge base."""
    if ingestor is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Knowledge base is not available",
        )

    try:
        chunks = ingestor.ingest_directory(settings.standards_dir)
    except FileNotFoundError as err:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail=str(err)
        ) from err

    return {"status": "ok", "chunks": chunks, "directory": settings.standards_dir}


@router.post("/debug/ai")
def check_backend(
    request: BackendCheckRequest,
    generate: TextGenerator = Depends(get_text_generator),
) -> dict[str, str]:
    """Send a snippet straight to the backend and return its raw answer."""
    logger.info(f"Backend check with {len(request.code)} chars of code")
    try:
        response = generate(BACKEND_CHECK_TEMPLATE.format(code=request.code))
    except Exception as err:
        logger.error(f"Backend check failed: {err}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Backend check failed: {err}",
        ) from err

    return {"status": "ok", "response": response}
