"""Request payloads for the review endpoints."""

from pydantic import BaseModel, Field, field_validator

from codereview.config.settings import settings


class ReviewDiffRequest(BaseModel):
    """Raw unified diff submitted for review."""

    patch: str = Field(description="Unified diff text to review")
    parallel: bool = Field(
        default_factory=lambda: settings.review_parallel_default,
        description="Run analyzers concurrently (True) or one after another",
    )


class ReviewPRRequest(BaseModel):
    """Pull request to fetch from GitHub and review.

    ``repo`` is checked by the patch client so that a malformed name is
    reported the same way for every caller.
    """

    repo: str = Field(description="Repository in 'owner/name' format")
    pr_number: int = Field(description="Pull request number")
    parallel: bool = Field(
        default_factory=lambda: settings.review_parallel_default,
        description="Run analyzers concurrently (True) or one after another",
    )

    @field_validator("pr_number")
    @classmethod
    def validate_pr_number(cls, v: int) -> int:
        """Validate pr_number is positive."""
        if v <= 0:
            raise ValueError(f"pr_number must be positive (> 0), got: {v}")

        return v


class BackendCheckRequest(BaseModel):
    """Snippet sent straight to the text-generation backend."""

    code: str = Field(min_length=1, description="Code snippet to analyze")
