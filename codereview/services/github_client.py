"""GitHub client that downloads pull request patches."""

import logging
import time
from typing import Protocol

import httpx

from codereview.config.settings import settings

logger = logging.getLogger(__name__)

PATCH_MEDIA_TYPE = "application/vnd.github.v3.patch"
DIFF_MEDIA_TYPE = "application/vnd.github.v3.diff"


class PatchFetchError(Exception):
    """Raised when GitHub does not return a patch for a pull request."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class PatchSource(Protocol):
    """Anything that can produce the raw patch of a change request."""

    def fetch_patch(self, repo: str, pr_number: int) -> str: ...


def validate_repo(repo: str) -> str:
    """Validate repo is in 'owner/name' format."""
    if not repo or repo.count("/") != 1 or not all(repo.split("/")):
        raise ValueError(f"repo must be 'owner/name', got: {repo!r}")
    return repo


class GitHubPatchClient:
    """Fetch pull request patches and diffs from the GitHub REST API."""

    def __init__(
        self,
        base_url: str | None = None,
        token: str | None = None,
        http_client: httpx.Client | None = None,
    ) -> None:
        self.base_url = (base_url or settings.github_api_base_url).rstrip("/")
        self.token = (token if token is not None else settings.github_token or "").strip()
        # Not following redirects; _fetch reports them as PatchFetchError
        self.http_client = http_client or httpx.Client(
            timeout=settings.github_timeout_seconds
        )

    def fetch_patch(self, repo: str, pr_number: int) -> str:
        """Return the patch (format-patch style) of a pull request.

        Args:
            repo: Repository in "owner/name" format
            pr_number: Pull request number

        Raises:
            ValueError: If repo is not in "owner/name" format
            PatchFetchError: If GitHub answers with a non-200 status
            httpx.HTTPError: If the request itself fails
        """
        logger.info(f"Fetching PR patch from GitHub: {repo}#{pr_number}")
        return self._fetch(repo, pr_number, PATCH_MEDIA_TYPE)

    def fetch_diff(self, repo: str, pr_number: int) -> str:
        """Return the unified diff of a pull request."""
        logger.info(f"Fetching PR diff from GitHub: {repo}#{pr_number}")
        return self._fetch(repo, pr_number, DIFF_MEDIA_TYPE)

    def _headers(self, accept: str) -> dict[str, str]:
        headers = {
            "Accept": accept,
            "User-Agent": "codereview-service",
            "X-GitHub-Api-Version": "2022-11-28",
        }
        if self.token:
            headers["Authorization"] = f"token {self.token}"
        return headers

    def _fetch(self, repo: str, pr_number: int, accept: str) -> str:
        validate_repo(repo)
        url = f"{self.base_url}/repos/{repo}/pulls/{pr_number}"

        started = time.monotonic()
        response = self.http_client.get(url, headers=self._headers(accept))
        duration_ms = int((time.monotonic() - started) * 1000)

        logger.info(
            f"GitHub API response: {response.status_code} in {duration_ms}ms, "
            f"body size: {len(response.text)} characters"
        )

        if response.status_code == 200:
            return response.text

        if response.status_code in (301, 302, 307, 308):
            location = response.headers.get("Location")
            raise PatchFetchError(
                f"GitHub API redirect {response.status_code} to {location}. "
                f"Please check the repository name: {repo}",
                status_code=response.status_code,
            )

        logger.error(
            f"GitHub API error for {repo}#{pr_number}: "
            f"{response.status_code} - {response.text[:500]}"
        )
        raise PatchFetchError(
            f"GitHub API {response.status_code} for {url}",
            status_code=response.status_code,
        )
