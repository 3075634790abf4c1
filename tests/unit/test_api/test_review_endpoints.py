"""Unit tests for the review endpoints."""

from unittest.mock import MagicMock

import httpx
import pytest

from codereview.api.review import (
    get_patch_source,
    get_review_service,
    get_standards_ingestor,
    get_text_generator,
)
from codereview.main import app
from codereview.models.review import Severity
from codereview.services.github_client import GitHubPatchClient, PatchFetchError
from codereview.services.orchestrator import ReviewOrchestrator
from codereview.services.review_service import ReviewService


@pytest.fixture
def analyzer(fake_analyzer, finding_factory):
    return fake_analyzer(
        "SECURITY", [finding_factory("Hardcoded secret", Severity.HIGH)]
    )


@pytest.fixture
def overrides(analyzer):
    app.dependency_overrides[get_review_service] = lambda: ReviewService(
        ReviewOrchestrator([analyzer])
    )
    yield app.dependency_overrides
    app.dependency_overrides.clear()


def test_review_diff(client, overrides, analyzer, sample_patch):
    response = client.post("/review/diff", json={"patch": sample_patch, "parallel": False})

    assert response.status_code == 200
    data = response.json()
    assert data["summary"] == "Findings: 1 (BLOCKER=0, HIGH=1)"
    assert data["findings"][0]["severity"] == "HIGH"
    assert data["findings"][0]["source_tag"] == "SECURITY"
    assert len(analyzer.calls[0]) == 3


def test_review_diff_defaults_to_parallel(client, overrides, analyzer):
    response = client.post("/review/diff", json={"patch": ""})

    assert response.status_code == 200
    assert analyzer.calls[0][0].file_path == "all"


def test_review_diff_requires_patch(client, overrides):
    response = client.post("/review/diff", json={"parallel": True})

    assert response.status_code == 422


def test_review_pr(client, overrides, sample_patch):
    source = MagicMock()
    source.fetch_patch.return_value = sample_patch
    overrides[get_patch_source] = lambda: source

    response = client.post(
        "/review/pr", json={"repo": "owner/repo", "pr_number": 12, "parallel": True}
    )

    assert response.status_code == 200
    source.fetch_patch.assert_called_once_with("owner/repo", 12)
    assert response.json()["summary"] == "Findings: 1 (BLOCKER=0, HIGH=1)"


def test_review_pr_invalid_repo_is_bad_request(client, overrides):
    http_client = MagicMock(spec=httpx.Client)
    overrides[get_patch_source] = lambda: GitHubPatchClient(
        token="", http_client=http_client
    )

    response = client.post("/review/pr", json={"repo": "not-a-repo", "pr_number": 1})

    assert response.status_code == 400
    http_client.get.assert_not_called()


@pytest.mark.parametrize(
    "error", [PatchFetchError("GitHub API 404", status_code=404), httpx.ConnectError("down")]
)
def test_review_pr_fetch_failure_is_bad_gateway(client, overrides, error):
    source = MagicMock()
    source.fetch_patch.side_effect = error
    overrides[get_patch_source] = lambda: source

    response = client.post("/review/pr", json={"repo": "owner/repo", "pr_number": 1})

    assert response.status_code == 502


@pytest.mark.parametrize("pr_number", [0, -3])
def test_review_pr_rejects_non_positive_number(client, overrides, pr_number):
    response = client.post(
        "/review/pr", json={"repo": "owner/repo", "pr_number": pr_number}
    )

    assert response.status_code == 422


def test_reingest_unavailable(client, overrides):
    overrides[get_standards_ingestor] = lambda: None

    response = client.post("/review/admin/reingest")

    assert response.status_code == 503


def test_reingest(client, overrides):
    ingestor = MagicMock()
    ingestor.ingest_directory.return_value = 5
    overrides[get_standards_ingestor] = lambda: ingestor

    response = client.post("/review/admin/reingest")

    assert response.status_code == 200
    assert response.json()["chunks"] == 5


def test_reingest_missing_directory(client, overrides):
    ingestor = MagicMock()
    ingestor.ingest_directory.side_effect = FileNotFoundError("no standards")
    overrides[get_standards_ingestor] = lambda: ingestor

    response = client.post("/review/admin/reingest")

    assert response.status_code == 404


def test_backend_check(client, overrides):
    generate = MagicMock(return_value='{"issues": ["sql injection"]}')
    overrides[get_text_generator] = lambda: generate

    response = client.post("/review/debug/ai", json={"code": "query = 'x' + user"})

    assert response.status_code == 200
    assert response.json() == {
        "status": "ok",
        "response": '{"issues": ["sql injection"]}',
    }
    prompt = generate.call_args[0][0]
    assert "query = 'x' + user" in prompt
    assert '{"issues": ["issue1", "issue2"]}' in prompt


def test_backend_check_failure_is_server_error(client, overrides):
    overrides[get_text_generator] = lambda: MagicMock(side_effect=RuntimeError("quota"))

    response = client.post("/review/debug/ai", json={"code": "x = 1"})

    assert response.status_code == 500
    assert "quota" in response.json()["detail"]


def test_backend_check_requires_code(client, overrides):
    overrides[get_text_generator] = lambda: MagicMock()

    response = client.post("/review/debug/ai", json={"code": ""})

    assert response.status_code == 422
