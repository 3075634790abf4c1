"""Unit tests for the review_diff command-line script."""

import importlib.util
import io
import json
import logging
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from codereview.models.review import ReviewResult

SCRIPT = Path(__file__).parents[3] / "scripts" / "review_diff.py"


@pytest.fixture
def review_diff():
    spec = importlib.util.spec_from_file_location("review_diff", SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def test_stdout_is_only_the_json_result(review_diff, monkeypatch, capsys):
    service = MagicMock()

    def review(patch, run_parallel):
        logging.getLogger("codereview.services.review_service").info("Segmented patch")
        return ReviewResult(summary="Findings: 0 (BLOCKER=0, HIGH=0)")

    service.review.side_effect = review
    monkeypatch.setattr(review_diff, "build_review_service", lambda: service)
    monkeypatch.setattr("sys.argv", ["review_diff.py", "--sequential"])
    monkeypatch.setattr("sys.stdin", io.StringIO("not a diff\n"))

    assert review_diff.main() == 0

    captured = capsys.readouterr()
    assert json.loads(captured.out) == {
        "findings": [],
        "summary": "Findings: 0 (BLOCKER=0, HIGH=0)",
    }
    assert "Segmented patch" in captured.err
    service.review.assert_called_once_with("not a diff\n", run_parallel=False)
