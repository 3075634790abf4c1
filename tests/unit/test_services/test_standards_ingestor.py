"""Unit tests for standards ingestion."""

from unittest.mock import MagicMock

import pytest

from codereview.services.standards_ingestor import (
    StandardsIngestor,
    chunk_markdown,
    infer_category,
)


def test_chunk_markdown_splits_on_second_level_headings():
    text = "# Title\nintro\n## Secrets\nno keys\n\n## Injection\nbind params\n## \n"

    assert chunk_markdown(text) == ["# Title\nintro", "Secrets\nno keys", "Injection\nbind params"]


def test_chunk_markdown_without_headings():
    assert chunk_markdown("just text") == ["just text"]
    assert chunk_markdown("   ") == []


@pytest.mark.parametrize(
    "file_name,category",
    [
        ("security.md", "security"),
        ("Web-Security-Guide.md", "security"),
        ("performance.md", "performance"),
        ("testing.md", "testing"),
        ("Concurrency.md", "concurrency"),
        ("style.md", "general"),
    ],
)
def test_infer_category(file_name, category):
    assert infer_category(file_name) == category


def test_ingest_directory_writes_tagged_chunks_in_batches(tmp_path):
    (tmp_path / "security.md").write_text("# Sec\n## A\na\n## B\nb\n")
    (tmp_path / "style.md").write_text("## Naming\nclear names\n")
    (tmp_path / "notes.txt").write_text("## ignored\n")
    store = MagicMock()

    count = StandardsIngestor(store, batch_size=2).ingest_directory(tmp_path)

    assert count == 4
    assert store.add_documents.call_count == 2
    documents = [doc for call in store.add_documents.call_args_list for doc in call.args[0]]
    assert [d.metadata for d in documents] == [
        {"source": "security.md", "category": "security"},
        {"source": "security.md", "category": "security"},
        {"source": "security.md", "category": "security"},
        {"source": "style.md", "category": "general"},
    ]
    assert documents[1].page_content == "A\na"


def test_ingest_missing_directory(tmp_path):
    with pytest.raises(FileNotFoundError):
        StandardsIngestor(MagicMock()).ingest_directory(tmp_path / "missing")
