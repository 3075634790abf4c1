"""Ingest markdown review standards into the knowledge base."""

import logging
import re
from pathlib import Path
from typing import Any

from langchain_core.documents import Document

from codereview.config.settings import settings

logger = logging.getLogger(__name__)

SECTION_SPLIT = re.compile(r"\n##\s")

CATEGORY_KEYWORDS = ("security", "performance", "testing", "concurrency")
DEFAULT_CATEGORY = "general"


def chunk_markdown(text: str) -> list[str]:
    """Split a markdown document on second-level headings, dropping blank chunks."""
    chunks = (chunk.strip() for chunk in SECTION_SPLIT.split(text))
    return [chunk for chunk in chunks if chunk]


def infer_category(file_name: str) -> str:
    """Guess the standards category from a file name."""
    name = file_name.lower()
    for keyword in CATEGORY_KEYWORDS:
        if keyword in name:
            return keyword
    return DEFAULT_CATEGORY


def build_documents(path: Path) -> list[Document]:
    """Turn one markdown file into chunk documents tagged with source and category."""
    text = path.read_text(encoding="utf-8")
    metadata = {"source": path.name, "category": infer_category(path.name)}
    return [
        Document(page_content=chunk, metadata=dict(metadata))
        for chunk in chunk_markdown(text)
    ]


class StandardsIngestor:
    """Write standards chunks through a vector store in batches."""

    def __init__(self, vector_store: Any, batch_size: int = 50) -> None:
        self.vector_store = vector_store
        self.batch_size = batch_size

    def ingest_directory(self, directory: str | Path | None = None) -> int:
        """Ingest every ``*.md`` file in a directory.

        Args:
            directory: Standards directory (default from settings)

        Returns:
            Number of chunks written

        Raises:
            FileNotFoundError: If the directory does not exist
        """
        root = Path(directory or settings.standards_dir)
        if not root.is_dir():
            raise FileNotFoundError(f"Standards directory not found: {root}")

        files = sorted(root.glob("*.md"))
        logger.info(f"Ingesting {len(files)} standards files from {root}")

        documents: list[Document] = []
        for path in files:
            file_documents = build_documents(path)
            logger.debug(f"{path.name}: {len(file_documents)} chunks")
            documents.extend(file_documents)

        for start in range(0, len(documents), self.batch_size):
            batch = documents[start : start + self.batch_size]
            self.vector_store.add_documents(batch)
            logger.debug(
                f"Uploaded batch {start // self.batch_size + 1} ({len(batch)} chunks)"
            )

        logger.info(f"Ingested {len(documents)} standards chunks")
        return len(documents)
