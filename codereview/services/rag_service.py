"""RAG service for retrieving internal review standards using Pinecone + LangChain."""

import logging
from collections.abc import Callable
from typing import Any

from langchain_openai import OpenAIEmbeddings
from langchain_pinecone import PineconeVectorStore
from pinecone import Pinecone

from codereview.config.settings import settings

logger = logging.getLogger(__name__)


class RAGService:
    """Service for grounding analyzer prompts in the standards knowledge base."""

    def __init__(self) -> None:
        """Initialize RAG service with Pinecone and OpenAI embeddings."""
        self.pc = None
        self.index = None
        self.embeddings = None

        if not settings.rag_enabled:
            logger.info("RAG is disabled in settings")
            return

        if not settings.pinecone_api_key:
            logger.warning(
                "Pinecone API key not found - RAG service will be unavailable"
            )
            return

        try:
            pc = Pinecone(api_key=settings.pinecone_api_key)

            # Verify index exists
            existing_indexes = [idx.name for idx in pc.list_indexes().indexes]
            if settings.pinecone_index_name not in existing_indexes:
                logger.error(
                    f"Pinecone index '{settings.pinecone_index_name}' does not exist. "
                    f"Available indexes: {existing_indexes}. "
                    f"Run 'python scripts/setup_pinecone.py' to create it."
                )
                return

            api_key_callable: Callable[[], str] | None = None
            if settings.openai_api_key:

                def api_key_callable() -> str:
                    assert settings.openai_api_key is not None
                    return settings.openai_api_key

            self.pc = pc
            self.index = pc.Index(settings.pinecone_index_name)
            self.embeddings = OpenAIEmbeddings(
                model=settings.embedding_model,
                api_key=api_key_callable,
            )

            logger.info(
                f"RAG service initialized with index: {settings.pinecone_index_name}"
            )
        except Exception as e:
            logger.error(f"Failed to initialize RAG service: {e}")
            self.pc = None
            self.index = None
            self.embeddings = None

    def is_available(self) -> bool:
        """Check if RAG service is available."""
        return (
            settings.rag_enabled
            and self.pc is not None
            and self.index is not None
            and self.embeddings is not None
        )

    def vector_store(self, namespace: str | None = None) -> PineconeVectorStore:
        """Return a LangChain vector store bound to the standards index."""
        if not self.is_available():
            raise RuntimeError("RAG service is not available")

        return PineconeVectorStore(
            index=self.index,
            embedding=self.embeddings,
            namespace=namespace,
        )

    def search(
        self,
        query: str,
        top_k: int | None = None,
        category: str | None = None,
    ) -> list[dict[str, Any]]:
        """Search standards using semantic similarity.

        Args:
            query: Natural language query (e.g., "sql injection; secrets")
            top_k: Number of results to return (default from settings)
            category: Restrict to chunks with this category metadata

        Returns:
            List of relevant chunks with content, metadata, and score
        """
        if not self.is_available():
            logger.warning("RAG service is not available")
            return []

        if top_k is None:
            top_k = settings.rag_top_k

        search_filter = {"category": category} if category else None

        # LangChain handles: embedding query + similarity search
        results = self.vector_store().similarity_search_with_score(
            query=query,
            k=top_k,
            filter=search_filter,
        )

        formatted_results = [
            {"content": doc.page_content, "metadata": doc.metadata, "score": score}
            for doc, score in results
        ]

        logger.info(
            f"RAG search: query='{query[:50]}...', category={category}, "
            f"found={len(formatted_results)} results"
        )

        return formatted_results

    def format_results_for_context(self, results: list[dict[str, Any]]) -> str:
        """Format search results into a bullet list for the analyzer prompt.

        Args:
            results: List of search results from search()

        Returns:
            One "- <chunk>" line per result, or an empty string
        """
        return "\n".join(f"- {result['content']}" for result in results)

    def retrieve(self, query: str, top_k: int, category_hint: str) -> str:
        """Best-effort standards lookup; never raises.

        Returns an empty string when RAG is unavailable or the search fails,
        so the analyzers fall back to an ungrounded prompt.
        """
        if not self.is_available():
            return ""

        try:
            results = self.search(query, top_k=top_k, category=category_hint or None)
        except Exception as e:
            logger.error(f"Standards retrieval failed for '{category_hint}': {e}")
            return ""

        return self.format_results_for_context(results)


# Singleton instance
rag_service = RAGService()
