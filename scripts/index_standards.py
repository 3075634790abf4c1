"""Index markdown review standards into the Pinecone knowledge base."""

import argparse
import sys
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables from .env.local
env_path = Path(__file__).parent.parent / ".env.local"
load_dotenv(env_path)

from codereview.config.settings import settings  # noqa: E402
from codereview.services.rag_service import rag_service  # noqa: E402
from codereview.services.standards_ingestor import StandardsIngestor  # noqa: E402
from codereview.utils.logging import setup_logging  # noqa: E402


def index_standards(directory: str, batch_size: int) -> bool:
    """Ingest every markdown file in ``directory``."""
    if not rag_service.is_available():
        print(" Error: knowledge base is not available")
        print("   Check PINECONE_API_KEY and run 'python scripts/setup_pinecone.py'")
        return False

    print("=" * 70)
    print(f"Indexing standards from {directory} into '{settings.pinecone_index_name}'")
    print("=" * 70)

    ingestor = StandardsIngestor(rag_service.vector_store(), batch_size=batch_size)
    try:
        chunks = ingestor.ingest_directory(directory)
    except FileNotFoundError as e:
        print(f" Error: {e}")
        return False

    print(f" Indexed {chunks} chunks")
    return True


if __name__ == "__main__":
    parser = argparse.ArgumentParser(
        description="Index markdown review standards into Pinecone",
    )
    parser.add_argument(
        "-d",
        "--dir",
        default=settings.standards_dir,
        help=f"Standards directory (default: {settings.standards_dir})",
    )
    parser.add_argument(
        "--batch-size", type=int, default=50, help="Chunks per upload batch"
    )

    args = parser.parse_args()
    setup_logging(stream=sys.stderr)
    success = index_standards(args.dir, args.batch_size)
    sys.exit(0 if success else 1)
