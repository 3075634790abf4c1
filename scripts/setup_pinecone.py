"""Create the Pinecone index that backs the review standards knowledge base."""

import argparse
import sys
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables from .env.local
env_path = Path(__file__).parent.parent / ".env.local"
load_dotenv(env_path)

from pinecone import Pinecone, ServerlessSpec  # noqa: E402

from codereview.config.settings import settings  # noqa: E402

EMBEDDING_DIMENSIONS = {
    "text-embedding-3-small": 1536,
    "text-embedding-3-large": 3072,
    "text-embedding-ada-002": 1536,
}


def ensure_index(index_name: str, cloud: str, region: str) -> bool:
    """Create the serverless index unless it already exists.

    The dimension follows ``settings.embedding_model`` so the index always
    matches the embeddings the RAG service writes and queries with.
    """
    if not settings.pinecone_api_key:
        print(" Error: PINECONE_API_KEY not found in environment")
        return False

    dimension = EMBEDDING_DIMENSIONS.get(settings.embedding_model)
    if dimension is None:
        print(f" Error: unknown embedding model '{settings.embedding_model}'")
        print(f"   Known models: {', '.join(EMBEDDING_DIMENSIONS)}")
        return False

    pc = Pinecone(api_key=settings.pinecone_api_key)
    existing = {idx.name for idx in pc.list_indexes().indexes}

    if index_name in existing:
        info = pc.describe_index(index_name)
        print(f" Index '{index_name}' already exists")
        print(f"   Dimension: {info.dimension} | Metric: {info.metric}")
        if info.dimension != dimension:
            print(
                f" Error: index dimension {info.dimension} does not match "
                f"{settings.embedding_model} ({dimension})"
            )
            return False
        return True

    print(f" Creating index '{index_name}' ({dimension} dims, {cloud}/{region})...")
    pc.create_index(
        name=index_name,
        dimension=dimension,
        metric="cosine",
        spec=ServerlessSpec(cloud=cloud, region=region),
    )
    print(" Index created")
    return True


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--index-name",
        default=settings.pinecone_index_name,
        help=f"Index to create (default: {settings.pinecone_index_name})",
    )
    parser.add_argument("--cloud", default="aws", help="Serverless cloud (default: aws)")
    parser.add_argument(
        "--region", default="us-east-1", help="Serverless region (default: us-east-1)"
    )
    args = parser.parse_args()

    if not ensure_index(args.index_name, args.cloud, args.region):
        sys.exit(1)
    print("Next step: python scripts/index_standards.py")
