"""Application settings using Pydantic Settings for environment variable management."""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env.local",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    # OpenAI Configuration
    openai_api_key: str | None = Field(
        default=None, description="OpenAI API key for AI models"
    )
    openai_model: str = Field(
        default="gpt-4.1-mini", description="OpenAI model used by the analyzers"
    )
    review_temperature: float = Field(
        default=0.0, description="Temperature for analyzer responses"
    )
    review_max_output_tokens: int = Field(
        default=2048, description="Maximum tokens per analyzer response"
    )

    # GitHub Configuration
    # Note: GitHub Actions doesn't allow env var names starting with GITHUB_
    github_token: str | None = Field(
        default=None,
        validation_alias="GH_TOKEN",
        description="GitHub token used to fetch pull request patches",
    )
    github_api_base_url: str = Field(
        default="https://api.github.com", description="GitHub REST API base URL"
    )
    github_timeout_seconds: float = Field(
        default=30.0, description="Timeout for GitHub API requests"
    )

    # Observability
    logfire_token: str | None = Field(
        default=None, description="Pydantic Logfire token for observability"
    )

    # Application Settings
    debug: bool = Field(default=False, description="Enable debug mode")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO", description="Logging level"
    )
    environment: Literal["development", "staging", "production"] = Field(
        default="development", description="Application environment"
    )

    # Server Configuration
    # Use a localhost default to avoid binding to all interfaces.
    host: str = Field(default="127.0.0.1", description="Server host")
    port: int = Field(default=8000, description="Server port")

    # Pinecone Configuration
    pinecone_api_key: str | None = Field(
        default=None, description="Pinecone API key for vector database"
    )
    pinecone_index_name: str = Field(
        default="review-standards",
        description="Pinecone index name for the standards knowledge base",
    )

    # RAG Configuration
    rag_enabled: bool = Field(
        default=True, description="Ground analyzer prompts with standards"
    )
    embedding_model: str = Field(
        default="text-embedding-3-small",
        description="OpenAI embedding model for RAG",
    )
    rag_top_k: int = Field(
        default=6, description="Number of standards chunks to retrieve"
    )
    standards_dir: str = Field(
        default="standards", description="Directory of markdown standards to ingest"
    )

    # Review Configuration
    review_parallel_default: bool = Field(
        default=True, description="Run analyzers concurrently unless told otherwise"
    )
    review_max_workers: int | None = Field(
        default=None,
        description="Worker threads for parallel reviews (default: one per analyzer)",
    )

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment == "development"


# Global settings instance
settings = Settings()

# Validate required secrets in production to avoid silent failures
if settings.is_production:
    missing = []
    if not settings.openai_api_key:
        missing.append("OPENAI_API_KEY")
    if settings.rag_enabled and not settings.pinecone_api_key:
        missing.append("PINECONE_API_KEY (required for RAG)")
    if missing:
        raise RuntimeError(
            "Missing required environment variables for production: "
            + ", ".join(missing)
        )
