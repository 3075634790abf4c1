"""Logging and observability setup using Pydantic Logfire."""

import logging
import sys
from typing import TextIO

from codereview.config.settings import settings

LOG_FORMAT = "%(asctime)s - %(threadName)s - %(name)s - %(levelname)s - %(message)s"

# Clients that log every request at INFO
QUIET_LOGGERS = ("httpx", "urllib3", "openai", "pinecone", "langchain")


def setup_logging(stream: TextIO | None = None, level: str | None = None) -> None:
    """Configure the root logger.

    Args:
        stream: Where log records go (default: stdout). Command-line tools
            that print results on stdout pass ``sys.stderr``.
        level: Level name overriding ``settings.log_level``
    """
    logging.basicConfig(
        level=getattr(logging, level or settings.log_level),
        format=LOG_FORMAT,
        stream=stream or sys.stdout,
        force=True,
    )

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def setup_observability(stream: TextIO | None = None) -> None:
    """Configure logging, then Logfire tracing when a token is set.

    Logfire traces every analyzer backend call (pydantic-ai) and every
    GitHub patch download (httpx). The FastAPI app is instrumented separately
    in ``codereview.main``.
    """
    setup_logging(stream)

    logger = logging.getLogger(__name__)

    if not settings.logfire_token:
        logger.info("Logfire token not configured, skipping observability setup")
        return

    try:
        import logfire

        logfire.configure(
            token=settings.logfire_token,
            service_name="codereview",
            environment=settings.environment,
        )
        logfire.instrument_pydantic_ai()
        logfire.instrument_httpx()
    except ImportError:
        logger.warning(
            "Logfire package not installed. Install with: pip install 'codereview[logfire]'"
        )
    except Exception as e:
        logger.error(f"Failed to setup Logfire observability: {e}")
    else:
        logger.info(f"Logfire tracing enabled for {settings.environment} environment")
