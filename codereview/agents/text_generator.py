"""Text-generation backend for the analyzers using Pydantic AI and OpenAI."""

import logging
import os
import threading

from pydantic_ai import Agent
from pydantic_ai.models.openai import OpenAIResponsesModel
from pydantic_ai.settings import ModelSettings

from codereview.config.settings import settings
from codereview.prompts.analyzer_prompts import SYSTEM_PROMPT

logger = logging.getLogger(__name__)


# Set OpenAI API key as environment variable for Pydantic AI
if settings.openai_api_key:
    os.environ["OPENAI_API_KEY"] = settings.openai_api_key


class LLMTextGenerator:
    """Callable backend: prompt in, raw model text out.

    The agent is built on first use so that importing the application does
    not require OpenAI credentials. Calls are synchronous and may raise; the
    analyzers decide what a failure means.
    """

    def __init__(
        self,
        model_name: str | None = None,
        system_prompt: str = SYSTEM_PROMPT,
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> None:
        self.model_name = model_name or settings.openai_model
        self.system_prompt = system_prompt
        self.model_settings = ModelSettings(
            temperature=(
                settings.review_temperature if temperature is None else temperature
            ),
            max_tokens=max_tokens or settings.review_max_output_tokens,
        )
        self._agent: Agent[None, str] | None = None
        self._lock = threading.Lock()

    def _get_agent(self) -> Agent[None, str]:
        with self._lock:
            if self._agent is None:
                self._agent = Agent(
                    model=OpenAIResponsesModel(self.model_name),
                    output_type=str,
                    system_prompt=self.system_prompt,
                    model_settings=self.model_settings,
                )
                logger.info(f"Analyzer backend initialized with model {self.model_name}")
            return self._agent

    def __call__(self, prompt: str) -> str:
        result = self._get_agent().run_sync(prompt)
        output = result.output
        logger.debug(f"Backend returned {len(output)} characters")
        return output
