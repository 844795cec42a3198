# scope_intake/llm/client.py
"""Ollama-backed question generator with health checks and streaming."""

import logging

import httpx
from ollama import AsyncClient

from scope_intake.config.schema import OllamaConfig
from scope_intake.conversation.context import QuestionContext
from scope_intake.prompts import load_prompt

from .retry import ollama_retry

logger = logging.getLogger(__name__)


class OllamaQuestionGenerator:
    """
    Produces the next interview step from a QuestionContext.

    Returns the raw reply text; validating it is the session's job.
    Transient server errors are retried here, never in the session.
    """

    def __init__(
        self,
        base_url: str,
        model: str,
        timeout: int = 120,
        temperature: float = 0.4,
    ):
        """
        Initialize the generator.

        Args:
            base_url: Ollama API base URL (e.g., "http://localhost:11434")
            model: Model name (e.g., "qwen2.5:14b-instruct")
            timeout: Request timeout in seconds (generous for model loading)
            temperature: Sampling temperature
        """
        self.base_url = base_url
        self.model = model
        self.temperature = temperature
        self.client = AsyncClient(host=base_url, timeout=httpx.Timeout(timeout))

    @classmethod
    def from_config(cls, config: OllamaConfig) -> "OllamaQuestionGenerator":
        return cls(
            base_url=config.base_url,
            model=config.model,
            timeout=config.timeout,
            temperature=config.temperature,
        )

    async def health_check(self) -> bool:
        """
        Check Ollama server health and model availability.

        Returns:
            True if the server is reachable (the model may be pulled on demand).
            False if the server is down or unreachable.
        """
        try:
            models_response = await self.client.list()
            available = [m["model"] for m in models_response.get("models", [])]
            model_base = self.model.split(":")[0]
            if not any(model_base in m or self.model == m for m in available):
                logger.warning(
                    f"Model {self.model} not found in available models. "
                    f"It can be pulled on demand during generation."
                )
            return True
        except (httpx.HTTPError, ConnectionError) as e:
            logger.error(f"Health check failed: {e}")
            return False

    def build_messages(self, context: QuestionContext) -> list[dict]:
        system = "\n\n".join([context.system_context, load_prompt("response_format")])
        return [
            {"role": "system", "content": system},
            {"role": "user", "content": context.to_prompt()},
        ]

    @ollama_retry
    async def generate(self, context: QuestionContext) -> str:
        """
        Generate the next step with streaming.

        Returns:
            Full accumulated response text.

        Raises:
            ResponseError: On API errors (retry decorator handles transient errors)
        """
        messages = self.build_messages(context)
        logger.info(f"Generating next question with model={self.model}")

        accumulated = []
        async for chunk in await self.client.chat(
            model=self.model,
            messages=messages,
            stream=True,
            format="json",
            options={"temperature": self.temperature},
        ):
            if content := chunk.get("message", {}).get("content"):
                accumulated.append(content)

        result = "".join(accumulated)
        logger.info(f"Generated {len(result)} chars")
        return result
