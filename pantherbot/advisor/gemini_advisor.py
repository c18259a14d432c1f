"""
Gemini advisor - asks the model to pick one palette action for a chat line
"""
from typing import Any, Optional, Protocol

from google import genai
from google.genai import types

from ..logging_config import get_logger
from ..schemas.results import AdvisorResult
from .prompt import build_advisor_prompt

logger = get_logger(__name__)


class Advisor(Protocol):
    """Anything that can turn a chat line into one action line"""

    enabled: bool

    async def advise(self, message: str) -> AdvisorResult: ...


def first_line(text: Optional[str]) -> Optional[str]:
    """First non-empty line of a model answer, stripped"""
    if not text:
        return None
    for line in text.strip().splitlines():
        line = line.strip()
        if line:
            return line
    return None


class GeminiAdvisor:
    """Advisor backed by a Gemini model through google-genai"""

    def __init__(
        self,
        api_key: Optional[str],
        model: str = "gemini-2.0-flash",
        temperature: float = 0.2,
        max_output_tokens: int = 100,
        bot_name: str = "PantherBot",
        client: Any = None,
    ):
        self.model = model
        self.temperature = temperature
        self.max_output_tokens = max_output_tokens
        self.bot_name = bot_name
        self.client = client

        if self.client is None and api_key:
            self.client = genai.Client(api_key=api_key)

        self.enabled = self.client is not None
        if self.enabled:
            logger.info("Gemini AI loaded", model=self.model)
        else:
            logger.warning("Gemini key missing, advisor disabled")

    @classmethod
    def from_config(cls, config) -> "GeminiAdvisor":
        api_key = config.gemini_api_key.get_secret_value() if config.advisor_enabled else None
        return cls(
            api_key=api_key,
            model=config.default_model,
            temperature=config.agent_temperature,
            max_output_tokens=config.max_output_tokens,
            bot_name=config.bot_username,
        )

    async def advise(self, message: str) -> AdvisorResult:
        """Ask the model for one action line. Never raises."""
        if not self.enabled:
            return AdvisorResult(status="disabled", error="No Gemini API key configured")

        prompt = build_advisor_prompt(message, bot_name=self.bot_name)

        try:
            response = await self.client.aio.models.generate_content(
                model=self.model,
                contents=prompt,
                config=types.GenerateContentConfig(
                    temperature=self.temperature,
                    max_output_tokens=self.max_output_tokens,
                ),
            )
            line = first_line(response.text)
        except Exception as e:
            logger.error("Gemini error", error=str(e), model=self.model)
            return AdvisorResult(status="error", error=str(e))

        if not line:
            logger.warning("Gemini returned an empty answer", model=self.model)
            return AdvisorResult(status="error", error="Empty answer")

        logger.debug("Gemini decided", line=line)
        return AdvisorResult(status="success", line=line)
