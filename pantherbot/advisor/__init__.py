"""Advisor module - LLM fallback for chat lines the literal commands miss"""

from .gemini_advisor import Advisor, GeminiAdvisor
from .prompt import ADVISOR_PROMPT, build_advisor_prompt

__all__ = ["Advisor", "GeminiAdvisor", "ADVISOR_PROMPT", "build_advisor_prompt"]
