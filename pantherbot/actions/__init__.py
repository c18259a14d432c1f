"""Actions module - chat command classification and the action palette"""

from .classifier import LITERAL_RULES, CommandClassifier
from .palette import HELP_MESSAGE, ActionPalette

__all__ = ["CommandClassifier", "LITERAL_RULES", "ActionPalette", "HELP_MESSAGE"]
