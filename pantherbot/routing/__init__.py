from .chat_router import BRAIN_LAG, GREETING, NOT_UNDERSTOOD, THINKING, ChatRouter
from .kill_feed import DEATH_KEYWORDS, KillFeedRouter, is_death_message

__all__ = [
    "ChatRouter",
    "KillFeedRouter",
    "is_death_message",
    "DEATH_KEYWORDS",
    "GREETING",
    "THINKING",
    "NOT_UNDERSTOOD",
    "BRAIN_LAG",
]
