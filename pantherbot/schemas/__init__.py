"""Schema definitions for palette commands and operation results."""

from .commands import *
from .results import *

__all__ = [
    # Commands
    "PALETTE_VERBS",
    "PaletteCommand",
    "PaletteAction",
    "FollowCommand",
    "MineCommand",
    "BuildCommand",
    "FarmCommand",
    "FightCommand",
    "PatrolCommand",
    "TidyCommand",
    "ReplyCommand",
    "parse_action_line",
    "Dispatch",
    "DispatchKind",
    # Results
    "BaseResult",
    "ActionResult",
    "AdvisorResult",
]
