"""
Command classifier - literal chat commands first, the advisor for everything else
"""
from typing import Callable, List, Optional, Tuple

from ..advisor.gemini_advisor import Advisor
from ..logging_config import get_logger
from ..schemas.commands import (
    Dispatch,
    DispatchKind,
    FarmCommand,
    FightCommand,
    FollowCommand,
    MineCommand,
    PatrolCommand,
    TidyCommand,
    parse_action_line,
)

logger = get_logger(__name__)

# (pattern, builder). Patterns ending in a space are prefixes, the rest
# must match the whole case-folded line. Order matters: first match wins.
LiteralRule = Tuple[str, Callable[[str, str], Dispatch]]

LITERAL_RULES: List[LiteralRule] = [
    ("help", lambda text, speaker: Dispatch(kind=DispatchKind.HELP)),
    ("follow me", lambda text, speaker: Dispatch.literal(FollowCommand(argument=speaker))),
    ("stop", lambda text, speaker: Dispatch(kind=DispatchKind.STOP)),
    ("mine ", lambda text, speaker: Dispatch.literal(MineCommand(argument=_second_token(text)))),
    ("farm", lambda text, speaker: Dispatch.literal(FarmCommand())),
    ("fight", lambda text, speaker: Dispatch.literal(FightCommand())),
    ("tidy", lambda text, speaker: Dispatch.literal(TidyCommand())),
    ("patrol", lambda text, speaker: Dispatch.literal(PatrolCommand())),
]


def _second_token(text: str) -> str:
    parts = text.split()
    return parts[1] if len(parts) > 1 else ""


class CommandClassifier:
    """Turns a chat line into a Dispatch"""

    def __init__(self, advisor: Advisor, rules: Optional[List[LiteralRule]] = None):
        self.advisor = advisor
        self.rules = rules if rules is not None else LITERAL_RULES

    def match_literal(self, raw_text: str, speaker: str) -> Optional[Dispatch]:
        """Match the built-in commands, None when nothing matches"""
        text = raw_text.strip().casefold()

        for pattern, build in self.rules:
            if pattern.endswith(" "):
                matched = text.startswith(pattern)
            else:
                matched = text == pattern
            if matched:
                dispatch = build(text, speaker)
                logger.debug("Literal command matched", pattern=pattern.strip(), kind=dispatch.kind.value)
                return dispatch

        return None

    async def consult(self, raw_text: str) -> Dispatch:
        """Ask the advisor and parse its line. Never raises."""
        try:
            result = await self.advisor.advise(raw_text)
        except Exception as e:
            logger.error("Advisor call failed", error=str(e))
            return Dispatch.no_decision(str(e))

        if not result.ok:
            logger.info("Advisor gave no decision", status=result.status, error=result.error)
            return Dispatch.no_decision(result.error or result.status)

        command = parse_action_line(result.line)
        if command is None:
            logger.info("Advisor line not understood", line=result.line)
            return Dispatch.not_understood(result.line)

        logger.info("Advisor chose action", verb=command.verb, argument=command.argument)
        return Dispatch.advised(command, result.line)

    async def classify(self, raw_text: str, speaker: str) -> Dispatch:
        """Literal match, falling back to the advisor with the original-case text"""
        dispatch = self.match_literal(raw_text, speaker)
        if dispatch is not None:
            return dispatch
        return await self.consult(raw_text)
