"""Command schemas for the action palette - one variant per palette verb."""

from enum import Enum
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, Field, TypeAdapter, ValidationError

PALETTE_VERBS = ("follow", "mine", "build", "farm", "fight", "patrol", "tidy", "reply")


class PaletteCommand(BaseModel):
    """Base for every palette command. The argument is free text and may be empty."""

    verb: str
    argument: str = Field("", description="Text after the verb")

    class Config:
        frozen = True


class FollowCommand(PaletteCommand):
    """Follow a player by name."""
    verb: Literal["follow"] = "follow"


class MineCommand(PaletteCommand):
    """Collect the nearest block with the given name."""
    verb: Literal["mine"] = "mine"


class BuildCommand(PaletteCommand):
    """Build a structure (acknowledged only)."""
    verb: Literal["build"] = "build"


class FarmCommand(PaletteCommand):
    verb: Literal["farm"] = "farm"


class FightCommand(PaletteCommand):
    """Attack the nearest hostile mob."""
    verb: Literal["fight"] = "fight"


class PatrolCommand(PaletteCommand):
    verb: Literal["patrol"] = "patrol"


class TidyCommand(PaletteCommand):
    """Drop every stack in the inventory."""
    verb: Literal["tidy"] = "tidy"


class ReplyCommand(PaletteCommand):
    """Say the argument in chat."""
    verb: Literal["reply"] = "reply"


PaletteAction = Annotated[
    Union[
        FollowCommand,
        MineCommand,
        BuildCommand,
        FarmCommand,
        FightCommand,
        PatrolCommand,
        TidyCommand,
        ReplyCommand,
    ],
    Field(discriminator="verb"),
]

_palette_adapter = TypeAdapter(PaletteAction)


def parse_action_line(line: str) -> Optional[PaletteCommand]:
    """Parse 'verb argument...' into a palette command.

    The line is split on the first run of whitespace. Returns None when the
    verb is not one of PALETTE_VERBS.
    """
    parts = line.strip().split(None, 1)
    if not parts:
        return None

    verb = parts[0].lower()
    argument = parts[1].strip() if len(parts) > 1 else ""

    try:
        return _palette_adapter.validate_python({"verb": verb, "argument": argument})
    except ValidationError:
        return None


class DispatchKind(str, Enum):
    """How the classifier resolved a chat line"""

    LITERAL = "literal"
    ADVISED = "advised"
    HELP = "help"
    STOP = "stop"
    NOT_UNDERSTOOD = "not_understood"
    NO_DECISION = "no_decision"


class Dispatch(BaseModel):
    """Classifier output for one chat line."""

    kind: DispatchKind
    command: Optional[PaletteAction] = None
    raw_line: Optional[str] = Field(None, description="Advisor line that produced this dispatch")
    reason: Optional[str] = Field(None, description="Why no decision was reached")

    @property
    def has_command(self) -> bool:
        return self.command is not None

    @classmethod
    def literal(cls, command: PaletteCommand) -> "Dispatch":
        return cls(kind=DispatchKind.LITERAL, command=command)

    @classmethod
    def advised(cls, command: PaletteCommand, raw_line: str) -> "Dispatch":
        return cls(kind=DispatchKind.ADVISED, command=command, raw_line=raw_line)

    @classmethod
    def not_understood(cls, raw_line: str) -> "Dispatch":
        return cls(kind=DispatchKind.NOT_UNDERSTOOD, raw_line=raw_line)

    @classmethod
    def no_decision(cls, reason: str) -> "Dispatch":
        return cls(kind=DispatchKind.NO_DECISION, reason=reason)
