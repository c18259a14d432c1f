"""
Event types flowing from the mineflayer bot into the Python event loop
"""
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional, Union


def _now() -> str:
    return datetime.now().isoformat()


@dataclass
class ChatEvent:
    """A player chat line"""

    username: str
    message: str
    timestamp: str = field(default_factory=_now)


@dataclass
class ServerMessage:
    """Any server text message with its position (chat, system, game_info)"""

    text: str
    position: str
    timestamp: str = field(default_factory=_now)


class ConnectionEventKind(Enum):
    LOGIN = "login"
    SPAWN = "spawn"
    END = "end"
    ERROR = "error"
    KICKED = "kicked"


@dataclass
class ConnectionEvent:
    """Connection lifecycle event"""

    kind: ConnectionEventKind
    detail: Optional[str] = None
    timestamp: str = field(default_factory=_now)

    @property
    def is_loss(self) -> bool:
        return self.kind in (ConnectionEventKind.END, ConnectionEventKind.ERROR)


BotEvent = Union[ChatEvent, ServerMessage, ConnectionEvent]
