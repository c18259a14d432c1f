"""
Kill feed router - spots death lines in server messages and broadcasts them
"""
import asyncio
from typing import Optional, Protocol

from ..bridge.connection_recovery import ConnectionRecoveryManager
from ..bridge.events import BotEvent, ConnectionEvent, ConnectionEventKind, ServerMessage
from ..logging_config import get_logger

logger = get_logger(__name__)

# Keywords that usually mean someone died. Space-padded so they only match
# whole words inside a sentence; a keyword ending the line is missed.
DEATH_KEYWORDS = (
    " slain ",
    " fell ",
    " shot ",
    " burned ",
    " killed ",
    " void ",
    " blew up ",
    " died ",
    " magic ",
    " starved ",
)

# Player chat usually starts with "<name>" or "[rank]"
CHAT_FRAMING_MARKERS = ("<", "[")

WATCHED_POSITIONS = ("system", "chat")


def is_death_message(text: str, position: str) -> bool:
    """True when a server line looks like a death announcement"""
    if position not in WATCHED_POSITIONS:
        return False
    if text.startswith(CHAT_FRAMING_MARKERS):
        return False
    return any(keyword in text for keyword in DEATH_KEYWORDS)


class KillBroadcaster(Protocol):
    def broadcast_kill(self, text: str) -> int: ...


class KillFeedRouter:
    """Consumes watcher events: death lines go out, lifecycle events drive reconnection"""

    def __init__(
        self,
        broadcaster: KillBroadcaster,
        events: "asyncio.Queue[BotEvent]",
        recovery: Optional[ConnectionRecoveryManager] = None,
    ):
        self.broadcaster = broadcaster
        self.events = events
        self.recovery = recovery
        self.kills_broadcast = 0

    async def run(self):
        """Process events until cancelled"""
        logger.info("Kill feed router started")
        while True:
            event = await self.events.get()
            try:
                self.route(event)
            except Exception as e:
                logger.error("Error routing watcher event", error=str(e), exc_info=True)
            finally:
                self.events.task_done()

    def route(self, event: BotEvent):
        if isinstance(event, ServerMessage):
            self.handle_message(event)
        elif isinstance(event, ConnectionEvent):
            self.handle_connection(event)

    def handle_message(self, message: ServerMessage) -> bool:
        """Broadcast the line if it is a death message"""
        if not is_death_message(message.text, message.position):
            return False

        logger.info("Blood shed", text=message.text)
        self.broadcaster.broadcast_kill(message.text)
        self.kills_broadcast += 1
        return True

    def handle_connection(self, event: ConnectionEvent):
        if event.kind == ConnectionEventKind.LOGIN:
            logger.info("PantheraWatcher has entered the server")
            if self.recovery:
                self.recovery.handle_connection_established()
        elif event.kind == ConnectionEventKind.ERROR:
            logger.error("Watcher error", detail=event.detail)
            if self.recovery:
                self.recovery.handle_connection_lost(event.detail)
        elif event.kind == ConnectionEventKind.END:
            logger.warning("Watcher disconnected", reason=event.detail)
            if self.recovery:
                self.recovery.handle_connection_lost(event.detail)
        elif event.kind == ConnectionEventKind.KICKED:
            logger.warning("Watcher kicked", reason=event.detail)
