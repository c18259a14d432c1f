"""
Chat router - drives the classifier and action palette from bot events
"""
import asyncio
from typing import Optional, Set

from ..actions.classifier import CommandClassifier
from ..actions.palette import ActionPalette
from ..bridge.events import BotEvent, ChatEvent, ConnectionEvent, ConnectionEventKind
from ..bridge.world_client import WorldClient
from ..config import BotConfig
from ..logging_config import get_logger
from ..schemas.commands import Dispatch, DispatchKind
from ..schemas.results import ActionResult

logger = get_logger(__name__)

GREETING = "PantherBot online 🐆 Say 'help'!"
THINKING = "Thinking... 🤔"
NOT_UNDERSTOOD = "Didn't understand 🤷"
BRAIN_LAG = "Brain lag 😵"


class ChatRouter:
    """Consumes the event queue and answers chat.

    Events are taken off the queue one at a time. Each chat line is handled
    in its own task, so a line waiting on the advisor does not hold up the
    next one. There is no locking between them: the last goal set wins.
    """

    def __init__(
        self,
        world: WorldClient,
        classifier: CommandClassifier,
        palette: ActionPalette,
        events: "asyncio.Queue[BotEvent]",
        config: BotConfig = None,
    ):
        self.world = world
        self.classifier = classifier
        self.palette = palette
        self.events = events
        self.config = config or BotConfig()
        self._tasks: Set[asyncio.Task] = set()

    async def run(self):
        """Process events until cancelled"""
        logger.info("Chat router started")
        while True:
            event = await self.events.get()
            try:
                await self.route(event)
            finally:
                self.events.task_done()

    async def route(self, event: BotEvent):
        if isinstance(event, ChatEvent):
            task = asyncio.create_task(self.handle_chat(event))
            self._tasks.add(task)
            task.add_done_callback(self._tasks.discard)
        elif isinstance(event, ConnectionEvent):
            await self.handle_connection(event)

    async def drain(self):
        """Wait for every chat handler in flight"""
        while self._tasks:
            await asyncio.gather(*list(self._tasks))

    async def handle_connection(self, event: ConnectionEvent):
        if event.kind == ConnectionEventKind.SPAWN:
            logger.info("PantherBot spawned")
            await self.palette.say(GREETING)
        elif event.kind == ConnectionEventKind.LOGIN:
            logger.info("PantherBot logged in")
        else:
            logger.warning("Connection event", kind=event.kind.value, detail=event.detail)

    async def handle_chat(self, event: ChatEvent) -> Optional[ActionResult]:
        """Handle one chat line, never raises"""
        if event.username == self.world.username:
            return None

        log = logger.bind(speaker=event.username)
        log.info("Chat received", message=event.message)

        try:
            dispatch = self.classifier.match_literal(event.message, event.username)
            if dispatch is None:
                if self.classifier.advisor.enabled and self.config.announce_thinking:
                    await self.palette.say(THINKING)
                dispatch = await self.classifier.consult(event.message)

            result = await self.dispatch(dispatch)
        except Exception as e:
            log.error("Chat handler failed", error=str(e), exc_info=True)
            return None

        log.info("Chat handled", action=result.action, status=result.status, error=result.error)
        return result

    async def dispatch(self, dispatch: Dispatch) -> ActionResult:
        if dispatch.kind == DispatchKind.HELP:
            return await self.palette.help()

        if dispatch.kind == DispatchKind.STOP:
            return await self.palette.stop()

        if dispatch.has_command:
            return await self.palette.execute(dispatch.command)

        if dispatch.kind == DispatchKind.NOT_UNDERSTOOD:
            await self.palette.say(NOT_UNDERSTOOD)
            return ActionResult.failure("not_understood", f"Unknown action: {dispatch.raw_line}", NOT_UNDERSTOOD)

        await self.palette.say(BRAIN_LAG)
        return ActionResult.failure("no_decision", dispatch.reason or "No decision", BRAIN_LAG)
