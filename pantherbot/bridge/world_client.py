"""
World client - drives a mineflayer bot through JSPyBridge

Mineflayer and its plugins own connection handling, entity tracking,
pathfinding, block collection and combat. This module exposes the handful of
primitives the action palette needs and forwards bot events into an asyncio
queue consumed by the routers.
"""
import asyncio
from dataclasses import dataclass
from typing import Any, Callable, List, Optional, Protocol, Tuple

from ..config import BotConfig
from ..logging_config import get_logger
from .events import BotEvent, ChatEvent, ConnectionEvent, ConnectionEventKind, ServerMessage

logger = get_logger(__name__)

# Entity types fight targets. Kept inside the JS source: Python values reach
# eval_js as proxies whose methods return promises.
NEAREST_HOSTILE_JS = "return bot.nearestEntity(e => ['hostile', 'mob'].includes(e.type))"


@dataclass
class EntityRef:
    """A tracked entity plus its JS handle"""

    name: str
    type: str
    handle: Any = None


@dataclass
class BlockRef:
    """A located block plus its JS handle"""

    name: str
    position: Optional[Tuple[float, float, float]] = None
    handle: Any = None


@dataclass
class InventoryItem:
    """One inventory stack plus its JS handle"""

    name: str
    count: int
    slot: Optional[int] = None
    handle: Any = None


class WorldClient(Protocol):
    """Capabilities the action palette and routers use"""

    username: str

    async def chat(self, message: str) -> None: ...

    async def find_player(self, name: str) -> Optional[EntityRef]: ...

    async def follow(self, entity: EntityRef, distance: int) -> None: ...

    async def clear_goal(self) -> None: ...

    async def find_block(self, name: str, max_distance: int) -> Optional[BlockRef]: ...

    async def collect(self, block: BlockRef) -> None: ...

    async def nearest_hostile(self) -> Optional[EntityRef]: ...

    async def attack(self, entity: EntityRef) -> None: ...

    async def inventory_items(self) -> List[InventoryItem]: ...

    async def toss_stack(self, item: InventoryItem) -> None: ...


def _load_javascript() -> Tuple[Callable, Callable, Callable]:
    """Import JSPyBridge lazily, importing it starts the node runtime"""
    from javascript import On, eval_js, require

    return require, On, eval_js


class MineflayerClient:
    """World client backed by mineflayer running under JSPyBridge"""

    def __init__(
        self,
        config: BotConfig,
        events: "asyncio.Queue[BotEvent]",
        load_plugins: bool = True,
        loop: Optional[asyncio.AbstractEventLoop] = None,
    ):
        self.config = config
        self.events = events
        self.load_plugins = load_plugins
        self.username = config.bot_username
        self.bot = None
        self._loop = loop
        self._require = None
        self._on = None
        self._eval_js = None
        self._mineflayer = None
        self._pathfinder = None
        self._mc_data = None
        self.generation = 0

    def connect(self) -> None:
        """Create a fresh mineflayer bot and subscribe to its events.

        Must be called from the event loop thread. Calling it again retires the
        previous bot first, which is how reconnection works. Events still in
        flight from a retired bot are dropped.
        """
        if self._loop is None:
            self._loop = asyncio.get_running_loop()

        if self._require is None:
            self._require, self._on, self._eval_js = _load_javascript()
            self._mineflayer = self._require("mineflayer")
            if self.load_plugins:
                self._pathfinder = self._require("mineflayer-pathfinder")

        options = {
            "host": self.config.minecraft_host,
            "port": self.config.minecraft_port,
            "username": self.config.bot_username,
            "auth": self.config.auth,
            "version": self.config.minecraft_version or False,
        }
        logger.info(
            "Connecting to Minecraft server",
            host=options["host"],
            port=options["port"],
            username=options["username"],
        )

        self._retire_bot()
        self.generation += 1
        self.bot = self._mineflayer.createBot(options)
        self._mc_data = None

        if self.load_plugins:
            self.bot.loadPlugin(self._pathfinder.pathfinder)
            self.bot.loadPlugin(self._require("mineflayer-auto-eat").plugin)
            self.bot.loadPlugin(self._require("mineflayer-collectblock").plugin)
            self.bot.loadPlugin(self._require("mineflayer-pvp").plugin)
            self.bot.loadPlugin(self._require("mineflayer-tool").plugin)

        self._register_listeners(self.bot, self.generation)

    def _retire_bot(self) -> None:
        """Quit the current bot so it cannot kick its successor.

        Its listeners stay attached, node throws on an error event nobody
        listens to. Whatever they emit is dropped by generation.
        """
        old_bot = self.bot
        if old_bot is None:
            return

        self.bot = None
        try:
            old_bot.quit()
        except Exception as e:
            logger.warning("Failed to quit previous bot", error=str(e))

    def _register_listeners(self, bot, generation: int) -> None:
        On = self._on

        @On(bot, "login")
        def on_login(this, *args):
            self._emit(generation, ConnectionEvent(ConnectionEventKind.LOGIN))

        @On(bot, "spawn")
        def on_spawn(this, *args):
            self._on_spawn(bot)
            self._emit(generation, ConnectionEvent(ConnectionEventKind.SPAWN))

        @On(bot, "chat")
        def on_chat(this, username, message, *args):
            self._emit(generation, ChatEvent(username=str(username), message=str(message)))

        @On(bot, "message")
        def on_message(this, json_msg, position, *args):
            self._emit(generation, ServerMessage(text=str(json_msg.toString()), position=str(position)))

        @On(bot, "kicked")
        def on_kicked(this, reason, *args):
            self._emit(generation, ConnectionEvent(ConnectionEventKind.KICKED, detail=str(reason)))

        @On(bot, "end")
        def on_end(this, reason=None, *args):
            self._emit(generation, ConnectionEvent(ConnectionEventKind.END, detail=str(reason)))

        @On(bot, "error")
        def on_error(this, err, *args):
            detail = getattr(err, "message", None) or str(err)
            self._emit(generation, ConnectionEvent(ConnectionEventKind.ERROR, detail=str(detail)))

    def _on_spawn(self, bot) -> None:
        """Prepare movement and auto-eat once the bot is in the world"""
        if not self.load_plugins:
            return

        try:
            self._mc_data = self._require("minecraft-data")(bot.version)
            bot.pathfinder.setMovements(self._pathfinder.Movements(bot))
            bot.autoEat.options = {"priority": "foodPoints", "startAt": 14}
        except Exception as e:
            logger.error("Failed to prepare bot after spawn", error=str(e))

    def _emit(self, generation: int, event: BotEvent) -> None:
        """Hand an event to the loop, callbacks arrive on the bridge thread"""
        self._loop.call_soon_threadsafe(self._deliver, generation, event)

    def _deliver(self, generation: int, event: BotEvent) -> None:
        if generation != self.generation:
            logger.debug("Dropping event from retired bot", generation=generation, event=type(event).__name__)
            return
        self.events.put_nowait(event)

    def _require_bot(self):
        if self.bot is None:
            raise RuntimeError("Bot is not connected to Minecraft server")
        return self.bot

    def disconnect(self) -> None:
        if self.bot is not None:
            logger.info("Disconnecting bot")
            self._retire_bot()

    async def chat(self, message: str) -> None:
        self._require_bot().chat(message[: self.config.chat_max_length])

    async def find_player(self, name: str) -> Optional[EntityRef]:
        if not name:
            return None
        player = self._require_bot().players[name]
        entity = player.entity if player else None
        if not entity:
            return None
        return EntityRef(name=name, type="player", handle=entity)

    async def follow(self, entity: EntityRef, distance: int) -> None:
        goal = self._pathfinder.goals.GoalFollow(entity.handle, distance)
        self._require_bot().pathfinder.setGoal(goal, True)

    async def clear_goal(self) -> None:
        bot = self._require_bot()
        bot.pathfinder.setGoal(None)
        bot.pvp.stop()

    async def find_block(self, name: str, max_distance: int) -> Optional[BlockRef]:
        bot = self._require_bot()
        if self._mc_data is None:
            self._mc_data = self._require("minecraft-data")(bot.version)

        block_type = self._mc_data.blocksByName[name] if name else None
        if not block_type:
            return None

        block = bot.findBlock({"matching": block_type.id, "maxDistance": max_distance})
        if not block:
            return None

        pos = block.position
        return BlockRef(name=name, position=(pos.x, pos.y, pos.z), handle=block)

    async def collect(self, block: BlockRef) -> None:
        bot = self._require_bot()
        # The bridge timeout is in seconds
        timeout = self.config.collect_timeout_ms / 1000
        await asyncio.to_thread(bot.collectBlock.collect, block.handle, timeout=timeout)

    async def nearest_hostile(self) -> Optional[EntityRef]:
        # eval_js resolves bot from this frame's locals
        bot = self._require_bot()  # noqa: F841
        entity = self._eval_js(NEAREST_HOSTILE_JS)
        if not entity:
            return None
        return EntityRef(name=str(entity.name), type=str(entity.type), handle=entity)

    async def attack(self, entity: EntityRef) -> None:
        self._require_bot().pvp.attack(entity.handle)

    async def inventory_items(self) -> List[InventoryItem]:
        items = self._require_bot().inventory.items()
        return [InventoryItem(name=item.name, count=item.count, slot=item.slot, handle=item) for item in items]

    async def toss_stack(self, item: InventoryItem) -> None:
        bot = self._require_bot()
        await asyncio.to_thread(bot.tossStack, item.handle)
