"""
Action palette - the fixed set of things PantherBot can do from chat
"""
from typing import Awaitable, Callable, Dict

from ..bridge.world_client import WorldClient
from ..config import BotConfig
from ..logging_config import get_logger
from ..schemas.commands import PaletteCommand
from ..schemas.results import ActionResult

logger = get_logger(__name__)

HELP_MESSAGE = "Commands: follow me, mine <block>, farm, fight, stop"


class ActionPalette:
    """Executes palette commands against a world client.

    Every action returns an ActionResult. Nothing here raises on a world
    client failure, failures come back as error results.
    """

    def __init__(self, world: WorldClient, config: BotConfig = None):
        self.world = world
        self.config = config or BotConfig()
        self._actions: Dict[str, Callable[[str], Awaitable[ActionResult]]] = {
            "follow": self.follow,
            "mine": self.mine,
            "build": self.build,
            "farm": self.farm,
            "fight": self.fight,
            "patrol": self.patrol,
            "tidy": self.tidy,
            "reply": self.reply,
        }

    async def execute(self, command: PaletteCommand) -> ActionResult:
        """Run one command"""
        action = self._actions[command.verb]
        logger.info("Executing action", verb=command.verb, argument=command.argument)

        try:
            result = await action(command.argument)
        except Exception as e:
            logger.error("Action failed", verb=command.verb, error=str(e))
            return ActionResult.failure(command.verb, str(e))

        if not result.ok:
            logger.warning("Action finished with error", verb=command.verb, error=result.error)
        return result

    async def say(self, message: str) -> bool:
        """Best-effort chat, failures are logged and swallowed"""
        try:
            await self.world.chat(message)
            return True
        except Exception as e:
            logger.warning("Chat send failed", error=str(e))
            return False

    async def _reply(self, action: str, message: str, **details) -> ActionResult:
        await self.say(message)
        return ActionResult.success(action, message, **details)

    async def _not_found(self, action: str, message: str, target: str) -> ActionResult:
        await self.say(message)
        return ActionResult.failure(action, f"{target} not found", message, target=target)

    async def help(self) -> ActionResult:
        return await self._reply("help", HELP_MESSAGE)

    async def stop(self) -> ActionResult:
        """Clear the pathfinding goal and any fight in progress"""
        try:
            await self.world.clear_goal()
        except Exception as e:
            logger.error("Clearing goal failed", error=str(e))
            return ActionResult.failure("stop", str(e))
        return await self._reply("stop", "Stopped ✋")

    async def follow(self, name: str) -> ActionResult:
        entity = await self.world.find_player(name)
        if entity is None:
            return await self._not_found("follow", "Can't see you 👀", name)

        await self.world.follow(entity, self.config.follow_distance)
        return ActionResult.success("follow", target=name, distance=self.config.follow_distance)

    async def mine(self, block_name: str) -> ActionResult:
        block = await self.world.find_block(block_name, self.config.mine_search_radius)
        if block is None:
            return await self._not_found("mine", "Block not found 😔", block_name)

        try:
            await self.world.collect(block)
        except Exception as e:
            logger.error("Collect failed", block=block_name, error=str(e))
            message = f"Couldn't mine {block_name} 😣"
            await self.say(message)
            return ActionResult.failure("mine", str(e), message, block=block_name)

        return await self._reply("mine", f"Mined {block_name} ⛏️", block=block_name, position=block.position)

    async def build(self, structure: str) -> ActionResult:
        return await self._reply("build", "House building is basic for now 🏠", structure=structure or "house")

    async def farm(self, _argument: str = "") -> ActionResult:
        return await self._reply("farm", "Farming mode 🌾")

    async def fight(self, _argument: str = "") -> ActionResult:
        mob = await self.world.nearest_hostile()
        if mob is None:
            return await self._not_found("fight", "No mobs nearby 😴", "hostile mob")

        await self.world.attack(mob)
        return ActionResult.success("fight", target=mob.name)

    async def patrol(self, _argument: str = "") -> ActionResult:
        return await self._reply("patrol", "Patrolling area 🚓")

    async def tidy(self, _argument: str = "") -> ActionResult:
        """Toss every stack, one failing stack never stops the rest"""
        items = await self.world.inventory_items()
        dropped = 0
        failed = 0

        for item in items:
            try:
                await self.world.toss_stack(item)
                dropped += 1
            except Exception as e:
                failed += 1
                logger.warning("Failed to toss item", item=item.name, count=item.count, error=str(e))

        logger.info("Inventory tidied", dropped=dropped, failed=failed)
        return await self._reply("tidy", "Inventory cleaned 🧹", dropped=dropped, failed=failed)

    async def reply(self, text: str) -> ActionResult:
        return await self._reply("reply", text)
