"""
Fakes for testing without a Minecraft server or Gemini
"""
from typing import Dict, List, Optional

from pantherbot.bridge.world_client import BlockRef, EntityRef, InventoryItem
from pantherbot.schemas.results import AdvisorResult


class FakeWorldClient:
    """World client that records every call.

    Chat lines go to ``chats``, every other primitive goes to ``calls``.
    """

    def __init__(
        self,
        username: str = "PantherBot",
        players: Optional[Dict[str, EntityRef]] = None,
        blocks: Optional[Dict[str, BlockRef]] = None,
        hostile: Optional[EntityRef] = None,
        items: Optional[List[InventoryItem]] = None,
        failing_items: tuple = (),
        collect_error: Optional[Exception] = None,
        chat_error: Optional[Exception] = None,
    ):
        self.username = username
        self.players = players or {}
        self.blocks = blocks or {}
        self.hostile = hostile
        self.items = items or []
        self.failing_items = failing_items
        self.collect_error = collect_error
        self.chat_error = chat_error
        self.chats: List[str] = []
        self.calls: List[tuple] = []
        self.tossed: List[str] = []

    async def chat(self, message):
        if self.chat_error:
            raise self.chat_error
        self.chats.append(message)

    async def find_player(self, name):
        self.calls.append(("find_player", name))
        return self.players.get(name)

    async def follow(self, entity, distance):
        self.calls.append(("follow", entity.name, distance))

    async def clear_goal(self):
        self.calls.append(("clear_goal",))

    async def find_block(self, name, max_distance):
        self.calls.append(("find_block", name, max_distance))
        return self.blocks.get(name)

    async def collect(self, block):
        self.calls.append(("collect", block.name))
        if self.collect_error:
            raise self.collect_error

    async def nearest_hostile(self):
        self.calls.append(("nearest_hostile",))
        return self.hostile

    async def attack(self, entity):
        self.calls.append(("attack", entity.name))

    async def inventory_items(self):
        self.calls.append(("inventory_items",))
        return list(self.items)

    async def toss_stack(self, item):
        self.calls.append(("toss_stack", item.name))
        if item.name in self.failing_items:
            raise RuntimeError(f"Cannot toss {item.name}")
        self.tossed.append(item.name)


class StubAdvisor:
    """Advisor returning a canned line"""

    def __init__(self, line: Optional[str] = None, enabled: bool = True, error: Optional[Exception] = None):
        self.line = line
        self.enabled = enabled
        self.error = error
        self.calls: List[str] = []

    async def advise(self, message):
        self.calls.append(message)
        if self.error:
            raise self.error
        if not self.enabled:
            return AdvisorResult(status="disabled", error="No Gemini API key configured")
        if not self.line:
            return AdvisorResult(status="error", error="Empty answer")
        return AdvisorResult(status="success", line=self.line)


class FakeBroadcaster:
    """Collects kill broadcasts"""

    def __init__(self):
        self.sent: List[dict] = []

    def broadcast_kill(self, text):
        self.sent.append({"event": "kill", "text": text})
        return 1
