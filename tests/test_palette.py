"""
Tests for the action palette
"""
import pytest

from mocks import FakeWorldClient
from pantherbot.actions import HELP_MESSAGE, ActionPalette
from pantherbot.bridge import BlockRef, EntityRef, InventoryItem
from pantherbot.config import BotConfig
from pantherbot.schemas import (
    BuildCommand,
    FarmCommand,
    FightCommand,
    FollowCommand,
    MineCommand,
    PatrolCommand,
    ReplyCommand,
    TidyCommand,
)


@pytest.fixture
def config():
    return BotConfig(follow_distance=1, mine_search_radius=32)


class TestFollow:
    @pytest.mark.asyncio
    async def test_follow_known_player(self, config):
        world = FakeWorldClient(players={"Steve": EntityRef(name="Steve", type="player")})
        palette = ActionPalette(world, config)

        result = await palette.execute(FollowCommand(argument="Steve"))

        assert result.ok
        assert ("follow", "Steve", 1) in world.calls
        assert world.chats == []

    @pytest.mark.asyncio
    async def test_follow_unknown_player_replies_not_found(self, config):
        world = FakeWorldClient()
        palette = ActionPalette(world, config)

        result = await palette.execute(FollowCommand(argument="Alex"))

        assert not result.ok
        assert world.chats == ["Can't see you 👀"]
        assert not any(call[0] == "follow" for call in world.calls)


class TestMine:
    @pytest.mark.asyncio
    async def test_mine_found_block(self, config):
        world = FakeWorldClient(blocks={"stone": BlockRef(name="stone", position=(1, 60, 2))})
        palette = ActionPalette(world, config)

        result = await palette.execute(MineCommand(argument="stone"))

        assert result.ok
        assert world.calls == [("find_block", "stone", 32), ("collect", "stone")]
        assert world.chats == ["Mined stone ⛏️"]

    @pytest.mark.asyncio
    async def test_mine_missing_block(self, config):
        world = FakeWorldClient()
        palette = ActionPalette(world, config)

        result = await palette.execute(MineCommand(argument="diamond_ore"))

        assert not result.ok
        assert world.chats == ["Block not found 😔"]
        assert ("collect", "diamond_ore") not in world.calls

    @pytest.mark.asyncio
    async def test_mine_collect_failure_is_reported_not_raised(self, config):
        world = FakeWorldClient(
            blocks={"stone": BlockRef(name="stone")},
            collect_error=RuntimeError("path blocked"),
        )
        palette = ActionPalette(world, config)

        result = await palette.execute(MineCommand(argument="stone"))

        assert result.status == "error"
        assert "path blocked" in result.error
        assert world.chats == ["Couldn't mine stone 😣"]


class TestFight:
    @pytest.mark.asyncio
    async def test_fight_attacks_nearest_hostile(self, config):
        world = FakeWorldClient(hostile=EntityRef(name="zombie", type="hostile"))
        palette = ActionPalette(world, config)

        result = await palette.execute(FightCommand())

        assert result.ok
        assert ("attack", "zombie") in world.calls

    @pytest.mark.asyncio
    async def test_fight_with_no_mobs(self, config):
        world = FakeWorldClient()
        palette = ActionPalette(world, config)

        result = await palette.execute(FightCommand())

        assert not result.ok
        assert world.chats == ["No mobs nearby 😴"]


class TestTidy:
    @pytest.mark.asyncio
    async def test_tidy_continues_past_failed_item(self, config):
        """3 items, the 2nd fails: 2 dropped, 1 failed, one confirmation"""
        world = FakeWorldClient(
            items=[
                InventoryItem(name="dirt", count=64),
                InventoryItem(name="cursed_sword", count=1),
                InventoryItem(name="cobblestone", count=12),
            ],
            failing_items=("cursed_sword",),
        )
        palette = ActionPalette(world, config)

        result = await palette.execute(TidyCommand())

        toss_calls = [call for call in world.calls if call[0] == "toss_stack"]
        assert len(toss_calls) == 3
        assert world.tossed == ["dirt", "cobblestone"]
        assert result.details == {"dropped": 2, "failed": 1}
        assert world.chats == ["Inventory cleaned 🧹"]

    @pytest.mark.asyncio
    async def test_tidy_empty_inventory_still_confirms(self, config):
        world = FakeWorldClient()
        palette = ActionPalette(world, config)

        result = await palette.execute(TidyCommand())

        assert result.ok
        assert world.chats == ["Inventory cleaned 🧹"]


class TestStubsAndReply:
    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "command,message",
        [
            (BuildCommand(argument="house"), "House building is basic for now 🏠"),
            (FarmCommand(), "Farming mode 🌾"),
            (PatrolCommand(), "Patrolling area 🚓"),
        ],
    )
    async def test_stub_actions_only_acknowledge(self, config, command, message):
        world = FakeWorldClient()
        palette = ActionPalette(world, config)

        result = await palette.execute(command)

        assert result.ok
        assert world.chats == [message]
        assert world.calls == []

    @pytest.mark.asyncio
    async def test_reply_sends_text_verbatim(self, config):
        world = FakeWorldClient()
        palette = ActionPalette(world, config)

        await palette.execute(ReplyCommand(argument="Hi Steve, I'm  here!"))

        assert world.chats == ["Hi Steve, I'm  here!"]

    @pytest.mark.asyncio
    async def test_help_and_stop(self, config):
        world = FakeWorldClient()
        palette = ActionPalette(world, config)

        await palette.help()
        result = await palette.stop()

        assert result.ok
        assert world.calls == [("clear_goal",)]
        assert world.chats == [HELP_MESSAGE, "Stopped ✋"]


@pytest.mark.asyncio
async def test_chat_failure_is_swallowed(config):
    world = FakeWorldClient(chat_error=RuntimeError("socket closed"))
    palette = ActionPalette(world, config)

    result = await palette.execute(FarmCommand())

    assert result.ok
    assert await palette.say("hello") is False
