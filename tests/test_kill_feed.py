"""
Tests for the watcher's death filter and kill feed routing
"""
import asyncio
from unittest.mock import MagicMock

import pytest

from mocks import FakeBroadcaster
from pantherbot.bridge import ConnectionEvent, ConnectionEventKind, ServerMessage
from pantherbot.routing import KillFeedRouter, is_death_message


class TestDeathFilter:
    @pytest.mark.parametrize(
        "text",
        [
            "Steve was slain by Zombie",
            "Alex fell from a high place",
            "Steve was shot by Skeleton",
            "Alex burned to death",
            "Steve was killed by magic",
            "Alex fell out of the world into the void below",
            "Steve blew up in a creeper explosion",
            "Alex died because of Steve",
            "Steve starved to death",
        ],
    )
    def test_death_lines_match(self, text):
        assert is_death_message(text, "system")

    def test_chat_framing_markers_are_excluded(self):
        assert not is_death_message("<Steve> hello", "chat")
        assert not is_death_message("<Steve> I was slain by Zombie", "chat")
        assert not is_death_message("[Admin] Alex was slain by Steve", "system")

    def test_keywords_are_case_sensitive_and_space_padded(self):
        assert not is_death_message("Steve was SLAIN by Zombie", "system")
        # Keyword at the end of the line has no trailing space
        assert not is_death_message("Steve died", "system")
        assert not is_death_message("Steve starved.", "system")

    def test_only_chat_and_system_positions(self):
        assert not is_death_message("Steve was slain by Zombie", "game_info")

    def test_over_match_is_kept(self):
        """Ordinary sentences with a keyword still match"""
        assert is_death_message("The server died yesterday for an hour", "system")


class TestKillFeedRouter:
    def test_slain_line_broadcasts_once(self):
        broadcaster = FakeBroadcaster()
        router = KillFeedRouter(broadcaster, asyncio.Queue())

        router.route(ServerMessage(text="Steve was slain by Zombie", position="chat"))

        assert broadcaster.sent == [{"event": "kill", "text": "Steve was slain by Zombie"}]

    def test_player_chat_does_not_broadcast(self):
        broadcaster = FakeBroadcaster()
        router = KillFeedRouter(broadcaster, asyncio.Queue())

        router.route(ServerMessage(text="<Steve> hello", position="chat"))

        assert broadcaster.sent == []

    def test_no_dedup_and_arrival_order(self):
        broadcaster = FakeBroadcaster()
        router = KillFeedRouter(broadcaster, asyncio.Queue())

        for text in ["Steve was slain by Zombie", "Alex fell from a high place", "Steve was slain by Zombie"]:
            router.route(ServerMessage(text=text, position="system"))

        assert [event["text"] for event in broadcaster.sent] == [
            "Steve was slain by Zombie",
            "Alex fell from a high place",
            "Steve was slain by Zombie",
        ]
        assert router.kills_broadcast == 3

    def test_lifecycle_events_drive_recovery(self):
        recovery = MagicMock()
        router = KillFeedRouter(FakeBroadcaster(), asyncio.Queue(), recovery)

        router.route(ConnectionEvent(ConnectionEventKind.LOGIN))
        router.route(ConnectionEvent(ConnectionEventKind.ERROR, detail="ECONNRESET"))
        router.route(ConnectionEvent(ConnectionEventKind.END, detail="socketClosed"))

        recovery.handle_connection_established.assert_called_once()
        assert recovery.handle_connection_lost.call_count == 2

    @pytest.mark.asyncio
    async def test_run_survives_broadcast_errors(self):
        broadcaster = MagicMock()
        broadcaster.broadcast_kill.side_effect = [RuntimeError("boom"), 1]
        router = KillFeedRouter(broadcaster, asyncio.Queue())

        await router.events.put(ServerMessage(text="Steve was slain by Zombie", position="chat"))
        await router.events.put(ServerMessage(text="Alex was shot by Skeleton", position="chat"))

        task = asyncio.create_task(router.run())
        await router.events.join()
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

        assert broadcaster.broadcast_kill.call_count == 2
