"""
Main entry point for PantherBot
Runs either the chat helper bot or the kill feed watcher
"""

import argparse
import asyncio
import sys

from .actions.classifier import CommandClassifier
from .actions.palette import ActionPalette
from .advisor.gemini_advisor import GeminiAdvisor
from .bridge.connection_recovery import ConnectionRecoveryManager, RecoveryConfig
from .bridge.uplink import UplinkServer
from .bridge.world_client import MineflayerClient
from .config import BotConfig, WatcherConfig
from .logging_config import get_logger, setup_logging
from .routing.chat_router import ChatRouter
from .routing.kill_feed import KillFeedRouter

logger = get_logger(__name__)

BOT_BANNER = "PantherBot alive 🐆"
WATCHER_BANNER = "Panthera Watcher Uplink is Online."


def build_helper_bot(config: BotConfig, events: asyncio.Queue, world=None, advisor=None) -> ChatRouter:
    """Wire world client, advisor, classifier and palette into a chat router"""
    world = world or MineflayerClient(config, events)
    advisor = advisor or GeminiAdvisor.from_config(config)
    palette = ActionPalette(world, config)
    classifier = CommandClassifier(advisor)
    return ChatRouter(world, classifier, palette, events, config)


async def run_bot(config: BotConfig):
    """Run the chat helper bot until cancelled"""
    events: asyncio.Queue = asyncio.Queue()
    uplink = UplinkServer(BOT_BANNER, port=config.http_port, feed_enabled=False)
    router = build_helper_bot(config, events)

    await uplink.start()
    try:
        router.world.connect()
        await router.run()
    finally:
        router.world.disconnect()
        await uplink.stop()


async def run_watcher(config: WatcherConfig):
    """Run the kill feed watcher until cancelled"""
    events: asyncio.Queue = asyncio.Queue()
    uplink = UplinkServer(WATCHER_BANNER, port=config.http_port, feed_enabled=True)
    world = MineflayerClient(config, events, load_plugins=False)
    recovery = ConnectionRecoveryManager(
        world.connect, RecoveryConfig(reconnect_delay=config.reconnect_delay_seconds)
    )
    router = KillFeedRouter(uplink, events, recovery)

    await uplink.start()
    try:
        await recovery.connect()
        await router.run()
    finally:
        await recovery.stop()
        world.disconnect()
        await uplink.stop()


def parse_args(argv=None):
    """Parse command line arguments

    Returns:
        Parsed arguments
    """
    parser = argparse.ArgumentParser(description="PantherBot - Minecraft helper bot and kill feed watcher")
    parser.add_argument("mode", choices=["bot", "watcher"], help="Run the chat helper bot or the kill feed watcher")
    parser.add_argument("--host", help="Minecraft server host")
    parser.add_argument("--port", type=int, help="Minecraft server port")
    parser.add_argument("--username", help="Bot username")
    parser.add_argument("--http-port", type=int, help="Keep-alive / uplink port")
    parser.add_argument("--log-level", help="Logging level (DEBUG, INFO, WARNING, ERROR)")
    return parser.parse_args(argv)


def load_config(args) -> BotConfig:
    """Build the config for the chosen mode, command line flags win over the environment"""
    overrides = {
        "minecraft_host": args.host,
        "minecraft_port": args.port,
        "bot_username": args.username,
        "http_port": args.http_port,
        "log_level": args.log_level,
    }
    overrides = {key: value for key, value in overrides.items() if value is not None}

    config_class = WatcherConfig if args.mode == "watcher" else BotConfig
    return config_class(**overrides)


async def main(argv=None):
    """Main entry point"""
    args = parse_args(argv)
    config = load_config(args)

    setup_logging(
        log_level=config.log_level,
        log_file=config.log_file,
        console_output=True,
        json_format=config.log_json_format,
        google_log_level=config.google_log_level,
    )

    logger.info("Starting PantherBot", mode=args.mode)

    try:
        if args.mode == "watcher":
            await run_watcher(config)
        else:
            await run_bot(config)
    except asyncio.CancelledError:
        logger.info("PantherBot stopped")
    except Exception as e:
        logger.error(f"Failed to run {args.mode}: {e}", exc_info=True)
        logger.error("Make sure:")
        logger.error("1. Node.js is installed and the mineflayer packages can be installed by JSPyBridge")
        if args.mode == "watcher":
            logger.error("2. Environment variables are set (WATCHER_SERVER_IP, WATCHER_SERVER_PORT, WATCHER_NAME)")
        else:
            logger.error("2. Environment variables are set (SERVER_IP, SERVER_PORT, BOT_NAME, GEMINI_API_KEY)")
        sys.exit(1)


def run():
    """Console script entry point"""
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    run()
