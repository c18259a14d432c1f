from .connection_recovery import ConnectionRecoveryManager, ConnectionState, RecoveryConfig
from .events import BotEvent, ChatEvent, ConnectionEvent, ConnectionEventKind, ServerMessage
from .uplink import UplinkServer
from .world_client import BlockRef, EntityRef, InventoryItem, MineflayerClient, WorldClient

__all__ = [
    "MineflayerClient",
    "WorldClient",
    "EntityRef",
    "BlockRef",
    "InventoryItem",
    "BotEvent",
    "ChatEvent",
    "ServerMessage",
    "ConnectionEvent",
    "ConnectionEventKind",
    "ConnectionRecoveryManager",
    "ConnectionState",
    "RecoveryConfig",
    "UplinkServer",
]
