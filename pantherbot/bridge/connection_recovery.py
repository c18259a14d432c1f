"""
Connection Recovery - fixed-delay reconnection for the watcher bot
"""
import asyncio
import time
from dataclasses import dataclass
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, Optional, Union

import structlog

logger = structlog.get_logger(__name__)


class ConnectionState(Enum):
    """Connection states"""
    DISCONNECTED = "disconnected"
    CONNECTING = "connecting"
    CONNECTED = "connected"


@dataclass
class RecoveryConfig:
    """Configuration for connection recovery"""
    reconnect_delay: float = 5.0


@dataclass
class ConnectionMetrics:
    """Connection counters"""
    connection_attempts: int = 0
    successful_connections: int = 0
    failed_connections: int = 0
    disconnections: int = 0
    last_connection_time: Optional[float] = None
    last_disconnection_time: Optional[float] = None

    def uptime(self) -> float:
        """Seconds since the last successful connection"""
        if self.last_connection_time is None:
            return 0.0
        return time.time() - self.last_connection_time


ConnectCallback = Callable[[], Union[None, Awaitable[None]]]


class ConnectionRecoveryManager:
    """Drives Disconnected -> Connecting -> Connected and back.

    A loss while connecting or connected schedules exactly one connect attempt
    after ``reconnect_delay`` seconds. There is no backoff and no retry cap.
    """

    def __init__(self, connect: ConnectCallback, config: RecoveryConfig = None):
        self.config = config or RecoveryConfig()
        self.connect_callback = connect
        self.state = ConnectionState.DISCONNECTED
        self.metrics = ConnectionMetrics()
        self.recovery_task: Optional[asyncio.Task] = None

        logger.info("ConnectionRecoveryManager initialized", reconnect_delay=self.config.reconnect_delay)

    @property
    def reconnect_scheduled(self) -> bool:
        return self.recovery_task is not None and not self.recovery_task.done()

    async def connect(self) -> bool:
        """Make one connection attempt now"""
        self.state = ConnectionState.CONNECTING
        self.metrics.connection_attempts += 1
        logger.info("Attempting to connect", attempt=self.metrics.connection_attempts)

        try:
            result = self.connect_callback()
            if asyncio.iscoroutine(result):
                await result
        except Exception as e:
            self.metrics.failed_connections += 1
            logger.warning("Connection attempt failed", error=str(e))
            self.handle_connection_lost(str(e))
            return False

        return True

    def handle_connection_established(self) -> None:
        """Mark the connection as live (login seen)"""
        old_state = self.state
        self.state = ConnectionState.CONNECTED
        self.metrics.successful_connections += 1
        self.metrics.last_connection_time = time.time()

        logger.info("Connection established", previous_state=old_state.value)

    def handle_connection_lost(self, reason: Optional[str] = None) -> bool:
        """Handle an end or error signal.

        Returns True when this call scheduled a reconnect.
        """
        if self.state == ConnectionState.DISCONNECTED or self.reconnect_scheduled:
            logger.debug("Loss signal ignored, reconnect already pending", reason=reason)
            return False

        old_state = self.state
        self.state = ConnectionState.DISCONNECTED
        self.metrics.disconnections += 1
        self.metrics.last_disconnection_time = time.time()

        logger.warning(
            "Connection lost",
            previous_state=old_state.value,
            reason=reason,
            uptime=round(self.metrics.uptime(), 2),
        )
        logger.info("Reconnecting after delay", delay=self.config.reconnect_delay)

        self.recovery_task = asyncio.create_task(self._reconnect_after_delay())
        return True

    async def _reconnect_after_delay(self) -> None:
        await asyncio.sleep(self.config.reconnect_delay)
        self.recovery_task = None
        await self.connect()

    async def stop(self) -> None:
        """Cancel a pending reconnect"""
        if self.recovery_task:
            self.recovery_task.cancel()
            try:
                await self.recovery_task
            except asyncio.CancelledError:
                pass
            self.recovery_task = None
        logger.info("Connection recovery stopped")

    def get_status(self) -> Dict[str, Any]:
        """Get current connection status and counters"""
        return {
            "state": self.state.value,
            "reconnect_scheduled": self.reconnect_scheduled,
            "metrics": {
                "connection_attempts": self.metrics.connection_attempts,
                "successful_connections": self.metrics.successful_connections,
                "failed_connections": self.metrics.failed_connections,
                "disconnections": self.metrics.disconnections,
                "current_uptime": round(self.metrics.uptime(), 2),
            },
        }
