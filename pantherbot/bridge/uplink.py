"""
Uplink server - HTTP keep-alive endpoint and kill feed websocket on one port
"""
import json
from http import HTTPStatus
from typing import Optional, Set

import structlog
from websockets.asyncio.server import Server, ServerConnection, broadcast, serve
from websockets.exceptions import ConnectionClosed
from websockets.http11 import Request, Response
from websockets.protocol import State

logger = structlog.get_logger(__name__)


class UplinkServer:
    """Answers plain GET requests with a banner and fans kill events out to websocket clients"""

    def __init__(self, banner: str, port: int = 8080, host: str = "0.0.0.0", feed_enabled: bool = True):
        self.banner = banner
        self.host = host
        self.port = port
        self.feed_enabled = feed_enabled
        self.server: Optional[Server] = None
        self.connected_clients: Set[ServerConnection] = set()

    async def start(self):
        """Start listening"""
        logger.info("Starting uplink server", host=self.host, port=self.port, feed_enabled=self.feed_enabled)

        self.server = await serve(
            self._handle_client,
            self.host,
            self.port,
            process_request=self._process_request,
        )

        # Port 0 means the OS picked one
        self.port = self.server.sockets[0].getsockname()[1]
        logger.info("Uplink server listening", port=self.port)

    async def stop(self):
        """Stop the server and drop clients"""
        if self.server:
            self.server.close()
            await self.server.wait_closed()
            self.server = None
        self.connected_clients.clear()
        logger.info("Uplink server stopped")

    def _process_request(self, connection: ServerConnection, request: Request) -> Optional[Response]:
        """Serve the keep-alive banner unless this is a websocket upgrade"""
        if request.headers.get("Upgrade", "").lower() != "websocket":
            return connection.respond(HTTPStatus.OK, f"{self.banner}\n")
        if not self.feed_enabled:
            return connection.respond(HTTPStatus.NOT_FOUND, "Not Found\n")
        return None

    async def _handle_client(self, websocket: ServerConnection):
        """Hold a feed subscriber until it goes away"""
        client_id = f"{websocket.remote_address[0]}:{websocket.remote_address[1]}"
        logger.info("Website connected to the kill feed", client=client_id)

        self.connected_clients.add(websocket)

        try:
            # Subscribers only listen, anything they send is dropped
            async for _ in websocket:
                pass
        except ConnectionClosed:
            pass
        finally:
            self.connected_clients.discard(websocket)
            logger.info("Kill feed client disconnected", client=client_id)

    def open_clients(self) -> int:
        return sum(1 for client in self.connected_clients if client.state is State.OPEN)

    def broadcast_kill(self, text: str) -> int:
        """Send a kill event to every open client, returns how many were targeted.

        Only open clients are sent to. A slow client is not skipped, its messages
        queue up in its write buffer.
        """
        payload = json.dumps({"event": "kill", "text": text})
        targeted = self.open_clients()
        broadcast(self.connected_clients, payload)
        logger.debug("Kill event broadcast", clients=targeted)
        return targeted
