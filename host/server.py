from __future__ import annotations

import asyncio
import json
import logging
from datetime import datetime, timezone
from http import HTTPStatus
from typing import Any, Dict, Optional, Set

import websockets
from websockets.asyncio.server import ServerConnection, serve
from websockets.http11 import Request, Response

from core.cards import parse_label
from core.errors import GameError
from omaha.models import OmahaActionType
from session.models import Action, GameType, NextHand, OmahaMove, PlayCard, Session, SessionConfig, SubmitBid
from session.runner import SessionRunner
from session.snapshot import snapshot_payload

LOGGER = logging.getLogger("quickplay_host")

# QuickPlayServer exposes one quick-play session per connection to a UI
# client. Game rules live in the engines; this module only translates JSON
# messages into session actions and pushes snapshots back.

ACTION_MESSAGES = ("bid", "play", "action", "next_hand")


class HostProtocolError(Exception):
    def __init__(self, code: str, msg: str) -> None:
        super().__init__(msg)
        self.code = code
        self.msg = msg


def _envelope(msg_type: str, payload: Dict[str, object]) -> str:
    body: Dict[str, object] = {"type": msg_type, "v": 1, "ts": datetime.now(timezone.utc).isoformat()}
    body.update(payload)
    return json.dumps(body)


class ClientConnection:
    """One UI client and the session runner it owns."""

    def __init__(self, websocket: ServerConnection, config: SessionConfig) -> None:
        self.websocket = websocket
        self.runner = SessionRunner(config, listener=self.publish)
        self.tasks: Set[asyncio.Task] = set()

    async def send_json(self, msg_type: str, payload: Dict[str, object]) -> None:
        try:
            await self.websocket.send(_envelope(msg_type, payload))
        except websockets.ConnectionClosed:
            pass

    async def send_error(self, code: str, msg: str) -> None:
        await self.send_json("error", {"code": code, "msg": msg})

    async def publish(self, session: Session) -> None:
        await self.send_json("state", snapshot_payload(session))

    def close(self) -> None:
        self.runner.reset()
        for task in list(self.tasks):
            task.cancel()


class QuickPlayServer:
    def __init__(self, config: Optional[SessionConfig] = None) -> None:
        self.config = config or SessionConfig()

    async def start(self, host: str = "127.0.0.1", port: int = 8766) -> None:
        async with serve(self.handle_connection, host, port, process_request=_process_request):
            LOGGER.info("Quick-play server listening on %s:%s", host, port)
            await asyncio.Future()

    async def handle_connection(self, websocket: ServerConnection) -> None:
        client = ClientConnection(websocket, self.config)
        LOGGER.info("Client connected from %s", websocket.remote_address)
        await client.send_json("welcome", {
            "games": [game.value for game in GameType],
            "config": {
                "bot_delay_ms": self.config.bot_delay_ms,
                "max_bot_iterations": self.config.max_bot_iterations,
            },
        })
        try:
            async for raw in websocket:
                self._spawn(client, self._decode(raw))
        except websockets.ConnectionClosed:
            pass
        finally:
            client.close()
        LOGGER.info("Client %s disconnected", websocket.remote_address)

    def _spawn(self, client: ClientConnection, message: Dict[str, Any]) -> None:
        # Each message runs as its own task so a request that lands during a
        # bot loop is answered with BUSY instead of waiting behind it.
        task = asyncio.create_task(self.dispatch(client, message))
        client.tasks.add(task)
        task.add_done_callback(client.tasks.discard)

    async def dispatch(self, client: ClientConnection, message: Dict[str, Any]) -> None:
        msg_type = message.get("type")
        try:
            if msg_type == "start":
                await self._handle_start(client, message)
            elif msg_type == "reset":
                client.runner.reset()
                await client.send_json("reset", {})
            elif msg_type in ACTION_MESSAGES:
                await client.runner.submit(self._parse_action(msg_type, message))
            else:
                raise HostProtocolError("UNKNOWN_TYPE", "Unsupported message type")
        except GameError as exc:
            LOGGER.warning("Rejected %s message: %s", msg_type, exc.msg)
            await client.send_error(exc.code, exc.msg)
        except HostProtocolError as exc:
            await client.send_error(exc.code, exc.msg)
        except (KeyError, TypeError, ValueError) as exc:
            await client.send_error("BAD_SCHEMA", f"Malformed {msg_type} message: {exc}")
        except Exception as exc:  # noqa: BLE001
            LOGGER.exception("Quick-play message %s crashed: %s", msg_type, exc)
            await client.send_error("INTERNAL", "Internal error")

    async def _handle_start(self, client: ClientConnection, message: Dict[str, Any]) -> None:
        game = GameType(message["game"])
        name = message.get("name")
        if not isinstance(name, str):
            raise HostProtocolError("BAD_SCHEMA", "name required")
        seed = message.get("seed")
        if seed is not None and not isinstance(seed, int):
            raise HostProtocolError("BAD_SCHEMA", "seed must be an integer")
        await client.runner.start(game, name, seed)

    def _parse_action(self, msg_type: str, message: Dict[str, Any]) -> Action:
        if msg_type == "bid":
            bid = message["bid"]
            if not isinstance(bid, int):
                raise HostProtocolError("BAD_SCHEMA", "bid must be an integer")
            return SubmitBid(bid)
        if msg_type == "play":
            return PlayCard(parse_label(message["card"]))
        if msg_type == "action":
            amount = message.get("amount")
            if amount is not None and not isinstance(amount, int):
                raise HostProtocolError("BAD_SCHEMA", "amount must be an integer")
            return OmahaMove(OmahaActionType(message["action"]), amount)
        return NextHand()

    def _decode(self, raw: Any) -> Dict[str, Any]:
        try:
            message = json.loads(raw)
        except json.JSONDecodeError:
            return {}
        return message if isinstance(message, dict) else {}


def _process_request(connection: ServerConnection, request: Request) -> Optional[Response]:
    """Answer plain HTTP health checks; let WebSocket upgrades through."""
    if request.headers.get("Upgrade", "").lower() == "websocket":
        return None
    if request.path in {"/", "/health", "/healthz"}:
        return connection.respond(HTTPStatus.OK, "quick-play server running\n")
    return connection.respond(HTTPStatus.NOT_FOUND, "not found\n")
