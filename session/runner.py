from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Awaitable, Callable, Optional

from core.errors import NoActiveSessionError, SessionBusyError

from .models import Action, GameType, Session, SessionConfig
from .quickplay import bot_turn_pending, create_session, execute_action, execute_bot_action

LOGGER = logging.getLogger("quickplay_session")

SessionListener = Callable[[Session], Awaitable[None]]
Sleeper = Callable[[float], Awaitable[None]]


@dataclass
class _ActiveSlot:
    # One slot per live session. Its lock is the reentrancy guard, so a reset
    # that swaps in a new slot never waits on a loop still draining the old one.
    session: Session
    guard: asyncio.Lock = field(default_factory=asyncio.Lock)


class SessionRunner:
    """Drives one quick-play session: applies the human's action, then paces bots.

    At most one transition sequence is in flight per session. A request that
    arrives while bots are still acting is rejected with SessionBusyError,
    never applied to a stale state.
    """

    def __init__(
        self,
        config: Optional[SessionConfig] = None,
        *,
        listener: Optional[SessionListener] = None,
        sleep: Sleeper = asyncio.sleep,
    ) -> None:
        self.config = config or SessionConfig()
        self.listener = listener
        self._sleep = sleep
        self._slot: Optional[_ActiveSlot] = None

    @property
    def session(self) -> Optional[Session]:
        return self._slot.session if self._slot else None

    @property
    def busy(self) -> bool:
        return bool(self._slot and self._slot.guard.locked())

    async def start(self, game_type: GameType, player_name: str, seed: Optional[int] = None) -> Optional[Session]:
        session = create_session(game_type, player_name, seed)
        slot = _ActiveSlot(session)
        self._slot = slot
        LOGGER.info("Session %s started (%s) for %s", session.session_id, session.game_type.value, player_name)
        async with slot.guard:
            await self._publish(slot)
            await self._drive_bots(slot)
        return self._result(slot)

    async def submit(self, action: Action) -> Optional[Session]:
        slot = self._slot
        if slot is None:
            raise NoActiveSessionError("No active session")
        if slot.guard.locked():
            raise SessionBusyError("Bots are still playing; wait for your turn")
        async with slot.guard:
            slot.session = execute_action(slot.session, action)
            await self._publish(slot)
            await self._drive_bots(slot)
        return self._result(slot)

    def reset(self) -> None:
        if self._slot is not None:
            LOGGER.info("Session %s reset", self._slot.session.session_id)
        self._slot = None

    def _result(self, slot: _ActiveSlot) -> Optional[Session]:
        # None once a reset has replaced the slot this call was driving.
        return slot.session if self._slot is slot else None

    async def _drive_bots(self, slot: _ActiveSlot) -> None:
        delay = self.config.bot_delay_ms / 1000
        for _ in range(self.config.max_bot_iterations):
            if self._slot is not slot or not bot_turn_pending(slot.session):
                return
            await self._sleep(delay)
            # The session may have been reset or replaced while we slept.
            if self._slot is not slot:
                return
            next_session = execute_bot_action(slot.session)
            if next_session is None:
                return
            slot.session = next_session
            LOGGER.debug("Bot moved in session %s (version %s)", next_session.session_id, next_session.version)
            await self._publish(slot)
        if self._slot is slot and bot_turn_pending(slot.session):
            LOGGER.warning(
                "Bot loop for session %s hit the %s-iteration cap",
                slot.session.session_id,
                self.config.max_bot_iterations,
            )

    async def _publish(self, slot: _ActiveSlot) -> None:
        if self.listener is not None and self._slot is slot:
            await self.listener(slot.session)
