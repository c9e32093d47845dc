from __future__ import annotations


class GameError(Exception):
    """Base for rule violations raised by the engines and the session layer."""

    code = "GAME_ERROR"

    def __init__(self, msg: str) -> None:
        super().__init__(msg)
        self.msg = msg


class IllegalPhaseError(GameError, ValueError):
    code = "ILLEGAL_PHASE"


class IllegalActionError(GameError, ValueError):
    code = "ILLEGAL_ACTION"


class IllegalCardError(GameError, ValueError):
    code = "ILLEGAL_CARD"


class PlayerNotFoundError(GameError, RuntimeError):
    # The roster is fixed at four seats, so reaching this is a caller bug.
    code = "NOT_FOUND"


class SessionBusyError(GameError):
    code = "BUSY"


class NoActiveSessionError(GameError):
    code = "NO_SESSION"
