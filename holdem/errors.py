from __future__ import annotations


class HoldemError(Exception):
    """Base error for the round engine; carries a short code for the caller."""

    code = "holdem_error"

    def __init__(self, msg: str, code: str | None = None) -> None:
        super().__init__(msg)
        self.msg = msg
        if code is not None:
            self.code = code


class GameOver(HoldemError):
    code = "game_over"


class InvalidHand(HoldemError, ValueError):
    code = "invalid_hand"


class InvalidAction(HoldemError):
    code = "invalid_action"


class InsufficientFunds(HoldemError):
    code = "insufficient_funds"


class InvalidBetUnit(HoldemError, ValueError):
    code = "invalid_bet_unit"
