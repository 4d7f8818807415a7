from __future__ import annotations

import logging
import random
from typing import Optional

from .cards import build_deck, cards_to_labels, cards_to_symbols, deal
from .errors import GameOver, InsufficientFunds, InvalidAction, InvalidBetUnit
from .evaluator import assess, evaluate
from .models import Decision, GameConfig, OpponentAction, Phase, RoundState, Snapshot, Street
from .policy import OpponentPolicy

LOGGER = logging.getLogger("holdem.engine")

# HoldemEngine keeps the whole heads-up session in memory. Rendering and input
# live elsewhere; this module only knows poker rules and chip accounting.

GAME_OVER_MESSAGE = "Game Over. One player is bankrupt."

_REVEAL_COUNTS = {
    Street.PRE_FLOP: (Street.FLOP, 3),
    Street.FLOP: (Street.TURN, 1),
    Street.TURN: (Street.RIVER, 1),
}

_OPPONENT_MESSAGES = {
    OpponentAction.CALL: "CPU calls your raise.",
    OpponentAction.RAISE: "CPU raises confidently.",
    OpponentAction.BLUFF: "CPU bluffs and raises!",
    OpponentAction.CHECK: "CPU checks.",
}


class HoldemEngine:
    """Heads-up Hold'em round state machine: the human player against the house."""

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        rng: Optional[random.Random] = None,
        policy: Optional[OpponentPolicy] = None,
        seed: Optional[int] = None,
    ) -> None:
        self.config = config or GameConfig()
        self.rng = rng if rng is not None else random.Random(seed)
        self.policy = policy or OpponentPolicy()
        self.round_counter = 0
        self._validate_bet_unit(self.config.bet_unit, self.config.starting_stack)
        self.state = RoundState(
            round_id="",
            deck=build_deck(self.rng),
            player_chips=self.config.starting_stack,
            opponent_chips=self.config.starting_stack,
            bet_unit=self.config.bet_unit,
        )

    # Read-only accessors ---------------------------------------------

    @property
    def phase(self) -> Phase:
        return self.state.phase

    @property
    def pot(self) -> int:
        return self.state.pot

    @property
    def player_chips(self) -> int:
        return self.state.player_chips

    @property
    def opponent_chips(self) -> int:
        return self.state.opponent_chips

    @property
    def message(self) -> str:
        return self.state.message

    @property
    def is_game_over(self) -> bool:
        if self.state.phase == Phase.PLAYING:
            return False
        return self.state.player_chips <= 0 or self.state.opponent_chips <= 0

    # Round lifecycle -------------------------------------------------

    def deal(self) -> Snapshot:
        state = self.state
        if state.phase != Phase.READY:
            raise InvalidAction(f"Cannot deal while {state.phase.value}")
        if state.player_chips <= 0 or state.opponent_chips <= 0:
            LOGGER.info("Deal refused: player=%s opponent=%s", state.player_chips, state.opponent_chips)
            raise GameOver(GAME_OVER_MESSAGE)

        state.round_id = f"R-{self.round_counter:05d}"
        self.round_counter += 1

        state.deck = build_deck(self.rng)
        state.player_hole = deal(state.deck, 2)
        state.opponent_hole = deal(state.deck, 2)
        state.community = []
        state.player_hand = None
        state.opponent_hand = None

        ante = min(state.bet_unit, state.player_chips, state.opponent_chips)
        self._commit_player(ante)
        self._commit_opponent(ante)
        self._fit_bet_unit()

        state.phase = Phase.PLAYING
        state.street = Street.PRE_FLOP
        state.message = ""
        LOGGER.info(
            "Round %s dealt: player=%s ante=%s pot=%s chips_in_play=%s",
            state.round_id,
            cards_to_labels(state.player_hole),
            ante,
            state.pot,
            state.chips_in_play(),
        )
        return self.snapshot()

    def reset(self) -> Snapshot:
        state = self.state
        if state.phase not in (Phase.SHOWDOWN, Phase.FOLDED):
            raise InvalidAction(f"Cannot reset while {state.phase.value}")
        state.deck = build_deck(self.rng)
        state.player_hole = []
        state.opponent_hole = []
        state.community = []
        state.player_hand = None
        state.opponent_hand = None
        state.pot = 0
        state.phase = Phase.READY
        state.street = Street.PRE_FLOP
        self._fit_bet_unit()
        state.message = GAME_OVER_MESSAGE if self.is_game_over else ""
        return self.snapshot()

    def set_bet_unit(self, amount: int) -> Snapshot:
        self._validate_bet_unit(amount, self.state.player_chips)
        self.state.bet_unit = amount
        return self.snapshot()

    def _validate_bet_unit(self, amount: int, chips: int) -> None:
        low, step = self.config.min_bet_unit, self.config.bet_step
        if isinstance(amount, bool) or not isinstance(amount, int):
            raise InvalidBetUnit(f"Bet unit must be a whole number of chips, got {amount!r}")
        if amount < low or amount > chips:
            raise InvalidBetUnit(f"Bet unit must be between {low} and {chips}")
        if amount % step:
            raise InvalidBetUnit(f"Bet unit must be a multiple of {step}")

    def _fit_bet_unit(self) -> None:
        # Keep the unit inside [min_bet_unit, player_chips] as the stack shrinks.
        state = self.state
        if state.bet_unit <= state.player_chips:
            return
        low, step = self.config.min_bet_unit, self.config.bet_step
        state.bet_unit = max(low, state.player_chips - state.player_chips % step)

    # Player actions --------------------------------------------------

    def check(self) -> Snapshot:
        self._require_playing("check")
        self.state.message = "You check."
        self._opponent_turn(player_raised=False, raise_amount=0)
        return self.snapshot()

    def raise_bet(self, amount: Optional[int] = None) -> Snapshot:
        self._require_playing("raise")
        state = self.state
        if amount is None:
            amount = state.bet_unit
        if isinstance(amount, bool) or not isinstance(amount, int):
            raise InvalidAction(f"Raise must be a whole number of chips, got {amount!r}")
        if amount <= 0:
            raise InvalidAction("Raise must be a positive amount")
        if amount > state.player_chips:
            raise InsufficientFunds(f"Cannot raise {amount} with {state.player_chips} chips")

        self._commit_player(amount)
        state.message = f"You raise {amount}."
        self._opponent_turn(player_raised=True, raise_amount=amount)
        return self.snapshot()

    def fold(self) -> Snapshot:
        self._require_playing("fold")
        state = self.state
        state.message = "You Fold. CPU Wins."
        self._award_opponent(state.pot)
        state.phase = Phase.FOLDED
        LOGGER.info("Round %s: player folded", state.round_id)
        return self.snapshot()

    # Streets and settlement ------------------------------------------

    def advance_community(self) -> Snapshot:
        self._require_playing("advance")
        state = self.state
        if state.street == Street.RIVER:
            return self.showdown()

        next_street, count = _REVEAL_COUNTS[state.street]
        cards = deal(state.deck, count)
        state.community.extend(cards)
        state.street = next_street
        LOGGER.debug("Round %s %s: %s", state.round_id, next_street.value, cards_to_labels(cards))
        return self.snapshot()

    def showdown(self) -> Snapshot:
        self._require_playing("showdown")
        state = self.state
        if state.street != Street.RIVER:
            raise InvalidAction("Showdown needs all five community cards")

        wheel = self.config.wheel_straights
        player_hand = evaluate(state.player_hole + state.community, wheel)
        opponent_hand = evaluate(state.opponent_hole + state.community, wheel)
        state.player_hand = player_hand
        state.opponent_hand = opponent_hand

        pot = state.pot
        if player_hand > opponent_hand:
            self._award_player(pot)
            state.message = f"You Win! ({player_hand.name})"
        elif player_hand < opponent_hand:
            self._award_opponent(pot)
            state.message = f"CPU Wins. ({opponent_hand.name})"
        else:
            # The player acts first, so an odd chip goes to the player.
            share, remainder = divmod(pot, 2)
            self._award_player(share + remainder)
            self._award_opponent(share)
            state.message = f"Draw. ({player_hand.name})"

        state.phase = Phase.SHOWDOWN
        LOGGER.info(
            "Round %s showdown: player %.2f vs opponent %.2f, pot %s",
            state.round_id,
            player_hand.strength,
            opponent_hand.strength,
            pot,
        )
        return self.snapshot()

    # Opponent turn ---------------------------------------------------

    def _opponent_turn(self, player_raised: bool, raise_amount: int) -> Decision:
        state = self.state
        strength = assess(state.opponent_hole + state.community, self.config.wheel_straights).strength
        decision = self.policy.decide(
            strength,
            player_raised=player_raised,
            raise_amount=raise_amount,
            opponent_chips=state.opponent_chips,
            bet_unit=state.bet_unit,
            rng=self.rng,
        )
        LOGGER.debug("Round %s opponent %s (strength %.2f)", state.round_id, decision, strength)
        self._apply_decision(decision)
        return decision

    def _apply_decision(self, decision: Decision) -> None:
        state = self.state
        if decision.action == OpponentAction.FOLD:
            if decision.forced:
                reply = "CPU can't afford your raise and folds. You win!"
            else:
                reply = "CPU folds. You win!"
            state.message = f"{state.message} {reply}".strip()
            # Pot already holds the player's raise.
            self._award_player(state.pot)
            state.phase = Phase.FOLDED
            LOGGER.info("Round %s: opponent folded (forced=%s)", state.round_id, decision.forced)
            return

        action = decision.action
        if action == OpponentAction.CALL:
            self._commit_opponent(decision.amount)
        elif action in (OpponentAction.RAISE, OpponentAction.BLUFF):
            amount = min(decision.amount, state.opponent_chips)
            if amount > 0:
                self._commit_opponent(amount)
            else:
                action = OpponentAction.CHECK
        elif action != OpponentAction.CHECK:
            raise ValueError(f"Unsupported opponent action {action}")

        state.message = f"{state.message} {_OPPONENT_MESSAGES[action]}".strip()
        self.advance_community()

    # Chip movement ---------------------------------------------------

    def _commit_player(self, amount: int) -> None:
        amount = min(amount, self.state.player_chips)
        self.state.player_chips -= amount
        self.state.pot += amount

    def _commit_opponent(self, amount: int) -> None:
        amount = min(amount, self.state.opponent_chips)
        self.state.opponent_chips -= amount
        self.state.pot += amount

    def _award_player(self, amount: int) -> None:
        self.state.player_chips += amount
        self.state.pot -= amount

    def _award_opponent(self, amount: int) -> None:
        self.state.opponent_chips += amount
        self.state.pot -= amount

    def _require_playing(self, action: str) -> None:
        if self.state.phase != Phase.PLAYING:
            raise InvalidAction(f"Cannot {action} while {self.state.phase.value}")

    # Snapshot helpers ------------------------------------------------

    def snapshot(self) -> Snapshot:
        state = self.state
        wheel = self.config.wheel_straights
        player_rank = None
        if state.phase in (Phase.PLAYING, Phase.SHOWDOWN) and state.player_hole:
            player_rank = assess(state.player_hole + state.community, wheel).name

        opponent_hole = None
        opponent_rank = None
        if state.phase == Phase.SHOWDOWN:
            opponent_hole = tuple(cards_to_symbols(state.opponent_hole))
            if state.opponent_hand is not None:
                opponent_rank = state.opponent_hand.name

        return Snapshot(
            round_id=state.round_id,
            phase=state.phase,
            street=state.street,
            pot=state.pot,
            player_chips=state.player_chips,
            opponent_chips=state.opponent_chips,
            bet_unit=state.bet_unit,
            message=state.message,
            game_over=self.is_game_over,
            player_hole=tuple(cards_to_symbols(state.player_hole)),
            community=tuple(cards_to_symbols(state.community)),
            player_rank=player_rank,
            opponent_hole=opponent_hole,
            opponent_rank=opponent_rank,
        )
