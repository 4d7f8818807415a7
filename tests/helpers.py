from __future__ import annotations

import random
from collections import deque
from typing import Iterable, Sequence

from holdem.cards import build_deck, parse_cards
from holdem.game import HoldemEngine
from holdem.models import GameConfig, Phase, RoundState


class ScriptedRandom(random.Random):
    """Random source whose ``random()`` draws come from a script.

    Shuffles still go through ``getrandbits`` so dealing never eats scripted draws.
    Overriding ``getrandbits`` here is what keeps it that way: a subclass that only
    defines ``random()`` gets a ``_randbelow`` (and so a ``shuffle``) built on it.
    Once the script runs out every draw is 0.99: no bluffs, no light calls.
    """

    def __init__(self, *, draws: Iterable[float] = (), seed: int = 0) -> None:
        super().__init__(seed)
        self.draws = deque(draws)

    def random(self) -> float:
        if self.draws:
            return self.draws.popleft()
        return 0.99

    def getrandbits(self, k: int) -> int:
        return super().getrandbits(k)


def create_engine(
    *,
    draws: Iterable[float] = (),
    starting_stack: int = 1_000,
    bet_unit: int = 50,
    wheel_straights: bool = False,
    seed: int = 0,
) -> HoldemEngine:
    """Engine whose opponent draws are scripted and whose shuffles are seeded."""
    config = GameConfig(starting_stack=starting_stack, bet_unit=bet_unit, wheel_straights=wheel_straights)
    return HoldemEngine(config, rng=ScriptedRandom(draws=draws, seed=seed))


def rig_round(
    engine: HoldemEngine,
    player: Sequence[str],
    opponent: Sequence[str],
    board: Sequence[str],
) -> RoundState:
    """Deal, then replace hole cards and stack the deck so ``board`` comes out next."""
    engine.deal()
    state = engine.state
    player_cards, opponent_cards, board_cards = parse_cards(player), parse_cards(opponent), parse_cards(board)
    used = set(player_cards + opponent_cards + board_cards)
    state.player_hole = player_cards
    state.opponent_hole = opponent_cards
    state.deck = board_cards + [card for card in build_deck(random.Random(0)) if card not in used]
    return state


def all_cards_accounted(state: RoundState) -> bool:
    """True when deck and dealt cards together form one full, duplicate-free deck."""
    cards = list(state.deck) + state.player_hole + state.opponent_hole + state.community
    return len(cards) == 52 and len(set(cards)) == 52


def check_to_end(engine: HoldemEngine) -> None:
    while engine.phase == Phase.PLAYING:
        engine.check()
