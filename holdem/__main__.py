from __future__ import annotations

import argparse
import logging
from typing import Callable, List, Optional

from .errors import HoldemError, InvalidBetUnit
from .game import HoldemEngine
from .models import GameConfig, Phase, Snapshot

LOGGER = logging.getLogger("holdem.console")

# ConsoleTable is the thinnest possible front end: it prints snapshots and
# turns typed commands into engine calls. No game rules live here.

HELP_TEXT = (
    "Commands: d=deal  c=check  r [N]=raise (bet unit if N omitted)  f=fold  "
    "n=next round  b N=set bet unit  h=help  q=quit"
)


class ConsoleTable:
    def __init__(
        self,
        engine: HoldemEngine,
        input_fn: Optional[Callable[[str], str]] = None,
        output_fn: Optional[Callable[[str], None]] = None,
    ) -> None:
        self.engine = engine
        self.input_fn = input_fn or input
        self.output_fn = output_fn or print

    def run(self) -> None:
        self.output_fn(HELP_TEXT)
        self.render(self.engine.snapshot())
        while True:
            try:
                line = self.input_fn(self._prompt()).strip()
            except EOFError:
                break
            if not line:
                continue
            if line.lower() in ("q", "quit"):
                break
            snapshot = self.handle(line)
            if snapshot is not None:
                self.render(snapshot)

    def handle(self, line: str) -> Optional[Snapshot]:
        parts = line.split()
        command, args = parts[0].lower(), parts[1:]
        try:
            if command in ("h", "help"):
                self.output_fn(HELP_TEXT)
                return None
            if command in ("d", "deal"):
                return self.engine.deal()
            if command in ("c", "check"):
                return self.engine.check()
            if command in ("r", "raise"):
                amount = self._parse_amount(args) if args else None
                return self.engine.raise_bet(amount)
            if command in ("f", "fold"):
                return self.engine.fold()
            if command in ("n", "next", "reset"):
                return self.engine.reset()
            if command in ("b", "bet"):
                if not args:
                    self.output_fn("Bet unit requires an amount")
                    return None
                return self.engine.set_bet_unit(self._parse_amount(args))
        except HoldemError as exc:
            self.output_fn(f"Error {exc.code}: {exc.msg}")
            return None
        except ValueError as exc:
            self.output_fn(str(exc))
            return None
        self.output_fn("Unknown command. Type h for help.")
        return None

    def render(self, snapshot: Snapshot) -> None:
        header = f"\n>>> {snapshot.phase.value}"
        if snapshot.phase == Phase.PLAYING:
            header = f"{header} {snapshot.street.value}"
        lines: List[str] = [
            header,
            f"Pot: {snapshot.pot} | You: {snapshot.player_chips} | CPU: {snapshot.opponent_chips} | Bet unit: {snapshot.bet_unit}",
        ]
        if snapshot.community:
            lines.append(f"Board: {' '.join(snapshot.community)}")
        if snapshot.player_hole:
            rank = f" ({snapshot.player_rank})" if snapshot.player_rank else ""
            lines.append(f"You: {' '.join(snapshot.player_hole)}{rank}")
        if snapshot.opponent_hole is not None:
            rank = f" ({snapshot.opponent_rank})" if snapshot.opponent_rank else ""
            lines.append(f"CPU: {' '.join(snapshot.opponent_hole)}{rank}")
        elif snapshot.phase != Phase.READY:
            lines.append("CPU: ?? ??")
        if snapshot.message:
            lines.append(snapshot.message)
        self.output_fn("\n".join(lines))

    def _prompt(self) -> str:
        phase = self.engine.phase
        if phase == Phase.READY:
            return "[d]eal / [b]et N / [q]uit: "
        if phase == Phase.PLAYING:
            return "[c]heck / [r]aise N / [f]old: "
        return "[n]ext round / [q]uit: "

    @staticmethod
    def _parse_amount(args: List[str]) -> int:
        try:
            return int(args[0])
        except ValueError:
            raise ValueError(f"Enter a valid integer, got {args[0]!r}") from None


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Heads-up Texas Hold'em against the house")
    parser.add_argument("--seed", type=int, default=None, help="Seed for shuffles and opponent draws")
    parser.add_argument("--starting-stack", type=int, default=1_000)
    parser.add_argument("--bet-unit", type=int, default=50)
    parser.add_argument(
        "--wheel-straights",
        action="store_true",
        help="Recognise A-2-3-4-5 as a straight",
    )
    parser.add_argument("--log-level", default="WARNING")
    args = parser.parse_args(argv)

    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.WARNING))

    config = GameConfig(
        starting_stack=args.starting_stack,
        bet_unit=args.bet_unit,
        wheel_straights=args.wheel_straights,
    )
    try:
        engine = HoldemEngine(config, seed=args.seed)
    except InvalidBetUnit as exc:
        parser.error(f"--bet-unit: {exc.msg}")
    LOGGER.info("Starting session stack=%s bet_unit=%s seed=%s", config.starting_stack, config.bet_unit, args.seed)
    ConsoleTable(engine).run()


if __name__ == "__main__":
    main()
