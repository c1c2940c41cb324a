"""Headless ASCII demo for the engine.

Run with: `python -m blockfall`

Plays a session with random inputs for a number of ticks and prints the final
frame, useful as a smoke test that the whole spawn/fall/lock/clear cycle runs.
"""

from __future__ import annotations

import argparse
import logging
import random

from . import GameState, SessionConfig
from .board import HEIGHT, WIDTH
from .game_state import TICK_MS
from .utils import active_mask, format_grid, render_grid

LOGGER = logging.getLogger(__name__)

COMMANDS = ("move_left", "move_right", "rotate_cw", "rotate_ccw", "soft_drop", "hard_drop")


def run(state: GameState, ticks: int, rng: random.Random, input_rate: float = 0.5) -> int:
    """Drive ``state`` for up to ``ticks`` timer steps; return ticks executed."""

    executed = 0
    for _ in range(ticks):
        if state.game_over:
            break
        if state.active is not None and rng.random() < input_rate:
            getattr(state, rng.choice(COMMANDS))()
        state.tick()
        executed += 1
    return executed


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--ticks", type=int, default=500, help="Number of timer ticks to simulate.")
    parser.add_argument("--seed", type=int, default=None, help="Seed for pieces and inputs.")
    parser.add_argument("--width", type=int, default=WIDTH, help="Board width in cells.")
    parser.add_argument("--height", type=int, default=HEIGHT, help="Board height in cells.")
    parser.add_argument("--tick-ms", type=int, default=TICK_MS, help="Simulated milliseconds per timer tick.")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        help="Logging level (e.g. DEBUG, INFO, WARNING).",
    )
    return parser.parse_args(argv)


def main(argv=None) -> None:
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.WARNING), format="%(message)s")

    config = SessionConfig(width=args.width, height=args.height, tick_ms=args.tick_ms, seed=args.seed)
    state = GameState(config)
    executed = run(state, args.ticks, random.Random(args.seed))
    LOGGER.info("Ran %d tick(s), %d ms simulated", executed, state.elapsed_ms)

    print(format_grid(render_grid(state), active_mask(state)))
    print(
        f"pieces={state.pieces} lines={state.lines} "
        f"elapsed_ms={state.elapsed_ms} game_over={state.game_over}"
    )


if __name__ == "__main__":
    main()
