#!/usr/bin/env python3
"""
Play the heuristic evaluator against itself and report the outcome.

Usage:
  python tools/selfplay.py --games 20 --seed 1
  python tools/selfplay.py --seed 7 --show
"""
from __future__ import annotations

import argparse
import logging
import os
import random
import sys

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from game import GameSession, Player  # noqa: E402


def play_one(rng: random.Random, max_turns: int) -> GameSession:
    session = GameSession(rng=rng)
    while not session.snapshot().status.is_over and session.snapshot().turn_count < max_turns:
        # Hand the evaluator whichever side is to act.
        state = session.snapshot()
        session.ai_player = state.acting_player
        session.play_ai_turn()
    return session


def main() -> None:
    ap = argparse.ArgumentParser(description="Evaluator self-play")
    ap.add_argument("--games", type=int, default=1)
    ap.add_argument("--seed", type=int, default=None)
    ap.add_argument("--max-turns", type=int, default=500, help="Stop a game after this many turns")
    ap.add_argument("--show", action="store_true", help="Print the final board of each game")
    ap.add_argument("-v", "--verbose", action="store_true")
    args = ap.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)
    rng = random.Random(args.seed)
    wins = {Player.P1: 0, Player.P2: 0}
    unfinished = 0
    for i in range(args.games):
        session = play_one(rng, args.max_turns)
        final = session.snapshot()
        if final.winner is None:
            unfinished += 1
            label = "unfinished"
        else:
            wins[final.winner] += 1
            label = f"{final.winner.name} wins"
        print(f"game {i + 1}: {label} after {final.turn_count} turns (P1={final.scores.p1}, P2={final.scores.p2})")
        if args.show:
            print(final.board.pretty())
    print(f"P1 wins: {wins[Player.P1]}  P2 wins: {wins[Player.P2]}  unfinished: {unfinished}")


if __name__ == "__main__":
    main()
