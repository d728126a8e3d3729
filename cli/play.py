"""Terminal play loop for a single blackjack round."""

import argparse
import logging
import sys
from random import Random
from typing import TextIO

from config import config
from core.game import BlackjackRound, EventType, GameEvent, RoundState, new_round, parse_action

logger = logging.getLogger(__name__)

PROMPT = "Please input what you'd like to do (hit/stand/double-down/split/surrender):"


def describe_round(round_: BlackjackRound) -> list[str]:
    """Return the lines shown to the player before each move."""
    cards = ", ".join(str(card) for card in round_.hand) or "empty"
    totals = ", ".join(str(total) for total in sorted(round_.possible_totals)) or "bust"
    return [
        f"Your hand is [{cards}]",
        f"Your hand value is {{{totals}}}",
    ]


def play_round(stdin: TextIO, stdout: TextIO, rng: Random | None = None) -> int:
    """
    Play one round, reading commands line by line.

    Args:
        stdin: Stream of player commands, one per line
        stdout: Stream to write prompts and results to
        rng: Random number generator for the shuffle

    Returns:
        Process exit code: 0 once the round is decided, 1 if input ran out first
    """

    def say(line: str) -> None:
        print(line, file=stdout)

    def on_event(event: GameEvent) -> None:
        if event.event_type == EventType.CARD_DEALT:
            say(f"You drew {event.data['card']}")
        elif event.event_type == EventType.DECK_EXHAUSTED:
            say("The deck is empty.")

    round_ = new_round(rng=rng)

    say("Play blackjack!")
    say(PROMPT)

    with round_.events.subscribed(on_event):
        while not round_.is_over:
            for line in describe_round(round_):
                say(line)

            raw_action = stdin.readline()
            if not raw_action:
                say("No more input, the round is left unfinished.")
                return 1

            action = parse_action(raw_action)
            if action is None:
                say(f"Unknown action {raw_action.strip()!r}. {PROMPT}")
                continue

            logger.info("Player chose %s", action)
            round_.apply(action)

    for line in describe_round(round_):
        say(line)
    say("You won!" if round_.state == RoundState.WON else "You lost!")
    return 0


def parse_arguments(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Play a single round of blackjack.")
    parser.add_argument(
        "-s",
        "--seed",
        type=int,
        default=config.round.seed,
        help="seed for the shuffle (default: random, or BLACKJACK_SEED)",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_arguments(argv)
    logging.basicConfig(level=config.log_level, stream=sys.stderr)
    rng = Random(args.seed) if args.seed is not None else None
    return play_round(sys.stdin, sys.stdout, rng=rng)
