"""
Console 501 scorer.

Type the score of each visit. Other commands:
  u   undo the last visit
  q   quit without saving

Usage:
    python scripts/play_501.py --players Anna Bram
    python scripts/play_501.py --players Anna Bram Cas --starter 2
    python scripts/play_501.py --config config/default_config.yaml --memory
"""
import sys
import asyncio
import argparse
from pathlib import Path
import logging

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from dartscore.core import Config, DartScoreError, Player
from dartscore.game import (
    AwaitingCheckoutDartCount,
    MatchSession,
    TurnOutcome,
)
from dartscore.persistence import InMemoryStatisticsStore, YamlStatisticsStore
from dartscore.stats import aggregate_career

logger = logging.getLogger(__name__)


def print_scoreboard(session: MatchSession) -> None:
    """Print one line per player, marking whoever throws next."""
    state = session.state
    print()
    for i, p in enumerate(state.players):
        marker = ">" if i == state.current_index and not state.is_complete else " "
        sets = f" sets {p.sets_won}" if state.config.uses_sets else ""
        print(
            f"{marker} {p.player.name:<12} {p.remaining_score:>4}"
            f"   legs {p.legs_won}{sets}   avg {p.three_dart_average:6.2f}"
            f"   last {p.last_turn_score}"
        )


def ask(prompt: str) -> str:
    return input(prompt).strip().lower()


def answer_pending(session: MatchSession) -> None:
    """Keep asking until the open darts-at-double question is answered."""
    while session.state.pending is not None:
        pending = session.state.pending
        options = "/".join(str(o) for o in sorted(pending.options))
        if isinstance(pending, AwaitingCheckoutDartCount):
            prompt = f"Darts at the double for {pending.finish} ({options}): "
        else:
            prompt = f"Darts at a double this visit ({options}, u = undo): "

        answer = ask(prompt)
        if answer == "u":
            print(session.undo().message)
            return
        if not answer.isdigit():
            continue

        if isinstance(pending, AwaitingCheckoutDartCount):
            result = session.confirm_checkout_dart_count(int(answer))
        else:
            result = session.confirm_double_disambiguation(int(answer))
        print(result.message)


def play(session: MatchSession) -> bool:
    """
    Run the input loop until the match ends or the user quits.

    Returns:
        True if the match was finished
    """
    print(session.state.config.describe())

    while not session.state.is_complete:
        print_scoreboard(session)
        player = session.state.current_player
        answer = ask(f"{player.player.name} ({player.remaining_score}): ")

        if answer == "q":
            return False
        if answer == "u":
            print(session.undo().message)
            continue
        if not answer.isdigit():
            print("Enter a score between 0 and 180")
            continue

        result = session.submit_turn(int(answer))
        if result.outcome is not TurnOutcome.APPLIED:
            print(result.message)
        answer_pending(session)

    print_scoreboard(session)
    print(f"\n{session.state.winner.player.name} wins!")
    return True


def parse_args():
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Keep score of a 501 match from the console"
    )

    parser.add_argument(
        "--config",
        type=str,
        default="config/default_config.yaml",
        help="Match configuration file"
    )
    parser.add_argument(
        "-p", "--players",
        nargs="+",
        required=True,
        help="Player names in seating order"
    )
    parser.add_argument(
        "-s", "--starter",
        type=int,
        default=0,
        help="Index of the player who throws first"
    )

    store_group = parser.add_mutually_exclusive_group()
    store_group.add_argument(
        "--store",
        type=str,
        default=None,
        help="YAML statistics file (default: storage.path from config)"
    )
    store_group.add_argument(
        "--memory",
        action="store_true",
        help="Do not write statistics to disk"
    )

    return parser.parse_args()


async def save_and_report(session: MatchSession) -> None:
    match_id = await session.persist_result()
    if match_id is None:
        print("Statistics could not be saved")
        return

    print(f"Statistics saved ({match_id})")
    for p in session.state.players:
        career = aggregate_career(await session.store.load_player_records(p.player.id))
        print(
            f"  {p.player.name:<12} career avg {career.three_dart_avg:6.2f}"
            f"  matches {career.matches}  best leg {career.best_leg or '-'}"
        )


def main():
    """Run the console scorer."""
    args = parse_args()
    config = Config(Path(args.config))

    logging.basicConfig(
        level=config.log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    if args.memory:
        store = InMemoryStatisticsStore()
    else:
        store = YamlStatisticsStore(args.store or config.get("storage", "path"))

    # Player ids are seat numbers; a profile database would supply real ids
    players = [Player(id=i + 1, name=name) for i, name in enumerate(args.players)]

    try:
        session = MatchSession.start(players, config.match_config(), store, args.starter)
    except (DartScoreError, ValueError) as e:
        logger.error(f"Cannot start match: {e}")
        return 1

    try:
        finished = play(session)
    except (KeyboardInterrupt, EOFError):
        print()
        finished = False

    if finished:
        asyncio.run(save_and_report(session))
    return 0


if __name__ == "__main__":
    sys.exit(main())
