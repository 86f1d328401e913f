#!/usr/bin/env python3
"""
3D Minesweeper - Main entry point.

Usage:
    python main.py evaluate [--agent {random,logic}] [--difficulty EASY]
    python main.py compare [--difficulty MEDIUM]
    python main.py advise [--difficulty EASY] [--seed N]
"""
import argparse
import json
import logging

from cubesweeper.agents import LogicAgent, RandomAgent
from cubesweeper.game import Difficulty, DIFFICULTIES, GameEngine
from cubesweeper.training import Evaluator


def make_agent(name: str, size: int, seed: int = None):
    """Build an agent by command-line name."""
    if name == "random":
        return RandomAgent(size, seed=seed), "Random"
    return LogicAgent(size, seed=seed), "Logic"


def evaluate(args: argparse.Namespace) -> None:
    """Evaluate a specific agent."""
    difficulty = Difficulty[args.difficulty]
    agent, name = make_agent(args.agent, DIFFICULTIES[difficulty].size, args.seed)
    evaluate_agent(agent, name, difficulty, args.games, args.seed)


def evaluate_agent(
    agent,
    name: str,
    difficulty: Difficulty = Difficulty.EASY,
    num_episodes: int = 100,
    seed: int = None,
) -> None:
    """Evaluate a single agent and print results."""
    evaluator = Evaluator(difficulty, num_episodes=num_episodes, seed=seed)

    print(f"\nEvaluating {name} on {difficulty.name} over {num_episodes} games...")
    results = evaluator.evaluate(agent)

    print(f"Results for {name}:")
    print(f"  Win rate: {results['win_rate']:.1%}")
    print(f"  Avg reward: {results['avg_reward']:.2f}")
    print(f"  Avg steps: {results['avg_steps']:.1f}")
    print(f"  Avg revealed: {results['avg_revealed']:.1f} cells")


def compare(args: argparse.Namespace) -> None:
    """Compare all agents."""
    difficulty = Difficulty[args.difficulty]
    size = DIFFICULTIES[difficulty].size

    agents = {
        "Random": RandomAgent(size, seed=args.seed),
        "Logic": LogicAgent(size, seed=args.seed),
    }

    evaluator = Evaluator(difficulty, num_episodes=args.games, seed=args.seed)
    results = evaluator.compare(agents)

    print("\n" + "=" * 50)
    print(f"Agent Comparison Results ({difficulty.name})")
    print("=" * 50)
    print(f"{'Agent':<20} {'Win Rate':<12} {'Avg Reward':<12} {'Avg Steps':<10}")
    print("-" * 50)

    for name, metrics in results.items():
        print(
            f"{name:<20} {metrics['win_rate']:>10.1%} "
            f"{metrics['avg_reward']:>10.2f} "
            f"{metrics['avg_steps']:>10.1f}"
        )


def advise(args: argparse.Namespace) -> None:
    """Open a corner of a fresh board and print the snapshot with advice."""
    engine = GameEngine(seed=args.seed)
    board = engine.generate(args.difficulty)
    engine.reveal(0, 0, 0)

    snapshot = engine.get_snapshot()
    advice = LogicAgent(board.size).advise(snapshot)

    print(json.dumps(snapshot.to_dict(), indent=2))
    print(f"Certainly safe: {sorted(advice.safe)}")
    print(f"Certainly mined: {sorted(advice.mines)}")


def main() -> None:
    """Parse arguments and run the appropriate command."""
    parser = argparse.ArgumentParser(
        description="3D Minesweeper - Evaluate agents on the cube"
    )
    parser.add_argument(
        "--verbose", action="store_true", help="Log engine events"
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    difficulties = [difficulty.name for difficulty in Difficulty]

    # Evaluate command
    eval_parser = subparsers.add_parser("evaluate", help="Evaluate an agent")
    eval_parser.add_argument(
        "--agent",
        choices=["random", "logic"],
        default="logic",
        help="Agent to evaluate",
    )
    eval_parser.add_argument(
        "--difficulty", choices=difficulties, default="EASY", help="Board preset"
    )
    eval_parser.add_argument(
        "--games", type=int, default=100, help="Number of games to play"
    )
    eval_parser.add_argument("--seed", type=int, default=None, help="Random seed")

    # Compare command
    compare_parser = subparsers.add_parser("compare", help="Compare all agents")
    compare_parser.add_argument(
        "--difficulty", choices=difficulties, default="EASY", help="Board preset"
    )
    compare_parser.add_argument(
        "--games", type=int, default=100, help="Number of games per agent"
    )
    compare_parser.add_argument("--seed", type=int, default=None, help="Random seed")

    # Advise command
    advise_parser = subparsers.add_parser(
        "advise", help="Show a snapshot and the deductions it allows"
    )
    advise_parser.add_argument(
        "--difficulty", choices=difficulties, default="EASY", help="Board preset"
    )
    advise_parser.add_argument("--seed", type=int, default=None, help="Random seed")

    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.INFO)

    if args.command == "evaluate":
        evaluate(args)
    elif args.command == "compare":
        compare(args)
    elif args.command == "advise":
        advise(args)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
