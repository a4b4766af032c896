#!/usr/bin/env python
"""
Demonstration of AI agents competing for territory.

This script runs several AI agents against each other in an in-memory
arena, advancing a simulated clock, and prints the final board along
with each faction's dominant-strategy score.

Example usage:
    # Two normal agents on a 20x20 grid
    dominant-play --factions lawson famoma

    # Three agents of different strength, reproducible
    dominant-play --factions lawson famoma seven_eleban --difficulty easy hard expert --seed 42
"""
import argparse
import logging
import sys
from typing import List

from tqdm import tqdm

from dominant_ai.arena import GridArena
from dominant_ai.agent.config import AgentConfig
from dominant_ai.agent.manager import AIManager
from dominant_ai.core.constants import Faction, Difficulty, FACTION_DISPLAY_NAMES, FACTION_SYMBOLS
from dominant_ai.core.evaluator import DominantEvaluator


def parse_args(argv=None):
    """Parse command-line arguments for demo configuration."""
    parser = argparse.ArgumentParser(description="Watch AI agents compete for dominant territory")

    # Agent configuration
    parser.add_argument("--factions", nargs="+", default=["lawson", "famoma"],
                        choices=[f.name.lower() for f in Faction],
                        help="Factions to spawn, one agent each")
    parser.add_argument("--difficulty", nargs="+", default=["normal"],
                        choices=[d.name.lower() for d in Difficulty],
                        help="Difficulty per agent (the last value repeats)")
    parser.add_argument("--iterations", type=int, default=None,
                        help="Override the MCTS iteration budget of every agent")

    # Arena configuration
    parser.add_argument("--width", type=int, default=20, help="Grid width")
    parser.add_argument("--height", type=int, default=20, help="Grid height")
    parser.add_argument("--density", type=float, default=0.8,
                        help="Fraction of cells that are building slots")
    parser.add_argument("--income", type=int, default=100,
                        help="Income credited to every faction per income period")
    parser.add_argument("--income-period", type=float, default=10.0,
                        help="Seconds between income payments")

    # Simulation
    parser.add_argument("--duration", type=float, default=60.0,
                        help="Simulated seconds to run")
    parser.add_argument("--tick", type=float, default=0.5,
                        help="Simulated seconds per update")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--verbose", action="store_true", help="Log every decision")

    return parser.parse_args(argv)


def build_configs(args) -> List[AgentConfig]:
    """Create one agent configuration per requested faction."""
    configs = []
    for i, name in enumerate(args.factions):
        difficulty = Difficulty[args.difficulty[min(i, len(args.difficulty) - 1)].upper()]
        overrides = {}
        if args.iterations is not None:
            overrides["max_iterations"] = args.iterations
        if args.seed is not None:
            overrides["seed"] = args.seed + i
        configs.append(AgentConfig.for_difficulty(difficulty, Faction[name.upper()], **overrides))
    return configs


def run_simulation(args) -> GridArena:
    """Run the agents for the requested duration and return the arena."""
    arena = GridArena(
        width=args.width,
        height=args.height,
        building_density=args.density,
        seed=args.seed,
    )
    manager = AIManager(arena, arena, arena, arena)
    manager.spawn_all(build_configs(args))

    steps = int(args.duration / args.tick)
    income_timer = 0.0

    for _ in tqdm(range(steps), desc="Simulating", disable=args.verbose):
        manager.update(args.tick)

        income_timer += args.tick
        if income_timer >= args.income_period:
            income_timer = 0.0
            for player in manager.players:
                manager.distribute_income(player.faction, args.income)

    manager.stop_all()
    print_summary(arena, manager)
    return arena


def print_summary(arena: GridArena, manager: AIManager) -> None:
    """Print the final board and each faction's standing."""
    evaluator = DominantEvaluator()
    board = manager.players[0].snapshot_board() if manager.players else None

    print("\n" + "=" * 60)
    print("Final board")
    print("=" * 60)
    print(arena.render())

    print("\nStandings:")
    counts = arena.count_by_faction()
    for faction, stats in manager.get_stats().items():
        score = evaluator.evaluate(board, faction) if board is not None else 0.0
        print(f"  [{FACTION_SYMBOLS[faction]}] {FACTION_DISPLAY_NAMES[faction]:<15} "
              f"outposts: {counts.get(faction, 0):>3}  "
              f"money: {stats.money:>5}  "
              f"score: {score:>9.2f}")


def main(argv=None):
    """Main function."""
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        run_simulation(args)
    except KeyboardInterrupt:
        print("\nSimulation interrupted by user.")
        sys.exit(0)


if __name__ == "__main__":
    main()
