#!/usr/bin/env python3
"""
模拟脚本

Usage:
    python scripts/simulate.py sim --players 3 --strategy momentum --games 100
    python scripts/simulate.py sim -n 4 -s random -d 0.25 -g 1000 --seed 7 --output results.json
"""
import argparse
import logging
import sys
from pathlib import Path
import json

# 添加项目根目录到路径
ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(ROOT))

from lesnura import GameConfig, LesnuraError, SimConfig, STRATEGIES
from evaluation import Arena, MetricsCollector

logger = logging.getLogger(__name__)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Pluta Lesnura simulator")
    subparsers = parser.add_subparsers(dest="command", required=True)

    sim = subparsers.add_parser("sim", help="Run simulations")

    # 模拟参数
    sim.add_argument(
        "-d", "--draw-chance",
        type=float,
        default=0.5,
        help="With momentum, how often to draw (0-1)",
    )
    sim.add_argument("-g", "--games", type=int, default=1, help="Number of games")
    sim.add_argument("-n", "--players", type=int, required=True, help="Number of players")
    sim.add_argument(
        "-s", "--strategy",
        type=str,
        required=True,
        choices=list(STRATEGIES),
        help="Strategy used by every player",
    )

    # 规则参数
    sim.add_argument("--hand-size", type=int, default=5, help="Starting hand size")
    sim.add_argument("--tokens", type=int, default=15, help="Starting mad science tokens")

    # 其他
    sim.add_argument("--seed", type=int, help="Random seed (game i uses seed + i)")
    sim.add_argument("--max-actions", type=int, help="Abort a game after this many actions")
    sim.add_argument("--progress-every", type=int, default=0, help="Log progress every N games")
    sim.add_argument("--output", type=str, help="Output file for results")
    sim.add_argument("--quiet", action="store_true", help="Do not print each result")
    sim.add_argument("--verbose", action="store_true", help="Verbose output")

    return parser.parse_args(argv)


def build_config(args) -> SimConfig:
    return SimConfig(
        num_players=args.players,
        num_games=args.games,
        strategy=args.strategy,
        draw_chance=args.draw_chance,
        seed=args.seed,
        max_actions=args.max_actions,
        progress_every=args.progress_every,
        game=GameConfig(hand_size=args.hand_size, start_tokens=args.tokens),
    )


def run_sim(args) -> int:
    """运行模拟"""
    config = build_config(args)
    logger.info(
        f"Simulating {config.num_games} games: {config.num_players} players, "
        f"strategy={config.strategy}, draw_chance={config.draw_chance}"
    )

    arena = Arena(config)
    result = arena.run()

    if not args.quiet:
        for match in result.matches:
            print(f"Result: {match.outcome.value.capitalize()}")

    collector = MetricsCollector()
    collector.add_matches(result.matches)
    metrics = collector.compute_metrics()

    logger.info("=" * 50)
    logger.info("Simulation Results")
    logger.info("=" * 50)
    logger.info(f"Games: {result.total_games}")
    logger.info(f"Wins: {result.wins}  Losses: {result.losses}")
    logger.info(f"Win Rate: {result.win_rate:.2%}")
    if metrics:
        logger.info(f"Average Rounds: {metrics['avg_rounds']:.1f} (std {metrics['std_rounds']:.1f})")
        logger.info(f"Average Final Tokens: {metrics['avg_final_tokens']:.1f}")
    logger.info("=" * 50)

    if args.output:
        with open(args.output, "w") as f:
            json.dump({
                "config": {
                    "num_players": config.num_players,
                    "num_games": config.num_games,
                    "strategy": config.strategy,
                    "draw_chance": config.draw_chance,
                    "seed": config.seed,
                },
                "wins": result.wins,
                "losses": result.losses,
                "win_rate": result.win_rate,
                "metrics": metrics,
                "matches": [m.to_dict() for m in result.matches],
            }, f, indent=2)
        logger.info(f"Results saved to {args.output}")

    return 0


def main(argv=None) -> int:
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
    )

    try:
        if args.command == "sim":
            return run_sim(args)
    except (LesnuraError, ValueError) as e:
        logger.error(f"Simulation failed: {e}")
        return 1
    return 1


if __name__ == "__main__":
    sys.exit(main())
