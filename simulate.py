"""Run headless Snake games with a scripted policy and report score statistics."""
from __future__ import annotations

import argparse
import logging

import numpy as np

try:
    from .game_logic import MAX_GRID_SIZE, MIN_GRID_SIZE, PLACEMENT_POLICIES, REVERSAL_POLICIES
    from .policies import POLICIES, make_policy
    from .utils import EpisodeResult, RunConfig, board_to_text, make_engine, run_episode, score_bands
except ImportError:
    from game_logic import MAX_GRID_SIZE, MIN_GRID_SIZE, PLACEMENT_POLICIES, REVERSAL_POLICIES
    from policies import POLICIES, make_policy
    from utils import EpisodeResult, RunConfig, board_to_text, make_engine, run_episode, score_bands


def simulate(cfg: RunConfig, show_final: bool = False) -> list[EpisodeResult]:
    """Play `cfg.games` games on one engine and return each game's result."""
    if cfg.games <= 0:
        raise ValueError("games must be > 0")

    engine = make_engine(cfg)
    policy = make_policy(cfg.policy, cfg.seed)
    results: list[EpisodeResult] = []

    for game in range(1, cfg.games + 1):
        if game % 10 == 0 or game == cfg.games:
            print(f"Game {game}/{cfg.games}", end="\r", flush=True)
        results.append(run_episode(engine, policy, cfg.max_steps))
    print()

    if show_final:
        print(board_to_text(engine))
        print()
    return results


def _print_metric(name: str, value: float) -> None:
    print(f"{name:<20} {value:>15.2f}")


def print_report(cfg: RunConfig, results: list[EpisodeResult]) -> None:
    scores = np.asarray([r.score for r in results], dtype=np.float32)
    steps = np.asarray([r.steps for r in results], dtype=np.float32)

    print("=" * 40)
    print(f"RESULTS ({cfg.policy}, {cfg.rows}x{cfg.columns}, {len(results)} games)")
    print("=" * 40)
    _print_metric("Mean score", float(scores.mean()))
    _print_metric("Median score", float(np.median(scores)))
    _print_metric("Max score", float(scores.max()))
    _print_metric("Min score", float(scores.min()))
    _print_metric("Std dev", float(scores.std()))
    _print_metric("25th percentile", float(np.percentile(scores, 25)))
    _print_metric("75th percentile", float(np.percentile(scores, 75)))
    _print_metric("Mean steps", float(steps.mean()))
    print("=" * 40)

    game_overs = sum(1 for r in results if r.game_over)
    board_fulls = sum(1 for r in results if r.board_full)
    timeouts = len(results) - game_overs - board_fulls
    print(f"Ended by collision {game_overs}, board full {board_fulls}, step limit {timeouts}")


def save_plot(results: list[EpisodeResult], path: str, chunk_size: int = 10) -> None:
    """Write a score-per-game chart with a chunked mean line."""
    import matplotlib

    matplotlib.use("Agg")
    import matplotlib.pyplot as plt

    scores = [float(r.score) for r in results]
    x_end, means, q1s, q3s = score_bands(scores, chunk_size)

    fig, ax = plt.subplots(figsize=(10, 5))
    ax.plot(range(1, len(scores) + 1), scores, color="#95a4b8", linewidth=0.8, label="Score")
    ax.plot(x_end, means, color="#45d483", linewidth=2.0, label=f"Mean per {chunk_size}")
    ax.fill_between(x_end, q1s, q3s, color="#45d483", alpha=0.2, label="IQR")
    ax.set_xlabel("Game")
    ax.set_ylabel("Score")
    ax.legend(loc="upper left")
    fig.savefig(path)
    plt.close(fig)
    print(f"Saved plot: {path}")


def _grid_size(value: str) -> int:
    size = int(value)
    if not MIN_GRID_SIZE <= size <= MAX_GRID_SIZE:
        raise argparse.ArgumentTypeError(f"must be between {MIN_GRID_SIZE} and {MAX_GRID_SIZE}")
    return size


def _positive_int(value: str) -> int:
    number = int(value)
    if number <= 0:
        raise argparse.ArgumentTypeError("must be > 0")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Run headless grid Snake games")
    parser.add_argument("--rows", type=_grid_size, default=11, help="Grid rows")
    parser.add_argument("--columns", type=_grid_size, default=11, help="Grid columns")
    parser.add_argument("--games", type=_positive_int, default=100, help="Number of games to play")
    parser.add_argument("--max-steps", type=_positive_int, default=500, help="Step limit per game")
    parser.add_argument("--policy", choices=sorted(POLICIES), default="greedy")
    parser.add_argument("--placement", choices=PLACEMENT_POLICIES, default="safe")
    parser.add_argument("--reversal", choices=REVERSAL_POLICIES, default="allow_single")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for apples and policy")
    parser.add_argument("--plot", default=None, help="Save a score chart to this path")
    parser.add_argument("--show-final", action="store_true", help="Print the last game's final board")
    parser.add_argument("--verbose", action="store_true", help="Log engine events")
    return parser


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    cfg = RunConfig(
        rows=args.rows,
        columns=args.columns,
        games=args.games,
        max_steps=args.max_steps,
        policy=args.policy,
        placement=args.placement,
        reversal=args.reversal,
        seed=args.seed,
    )
    results = simulate(cfg, show_final=args.show_final)
    print_report(cfg, results)
    if args.plot:
        save_plot(results, args.plot)


if __name__ == "__main__":
    main()
