"""
Evaluation Harness
==================

Plays an agent through every seed of the seed bank and reports how long it
survived and how much it scored. Nothing is written to disk.

Usage:
    python -m zone_arena.evaluation.run_eval --agent contestants/baseline_orbit
"""

from __future__ import annotations

import argparse
import importlib.util
import json
import os
import sys
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

import numpy as np

from zone_arena.survival_core.env_gym import ZoneSurvivalEnv


# obs dict -> [up, down, left, right]
AgentFn = Callable[[Dict[str, Any]], Any]


@dataclass
class EvalResult:
    """One game on one seed."""
    seed: int
    final_score: float
    time_alive: float
    ticks: int
    termination_reason: str
    elapsed_time: float
    time_in_zone: Dict[str, float] = field(default_factory=dict)

    @property
    def safe_share(self) -> float:
        """Fraction of the survived time spent in the safe zone."""
        if self.time_alive <= 0:
            return 0.0
        return self.time_in_zone.get("safe", 0.0) / self.time_alive


@dataclass
class EvalSummary:
    """Aggregate over all evaluated seeds."""
    mean_score: float
    std_score: float
    min_score: float
    max_score: float
    median_score: float
    mean_time_alive: float
    capped_games: int
    total_time: float
    results: List[EvalResult]


def load_seed_bank(path: Optional[str] = None) -> List[int]:
    """
    Read the seed list.

    Args:
        path: JSON file with a "seeds" list. Packaged seed_bank.json if None.

    Returns:
        Seeds as ints.
    """
    if path is None:
        path = os.path.join(os.path.dirname(__file__), "seed_bank.json")

    if not os.path.exists(path):
        raise FileNotFoundError(f"Seed bank not found: {path}")

    with open(path, "r") as f:
        return [int(seed) for seed in json.load(f)["seeds"]]


def load_agent(agent_path: str) -> AgentFn:
    """
    Import an agent and return its act callable.

    The module may define a SurvivalAgent class, a create_agent() factory,
    or a plain act(obs) function; they are tried in that order.

    Args:
        agent_path: Agent directory (containing agent.py) or a .py file.

    Returns:
        Callable mapping an observation dict to a key vector.
    """
    agent_path = Path(agent_path)
    agent_file = agent_path / "agent.py" if agent_path.is_dir() else agent_path

    if not agent_file.exists():
        raise FileNotFoundError(f"Agent file not found: {agent_file}")

    module_name = f"zone_agent_{agent_file.resolve().parent.name}"
    spec = importlib.util.spec_from_file_location(module_name, agent_file)
    if spec is None or spec.loader is None:
        raise ImportError(f"Cannot import agent from {agent_file}")

    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module
    spec.loader.exec_module(module)

    if hasattr(module, "SurvivalAgent"):
        agent = module.SurvivalAgent()
    elif hasattr(module, "create_agent"):
        agent = module.create_agent()
    elif hasattr(module, "act"):
        return module.act
    else:
        raise AttributeError(
            f"{agent_file} defines none of SurvivalAgent, create_agent or act"
        )

    if not hasattr(agent, "act"):
        raise AttributeError(f"Agent from {agent_file} has no 'act' method")
    return agent.act


def evaluate_single_seed(
    agent_fn: AgentFn,
    seed: int,
    verbose: bool = False
) -> EvalResult:
    """
    Play one full game.

    Args:
        agent_fn: Agent act callable.
        seed: Drift seed for the game.
        verbose: Print a line when the game ends.

    Returns:
        EvalResult for the game.
    """
    env = ZoneSurvivalEnv()
    try:
        obs, info = env.reset(seed=seed)
        started = time.time()

        over = False
        while not over:
            obs, _, terminated, truncated, info = env.step(agent_fn(obs))
            over = terminated or truncated

        result = EvalResult(
            seed=seed,
            final_score=float(info["score"]),
            time_alive=float(info["time_alive"]),
            ticks=int(info["ticks"]),
            termination_reason=info["terminated_reason"],
            elapsed_time=time.time() - started,
            time_in_zone=dict(info["time_in_zone"])
        )
    finally:
        env.close()

    if verbose:
        print(f"  seed {seed}: score {result.final_score:.1f}, survived {result.time_alive:.1f}s "
              f"({result.termination_reason}, {result.safe_share:.0%} in safe zone), "
              f"wall {result.elapsed_time:.2f}s")

    return result


def evaluate_agent(
    agent_fn: AgentFn,
    seeds: Optional[List[int]] = None,
    verbose: bool = True
) -> EvalSummary:
    """
    Play one game per seed and aggregate.

    Args:
        agent_fn: Agent act callable.
        seeds: Seeds to play. The packaged seed bank if None.
        verbose: Print progress and the summary table.

    Returns:
        EvalSummary over all seeds.
    """
    if seeds is None:
        seeds = load_seed_bank()

    if not seeds:
        raise ValueError("At least one seed is required")

    if verbose:
        print(f"Evaluating on {len(seeds)} seeds...")

    wall_start = time.time()
    results = []
    for n, seed in enumerate(seeds, start=1):
        if verbose:
            print(f"[{n}/{len(seeds)}] seed {seed}")
        results.append(evaluate_single_seed(agent_fn, seed, verbose=verbose))

    scores = np.array([r.final_score for r in results])
    survival = np.array([r.time_alive for r in results])

    summary = EvalSummary(
        mean_score=float(scores.mean()),
        std_score=float(scores.std()),
        min_score=float(scores.min()),
        max_score=float(scores.max()),
        median_score=float(np.median(scores)),
        mean_time_alive=float(survival.mean()),
        capped_games=sum(r.termination_reason == "tick_cap" for r in results),
        total_time=time.time() - wall_start,
        results=results
    )

    if verbose:
        _print_summary(summary)

    return summary


def _print_summary(summary: EvalSummary) -> None:
    print()
    print("=" * 50)
    print("EVALUATION SUMMARY")
    print("=" * 50)
    print(f"Seeds evaluated: {len(summary.results)}")
    print(f"Score:           {summary.mean_score:.2f} +/- {summary.std_score:.2f} "
          f"(min {summary.min_score:.2f}, median {summary.median_score:.2f}, max {summary.max_score:.2f})")
    print(f"Mean survival:   {summary.mean_time_alive:.1f}s")
    print(f"Reached the cap: {summary.capped_games}")
    print(f"Wall time:       {summary.total_time:.2f}s")
    print("=" * 50)


def main():
    parser = argparse.ArgumentParser(description="Evaluate a zone survival agent on the seed bank")
    parser.add_argument("--agent", type=str, required=True,
                        help="Agent directory (with agent.py) or agent file")
    parser.add_argument("--seeds", type=str, default=None,
                        help="Seed bank JSON to use instead of the packaged one")
    parser.add_argument("--quiet", action="store_true",
                        help="Only print the summary")

    args = parser.parse_args()

    print(f"Loading agent from {args.agent}...")
    try:
        agent_fn = load_agent(args.agent)
        seeds = load_seed_bank(args.seeds) if args.seeds else None
    except (FileNotFoundError, ImportError, AttributeError) as e:
        print(f"Error: {e}")
        return 1

    summary = evaluate_agent(agent_fn, seeds=seeds, verbose=not args.quiet)
    if args.quiet:
        _print_summary(summary)
    return 0


if __name__ == "__main__":
    sys.exit(main())
