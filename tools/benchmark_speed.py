"""
Performance Benchmark
=====================

Measures how many simulation ticks per second the core, the Gymnasium env
and the vector env sustain, and how that compares to real time (60 ticks/s).

Usage:
    python -m tools.benchmark_speed [--steps S] [--envs N ...] [--quick]
"""

from __future__ import annotations

import argparse
import sys
import time
from typing import Callable, Dict, List

import numpy as np

from zone_arena.survival_core.config_loader import load_config
from zone_arena.survival_core.game import CoreGame
from zone_arena.survival_core.env_gym import ZoneSurvivalEnv
from zone_arena.survival_core.vector_env import ZoneSurvivalVectorEnv


def _timed(label: str, batches: int, envs_per_batch: int, run: Callable[[], None]) -> Dict:
    """Run a workload and turn its wall time into throughput numbers."""
    ticks_per_second = load_config().physics.ticks_per_second

    start = time.perf_counter()
    run()
    elapsed = time.perf_counter() - start

    env_ticks = batches * envs_per_batch
    return {
        "mode": label,
        "num_envs": envs_per_batch,
        "batches": batches,
        "elapsed_seconds": elapsed,
        "ticks_per_second": env_ticks / elapsed,
        "realtime_factor": env_ticks / elapsed / ticks_per_second,
        "ms_per_batch": elapsed * 1000 / batches,
    }


def benchmark_core_game(num_ticks: int = 10000, seed: int = 42) -> Dict:
    """Raw CoreGame ticks with random keys, restarting finished games."""
    game = CoreGame(seed=seed)
    keys = np.random.default_rng(seed).integers(0, 2, size=(num_ticks, 4))

    def run() -> None:
        game.reset(seed=seed)
        game.start()
        for action in keys:
            game.set_input(action)
            game.tick()
            if game.is_over:
                game.reset()
                game.start()

    return _timed("core", num_ticks, 1, run)


def benchmark_single_env(num_steps: int = 10000, seed: int = 42) -> Dict:
    """ZoneSurvivalEnv steps, including observation packing."""
    env = ZoneSurvivalEnv()
    env.action_space.seed(seed)

    def run() -> None:
        env.reset(seed=seed)
        for _ in range(num_steps):
            _, _, terminated, truncated, _ = env.step(env.action_space.sample())
            if terminated or truncated:
                env.reset()

    try:
        return _timed("env", num_steps, 1, run)
    finally:
        env.close()


def benchmark_vector_env(num_envs: int = 16, num_steps: int = 1000, seed: int = 42) -> Dict:
    """ZoneSurvivalVectorEnv batches, resetting finished slots."""
    vec_env = ZoneSurvivalVectorEnv(num_envs=num_envs, seed=seed)

    def run() -> None:
        vec_env.reset()
        for _ in range(num_steps):
            _, _, terminateds, truncateds, _ = vec_env.step(vec_env.sample_actions())
            finished = np.flatnonzero(terminateds | truncateds)
            if finished.size:
                vec_env.reset(env_indices=finished.tolist())

    try:
        return _timed("vector", num_steps, num_envs, run)
    finally:
        vec_env.close()


def run_all_benchmarks(vector_env_sizes: List[int], steps: int = 5000) -> List[Dict]:
    """Run every benchmark and print a summary table."""
    print("Zone Arena tick throughput")
    print("-" * 58)

    results = [
        benchmark_core_game(num_ticks=steps),
        benchmark_single_env(num_steps=steps),
    ]
    for num_envs in vector_env_sizes:
        results.append(benchmark_vector_env(num_envs=num_envs, num_steps=max(1, steps // num_envs)))

    print(f"{'mode':<8} {'envs':>5} {'ticks/s':>12} {'x realtime':>11} {'ms/batch':>10}")
    for r in results:
        print(f"{r['mode']:<8} {r['num_envs']:>5} {r['ticks_per_second']:>12.0f} "
              f"{r['realtime_factor']:>11.1f} {r['ms_per_batch']:>10.3f}")

    return results


def main():
    parser = argparse.ArgumentParser(description="Benchmark zone survival simulation throughput")
    parser.add_argument("--steps", type=int, default=5000, help="Ticks per benchmark")
    parser.add_argument("--envs", type=int, nargs="+", default=[1, 4, 16, 64],
                        help="Vector env sizes to test")
    parser.add_argument("--quick", action="store_true", help="Run 500 ticks per benchmark")

    args = parser.parse_args()

    run_all_benchmarks(vector_env_sizes=args.envs, steps=500 if args.quick else args.steps)
    return 0


if __name__ == "__main__":
    sys.exit(main())
