"""
Baseline Orbit Agent Package

A simple heuristic agent that steers back toward the center whenever it
drifts past a target radius inside the safe zone. Serves as a benchmark and
example.
"""

from .agent import SurvivalAgent, create_agent

__all__ = ["SurvivalAgent", "create_agent"]
