"""
Zone Arena
==========

A survival game: keep the player dot inside shrinking concentric zones around
the board center while random drift and radial forces push it around.

- survival_core: headless simulation, renderers and Gymnasium environments
- evaluation: runs agents over a seed bank and summarizes their scores

All tuning constants live in game_config.yaml.
"""
