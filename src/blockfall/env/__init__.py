"""Gymnasium environments for Blockfall."""

from __future__ import annotations

from gymnasium.envs.registration import register

# Register the classic 10x22 well
register(
    id="Blockfall-10x22-v0",
    entry_point="blockfall.env.blockfall_env:BlockfallEnv",
)

