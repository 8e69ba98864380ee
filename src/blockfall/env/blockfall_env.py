from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from blockfall.game import Action, BoardEngine, GameConfig, GameStatus
from blockfall.visualization.renderer import rgb_array

# Pause is a human concern; agents only steer the piece.
AGENT_ACTIONS = (
    Action.LEFT,
    Action.RIGHT,
    Action.ROTATE_RIGHT,
    Action.ROTATE_LEFT,
    Action.SOFT_DROP,
    Action.HARD_DROP,
    Action.NONE,
)


class BlockfallEnv(gym.Env):
    """One env step is one key press (or none) followed by one engine tick.

    Observation is ``BoardEngine.get_state()``: locked cells hold their variant
    code, the falling piece is overlaid with negative codes, row 0 is the floor.
    Reward is the number of rows cleared during the step.
    """

    metadata = {"render_modes": ["rgb_array"], "render_fps": 10}

    def __init__(self, config: Optional[GameConfig] = None, render_mode: Optional[str] = None,
                 max_episode_steps: int = 5000) -> None:
        super().__init__()
        self.engine = BoardEngine(config)
        self.render_mode = render_mode
        self.max_episode_steps = int(max_episode_steps)

        h, w = self.engine.board.height, self.engine.board.width
        self.observation_space = spaces.Box(low=-7, high=7, shape=(h, w), dtype=np.int8)
        self.action_space = spaces.Discrete(len(AGENT_ACTIONS))

        self._steps = 0

    def _get_info(self) -> Dict[str, Any]:
        return {
            "score": self.engine.score,
            "status": self.engine.status.value,
            "steps": self._steps,
        }

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[np.ndarray, Dict[str, Any]]:
        super().reset(seed=seed)
        if seed is None:
            seed = int(self.np_random.integers(0, 2**31 - 1))
        self.engine.start(seed)
        self._steps = 0
        return self.engine.get_state(), self._get_info()

    def step(self, action: int):
        if not self.action_space.contains(int(action)):
            raise ValueError(f"invalid action {action!r}")
        score_before = self.engine.score

        self.engine.handle_action(AGENT_ACTIONS[int(action)])
        self.engine.tick()
        self._steps += 1

        gained = self.engine.score - score_before
        reward = float(gained) / float(self.engine.rules.line_clear_points)
        terminated = self.engine.status is GameStatus.GAME_OVER
        truncated = not terminated and self._steps >= self.max_episode_steps
        return self.engine.get_state(), reward, terminated, truncated, self._get_info()

    def render(self) -> Optional[np.ndarray]:
        if self.render_mode == "rgb_array":
            return rgb_array(self.engine.get_state())
        return None

    def close(self) -> None:
        pass
