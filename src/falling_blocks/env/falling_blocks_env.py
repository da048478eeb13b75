from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from falling_blocks.game import Command, FallingBlockGame, GameConfig, TetrominoType
from falling_blocks.game.grid import BOARD_COLS, BOARD_ROWS
from falling_blocks.game.pieces import color_for


class FallingBlocksEnv(gym.Env):
    """
    Gymnasium wrapper around ``FallingBlockGame``.

    Actions (8 total):
      0: Move Left
      1: Move Right
      2: Rotate CW
      3: Rotate CCW
      4: Soft Drop (held until another action is taken)
      5: Hard Drop
      6: Hold
      7: No-op

    Every step applies the action and then one gravity tick. The reward is the
    engine score gained during the step.
    """

    metadata = {"render_modes": ["rgb_array"], "render_fps": 30}

    ACTIONS: Tuple[Optional[Command], ...] = (
        Command.MOVE_LEFT,
        Command.MOVE_RIGHT,
        Command.ROTATE_CW,
        Command.ROTATE_CCW,
        Command.SOFT_DROP_PRESS,
        Command.HARD_DROP,
        Command.HOLD,
        None,
    )

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        render_mode: Optional[str] = None,
        max_episode_steps: int = 10000,
        terminal_penalty: float = 0.0,
    ) -> None:
        super().__init__()
        self.game = FallingBlockGame(config)
        self.render_mode = render_mode
        self.max_episode_steps = int(max_episode_steps)
        self.terminal_penalty = float(terminal_penalty)

        n_types = len(TetrominoType)
        self.observation_space = spaces.Dict(
            {
                "board": spaces.Box(low=0, high=n_types, shape=(BOARD_ROWS, BOARD_COLS), dtype=np.int8),
                # kind, rotation, row, col of the live piece
                "current": spaces.Box(
                    low=np.array([1, 0, 0, 0], dtype=np.int8),
                    high=np.array([n_types, 3, BOARD_ROWS - 1, BOARD_COLS - 1], dtype=np.int8),
                    dtype=np.int8,
                ),
                "next": spaces.Discrete(n_types + 1),
                "held": spaces.Discrete(n_types + 1),  # 0 when the slot is empty
                "can_swap": spaces.Discrete(2),
            }
        )
        self.action_space = spaces.Discrete(len(self.ACTIONS))
        self._steps = 0

    def _get_obs(self) -> Dict[str, Any]:
        piece = self.game.current_piece
        held = self.game.held_piece
        return {
            "board": self.game.grid.clone_state(),
            "current": np.array([int(piece.kind), piece.rotation, piece.row, piece.col], dtype=np.int8),
            "next": int(self.game.next_piece.kind),
            "held": int(held.kind) if held is not None else 0,
            "can_swap": int(self.game.can_swap),
        }

    def _get_info(self) -> Dict[str, Any]:
        return {
            "score": self.game.score,
            "level": self.game.level,
            "lines_cleared": self.game.lines_cleared,
            "steps": self._steps,
        }

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[Dict[str, Any], Dict[str, Any]]:
        super().reset(seed=seed)
        self.game.reset(seed=seed)
        self._steps = 0
        return self._get_obs(), self._get_info()

    def step(self, action: int):
        command = self.ACTIONS[int(action)]
        score_before = self.game.score

        if command is not Command.SOFT_DROP_PRESS:
            self.game.soft_drop_release()
        if command is not None:
            self.game.apply(command)
        self.game.tick()

        self._steps += 1
        terminated = bool(self.game.game_over)
        truncated = not terminated and self._steps >= self.max_episode_steps
        reward = float(self.game.score - score_before)
        if terminated:
            reward += self.terminal_penalty

        return self._get_obs(), reward, terminated, truncated, self._get_info()

    def render(self) -> Optional[np.ndarray]:
        if self.render_mode != "rgb_array":
            return None
        grid = self.game.grid.grid
        cell = 12
        h, w = grid.shape
        img = np.zeros((h * cell, w * cell, 3), dtype=np.uint8)
        for y in range(h):
            for x in range(w):
                color = color_for(int(grid[y, x])) or (30, 30, 36)
                img[y * cell : (y + 1) * cell, x * cell : (x + 1) * cell, :] = color
        return img

    def close(self) -> None:
        pass
