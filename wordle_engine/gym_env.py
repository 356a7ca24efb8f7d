from __future__ import annotations

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from wordle_engine.env import OBS_SIZE, WordleEnv
from wordle_engine.sampler import WordSampler
from wordle_engine.vocab import WordVocab


class GymWordleEnv(gym.Env):
    """
    Gymnasium wrapper around WordleEnv.
    - Observation: OBS_SIZE float32 vector (see env.encode_constraints)
    - Action space: Discrete(len(vocab))
    - info contains an 'action_mask' (int8 array) for valid actions at each step.
    """

    metadata = {"render_modes": []}

    def __init__(self, vocab: WordVocab, sampler: WordSampler, **kwargs) -> None:
        self.env = WordleEnv(vocab, sampler, **kwargs)
        self.vocab = vocab
        self._last_mask = None

        self.observation_space = spaces.Box(low=0.0, high=np.inf, shape=(OBS_SIZE,), dtype=np.float32)
        self.action_space = spaces.Discrete(len(vocab))

    def reset(self, *, seed: int | None = None, options: dict | None = None):
        super().reset(seed=seed)
        if seed is not None:
            self.env.sampler.set_seed(seed)
        target_idx = None if options is None else options.get("target_idx")
        obs, mask = self.env.reset(target_idx=target_idx)
        info = {"action_mask": np.asarray(mask, dtype=np.int8)}
        self._last_mask = info["action_mask"]
        return np.asarray(obs, dtype=np.float32), info

    def step(self, action: int):
        action = int(action)
        if not self.action_space.contains(action):
            raise gym.error.InvalidAction(f"Invalid action: {action}")

        obs, reward, done, info, mask = self.env.step(action)

        info = dict(info)
        info["action_mask"] = np.asarray(mask, dtype=np.int8)
        self._last_mask = info["action_mask"]
        terminated = bool(done and (info["solved"] or info["outcome"] == "exhausted"))
        truncated = bool(done and not terminated)
        return np.asarray(obs, dtype=np.float32), float(reward), terminated, truncated, info

    def get_action_mask(self) -> np.ndarray:
        """
        Latest valid action mask as an int8 array, for action-masking wrappers
        that call env.unwrapped.get_action_mask().
        """
        if self._last_mask is None:
            _, info = self.reset()
            return info["action_mask"]
        return self._last_mask
