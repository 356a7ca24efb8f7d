import numpy as np

from wordle_engine.env import OBS_SIZE
from wordle_engine.gym_env import GymWordleEnv
from wordle_engine.sampler import WordSampler
from wordle_engine.vocab import WordVocab

WORDS = ["total", "stoal", "allot", "tally", "alloy", "atoll", "crane", "trace", "adieu", "cigar"]


def _make_env():
    vocab = WordVocab(WORDS)
    return GymWordleEnv(vocab, WordSampler(vocab, seed=42), allow_probe_guesses=False)


def test_gym_wordle_env_behavior():
    env = _make_env()

    # Reset returns (obs, info) where info carries the action mask
    obs, info = env.reset(seed=0)
    mask = info["action_mask"]

    assert obs.shape == (OBS_SIZE,)
    assert env.observation_space.contains(obs)
    assert mask.shape[0] == len(WORDS)
    assert np.sum(mask) == len(WORDS)

    action = int(np.nonzero(mask)[0][0])
    obs2, reward, terminated, truncated, info2 = env.step(action)

    assert obs2.shape == (OBS_SIZE,)
    assert isinstance(reward, float)
    assert isinstance(terminated, bool)
    assert isinstance(truncated, bool)

    # Candidate set should not grow after a step
    new_mask = info2["action_mask"]
    assert new_mask.shape[0] == mask.shape[0]
    assert np.sum(new_mask) <= np.sum(mask)
    assert np.array_equal(env.get_action_mask(), new_mask)


def test_gym_env_solves_with_target_option():
    env = _make_env()
    _, info = env.reset(options={"target_idx": 6})
    _, reward, terminated, truncated, info = env.step(6)
    assert terminated and not truncated
    assert info["target"] == "crane"
    assert reward == 19.0
