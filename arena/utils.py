"""
Utility Functions for the arena

Includes:
- Seedable random generators threaded through board placement
- Global seeding for scripts and policy training
"""

import random
from typing import Optional

import gymnasium as gym
import numpy as np
import torch


def make_rng(seed: Optional[int] = None) -> np.random.Generator:
    """Fresh numpy Generator, reproducible when seed is given"""
    rng, _ = gym.utils.seeding.np_random(seed)
    return rng


def set_seed(seed: int):
    """Seed python, numpy and torch global generators for script runs"""
    random.seed(seed)
    np.random.seed(seed)
    torch.manual_seed(seed)
