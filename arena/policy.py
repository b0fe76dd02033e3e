"""
Neural Network Policies

Implements:
- PolicyMLP: vision + life signal -> three move scores
- NetworkPlayer: Player backed by a PolicyMLP
- Weight persistence and Gaussian mutation for neuro-evolution
"""

import copy
import logging

import numpy as np
import torch
import torch.nn as nn
from typing import Optional, Tuple

from arena.moves import Move
from arena.players import Player


logger = logging.getLogger(__name__)


class PolicyMLP(nn.Module):
    """
    Multi-Layer Perceptron policy

    For the egocentric vision vector plus one life signal input
    """

    def __init__(
        self,
        input_dim: int = 16,
        output_dim: int = 3,
        hidden_dims: Tuple[int, ...] = (32, 32)
    ):
        """
        Initialize policy MLP

        Args:
            input_dim: Vision length + 1 for the life signal
            output_dim: Number of move scores (left, straight, right)
            hidden_dims: Tuple of hidden layer sizes
        """
        super().__init__()

        layers = []
        prev_dim = input_dim

        for hidden_dim in hidden_dims:
            layers.append(nn.Linear(prev_dim, hidden_dim))
            layers.append(nn.Tanh())
            prev_dim = hidden_dim

        # Sigmoid keeps every score non-negative
        layers.append(nn.Linear(prev_dim, output_dim))
        layers.append(nn.Sigmoid())

        self.input_dim = input_dim
        self.output_dim = output_dim
        self.hidden_dims = tuple(hidden_dims)
        self.network = nn.Sequential(*layers)

    def forward(self, x: torch.Tensor) -> torch.Tensor:
        """
        Forward pass

        Args:
            x: (batch_size, input_dim) observation tensor

        Returns:
            (batch_size, output_dim) move scores in [0, 1]
        """
        return self.network(x)


def encode_observation(vision: np.ndarray, life: float) -> np.ndarray:
    """Float observation shared by NetworkPlayer and ArenaEnv"""
    return np.append(vision.astype(np.float32), np.float32(life))


class NetworkPlayer(Player):
    """
    Player that scores moves with a PolicyMLP

    The network runs under torch.no_grad on the CPU; players decide on
    worker threads, so the model is never trained while a game is running.
    """

    def __init__(self, network: PolicyMLP, device: Optional[torch.device] = None):
        super().__init__()
        self.network = network
        self.device = device if device is not None else torch.device('cpu')
        self.network.to(self.device)
        self.network.eval()

    def decide(self, view) -> Move:
        obs = encode_observation(view.vision(self.snake_id), view.life(self.snake_id))
        with torch.no_grad():
            x = torch.as_tensor(obs, device=self.device).unsqueeze(0)
            scores = self.network(x).squeeze(0).cpu().tolist()
        return Move(scores=scores, snake_id=self.snake_id)


def mutate_policy(
    network: PolicyMLP,
    sigma: float = 0.1,
    generator: Optional[torch.Generator] = None
) -> PolicyMLP:
    """
    Copy of network with Gaussian noise added to every parameter

    Args:
        network: parent policy, left untouched
        sigma: standard deviation of the noise
        generator: torch Generator for reproducible mutation
    """
    child = copy.deepcopy(network)
    with torch.no_grad():
        for param in child.parameters():
            noise = torch.randn(param.shape, generator=generator) * sigma
            param.add_(noise.to(param.device))
    return child


def save_policy(network: PolicyMLP, filepath: str, additional_info: dict = None):
    """
    Save policy weights, architecture and optional metadata

    Args:
        network: Policy to save
        filepath: Path to save file
        additional_info: Optional dictionary with fitness, generation, etc.
    """
    save_dict = {
        'model_state_dict': network.state_dict(),
        'input_dim': network.input_dim,
        'output_dim': network.output_dim,
        'hidden_dims': network.hidden_dims,
    }

    if additional_info:
        save_dict.update(additional_info)

    torch.save(save_dict, filepath)
    logger.info(f"Policy saved to {filepath}")


def load_policy(filepath: str, device: Optional[torch.device] = None) -> Tuple[PolicyMLP, dict]:
    """
    Rebuild a policy saved with save_policy

    Returns:
        (network, additional info)
    """
    if device is None:
        device = torch.device('cpu')

    checkpoint = torch.load(filepath, map_location=device)
    network = PolicyMLP(
        input_dim=checkpoint['input_dim'],
        output_dim=checkpoint['output_dim'],
        hidden_dims=tuple(checkpoint['hidden_dims'])
    )
    network.load_state_dict(checkpoint['model_state_dict'])
    network.to(device)
    logger.info(f"Policy loaded from {filepath}")

    architecture = ('model_state_dict', 'input_dim', 'output_dim', 'hidden_dims')
    info = {k: v for k, v in checkpoint.items() if k not in architecture}
    return network, info


def count_parameters(model: nn.Module) -> int:
    """Count trainable parameters in model"""
    return sum(p.numel() for p in model.parameters() if p.requires_grad)
