"""
Tests for Neural Network Policies

Network shapes, network-backed players, persistence and mutation
"""

import numpy as np
import pytest
import torch

from arena.game import Game
from arena.moves import Move
from arena.policy import (
    NetworkPlayer,
    PolicyMLP,
    count_parameters,
    encode_observation,
    load_policy,
    mutate_policy,
    save_policy,
)
from arena.players import StraightPlayer


class TestPolicyMLP:
    """Test the policy network"""

    def test_forward_shape(self):
        """Test batched forward pass output shape"""
        net = PolicyMLP(input_dim=16)
        out = net(torch.randn(8, 16))
        assert out.shape == (8, 3)

    def test_scores_non_negative(self):
        """Test scores are bounded to [0, 1]"""
        net = PolicyMLP(input_dim=16)
        out = net(torch.randn(32, 16) * 10)
        assert torch.all(out >= 0) and torch.all(out <= 1)

    def test_parameter_count(self):
        """Test parameter count for a known architecture"""
        net = PolicyMLP(input_dim=4, output_dim=3, hidden_dims=(5,))
        assert count_parameters(net) == (4 * 5 + 5) + (5 * 3 + 3)


class TestNetworkPlayer:
    """Test the network-backed player"""

    def test_observation_encoding(self):
        """Test vision plus life becomes one float vector"""
        obs = encode_observation(np.array([0, 1, -1], dtype=np.int8), 0.5)
        assert obs.dtype == np.float32
        assert obs.tolist() == [0.0, 1.0, -1.0, 0.5]

    def test_decide(self):
        """Test the player returns a three-score move for its id"""
        torch.manual_seed(0)
        player = NetworkPlayer(PolicyMLP(input_dim=16))
        game = Game(12, 12, [player, StraightPlayer()], seed=4)

        move = player.decide(game.view())
        assert isinstance(move, Move)
        assert move.snake_id == 2
        assert len(move.scores) == 3

    def test_plays_full_rounds(self):
        """Test network players can drive a game"""
        torch.manual_seed(0)
        players = [NetworkPlayer(PolicyMLP(input_dim=16)) for _ in range(3)]
        game = Game(15, 15, players, food_count=3, seed=4)

        for _ in range(20):
            game_over, _ = game.play_round()
            if game_over:
                break
        assert game.round_number >= 1


class TestPersistence:
    """Test saving and loading policies"""

    def test_round_trip(self, tmp_path):
        """Test a loaded policy reproduces the saved one"""
        torch.manual_seed(1)
        net = PolicyMLP(input_dim=11, hidden_dims=(8, 4))
        path = tmp_path / "policy.pt"
        save_policy(net, str(path), {'fitness': 2.5, 'generation': 3})

        loaded, info = load_policy(str(path))
        x = torch.randn(5, 11)

        assert loaded.hidden_dims == (8, 4)
        assert info == {'fitness': 2.5, 'generation': 3}
        assert torch.allclose(net(x), loaded(x))


class TestMutation:
    """Test Gaussian mutation"""

    def test_child_differs_parent_untouched(self):
        """Test mutation copies before perturbing"""
        torch.manual_seed(2)
        parent = PolicyMLP(input_dim=16)
        before = [p.clone() for p in parent.parameters()]

        child = mutate_policy(parent, sigma=0.5, generator=torch.Generator().manual_seed(0))

        for saved, p in zip(before, parent.parameters()):
            assert torch.equal(saved, p)
        assert any(not torch.equal(a, b) for a, b in zip(parent.parameters(), child.parameters()))

    def test_seeded_mutation(self):
        """Test equal generators give equal children"""
        parent = PolicyMLP(input_dim=16)
        child1 = mutate_policy(parent, generator=torch.Generator().manual_seed(9))
        child2 = mutate_policy(parent, generator=torch.Generator().manual_seed(9))

        for a, b in zip(child1.parameters(), child2.parameters()):
            assert torch.equal(a, b)


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
