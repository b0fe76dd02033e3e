"""
Fitness Evaluation

Runs a battle royale and scores every player on how long it survived and
how long its snake ever grew:

    fitness = survived_rounds / rounds + max_len / 10
"""

import logging
from dataclasses import dataclass
from typing import Dict, Optional, Sequence

from arena.config import GameConfig
from arena.game import Game


logger = logging.getLogger(__name__)


@dataclass
class AgentResult:
    """Outcome of one player in a tournament"""
    snake_id: int
    survived_rounds: int
    max_len: int
    rounds: int

    @property
    def fitness(self) -> float:
        return self.survived_rounds / self.rounds + self.max_len / 10


def run_tournament(
    players: Sequence,
    height: int,
    width: int,
    food_count: int = 1,
    rounds: int = 1000,
    config: Optional[GameConfig] = None,
    seed: Optional[int] = None
) -> Dict[int, AgentResult]:
    """
    Play one game for at most `rounds` ticks

    Returns:
        AgentResult per player, keyed by the player's position in `players`
    """
    game = Game(height, width, players, food_count=food_count, config=config, seed=seed)
    ids = [player.snake_id for player in players]
    max_len = {sid: game.player_len(sid) for sid in ids}
    survived = {sid: 0 for sid in ids}

    for round_number in range(rounds):
        game_over, _ = game.play_round()
        for sid in ids:
            if game.alive(sid):
                survived[sid] = round_number + 1
                max_len[sid] = max(max_len[sid], game.player_len(sid))
        if game_over:
            break

    logger.info(f"Tournament finished after {game.round_number} rounds, "
                f"{len(game.agents)} snakes alive")

    return {
        i: AgentResult(
            snake_id=sid,
            survived_rounds=survived[sid],
            max_len=max_len[sid],
            rounds=rounds
        )
        for i, sid in enumerate(ids)
    }
