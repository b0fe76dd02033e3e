"""
Game - multi-agent tick orchestration

One round runs three phases:
1. Collecting: every active player decides concurrently from a frozen GameView
2. Applying: moves are applied one at a time in ascending snake id order
3. Cleanup: dead snakes are wiped from the board and dropped

The board is only written in phases 2 and 3, after every decision has been
joined, so players can read the view without any locking.

Because moves are applied sequentially, two heads aiming at the same free
cell are resolved first-applied-wins: the lower snake id takes the cell and
the other collides with it.
"""

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, replace
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

import numpy as np

from arena.board import Board, EMPTY, FOOD, FIRST_AGENT_ID
from arena.config import GameConfig
from arena.errors import ConfigurationError, GameOverError, PlacementError
from arena.hunger import Hunger
from arena.moves import Move, next_head
from arena.snake import MIN_LENGTH, Snake
from arena.utils import make_rng
from arena.vision import VisionSensor


logger = logging.getLogger(__name__)

# Agent ids are stored in an int8 grid
MAX_AGENT_ID = 127


@dataclass
class AgentInfo:
    """An active participant: decision-maker, body and life"""
    player: object
    snake_id: int
    snake: Snake
    life: float = 1.0
    max_len: int = MIN_LENGTH

    def __post_init__(self):
        self.max_len = max(self.max_len, len(self.snake))


@dataclass(frozen=True)
class GameView:
    """
    Read-only picture of the game handed to players while they decide

    The board is backed by a non-writeable array and the snakes are copies,
    so nothing a player does here can reach the live game.
    """
    board: Board
    snakes: Mapping[int, Snake]
    signals: Mapping[int, float]
    sensor: VisionSensor
    round_number: int

    @property
    def grid(self) -> np.ndarray:
        return self.board.grid

    def vision(self, snake_id: int) -> np.ndarray:
        return self.sensor.encode(self.board, self.snakes[snake_id])

    def life(self, snake_id: int) -> float:
        """Normalised life signal in [0, 1], see Hunger.signal"""
        return self.signals[snake_id]


class Game:
    """
    Snake arena with any number of players

    Args:
        height, width: board size including the wall border
        players: decision-makers, assigned ids 2, 3, ... in list order
        food_count: food items kept on the board (overrides config.food_count)
        config: GameConfig, defaults used when None
        seed: seed for the placement generator
        rng: explicit numpy Generator, takes precedence over seed
    """

    def __init__(
        self,
        height: int,
        width: int,
        players: Sequence,
        food_count: Optional[int] = None,
        config: Optional[GameConfig] = None,
        seed: Optional[int] = None,
        rng: Optional[np.random.Generator] = None
    ):
        config = config or GameConfig()
        if food_count is not None:
            config = replace(config, food_count=food_count)
        config.validate()
        self._check_size(height, width, len(players), config)

        self.config = config
        self.rng = rng if rng is not None else make_rng(seed)
        self.board = Board(height, width, placement_attempts=config.placement_attempts)
        self.sensor = VisionSensor(depth=config.vision_depth, cap_blocked=config.cap_blocked)
        self.hunger = Hunger(decrement=config.life_decrement)

        self.agents: Dict[int, AgentInfo] = {}
        for i, player in enumerate(players):
            snake_id = FIRST_AGENT_ID + i
            try:
                snake = Snake.spawn(self.board, snake_id, self.rng)
            except PlacementError as err:
                # random spawns can fragment rows past the up-front pair count
                raise ConfigurationError(
                    f"No room to spawn snake {snake_id} on a {height}x{width} board"
                ) from err
            player.assign_id(snake_id)
            self.agents[snake_id] = AgentInfo(player=player, snake_id=snake_id, snake=snake)

        for _ in range(config.food_count):
            self.board.place_food(self.rng)

        self.round_number = 0
        self.game_over = False

    @staticmethod
    def _check_size(height: int, width: int, n_players: int, config: GameConfig):
        if height < config.min_size or width < config.min_size:
            raise ConfigurationError(
                f"Board {height}x{width} is smaller than {config.min_size}x{config.min_size}"
            )
        if n_players == 0:
            raise ConfigurationError("A game needs at least one player")
        if FIRST_AGENT_ID + n_players - 1 > MAX_AGENT_ID:
            raise ConfigurationError(f"Too many players: {n_players}")
        interior = (height - 2) * (width - 2)
        needed = n_players * MIN_LENGTH + config.food_count
        if needed >= interior:
            raise ConfigurationError(
                f"{n_players} snakes and {config.food_count} food need {needed} cells, "
                f"board interior has {interior}"
            )
        pairs = (height - 2) * ((width - 2) // 2)
        if n_players > pairs:
            raise ConfigurationError(
                f"{n_players} snakes need a free horizontal pair each, board has {pairs}"
            )

    def view(self) -> GameView:
        """Frozen snapshot for the collecting phase"""
        return GameView(
            board=self.board.frozen(),
            snakes=MappingProxyType({
                sid: Snake(list(agent.snake.positions)) for sid, agent in self.agents.items()
            }),
            signals=MappingProxyType({
                sid: self.hunger.signal(agent) for sid, agent in self.agents.items()
            }),
            sensor=self.sensor,
            round_number=self.round_number
        )

    def play_round(self) -> Tuple[bool, np.ndarray]:
        """
        Process one game tick

        Returns:
            (game_over, read-only board snapshot)
        """
        if self.game_over:
            raise GameOverError("Game is over, start a new one.")

        moves = self._collect_moves(self.view())

        dead: List[int] = []
        for snake_id in sorted(moves):
            if snake_id not in self.agents or snake_id in dead:
                logger.debug(f"Discarding move for inactive snake {snake_id}")
                continue
            if self.play_move(moves[snake_id]):
                dead.append(snake_id)

        for snake_id in dead:
            self._remove(snake_id)

        self.round_number += 1
        if not self.agents:
            self.game_over = True
            logger.info(f"Game over after {self.round_number} rounds")
        return self.game_over, self.board.snapshot()

    def _collect_moves(self, view: GameView) -> Dict[int, Move]:
        """Ask every active player for a move in parallel and wait for all of them"""
        moves: Dict[int, Move] = {}
        max_workers = self.config.max_workers or len(self.agents)

        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            futures = {
                executor.submit(agent.player.decide, view): snake_id
                for snake_id, agent in self.agents.items()
            }
            for future in as_completed(futures):
                snake_id = futures[future]
                try:
                    move = future.result()
                except Exception:
                    logger.exception(f"Player {snake_id} failed to decide, going straight")
                    move = None
                if not isinstance(move, Move) or move.snake_id != snake_id:
                    if move is not None:
                        logger.warning(f"Player {snake_id} returned {move!r}, going straight")
                    move = Move.straight(snake_id)
                moves[snake_id] = move

        return moves

    def play_move(self, move: Move) -> bool:
        """
        Apply one move to the board

        Eaten food is replaced while the board has an empty cell; once the
        snakes fill every cell the meal goes unreplaced and the tick carries on.

        Returns:
            True if the snake died (collision or starvation). The dead snake
            stays on the board until the cleanup phase removes it.
        """
        agent = self.agents[move.snake_id]
        snake = agent.snake
        new_head = next_head(snake, move)
        target = self.board.at(new_head.y, new_head.x)

        if target == FOOD:
            snake.move_to(new_head, grew=True)
            self.board.set(new_head.y, new_head.x, move.snake_id)
            self.hunger.feed(agent)
            if len(self.board.free_cells()):
                self.board.place_food(self.rng)
            else:
                logger.debug(f"Board full, no replacement food after snake {move.snake_id} ate")
            logger.debug(f"Snake {move.snake_id} ate at {tuple(new_head)}, length {len(snake)}")
            return False

        if target != EMPTY:
            logger.debug(f"Snake {move.snake_id} hit {target} at {tuple(new_head)}")
            return True

        tail = snake.tail()
        snake.move_to(new_head, grew=False)
        self.board.set(tail.y, tail.x, EMPTY)
        self.board.set(new_head.y, new_head.x, move.snake_id)
        return self.hunger.starve(agent, self.board)

    def _remove(self, snake_id: int):
        self.board.clear_tag(snake_id)
        del self.agents[snake_id]
        logger.debug(f"Removed snake {snake_id}, {len(self.agents)} left")

    def end(self):
        """External round-over signal, no further rounds are played"""
        self.game_over = True

    def alive(self, snake_id: int) -> bool:
        return snake_id in self.agents

    def player_len(self, snake_id: int) -> int:
        """Body length, 0 once the snake is gone"""
        agent = self.agents.get(snake_id)
        return len(agent.snake) if agent is not None else 0

    def vision(self, snake_id: int) -> np.ndarray:
        return self.sensor.encode(self.board, self.agents[snake_id].snake)

    def life(self, snake_id: int) -> float:
        """Raw life value in (0, 1]"""
        return self.agents[snake_id].life

    def __repr__(self):
        return (
            f"<Game {self.board.height}x{self.board.width} round={self.round_number}, "
            f"agents={sorted(self.agents)}>"
        )
