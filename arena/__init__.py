"""
Snake Arena Components

This package contains the multi-agent snake simulation:
- Board, snake bodies and the egocentric vision sensor
- Life/hunger mechanic and move resolution
- Game tick orchestration with parallel decision collection
- Players, network policies and a gymnasium environment
"""

from arena.board import Board, EMPTY, WALL, FOOD, FIRST_AGENT_ID
from arena.config import GameConfig
from arena.errors import ArenaError, ConfigurationError, PlacementError, GameOverError
from arena.game import Game, GameView, AgentInfo
from arena.moves import Action, Move, choose_action, next_head
from arena.players import Player, RandomPlayer, HumanPlayer, StraightPlayer
from arena.snake import Direction, Position, Snake
from arena.vision import Ray, VisionSensor

__all__ = [
    'Board',
    'EMPTY',
    'WALL',
    'FOOD',
    'FIRST_AGENT_ID',
    'GameConfig',
    'ArenaError',
    'ConfigurationError',
    'PlacementError',
    'GameOverError',
    'Game',
    'GameView',
    'AgentInfo',
    'Action',
    'Move',
    'choose_action',
    'next_head',
    'Player',
    'RandomPlayer',
    'HumanPlayer',
    'StraightPlayer',
    'Direction',
    'Position',
    'Snake',
    'Ray',
    'VisionSensor',
]
