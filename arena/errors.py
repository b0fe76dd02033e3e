"""
Exceptions raised by the arena engine

Agent death is normal game progression and never raises.
"""


class ArenaError(Exception):
    """Base class for arena errors"""


class ConfigurationError(ArenaError, ValueError):
    """Game parameters that can never produce a playable board"""


class PlacementError(ArenaError, RuntimeError):
    """No free cell left for food or a new snake"""


class GameOverError(ArenaError, RuntimeError):
    """A round was requested after the game reached its terminal state"""
