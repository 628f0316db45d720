"""
Alien Orbit - orbit-dodging arcade game
Players circle a spinning alien and dodge its telegraphed volleys.
"""

__version__ = "1.0.0"

from .game import FiringMode, GameSession, create_session
from .config import DEFAULT_CONFIG, GameConfig

__all__ = [
    "DEFAULT_CONFIG",
    "FiringMode",
    "GameConfig",
    "GameSession",
    "create_session",
]
