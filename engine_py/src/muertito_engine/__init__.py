"""
Muertito game engine: rules, game lifecycle and the automated opponent.
"""

from .config import GameConfig, create_config
from .engine import MuertitoEngine
from .models import Card, CentralColumn, GameState, Player, UiState

__all__ = [
    "GameConfig",
    "create_config",
    "MuertitoEngine",
    "Card",
    "CentralColumn",
    "GameState",
    "Player",
    "UiState",
]
