"""
Bot players for the automated opponent.
"""

from .base import BaseBot, BotAction, GameActions
from .greedy import GreedyBot
from .turn import TurnStep, iter_opponent_turn, run_opponent_turn, run_opponent_turn_async

__all__ = [
    "BaseBot",
    "BotAction",
    "GameActions",
    "GreedyBot",
    "TurnStep",
    "iter_opponent_turn",
    "run_opponent_turn",
    "run_opponent_turn_async",
]
