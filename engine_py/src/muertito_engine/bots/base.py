"""
Base bot interface and utilities.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, Tuple

from ..constants import PHASE_PLAYING
from ..models import GameState, Player

ACTION_CENTRAL = 'central'
ACTION_AUX = 'aux'
ACTION_OPPONENT_MUERTO = 'opponent_muerto'
ACTION_END_TURN = 'end_turn'


class GameActions(ABC):
    """
    The moves a player can make on a game.

    Bots only act through this interface, never by touching the state.
    Every method returns (success, message) and leaves the state unchanged
    when it fails.
    """

    @abstractmethod
    def play_to_central(self, actor: str, card_id: str, column_index: int) -> Tuple[bool, str]:
        pass

    @abstractmethod
    def play_to_aux(self, actor: str, card_id: str, target_player_id: str, aux_index: int) -> Tuple[bool, str]:
        pass

    @abstractmethod
    def play_to_opponent_muerto(self, actor: str, card_id: str) -> Tuple[bool, str]:
        pass

    @abstractmethod
    def end_turn(self) -> Tuple[bool, str]:
        pass


class BotAction:
    """Represents a bot action."""

    def __init__(self, action_type: str, reason: str = '', **kwargs):
        self.type = action_type
        self.reason = reason
        self.data: Dict[str, Any] = kwargs

    @classmethod
    def central(cls, card_id: str, column_index: int, reason: str = '') -> 'BotAction':
        """Create a play onto a central column."""
        return cls(ACTION_CENTRAL, reason, card_id=card_id, column_index=column_index)

    @classmethod
    def aux(cls, card_id: str, target_player_id: str, aux_index: int, reason: str = '') -> 'BotAction':
        """Create a placement on an aux column."""
        return cls(ACTION_AUX, reason, card_id=card_id, target_player_id=target_player_id, aux_index=aux_index)

    @classmethod
    def opponent_muerto(cls, card_id: str, reason: str = '') -> 'BotAction':
        """Create a push onto the opponent's muerto."""
        return cls(ACTION_OPPONENT_MUERTO, reason, card_id=card_id)

    @classmethod
    def end_turn(cls, reason: str = '') -> 'BotAction':
        """Create an end of turn."""
        return cls(ACTION_END_TURN, reason)

    def __eq__(self, other):
        if not isinstance(other, BotAction):
            return NotImplemented
        return self.type == other.type and self.data == other.data

    def __repr__(self):
        args = ', '.join(f"{k}={v!r}" for k, v in self.data.items())
        return f"BotAction({self.type}{', ' if args else ''}{args})"


def apply_action(actions: GameActions, actor: str, action: BotAction) -> Tuple[bool, str]:
    """Dispatch a bot action to the matching game move."""
    if action.type == ACTION_CENTRAL:
        return actions.play_to_central(actor, action.data['card_id'], action.data['column_index'])
    if action.type == ACTION_AUX:
        return actions.play_to_aux(
            actor, action.data['card_id'], action.data['target_player_id'], action.data['aux_index']
        )
    if action.type == ACTION_OPPONENT_MUERTO:
        return actions.play_to_opponent_muerto(actor, action.data['card_id'])
    if action.type == ACTION_END_TURN:
        return actions.end_turn()
    raise ValueError(f"Unknown bot action: {action.type}")


class BaseBot(ABC):
    """Abstract base class for bot players."""

    def __init__(self, player_id: str):
        self.player_id = player_id

    @abstractmethod
    def choose_action(self, state: GameState) -> Optional[BotAction]:
        """
        Choose the next action based on the current game state.

        Args:
            state: Current game state

        Returns:
            BotAction to take, or None if it is not this bot's turn
        """
        pass

    def get_player(self, state: GameState) -> Player:
        """Get this bot's player."""
        return state.players[self.player_id]

    def get_opponent(self, state: GameState) -> Player:
        return state.get_opponent(self.player_id)

    def is_my_turn(self, state: GameState) -> bool:
        """Check if it's this bot's turn."""
        return state.phase == PHASE_PLAYING and state.current_turn == self.player_id
