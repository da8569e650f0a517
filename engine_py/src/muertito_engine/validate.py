"""
Validation of move attempts.

Each validator checks phase, turn and ownership before the move-specific
rule, and reports the first failure with an error code and a message the
caller can show to the player.
"""

from typing import Optional

from . import errors
from .comparator import format_card, get_suit_symbol, get_value_label
from .constants import ACE, KING, PHASE_PLAYING, PLAYER_IDS, SOURCE_AUX, SOURCE_HAND
from .models import CentralColumn, GameState
from .rules import (
    NOT_FOUND,
    CardLocation,
    can_play_on_aux,
    can_play_on_central,
    can_play_on_opponent_muerto,
    find_card,
    has_ace_with_empty_column,
    interference_active,
)


class ValidationResult:
    """Result of move validation."""

    def __init__(
        self,
        valid: bool,
        error_code: Optional[str] = None,
        error_message: Optional[str] = None,
        location: CardLocation = NOT_FOUND
    ):
        self.valid = valid
        self.error_code = error_code
        self.error_message = error_message
        self.location = location

    @classmethod
    def success(cls, location: CardLocation = NOT_FOUND) -> 'ValidationResult':
        """Create a successful validation result."""
        return cls(valid=True, location=location)

    @classmethod
    def error(cls, error_code: str, error_message: str) -> 'ValidationResult':
        """Create an error validation result."""
        return cls(valid=False, error_code=error_code, error_message=error_message)


def validate_turn(state: GameState, actor: str) -> ValidationResult:
    """Check the game is running and it is the actor's turn."""
    if state.phase != PHASE_PLAYING:
        return ValidationResult.error(errors.GAME_OVER, "The game is over")
    if actor not in PLAYER_IDS:
        return ValidationResult.error(errors.INVALID_PLAYER, f"Unknown player: {actor}")
    if state.current_turn != actor:
        return ValidationResult.error(
            errors.NOT_YOUR_TURN,
            f"It's not your turn (current turn: {state.current_turn})"
        )
    return ValidationResult.success()


def _locate(state: GameState, actor: str, card_id: str) -> ValidationResult:
    result = validate_turn(state, actor)
    if not result.valid:
        return result
    location = find_card(state.players[actor], card_id)
    if not location.found:
        return ValidationResult.error(errors.CARD_NOT_FOUND, "That card can't be played right now")
    return ValidationResult.success(location)


def central_play_message(card, column: CentralColumn) -> str:
    """Explain why a card does not fit a central column."""
    label = get_value_label(card.value)
    if column.is_empty:
        return f"You need an Ace to open this column, not a {label}"
    if card.value != KING and card.value != column.top_value + 1:
        needed = get_value_label(column.top_value + 1)
        return f"You need a {needed} or a K here, not a {label}"
    return "Invalid move"


def validate_central_play(
    state: GameState,
    actor: str,
    card_id: str,
    column_index: int
) -> ValidationResult:
    """
    Validate playing a card onto a central column.

    Args:
        state: Current game state
        actor: Player making the move
        card_id: Card in hand, on an aux top or on the muerto top
        column_index: Target central column

    Returns:
        ValidationResult carrying the card location on success
    """
    result = _locate(state, actor, card_id)
    if not result.valid:
        return result
    if not 0 <= column_index < len(state.central_columns):
        return ValidationResult.error(errors.INVALID_COLUMN, f"No central column {column_index}")

    card = result.location.card
    column = state.central_columns[column_index]
    if not can_play_on_central(card, column):
        return ValidationResult.error(errors.ILLEGAL_CENTRAL_PLAY, central_play_message(card, column))
    return result


def validate_aux_play(
    state: GameState,
    actor: str,
    card_id: str,
    target_player_id: str,
    aux_index: int
) -> ValidationResult:
    """
    Validate placing a hand card on an aux column.

    Placing on the opponent's aux column is interference: it needs the
    opponent's muerto to show the unlock card and a strictly lower card.
    """
    result = _locate(state, actor, card_id)
    if not result.valid:
        return result
    if target_player_id not in PLAYER_IDS:
        return ValidationResult.error(errors.INVALID_PLAYER, f"Unknown player: {target_player_id}")
    target = state.players[target_player_id]
    if not 0 <= aux_index < len(target.aux_columns):
        return ValidationResult.error(errors.INVALID_COLUMN, f"No aux column {aux_index}")

    location = result.location
    if location.source != SOURCE_HAND:
        return ValidationResult.error(errors.ONLY_HAND_TO_AUX, "Only cards from your hand can go to an aux column")
    if location.card.value == ACE:
        return ValidationResult.error(errors.ACE_NOT_IN_AUX, "Aces can't be placed in aux columns")

    if target_player_id != actor:
        if not interference_active(target):
            return ValidationResult.error(
                errors.INTERFERENCE_UNAVAILABLE,
                "Interference is only allowed while the opponent's muerto shows the 4♥"
            )
        if not can_play_on_aux(location.card, target.aux_columns[aux_index], True):
            return ValidationResult.error(
                errors.AUX_ORDER,
                "The card must be lower than the top of that aux column"
            )
    return result


def validate_opponent_muerto_play(state: GameState, actor: str, card_id: str) -> ValidationResult:
    """
    Validate pushing a card onto the opponent's muerto.

    The card must come from hand or an aux top, match the suit of the
    visible top and be one value above or below it.
    """
    result = _locate(state, actor, card_id)
    if not result.valid:
        return result

    location = result.location
    if location.source not in (SOURCE_HAND, SOURCE_AUX):
        return ValidationResult.error(
            errors.ONLY_HAND_OR_AUX_TO_MUERTO,
            "Only cards from your hand or aux columns can go to the opponent's muerto"
        )

    top = state.get_opponent(actor).muerto_top
    if top is None:
        return ValidationResult.error(errors.OPPONENT_MUERTO_EMPTY, "The opponent's muerto is empty")
    if not can_play_on_opponent_muerto(location.card, top):
        symbol = get_suit_symbol(top.suit)
        options = []
        if top.value > ACE:
            options.append(f"{get_value_label(top.value - 1)}{symbol}")
        if top.value < KING:
            options.append(f"{get_value_label(top.value + 1)}{symbol}")
        return ValidationResult.error(
            errors.ILLEGAL_MUERTO_PLAY,
            f"On {format_card(top)} you can only place {' or '.join(options)}"
        )
    return result


def validate_end_turn(state: GameState) -> ValidationResult:
    """The turn can't end while an Ace in hand could open an empty column."""
    if state.phase != PHASE_PLAYING:
        return ValidationResult.error(errors.GAME_OVER, "The game is over")
    if has_ace_with_empty_column(state.current_player, state.central_columns):
        return ValidationResult.error(errors.MUST_PLAY_ACE, "You must play your Ace on an empty column first")
    return ValidationResult.success()
