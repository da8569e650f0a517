"""
Move legality predicates and derived game facts.

Nothing in this module mutates state, except remove_card_from_source which
the engine calls once a move has been validated.
"""

from dataclasses import dataclass
from typing import List, Optional, Sequence

from .comparator import comparison_value
from .constants import (
    ACE,
    COMPLETE_VALUE,
    EMPTY_COLUMN,
    INTERFERENCE_SUIT,
    INTERFERENCE_VALUE,
    KING,
    SOURCE_AUX,
    SOURCE_HAND,
    SOURCE_MUERTO,
)
from .models import Card, CentralColumn, Player


@dataclass(frozen=True)
class CardLocation:
    """Where a playable card sits for its owner."""
    card: Optional[Card] = None
    source: Optional[str] = None  # hand|aux|muerto
    source_index: int = -1

    @property
    def found(self) -> bool:
        return self.card is not None


NOT_FOUND = CardLocation()


def can_play_on_central(card: Card, column: CentralColumn) -> bool:
    """
    Check if a card can be placed on a central column.

    An empty column only opens with an Ace. An active column takes the next
    value up, or a King as a wildcard. A complete column takes nothing.
    """
    if column.top_value == EMPTY_COLUMN:
        return card.value == ACE
    if is_column_complete(column.top_value):
        return False
    if card.value == KING:
        return True
    return card.value == column.top_value + 1


def get_next_top_value(card: Card, column: CentralColumn) -> int:
    """Top value of the column after placing the card (a King stands in for the next value)."""
    if card.value == KING:
        return column.top_value + 1
    return card.value


def is_column_complete(top_value: int) -> bool:
    return top_value >= COMPLETE_VALUE


def can_play_on_aux(card: Card, aux_column: Sequence[Card], is_interference: bool) -> bool:
    """
    Check if a card can be pushed onto an aux column.

    The owner may stack anything. An opponent must keep the column strictly
    descending by comparison value.
    """
    if not aux_column or not is_interference:
        return True
    top = aux_column[-1]
    return comparison_value(card.value) < comparison_value(top.value)


def can_play_on_opponent_muerto(card: Card, muerto_top: Optional[Card]) -> bool:
    """Same suit as the visible top and exactly one value above or below it."""
    if muerto_top is None:
        return False
    if card.suit != muerto_top.suit:
        return False
    return card.value in (muerto_top.value - 1, muerto_top.value + 1)


def interference_active(opponent: Player) -> bool:
    """Aux interference is unlocked while the opponent's muerto shows the 4 of hearts."""
    top = opponent.muerto_top
    if top is None:
        return False
    return top.suit == INTERFERENCE_SUIT and top.value == INTERFERENCE_VALUE


def get_candidate_cards(player: Player) -> List[Card]:
    """Cards the player could send to a central column: hand, aux tops, muerto top."""
    cards = list(player.hand)
    for column in player.aux_columns:
        if column:
            cards.append(column[-1])
    if player.muerto:
        cards.append(player.muerto[-1])
    return cards


def has_any_central_move(player: Player, central_columns: Sequence[CentralColumn]) -> bool:
    candidates = get_candidate_cards(player)
    return any(
        can_play_on_central(card, column)
        for column in central_columns
        for card in candidates
    )


def has_ace_with_empty_column(player: Player, central_columns: Sequence[CentralColumn]) -> bool:
    """True while an Ace in hand could open an empty column; the turn may not end then."""
    return (
        any(card.value == ACE for card in player.hand) and
        any(column.top_value == EMPTY_COLUMN for column in central_columns)
    )


def has_player_won(player: Player) -> bool:
    """
    Muerto cleared and the hand is empty or a single non-Ace card.
    """
    if player.muerto:
        return False
    if not player.hand:
        return True
    return len(player.hand) == 1 and player.hand[0].value != ACE


def find_card(player: Player, card_id: str) -> CardLocation:
    """
    Locate a card the player may play: anywhere in hand, an aux top or the muerto top.

    Returns NOT_FOUND when the card is buried or belongs to someone else.
    """
    for i, card in enumerate(player.hand):
        if card.id == card_id:
            return CardLocation(card, SOURCE_HAND, i)
    for i, column in enumerate(player.aux_columns):
        if column and column[-1].id == card_id:
            return CardLocation(column[-1], SOURCE_AUX, i)
    top = player.muerto_top
    if top is not None and top.id == card_id:
        return CardLocation(top, SOURCE_MUERTO, 0)
    return NOT_FOUND


def remove_card_from_source(player: Player, location: CardLocation) -> Card:
    """Take a located card out of the player's hand, aux column or muerto."""
    if location.source == SOURCE_HAND:
        return player.hand.pop(location.source_index)
    if location.source == SOURCE_AUX:
        return player.aux_columns[location.source_index].pop()
    if location.source == SOURCE_MUERTO:
        return player.muerto.pop()
    raise ValueError(f"Invalid card source: {location.source}")
