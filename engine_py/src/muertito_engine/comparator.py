"""
Card value comparison and display helpers.
"""

from typing import Iterable, List, Optional

from .constants import ACE, SUIT_SYMBOLS, VALUE_LABELS
from .models import Card


def comparison_value(value: int) -> int:
    """Ordering value where the Ace ranks highest (14)."""
    return 14 if value == ACE else value


def get_value_label(value: int) -> str:
    """Label for a card value: A, 2-10, J, Q, K."""
    return VALUE_LABELS.get(value, str(value))


def get_suit_symbol(suit: str) -> str:
    return SUIT_SYMBOLS[suit]


def format_card(card: Card) -> str:
    """Short display form of a card, e.g. 'Q♥'."""
    return f"{get_value_label(card.value)}{get_suit_symbol(card.suit)}"


def sort_hand(hand: Iterable[Card]) -> List[Card]:
    """
    Sort cards Ace first, then ascending by value.

    Ties keep their original hand order.
    """
    return sorted(hand, key=lambda c: 0 if c.value == ACE else c.value)


def highest_card(cards: Iterable[Card]) -> Optional[Card]:
    """Card with the highest comparison value; the first one wins ties."""
    best = None
    for card in cards:
        if best is None or comparison_value(card.value) > comparison_value(best.value):
            best = card
    return best
