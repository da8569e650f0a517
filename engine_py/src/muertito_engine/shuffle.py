"""
Deck creation, shuffling and dealing.
"""

import random
from typing import List, Optional, Tuple

from .comparator import comparison_value, format_card
from .constants import (
    CENTRAL_COLUMN_COUNT,
    COLOR_BLACK,
    COLOR_RED,
    CPU,
    DRAW_DECK,
    HAND_SIZE,
    HUMAN,
    MUERTO_DECK,
    PHASE_PLAYING,
    PLAYER_COLORS,
    SUITS,
    VALUES,
)
from .models import Card, CentralColumn, GameState, Player


def create_deck(prefix: str = '') -> List[Card]:
    """
    Create the 52 standard cards.

    Args:
        prefix: Deck marker prepended to every id so two decks stay distinct

    Returns:
        Cards ordered by suit, then Ace to King
    """
    deck = []
    for suit in SUITS:
        for value in VALUES:
            card_id = f"{suit}-{value}"
            if prefix:
                card_id = f"{prefix}-{card_id}"
            deck.append(Card(id=card_id, suit=suit, value=value))
    return deck


def shuffle_deck(cards: List[Card], rng: Optional[random.Random] = None) -> List[Card]:
    """
    Return a uniformly shuffled copy of the cards.

    Args:
        cards: Cards to shuffle (left untouched)
        rng: Random source; the module-level generator when omitted

    Returns:
        Shuffled copy of the cards
    """
    cards_copy = list(cards)
    (rng or random).shuffle(cards_copy)
    return cards_copy


def draw_cards(state: GameState, player_id: str, count: int) -> List[Card]:
    """
    Move up to count cards from the front of the draw pile into a hand.

    Returns:
        The cards drawn (fewer than count if the pile runs out)
    """
    player = state.players[player_id]
    drawn = state.draw_pile[:count]
    del state.draw_pile[:len(drawn)]
    player.hand.extend(drawn)
    return drawn


def find_starting_player(human_top: Card, cpu_top: Card) -> str:
    """
    Higher muerto top (Ace high) starts. Ties go to the primary player.
    """
    if comparison_value(human_top.value) >= comparison_value(cpu_top.value):
        return HUMAN
    return CPU


def setup_game(rng: Optional[random.Random] = None) -> Tuple[GameState, str]:
    """
    Deal a new game.

    The first deck is split by color into the two muerto piles, the second
    deck becomes the draw pile, and each player draws a starting hand.

    Returns:
        The new state and an opening message naming who starts
    """
    muerto_deck = create_deck(MUERTO_DECK)
    reds = [c for c in muerto_deck if c.color == COLOR_RED]
    blacks = [c for c in muerto_deck if c.color == COLOR_BLACK]

    human_muerto = shuffle_deck(reds, rng)
    cpu_muerto = shuffle_deck(blacks, rng)
    draw_pile = shuffle_deck(create_deck(DRAW_DECK), rng)

    state = GameState(
        draw_pile=draw_pile,
        central_columns=[CentralColumn() for _ in range(CENTRAL_COLUMN_COUNT)],
        players={
            HUMAN: Player(id=HUMAN, color=PLAYER_COLORS[HUMAN], muerto=human_muerto),
            CPU: Player(id=CPU, color=PLAYER_COLORS[CPU], muerto=cpu_muerto),
        },
        phase=PHASE_PLAYING,
        winner=None,
    )

    human_top = human_muerto[-1]
    cpu_top = cpu_muerto[-1]
    state.current_turn = find_starting_player(human_top, cpu_top)

    # Primary player draws first, from the same pile
    draw_cards(state, HUMAN, HAND_SIZE)
    draw_cards(state, CPU, HAND_SIZE)

    if state.current_turn == HUMAN:
        message = f"You start with {format_card(human_top)} on your muerto"
    else:
        message = f"The opponent starts with {format_card(cpu_top)} on its muerto"
    return state, message


def collect_cards(state: GameState) -> List[Card]:
    """Every card in play, across all zones."""
    cards = list(state.draw_pile)
    for column in state.central_columns:
        cards.extend(column.cards)
    for player in state.players.values():
        cards.extend(player.muerto)
        cards.extend(player.hand)
        for aux in player.aux_columns:
            cards.extend(aux)
    return cards


def validate_card_integrity(state: GameState) -> bool:
    """
    Check that both decks are accounted for exactly once.

    Args:
        state: Game state to validate

    Returns:
        True if all 104 cards are present with no duplicates
    """
    expected = {c.id for c in create_deck(MUERTO_DECK)} | {c.id for c in create_deck(DRAW_DECK)}
    all_ids = [c.id for c in collect_cards(state)]
    actual = set(all_ids)
    return (
        len(all_ids) == len(actual) and  # No duplicates
        actual == expected
    )
