"""
Greedy bot implementation with the opponent's priority heuristics.
"""

import logging
from typing import List, Optional, Sequence, Tuple

from .base import BaseBot, BotAction
from ..comparator import comparison_value, format_card, highest_card, sort_hand
from ..constants import ACE, EMPTY_COLUMN, KING, QUEEN
from ..models import Card, CentralColumn, GameState, Player
from ..rules import (
    can_play_on_central,
    can_play_on_opponent_muerto,
    get_candidate_cards,
    get_next_top_value,
    is_column_complete,
)

logger = logging.getLogger(__name__)

TARGET_OPPONENT = 'opponent'
TARGET_AUX = 'aux'


def will_gift_opponent(new_top_value: int, opponent: Player) -> bool:
    """
    Check if leaving a column at new_top_value hands the opponent its next card.

    Kings don't count: they are playable anywhere, so nothing is gifted.
    """
    if new_top_value == EMPTY_COLUMN or is_column_complete(new_top_value):
        return False
    needed = new_top_value + 1
    return any(card.value == needed for card in get_candidate_cards(opponent))


def best_central_column(card: Card, central_columns: Sequence[CentralColumn]) -> int:
    """
    Index of the furthest-along column that accepts the card, or -1.

    Ties go to the lowest index.
    """
    best = -1
    best_top = -1
    for i, column in enumerate(central_columns):
        if can_play_on_central(card, column) and column.top_value > best_top:
            best_top = column.top_value
            best = i
    return best


def find_best_hand_play(
    hand: Sequence[Card],
    central_columns: Sequence[CentralColumn],
    opponent: Player
) -> Optional[Tuple[Card, int]]:
    """
    Pick a hand card for a central column.

    Scans Ace first then ascending and takes the first play that gifts the
    opponent nothing, else the first legal play.
    """
    gifting_fallback = None
    for card in sort_hand(hand):
        column_index = best_central_column(card, central_columns)
        if column_index == -1:
            continue
        new_top = get_next_top_value(card, central_columns[column_index])
        if not will_gift_opponent(new_top, opponent):
            return card, column_index
        if gifting_fallback is None:
            gifting_fallback = (card, column_index)
    return gifting_fallback


def find_enabling_aux_play(
    aux_columns: Sequence[Sequence[Card]],
    central_columns: Sequence[CentralColumn],
    muerto_top: Optional[Card]
) -> Optional[Tuple[Card, int]]:
    """
    Pick an aux top whose play lets the muerto top follow it onto the same column.
    """
    if muerto_top is None:
        return None

    for aux in aux_columns:
        if not aux:
            continue
        top = aux[-1]
        column_index = best_central_column(top, central_columns)
        if column_index == -1:
            continue

        # A King on the muerto fits any active column
        if muerto_top.value == KING:
            return top, column_index

        new_top = get_next_top_value(top, central_columns[column_index])
        if is_column_complete(new_top):
            # Column recycles and reopens only with an Ace
            if muerto_top.value == ACE:
                return top, column_index
        elif muerto_top.value == new_top + 1:
            return top, column_index
    return None


def find_any_aux_play(
    aux_columns: Sequence[Sequence[Card]],
    central_columns: Sequence[CentralColumn],
    opponent: Player
) -> Optional[Tuple[Card, int]]:
    """
    Pick any aux top for a central column.

    Non-gifting plays beat gifting ones; within each group the furthest-along
    destination wins, ties going to the earlier aux column.
    """
    best_non_gifting = None
    best_non_gifting_top = -1
    best_gifting = None
    best_gifting_top = -1

    for aux in aux_columns:
        if not aux:
            continue
        top = aux[-1]
        column_index = best_central_column(top, central_columns)
        if column_index == -1:
            continue
        column_top = central_columns[column_index].top_value
        new_top = get_next_top_value(top, central_columns[column_index])

        if not will_gift_opponent(new_top, opponent):
            if column_top > best_non_gifting_top:
                best_non_gifting_top = column_top
                best_non_gifting = (top, column_index)
        elif column_top > best_gifting_top:
            best_gifting_top = column_top
            best_gifting = (top, column_index)

    return best_non_gifting or best_gifting


def choose_card_for_aux(hand: Sequence[Card]) -> Optional[Card]:
    """
    Pick the hand card to store: a Queen if any, else the highest card.

    Aces never go to aux, so a hand of Aces yields None.
    """
    pool = [card for card in hand if card.value != ACE]
    if not pool:
        return None
    for card in pool:
        if card.value == QUEEN:
            return card
    return highest_card(pool)


def choose_interference_card(
    hand: Sequence[Card],
    aux_columns: Sequence[Sequence[Card]],
    opponent_muerto_top: Optional[Card]
) -> Optional[Tuple[Card, str]]:
    """
    Decide what to do with a card when no central move exists.

    Returns:
        (card, 'opponent') to push onto the opponent's muerto,
        (card, 'aux') to store in an own aux column, or None if only Aces
        are left
    """
    if opponent_muerto_top is not None:
        candidates: List[Card] = [
            card for card in hand
            if can_play_on_opponent_muerto(card, opponent_muerto_top)
        ]
        for aux in aux_columns:
            if aux and can_play_on_opponent_muerto(aux[-1], opponent_muerto_top):
                candidates.append(aux[-1])

        if candidates:
            for card in candidates:
                if card.value == QUEEN:
                    return card, TARGET_OPPONENT
            return highest_card(candidates), TARGET_OPPONENT

    card = choose_card_for_aux(hand)
    if card is None:
        return None
    return card, TARGET_AUX


def choose_aux_column(card: Card, aux_columns: Sequence[Sequence[Card]]) -> int:
    """
    Pick the aux column to store a card in.

    Prefers the column whose top is closest above the card, keeping stacks
    descending; otherwise the first empty column, otherwise the shortest.
    """
    best_index = -1
    best_diff = None
    card_value = comparison_value(card.value)

    for i, aux in enumerate(aux_columns):
        if not aux:
            continue
        top_value = comparison_value(aux[-1].value)
        if top_value > card_value:
            diff = top_value - card_value
            if best_diff is None or diff < best_diff:
                best_diff = diff
                best_index = i

    if best_index != -1:
        return best_index
    for i, aux in enumerate(aux_columns):
        if not aux:
            return i
    return min(range(len(aux_columns)), key=lambda i: len(aux_columns[i]))


class GreedyBot(BaseBot):
    """
    Greedy bot that applies a fixed priority list, one move at a time.

    Strategy:
    - Clear the muerto top onto the furthest-along column
    - Play hand cards, avoiding plays that hand the opponent its next card
    - Play aux tops that set up the muerto top
    - Play any other aux top
    - Otherwise push a card onto the opponent's muerto, or store one in aux

    No lookahead and no randomness: the same state gives the same action.
    """

    def choose_action(self, state: GameState) -> Optional[BotAction]:
        """Choose the next action for the current state."""
        if not self.is_my_turn(state):
            return None

        me = self.get_player(state)
        opponent = self.get_opponent(state)
        columns = state.central_columns

        # 1. Clear the muerto
        muerto_top = me.muerto_top
        if muerto_top is not None:
            column_index = best_central_column(muerto_top, columns)
            if column_index != -1:
                return self._decide(BotAction.central(muerto_top.id, column_index, "clear muerto"))

        # 2. Hand to central
        play = find_best_hand_play(me.hand, columns, opponent)
        if play:
            card, column_index = play
            return self._decide(BotAction.central(card.id, column_index, "hand to central"))

        # 3. Aux to central, setting up the muerto top
        play = find_enabling_aux_play(me.aux_columns, columns, muerto_top)
        if play:
            card, column_index = play
            return self._decide(BotAction.central(card.id, column_index, "aux enables muerto"))

        # 4. Any aux to central
        play = find_any_aux_play(me.aux_columns, columns, opponent)
        if play:
            card, column_index = play
            return self._decide(BotAction.central(card.id, column_index, "aux to central"))

        # 5. Interference or hoarding
        if me.hand:
            choice = choose_interference_card(me.hand, me.aux_columns, opponent.muerto_top)
            if choice is None:
                return self._decide(BotAction.end_turn("only Aces left"))
            card, target = choice
            if target == TARGET_OPPONENT:
                return self._decide(BotAction.opponent_muerto(card.id, f"interfere with {format_card(card)}"))
            aux_index = choose_aux_column(card, me.aux_columns)
            return self._decide(BotAction.aux(card.id, self.player_id, aux_index, f"store {format_card(card)}"))

        # 6. Nothing to do
        return self._decide(BotAction.end_turn("empty hand"))

    def _decide(self, action: BotAction) -> BotAction:
        logger.debug(f"Bot {self.player_id} chose {action!r} ({action.reason})")
        return action
