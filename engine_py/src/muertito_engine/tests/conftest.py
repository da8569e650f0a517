"""
Pytest fixtures and table builders for engine tests.
"""

from typing import Iterable, List, Optional, Sequence

import pytest

from muertito_engine.config import create_config
from muertito_engine.constants import CPU, HUMAN, PHASE_PLAYING, PLAYER_COLORS
from muertito_engine.engine import MuertitoEngine
from muertito_engine.models import Card, CentralColumn, GameState, Player, UiState
from muertito_engine.storage import MemoryStore


def card(value: int, suit: str = 'spades', deck: str = '2') -> Card:
    """A card with the engine's id scheme."""
    return Card(id=f"{deck}-{suit}-{value}", suit=suit, value=value)


def column(top_value: int, suit: str = 'clubs', deck: str = 'c') -> CentralColumn:
    """A central column built up from the Ace to top_value."""
    cards = [card(v, suit, deck) for v in range(1, top_value + 1)]
    return CentralColumn(cards=cards, top_value=top_value)


def make_state(
    human_hand: Iterable[Card] = (),
    cpu_hand: Iterable[Card] = (),
    human_muerto: Iterable[Card] = (),
    cpu_muerto: Iterable[Card] = (),
    columns: Optional[Sequence[CentralColumn]] = None,
    draw_pile: Iterable[Card] = (),
    turn: str = HUMAN,
    human_aux: Optional[List[List[Card]]] = None,
    cpu_aux: Optional[List[List[Card]]] = None,
) -> GameState:
    """Build a game state from explicit zones; muerto tops are the last cards."""
    if columns is None:
        columns = [CentralColumn(), CentralColumn(), CentralColumn()]
    return GameState(
        draw_pile=list(draw_pile),
        central_columns=list(columns),
        players={
            HUMAN: Player(
                id=HUMAN, color=PLAYER_COLORS[HUMAN],
                muerto=list(human_muerto), hand=list(human_hand),
                aux_columns=human_aux or [[], [], []],
            ),
            CPU: Player(
                id=CPU, color=PLAYER_COLORS[CPU],
                muerto=list(cpu_muerto), hand=list(cpu_hand),
                aux_columns=cpu_aux or [[], [], []],
            ),
        },
        current_turn=turn,
        phase=PHASE_PLAYING,
    )


def engine_with(state: GameState, seed: int = 7) -> MuertitoEngine:
    """An engine playing the given state, with an in-memory store."""
    engine = MuertitoEngine(config=create_config(seed=seed), store=MemoryStore())
    engine.state = state
    engine.ui = UiState()
    return engine


@pytest.fixture
def engine() -> MuertitoEngine:
    """A freshly dealt, seeded game."""
    engine = MuertitoEngine(config=create_config(seed=42), store=MemoryStore())
    engine.init_game(force_new=True)
    return engine
