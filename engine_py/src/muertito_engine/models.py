"""Game models and data structures"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .constants import (
    AUX_COLUMN_COUNT,
    COLOR_BLACK,
    COLOR_RED,
    CPU,
    EMPTY_COLUMN,
    HUMAN,
    PHASE_PLAYING,
    RED_SUITS,
    STATE_VERSION,
)


@dataclass(frozen=True)
class Card:
    id: str
    suit: str
    value: int  # 1=A ... 11=J, 12=Q, 13=K

    @property
    def color(self) -> str:
        return COLOR_RED if self.suit in RED_SUITS else COLOR_BLACK

    def __eq__(self, other):
        if not isinstance(other, Card):
            return NotImplemented
        return self.id == other.id

    def __hash__(self):
        return hash(self.id)


@dataclass
class CentralColumn:
    cards: List[Card] = field(default_factory=list)
    top_value: int = EMPTY_COLUMN  # 0=empty, 1-11=active, 12+=complete

    @property
    def is_empty(self) -> bool:
        return self.top_value == EMPTY_COLUMN

    def reset(self):
        self.cards = []
        self.top_value = EMPTY_COLUMN


@dataclass
class Player:
    id: str
    color: str
    muerto: List[Card] = field(default_factory=list)  # top = last element
    hand: List[Card] = field(default_factory=list)
    aux_columns: List[List[Card]] = field(
        default_factory=lambda: [[] for _ in range(AUX_COLUMN_COUNT)]
    )

    @property
    def muerto_top(self) -> Optional[Card]:
        return self.muerto[-1] if self.muerto else None

    def aux_top(self, index: int) -> Optional[Card]:
        column = self.aux_columns[index]
        return column[-1] if column else None


@dataclass
class GameState:
    """Rules-relevant state. Everything here is persisted."""
    draw_pile: List[Card] = field(default_factory=list)  # drawn from the front
    central_columns: List[CentralColumn] = field(default_factory=list)
    players: Dict[str, Player] = field(default_factory=dict)
    current_turn: str = HUMAN
    phase: str = PHASE_PLAYING  # playing|gameover
    winner: Optional[str] = None  # human|cpu|draw
    version: int = STATE_VERSION

    @property
    def current_player(self) -> Player:
        return self.players[self.current_turn]

    def get_opponent(self, player_id: str) -> Player:
        return self.players[CPU] if player_id == HUMAN else self.players[HUMAN]


@dataclass
class UiState:
    """Transient presentation state; dropped and rebuilt on reload."""
    selected_card_id: Optional[str] = None
    must_place_in_aux: bool = False  # primary player has no central move
    message: str = ''


@dataclass
class MoveRecord:
    actor: str
    kind: str  # central|aux|opponent_muerto|end_turn
    card_id: Optional[str] = None
    target: Optional[str] = None
    index: Optional[int] = None
