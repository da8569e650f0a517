"""
Snapshot serialization and sanitization utilities.
"""

from typing import Any, Dict, List, Optional

import orjson
from pydantic import BaseModel, Field, ValidationError, field_validator

from .constants import (
    AUX_COLUMN_COUNT,
    CENTRAL_COLUMN_COUNT,
    PHASE_GAMEOVER,
    PHASE_PLAYING,
    PLAYER_IDS,
    STATE_VERSION,
    SUITS,
    WINNER_DRAW,
)
from .errors import SnapshotError
from .models import Card, CentralColumn, GameState, Player


class CardModel(BaseModel):
    id: str = Field(..., min_length=1)
    suit: str
    value: int = Field(..., ge=1, le=13)
    color: Optional[str] = None

    @field_validator('suit')
    @classmethod
    def validate_suit(cls, v):
        if v not in SUITS:
            raise ValueError(f'unknown suit: {v}')
        return v


class CentralColumnModel(BaseModel):
    cards: List[CardModel] = Field(default_factory=list)
    topValue: int = Field(..., ge=0)


class PlayerModel(BaseModel):
    id: str
    color: str
    muerto: List[CardModel]
    hand: List[CardModel]
    auxColumns: List[List[CardModel]] = Field(..., min_length=AUX_COLUMN_COUNT, max_length=AUX_COLUMN_COUNT)


class SnapshotModel(BaseModel):
    """Persisted layout of a game."""
    version: int
    drawPile: List[CardModel]
    centralColumns: List[CentralColumnModel] = Field(
        ..., min_length=CENTRAL_COLUMN_COUNT, max_length=CENTRAL_COLUMN_COUNT
    )
    players: Dict[str, PlayerModel]
    currentTurn: str
    phase: str
    winner: Optional[str] = None
    message: str = ''

    @field_validator('players')
    @classmethod
    def validate_players(cls, v):
        if set(v) != set(PLAYER_IDS):
            raise ValueError(f'players must be exactly {PLAYER_IDS}')
        return v

    @field_validator('currentTurn')
    @classmethod
    def validate_turn(cls, v):
        if v not in PLAYER_IDS:
            raise ValueError(f'unknown player: {v}')
        return v

    @field_validator('phase')
    @classmethod
    def validate_phase(cls, v):
        if v not in (PHASE_PLAYING, PHASE_GAMEOVER):
            raise ValueError(f'unknown phase: {v}')
        return v

    @field_validator('winner')
    @classmethod
    def validate_winner(cls, v):
        if v is not None and v not in PLAYER_IDS + (WINNER_DRAW,):
            raise ValueError(f'unknown winner: {v}')
        return v


def _card_to_dict(card: Card) -> Dict[str, Any]:
    return {"id": card.id, "suit": card.suit, "value": card.value, "color": card.color}


def _card_from_model(model: CardModel) -> Card:
    return Card(id=model.id, suit=model.suit, value=model.value)


def state_to_snapshot(state: GameState, message: str = '') -> Dict[str, Any]:
    """
    Build the persisted snapshot of a game state.

    Args:
        state: Game state to persist
        message: Current status message, restored on resume

    Returns:
        JSON-compatible snapshot dictionary
    """
    return {
        "version": state.version,
        "drawPile": [_card_to_dict(c) for c in state.draw_pile],
        "centralColumns": [
            {"cards": [_card_to_dict(c) for c in col.cards], "topValue": col.top_value}
            for col in state.central_columns
        ],
        "players": {
            player_id: {
                "id": player.id,
                "color": player.color,
                "muerto": [_card_to_dict(c) for c in player.muerto],
                "hand": [_card_to_dict(c) for c in player.hand],
                "auxColumns": [[_card_to_dict(c) for c in aux] for aux in player.aux_columns],
            }
            for player_id, player in state.players.items()
        },
        "currentTurn": state.current_turn,
        "phase": state.phase,
        "winner": state.winner,
        "message": message,
    }


def state_from_snapshot(data: Any) -> GameState:
    """
    Rebuild a game state from a snapshot.

    Raises:
        SnapshotError: if the snapshot is incomplete, malformed or from
            another schema version
    """
    if not isinstance(data, dict):
        raise SnapshotError("Snapshot is not an object")
    for key in ("players", "centralColumns", "drawPile"):
        if data.get(key) is None:
            raise SnapshotError(f"Snapshot is missing {key}")
    if data.get("version") != STATE_VERSION:
        raise SnapshotError(
            f"Snapshot version {data.get('version')} does not match {STATE_VERSION}"
        )

    try:
        snapshot = SnapshotModel.model_validate(data)
    except ValidationError as e:
        raise SnapshotError(f"Malformed snapshot: {e.error_count()} errors") from e

    players = {}
    for player_id, model in snapshot.players.items():
        players[player_id] = Player(
            id=player_id,
            color=model.color,
            muerto=[_card_from_model(c) for c in model.muerto],
            hand=[_card_from_model(c) for c in model.hand],
            aux_columns=[[_card_from_model(c) for c in aux] for aux in model.auxColumns],
        )

    return GameState(
        draw_pile=[_card_from_model(c) for c in snapshot.drawPile],
        central_columns=[
            CentralColumn(cards=[_card_from_model(c) for c in col.cards], top_value=col.topValue)
            for col in snapshot.centralColumns
        ],
        players=players,
        current_turn=snapshot.currentTurn,
        phase=snapshot.phase,
        winner=snapshot.winner,
        version=snapshot.version,
    )


def snapshot_message(data: Any) -> str:
    """Status message stored alongside a snapshot, if any."""
    if isinstance(data, dict) and isinstance(data.get("message"), str):
        return data["message"]
    return ''


def dumps_snapshot(state: GameState, message: str = '') -> bytes:
    """Serialize a game state to JSON bytes."""
    return orjson.dumps(state_to_snapshot(state, message))


def loads_snapshot(raw: bytes) -> Dict[str, Any]:
    """
    Parse snapshot bytes.

    Raises:
        SnapshotError: if the bytes are not valid JSON
    """
    try:
        return orjson.loads(raw)
    except orjson.JSONDecodeError as e:
        raise SnapshotError(f"Snapshot is not valid JSON: {e}") from e


def sanitize_state(state: GameState, viewer_id: Optional[str] = None) -> Dict[str, Any]:
    """
    Sanitize game state for display to one player.

    Args:
        state: Game state to sanitize
        viewer_id: ID of the player viewing the state (to show their cards)

    Returns:
        Sanitized state dictionary; hands other than the viewer's are
        reduced to a count, everything on the table stays visible
    """
    sanitized = {
        "version": state.version,
        "phase": state.phase,
        "turn": state.current_turn,
        "winner": state.winner,
        "draw_pile_count": len(state.draw_pile),
        "central_columns": [
            {
                "top_value": col.top_value,
                "top_card": _card_to_dict(col.cards[-1]) if col.cards else None,
                "card_count": len(col.cards),
            }
            for col in state.central_columns
        ],
        "players": {},
    }

    for player_id, player in state.players.items():
        top = player.muerto_top
        sanitized_player = {
            "id": player.id,
            "color": player.color,
            "muerto_count": len(player.muerto),
            "muerto_top": _card_to_dict(top) if top else None,
            "hand_count": len(player.hand),
            "aux_columns": [[_card_to_dict(c) for c in aux] for aux in player.aux_columns],
        }

        # Show full hand only to the viewer
        if player_id == viewer_id:
            sanitized_player["hand"] = [_card_to_dict(c) for c in player.hand]

        sanitized["players"][player_id] = sanitized_player

    return sanitized
