"""
Test move validation error codes and messages.
"""

import pytest

from muertito_engine import errors
from muertito_engine.constants import CPU, HUMAN, PHASE_GAMEOVER, SOURCE_AUX, SOURCE_HAND
from muertito_engine.models import CentralColumn
from muertito_engine.validate import (
    validate_aux_play,
    validate_central_play,
    validate_end_turn,
    validate_opponent_muerto_play,
    validate_turn,
)

from conftest import card, column, make_state


@pytest.fixture
def state():
    return make_state(
        human_hand=[card(1), card(8), card(5, 'hearts')],
        human_muerto=[card(3, 'hearts', '1')],
        human_aux=[[card(10)], [], []],
        cpu_muerto=[card(6, 'hearts', '1')],
        cpu_aux=[[card(9, 'clubs')], [], []],
        columns=[column(6), CentralColumn(), column(2, 'diamonds', 'd')],
    )


def test_validate_turn(state):
    assert validate_turn(state, HUMAN).valid
    assert validate_turn(state, CPU).error_code == errors.NOT_YOUR_TURN
    assert validate_turn(state, 'dealer').error_code == errors.INVALID_PLAYER
    state.phase = PHASE_GAMEOVER
    assert validate_turn(state, HUMAN).error_code == errors.GAME_OVER


def test_central_success_carries_location(state):
    result = validate_central_play(state, HUMAN, card(10).id, 1)
    assert result.error_code == errors.ILLEGAL_CENTRAL_PLAY

    result = validate_central_play(state, HUMAN, card(1).id, 1)
    assert result.valid
    assert result.location.source == SOURCE_HAND
    assert result.location.source_index == 0


@pytest.mark.parametrize("card_id, column_index, code, text", [
    ('2-spades-8', 0, errors.ILLEGAL_CENTRAL_PLAY, "You need a 7 or a K here, not a 8"),
    ('2-spades-8', 1, errors.ILLEGAL_CENTRAL_PLAY, "You need an Ace to open this column, not a 8"),
    ('2-spades-8', 5, errors.INVALID_COLUMN, "No central column 5"),
    ('2-hearts-13', 0, errors.CARD_NOT_FOUND, "That card can't be played right now"),
])
def test_central_errors(state, card_id, column_index, code, text):
    result = validate_central_play(state, HUMAN, card_id, column_index)
    assert not result.valid
    assert result.error_code == code
    assert result.error_message == text


def test_aux_errors(state):
    assert validate_aux_play(state, HUMAN, card(1).id, HUMAN, 1).error_code == errors.ACE_NOT_IN_AUX
    assert validate_aux_play(state, HUMAN, card(10).id, HUMAN, 1).error_code == errors.ONLY_HAND_TO_AUX
    assert validate_aux_play(state, HUMAN, card(8).id, HUMAN, 3).error_code == errors.INVALID_COLUMN
    assert validate_aux_play(state, HUMAN, card(8).id, 'dealer', 0).error_code == errors.INVALID_PLAYER
    assert validate_aux_play(state, HUMAN, card(8).id, CPU, 0).error_code == errors.INTERFERENCE_UNAVAILABLE

    result = validate_aux_play(state, HUMAN, card(8).id, HUMAN, 0)
    assert result.valid
    assert result.location.source == SOURCE_HAND


def test_interference_order(state):
    state.players[CPU].muerto.append(card(4, 'hearts', '1'))
    assert validate_aux_play(state, HUMAN, card(8).id, CPU, 0).valid
    assert validate_aux_play(state, HUMAN, card(8).id, CPU, 1).valid
    state.players[HUMAN].hand.append(card(9, 'diamonds'))
    assert validate_aux_play(state, HUMAN, card(9, 'diamonds').id, CPU, 0).error_code == errors.AUX_ORDER


def test_opponent_muerto_errors(state):
    result = validate_opponent_muerto_play(state, HUMAN, card(5, 'hearts').id)
    assert result.valid

    result = validate_opponent_muerto_play(state, HUMAN, card(8).id)
    assert result.error_code == errors.ILLEGAL_MUERTO_PLAY
    assert result.error_message == "On 6♥ you can only place 5♥ or 7♥"

    result = validate_opponent_muerto_play(state, HUMAN, card(3, 'hearts', '1').id)
    assert result.error_code == errors.ONLY_HAND_OR_AUX_TO_MUERTO

    state.players[CPU].muerto.clear()
    result = validate_opponent_muerto_play(state, HUMAN, card(5, 'hearts').id)
    assert result.error_code == errors.OPPONENT_MUERTO_EMPTY


def test_opponent_muerto_options_at_edges(state):
    state.players[CPU].muerto.append(card(1, 'clubs', '1'))
    assert validate_opponent_muerto_play(state, HUMAN, card(8).id).error_message == "On A♣ you can only place 2♣"
    state.players[CPU].muerto.append(card(13, 'clubs', '1'))
    assert validate_opponent_muerto_play(state, HUMAN, card(8).id).error_message == "On K♣ you can only place Q♣"


def test_aux_top_can_go_to_opponent_muerto(state):
    state.players[CPU].muerto.append(card(11, 'spades', '1'))
    result = validate_opponent_muerto_play(state, HUMAN, card(10).id)
    assert result.valid
    assert result.location.source == SOURCE_AUX


def test_end_turn(state):
    result = validate_end_turn(state)
    assert result.error_code == errors.MUST_PLAY_ACE

    state.players[HUMAN].hand.pop(0)
    assert validate_end_turn(state).valid

    state.phase = PHASE_GAMEOVER
    assert validate_end_turn(state).error_code == errors.GAME_OVER
