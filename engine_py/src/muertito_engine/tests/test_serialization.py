"""
Test snapshots, stores and resuming a saved game.
"""

import orjson
import pytest

from muertito_engine.config import create_config
from muertito_engine.constants import CPU, HUMAN, PHASE_GAMEOVER, STATE_VERSION
from muertito_engine.engine import MuertitoEngine
from muertito_engine.errors import INVALID_SNAPSHOT, SnapshotError
from muertito_engine.serialization import (
    dumps_snapshot,
    loads_snapshot,
    sanitize_state,
    snapshot_message,
    state_from_snapshot,
    state_to_snapshot,
)
from muertito_engine.shuffle import validate_card_integrity
from muertito_engine.storage import FileStore, MemoryStore

from conftest import card, column, make_state


def sample_state():
    return make_state(
        human_hand=[card(9, 'hearts'), card(1)],
        cpu_hand=[card(4, 'clubs')],
        human_muerto=[card(3, 'hearts', '1'), card(8, 'diamonds', '1')],
        cpu_muerto=[card(7, 'clubs', '1')],
        columns=[column(5), column(2, 'diamonds', 'd'), column(0)],
        draw_pile=[card(10, 'diamonds'), card(6, 'spades')],
        turn=CPU,
        human_aux=[[card(12, 'clubs')], [], [card(13, 'hearts'), card(11, 'hearts')]],
    )


def test_snapshot_layout():
    snapshot = state_to_snapshot(sample_state(), "Opponent's turn")

    assert set(snapshot) == {
        'version', 'drawPile', 'centralColumns', 'players', 'currentTurn', 'phase', 'winner', 'message'
    }
    assert snapshot['version'] == STATE_VERSION
    assert snapshot['drawPile'][0] == {'id': '2-diamonds-10', 'suit': 'diamonds', 'value': 10, 'color': 'red'}
    assert snapshot['centralColumns'][0]['topValue'] == 5
    assert snapshot['players'][HUMAN]['auxColumns'][2][-1]['id'] == '2-hearts-11'
    assert snapshot['currentTurn'] == CPU
    assert snapshot['message'] == "Opponent's turn"


def test_snapshot_round_trip():
    state = sample_state()
    restored = state_from_snapshot(loads_snapshot(dumps_snapshot(state)))
    assert restored == state


def test_snapshot_keeps_game_over():
    state = sample_state()
    state.phase = PHASE_GAMEOVER
    state.winner = HUMAN
    restored = state_from_snapshot(state_to_snapshot(state))
    assert restored.phase == PHASE_GAMEOVER
    assert restored.winner == HUMAN


def test_version_mismatch_rejected():
    snapshot = state_to_snapshot(sample_state())
    snapshot['version'] = STATE_VERSION - 1
    with pytest.raises(SnapshotError) as exc_info:
        state_from_snapshot(snapshot)
    assert exc_info.value.code == INVALID_SNAPSHOT


@pytest.mark.parametrize("key", ['players', 'centralColumns', 'drawPile'])
def test_incomplete_snapshot_rejected(key):
    snapshot = state_to_snapshot(sample_state())
    del snapshot[key]
    with pytest.raises(SnapshotError):
        state_from_snapshot(snapshot)


def test_empty_draw_pile_is_valid():
    state = sample_state()
    state.draw_pile = []
    assert state_from_snapshot(state_to_snapshot(state)).draw_pile == []


def test_malformed_snapshot_rejected():
    snapshot = state_to_snapshot(sample_state())
    snapshot['players'].pop(CPU)
    with pytest.raises(SnapshotError):
        state_from_snapshot(snapshot)

    snapshot = state_to_snapshot(sample_state())
    snapshot['centralColumns'].pop()
    with pytest.raises(SnapshotError):
        state_from_snapshot(snapshot)

    snapshot = state_to_snapshot(sample_state())
    snapshot['drawPile'][0]['value'] = 14
    with pytest.raises(SnapshotError):
        state_from_snapshot(snapshot)


def test_non_object_rejected():
    with pytest.raises(SnapshotError):
        state_from_snapshot([1, 2, 3])


def test_invalid_json_rejected():
    with pytest.raises(SnapshotError):
        loads_snapshot(b'{"version": 2,')


def test_snapshot_message():
    assert snapshot_message({'message': 'Your turn'}) == 'Your turn'
    assert snapshot_message({'message': 3}) == ''
    assert snapshot_message(None) == ''


def test_sanitize_hides_other_hand():
    state = sample_state()
    view = sanitize_state(state, HUMAN)

    assert view['players'][HUMAN]['hand'][0]['id'] == '2-hearts-9'
    assert 'hand' not in view['players'][CPU]
    assert view['players'][CPU]['hand_count'] == 1
    assert view['players'][CPU]['muerto_top']['id'] == '1-clubs-7'
    assert view['players'][HUMAN]['muerto_count'] == 2
    assert view['draw_pile_count'] == 2
    assert view['central_columns'][0]['top_card']['value'] == 5
    assert view['central_columns'][2]['top_card'] is None


def test_sanitize_without_viewer_hides_all_hands():
    view = sanitize_state(sample_state())
    assert all('hand' not in p for p in view['players'].values())


def test_sanitize_is_json_serializable():
    orjson.dumps(sanitize_state(sample_state(), CPU))


# Stores

def test_memory_store():
    store = MemoryStore()
    assert store.load() is None
    store.save(b'abc')
    assert store.load() == b'abc'
    store.clear()
    assert store.load() is None


def test_file_store(tmp_path):
    path = tmp_path / 'saves' / 'game.json'
    store = FileStore(str(path))

    assert store.load() is None
    store.save(b'{"a": 1}')
    assert path.read_bytes() == b'{"a": 1}'
    assert store.load() == b'{"a": 1}'
    store.clear()
    assert not path.exists()
    store.clear()


# Resuming

def test_new_game_is_autosaved():
    store = MemoryStore()
    engine = MuertitoEngine(config=create_config(seed=3), store=store)
    engine.init_game()

    saved = state_from_snapshot(loads_snapshot(store.load()))
    assert saved == engine.state


def test_resume_from_store():
    store = MemoryStore(dumps_snapshot(sample_state(), "Opponent's turn"))
    engine = MuertitoEngine(config=create_config(seed=3), store=store)

    state = engine.init_game()

    assert state == sample_state()
    assert engine.ui.message == "Opponent's turn"
    assert engine.ui.selected_card_id is None
    assert not engine.ui.must_place_in_aux
    assert engine.is_opponent_turn


def test_resume_recomputes_stuck_flag():
    state = sample_state()
    state.current_turn = HUMAN
    state.central_columns = [column(3), column(3, 'diamonds', 'd'), column(3, 'spades', 's')]
    engine = MuertitoEngine(config=create_config(seed=3), store=MemoryStore(dumps_snapshot(state)))

    engine.init_game()

    assert engine.ui.must_place_in_aux


@pytest.mark.parametrize("raw", [
    b'not json',
    b'[]',
    b'{"version": 2}',
    orjson.dumps({**state_to_snapshot(make_state()), 'version': 1}),
])
def test_bad_snapshot_starts_new_game(raw):
    store = MemoryStore(raw)
    engine = MuertitoEngine(config=create_config(seed=3), store=store)

    state = engine.init_game()

    assert len(state.players[HUMAN].muerto) == 26
    assert validate_card_integrity(state)
    assert loads_snapshot(store.load())['version'] == STATE_VERSION


def test_force_new_ignores_store():
    store = MemoryStore(dumps_snapshot(sample_state()))
    engine = MuertitoEngine(config=create_config(seed=3), store=store)
    state = engine.init_game(force_new=True)
    assert len(state.draw_pile) == 42


def test_moves_are_autosaved():
    store = MemoryStore()
    engine = MuertitoEngine(config=create_config(seed=3), store=store)
    engine.init_game(force_new=True)
    engine.state = sample_state()
    engine.state.current_turn = HUMAN

    ok, _ = engine.play_to_central(HUMAN, card(1).id, 2)

    assert ok
    saved = loads_snapshot(store.load())
    assert saved['centralColumns'][2]['topValue'] == 1
    assert saved['message'] == engine.ui.message


def test_autosave_disabled():
    store = MemoryStore()
    engine = MuertitoEngine(config=create_config(seed=3, autosave=False), store=store)
    engine.init_game()
    assert store.load() is None


def test_file_backed_engine_resumes(tmp_path):
    config = create_config(seed=11, save_path=str(tmp_path / 'muertito.json'))
    first = MuertitoEngine(config=config)
    first.init_game()

    second = MuertitoEngine(config=config)
    assert second.init_game() == first.state
