"""Game engine: owns one game and applies every move to it"""

import logging
import random
from typing import List, Optional, Tuple

from .bots.base import BaseBot, GameActions
from .bots.greedy import GreedyBot
from .bots.turn import TurnStep, run_opponent_turn, run_opponent_turn_async
from .comparator import format_card
from .config import GameConfig, default_config
from .constants import (
    CPU,
    HAND_SIZE,
    HUMAN,
    PHASE_GAMEOVER,
    PHASE_PLAYING,
    PRIMARY_PLAYER,
    WINNER_DRAW,
)
from .errors import SnapshotError
from .models import GameState, MoveRecord, UiState
from .rules import (
    find_card,
    get_next_top_value,
    has_any_central_move,
    has_player_won,
    is_column_complete,
    remove_card_from_source,
)
from .serialization import dumps_snapshot, loads_snapshot, snapshot_message, state_from_snapshot
from .shuffle import draw_cards, setup_game, shuffle_deck, validate_card_integrity
from .storage import FileStore, MemoryStore, SnapshotStore
from .validate import (
    ValidationResult,
    validate_aux_play,
    validate_central_play,
    validate_end_turn,
    validate_opponent_muerto_play,
)

logger = logging.getLogger(__name__)

PLAYER_NAMES = {HUMAN: 'You', CPU: 'The opponent'}


class MuertitoEngine(GameActions):
    """
    A single game of Muertito between the primary player and a bot.

    Every move returns (success, message). A rejected move leaves the game
    untouched; after game over every move is rejected.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        store: Optional[SnapshotStore] = None,
        bot: Optional[BaseBot] = None
    ):
        self.config = config or default_config
        self.rng = random.Random(self.config.seed)
        if store is None:
            store = FileStore(self.config.save_path) if self.config.save_path else MemoryStore()
        self.store = store
        self.bot = bot or GreedyBot(CPU)
        self.state: Optional[GameState] = None
        self.ui = UiState()
        self.game_log: List[str] = []
        self.move_history: List[MoveRecord] = []

    # -- lifecycle -----------------------------------------------------

    def init_game(self, force_new: bool = False) -> GameState:
        """
        Resume the stored game, or deal a new one.

        A stored snapshot that is corrupt, incomplete or from another schema
        version is discarded and a new game is dealt.
        """
        if not force_new:
            state, message = self._try_load_state()
            if state is not None:
                self.state = state
                self.ui = UiState(message=message or "Game restored")
                self._refresh_must_place_in_aux()
                self.game_log = ["Game restored"]
                self.move_history = []
                if not validate_card_integrity(state):
                    logger.warning("Resumed game does not hold every card exactly once")
                logger.info(f"Resumed game, turn: {state.current_turn}, phase: {state.phase}")
                return state

        self.store.clear()
        state, message = setup_game(self.rng)
        self.state = state
        self.ui = UiState(message=message)
        self.game_log = [message]
        self.move_history = []
        self._refresh_must_place_in_aux()
        logger.info(f"New game dealt, {state.current_turn} starts")
        self._autosave()
        return state

    def _try_load_state(self) -> Tuple[Optional[GameState], str]:
        raw = self.store.load()
        if not raw:
            return None, ''
        try:
            data = loads_snapshot(raw)
            return state_from_snapshot(data), snapshot_message(data)
        except SnapshotError as e:
            logger.warning(f"Discarding stored game: {e.message}")
            return None, ''

    def _require_state(self) -> GameState:
        if self.state is None:
            raise RuntimeError("No game in progress, call init_game() first")
        return self.state

    @property
    def is_opponent_turn(self) -> bool:
        state = self._require_state()
        return state.phase == PHASE_PLAYING and state.current_turn == self.bot.player_id

    # -- selection (presentation only) ---------------------------------

    def select_card(self, card_id: str) -> bool:
        """Mark one of the primary player's playable cards as selected."""
        state = self._require_state()
        if state.current_turn != PRIMARY_PLAYER or state.phase != PHASE_PLAYING:
            return False
        if not find_card(state.players[PRIMARY_PLAYER], card_id).found:
            return False
        self.ui.selected_card_id = card_id
        return True

    def deselect(self):
        self.ui.selected_card_id = None

    # -- moves ---------------------------------------------------------

    def play_to_central(self, actor: str, card_id: str, column_index: int) -> Tuple[bool, str]:
        """
        Play a hand card, aux top or muerto top onto a central column.

        The turn continues afterwards.
        """
        state = self._require_state()
        result = validate_central_play(state, actor, card_id, column_index)
        if not result.valid:
            return self._reject(actor, result)

        player = state.players[actor]
        column = state.central_columns[column_index]
        card = remove_card_from_source(player, result.location)
        column.top_value = get_next_top_value(card, column)
        column.cards.append(card)

        self.ui.selected_card_id = None
        self.ui.must_place_in_aux = False
        self._record(MoveRecord(actor, 'central', card.id, index=column_index),
                     f"{PLAYER_NAMES[actor]} played {format_card(card)} on column {column_index + 1}")
        message = f"{format_card(card)} placed on column {column_index + 1}"

        if is_column_complete(column.top_value):
            self._recycle_column(column_index)
            message = "Column complete! Its cards were shuffled into the draw pile"

        if has_player_won(player):
            return True, self._end_game(actor, f"{PLAYER_NAMES[actor]} won!")

        # Empty hand draws a new one while there is still a muerto to clear
        if not player.hand and player.muerto:
            draw_cards(state, actor, HAND_SIZE)
            message = "Hand empty, drew new cards"

        if actor == PRIMARY_PLAYER:
            if not has_any_central_move(player, state.central_columns):
                self.ui.must_place_in_aux = True
                message = "No more central moves, place a card in an aux column"
            elif not player.muerto:
                message = "Muerto cleared! Play out your hand"

        return self._accept(message)

    def play_to_aux(self, actor: str, card_id: str, target_player_id: str, aux_index: int) -> Tuple[bool, str]:
        """
        Place a hand card on an aux column (own, or the opponent's as interference).

        A successful placement ends the turn.
        """
        state = self._require_state()
        result = validate_aux_play(state, actor, card_id, target_player_id, aux_index)
        if not result.valid:
            return self._reject(actor, result)

        player = state.players[actor]
        card = remove_card_from_source(player, result.location)
        state.players[target_player_id].aux_columns[aux_index].append(card)

        self.ui.selected_card_id = None
        self.ui.must_place_in_aux = False
        whose = 'own' if target_player_id == actor else "opponent's"
        self._record(MoveRecord(actor, 'aux', card.id, target=target_player_id, index=aux_index),
                     f"{PLAYER_NAMES[actor]} placed {format_card(card)} on {whose} aux column {aux_index + 1}")

        ended, end_message = self.end_turn()
        if not ended:
            self._autosave()
        return True, end_message

    def play_to_opponent_muerto(self, actor: str, card_id: str) -> Tuple[bool, str]:
        """
        Push a hand card or aux top onto the opponent's muerto.

        The opponent's pile grows; the turn continues afterwards.
        """
        state = self._require_state()
        result = validate_opponent_muerto_play(state, actor, card_id)
        if not result.valid:
            return self._reject(actor, result)

        player = state.players[actor]
        opponent = state.get_opponent(actor)
        card = remove_card_from_source(player, result.location)
        opponent.muerto.append(card)

        message = f"{format_card(card)} sent to the opponent's muerto"
        if not player.hand and player.muerto:
            draw_cards(state, actor, HAND_SIZE)
            message = "Hand empty, drew new cards"

        self.ui.selected_card_id = None
        self.ui.must_place_in_aux = False
        self._record(MoveRecord(actor, 'opponent_muerto', card.id, target=opponent.id),
                     f"{PLAYER_NAMES[actor]} put {format_card(card)} on {opponent.id}'s muerto")

        if actor == PRIMARY_PLAYER and not has_any_central_move(player, state.central_columns):
            self.ui.must_place_in_aux = True
            message = f"{message}. No central moves left, place a card in an aux column"

        return self._accept(message)

    def end_turn(self) -> Tuple[bool, str]:
        """
        Pass the turn to the other player.

        Rejected while the current player holds an Ace and a central column
        is empty. The next player refills to a full hand, then the game ends
        if nobody can move and the draw pile is exhausted.
        """
        state = self._require_state()
        result = validate_end_turn(state)
        if not result.valid:
            return self._reject(state.current_turn, result)

        self.ui.selected_card_id = None
        self.ui.must_place_in_aux = False

        previous = state.current_turn
        state.current_turn = state.get_opponent(previous).id
        needed = HAND_SIZE - len(state.current_player.hand)
        if needed > 0 and state.draw_pile:
            draw_cards(state, state.current_turn, needed)

        self._record(MoveRecord(previous, 'end_turn'), f"{PLAYER_NAMES[previous]} ended the turn")
        logger.debug(f"Turn passed from {previous} to {state.current_turn}")

        if state.current_turn == PRIMARY_PLAYER:
            if self._refresh_must_place_in_aux():
                message = "No central moves, place a card in an aux column"
            else:
                message = "Your turn"
        else:
            message = "Opponent's turn"

        deadlock_message = self._check_deadlock()
        if deadlock_message:
            return True, deadlock_message
        return self._accept(message)

    # -- opponent ------------------------------------------------------

    def run_opponent_turn(self) -> List[TurnStep]:
        """Play the bot's whole turn at once. Does nothing if it isn't the bot's turn."""
        state = self._require_state()
        return run_opponent_turn(self, state, self.bot)

    async def run_opponent_turn_async(self, delay: Optional[float] = None) -> List[TurnStep]:
        """Play the bot's turn, pausing before each move (config.opponent_delay by default)."""
        state = self._require_state()
        if delay is None:
            delay = self.config.opponent_delay
        return await run_opponent_turn_async(self, state, self.bot, delay)

    # -- internals -----------------------------------------------------

    def _recycle_column(self, column_index: int):
        """Shuffle a completed column's cards onto the back of the draw pile."""
        state = self.state
        column = state.central_columns[column_index]
        recycled = shuffle_deck(column.cards, self.rng)
        column.reset()
        state.draw_pile.extend(recycled)
        self.game_log.append(f"Column {column_index + 1} complete, {len(recycled)} cards back in the draw pile")
        logger.info(f"Column {column_index} recycled, draw pile now {len(state.draw_pile)}")

    def _check_deadlock(self) -> Optional[str]:
        """
        End the game if the draw pile is empty and neither player can reach a column.

        Fewer muerto cards wins; equal counts are a draw.
        """
        state = self.state
        if state.phase != PHASE_PLAYING or state.draw_pile:
            return None
        if any(has_any_central_move(p, state.central_columns) for p in state.players.values()):
            return None

        human_count = len(state.players[HUMAN].muerto)
        cpu_count = len(state.players[CPU].muerto)
        counts = f"({human_count} vs {cpu_count} muerto cards)"
        if human_count < cpu_count:
            return self._end_game(HUMAN, f"Deadlock! You win {counts}")
        if cpu_count < human_count:
            return self._end_game(CPU, f"Deadlock! The opponent wins {counts}")
        return self._end_game(WINNER_DRAW, f"Deadlock! It's a draw {counts}")

    def _end_game(self, winner: str, message: str) -> str:
        state = self.state
        state.phase = PHASE_GAMEOVER
        state.winner = winner
        self.ui.selected_card_id = None
        self.ui.must_place_in_aux = False
        self.ui.message = message
        self.game_log.append(message)
        logger.info(f"Game over, winner: {winner}")
        self._autosave()
        return message

    def _refresh_must_place_in_aux(self) -> bool:
        """Flag the primary player as stuck when it is their turn and no central move exists."""
        state = self.state
        self.ui.must_place_in_aux = (
            state.phase == PHASE_PLAYING and
            state.current_turn == PRIMARY_PLAYER and
            not has_any_central_move(state.players[PRIMARY_PLAYER], state.central_columns)
        )
        return self.ui.must_place_in_aux

    def _record(self, record: MoveRecord, log_line: str):
        self.move_history.append(record)
        self.game_log.append(log_line)

    def _accept(self, message: str) -> Tuple[bool, str]:
        self.ui.message = message
        self._autosave()
        return True, message

    def _reject(self, actor: str, result: ValidationResult) -> Tuple[bool, str]:
        logger.debug(f"Rejected move by {actor}: [{result.error_code}] {result.error_message}")
        if actor == PRIMARY_PLAYER:
            self.ui.message = result.error_message
        return False, result.error_message

    def _autosave(self):
        if self.config.autosave and self.state is not None:
            self.store.save(dumps_snapshot(self.state, self.ui.message))
