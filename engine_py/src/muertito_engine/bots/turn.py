"""
Driving a bot through a full turn.

The bot decides on the current state, the move is applied through the
GameActions interface, and the next decision reads the updated state. Pacing
is left to the caller: the synchronous runner applies everything at once,
the async runner sleeps before each move.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Iterator, List

from .base import ACTION_END_TURN, BaseBot, BotAction, GameActions, apply_action
from ..constants import PHASE_PLAYING
from ..models import GameState

logger = logging.getLogger(__name__)

# Safety limit on moves within one turn
MAX_TURN_STEPS = 500


@dataclass
class TurnStep:
    """One applied bot move and its outcome."""
    action: BotAction
    success: bool
    message: str = ''


def _turn_is_on(state: GameState, bot: BaseBot) -> bool:
    return state.phase == PHASE_PLAYING and state.current_turn == bot.player_id


def iter_opponent_turn(actions: GameActions, state: GameState, bot: BaseBot) -> Iterator[TurnStep]:
    """
    Play the bot's turn one move at a time.

    Args:
        actions: Moves to apply the bot's decisions with
        state: The state those moves mutate (read again before every decision)
        bot: The bot whose turn it is

    Yields:
        A TurnStep per applied move, until the turn passes or the game ends
    """
    steps = 0
    while _turn_is_on(state, bot):
        if steps >= MAX_TURN_STEPS:
            logger.warning(f"Bot {bot.player_id} hit {MAX_TURN_STEPS} moves, ending turn")
            action = BotAction.end_turn("move limit")
            success, message = apply_action(actions, bot.player_id, action)
            yield TurnStep(action, success, message)
            return

        action = bot.choose_action(state)
        if action is None:
            return
        success, message = apply_action(actions, bot.player_id, action)
        steps += 1
        yield TurnStep(action, success, message)

        if success:
            continue

        logger.warning(f"Bot {bot.player_id} move {action!r} rejected: {message}")
        if action.type == ACTION_END_TURN:
            return
        fallback = BotAction.end_turn("previous move rejected")
        success, message = apply_action(actions, bot.player_id, fallback)
        yield TurnStep(fallback, success, message)
        if not success:
            return


def run_opponent_turn(actions: GameActions, state: GameState, bot: BaseBot) -> List[TurnStep]:
    """Play the bot's whole turn synchronously."""
    return list(iter_opponent_turn(actions, state, bot))


async def run_opponent_turn_async(
    actions: GameActions,
    state: GameState,
    bot: BaseBot,
    delay: float = 0.0
) -> List[TurnStep]:
    """Play the bot's whole turn, pausing before each move."""
    iterator = iter_opponent_turn(actions, state, bot)
    steps = []
    while _turn_is_on(state, bot):
        await asyncio.sleep(delay)
        step = next(iterator, None)
        if step is None:
            break
        steps.append(step)
    return steps
