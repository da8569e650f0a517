"""Game constants"""

from typing import Dict

SUITS = ['hearts', 'diamonds', 'spades', 'clubs']
SUIT_SYMBOLS = {'hearts': '♥', 'diamonds': '♦', 'spades': '♠', 'clubs': '♣'}
RED_SUITS = ('hearts', 'diamonds')

COLOR_RED = 'red'
COLOR_BLACK = 'black'

# 1=A, 2-10, 11=J, 12=Q, 13=K
ACE = 1
JACK = 11
QUEEN = 12
KING = 13
VALUES = list(range(ACE, KING + 1))
VALUE_LABELS: Dict[int, str] = {ACE: 'A', JACK: 'J', QUEEN: 'Q', KING: 'K'}

# Deck prefixes keep the two physical decks apart in card ids
MUERTO_DECK = '1'
DRAW_DECK = '2'

# Players
HUMAN = 'human'
CPU = 'cpu'
PLAYER_IDS = (HUMAN, CPU)
PRIMARY_PLAYER = HUMAN
PLAYER_COLORS = {HUMAN: COLOR_RED, CPU: COLOR_BLACK}

# Phases and results
PHASE_PLAYING = 'playing'
PHASE_GAMEOVER = 'gameover'
WINNER_DRAW = 'draw'

# Table layout
HAND_SIZE = 5
CENTRAL_COLUMN_COUNT = 3
AUX_COLUMN_COUNT = 3

# Central column top values
EMPTY_COLUMN = 0
COMPLETE_VALUE = QUEEN

# The muerto top that unlocks aux interference
INTERFERENCE_SUIT = 'hearts'
INTERFERENCE_VALUE = 4

# Card sources
SOURCE_HAND = 'hand'
SOURCE_AUX = 'aux'
SOURCE_MUERTO = 'muerto'

# Bump this when the snapshot schema changes to invalidate old saved games
STATE_VERSION = 2
