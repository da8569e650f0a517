# engine_py/src/muertito_engine/errors.py

class GameError(Exception):
    """Base exception for game-related errors."""
    def __init__(self, code: str, message: str):
        self.code = code
        self.message = message
        super().__init__(f"[{code}] {message}")


class SnapshotError(GameError):
    """A stored snapshot is corrupt, incomplete or from another schema version."""
    def __init__(self, message: str):
        super().__init__(INVALID_SNAPSHOT, message)


# Specific error codes
GAME_OVER = "GAME_OVER"
NOT_YOUR_TURN = "NOT_YOUR_TURN"
INVALID_PLAYER = "INVALID_PLAYER"
CARD_NOT_FOUND = "CARD_NOT_FOUND"
INVALID_COLUMN = "INVALID_COLUMN"
ILLEGAL_CENTRAL_PLAY = "ILLEGAL_CENTRAL_PLAY"
ONLY_HAND_TO_AUX = "ONLY_HAND_TO_AUX"
ACE_NOT_IN_AUX = "ACE_NOT_IN_AUX"
INTERFERENCE_UNAVAILABLE = "INTERFERENCE_UNAVAILABLE"
AUX_ORDER = "AUX_ORDER"
ONLY_HAND_OR_AUX_TO_MUERTO = "ONLY_HAND_OR_AUX_TO_MUERTO"
OPPONENT_MUERTO_EMPTY = "OPPONENT_MUERTO_EMPTY"
ILLEGAL_MUERTO_PLAY = "ILLEGAL_MUERTO_PLAY"
MUST_PLAY_ACE = "MUST_PLAY_ACE"
INVALID_SNAPSHOT = "INVALID_SNAPSHOT"
