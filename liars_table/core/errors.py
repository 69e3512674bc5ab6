
"""
errors.py
Defines the exceptions raised by the Liar's Dice engine. Every check runs before the
operation mutates anything, so a raised error always leaves the session untouched.
Related modules:
- engine.py: Raises these for rejected operations.
- roster.py, turns.py: Raise membership and turn-order errors.
"""


class GameError(Exception):
    """
    Base class for all engine errors.
    """
    pass


class PhaseError(GameError):
    """
    Raised when an operation does not apply to the session's current phase
    (adding players after the start, starting twice, bidding before the start).
    """
    pass


class NotExistError(GameError):
    """Raised when an operation references a player id that is not in the roster."""

    def __init__(self, player_id=None):
        self.player_id = player_id
        super().__init__("player does not exist" if player_id is None else f"player {player_id!r} does not exist")


class AlreadyExistsError(GameError):
    """Raised when add() is called with a player id already in the roster."""

    def __init__(self, player_id):
        self.player_id = player_id
        super().__init__(f"player {player_id!r} already exists")


class AlreadyLostError(GameError):
    """Raised when a player with no dice left tries to forfeit."""

    def __init__(self, player_id):
        self.player_id = player_id
        super().__init__(f"player {player_id!r} already lost")


class NoBidderError(GameError):
    """
    Raised when no eligible next bidder exists. The player who bid last cannot bid again,
    so this means everyone else is out: the game has ended and the call must not be retried.
    """

    def __init__(self, message="no valid bidder found"):
        super().__init__(message)


class NotEnoughPlayersError(GameError):
    """Raised when a game is started with fewer than two players holding dice."""

    def __init__(self, message="not enough players to start the round"):
        super().__init__(message)


class IllegalMoveError(GameError):
    """
    Raised when a bid or Liar call is rejected (wrong turn, bad bid, nothing to call).
    """
    pass


class OutOfTurnError(IllegalMoveError):
    def __init__(self, player_id):
        self.player_id = player_id
        super().__init__(f"action attempted by non-bidding player {player_id!r}")


class InvalidFaceError(IllegalMoveError):
    def __init__(self, face):
        self.face = face
        super().__init__(f"proposed bid face {face} was invalid")


class InvalidQuantityError(IllegalMoveError):
    def __init__(self, quantity, limit):
        self.quantity = quantity
        self.limit = limit
        super().__init__(f"proposed bid quantity {quantity} was invalid (dice in game: {limit})")


class BidTooLowError(IllegalMoveError):
    """
    Raised when a well-formed bid does not exceed the current one.
    Carries the current bid so the caller can report it.
    """

    def __init__(self, quantity, face):
        self.quantity = quantity
        self.face = face
        super().__init__(f"proposed bid was too low (current bid: {quantity}x{face})")


class NoStandingBidError(IllegalMoveError):
    """Raised when Liar is called before anyone has bid this round."""

    def __init__(self):
        super().__init__("no bid to call")
