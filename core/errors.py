"""Exceptions raised by the game engine."""


class GameError(Exception):
    """Base exception for rejected game actions."""

    pass


class InvalidActionError(GameError):
    """Raised when an action is attempted outside its allowed phase."""

    pass


class InsufficientFundsError(GameError):
    """Raised when the bankroll cannot cover a wager."""

    pass


class BetAlreadyActiveError(GameError):
    """Raised when a bet is placed while another is still on the table."""

    pass


class DeckExhaustedError(IndexError):
    """Raised when drawing from an empty deck.

    Not a ``GameError``: a single hand never comes close to using 52 cards,
    so reaching this is a broken invariant rather than a rejected action.
    """

    pass
