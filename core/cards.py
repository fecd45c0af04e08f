"""Card and Deck classes - immutable card representations."""

from dataclasses import dataclass
from enum import Enum, auto
from random import Random
from typing import Iterable, Iterator

from core.errors import DeckExhaustedError


class Suit(Enum):
    """Card suits."""

    SPADES = auto()
    CLUBS = auto()
    HEARTS = auto()
    DIAMONDS = auto()

    def __str__(self) -> str:
        symbols = {
            Suit.SPADES: "♠",
            Suit.CLUBS: "♣",
            Suit.HEARTS: "♥",
            Suit.DIAMONDS: "♦",
        }
        return symbols[self]


class Rank(Enum):
    """Card ranks with blackjack values."""

    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13
    ACE = 14

    def __str__(self) -> str:
        if self.value <= 10:
            return str(self.value)
        return {
            Rank.JACK: "J",
            Rank.QUEEN: "Q",
            Rank.KING: "K",
            Rank.ACE: "A",
        }[self]

    @property
    def blackjack_value(self) -> int:
        """Return the base point value (Ace = 11, face cards = 10)."""
        if self.value <= 10:
            return self.value
        if self == Rank.ACE:
            return 11
        return 10


_RANK_NAMES = {str(rank): rank for rank in Rank}
_RANK_NAMES["T"] = Rank.TEN

_SUIT_NAMES = {
    "S": Suit.SPADES,
    "♠": Suit.SPADES,
    "C": Suit.CLUBS,
    "♣": Suit.CLUBS,
    "H": Suit.HEARTS,
    "♥": Suit.HEARTS,
    "D": Suit.DIAMONDS,
    "♦": Suit.DIAMONDS,
}


@dataclass(frozen=True, slots=True)
class Card:
    """Immutable playing card."""

    rank: Rank
    suit: Suit

    def __str__(self) -> str:
        return f"{self.rank}{self.suit}"

    def __repr__(self) -> str:
        return f"Card({self.rank.name}, {self.suit.name})"

    @property
    def value(self) -> int:
        """Return the base point value, before any ace adjustment."""
        return self.rank.blackjack_value

    @property
    def is_ace(self) -> bool:
        return self.rank == Rank.ACE

    @classmethod
    def from_string(cls, s: str) -> "Card":
        """Create a card from a string like 'AS', '10♦', 'Kh'."""
        s = s.strip().upper()
        if len(s) < 2:
            raise ValueError(f"Invalid card string: {s}")

        rank_str, suit_str = s[:-1], s[-1]
        if rank_str not in _RANK_NAMES:
            raise ValueError(f"Invalid rank: {rank_str}")
        if suit_str not in _SUIT_NAMES:
            raise ValueError(f"Invalid suit: {suit_str}")

        return cls(_RANK_NAMES[rank_str], _SUIT_NAMES[suit_str])


class Deck:
    """
    A single 52-card deck dealt from the top.

    Cards are kept so that ``draw()`` pops from the end of the internal list;
    iteration yields the cards in the order they will be dealt.
    """

    def __init__(self, rng: Random | None = None) -> None:
        self._rng = rng or Random()
        self._cards: list[Card] = []
        self.reset()

    def reset(self) -> None:
        """Reset deck to all 52 cards in suit/rank order."""
        ordered = [Card(rank, suit) for suit in Suit for rank in Rank]
        self._cards = list(reversed(ordered))

    def shuffle(self) -> None:
        """Shuffle the remaining cards uniformly (Fisher-Yates)."""
        self._rng.shuffle(self._cards)

    def draw(self) -> Card:
        """Draw a card from the top of the deck."""
        if not self._cards:
            raise DeckExhaustedError("Cannot draw from empty deck")
        return self._cards.pop()

    @classmethod
    def from_cards(cls, cards: Iterable[Card]) -> "Deck":
        """
        Build a deck that deals ``cards`` in the given order.

        Raises:
            ValueError: if the same card appears twice
        """
        cards = list(cards)
        if len(set(cards)) != len(cards):
            raise ValueError("Deck cannot contain duplicate cards")
        deck = cls()
        deck._cards = list(reversed(cards))
        return deck

    def __len__(self) -> int:
        return len(self._cards)

    def __iter__(self) -> Iterator[Card]:
        return reversed(self._cards)

    @property
    def cards_remaining(self) -> int:
        """Return the number of cards remaining."""
        return len(self._cards)


def create_deck(rng: Random | None = None) -> Deck:
    """Return a freshly shuffled 52-card deck."""
    deck = Deck(rng=rng)
    deck.shuffle()
    return deck
