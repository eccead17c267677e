"""Card abstractions and the deck used by the Snap game."""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Hashable, Iterable, Iterator, List, Protocol

__all__ = [
    "Suit",
    "Rank",
    "Card",
    "CardLike",
    "Deck",
    "DeckLike",
    "EmptyDeck",
    "iter_full_deck",
]


class Suit(str, Enum):
    """Enumeration of the four suits in a standard deck."""

    SPADES = "S"
    HEARTS = "H"
    DIAMONDS = "D"
    CLUBS = "C"


class Rank(str, Enum):
    """Enumeration of the thirteen card ranks."""

    ACE = "A"
    TWO = "2"
    THREE = "3"
    FOUR = "4"
    FIVE = "5"
    SIX = "6"
    SEVEN = "7"
    EIGHT = "8"
    NINE = "9"
    TEN = "10"
    JACK = "J"
    QUEEN = "Q"
    KING = "K"

    @classmethod
    def ordered(cls) -> tuple["Rank", ...]:
        """Return ranks in deck order, ace low."""

        return tuple(cls)


class EmptyDeck(RuntimeError):
    """Raised when drawing from a deck with no cards left."""


class CardLike(Protocol):
    """Anything the game can hold in its flip window."""

    @property
    def rank(self) -> Hashable: ...

    def turn_over(self) -> None: ...


class DeckLike(Protocol):
    """Collaborator contract the game relies on."""

    def shuffle(self) -> None: ...

    def draw(self) -> Any: ...

    def cards_remaining(self) -> int: ...


@dataclass(slots=True)
class Card:
    """A physical card; only its orientation changes during play."""

    rank: Rank
    suit: Suit
    face_up: bool = field(default=False, compare=False)

    def turn_over(self) -> None:
        """Flip the card to its other face."""

        self.face_up = not self.face_up

    def label(self) -> str:
        """Create a display label suitable for CLI representations."""

        return f"{self.rank.value}{self.suit.value}"


def iter_full_deck() -> Iterator[Card]:
    """Yield the 52 cards of a fresh deck, face down, suit by suit."""

    for suit in Suit:
        for rank in Rank.ordered():
            yield Card(rank=rank, suit=suit)


class Deck:
    """Ordered pile of cards drawn from the front.

    ``rng`` only needs a ``shuffle(list)`` method, so tests can hand in
    a deterministic stand-in for :class:`random.Random`.
    """

    def __init__(self, cards: Iterable[Card] | None = None, rng: Any | None = None) -> None:
        self._cards: List[Card] = list(iter_full_deck() if cards is None else cards)
        self._rng = rng if rng is not None else random.Random()

    @classmethod
    def from_cards(cls, cards: Iterable[Card], rng: Any | None = None) -> "Deck":
        """Build a deck that deals ``cards`` in the given order."""

        return cls(cards, rng=rng)

    def __len__(self) -> int:
        return len(self._cards)

    def shuffle(self) -> None:
        self._rng.shuffle(self._cards)

    def draw(self) -> Card:
        if not self._cards:
            raise EmptyDeck("cannot draw from an empty deck")
        return self._cards.pop(0)

    def cards_remaining(self) -> int:
        return len(self._cards)

    def peek_order(self) -> list[Card]:
        """Return the remaining cards front first without drawing them."""

        return list(self._cards)
