# memory_match/board.py
from __future__ import annotations
import random
from collections import Counter
from dataclasses import dataclass, replace
from enum import Enum
from typing import Iterator, List, Optional, Tuple, Union

SYMBOLS: Tuple[str, ...] = (
    "🐶", "🐱", "🐭", "🐹", "🐰", "🦊", "🐻", "🐼",
    "🐨", "🐯", "🦁", "🐮", "🐷", "🐸", "🐵", "🐔",
)


class Difficulty(Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"

    @property
    def pairs(self) -> int:
        return _LAYOUT[self][0]

    @property
    def columns(self) -> int:
        return _LAYOUT[self][1]

    @classmethod
    def parse(cls, level: Union["Difficulty", str]) -> "Difficulty":
        if isinstance(level, cls):
            return level
        try:
            return cls(str(level).strip().lower())
        except ValueError:
            raise ValueError(f"unknown difficulty: {level!r}") from None


# difficulty -> (pairs, grid columns)
_LAYOUT = {
    Difficulty.EASY: (8, 4),
    Difficulty.MEDIUM: (18, 6),
    Difficulty.HARD: (32, 8),
}


class CardState(Enum):
    HIDDEN = "hidden"
    FLIPPED = "flipped"
    MATCHED = "matched"


@dataclass(frozen=True)
class Card:
    symbol: str
    position: int
    state: CardState = CardState.HIDDEN

    @property
    def face_up(self) -> bool:
        return self.state is not CardState.HIDDEN


def symbols_for(difficulty: Difficulty) -> List[str]:
    """One symbol per pair slot.

    Medium reuses the first six symbols and hard reuses the whole
    alphabet, so those symbols end up on four cards instead of two.
    """
    if difficulty is Difficulty.EASY:
        return list(SYMBOLS[:8])
    if difficulty is Difficulty.MEDIUM:
        return list(SYMBOLS[:12]) + list(SYMBOLS[:6])
    return list(SYMBOLS) + list(SYMBOLS)


def shuffle(items: list, rng: Optional[random.Random] = None) -> list:
    """Fisher-Yates shuffle in place; returns ``items`` for chaining."""
    rng = rng or random
    for i in range(len(items) - 1, 0, -1):
        j = rng.randint(0, i)
        items[i], items[j] = items[j], items[i]
    return items


class Deck:
    """
    Mutable Deck ADT.

    Rep:
      - cards[i].position == i
      - cards.length is a multiple of columns
      - every symbol appears an even number of times
    Rule violations raise ValueError; callers are expected to check
    state with peek() first.
    """

    def __init__(self, columns: int, symbols: List[str]):
        if columns <= 0:
            raise ValueError("columns must be positive")
        if not symbols or len(symbols) % columns != 0:
            raise ValueError("symbols length must be a positive multiple of columns")

        self._columns = columns
        self._cards: List[Card] = [Card(symbol=s, position=i) for i, s in enumerate(symbols)]
        self._check_rep()

    def _check_rep(self) -> None:
        assert len(self._cards) % self._columns == 0
        for i, card in enumerate(self._cards):
            assert card.position == i
            assert isinstance(card.symbol, str)
        for count in Counter(card.symbol for card in self._cards).values():
            assert count % 2 == 0

    @property
    def columns(self) -> int:
        return self._columns

    @property
    def rows(self) -> int:
        return len(self._cards) // self._columns

    def __len__(self) -> int:
        return len(self._cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(list(self._cards))

    def contains(self, position: int) -> bool:
        return isinstance(position, int) and not isinstance(position, bool) and 0 <= position < len(self._cards)

    def peek(self, position: int) -> Card:
        self._validate_position(position)
        return self._cards[position]

    def symbols(self) -> List[str]:
        return [card.symbol for card in self._cards]

    def unmatched(self) -> List[Card]:
        return [card for card in self._cards if card.state is not CardState.MATCHED]

    def flip_up(self, position: int) -> Card:
        """Turn a hidden card face-up and return the new card."""
        self._validate_position(position)
        card = self._cards[position]
        if card.state is CardState.MATCHED:
            raise ValueError("cannot flip a matched card")
        if card.state is CardState.FLIPPED:
            raise ValueError("already face up")
        self._cards[position] = replace(card, state=CardState.FLIPPED)
        self._check_rep()
        return self._cards[position]

    def flip_down(self, position: int) -> bool:
        """Hide a face-up card. Returns False when there was nothing to do."""
        self._validate_position(position)
        card = self._cards[position]
        if card.state is CardState.MATCHED:
            raise ValueError("cannot flip down a matched card")
        if card.state is CardState.HIDDEN:
            return False
        self._cards[position] = replace(card, state=CardState.HIDDEN)
        self._check_rep()
        return True

    def mark_matched(self, pos1: int, pos2: int) -> None:
        """Mark two face-up cards with equal symbols as permanently matched."""
        self._validate_position(pos1)
        self._validate_position(pos2)
        if pos1 == pos2:
            raise ValueError("a card cannot match itself")
        c1 = self._cards[pos1]
        c2 = self._cards[pos2]
        if c1.state is not CardState.FLIPPED or c2.state is not CardState.FLIPPED:
            raise ValueError("both must be face up to match")
        if c1.symbol != c2.symbol:
            raise ValueError("symbols do not match")

        self._cards[pos1] = replace(c1, state=CardState.MATCHED)
        self._cards[pos2] = replace(c2, state=CardState.MATCHED)
        self._check_rep()

    def _validate_position(self, position: int) -> None:
        if not self.contains(position):
            raise ValueError("invalid position")


def build_deck(difficulty: Difficulty, rng: Optional[random.Random] = None) -> Deck:
    selected = symbols_for(difficulty)
    cards = shuffle(selected + selected, rng)
    return Deck(difficulty.columns, cards)
