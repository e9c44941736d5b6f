# memory_match/engine.py
from __future__ import annotations
import logging
import random
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

from .board import Card, CardState, Deck, Difficulty, build_deck
from .display import Display
from .scheduler import Scheduler, Task

logger = logging.getLogger(__name__)

MATCH_POINTS = 100
FAST_BONUS = 50
FAST_SECONDS = 30
LOW_MOVES_BONUS = 50
HINT_PENALTY = 50


@dataclass
class GameSession:
    started: bool = False
    minutes: int = 0
    seconds: int = 0  # rolls over into minutes at 60
    moves: int = 0
    score: int = 0
    matched_pairs: int = 0
    flipped: List[int] = field(default_factory=list)
    accepting_input: bool = True

    @property
    def elapsed_seconds(self) -> int:
        return self.minutes * 60 + self.seconds

    @property
    def time_text(self) -> str:
        return f"{self.minutes:02d}:{self.seconds:02d}"


@dataclass(frozen=True)
class GameSummary:
    time: str
    moves: int
    score: int

    def to_dict(self) -> Dict[str, Any]:
        return {"time": self.time, "moves": self.moves, "score": self.score}


class GameEngine:
    """
    Owns the deck and the session and applies player input to them.

    Invalid input (flipping before start, flipping a face-up card,
    hinting mid-turn, ...) is ignored without touching state or
    notifying the display. Deferred actions run on ``scheduler`` and
    are tagged with the deck generation they were scheduled against,
    so anything left over from before a reset does nothing.
    """

    def __init__(
        self,
        display: Optional[Display] = None,
        scheduler: Optional[Scheduler] = None,
        difficulty: Union[Difficulty, str] = Difficulty.EASY,
        rng: Optional[random.Random] = None,
        reveal_delay: float = 1.0,
        tick_interval: float = 1.0,
    ):
        self.display = display or Display()
        self.scheduler = scheduler or Scheduler()
        self.rng = rng or random.Random()
        self.reveal_delay = reveal_delay
        self.tick_interval = tick_interval

        self.difficulty = Difficulty.parse(difficulty)
        self.session = GameSession()
        self.deck: Deck = build_deck(self.difficulty, self.rng)
        self._generation = 0
        self._timer: Optional[Task] = None
        self._deferred: List[Task] = []

    # ----- read-only views -----

    @property
    def total_pairs(self) -> int:
        return self.difficulty.pairs

    @property
    def finished(self) -> bool:
        return self.session.matched_pairs == self.total_pairs

    @property
    def flipped_selection(self) -> List[Card]:
        return [self.deck.peek(p) for p in self.session.flipped]

    @property
    def timer_running(self) -> bool:
        return self._timer is not None

    def snapshot(self) -> Dict[str, Any]:
        s = self.session
        return {
            "difficulty": self.difficulty.value,
            "columns": self.deck.columns,
            "rows": self.deck.rows,
            "total_pairs": self.total_pairs,
            "started": s.started,
            "minutes": s.minutes,
            "seconds": s.seconds,
            "time": s.time_text,
            "moves": s.moves,
            "score": s.score,
            "matched_pairs": s.matched_pairs,
            "accepting_input": s.accepting_input,
            "finished": self.finished,
            "cards": [
                {
                    "position": card.position,
                    "state": card.state.value,
                    "symbol": card.symbol if card.face_up else None,
                }
                for card in self.deck
            ],
        }

    # ----- inbound commands -----

    def start(self) -> None:
        if self.session.started:
            return
        self.session.started = True
        self._timer = self.scheduler.call_every(self.tick_interval, self._tick)
        logger.info("game started (difficulty=%s)", self.difficulty.value)
        self.display.on_game_started()

    def flip(self, position: int) -> None:
        s = self.session
        if not s.accepting_input or not s.started:
            logger.debug("flip(%r) ignored: input not accepted", position)
            return
        if not self.deck.contains(position):
            logger.debug("flip(%r) ignored: no such card", position)
            return
        if self.deck.peek(position).state is not CardState.HIDDEN:
            logger.debug("flip(%r) ignored: card already face up", position)
            return

        self.deck.flip_up(position)
        s.flipped.append(position)
        self.display.on_card_state_changed(position, CardState.FLIPPED)

        if len(s.flipped) == 2:
            self._resolve()

    def hint(self) -> None:
        s = self.session
        if not s.started or s.flipped:
            logger.debug("hint ignored: game not started or a turn is in progress")
            return

        pool = self.deck.unmatched()
        if len(pool) < 2:
            return
        first = self.rng.choice(pool)
        partners = [c for c in pool if c.position != first.position and c.symbol == first.symbol]
        if not partners:
            return
        second = self.rng.choice(partners)

        shown = []
        for card in (first, second):
            if card.state is CardState.HIDDEN:
                self.deck.flip_up(card.position)
                self.display.on_card_state_changed(card.position, CardState.FLIPPED)
            shown.append(card.position)
        self._defer(self._hide_hint, shown)

        s.score = max(0, s.score - HINT_PENALTY)
        self.display.on_score_changed(s.score)

    def reset(self) -> None:
        self._stop_timer()
        for task in self._deferred:
            task.cancel()
        self._deferred = []
        self._generation += 1

        self.session = GameSession()
        self.deck = build_deck(self.difficulty, self.rng)
        logger.info("game reset (difficulty=%s)", self.difficulty.value)

        s = self.session
        self.display.on_game_reset()
        self.display.on_moves_changed(s.moves)
        self.display.on_score_changed(s.score)
        self.display.on_pairs_changed(s.matched_pairs, self.total_pairs)
        self.display.on_timer_tick(s.minutes, s.seconds)

    def set_difficulty(self, level: Union[Difficulty, str]) -> None:
        self.difficulty = Difficulty.parse(level)
        logger.info("difficulty set to %s", self.difficulty.value)
        self.reset()

    # ----- transitions -----

    def _resolve(self) -> None:
        s = self.session
        s.accepting_input = False
        s.moves += 1
        self.display.on_moves_changed(s.moves)

        p1, p2 = s.flipped
        if self.deck.peek(p1).symbol != self.deck.peek(p2).symbol:
            self._defer(self._hide_mismatch, [p1, p2])
            return

        self.deck.mark_matched(p1, p2)
        self.display.on_card_state_changed(p1, CardState.MATCHED)
        self.display.on_card_state_changed(p2, CardState.MATCHED)
        s.matched_pairs += 1

        points = MATCH_POINTS
        if s.seconds < FAST_SECONDS:
            points += FAST_BONUS
        if s.moves < self.total_pairs * 2:
            points += LOW_MOVES_BONUS
        s.score += points
        self.display.on_score_changed(s.score)
        self.display.on_pairs_changed(s.matched_pairs, self.total_pairs)

        if self.finished:
            self._end()

        s.flipped = []
        s.accepting_input = True

    def _end(self) -> None:
        self._stop_timer()
        s = self.session
        summary = GameSummary(time=s.time_text, moves=s.moves, score=s.score)
        logger.info("game over: time=%s moves=%d score=%d", summary.time, summary.moves, summary.score)
        self._defer(self.display.on_game_ended, summary)

    def _tick(self) -> None:
        s = self.session
        s.seconds += 1
        if s.seconds == 60:
            s.minutes += 1
            s.seconds = 0
        self.display.on_timer_tick(s.minutes, s.seconds)

    def _hide_mismatch(self, positions: List[int]) -> None:
        for p in positions:
            if self.deck.peek(p).state is CardState.FLIPPED:
                self.deck.flip_down(p)
                self.display.on_card_state_changed(p, CardState.HIDDEN)
        self.session.flipped = []
        self.session.accepting_input = True

    def _hide_hint(self, positions: List[int]) -> None:
        for p in positions:
            card = self.deck.peek(p)
            # a card the player has flipped since stays up
            if card.state is CardState.FLIPPED and p not in self.session.flipped:
                self.deck.flip_down(p)
                self.display.on_card_state_changed(p, CardState.HIDDEN)

    def _defer(self, action, *args) -> None:
        generation = self._generation

        def run() -> None:
            self._deferred = [t for t in self._deferred if t is not task]
            if generation != self._generation:
                return
            action(*args)

        task = self.scheduler.call_later(self.reveal_delay, run)
        self._deferred.append(task)

    def _stop_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
