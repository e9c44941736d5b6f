# memory_match/display.py
from __future__ import annotations
import itertools
from collections import deque
from typing import TYPE_CHECKING, Any, Deque, Dict, List

from .board import CardState

if TYPE_CHECKING:
    from .engine import GameSummary


class Display:
    """Presentation collaborator notified by the engine. Every hook is a no-op here."""

    def on_timer_tick(self, minutes: int, seconds: int) -> None:
        pass

    def on_moves_changed(self, moves: int) -> None:
        pass

    def on_score_changed(self, score: int) -> None:
        pass

    def on_pairs_changed(self, matched: int, total: int) -> None:
        pass

    def on_card_state_changed(self, position: int, state: CardState) -> None:
        pass

    def on_game_started(self) -> None:
        pass

    def on_game_reset(self) -> None:
        pass

    def on_game_ended(self, summary: GameSummary) -> None:
        pass


class EventLog(Display):
    """
    Display that records every notification as a numbered event.

    Events look like {"seq": 3, "event": "score", "data": {"score": 200}}
    and are JSON-serialisable. Only the newest ``maxlen`` are kept.
    """

    def __init__(self, maxlen: int = 500):
        self._events: Deque[Dict[str, Any]] = deque(maxlen=maxlen)
        self._seq = itertools.count(1)
        self.last_seq = 0

    def _record(self, event: str, **data: Any) -> None:
        self.last_seq = next(self._seq)
        self._events.append({"seq": self.last_seq, "event": event, "data": data})

    def since(self, seq: int = 0) -> List[Dict[str, Any]]:
        return [e for e in self._events if e["seq"] > seq]

    def names(self) -> List[str]:
        return [e["event"] for e in self._events]

    def on_timer_tick(self, minutes, seconds):
        self._record("timer", minutes=minutes, seconds=seconds)

    def on_moves_changed(self, moves):
        self._record("moves", moves=moves)

    def on_score_changed(self, score):
        self._record("score", score=score)

    def on_pairs_changed(self, matched, total):
        self._record("pairs", matched=matched, total=total)

    def on_card_state_changed(self, position, state):
        self._record("card", position=position, state=state.value)

    def on_game_started(self):
        self._record("started")

    def on_game_reset(self):
        self._record("reset")

    def on_game_ended(self, summary):
        self._record("ended", **summary.to_dict())
