"""
Memory-matching (concentration) game core.
"""

from .board import SYMBOLS, Card, CardState, Deck, Difficulty, build_deck, shuffle, symbols_for
from .display import Display, EventLog
from .engine import GameEngine, GameSession, GameSummary
from .scheduler import Scheduler, Task

__all__ = [
    'SYMBOLS',
    'Card',
    'CardState',
    'Deck',
    'Difficulty',
    'build_deck',
    'shuffle',
    'symbols_for',
    'Display',
    'EventLog',
    'GameEngine',
    'GameSession',
    'GameSummary',
    'Scheduler',
    'Task',
]
