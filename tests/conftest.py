import random

import pytest

from memory_match.board import CardState
from memory_match.display import EventLog
from memory_match.engine import GameEngine
from memory_match.scheduler import Scheduler
from memory_match.server import create_app


class TestConfig:
    TESTING = True
    MEMORY_DIFFICULTY = 'easy'
    REVEAL_DELAY_SEC = 1.0
    TICK_INTERVAL_SEC = 1.0
    MEMORY_SEED = 7
    LOG_LEVEL = 'DEBUG'
    EVENT_LOG_SIZE = 100


class FakeClock:
    def __init__(self, now=100.0):
        self.now = now

    def __call__(self):
        return self.now


def pair_positions(deck):
    """Two hidden cards with the same symbol."""
    seen = {}
    for card in deck:
        if card.state is not CardState.HIDDEN:
            continue
        if card.symbol in seen:
            return seen[card.symbol], card.position
        seen[card.symbol] = card.position
    return None


def mismatch_positions(deck):
    """Two hidden cards with different symbols."""
    hidden = [c for c in deck if c.state is CardState.HIDDEN]
    first = hidden[0]
    for card in hidden[1:]:
        if card.symbol != first.symbol:
            return first.position, card.position
    return None


@pytest.fixture()
def events():
    return EventLog()


@pytest.fixture()
def scheduler():
    return Scheduler()


@pytest.fixture()
def engine(events, scheduler):
    return GameEngine(display=events, scheduler=scheduler, rng=random.Random(1234))


@pytest.fixture()
def clock():
    return FakeClock()


@pytest.fixture()
def flask_app(clock):
    return create_app(TestConfig, clock=clock)


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()
