# memory_match/config.py
import os


def _optional_int(name):
    value = os.environ.get(name)
    return int(value) if value not in (None, "") else None


class Config:
    # Starting difficulty: easy, medium or hard
    MEMORY_DIFFICULTY = os.environ.get('MEMORY_DIFFICULTY', 'easy')
    # Delay before a mismatch / hint flips back and before the win summary (seconds)
    REVEAL_DELAY_SEC = float(os.environ.get('REVEAL_DELAY_SEC', '1.0'))
    # Game clock tick (seconds)
    TICK_INTERVAL_SEC = float(os.environ.get('TICK_INTERVAL_SEC', '1.0'))
    # Optional: fixed shuffle seed for reproducible decks. Unset uses system randomness.
    MEMORY_SEED = _optional_int('MEMORY_SEED')
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
    # Number of display events kept for /events polling
    EVENT_LOG_SIZE = int(os.environ.get('EVENT_LOG_SIZE', '500'))
