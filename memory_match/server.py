# memory_match/server.py
from __future__ import annotations
import logging
import random
import time
from threading import RLock
from typing import Callable

from flask import Flask, jsonify, request

from .config import Config
from .display import EventLog
from .engine import GameEngine
from .scheduler import Scheduler


def create_app(config_class=Config, clock: Callable[[], float] = time.monotonic) -> Flask:
    """
    Flask front end for a single in-memory game.

    The engine runs on a virtual scheduler; before every request the
    scheduler is caught up with the wall-clock time elapsed since the
    app was created, so timer ticks and flip-backs happen lazily and
    always on the request thread, under one lock.
    """
    app = Flask(__name__)
    app.config.from_object(config_class)
    logging.getLogger("memory_match").setLevel(app.config["LOG_LEVEL"])

    seed = app.config.get("MEMORY_SEED")
    events = EventLog(maxlen=app.config["EVENT_LOG_SIZE"])
    engine = GameEngine(
        display=events,
        scheduler=Scheduler(),
        difficulty=app.config["MEMORY_DIFFICULTY"],
        rng=random.Random(seed) if seed is not None else None,
        reveal_delay=app.config["REVEAL_DELAY_SEC"],
        tick_interval=app.config["TICK_INTERVAL_SEC"],
    )
    lock = RLock()
    epoch = clock()

    app.extensions["memory_match"] = {"engine": engine, "events": events}

    def sync() -> None:
        engine.scheduler.advance_to(clock() - epoch)

    def ok(**extra):
        body = {"status": "ok", "last_seq": events.last_seq}
        body.update(extra)
        body.update(engine.snapshot())
        return jsonify(body)

    def json_object():
        data = request.get_json(force=True, silent=True)
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ValueError("expected a JSON object")
        return data

    @app.errorhandler(ValueError)
    def bad_request(e):
        return jsonify({"status": "error", "message": str(e)}), 400

    @app.get("/state")
    def api_state():
        with lock:
            sync()
            return ok()

    @app.get("/events")
    def api_events():
        since = request.args.get("since", 0, type=int)
        with lock:
            sync()
            return jsonify({"status": "ok", "events": events.since(since), "last_seq": events.last_seq})

    @app.post("/start")
    def api_start():
        with lock:
            sync()
            engine.start()
            return ok()

    @app.post("/flip")
    def api_flip():
        data = json_object()
        if "position" not in data:
            raise ValueError("missing 'position'")
        position = data["position"]
        if type(position) is not int:
            raise ValueError("position must be an integer")
        with lock:
            sync()
            engine.flip(position)
            return ok()

    @app.post("/hint")
    def api_hint():
        with lock:
            sync()
            engine.hint()
            return ok()

    @app.post("/reset")
    def api_reset():
        with lock:
            sync()
            engine.reset()
            return ok()

    @app.post("/difficulty")
    def api_difficulty():
        data = json_object()
        if "level" not in data:
            raise ValueError("missing 'level'")
        with lock:
            sync()
            engine.set_difficulty(data["level"])
            return ok()

    return app


if __name__ == "__main__":
    # debug=True only for development
    create_app().run(host="127.0.0.1", port=5000, debug=True)
