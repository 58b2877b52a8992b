from __future__ import annotations

import os
import random
import tempfile
from pathlib import Path

import pytest

# Keep test logs out of the working tree; must run before hud_wordle is imported.
os.environ.setdefault("LOG_DIR", str(Path(tempfile.gettempdir()) / "hud_wordle_test_logs"))

from hud_wordle.config.game_settings import ALLOWED_GUESSES, WORD_LIST  # noqa: E402
from hud_wordle.services.game_service import GameService  # noqa: E402
from hud_wordle.services.word_service import WordService  # noqa: E402


def make_service(target: str = "CRANE", **kwargs) -> GameService:
    """A GameService whose every new game uses ``target``."""
    words = WordService(targets=[target], allowed_guesses=set(WORD_LIST) | set(ALLOWED_GUESSES))
    return GameService(word_service=words, **kwargs)


@pytest.fixture()
def service() -> GameService:
    return make_service("CRANE")


@pytest.fixture()
def seeded_service() -> GameService:
    """Service drawing from the real target list with a fixed seed."""
    return GameService(word_service=WordService(rng=random.Random(1234)))


@pytest.fixture()
def client_and_service(monkeypatch):
    """Flask test client wired to a deterministic game service."""
    from hud_wordle import create_app
    from hud_wordle.config import TestingConfig
    from hud_wordle.services import game_service as game_service_module

    svc = make_service("CRANE")
    monkeypatch.setattr(game_service_module, "_game_service", svc)

    app, socketio = create_app(TestingConfig)
    with app.test_client() as client:
        yield client, svc


@pytest.fixture()
def socket_client_and_service(monkeypatch):
    from hud_wordle import create_app
    from hud_wordle.config import TestingConfig
    from hud_wordle.services import game_service as game_service_module

    svc = make_service("CRANE")
    monkeypatch.setattr(game_service_module, "_game_service", svc)

    app, socketio = create_app(TestingConfig)
    client = socketio.test_client(app)
    yield client, svc
    if client.is_connected():
        client.disconnect()


@pytest.fixture()
def service_factory():
    return make_service
