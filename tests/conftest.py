from __future__ import annotations

import os

os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from fastapi.testclient import TestClient

from scorecard.db import Base, engine
from scorecard.main import app
from scorecard.schemas import CourseCreate, ScoringPlayer

PARS = [4, 4, 3, 5, 4, 4, 3, 4, 5, 4, 3, 5, 4, 4, 3, 4, 5, 4]
IN_ORDER = list(range(1, 19))
WHITE = [7, 13, 11, 15, 1, 5, 17, 3, 9, 10, 12, 4, 14, 18, 2, 16, 8, 6]
RED = [8, 2, 16, 18, 12, 6, 4, 14, 10, 11, 9, 1, 13, 3, 17, 5, 15, 7]


def course_payload(name: str = "Los Robles") -> dict:
    return {
        "name": name,
        "holes": 18,
        "par": list(PARS),
        "handicaps_blue": list(IN_ORDER),
        "handicaps_white": list(WHITE),
        "handicaps_red": list(RED),
    }


@pytest.fixture
def course() -> CourseCreate:
    return CourseCreate(**course_payload())


@pytest.fixture
def make_player():
    def _make(handicap: int = 0, tee_color: str = "blue", player_id: int | None = 1) -> ScoringPlayer:
        return ScoringPlayer(
            id=player_id,
            first_name="Ana",
            last_name="Ruiz",
            code="AR",
            handicap=handicap,
            tee_color=tee_color,
        )

    return _make


@pytest.fixture(autouse=True)
def fresh_db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def client() -> TestClient:
    with TestClient(app, raise_server_exceptions=False) as client:
        yield client
