"""
Shared fixtures: in-memory database, API client, users and a fake LLM.
"""

import json
from collections import namedtuple

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from jeopardy.api.deps import get_llm_service, get_task_registry
from jeopardy.core.database import Base, build_engine, get_db, get_session_factory, import_models
from jeopardy.main import app
from jeopardy.models.user import SystemRole, User
from jeopardy.services.generation_service import GenerationTaskRegistry
from jeopardy.services.llm_service import fill_template

import_models()

ApiUser = namedtuple("ApiUser", ["id", "email", "token", "headers"])

SAMPLE_GENERATED_GAME = {
    "categories": [
        {
            "id": 1,
            "name": "Rivers",
            "questions": [
                {"id": 1, "clue": "Longest river in Africa", "answer": "Nile", "difficulty": 1},
                {"id": 2, "clue": "River through Vienna", "answer": "Danube", "difficulty": 2},
            ],
        },
        {
            "id": 2,
            "name": "Mountains",
            "questions": [
                {"id": 3, "clue": "Highest mountain on Earth", "answer": "Everest", "difficulty": 1},
                {"id": 4, "clue": "Highest peak in the Alps", "answer": "Mont Blanc", "difficulty": 3},
            ],
        },
    ]
}


class FakeLLM:
    """Stands in for LLMService; records prompts and replays a canned answer"""

    def __init__(self, text=None, error=None):
        self.text = text
        self.error = error
        self.prompts = []

    async def generate_from_template(self, template, values):
        self.prompts.append(fill_template(template, values))
        if self.error is not None:
            raise self.error
        return self.text


@pytest.fixture
def engine():
    engine = build_engine("sqlite://", poolclass=StaticPool)
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    """A session for service-level tests"""
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def fake_llm():
    return FakeLLM(text=json.dumps(SAMPLE_GENERATED_GAME))


@pytest.fixture
def registry():
    return GenerationTaskRegistry()


@pytest.fixture
def client(session_factory, fake_llm, registry):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_session_factory] = lambda: session_factory
    app.dependency_overrides[get_llm_service] = lambda: fake_llm
    app.dependency_overrides[get_task_registry] = lambda: registry

    yield TestClient(app)

    app.dependency_overrides.clear()


@pytest.fixture
def make_user(client, session_factory):
    """Register a user through the API; ``admin=True`` promotes it in the database"""
    counter = {"n": 0}

    def _make(name=None, admin=False):
        counter["n"] += 1
        name = name or f"user{counter['n']}"
        email = f"{name.lower()}@example.com"
        response = client.post(
            "/api/users/register",
            json={"email": email, "name": name, "password": "secret123"},
        )
        assert response.status_code == 201, response.text
        body = response.json()
        user_id = body["user"]["id"]

        if admin:
            session = session_factory()
            try:
                session.get(User, user_id).role = SystemRole.ADMIN
                session.commit()
            finally:
                session.close()

        token = body["token"]
        return ApiUser(user_id, email, token, {"Authorization": f"Bearer {token}"})

    return _make


@pytest.fixture
def build_game(client):
    """Create a game with an N x M grid through the API.

    Returns (game_id, cells) where ``cells[(category_index, row_index)]`` is
    the question id; row ``i`` is worth ``(i + 1) * 100``.
    """
    def _build(owner, categories=2, rows=2, title="Test game"):
        response = client.post("/api/games", json={"title": title}, headers=owner.headers)
        assert response.status_code == 201, response.text
        game_id = response.json()["id"]

        row_ids = []
        for i in range(rows):
            response = client.post(
                "/api/questions/rows",
                json={"gameId": game_id, "value": (i + 1) * 100, "order": i},
                headers=owner.headers,
            )
            assert response.status_code == 201, response.text
            row_ids.append(response.json()["id"])

        cells = {}
        for c in range(categories):
            response = client.post(
                "/api/categories",
                json={"gameId": game_id, "name": f"Category {c + 1}", "order": c},
                headers=owner.headers,
            )
            assert response.status_code == 201, response.text
            category_id = response.json()["id"]
            for r, row_id in enumerate(row_ids):
                response = client.post(
                    "/api/questions",
                    json={
                        "categoryId": category_id,
                        "rowId": row_id,
                        "question": f"Clue {c}-{r}",
                        "answer": f"Answer {c}-{r}",
                    },
                    headers=owner.headers,
                )
                assert response.status_code == 201, response.text
                cells[(c, r)] = response.json()["id"]

        return game_id, cells

    return _build
