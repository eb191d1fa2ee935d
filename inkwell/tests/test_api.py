"""
Tests for the HTTP API.

Each test gets its own application backed by a fresh SQLite file.
"""

import pytest
from fastapi.testclient import TestClient

from inkwell.config import Settings
from inkwell.main import create_app
from inkwell.stories.database_models import StoryRecord


@pytest.fixture
def client(tmp_path):
    settings = Settings(
        DATABASE_URL=f"sqlite+aiosqlite:///{tmp_path / 'inkwell.db'}",
        LOG_LEVEL="WARNING",
    )
    with TestClient(create_app(settings)) as test_client:
        yield test_client


def register(client, email="ada@example.com", username="ada", authhash="h4sh"):
    return client.post("/auth/register", json={
        "email": email,
        "username": username,
        "full_name": "Ada Lovelace",
        "authhash": authhash,
    })


def start(client, questions=None, user_id=1):
    if questions is None:
        questions = [
            {"id": 1, "question": "Capital of France?", "correct_answer": "Paris"},
            {"id": 2, "question": "6 x 7?", "correct_answer": "42"},
        ]
    return client.post("/assessments/start", json={
        "user_id": user_id,
        "title": "Quiz",
        "description": "Warm-up",
        "questions": questions,
    })


def submit(client, session_id, question_id, answer):
    return client.post("/assessments/submit", json={
        "session_id": session_id,
        "question_id": question_id,
        "answer": answer,
    })


async def seed_stories(database, *titles):
    async with database.session() as session:
        for title in titles:
            session.add(StoryRecord(title=title, author="Anon", summary="", content="Once upon a time"))
        await session.commit()


def test_root(client):
    response = client.get("/")
    assert response.status_code == 200
    assert "Inkwell" in response.json()["message"]


class TestAccounts:

    def test_register(self, client):
        response = register(client)
        assert response.status_code == 201
        assert response.json() == {"message": "User registered successfully"}

    def test_register_duplicate_email(self, client):
        register(client)
        response = register(client, username="someone-else")
        assert response.status_code == 409
        assert response.json()["error"] == "user already exists"

    def test_register_duplicate_username(self, client):
        register(client)
        response = register(client, email="other@example.com")
        assert response.status_code == 409

    def test_register_invalid_email(self, client):
        response = register(client, email="not-an-email")
        assert response.status_code == 400
        assert response.json()["error"] == "Invalid input"

    def test_login(self, client):
        register(client)
        response = client.post("/auth/login", json={"email": "ada@example.com", "authhash": "h4sh"})
        assert response.status_code == 200
        body = response.json()
        assert body["email"] == "ada@example.com"
        assert body["username"] == "ada"
        assert "authhash" not in body
        assert "hashed_authhash" not in body
        assert "salt" not in body

    def test_login_wrong_credential(self, client):
        register(client)
        response = client.post("/auth/login", json={"email": "ada@example.com", "authhash": "nope"})
        assert response.status_code == 401
        assert response.json()["error"] == "invalid credentials"

    def test_login_unknown_email(self, client):
        response = client.post("/auth/login", json={"email": "ghost@example.com", "authhash": "h4sh"})
        assert response.status_code == 401

    def test_list_users(self, client):
        assert client.get("/user").json() == []
        register(client)
        register(client, email="bob@example.com", username="bob")

        users = client.get("/user").json()
        assert [u["username"] for u in users] == ["ada", "bob"]
        assert all("salt" not in u for u in users)


class TestAssessments:

    def test_start(self, client):
        response = start(client)
        assert response.status_code == 200
        body = response.json()
        assert body["session_id"]
        assert [q["id"] for q in body["questions"]] == [1, 2]
        assert body["questions"][0]["question"] == "Capital of France?"

    def test_start_assigns_missing_ids(self, client):
        response = start(client, questions=[
            {"question": "a", "correct_answer": "A"},
            {"id": 4, "question": "b", "correct_answer": "B"},
        ])
        assert response.status_code == 200
        assert [q["id"] for q in response.json()["questions"]] == [5, 4]

    def test_start_tokens_differ(self, client):
        first = start(client).json()["session_id"]
        second = start(client).json()["session_id"]
        assert first != second

    @pytest.mark.parametrize("questions", [
        [],
        [{"id": 1, "question": "q"}],
        [{"id": 1, "question": "q", "correct_answer": ""}],
        [{"id": 1, "correct_answer": "a"}, {"id": 1, "correct_answer": "b"}],
        [{"id": 0, "correct_answer": "a"}],
        [{"id": 2**31, "correct_answer": "a"}],
        [{"id": 2**70, "correct_answer": "a"}],
    ])
    def test_start_rejects_invalid_questions(self, client, questions):
        response = start(client, questions=questions)
        assert response.status_code == 400
        assert response.json()["error"] == "Invalid input"

    def test_start_rejects_out_of_range_user_id(self, client):
        response = start(client, user_id=2**70)
        assert response.status_code == 400
        assert response.json()["error"] == "Invalid input"

    def test_start_accepts_largest_ids(self, client):
        response = start(client, user_id=2**31 - 1, questions=[
            {"id": 2**31 - 1, "question": "q", "correct_answer": "a"},
        ])
        assert response.status_code == 200
        assert [q["id"] for q in response.json()["questions"]] == [2**31 - 1]

    def test_scenario(self, client):
        session_id = start(client).json()["session_id"]

        response = submit(client, session_id, 1, "Paris")
        assert response.status_code == 200
        assert response.json() == {"is_correct": True, "feedback": "Correct"}

        response = submit(client, session_id, 2, "43")
        assert response.status_code == 200
        assert response.json() == {"is_correct": False, "feedback": "Incorrect"}

        response = submit(client, session_id, 99, "x")
        assert response.status_code == 404
        assert response.json()["error"] == "Question not found"

        response = submit(client, "bogus", 1, "Paris")
        assert response.status_code == 404
        assert response.json()["error"] == "Session not found"

    def test_submit_is_case_sensitive(self, client):
        session_id = start(client).json()["session_id"]
        response = submit(client, session_id, 1, "paris")
        assert response.json()["is_correct"] is False

    def test_submit_missing_field(self, client):
        response = client.post("/assessments/submit", json={"session_id": "x", "question_id": 1})
        assert response.status_code == 400

    def test_get_assessment(self, client):
        started = start(client).json()

        response = client.get(f"/assessments/{started['session_id']}")
        assert response.status_code == 200
        body = response.json()
        assert body["session_id"] == started["session_id"]
        assert body["user_id"] == 1
        assert body["title"] == "Quiz"
        assert body["description"] == "Warm-up"
        assert body["questions"] == started["questions"]

    def test_get_unknown_assessment(self, client):
        response = client.get("/assessments/never-issued")
        assert response.status_code == 404
        assert response.json()["error"] == "Assessment not found"

    def test_session_token_is_case_sensitive(self, client):
        session_id = start(client).json()["session_id"]
        response = client.get(f"/assessments/{session_id.upper()}")
        assert response.status_code == 404

    def test_answers_are_recorded(self, client):
        session_id = start(client, user_id=7).json()["session_id"]
        submit(client, session_id, 1, "Paris")
        submit(client, session_id, 1, "Paris")
        submit(client, session_id, 2, "41")

        response = client.get(f"/assessments/{session_id}/answers")
        assert response.status_code == 200
        answers = response.json()
        assert [(a["question_id"], a["is_correct"], a["feedback"]) for a in answers] == [
            (1, True, "Correct"),
            (1, True, "Correct"),
            (2, False, "Incorrect"),
        ]
        assert len({a["id"] for a in answers}) == 3
        assert all(a["user_id"] == 7 for a in answers)

    def test_answers_of_unknown_session(self, client):
        response = client.get("/assessments/never-issued/answers")
        assert response.status_code == 404
        assert response.json()["error"] == "Session not found"

    def test_rejected_submission_records_nothing(self, client):
        session_id = start(client).json()["session_id"]
        submit(client, session_id, 99, "x")
        assert client.get(f"/assessments/{session_id}/answers").json() == []


class TestStories:

    def test_list_empty(self, client):
        response = client.get("/stories")
        assert response.status_code == 200
        assert response.json() == []

    def test_list(self, client):
        client.portal.call(seed_stories, client.app.state.database, "The Raven", "Ozymandias")

        stories = client.get("/stories").json()
        assert [s["title"] for s in stories] == ["The Raven", "Ozymandias"]
        assert stories[0]["author"] == "Anon"
