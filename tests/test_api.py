"""Tests for /api endpoints with an in-memory store and fake generators."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from fastapi.testclient import TestClient

from story_doctor.api.deps import get_interpretation_generator, get_question_supplier, get_store
from story_doctor.core.errors import NoQuestionsAvailable
from story_doctor.core.question_supply import QuestionSupplier
from story_doctor.core.schemas_assessment import QuestionSet
from story_doctor.db.store import Store
from story_doctor.main import app
from tests.fakes.fake_generators import RaisingGenerator, ScriptedGenerator, questions_reply
from tests.fixtures_assessment import answers_payload

client = TestClient(app)


@pytest.fixture
def api_store():
    """Fresh store wired into the app, plus a supplier whose provider always fails."""
    store = Store()
    supplier = QuestionSupplier(store, RaisingGenerator(), timeout_seconds=1.0)
    interpreter = ScriptedGenerator("홍길동전과 잘 맞는 독자입니다.")

    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_question_supplier] = lambda: supplier
    app.dependency_overrides[get_interpretation_generator] = lambda: interpreter
    yield store
    app.dependency_overrides.clear()


def start_session(lang: str = "ko") -> dict:
    response = client.post("/api/question-set", json={"workId": "hong-gil-dong", "lang": lang})
    assert response.status_code == 200
    return response.json()


def evaluate(started: dict, binary: bool, likert: int):
    question_set = QuestionSet.model_validate(started["questionSet"])
    return client.post(
        "/api/evaluate",
        json={
            "sessionId": started["sessionId"],
            "questionSetId": question_set.id,
            "answers": answers_payload(question_set, binary, likert),
        },
    )


class TestWorksEndpoints:
    def test_list_works(self):
        response = client.get("/api/works")

        assert response.status_code == 200
        assert [w["id"] for w in response.json()] == ["hong-gil-dong"]

    def test_get_work(self):
        response = client.get("/api/works/hong-gil-dong")

        assert response.status_code == 200
        assert response.json()["title"] == "홍길동전"

    def test_get_unknown_work(self):
        response = client.get("/api/works/nope")

        assert response.status_code == 404
        assert response.json()["detail"] == "Work not found: nope"


class TestQuestionSetEndpoints:
    def test_fallback_questions_and_session(self, api_store):
        data = start_session()

        question_set = data["questionSet"]
        assert question_set["source"] == "fallback"
        assert question_set["workId"] == "hong-gil-dong"
        assert len(question_set["questions"]) == 6

        session = api_store.sessions.get(data["sessionId"])
        assert session.question_set_id == question_set["id"]
        assert session.answers == []

    def test_llm_questions(self, api_store):
        supplier = QuestionSupplier(api_store, ScriptedGenerator(questions_reply(5)))
        app.dependency_overrides[get_question_supplier] = lambda: supplier

        data = start_session("en")

        assert data["questionSet"]["source"] == "llm"
        assert data["questionSet"]["language"] == "en"
        assert len(data["questionSet"]["questions"]) == 5

    def test_second_request_reuses_set_with_new_session(self, api_store):
        first = start_session()
        second = start_session()

        assert first["questionSet"]["id"] == second["questionSet"]["id"]
        assert first["sessionId"] != second["sessionId"]
        assert len(api_store.sessions) == 2

    def test_unknown_work(self, api_store):
        response = client.post("/api/question-set", json={"workId": "nope"})

        assert response.status_code == 404
        assert response.json()["detail"] == "Work not found: nope"

    def test_no_questions_available(self, api_store):
        supplier = AsyncMock()
        supplier.supply_questions.side_effect = NoQuestionsAvailable("hong-gil-dong")
        app.dependency_overrides[get_question_supplier] = lambda: supplier

        response = client.post("/api/question-set", json={"workId": "hong-gil-dong"})

        assert response.status_code == 404
        assert response.json()["detail"] == "No questions available for this work"

    def test_unexpected_error(self, api_store):
        supplier = AsyncMock()
        supplier.supply_questions.side_effect = Exception("boom")
        app.dependency_overrides[get_question_supplier] = lambda: supplier

        response = client.post("/api/question-set", json={"workId": "hong-gil-dong"})

        assert response.status_code == 500
        assert "Failed to generate questions" in response.json()["detail"]

    def test_invalid_language(self, api_store):
        response = client.post("/api/question-set", json={"workId": "hong-gil-dong", "lang": "fr"})

        assert response.status_code == 422

    def test_get_question_set(self, api_store):
        data = start_session()

        response = client.get(f"/api/question-set/{data['questionSet']['id']}")

        assert response.status_code == 200
        assert response.json()["id"] == data["questionSet"]["id"]

    def test_get_unknown_question_set(self, api_store):
        response = client.get("/api/question-set/missing")

        assert response.status_code == 404


class TestEvaluateEndpoint:
    def test_highly_suitable(self, api_store):
        started = start_session()

        response = evaluate(started, binary=True, likert=5)

        assert response.status_code == 200
        data = response.json()
        assert data["score"] == 100
        assert data["label"] == "highly_suitable"
        assert data["warnings"] == []
        assert len(data["topReasons"]) == 2
        assert data["sessionId"] == started["sessionId"]

        session = api_store.sessions.get(started["sessionId"])
        assert session.score == 100
        assert session.completed_at is not None

    def test_unsuitable(self, api_store):
        response = evaluate(start_session(), binary=False, likert=1)

        assert response.status_code == 200
        data = response.json()
        assert data["score"] == 0
        assert data["label"] == "unsuitable"
        assert data["warnings"]

    def test_missing_answer(self, api_store):
        started = start_session()
        question_set = QuestionSet.model_validate(started["questionSet"])
        payload = answers_payload(question_set, True, 5)[1:]

        response = client.post(
            "/api/evaluate",
            json={
                "sessionId": started["sessionId"],
                "questionSetId": question_set.id,
                "answers": payload,
            },
        )

        assert response.status_code == 400
        assert question_set.questions[0].id in response.json()["detail"]

    def test_out_of_range(self, api_store):
        response = evaluate(start_session(), binary=True, likert=6)

        assert response.status_code == 400
        assert "between 1 and 5" in response.json()["detail"]

    def test_unknown_session(self, api_store):
        started = start_session()

        response = client.post(
            "/api/evaluate",
            json={
                "sessionId": "missing",
                "questionSetId": started["questionSet"]["id"],
                "answers": [],
            },
        )

        assert response.status_code == 404
        assert response.json()["detail"] == "Session not found: missing"

    def test_mismatch(self, api_store, hong_gil_dong_set):
        started = start_session()
        api_store.question_sets.set(hong_gil_dong_set)

        response = client.post(
            "/api/evaluate",
            json={
                "sessionId": started["sessionId"],
                "questionSetId": hong_gil_dong_set.id,
                "answers": answers_payload(hong_gil_dong_set, True, 5),
            },
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "Session and question set mismatch"

    def test_unexpected_error(self, api_store):
        with patch("story_doctor.api.evaluate.evaluate_session") as mock_evaluate:
            mock_evaluate.side_effect = Exception("boom")

            response = client.post(
                "/api/evaluate",
                json={"sessionId": "s", "questionSetId": "q", "answers": []},
            )

        assert response.status_code == 500
        assert response.json()["detail"] == "Failed to evaluate answers"


class TestSessionEndpoints:
    def test_get_session(self, api_store):
        started = start_session()

        response = client.get(f"/api/session/{started['sessionId']}")

        assert response.status_code == 200
        data = response.json()
        assert data["session"]["id"] == started["sessionId"]
        assert data["questionSet"]["id"] == started["questionSet"]["id"]

    def test_get_unknown_session(self, api_store):
        response = client.get("/api/session/missing")

        assert response.status_code == 404

    def test_list_sessions_capped(self, api_store):
        for _ in range(12):
            start_session()

        response = client.get("/api/sessions")

        assert response.status_code == 200
        data = response.json()
        assert data["count"] == 12
        assert len(data["sessions"]) == 10

    def test_list_sessions_disabled_in_prod(self, api_store):
        with patch("story_doctor.api.evaluate.get_settings") as mock_settings:
            mock_settings.return_value = MagicMock(STORY_DOCTOR_ENV="prod")

            response = client.get("/api/sessions")

        assert response.status_code == 404


class TestInterpretationEndpoint:
    def test_interpretation(self, api_store):
        started = start_session()
        evaluate(started, binary=True, likert=5)

        response = client.post(f"/api/session/{started['sessionId']}/interpretation?lang=ko")

        assert response.status_code == 200
        data = response.json()
        assert data["available"] is True
        assert data["interpretation"] == "홍길동전과 잘 맞는 독자입니다."

    def test_interpretation_unavailable(self, api_store):
        app.dependency_overrides[get_interpretation_generator] = lambda: RaisingGenerator()
        started = start_session()
        evaluate(started, binary=True, likert=5)

        response = client.post(f"/api/session/{started['sessionId']}/interpretation")

        assert response.status_code == 200
        assert response.json()["available"] is False

    def test_not_completed(self, api_store):
        started = start_session()

        response = client.post(f"/api/session/{started['sessionId']}/interpretation")

        assert response.status_code == 400

    def test_unknown_session(self, api_store):
        response = client.post("/api/session/missing/interpretation")

        assert response.status_code == 404
