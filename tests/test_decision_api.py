"""
Tests for the Decision API — HTTP contract, status codes, and camelCase bodies.
"""

import pytest
from fastapi.testclient import TestClient

from app.api.dependencies import (
    get_decision_worker,
    get_question_catalog,
    get_session_store,
)
from app.main import app


@pytest.fixture
def client(worker, store, catalog):
    app.dependency_overrides[get_decision_worker] = lambda: worker
    app.dependency_overrides[get_session_store] = lambda: store
    app.dependency_overrides[get_question_catalog] = lambda: catalog
    yield TestClient(app)
    app.dependency_overrides.clear()


def _start(client, title="Launch the beta"):
    response = client.post("/decision/start", json={"title": title})
    assert response.status_code == 200
    return response.json()


def _answer(client, session_id, question_id, value):
    return client.post(
        "/decision/answer",
        json={"sessionId": session_id, "questionId": question_id, "value": value},
    )


def test_health_check(client):
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["activeSessions"] == 0


def test_list_questions(client, catalog):
    response = client.get("/questions")
    assert response.status_code == 200
    questions = response.json()["questions"]
    assert len(questions) == catalog.total
    choice = next(q for q in questions if q["type"] == "choice")
    assert {"label", "value"} <= set(choice["options"][0])


def test_start_decision(client, catalog):
    data = _start(client)
    assert data["decisionTitle"] == "Launch the beta"
    assert data["totalQuestions"] == catalog.total
    assert len(data["questions"]) == catalog.total
    assert data["sessionId"]
    assert data["startedAt"]


@pytest.mark.parametrize("title", ["x", "y" * 121, "", "     ", " a "])
def test_start_rejects_bad_title(client, title):
    response = client.post("/decision/start", json={"title": title})
    assert response.status_code == 422
    assert response.json()["error"] == "validation_error"


def test_start_trims_title(client):
    data = _start(client, "  Launch the beta  ")
    assert data["decisionTitle"] == "Launch the beta"


def test_answer_flow(client):
    sid = _start(client)["sessionId"]
    response = _answer(client, sid, "feas_1", 7)
    assert response.status_code == 200
    data = response.json()
    assert data["sessionId"] == sid
    assert data["progress"] == {"answered": 1, "total": 10, "percentComplete": 10}
    assert data["nextQuestion"]["id"] == "feas_2"
    assert data["isComplete"] is False


def test_answer_idempotent_over_http(client):
    sid = _start(client)["sessionId"]
    _answer(client, sid, "feas_1", 7)
    data = _answer(client, sid, "feas_1", 7).json()
    assert data["progress"]["answered"] == 1


@pytest.mark.parametrize("value", [0, 11])
def test_answer_value_out_of_range(client, value):
    sid = _start(client)["sessionId"]
    assert _answer(client, sid, "feas_1", value).status_code == 422


def test_answer_unknown_question(client):
    sid = _start(client)["sessionId"]
    response = _answer(client, sid, "bogus", 5)
    assert response.status_code == 422
    assert response.json()["error"] == "validation_error"


def test_answer_unknown_session(client):
    response = _answer(client, "no-such-session", "feas_1", 5)
    assert response.status_code == 404
    assert response.json()["error"] == "session_not_found"


def test_result_without_answers(client):
    sid = _start(client)["sessionId"]
    response = client.get(f"/decision/{sid}/result")
    assert response.status_code == 400
    assert response.json()["error"] == "no_answers"


def test_result_unknown_session(client):
    assert client.get("/decision/nope/result").status_code == 404


def test_full_flow_and_cached_result(client, valid_answers):
    sid = _start(client)["sessionId"]
    last = None
    for question_id, value in valid_answers.items():
        last = _answer(client, sid, question_id, value).json()
    assert last["isComplete"] is True
    assert last["nextQuestion"] is None

    first = client.get(f"/decision/{sid}/result").json()
    second = client.get(f"/decision/{sid}/result").json()

    assert first["cached"] is False
    assert second["cached"] is True
    assert first["result"] == second["result"]

    result = first["result"]
    assert result["sessionId"] == sid
    assert result["decisionTitle"] == "Launch the beta"
    assert result["totalAnswers"] == 10
    assert result["recommendation"]["decision"] == "PROCEED"
    assert result["risk"]["severity"] == "LOW"
    assert result["risk"]["safe"] is True
    assert result["confidence"]["label"] == "HIGH"
    assert set(result["scores"]) == {"feasibility", "risk", "impact", "resources", "urgency"}


def test_answer_after_completion_conflicts(client, valid_answers):
    sid = _start(client)["sessionId"]
    for question_id, value in valid_answers.items():
        _answer(client, sid, question_id, value)
    response = _answer(client, sid, "feas_1", 2)
    assert response.status_code == 409
    assert response.json()["error"] == "session_complete"


def test_expired_session_over_http(client, clock, store):
    sid = _start(client)["sessionId"]
    clock.advance(store.ttl.total_seconds() + 1)

    response = _answer(client, sid, "feas_1", 5)
    assert response.status_code == 404
    assert response.json()["error"] == "session_expired"
    assert client.get(f"/decision/{sid}/result").status_code == 404


def test_partial_result_is_provisional_over_http(client, store):
    sid = _start(client)["sessionId"]
    _answer(client, sid, "impact_1", 8)

    response = client.get(f"/decision/{sid}/result")
    assert response.status_code == 200
    data = response.json()
    assert data["cached"] is False
    assert data["result"]["totalAnswers"] == 1
    assert client.get(f"/decision/{sid}/result").json()["cached"] is False
    assert store.get(sid).result is None
    assert _answer(client, sid, "impact_2", 10).json()["progress"]["answered"] == 2
