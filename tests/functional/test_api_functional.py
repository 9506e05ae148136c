"""End-to-end HTTP tests through the FastAPI application.

Bodies use the camelCase wire names a browser client sends.
"""

from __future__ import annotations

from typing import Any, Dict

import pytest
from fastapi.testclient import TestClient

from formbuilder.logic.events import get_buffered_events
from formbuilder.main import create_app


@pytest.fixture
def client():
    with TestClient(create_app()) as c:
        yield c


def _form_body(form_id: str = "survey-1") -> Dict[str, Any]:
    return {
        "id": form_id,
        "title": "Customer survey",
        "questions": [
            {
                "id": "q1",
                "title": "Do you like us?",
                "code": "LIKE",
                "questionType": "yes_no",
                "required": True,
            },
            {
                "id": "q2",
                "title": "What should we improve?",
                "code": "IMPROVE",
                "questionType": "free_text",
                "conditional": {"dependsOn": "q1", "operator": "equals", "value": "false"},
            },
            {
                "id": "q3",
                "title": "Favourite colour",
                "code": "COLOR",
                "questionType": "single_choice",
                "options": [
                    {"id": "o1", "answer": "Red", "order": 1},
                    {"id": "o2", "answer": "Blue", "order": 2},
                ],
            },
        ],
    }


def _problem(response) -> Dict[str, Any]:
    assert response.headers["content-type"].startswith("application/problem+json")
    return response.json()


def test_health_reports_database(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok", "database": "ok"}


def test_request_id_is_echoed_or_assigned(client):
    echoed = client.get("/health", headers={"X-Request-Id": "abc-123"})
    assert echoed.headers["X-Request-Id"] == "abc-123"
    assert client.get("/health").headers.get("X-Request-Id")


def test_save_and_fetch_form(client):
    saved = client.post("/api/forms", json=_form_body())
    assert saved.status_code == 200
    body = saved.json()
    assert body["questions"][0]["questionType"] == "yes_no"
    assert body["questions"][1]["conditional"]["dependsOn"] == "q1"

    fetched = client.get("/api/forms/survey-1")
    assert fetched.status_code == 200
    assert fetched.json()["title"] == "Customer survey"
    assert [f["id"] for f in client.get("/api/forms").json()] == ["survey-1"]

    events = get_buffered_events()
    assert events[-1] == {"type": "form.saved", "payload": {"form_id": "survey-1", "created": True}}


def test_invalid_form_is_rejected_with_every_error(client):
    body = _form_body()
    body["title"] = "ab"
    body["questions"][2]["code"] = "LIKE"

    response = client.post("/api/forms", json=body)
    assert response.status_code == 422
    problem = _problem(response)
    assert problem["code"] == "FORM_INVALID"
    fields = [e["field"] for e in problem["errors"]]
    assert fields == ["title", "questions[0].code", "questions[2].code"]
    assert client.get("/api/forms/survey-1").status_code == 404


def test_malformed_body_is_a_request_validation_problem(client):
    body = _form_body()
    body["questions"][0]["questionType"] = "slider"

    response = client.post("/api/forms", json=body)
    assert response.status_code == 422
    assert _problem(response)["title"] == "Invalid Request"


def test_unknown_form_is_not_found(client):
    response = client.get("/api/forms/missing")
    assert response.status_code == 404
    assert _problem(response)["code"] == "FORM_NOT_FOUND"


def test_validate_field_endpoint(client):
    bad = client.post("/api/forms/validate-field", json={"field": "code", "value": "bad code"})
    assert bad.json() == {"field": "code", "error": "Only letters, numbers, _ and -"}

    good = client.post("/api/forms/validate-field", json={"field": "title", "value": "Survey"})
    assert good.json() == {"field": "title", "error": None}


def test_visibility_endpoint_tracks_conditionals(client):
    client.post("/api/forms", json=_form_body())

    initial = client.post("/api/forms/survey-1/visibility", json={"answers": []}).json()
    assert initial["visibleQuestionIds"] == ["q1", "q3"]
    assert initial["progress"] == {"answered": 0, "visible": 2, "percent": 0}

    answers = {"answers": [{"questionId": "q1", "value": False}]}
    after = client.post("/api/forms/survey-1/visibility", json=answers).json()
    assert after["visibleQuestionIds"] == ["q1", "q2", "q3"]
    assert after["progress"]["percent"] == 33


def test_submit_response_flow(client):
    client.post("/api/forms", json=_form_body())

    missing = client.post("/api/responses", json={"formId": "survey-1", "answers": []})
    assert missing.status_code == 422
    problem = _problem(missing)
    assert problem["code"] == "RESPONSE_INVALID"
    assert problem["errors"] == [
        {"field": "question_LIKE", "message": 'The question "Do you like us?" is required'}
    ]

    accepted = client.post(
        "/api/responses",
        json={"formId": "survey-1", "answers": [{"questionId": "q1", "value": True}]},
    )
    assert accepted.status_code == 201
    stored = accepted.json()
    assert stored["id"]
    assert stored["answers"] == [{"questionId": "q1", "value": True}]

    listed = client.get("/api/responses", params={"formId": "survey-1"}).json()
    assert [r["id"] for r in listed] == [stored["id"]]
    assert get_buffered_events()[-1]["type"] == "response.submitted"


def test_submit_response_for_unknown_form(client):
    response = client.post("/api/responses", json={"formId": "nope", "answers": []})
    assert response.status_code == 404
    assert _problem(response)["code"] == "FORM_NOT_FOUND"


def test_duplicate_response_id_is_a_storage_failure(client):
    client.post("/api/forms", json=_form_body())
    body = {"id": "fixed", "formId": "survey-1", "answers": [{"questionId": "q1", "value": False}]}

    assert client.post("/api/responses", json=body).status_code == 201
    again = client.post("/api/responses", json=body)
    assert again.status_code == 500
    assert _problem(again)["code"] == "STORAGE_FAILURE"


def test_results_aggregate_submissions(client):
    client.post("/api/forms", json=_form_body())
    for like, color in ((True, "Red"), (False, "Blue"), (True, "Red")):
        client.post(
            "/api/responses",
            json={
                "formId": "survey-1",
                "answers": [
                    {"questionId": "q1", "value": like},
                    {"questionId": "q3", "value": color},
                ],
            },
        )

    summary = client.get("/api/forms/survey-1/results").json()
    assert summary["responseCount"] == 3
    by_code = {q["code"]: q for q in summary["questions"]}
    assert by_code["LIKE"]["data"] == {"yes": 2, "no": 1}
    assert by_code["COLOR"] == {
        "questionId": "q3",
        "code": "COLOR",
        "type": "choices",
        "data": {"Red": 2, "Blue": 1},
    }


def test_delete_form_removes_responses(client):
    client.post("/api/forms", json=_form_body())
    client.post(
        "/api/responses",
        json={"formId": "survey-1", "answers": [{"questionId": "q1", "value": True}]},
    )

    deleted = client.delete("/api/forms/survey-1")
    assert deleted.json() == {"success": True}
    assert client.get("/api/forms/survey-1").status_code == 404
    assert client.get("/api/responses", params={"formId": "survey-1"}).json() == []

    # Deleting again still succeeds
    assert client.delete("/api/forms/survey-1").json() == {"success": True}
