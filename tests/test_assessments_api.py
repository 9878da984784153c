from sme_assessment.models.assessment import Assessment
from tests.conftest import answer_all

URL = "/api/v1/assessments/"


def _create(client, headers):
    response = client.post(URL, headers=headers)
    assert response.status_code == 201
    return response.json()


def test_create_requires_business_profile(client, auth_headers, survey):
    response = client.post(URL, headers=auth_headers)

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "VALIDATION_ERROR"


def test_create_returns_draft_with_survey(client, auth_headers, profile, survey):
    body = _create(client, auth_headers)

    assert body["status"] == "draft"
    assert [t["name"] for t in body["themes"]] == ["Market", "Finance"]
    market_questions = body["themes"][0]["questions"]
    assert [q["text"] for q in market_questions] == [
        "We know our customers.",
        "We track competitors.",
        "Sales are unpredictable.",
    ]
    assert "reverse_scored" not in market_questions[0]


def test_inactive_questions_are_hidden(client, db, auth_headers, profile, survey):
    survey["questions"][1].is_active = False
    db.commit()

    body = _create(client, auth_headers)

    assert len(body["themes"][0]["questions"]) == 2


def test_save_responses_moves_to_in_progress(client, auth_headers, profile, survey):
    created = _create(client, auth_headers)

    response = answer_all(client, auth_headers, created["id"], survey["questions"][:2], [3, 4])

    assert response.status_code == 200
    assert response.json() == {
        "id": created["id"],
        "status": "in_progress",
        "completed_responses": 2,
        "total_questions": 5,
    }


def test_save_responses_overwrites_existing_answer(client, auth_headers, profile, survey):
    created = _create(client, auth_headers)
    question = survey["questions"][0]
    answer_all(client, auth_headers, created["id"], [question], [1])

    response = answer_all(client, auth_headers, created["id"], [question], [5])

    assert response.json()["completed_responses"] == 1


def test_save_responses_rejects_out_of_range_score(client, auth_headers, profile, survey):
    created = _create(client, auth_headers)

    response = answer_all(client, auth_headers, created["id"], survey["questions"][:1], [6])
    assert response.status_code == 400


def test_save_responses_rejects_empty_list(client, auth_headers, profile, survey):
    created = _create(client, auth_headers)

    response = client.put(f"{URL}{created['id']}/responses", json={"responses": []}, headers=auth_headers)
    assert response.status_code == 400


def test_save_responses_rejects_unknown_question(client, auth_headers, profile, survey):
    created = _create(client, auth_headers)
    payload = {"responses": [{"question_id": 9999, "score": 3}]}

    response = client.put(f"{URL}{created['id']}/responses", json=payload, headers=auth_headers)

    assert response.status_code == 400
    assert response.json()["error"]["details"][0]["field"] == "question_id"


def test_submit_incomplete(client, auth_headers, profile, survey):
    created = _create(client, auth_headers)
    answer_all(client, auth_headers, created["id"], survey["questions"][:3], [3, 3, 3])

    response = client.post(f"{URL}{created['id']}/submit", headers=auth_headers)

    assert response.status_code == 400
    error = response.json()["error"]
    assert error["message"] == "Incomplete assessment"
    assert error["details"] == [{"field": "responses", "message": "Missing 2 responses"}]


def test_submit_scores_assessment(completed_assessment):
    assert completed_assessment["status"] == "completed"
    assert completed_assessment["completed_at"]
    assert completed_assessment["summary"] == {
        "composite_mean": 4.33,
        "composite_percentage": 83.33,
        "performance_band": "strong",
    }
    assert completed_assessment["theme_scores"] == [
        {
            "theme_id": completed_assessment["theme_scores"][0]["theme_id"],
            "theme_name": "Market",
            "mean_score": 4.0,
            "percentage": 75.0,
            "performance_band": "moderate",
        },
        {
            "theme_id": completed_assessment["theme_scores"][1]["theme_id"],
            "theme_name": "Finance",
            "mean_score": 4.5,
            "percentage": 87.5,
            "performance_band": "strong",
        },
    ]


def test_resubmit_is_idempotent(client, auth_headers, completed_assessment):
    response = client.post(f"{URL}{completed_assessment['id']}/submit", headers=auth_headers)

    assert response.status_code == 200
    assert response.json()["summary"] == completed_assessment["summary"]


def test_completed_assessment_is_read_only(client, auth_headers, survey, completed_assessment):
    response = answer_all(client, auth_headers, completed_assessment["id"], survey["questions"][:1], [1])
    assert response.status_code == 409


def test_results(client, auth_headers, completed_assessment):
    response = client.get(f"{URL}{completed_assessment['id']}/results", headers=auth_headers)

    assert response.status_code == 200
    body = response.json()
    assert body["business_profile"]["name"] == "Acme Bakery"
    assert body["summary"]["performance_band"] == "strong"
    assert [ts["theme_name"] for ts in body["theme_scores"]] == ["Market", "Finance"]
    grouped = {group["theme_name"]: group["responses"] for group in body["responses"]}
    # Raw answers are returned, not the reverse-scored values
    assert [r["score"] for r in grouped["Market"]] == [4, 4, 2]
    assert [r["score"] for r in grouped["Finance"]] == [5, 4]


def test_results_require_completion(client, auth_headers, profile, survey):
    created = _create(client, auth_headers)

    response = client.get(f"{URL}{created['id']}/results", headers=auth_headers)
    assert response.status_code == 404


def test_detail(client, auth_headers, profile, survey):
    created = _create(client, auth_headers)

    response = client.get(f"{URL}{created['id']}", headers=auth_headers)

    assert response.status_code == 200
    body = response.json()
    assert body["business_profile"] == {"id": profile["id"], "name": "Acme Bakery", "sector": "Food & Beverage"}
    assert body["completed_at"] is None


def test_other_users_cannot_see_assessment(client, auth_headers, other_headers, completed_assessment):
    assessment_id = completed_assessment["id"]

    assert client.get(f"{URL}{assessment_id}", headers=other_headers).status_code == 404
    assert client.get(f"{URL}{assessment_id}/results", headers=other_headers).status_code == 404
    assert client.post(f"{URL}{assessment_id}/submit", headers=other_headers).status_code == 404
    assert client.delete(f"{URL}{assessment_id}", headers=other_headers).status_code == 404


def test_list_with_pagination(client, auth_headers, profile, survey):
    for _ in range(3):
        _create(client, auth_headers)

    response = client.get(URL, params={"page": 2, "limit": 2}, headers=auth_headers)

    assert response.status_code == 200
    body = response.json()
    assert len(body["data"]) == 1
    assert body["pagination"] == {
        "page": 2,
        "limit": 2,
        "total": 3,
        "total_pages": 2,
        "has_next": False,
        "has_prev": True,
    }


def test_list_filters_by_status_and_includes_summary(client, auth_headers, completed_assessment):
    _create(client, auth_headers)

    response = client.get(URL, params={"status": "completed"}, headers=auth_headers)

    data = response.json()["data"]
    assert [a["id"] for a in data] == [completed_assessment["id"]]
    assert data[0]["summary"]["composite_mean"] == 4.33


def test_list_rejects_unknown_status(client, auth_headers):
    response = client.get(URL, params={"status": "archived"}, headers=auth_headers)
    assert response.status_code == 400


def test_soft_delete(client, db, auth_headers, completed_assessment):
    assessment_id = completed_assessment["id"]

    response = client.delete(f"{URL}{assessment_id}", headers=auth_headers)

    assert response.status_code == 204
    assert client.get(f"{URL}{assessment_id}", headers=auth_headers).status_code == 404
    assert client.get(URL, headers=auth_headers).json()["pagination"]["total"] == 0
    row = db.get(Assessment, assessment_id)
    assert row is not None
    assert row.deleted_at is not None


def test_admin_recompute(client, db, admin_headers, survey, completed_assessment):
    market, finance = survey["themes"]
    finance.weight = 1.0
    db.commit()

    response = client.post(
        "/internal/scoring/recompute",
        params={"assessment_id": completed_assessment["id"]},
        headers=admin_headers,
    )

    assert response.status_code == 200
    body = response.json()
    assert body["summary"]["composite_mean"] == 4.25
    assert body["theme_scores"] == 2


def test_recompute_requires_admin(client, auth_headers, completed_assessment):
    response = client.post(
        "/internal/scoring/recompute",
        params={"assessment_id": completed_assessment["id"]},
        headers=auth_headers,
    )
    assert response.status_code == 403
