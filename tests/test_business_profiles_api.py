from tests.conftest import PROFILE

URL = "/api/v1/business-profiles/"


def test_create_profile(client, auth_headers):
    response = client.post(URL, json=PROFILE, headers=auth_headers)

    assert response.status_code == 201
    body = response.json()
    assert body["business_name"] == "Acme Bakery"
    assert body["employee_count"] == 12
    assert body["contact_email"] is None


def test_second_profile_conflicts(client, auth_headers, profile):
    response = client.post(URL, json=PROFILE, headers=auth_headers)
    assert response.status_code == 409


def test_create_profile_validation(client, auth_headers):
    response = client.post(URL, json={**PROFILE, "business_name": "A", "employee_count": -1}, headers=auth_headers)

    assert response.status_code == 400
    fields = {d["field"] for d in response.json()["error"]["details"]}
    assert fields == {"business_name", "employee_count"}


def test_read_own_profile(client, auth_headers, profile):
    response = client.get(URL + "me", headers=auth_headers)

    assert response.status_code == 200
    assert response.json()["id"] == profile["id"]


def test_read_missing_profile(client, auth_headers):
    response = client.get(URL + "me", headers=auth_headers)
    assert response.status_code == 404


def test_profiles_are_per_user(client, other_headers, profile):
    response = client.get(URL + "me", headers=other_headers)
    assert response.status_code == 404


def test_partial_update(client, auth_headers, profile):
    response = client.put(URL + "me", json={"employee_count": 20, "city": "Mombasa"}, headers=auth_headers)

    assert response.status_code == 200
    body = response.json()
    assert body["employee_count"] == 20
    assert body["city"] == "Mombasa"
    assert body["business_name"] == PROFILE["business_name"]


def test_empty_update_rejected(client, auth_headers, profile):
    response = client.put(URL + "me", json={}, headers=auth_headers)
    assert response.status_code == 400
