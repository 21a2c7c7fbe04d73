"""Tests for registration, user listing and login over HTTP."""
import pytest

from conftest import TEST_PASSWORD, bearer


def test_login_returns_token_username_and_name(client, user_id):
    response = client.post("/login", json={"username": "test", "password": TEST_PASSWORD})

    assert response.status_code == 200
    body = response.json()
    assert body["username"] == "test"
    assert body["name"] == "name"
    assert body["token"]


@pytest.mark.parametrize("credentials", [
    {"username": "test", "password": "wrong"},
    {"username": "nobody", "password": TEST_PASSWORD},
    {"username": "test"},
    {},
])
def test_login_with_bad_credentials_is_401(client, user_id, credentials):
    response = client.post("/login", json=credentials)

    assert response.status_code == 401
    assert response.json() == {"error": "invalid username or password"}


def test_user_can_be_registered_and_log_in(client):
    response = client.post("/users", json={"username": "mluukkai", "name": "Matti", "password": "salainen"})

    assert response.status_code == 201
    body = response.json()
    assert body["username"] == "mluukkai"
    assert body["posts"] == []
    assert "password" not in body
    assert "password_hash" not in body

    login = client.post("/login", json={"username": "mluukkai", "password": "salainen"})
    assert login.status_code == 200


def test_duplicate_username_is_rejected(client, user_id):
    response = client.post("/users", json={"username": "test", "password": "another"})

    assert response.status_code == 400
    assert response.json() == {"error": "username must be unique"}


@pytest.mark.parametrize("payload", [
    {"username": "ab", "password": "secret"},
    {"username": "valid", "password": "pw"},
    {"password": "secret"},
    {"username": "valid"},
])
def test_invalid_registration_is_rejected(client, payload):
    response = client.post("/users", json=payload)

    assert response.status_code == 400
    assert client.get("/users").json() == []


def test_users_are_listed_with_their_posts(client, seeded_posts, token, user_id):
    client.post("/posts", json={"title": "mine", "url": "http://mine"}, headers=bearer(token))

    users = client.get("/users").json()

    assert len(users) == 1
    assert users[0]["id"] == user_id
    assert [p["title"] for p in users[0]["posts"]] == [
        "HTML is easy",
        "Browser can execute only Javascript",
        "mine",
    ]
