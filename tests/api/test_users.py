# tests/api/test_users.py
"""Tests for user profile endpoints."""

from fastapi import status


def test_get_user_profile(client, test_user, other_user, auth_token) -> None:
    response = client.get(f"/api/users/{other_user.id}", headers=auth_token)
    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {
        "_id": other_user.id,
        "firstname": "Alan",
        "lastname": "Turing",
        "email": "alan@example.com",
    }


def test_get_user_profile_requires_auth(client, other_user) -> None:
    response = client.get(f"/api/users/{other_user.id}")
    assert response.status_code == status.HTTP_401_UNAUTHORIZED


def test_get_nonexistent_user(client, auth_token) -> None:
    response = client.get("/api/users/424242", headers=auth_token)
    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json()["detail"] == "User not found"
