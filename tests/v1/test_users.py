# tests/v1/test_users.py
"""Tests for user directory endpoints."""

from __future__ import annotations

from fastapi import status


def test_read_me(client, alice, auth_headers) -> None:
    response = client.get("/api/v1/users/me", headers=auth_headers(alice))
    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {
        "username": "alice",
        "email": "alice@roomchat.io",
        "user_type": "user",
    }


def test_list_users_excludes_caller(client, alice, bob, carol, auth_headers) -> None:
    response = client.get("/api/v1/users/", headers=auth_headers(bob))
    assert response.status_code == status.HTTP_200_OK
    assert response.json() == ["alice", "carol"]
