# tests/v1/test_messages.py
"""Tests for group message endpoints."""

from __future__ import annotations

from fastapi import status
from sqlalchemy.exc import OperationalError

from roomchat.api.v1.dependencies import GENERIC_ERROR_DETAIL
from roomchat.repositories import MessageRepository


def _post(client, room_id, headers, text):
    return client.post(f"/api/v1/groups/{room_id}/messages", json={"text": text}, headers=headers)


def test_send_message(client, team_room, alice, auth_headers) -> None:
    response = _post(client, team_room, auth_headers(alice), "hello")
    assert response.status_code == status.HTTP_201_CREATED
    data = response.json()
    assert data["room_id"] == team_room
    assert data["text"] == "hello"
    assert data["sender_username"] == "alice"
    assert data["unread"] is False


def test_view_marks_messages_read(client, team_room, alice, bob, auth_headers, unread_for) -> None:
    for text in ("one", "two", "three"):
        _post(client, team_room, auth_headers(alice), text)

    first = client.get(f"/api/v1/groups/{team_room}/messages", headers=auth_headers(bob))
    assert first.status_code == status.HTTP_200_OK
    assert [(m["text"], m["unread"]) for m in first.json()] == [
        ("one", True),
        ("two", True),
        ("three", True),
    ]
    assert unread_for("bob", team_room) == 0

    second = client.get(f"/api/v1/groups/{team_room}/messages", headers=auth_headers(bob))
    assert [m["unread"] for m in second.json()] == [False, False, False]

    own_view = client.get(f"/api/v1/groups/{team_room}/messages", headers=auth_headers(alice))
    assert [m["unread"] for m in own_view.json()] == [False, False, False]


def test_non_member_is_forbidden(client, team_room, carol, auth_headers) -> None:
    headers = auth_headers(carol)

    sent = _post(client, team_room, headers, "let me in")
    assert sent.status_code == status.HTTP_403_FORBIDDEN
    assert sent.json()["detail"] == "Not a member of this group"

    viewed = client.get(f"/api/v1/groups/{team_room}/messages", headers=headers)
    assert viewed.status_code == status.HTTP_403_FORBIDDEN

    marked = client.post(f"/api/v1/groups/{team_room}/read", headers=headers)
    assert marked.status_code == status.HTTP_403_FORBIDDEN


def test_send_message_validation(client, team_room, alice, auth_headers) -> None:
    empty = _post(client, team_room, auth_headers(alice), "")
    assert empty.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    blank = _post(client, team_room, auth_headers(alice), "   ")
    assert blank.status_code == status.HTTP_400_BAD_REQUEST


def test_mark_read(client, team_room, alice, bob, auth_headers, unread_for) -> None:
    sent = _post(client, team_room, auth_headers(alice), "ping").json()

    response = client.post(f"/api/v1/groups/{team_room}/read", headers=auth_headers(bob))
    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"room_id": team_room, "last_read_message_id": sent["message_id"]}
    assert unread_for("bob", team_room) == 0


def test_store_failure_returns_generic_error(
    client, team_room, alice, auth_headers, monkeypatch
) -> None:
    """Storage details never reach the client."""

    def boom(self, room_user_id, text, sent_at):
        raise OperationalError("INSERT INTO message", {}, Exception("disk I/O error"))

    monkeypatch.setattr(MessageRepository, "insert", boom)

    response = _post(client, team_room, auth_headers(alice), "hello")
    assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert response.json() == {"detail": GENERIC_ERROR_DETAIL}
