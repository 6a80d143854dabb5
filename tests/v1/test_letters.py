"""API tests for the anonymous letters board."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from fastapi.testclient import TestClient

from mindwell.models import Letter
from mindwell.services.letter_board import LETTER_BLOCKED_MESSAGE, REPLY_BLOCKED_MESSAGE
from tests.conftest import TEST_HANDLE, FakeGenerator

LETTERS = "/api/v1/letters"
UNKNOWN_ID = "a" * 20


def _post_letter(client: TestClient, **overrides: Any):
    payload = {"content": "To whoever needs it: you are doing better than you think.",
               "username": "ana"}
    payload.update(overrides)
    return client.post(LETTERS, json=payload)


def _delete(client: TestClient, letter_id: str, body: dict[str, Any] | None):
    if body is None:
        return client.request("DELETE", f"{LETTERS}/{letter_id}")
    return client.request("DELETE", f"{LETTERS}/{letter_id}", json=body)


class TestSubmitLetter:
    def test_submit_creates_letter(self, client: TestClient) -> None:
        response = _post_letter(client)

        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "Letter posted successfully!"
        assert len(body["id"]) == 20

        listed = client.get(LETTERS).json()
        assert len(listed) == 1
        letter = listed[0]
        assert letter["id"] == body["id"]
        assert letter["username"] == "ana"
        assert letter["title"] == "Untitled"
        assert letter["mood"] == "Neutral"
        assert letter["likes"] == 0
        assert letter["replies"] == []
        assert letter["replyCount"] == 0
        assert letter["timestamp"]

    def test_submit_keeps_title_and_mood(self, client: TestClient) -> None:
        _post_letter(client, title="Small wins", mood="Hopeful")

        letter = client.get(LETTERS).json()[0]
        assert letter["title"] == "Small wins"
        assert letter["mood"] == "Hopeful"

    def test_missing_content_is_rejected(self, client: TestClient) -> None:
        response = client.post(LETTERS, json={"username": "ana"})

        assert response.status_code == 400
        assert "content" in response.json()["detail"]

    def test_blank_content_is_rejected(self, client: TestClient) -> None:
        assert _post_letter(client, content="   ").status_code == 400

    def test_missing_username_is_rejected(self, client: TestClient) -> None:
        response = client.post(LETTERS, json={"content": "hello"})

        assert response.status_code == 400
        assert response.json()["detail"] == "Username is required."

    def test_flagged_letter_is_rejected_and_not_stored(
        self, client: TestClient, generator: FakeGenerator
    ) -> None:
        generator.text = "FLAGGED"

        response = _post_letter(client, content="something cruel")

        assert response.status_code == 400
        assert response.json()["detail"] == LETTER_BLOCKED_MESSAGE
        assert client.get(LETTERS).json() == []

    def test_moderation_outage_rejects_letter(
        self, client: TestClient, generator: FakeGenerator
    ) -> None:
        generator.enabled = False

        response = _post_letter(client)

        assert response.status_code == 400
        assert response.json()["detail"] == LETTER_BLOCKED_MESSAGE

    def test_unexpected_moderation_failure_rejects_letter(
        self, client: TestClient, generator: FakeGenerator
    ) -> None:
        generator.error = RuntimeError("sdk blew up")

        response = _post_letter(client)

        assert response.status_code == 400
        assert response.json()["detail"] == LETTER_BLOCKED_MESSAGE
        assert client.get(LETTERS).json() == []

    def test_signed_in_author_uses_verified_handle(
        self, client: TestClient, auth_headers: dict[str, str]
    ) -> None:
        response = client.post(
            LETTERS,
            json={"content": "Posting while signed in.", "username": "someone-else"},
            headers=auth_headers,
        )

        assert response.status_code == 201
        assert client.get(LETTERS).json()[0]["username"] == TEST_HANDLE

    def test_invalid_token_is_unauthorized(self, client: TestClient) -> None:
        response = client.post(
            LETTERS,
            json={"content": "hello", "username": "ana"},
            headers={"Authorization": "Bearer not-a-token"},
        )

        assert response.status_code == 401


class TestListLetters:
    def test_latest_is_newest_first(
        self, client: TestClient, make_letter: Callable[..., Letter]
    ) -> None:
        ids = [make_letter(f"letter {i}").id for i in range(3)]

        listed = client.get(LETTERS, params={"sort": "latest"}).json()

        assert [letter["id"] for letter in listed] == list(reversed(ids))

    def test_popular_orders_by_likes(
        self, client: TestClient, make_letter: Callable[..., Letter]
    ) -> None:
        quiet = make_letter("quiet").id
        loved = make_letter("loved").id
        client.post(f"{LETTERS}/{quiet}/like")
        client.post(f"{LETTERS}/{loved}/like")
        client.post(f"{LETTERS}/{loved}/like")

        listed = client.get(LETTERS, params={"sort": "popular"}).json()

        assert [letter["id"] for letter in listed] == [loved, quiet]
        assert listed[0]["likes"] == 2

    def test_pages_with_limit(
        self, client: TestClient, make_letter: Callable[..., Letter]
    ) -> None:
        for i in range(7):
            make_letter(f"letter {i}")

        first = client.get(LETTERS, params={"page": 1, "limit": 5}).json()
        second = client.get(LETTERS, params={"page": 2, "limit": 5}).json()
        third = client.get(LETTERS, params={"page": 3, "limit": 5}).json()

        assert len(first) == 5
        assert len(second) == 2
        assert third == []
        assert not {letter["id"] for letter in first} & {letter["id"] for letter in second}

    def test_default_page_size(
        self, client: TestClient, make_letter: Callable[..., Letter]
    ) -> None:
        for i in range(12):
            make_letter(f"letter {i}")

        assert len(client.get(LETTERS).json()) == 10

    def test_page_below_one_means_first_page(
        self, client: TestClient, make_letter: Callable[..., Letter]
    ) -> None:
        make_letter()

        assert len(client.get(LETTERS, params={"page": 0}).json()) == 1

    def test_bad_query_is_rejected(self, client: TestClient) -> None:
        assert client.get(LETTERS, params={"sort": "random"}).status_code == 400
        assert client.get(LETTERS, params={"limit": 0}).status_code == 400
        assert client.get(LETTERS, params={"limit": 51}).status_code == 400
        assert client.get(LETTERS, params={"page": "two"}).status_code == 400


class TestLikeLetter:
    def test_like_returns_new_count(
        self, client: TestClient, make_letter: Callable[..., Letter]
    ) -> None:
        letter_id = make_letter().id

        first = client.post(f"{LETTERS}/{letter_id}/like")
        second = client.post(f"{LETTERS}/{letter_id}/like")

        assert first.status_code == 200
        assert first.json() == {"message": "Letter liked successfully!", "newLikes": 1}
        assert second.json()["newLikes"] == 2

    def test_like_unknown_letter(self, client: TestClient) -> None:
        response = client.post(f"{LETTERS}/{UNKNOWN_ID}/like")

        assert response.status_code == 404
        assert response.json()["detail"] == "Letter not found"

    def test_malformed_id_is_rejected(self, client: TestClient) -> None:
        assert client.post(f"{LETTERS}/short/like").status_code == 400
        assert client.post(f"{LETTERS}/{'a' * 29}/like").status_code == 400


class TestReplyToLetter:
    def test_replies_are_listed_in_order(
        self, client: TestClient, make_letter: Callable[..., Letter]
    ) -> None:
        letter_id = make_letter().id

        first = client.post(
            f"{LETTERS}/{letter_id}/reply", json={"replyContent": "Sending love", "username": "bo"}
        )
        second = client.post(
            f"{LETTERS}/{letter_id}/reply", json={"content": "Me too", "username": "cy"}
        )

        assert first.status_code == 201
        assert first.json() == {"message": "Reply added successfully!"}
        assert second.status_code == 201
        letter = client.get(LETTERS).json()[0]
        assert [reply["content"] for reply in letter["replies"]] == ["Sending love", "Me too"]
        assert [reply["username"] for reply in letter["replies"]] == ["bo", "cy"]
        assert letter["replyCount"] == 2

    def test_reply_requires_content(
        self, client: TestClient, make_letter: Callable[..., Letter]
    ) -> None:
        letter_id = make_letter().id

        response = client.post(f"{LETTERS}/{letter_id}/reply", json={"username": "bo"})

        assert response.status_code == 400
        assert response.json()["detail"] == "Reply content is required."

    def test_reply_requires_username(
        self, client: TestClient, make_letter: Callable[..., Letter]
    ) -> None:
        letter_id = make_letter().id

        response = client.post(f"{LETTERS}/{letter_id}/reply", json={"content": "hi"})

        assert response.status_code == 400

    def test_reply_to_unknown_letter(self, client: TestClient) -> None:
        response = client.post(
            f"{LETTERS}/{UNKNOWN_ID}/reply", json={"content": "hi", "username": "bo"}
        )

        assert response.status_code == 404
        assert response.json()["detail"] == "Cannot reply: Letter not found"

    def test_flagged_reply_is_rejected(
        self,
        client: TestClient,
        make_letter: Callable[..., Letter],
        generator: FakeGenerator,
    ) -> None:
        letter_id = make_letter().id
        generator.text = "FLAGGED"

        response = client.post(
            f"{LETTERS}/{letter_id}/reply", json={"content": "nasty", "username": "troll"}
        )

        assert response.status_code == 400
        assert response.json()["detail"] == REPLY_BLOCKED_MESSAGE
        assert client.get(LETTERS).json()[0]["replies"] == []


class TestDeleteLetter:
    def test_author_can_delete(
        self, client: TestClient, make_letter: Callable[..., Letter]
    ) -> None:
        letter_id = make_letter(username="ana").id

        response = _delete(client, letter_id, {"username": "ana"})

        assert response.status_code == 200
        assert response.json() == {"message": "Letter deleted successfully."}
        assert client.post(f"{LETTERS}/{letter_id}/like").status_code == 404

    def test_other_user_is_forbidden(
        self, client: TestClient, make_letter: Callable[..., Letter]
    ) -> None:
        letter_id = make_letter(username="ana").id

        response = _delete(client, letter_id, {"username": "mallory"})

        assert response.status_code == 403
        assert len(client.get(LETTERS).json()) == 1

    def test_refused_delete_leaves_letter_for_its_author(
        self, client: TestClient, make_letter: Callable[..., Letter]
    ) -> None:
        letter_id = make_letter(username="alice").id

        assert _delete(client, letter_id, {"username": "bob"}).status_code == 403
        assert _delete(client, letter_id, {"username": "alice"}).status_code == 200
        assert _delete(client, letter_id, {"username": "alice"}).status_code == 404
        assert client.get(LETTERS).json() == []

    def test_missing_username_is_rejected(
        self, client: TestClient, make_letter: Callable[..., Letter]
    ) -> None:
        letter_id = make_letter(username="ana").id

        assert _delete(client, letter_id, {}).status_code == 400
        assert _delete(client, letter_id, None).status_code == 400

    def test_unknown_letter(self, client: TestClient) -> None:
        assert _delete(client, UNKNOWN_ID, {"username": "ana"}).status_code == 404

    def test_delete_trusts_supplied_username(
        self, client: TestClient, auth_headers: dict[str, str]
    ) -> None:
        # Authorization compares the handle sent in the body; no token is checked.
        created = client.post(
            LETTERS, json={"content": "Signed letter."}, headers=auth_headers
        ).json()

        response = _delete(client, created["id"], {"username": TEST_HANDLE})

        assert response.status_code == 200
