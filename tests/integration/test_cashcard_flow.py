"""Integration tests for the /cashcards resource (app + SQLite).

Seed data (see conftest.py):
    sarah1: 99 → 123.45, 100 → 1.00, 101 → 150.00
    kumar2: 102 → 200.00
"""

import math

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.exc import OperationalError

from src.cc_cashcard.infrastructure.persistence import CashCardRepository
from src.main import app

SARAH = ("sarah1", "abc123")
KUMAR = ("kumar2", "xyz789")
HANK = ("hank-owns-no-cards", "qrs456")


class TestGetOne:
    async def test_returns_owned_card(self, client: AsyncClient) -> None:
        resp = await client.get("/cashcards/99", auth=SARAH)
        assert resp.status_code == 200
        assert resp.json() == {"id": 99, "amount": 123.45}

    async def test_unknown_id_is_404(self, client: AsyncClient) -> None:
        resp = await client.get("/cashcards/1000", auth=SARAH)
        assert resp.status_code == 404
        assert resp.json()["code"] == 2001

    async def test_other_owners_card_is_404(self, client: AsyncClient) -> None:
        resp = await client.get("/cashcards/102", auth=SARAH)
        assert resp.status_code == 404

    async def test_foreign_and_missing_are_indistinguishable(self, client: AsyncClient) -> None:
        foreign = await client.get("/cashcards/102", auth=SARAH)
        missing = await client.get("/cashcards/1000", auth=SARAH)
        assert foreign.status_code == missing.status_code == 404
        assert foreign.json()["code"] == missing.json()["code"]

    async def test_non_numeric_id_is_422(self, client: AsyncClient) -> None:
        resp = await client.get("/cashcards/abc", auth=SARAH)
        assert resp.status_code == 422


class TestCreate:
    async def test_create_then_fetch_location(self, client: AsyncClient) -> None:
        create = await client.post("/cashcards", json={"amount": 250.00}, auth=SARAH)
        assert create.status_code == 201
        assert create.content == b""
        location = create.headers["Location"]
        assert location.startswith("/cashcards/")

        fetched = await client.get(location, auth=SARAH)
        assert fetched.status_code == 200
        body = fetched.json()
        assert body["id"] is not None
        assert body["amount"] == 250.00

    async def test_client_supplied_id_and_owner_are_ignored(self, client: AsyncClient) -> None:
        create = await client.post(
            "/cashcards",
            json={"id": 99, "amount": 42.0, "owner": "kumar2"},
            auth=SARAH,
        )
        assert create.status_code == 201
        location = create.headers["Location"]
        assert location != "/cashcards/99"

        assert (await client.get(location, auth=SARAH)).status_code == 200
        assert (await client.get(location, auth=KUMAR)).status_code == 404
        original = await client.get("/cashcards/99", auth=SARAH)
        assert original.json()["amount"] == 123.45

    async def test_ids_are_unique_across_owners(self, client: AsyncClient) -> None:
        a = await client.post("/cashcards", json={"amount": 1.0}, auth=SARAH)
        b = await client.post("/cashcards", json={"amount": 1.0}, auth=KUMAR)
        assert a.headers["Location"] != b.headers["Location"]

    async def test_missing_amount_is_422(self, client: AsyncClient) -> None:
        resp = await client.post("/cashcards", json={}, auth=SARAH)
        assert resp.status_code == 422


class TestList:
    async def test_lists_only_own_cards(self, client: AsyncClient) -> None:
        resp = await client.get("/cashcards", auth=SARAH)
        assert resp.status_code == 200
        body = resp.json()
        assert len(body) == 3
        assert {c["id"] for c in body} == {99, 100, 101}

    async def test_defaults_sort_by_amount_ascending(self, client: AsyncClient) -> None:
        resp = await client.get("/cashcards", auth=SARAH)
        assert [c["amount"] for c in resp.json()] == [1.00, 123.45, 150.00]

    async def test_sorted_page(self, client: AsyncClient) -> None:
        resp = await client.get("/cashcards?page=0&size=1&sort=amount,desc", auth=SARAH)
        assert resp.status_code == 200
        assert resp.json() == [{"id": 101, "amount": 150.00}]

    async def test_page_past_end_is_empty(self, client: AsyncClient) -> None:
        resp = await client.get("/cashcards?page=5&size=3", auth=SARAH)
        assert resp.status_code == 200
        assert resp.json() == []

    async def test_unknown_sort_field_is_400(self, client: AsyncClient) -> None:
        resp = await client.get("/cashcards?sort=owner,asc", auth=SARAH)
        assert resp.status_code == 400
        assert resp.json()["code"] == 2002

    async def test_invalid_page_size_is_422(self, client: AsyncClient) -> None:
        assert (await client.get("/cashcards?size=0", auth=SARAH)).status_code == 422
        assert (await client.get("/cashcards?page=-1", auth=SARAH)).status_code == 422

    async def test_pages_partition_full_sorted_order(self, client: AsyncClient) -> None:
        # Equal amounts exercise the id tie-break
        for amount in [5.0, 5.0, 200.0, -3.5, 5.0, 0.0]:
            resp = await client.post("/cashcards", json={"amount": amount}, auth=KUMAR)
            assert resp.status_code == 201

        full = (await client.get("/cashcards?size=100", auth=KUMAR)).json()
        assert len(full) == 7
        assert full == sorted(full, key=lambda c: (c["amount"], c["id"]))

        size = 3
        pages = []
        for page in range(math.ceil(len(full) / size)):
            resp = await client.get(f"/cashcards?page={page}&size={size}", auth=KUMAR)
            pages.extend(resp.json())
        assert pages == full

    async def test_descending_pages_are_stable(self, client: AsyncClient) -> None:
        for _ in range(3):
            await client.post("/cashcards", json={"amount": 7.0}, auth=KUMAR)
        first = await client.get("/cashcards?size=2&sort=amount,desc", auth=KUMAR)
        again = await client.get("/cashcards?size=2&sort=amount,desc", auth=KUMAR)
        assert first.json() == again.json()


class TestCrossOwnerIsolation:
    async def test_each_owner_sees_exactly_their_cards(self, client: AsyncClient) -> None:
        await client.post("/cashcards", json={"amount": 10.0}, auth=KUMAR)

        sarah = (await client.get("/cashcards", auth=SARAH)).json()
        kumar = (await client.get("/cashcards", auth=KUMAR)).json()
        assert len(sarah) == 3
        assert len(kumar) == 2
        assert not {c["id"] for c in sarah} & {c["id"] for c in kumar}

        for card in kumar:
            resp = await client.get(f"/cashcards/{card['id']}", auth=SARAH)
            assert resp.status_code == 404


class TestUpdate:
    async def test_updates_amount_and_keeps_id(self, client: AsyncClient) -> None:
        resp = await client.put("/cashcards/99", json={"amount": 19.99}, auth=SARAH)
        assert resp.status_code == 204
        assert resp.content == b""

        fetched = await client.get("/cashcards/99", auth=SARAH)
        assert fetched.json() == {"id": 99, "amount": 19.99}

    async def test_payload_owner_does_not_transfer_card(self, client: AsyncClient) -> None:
        resp = await client.put(
            "/cashcards/99", json={"amount": 5.0, "owner": "kumar2"}, auth=SARAH
        )
        assert resp.status_code == 204
        assert (await client.get("/cashcards/99", auth=SARAH)).status_code == 200
        assert (await client.get("/cashcards/99", auth=KUMAR)).status_code == 404

    async def test_unknown_card_is_404(self, client: AsyncClient) -> None:
        resp = await client.put("/cashcards/99999", json={"amount": 19.99}, auth=SARAH)
        assert resp.status_code == 404

    async def test_other_owners_card_is_404_and_unchanged(self, client: AsyncClient) -> None:
        resp = await client.put("/cashcards/102", json={"amount": 333.33}, auth=SARAH)
        assert resp.status_code == 404

        kumar_view = await client.get("/cashcards/102", auth=KUMAR)
        assert kumar_view.json() == {"id": 102, "amount": 200.00}


class TestDelete:
    async def test_deletes_owned_card(self, client: AsyncClient) -> None:
        resp = await client.delete("/cashcards/99", auth=SARAH)
        assert resp.status_code == 204

        assert (await client.get("/cashcards/99", auth=SARAH)).status_code == 404

    async def test_repeated_delete_is_404(self, client: AsyncClient) -> None:
        assert (await client.delete("/cashcards/99", auth=SARAH)).status_code == 204
        assert (await client.delete("/cashcards/99", auth=SARAH)).status_code == 404
        assert (await client.delete("/cashcards/99", auth=SARAH)).status_code == 404

    async def test_unknown_card_is_404(self, client: AsyncClient) -> None:
        resp = await client.delete("/cashcards/99999", auth=SARAH)
        assert resp.status_code == 404

    async def test_cannot_delete_other_owners_card(self, client: AsyncClient) -> None:
        resp = await client.delete("/cashcards/102", auth=SARAH)
        assert resp.status_code == 404

        still_there = await client.get("/cashcards/102", auth=KUMAR)
        assert still_there.status_code == 200


class TestAuthorization:
    async def test_bad_username_is_401(self, client: AsyncClient) -> None:
        resp = await client.get("/cashcards/99", auth=("BAD-USER", "abc123"))
        assert resp.status_code == 401
        assert resp.headers["WWW-Authenticate"] == "Basic"

    async def test_bad_password_is_401(self, client: AsyncClient) -> None:
        resp = await client.get("/cashcards/99", auth=("sarah1", "BAD-PASSWORD"))
        assert resp.status_code == 401

    async def test_no_credentials_is_401(self, client: AsyncClient) -> None:
        resp = await client.get("/cashcards")
        assert resp.status_code == 401

    async def test_non_owner_role_is_403(self, client: AsyncClient) -> None:
        resp = await client.get("/cashcards/99", auth=HANK)
        assert resp.status_code == 403
        assert resp.json()["code"] == 1002

    async def test_non_owner_cannot_create(self, client: AsyncClient) -> None:
        resp = await client.post("/cashcards", json={"amount": 1.0}, auth=HANK)
        assert resp.status_code == 403


class TestServerErrors:
    async def test_store_failure_is_500_with_envelope(
        self, client: AsyncClient, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        async def store_down(*args, **kwargs):
            raise OperationalError("SELECT", {}, Exception("connection refused"))

        monkeypatch.setattr(CashCardRepository, "get_by_id_and_owner", store_down)

        resp = await client.get("/cashcards/99", auth=SARAH)
        assert resp.status_code == 500
        body = resp.json()
        assert body["code"] == 9001
        assert body["request_id"].startswith("req_")
        assert resp.headers["X-Request-ID"] == body["request_id"]
        assert "connection refused" not in resp.text

    async def test_store_failure_on_write_leaves_data_intact(
        self, client: AsyncClient, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        async def store_down(*args, **kwargs):
            raise OperationalError("UPDATE", {}, Exception("disk full"))

        monkeypatch.setattr(CashCardRepository, "save", store_down)

        resp = await client.put("/cashcards/99", json={"amount": 1.0}, auth=SARAH)
        assert resp.status_code == 500
        assert resp.json()["code"] == 9001

        monkeypatch.undo()
        fetched = await client.get("/cashcards/99", auth=SARAH)
        assert fetched.json() == {"id": 99, "amount": 123.45}

    async def test_unexpected_error_is_500_without_details(
        self, client: AsyncClient, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        async def broken(*args, **kwargs):
            raise RuntimeError("secret internals")

        monkeypatch.setattr(CashCardRepository, "get_by_id_and_owner", broken)

        # The outermost error middleware re-raises after responding
        transport = ASGITransport(app=app, raise_app_exceptions=False)
        async with AsyncClient(transport=transport, base_url="http://test") as ac:
            resp = await ac.get("/cashcards/99", auth=SARAH)

        assert resp.status_code == 500
        body = resp.json()
        assert body["code"] == 9002
        assert "secret internals" not in resp.text
