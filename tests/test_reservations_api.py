"""Tests for the reservation endpoints"""

from datetime import timedelta

import pytest
from bson import ObjectId
from httpx import AsyncClient
from pymongo.errors import PyMongoError

from app.main import app
from app.api.reservations import get_store
from app.database import utcnow
from app.models.reservation import ReservationStore

VALID_RESERVATION = {
    "name": "  Maya Haddad ",
    "phone": "96170123456",
    "branch": "Jal El Dib",
    "time": "8:00 PM",
}


@pytest.mark.asyncio
async def test_create_reservation(client: AsyncClient):
    response = await client.post("/api/reservations", json=VALID_RESERVATION)

    assert response.status_code == 201
    data = response.json()
    assert ObjectId.is_valid(data["_id"])
    assert data["name"] == "Maya Haddad"
    assert data["status"] == "pending"
    assert data["branch"] == "Jal El Dib"
    assert "createdAt" in data


@pytest.mark.asyncio
async def test_create_rejects_invalid_phone(client: AsyncClient):
    response = await client.post(
        "/api/reservations",
        json={**VALID_RESERVATION, "phone": "0170123456"},
    )

    assert response.status_code == 400
    assert "0170123456 is not a valid Lebanese phone number!" in response.json()["message"]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "overrides",
    [
        {"branch": "Hamra"},
        {"status": "seated"},
        {"name": "   "},
        {"cancellationReason": "weather"},
    ],
)
async def test_create_rejects_invalid_fields(client: AsyncClient, overrides):
    response = await client.post("/api/reservations", json={**VALID_RESERVATION, **overrides})

    assert response.status_code == 400
    assert response.json()["message"]


@pytest.mark.asyncio
async def test_create_rejects_missing_fields(client: AsyncClient):
    response = await client.post("/api/reservations", json={"name": "Maya"})

    assert response.status_code == 400
    message = response.json()["message"]
    assert "phone" in message
    assert "branch" in message


@pytest.mark.asyncio
async def test_list_is_newest_first(client: AsyncClient, add_reservation):
    older = await add_reservation(age=timedelta(hours=5), name="Older")
    newer = await add_reservation(age=timedelta(hours=1), name="Newer")

    response = await client.get("/api/reservations")

    assert response.status_code == 200
    assert [item["_id"] for item in response.json()] == [str(newer["_id"]), str(older["_id"])]


@pytest.mark.asyncio
async def test_get_reservation(client: AsyncClient, add_reservation):
    reservation = await add_reservation(otp="XND123456")

    response = await client.get(f"/api/reservations/{reservation['_id']}")

    assert response.status_code == 200
    assert response.json()["otp"] == "XND123456"


@pytest.mark.asyncio
async def test_get_missing_reservation(client: AsyncClient):
    response = await client.get(f"/api/reservations/{ObjectId()}")

    assert response.status_code == 404
    assert response.json() == {"message": "Reservation not found"}


@pytest.mark.asyncio
async def test_get_malformed_id(client: AsyncClient):
    response = await client.get("/api/reservations/not-an-id")

    assert response.status_code == 400
    assert response.json() == {"message": "Invalid reservation id"}


@pytest.mark.asyncio
async def test_update_is_partial(client: AsyncClient, add_reservation):
    reservation = await add_reservation(status="pending")

    response = await client.put(
        f"/api/reservations/{reservation['_id']}",
        json={"status": "cancelled", "cancellationReason": "no_show"},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "cancelled"
    assert data["cancellationReason"] == "no_show"
    assert data["name"] == reservation["name"]
    assert data["phone"] == reservation["phone"]


@pytest.mark.asyncio
async def test_update_allows_any_status_transition(client: AsyncClient, add_reservation):
    reservation = await add_reservation(status="cancelled")

    response = await client.put(
        f"/api/reservations/{reservation['_id']}",
        json={"status": "pending", "otp": "XND654321"},
    )

    assert response.status_code == 200
    assert response.json()["status"] == "pending"
    assert response.json()["otp"] == "XND654321"


@pytest.mark.asyncio
async def test_update_validates_fields(client: AsyncClient, add_reservation):
    reservation = await add_reservation()

    response = await client.put(
        f"/api/reservations/{reservation['_id']}",
        json={"phone": "12345"},
    )

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_update_rejects_null_required_field(client: AsyncClient, add_reservation):
    reservation = await add_reservation()

    response = await client.put(f"/api/reservations/{reservation['_id']}", json={"status": None})

    assert response.status_code == 400
    assert "status cannot be null" in response.json()["message"]


@pytest.mark.asyncio
async def test_update_missing_reservation(client: AsyncClient):
    response = await client.put(f"/api/reservations/{ObjectId()}", json={"status": "confirmed"})

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_update_with_empty_body_returns_reservation(client: AsyncClient, add_reservation):
    reservation = await add_reservation()

    response = await client.put(f"/api/reservations/{reservation['_id']}", json={})

    assert response.status_code == 200
    assert response.json()["_id"] == str(reservation["_id"])


@pytest.mark.asyncio
async def test_delete_reservation(client: AsyncClient, add_reservation, store):
    reservation = await add_reservation()

    response = await client.delete(f"/api/reservations/{reservation['_id']}")

    assert response.status_code == 200
    assert response.json() == {"message": "Reservation deleted successfully"}
    assert await store.get(reservation["_id"]) is None

    again = await client.delete(f"/api/reservations/{reservation['_id']}")
    assert again.status_code == 404


@pytest.mark.asyncio
async def test_filter_by_status(client: AsyncClient, add_reservation):
    await add_reservation(status="pending")
    confirmed = await add_reservation(status="confirmed")

    response = await client.get("/api/reservations/status/confirmed")

    assert response.status_code == 200
    assert [item["_id"] for item in response.json()] == [str(confirmed["_id"])]


@pytest.mark.asyncio
async def test_filter_by_branch(client: AsyncClient, add_reservation):
    await add_reservation(branch="Clemenceau")
    bliss = await add_reservation(branch="Bliss")

    response = await client.get("/api/reservations/branch/Bliss")

    assert response.status_code == 200
    assert [item["branch"] for item in response.json()] == ["Bliss"]
    assert response.json()[0]["_id"] == str(bliss["_id"])


@pytest.mark.asyncio
async def test_delete_old_applies_thirty_day_rule_only(client: AsyncClient, store):
    now = utcnow()
    base = {"name": "Customer", "phone": "96170123456", "branch": "Bliss", "time": "1:00 PM"}
    await store.create({**base, "status": "confirmed", "createdAt": now - timedelta(days=31)})
    await store.create({**base, "status": "cancelled", "createdAt": now - timedelta(days=45)})
    await store.create({**base, "status": "confirmed", "createdAt": now - timedelta(days=2)})
    await store.create({**base, "status": "pending", "createdAt": now - timedelta(days=40)})

    response = await client.delete("/api/reservations/old")

    assert response.status_code == 200
    assert response.json() == {"message": "Old reservations deleted successfully", "count": 2}
    remaining = await store.list()
    assert sorted(doc["status"] for doc in remaining) == ["confirmed", "pending"]


@pytest.mark.asyncio
async def test_store_error_is_a_generic_500(client: AsyncClient, mongo_db):
    class FailingStore(ReservationStore):
        async def list(self, query=None):
            raise PyMongoError("server selection timeout")

    app.dependency_overrides[get_store] = lambda: FailingStore(mongo_db)

    response = await client.get("/api/reservations")

    assert response.status_code == 500
    assert response.json() == {"message": "Something went wrong!"}
