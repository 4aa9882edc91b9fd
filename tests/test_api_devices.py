import httpx
import pytest

from dshop.config import settings
from dshop.main import app
from dshop.services.device_service import device_service

DEVICES = "/api/v1/devices"
BOOKINGS = "/api/v1/bookings"


async def test_list_devices(client, device, user_headers):
    response = await client.get(DEVICES + "/", headers=user_headers)

    assert response.status_code == 200
    devices = response.json()["devices"]
    assert [d["name"] for d in devices] == ["Raspberry Pi"]
    assert devices[0]["bookings"] == []
    assert devices[0]["users"] == []


async def test_list_devices_requires_token(client, device):
    response = await client.get(DEVICES + "/")
    assert response.status_code == 401


async def test_filter_without_match(client, device, user_headers):
    response = await client.get(DEVICES + "/", params={"category": "Phones"}, headers=user_headers)

    assert response.status_code == 404
    assert response.json()["error"] == ["Device not found"]


async def test_device_lists_bookings_and_users(client, device, user, user_headers):
    await client.post(
        BOOKINGS + "/",
        json={"device": "Raspberry Pi", "from": "2024-01-10", "to": "2024-01-12"},
        headers=user_headers,
    )

    response = await client.get(DEVICES + "/", params={"name": "Raspberry Pi"}, headers=user_headers)

    listed = response.json()["devices"][0]
    assert len(listed["bookings"]) == 1
    assert listed["users"] == [str(user.id)]


async def test_categories(client, device, user_headers):
    response = await client.get(f"{DEVICES}/categories", headers=user_headers)

    assert response.status_code == 200
    assert response.json()["categories"] == ["Computers"]


async def test_no_categories(client, user_headers):
    response = await client.get(f"{DEVICES}/categories", headers=user_headers)
    assert response.status_code == 404


async def test_admin_creates_device(client, admin_headers):
    response = await client.post(
        DEVICES + "/",
        json={"name": "  iPhone 12 ", "category": "Phones", "ram": "  "},
        headers=admin_headers,
    )

    assert response.status_code == 201
    created = response.json()["device"]
    assert created["name"] == "iPhone 12"
    assert created["category"] == "Phones"
    assert created["ram"] == "Not specified"
    assert created["os"] == "Not specified"


async def test_duplicate_device(client, device, admin_headers):
    response = await client.post(DEVICES + "/", json={"name": "Raspberry Pi"}, headers=admin_headers)

    assert response.status_code == 400
    assert response.json()["detail"] == "Device 'Raspberry Pi' is already added."


async def test_create_requires_admin(client, user_headers):
    response = await client.post(DEVICES + "/", json={"name": "Pixel 7"}, headers=user_headers)
    assert response.status_code == 403


async def test_single_admin_mode(client, user, user_headers, admin_headers, monkeypatch):
    monkeypatch.setattr(settings, "admin_email", user.email)

    response = await client.post(DEVICES + "/", json={"name": "Pixel 7"}, headers=user_headers)
    assert response.status_code == 201

    response = await client.post(DEVICES + "/", json={"name": "Pixel 8"}, headers=admin_headers)
    assert response.status_code == 403


async def test_delete_device_removes_its_bookings(client, device, user_headers, admin_headers):
    booking = await client.post(
        BOOKINGS + "/",
        json={"device": "Raspberry Pi", "from": "2024-01-10", "to": "2024-01-12"},
        headers=user_headers,
    )
    booking_id = booking.json()["id"]
    await client.patch(f"{BOOKINGS}/{booking_id}/ok", headers=admin_headers)

    response = await client.delete(f"{DEVICES}/Raspberry Pi", headers=admin_headers)
    assert response.status_code == 200
    assert response.json()["success"] == 'Device "Raspberry Pi" has been successfully deleted'

    response = await client.get(BOOKINGS + "/", headers=user_headers)
    assert response.json()["bookings"] == []

    response = await client.delete(f"{DEVICES}/Raspberry Pi", headers=admin_headers)
    assert response.status_code == 404


@pytest.mark.parametrize("expose, message", [(False, "Internal server error"), (True, "disk on fire")])
async def test_internal_errors(client, user_headers, monkeypatch, expose, message):
    async def explode(db):
        raise RuntimeError("disk on fire")

    monkeypatch.setattr(device_service, "list_categories", explode)
    monkeypatch.setattr(settings, "expose_internal_errors", expose)

    response = await client.get(f"{DEVICES}/categories", headers=user_headers)

    assert response.status_code == 500
    assert response.json() == {"detail": message, "error": [message]}


async def test_health():
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
        response = await ac.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
