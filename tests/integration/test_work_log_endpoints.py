"""Integration tests for work log endpoints."""
import pytest


async def auth_headers(client, username):
    """Register a user and return bearer headers for them."""
    await client.post(
        "/api/auth/register",
        json={"username": username, "password": "password123", "name": "Test User"},
    )
    login = await client.post(
        "/api/auth/login", json={"username": username, "password": "password123"}
    )
    return {"Authorization": f"Bearer {login.json()['accessToken']}"}


@pytest.mark.asyncio
class TestWorkLogCreate:
    """Tests for POST /api/worklogs."""

    async def test_create_work_log(self, app_client):
        headers = await auth_headers(app_client, "create@example.com")

        response = await app_client.post(
            "/api/worklogs", json={"workLogName": "Backend", "hourlyRate": 100}, headers=headers
        )

        assert response.status_code == 201
        data = response.json()
        assert data["workLogName"] == "Backend"
        assert data["hourlyRate"] == 100
        assert data["activated"] is True
        assert "createdAt" in data

    async def test_create_work_log_blank_name(self, app_client):
        headers = await auth_headers(app_client, "blank@example.com")

        response = await app_client.post(
            "/api/worklogs", json={"workLogName": "   "}, headers=headers
        )

        assert response.status_code == 400
        assert response.json()["code"] == "VALIDATION_ERROR"

    async def test_create_work_log_requires_auth(self, app_client):
        response = await app_client.post("/api/worklogs", json={"workLogName": "Backend"})

        assert response.status_code == 401


@pytest.mark.asyncio
class TestWorkLogReadReplaceDelete:
    """Tests for listing, replacing and deleting work logs."""

    async def test_list_only_own_work_logs(self, app_client):
        alice = await auth_headers(app_client, "alice@example.com")
        bob = await auth_headers(app_client, "bob@example.com")
        await app_client.post("/api/worklogs", json={"workLogName": "Alice's"}, headers=alice)
        await app_client.post("/api/worklogs", json={"workLogName": "Bob's"}, headers=bob)

        response = await app_client.get("/api/worklogs", headers=alice)

        assert response.status_code == 200
        assert [w["workLogName"] for w in response.json()] == ["Alice's"]

    async def test_get_other_users_work_log_is_not_found(self, app_client):
        alice = await auth_headers(app_client, "alice2@example.com")
        bob = await auth_headers(app_client, "bob2@example.com")
        created = await app_client.post(
            "/api/worklogs", json={"workLogName": "Secret"}, headers=alice
        )
        work_log_id = created.json()["id"]

        assert (await app_client.get(f"/api/worklogs/{work_log_id}", headers=alice)).status_code == 200
        assert (await app_client.get(f"/api/worklogs/{work_log_id}", headers=bob)).status_code == 404
        assert (await app_client.get("/api/worklogs/not-an-id", headers=alice)).status_code == 404

    async def test_replace_keeps_old_version_deactivated(self, app_client):
        headers = await auth_headers(app_client, "replace@example.com")
        created = await app_client.post(
            "/api/worklogs", json={"workLogName": "Backend", "hourlyRate": 100}, headers=headers
        )
        old_id = created.json()["id"]

        response = await app_client.put(
            f"/api/worklogs/{old_id}",
            json={"workLogName": "Backend", "hourlyRate": 120},
            headers=headers,
        )

        assert response.status_code == 200
        new = response.json()
        assert new["id"] != old_id
        assert new["hourlyRate"] == 120
        assert new["activated"] is True

        old = (await app_client.get(f"/api/worklogs/{old_id}", headers=headers)).json()
        assert old["activated"] is False
        assert old["hourlyRate"] == 100

    async def test_replace_other_users_work_log_forbidden(self, app_client):
        alice = await auth_headers(app_client, "alice3@example.com")
        bob = await auth_headers(app_client, "bob3@example.com")
        created = await app_client.post(
            "/api/worklogs", json={"workLogName": "Mine"}, headers=alice
        )
        work_log_id = created.json()["id"]

        response = await app_client.put(
            f"/api/worklogs/{work_log_id}", json={"workLogName": "Stolen"}, headers=bob
        )

        assert response.status_code == 403
        listed = (await app_client.get("/api/worklogs", headers=alice)).json()
        assert [(w["workLogName"], w["activated"]) for w in listed] == [("Mine", True)]
        assert (await app_client.get("/api/worklogs", headers=bob)).json() == []

    async def test_delete_cascades_to_timers(self, app_client):
        headers = await auth_headers(app_client, "delete@example.com")
        created = await app_client.post(
            "/api/worklogs", json={"workLogName": "Temp"}, headers=headers
        )
        work_log_id = created.json()["id"]
        await app_client.post(f"/api/worklogs/{work_log_id}/startTimer", headers=headers)

        response = await app_client.delete(f"/api/worklogs/{work_log_id}", headers=headers)

        assert response.status_code == 204
        assert (await app_client.get(f"/api/worklogs/{work_log_id}", headers=headers)).status_code == 404
        assert (
            await app_client.get(f"/api/worklogs/{work_log_id}/timers", headers=headers)
        ).status_code == 403

        from timetracker.database import database
        assert await database.db["timers"].count_documents({"work_log_id": work_log_id}) == 0

    async def test_delete_other_users_work_log_forbidden(self, app_client):
        alice = await auth_headers(app_client, "alice4@example.com")
        bob = await auth_headers(app_client, "bob4@example.com")
        created = await app_client.post(
            "/api/worklogs", json={"workLogName": "Keep"}, headers=alice
        )
        work_log_id = created.json()["id"]

        response = await app_client.delete(f"/api/worklogs/{work_log_id}", headers=bob)

        assert response.status_code == 403
        assert (await app_client.get(f"/api/worklogs/{work_log_id}", headers=alice)).status_code == 200
