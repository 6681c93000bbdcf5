"""
Integration tests for the Recovery API.

Tests cover the recovery center end to end:
- Listing deleted items (camelCase payload, userId required)
- Restoring inside and outside the 24h window
- Permanent delete by id
- Bulk restore and stats

All tests use async fixtures and httpx AsyncClient.
"""

from datetime import datetime, timedelta
from uuid import uuid4

import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from conftest import OUTSIDER_ID, OWNER_ID
from infrastructure.database.models.base import utcnow


async def _create_and_delete_task(client: AsyncClient, title: str = "Ship it") -> str:
    response = await client.post("/api/v1/tasks", params={"userId": OWNER_ID}, json={"title": title})
    assert response.status_code == 201
    task_id = response.json()["id"]

    response = await client.delete(f"/api/v1/tasks/{task_id}", params={"userId": OWNER_ID})
    assert response.status_code == 200
    return task_id


class TestListDeletedItems:
    """Tests for GET /recovery endpoint."""

    @pytest.mark.asyncio
    async def test_requires_user_id(self, async_client: AsyncClient):
        response = await async_client.get("/api/v1/recovery")

        assert response.status_code == 400
        assert response.json() == {"error": "User ID is required"}

    @pytest.mark.asyncio
    async def test_blank_user_id(self, async_client: AsyncClient):
        response = await async_client.get("/api/v1/recovery", params={"userId": "  "})

        assert response.status_code == 400
        assert response.json() == {"error": "User ID is required"}

    @pytest.mark.asyncio
    async def test_lists_deleted_task(self, async_client: AsyncClient):
        task_id = await _create_and_delete_task(async_client, "Quarterly report")

        response = await async_client.get("/api/v1/recovery", params={"userId": OWNER_ID})

        assert response.status_code == 200
        data = response.json()
        assert len(data) == 1
        item = data[0]
        assert item["id"] == task_id
        assert item["type"] == "task"
        assert item["name"] == "Quarterly report"
        assert item["deletedBy"] == OWNER_ID

        deleted_at = datetime.fromisoformat(item["deletedAt"])
        expires_at = datetime.fromisoformat(item["expiresAt"])
        assert expires_at - deleted_at == timedelta(hours=24)

    @pytest.mark.asyncio
    async def test_empty_for_other_user(self, async_client: AsyncClient):
        await _create_and_delete_task(async_client)

        response = await async_client.get("/api/v1/recovery", params={"userId": OUTSIDER_ID})

        assert response.status_code == 200
        assert response.json() == []


class TestRestoreItem:
    """Tests for POST /recovery/{id}/restore endpoint."""

    @pytest.mark.asyncio
    async def test_restore_success(self, async_client: AsyncClient):
        task_id = await _create_and_delete_task(async_client)

        response = await async_client.post(f"/api/v1/recovery/{task_id}/restore")

        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "message": "Item recovered successfully",
            "type": "task",
        }

        # Task is visible again to normal queries
        response = await async_client.get(f"/api/v1/tasks/{task_id}")
        assert response.status_code == 200
        assert response.json()["id"] == task_id

    @pytest.mark.asyncio
    async def test_restore_with_type(self, async_client: AsyncClient):
        task_id = await _create_and_delete_task(async_client)

        response = await async_client.post(
            f"/api/v1/recovery/{task_id}/restore", params={"type": "project"}
        )
        assert response.status_code == 404

        response = await async_client.post(
            f"/api/v1/recovery/{task_id}/restore", params={"type": "task"}
        )
        assert response.status_code == 200

    @pytest.mark.asyncio
    async def test_restore_invalid_type(self, async_client: AsyncClient):
        task_id = await _create_and_delete_task(async_client)

        response = await async_client.post(
            f"/api/v1/recovery/{task_id}/restore", params={"type": "board"}
        )

        assert response.status_code == 400
        assert "error" in response.json()

    @pytest.mark.asyncio
    async def test_restore_not_deleted(self, async_client: AsyncClient):
        response = await async_client.post(
            "/api/v1/tasks", params={"userId": OWNER_ID}, json={"title": "Live"}
        )
        task_id = response.json()["id"]

        response = await async_client.post(f"/api/v1/recovery/{task_id}/restore")

        assert response.status_code == 400
        assert response.json() == {"error": "Item is not deleted"}

    @pytest.mark.asyncio
    async def test_restore_unknown(self, async_client: AsyncClient):
        response = await async_client.post(f"/api/v1/recovery/{uuid4()}/restore")

        assert response.status_code == 404
        assert response.json() == {"error": "Item not found"}

    @pytest.mark.asyncio
    async def test_restore_expired(
        self, async_client: AsyncClient, db_session: AsyncSession, make_task
    ):
        task = await make_task()
        deleted_at = utcnow() - timedelta(hours=25)
        task.deleted_at = deleted_at
        task.expires_at = deleted_at + timedelta(hours=24)
        task.deleted_by = OWNER_ID
        await db_session.commit()

        response = await async_client.post(f"/api/v1/recovery/{task.id}/restore")

        assert response.status_code == 400
        assert response.json() == {"error": "Item has expired and cannot be recovered"}

        # Expired items are no longer listed either
        response = await async_client.get("/api/v1/recovery", params={"userId": OWNER_ID})
        assert response.json() == []


class TestPermanentDelete:
    """Tests for DELETE /recovery/{id}/permanent endpoint."""

    @pytest.mark.asyncio
    async def test_permanent_delete(self, async_client: AsyncClient):
        task_id = await _create_and_delete_task(async_client)

        response = await async_client.delete(f"/api/v1/recovery/{task_id}/permanent")

        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "message": "Item permanently deleted",
            "type": "task",
        }

        response = await async_client.post(f"/api/v1/recovery/{task_id}/restore")
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_permanent_delete_unknown(self, async_client: AsyncClient):
        response = await async_client.delete(f"/api/v1/recovery/{uuid4()}/permanent")

        assert response.status_code == 404
        assert response.json() == {"error": "Item not found"}


class TestBulkRestore:
    """Tests for POST /recovery/bulk-restore endpoint."""

    @pytest.mark.asyncio
    async def test_partial_success(self, async_client: AsyncClient):
        task_id = await _create_and_delete_task(async_client)
        missing_id = str(uuid4())

        response = await async_client.post(
            "/api/v1/recovery/bulk-restore",
            json={"itemIds": [task_id, missing_id]},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is False
        assert data["recovered"] == [task_id]
        assert data["failed"] == [{"id": missing_id, "error": "Item not found"}]

    @pytest.mark.asyncio
    async def test_empty_list_rejected(self, async_client: AsyncClient):
        response = await async_client.post(
            "/api/v1/recovery/bulk-restore", json={"itemIds": []}
        )

        assert response.status_code == 400
        assert "error" in response.json()


class TestRecoveryStats:
    """Tests for GET /recovery/stats endpoint."""

    @pytest.mark.asyncio
    async def test_stats(self, async_client: AsyncClient):
        await _create_and_delete_task(async_client, "one")
        await _create_and_delete_task(async_client, "two")

        response = await async_client.get("/api/v1/recovery/stats", params={"userId": OWNER_ID})

        assert response.status_code == 200
        data = response.json()
        assert data["totalDeleted"] == 2
        assert data["expiringSoon"] == 0
        assert data["byType"] == {"task": 2, "project": 0, "organization": 0}

    @pytest.mark.asyncio
    async def test_stats_requires_user_id(self, async_client: AsyncClient):
        response = await async_client.get("/api/v1/recovery/stats")

        assert response.status_code == 400
