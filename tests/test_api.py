"""Tests for the FastAPI endpoints."""

import pytest
from unittest.mock import AsyncMock
from fastapi.testclient import TestClient

from bounty_tracker.api import create_app
from bounty_tracker.builder_client import BuilderResponse
from bounty_tracker.errors import ExternalServiceError
from bounty_tracker.models import Bounty, Feature, FeaturePhase, Workspace
from bounty_tracker.storage import InMemoryStore

HOST = "https://tracker.example.com"
AUTH = {"X-Pubkey": "03a1b2c3d4"}
WORKSPACE_UUID = "c0ffee00-0000-4000-8000-000000000001"
FEATURE_UUID = "5b6f0f0e-6b1d-4a55-9d3c-1f0c2c6f2a11"
PHASE_UUID = "9a3e2d4c-1b0a-4c8e-8f7d-6e5d4c3b2a10"
TICKET_UUID = "1f2e3d4c-5b6a-4789-8abc-def012345678"


@pytest.fixture
def store():
    """Create a store with a workspace, feature and phase."""
    store = InMemoryStore()
    store.add_workspace(Workspace(uuid=WORKSPACE_UUID, mission="m", tactics="t"))
    store.add_feature(Feature(uuid=FEATURE_UUID, workspace_uuid=WORKSPACE_UUID))
    store.add_feature_phase(FeaturePhase(uuid=PHASE_UUID, feature_uuid=FEATURE_UUID))
    return store


@pytest.fixture
def builder():
    """Create a builder client that acknowledges every job."""
    builder = AsyncMock()
    builder.create_project.return_value = BuilderResponse(
        status_code=200, body='{"success": true}'
    )
    return builder


@pytest.fixture
def client(store, builder):
    """Create a test client."""
    return TestClient(create_app(store=store, builder=builder, host=HOST))


def _ticket_body(**overrides):
    body = {
        "feature_uuid": FEATURE_UUID,
        "phase_uuid": PHASE_UUID,
        "name": "Add invoice export",
        "description": "Export invoices as CSV",
    }
    body.update(overrides)
    return body


class TestHealthEndpoint:
    """Tests for the health check endpoint."""

    def test_health_check(self, client):
        """Test that health endpoint returns ok."""
        response = client.get("/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["service"] == "bounty-tracker"


class TestTicketEndpoints:
    """Tests for ticket CRUD endpoints."""

    def test_create_then_get(self, client):
        """Test that a created ticket can be read back."""
        response = client.post(
            f"/bounties/ticket/{TICKET_UUID}", json=_ticket_body(), headers=AUTH
        )
        assert response.status_code == 200
        assert response.json()["status"] == "DRAFT"

        response = client.get(f"/bounties/ticket/{TICKET_UUID}")
        assert response.status_code == 200
        assert response.json()["name"] == "Add invoice export"

    def test_create_requires_pubkey(self, client, store):
        """Test that writes without a caller identity are unauthorized."""
        response = client.post(f"/bounties/ticket/{TICKET_UUID}", json=_ticket_body())

        assert response.status_code == 401
        assert response.json() == {"error": "Unauthorized"}
        assert store.get_ticket(TICKET_UUID) is None

    def test_get_missing_ticket(self, client):
        """Test that an unknown ticket is a 404."""
        response = client.get(f"/bounties/ticket/{TICKET_UUID}")

        assert response.status_code == 404
        assert response.json() == {"error": "Ticket not found"}

    def test_get_malformed_uuid(self, client):
        """Test that a malformed uuid is a 400."""
        response = client.get("/bounties/ticket/ticket-1")
        assert response.status_code == 400

    def test_invalid_status(self, client):
        """Test that an unknown status is a 400."""
        response = client.post(
            f"/bounties/ticket/{TICKET_UUID}",
            json=_ticket_body(status="SHIPPED"),
            headers=AUTH,
        )

        assert response.status_code == 400
        assert response.json() == {"error": "Invalid ticket status"}

    def test_missing_required_fields(self, client):
        """Test that the required-field message is returned."""
        response = client.post(
            f"/bounties/ticket/{TICKET_UUID}",
            json=_ticket_body(name=""),
            headers=AUTH,
        )

        assert response.status_code == 400
        assert response.json() == {
            "error": "feature_uuid, phase_uuid, and name are required"
        }

    def test_non_object_body(self, client):
        """Test that a non-object body is a parse error."""
        response = client.post(
            f"/bounties/ticket/{TICKET_UUID}", json=["x"], headers=AUTH
        )

        assert response.status_code == 400
        assert response.json() == {"error": "Error parsing request body"}

    def test_delete(self, client, store):
        """Test that delete removes the ticket."""
        client.post(
            f"/bounties/ticket/{TICKET_UUID}", json=_ticket_body(), headers=AUTH
        )

        response = client.delete(f"/bounties/ticket/{TICKET_UUID}", headers=AUTH)

        assert response.status_code == 200
        assert response.json() == {"message": "Ticket deleted successfully"}
        assert store.get_ticket(TICKET_UUID) is None

    def test_delete_missing(self, client):
        """Test that deleting an unknown ticket is a 404."""
        response = client.delete(f"/bounties/ticket/{TICKET_UUID}", headers=AUTH)
        assert response.status_code == 404

    def test_list_by_phase(self, client):
        """Test that tickets of a phase are listed."""
        client.post(
            f"/bounties/ticket/{TICKET_UUID}", json=_ticket_body(), headers=AUTH
        )

        response = client.get(
            f"/bounties/ticket/feature/{FEATURE_UUID}/phase/{PHASE_UUID}",
            headers=AUTH,
        )

        assert response.status_code == 200
        assert [t["uuid"] for t in response.json()] == [TICKET_UUID]

    def test_list_unknown_phase(self, client):
        """Test that an unknown phase is a 404."""
        response = client.get(
            f"/bounties/ticket/feature/{FEATURE_UUID}/phase/{TICKET_UUID}",
            headers=AUTH,
        )

        assert response.status_code == 404
        assert response.json() == {"error": "Phase not found"}


class TestSendEndpoint:
    """Tests for dispatching a ticket to the builder."""

    def test_send_success(self, client, builder):
        """Test that a valid ticket is dispatched and the id echoed."""
        response = client.post(
            "/bounties/ticket/send",
            json={"uuid": TICKET_UUID, **_ticket_body()},
            headers=AUTH,
        )

        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "ticket_id": TICKET_UUID,
            "message": '{"success": true}',
            "errors": [],
        }
        builder.create_project.assert_called_once()

    def test_send_nil_uuid(self, client, builder):
        """Test that the zero uuid fails validation without a builder call."""
        response = client.post(
            "/bounties/ticket/send",
            json={"uuid": "00000000-0000-0000-0000-000000000000", **_ticket_body()},
            headers=AUTH,
        )

        assert response.status_code == 400
        data = response.json()
        assert data["success"] is False
        assert data["message"] == "Validation failed"
        assert data["errors"] == ["UUID is required"]
        builder.create_project.assert_not_called()

    def test_send_echoes_builder_failure(self, client, builder):
        """Test that the builder's status and body are passed through."""
        builder.create_project.side_effect = ExternalServiceError(
            "server error",
            status_code=503,
            body="maintenance",
            errors=["Builder API returned status code: 503"],
        )

        response = client.post(
            "/bounties/ticket/send",
            json={"uuid": TICKET_UUID, **_ticket_body()},
            headers=AUTH,
        )

        assert response.status_code == 503
        data = response.json()
        assert data["success"] is False
        assert data["message"] == "maintenance"

    def test_send_timeout_is_bad_gateway(self, client, builder):
        """Test that a failure without an upstream status maps to 502."""
        builder.create_project.side_effect = ExternalServiceError(
            "Error sending request to builder",
            errors=["request timed out after 30.0s"],
        )

        response = client.post(
            "/bounties/ticket/send",
            json={"uuid": TICKET_UUID, **_ticket_body()},
            headers=AUTH,
        )

        assert response.status_code == 502
        assert response.json()["message"] == "Error sending request to builder"

    def test_send_requires_pubkey(self, client, builder):
        """Test that dispatch without a caller identity is unauthorized."""
        response = client.post(
            "/bounties/ticket/send", json={"uuid": TICKET_UUID, **_ticket_body()}
        )

        assert response.status_code == 401
        builder.create_project.assert_not_called()


class TestReviewEndpoint:
    """Tests for the builder review callback."""

    def test_review_updates_description(self, client):
        """Test that the callback replaces the description."""
        client.post(
            f"/bounties/ticket/{TICKET_UUID}", json=_ticket_body(), headers=AUTH
        )

        response = client.post(
            "/bounties/ticket/review/",
            json={"ticket_uuid": TICKET_UUID, "ticket_description": "Reviewed"},
        )

        assert response.status_code == 200
        assert response.json()["description"] == "Reviewed"

    def test_review_missing_fields(self, client):
        """Test that an incomplete callback is a 400."""
        response = client.post(
            "/bounties/ticket/review/", json={"ticket_uuid": TICKET_UUID}
        )
        assert response.status_code == 400

    def test_review_unknown_ticket(self, client):
        """Test that a callback for an unknown ticket is a 404."""
        response = client.post(
            "/bounties/ticket/review/",
            json={"ticket_uuid": TICKET_UUID, "ticket_description": "Reviewed"},
        )
        assert response.status_code == 404


class TestFilterCountEndpoint:
    """Tests for the bounty status report."""

    def test_counts(self, client, store):
        """Test that visible bounties are bucketed."""
        store.add_bounty(Bounty(id=1))
        store.add_bounty(Bounty(id=2, assignee="alice", completed=True))
        store.add_bounty(Bounty(id=3, assignee="bob", show=False))

        response = client.get("/bounties/filter/count")

        assert response.status_code == 200
        assert response.json() == {
            "open": 1,
            "assigned": 1,
            "completed": 1,
            "paid": 0,
            "pending": 0,
            "failed": 0,
        }
