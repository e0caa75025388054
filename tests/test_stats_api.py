"""Tests for the stats endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from pymongo.errors import OperationFailure, ServerSelectionTimeoutError

if TYPE_CHECKING:
    from unittest.mock import MagicMock

    from litestar import Litestar
    from litestar.testing import TestClient

    from mongoscope.auth.registry import ConnectionRegistry, SessionRegistry


def _error(response_json: dict) -> dict:
    return response_json["response"]["error"]


class TestServerStats:
    """Tests for GET /stats."""

    def test_returns_server_status(self, client: TestClient[Litestar], token: str, mongo_client: MagicMock) -> None:
        """Test the serverStatus document is wrapped in the envelope."""
        response = client.get("/stats", params={"tokenId": token})
        assert response.status_code == 200
        data = response.json()
        result = data["response"]["result"]
        assert result["host"] == "db1.example.net:27017"
        assert result["connections"] == {"current": 4, "available": 838856}
        assert "totalRecords" not in data
        mongo_client.admin.command.assert_called_once_with("serverStatus")

    def test_dates_are_extended_json(self, client: TestClient[Litestar], token: str) -> None:
        """Test datetimes from the driver are rendered as $date wrappers."""
        response = client.get("/stats", params={"tokenId": token})
        assert "$date" in response.json()["response"]["result"]["localTime"]

    def test_driver_failure(self, client: TestClient[Litestar], token: str, mongo_client: MagicMock) -> None:
        """Test a driver error surfaces as an error envelope."""
        mongo_client.admin.command.side_effect = OperationFailure("not authorized on admin")
        response = client.get("/stats", params={"tokenId": token})
        assert response.status_code == 500
        error = _error(response.json())
        assert error["code"] == "GET_SERVER_STATS_EXCEPTION"
        assert "not authorized" in error["message"]
        assert error["level"] == "ERROR"

    def test_unexpected_failure(self, client: TestClient[Litestar], token: str, mongo_client: MagicMock) -> None:
        """Test a non-driver error is rendered by the generic handler."""
        mongo_client.admin.command.side_effect = RuntimeError("boom")
        response = client.get("/stats", params={"tokenId": token})
        assert response.status_code == 500
        error = _error(response.json())
        assert error["code"] == "ANY_OTHER_EXCEPTION"
        assert error["message"] == "boom"


class TestDatabaseStats:
    """Tests for GET /stats/db/{dbName}."""

    def test_returns_entries(self, client: TestClient[Litestar], token: str) -> None:
        """Test dbStats is flattened into Key/Value/Type entries."""
        response = client.get("/stats/db/shop", params={"tokenId": token})
        assert response.status_code == 200
        data = response.json()
        result = data["response"]["result"]
        assert [entry["Key"] for entry in result] == [
            "db",
            "collections",
            "objects",
            "avgObjSize",
            "dataSize",
            "ok",
        ]
        objects = next(entry for entry in result if entry["Key"] == "objects")
        assert objects == {"Key": "objects", "Value": 1250, "Type": "Long"}

    def test_total_records_matches_result(self, client: TestClient[Litestar], token: str) -> None:
        """Test totalRecords equals the length of the result array."""
        data = client.get("/stats/db/shop", params={"tokenId": token}).json()
        assert data["totalRecords"] == len(data["response"]["result"]) == 6

    def test_undefined_database(self, client: TestClient[Litestar], token: str, mongo_database: MagicMock) -> None:
        """Test an unknown database is reported without running dbStats."""
        response = client.get("/stats/db/missing", params={"tokenId": token})
        assert response.status_code == 404
        assert _error(response.json())["code"] == "UNDEFINED_DATABASE"
        mongo_database.command.assert_not_called()

    def test_driver_failure(self, client: TestClient[Litestar], token: str, mongo_client: MagicMock) -> None:
        """Test a driver error surfaces as an error envelope."""
        mongo_client.list_database_names.side_effect = ServerSelectionTimeoutError("no servers")
        response = client.get("/stats/db/shop", params={"tokenId": token})
        assert response.status_code == 500
        assert _error(response.json())["code"] == "GET_DB_STATS_EXCEPTION"


class TestCollectionStats:
    """Tests for GET /stats/db/{dbName}/collection/{collectionName}."""

    def test_returns_entries(self, client: TestClient[Litestar], token: str, mongo_database: MagicMock) -> None:
        """Test collStats is flattened into Key/Value/Type entries."""
        response = client.get("/stats/db/shop/collection/orders", params={"tokenId": token})
        assert response.status_code == 200
        data = response.json()
        result = data["response"]["result"]
        assert data["totalRecords"] == len(result) == 6
        types = {entry["Key"]: entry["Type"] for entry in result}
        assert types["ns"] == "String"
        assert types["indexSizes"] == "Document"
        assert types["capped"] == "Boolean"
        mongo_database.command.assert_called_once_with("collStats", "orders")

    def test_undefined_collection(self, client: TestClient[Litestar], token: str) -> None:
        """Test an unknown collection is reported."""
        response = client.get("/stats/db/shop/collection/missing", params={"tokenId": token})
        assert response.status_code == 404
        assert _error(response.json())["code"] == "UNDEFINED_COLLECTION"

    def test_undefined_database(self, client: TestClient[Litestar], token: str) -> None:
        """Test an unknown database is reported before the collection is checked."""
        response = client.get("/stats/db/missing/collection/orders", params={"tokenId": token})
        assert response.status_code == 404
        assert _error(response.json())["code"] == "UNDEFINED_DATABASE"

    def test_driver_failure(self, client: TestClient[Litestar], token: str, mongo_database: MagicMock) -> None:
        """Test a driver error surfaces as an error envelope."""
        mongo_database.command.side_effect = OperationFailure("ns not found")
        response = client.get("/stats/db/shop/collection/orders", params={"tokenId": token})
        assert response.status_code == 500
        assert _error(response.json())["code"] == "GET_COLL_STATS_EXCEPTION"


STATS_PATHS = ["/stats", "/stats/db/shop", "/stats/db/shop/collection/orders"]


class TestTokenValidation:
    """Tests for the shared INVALID_USER failure path."""

    @pytest.mark.parametrize("path", STATS_PATHS)
    def test_unmapped_token(
        self,
        client: TestClient[Litestar],
        mongo_client: MagicMock,
        mongo_database: MagicMock,
        path: str,
    ) -> None:
        """Test an unknown token never reaches the driver."""
        response = client.get(path, params={"tokenId": "not-a-token"})
        assert response.status_code == 401
        error = _error(response.json())
        assert error["code"] == "INVALID_USER"
        assert error["level"] == "FATAL"
        mongo_client.admin.command.assert_not_called()
        mongo_client.list_database_names.assert_not_called()
        mongo_database.command.assert_not_called()

    @pytest.mark.parametrize("path", STATS_PATHS)
    def test_missing_token(self, client: TestClient[Litestar], mongo_client: MagicMock, path: str) -> None:
        """Test a request without tokenId is rejected."""
        response = client.get(path)
        assert response.status_code == 401
        error = _error(response.json())
        assert error["code"] == "INVALID_USER"
        assert error["message"] == "Token id not provided"
        mongo_client.admin.command.assert_not_called()

    def test_user_without_connection(
        self,
        client: TestClient[Litestar],
        token: str,
        user: str,
        connections: ConnectionRegistry,
        mongo_client: MagicMock,
    ) -> None:
        """Test a token whose user has no live connection is rejected."""
        connections.detach(user)
        mongo_client.close.assert_called_once()

        response = client.get("/stats", params={"tokenId": token})
        assert response.status_code == 401
        assert _error(response.json())["message"] == "No connection found for user"

    def test_revoked_token(self, client: TestClient[Litestar], token: str, sessions: SessionRegistry) -> None:
        """Test a token revoked after login is rejected."""
        sessions.revoke(token)
        response = client.get("/stats", params={"tokenId": token})
        assert response.status_code == 401


class TestEnvelopeExtras:
    """Tests for correlation IDs and framework errors."""

    def test_correlation_id_echoed(self, client: TestClient[Litestar], token: str) -> None:
        """Test a caller supplied correlation ID is echoed back."""
        response = client.get("/stats", params={"tokenId": token}, headers={"X-Correlation-ID": "abc123"})
        assert response.headers["x-correlation-id"] == "abc123"

    def test_correlation_id_in_error(self, client: TestClient[Litestar]) -> None:
        """Test error envelopes carry the correlation ID."""
        response = client.get("/stats", headers={"X-Correlation-ID": "req-42"})
        assert _error(response.json())["correlation_id"] == "req-42"

    def test_unknown_route(self, client: TestClient[Litestar]) -> None:
        """Test unknown routes use the same envelope."""
        response = client.get("/stats/unknown/route")
        assert response.status_code == 404
        assert _error(response.json())["code"] == "HTTP_404"
