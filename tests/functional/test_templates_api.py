"""
API tests for report templates.
"""

from datetime import datetime
from fastapi.testclient import TestClient


class TestTemplateCRUD:
    """Template create / list / update / delete"""

    def test_round_trip(self, client: TestClient, api_headers):
        created = client.post(
            "/api/templates",
            json={"name": "Adults", "sql": "SELECT * FROM users WHERE age > 18"},
            headers=api_headers,
        )
        assert created.status_code == 200
        template = created.json()
        assert template["id"] != 0
        assert template["created_at"] is not None
        assert template["updated_at"] is not None

        listed = client.get("/api/templates").json()
        assert any(
            t["id"] == template["id"] and t["name"] == "Adults" and t["sql"] == "SELECT * FROM users WHERE age > 18"
            for t in listed
        )

        deleted = client.delete(f"/api/templates/{template['id']}")
        assert deleted.status_code == 200
        assert deleted.json() == {"message": "Template deleted successfully"}

        assert all(t["id"] != template["id"] for t in client.get("/api/templates").json())

    def test_ids_are_allocated(self, client: TestClient):
        first = client.post("/api/templates", json={"name": "One", "sql": "SELECT 1"}).json()
        second = client.post("/api/templates", json={"name": "Two", "sql": "SELECT 2", "id": 0}).json()
        assert first["id"] != second["id"]
        assert len(client.get("/api/templates").json()) == 2

    def test_upsert_overwrites_existing(self, client: TestClient):
        created = client.post("/api/templates", json={"name": "Draft", "sql": "SELECT 1"}).json()

        updated = client.post(
            "/api/templates",
            json={"id": created["id"], "name": "Final", "sql": "SELECT 2"},
        )
        assert updated.status_code == 200
        body = updated.json()
        assert body["id"] == created["id"]
        assert body["name"] == "Final"
        assert body["sql"] == "SELECT 2"
        assert datetime.fromisoformat(body["updated_at"]) >= datetime.fromisoformat(created["updated_at"])

        templates = client.get("/api/templates").json()
        assert len(templates) == 1
        assert templates[0]["name"] == "Final"

    def test_unknown_id_gets_allocated_id(self, client: TestClient):
        saved = client.post("/api/templates", json={"id": 2, "name": "Stray", "sql": "SELECT 1"})
        assert saved.status_code == 200
        assert saved.json()["id"] != 2

        # Later creates keep allocating without colliding with earlier rows
        ids = [saved.json()["id"]]
        for i in range(3):
            response = client.post("/api/templates", json={"name": f"T{i}", "sql": "SELECT 1"})
            assert response.status_code == 200
            ids.append(response.json()["id"])

        assert len(set(ids)) == 4
        assert sorted(t["id"] for t in client.get("/api/templates").json()) == sorted(ids)

    def test_columns_and_filters_are_echoed_not_stored(self, client: TestClient):
        payload = {
            "name": "Names",
            "sql": "SELECT id, name FROM users",
            "columns": ["id", "name"],
            "filters": [{"field": "age", "operator": ">", "value": 18, "type": "number"}],
        }
        saved = client.post("/api/templates", json=payload).json()
        assert saved["columns"] == ["id", "name"]
        assert saved["filters"][0]["field"] == "age"

        listed = client.get("/api/templates").json()
        assert listed[0]["columns"] is None
        assert listed[0]["filters"] is None

    def test_delete_missing_template(self, client: TestClient):
        response = client.delete("/api/templates/999")
        assert response.status_code == 404
        assert response.json() == {"error": "Template not found"}

    def test_delete_with_invalid_id(self, client: TestClient):
        response = client.delete("/api/templates/abc")
        assert response.status_code == 400

    def test_blank_name_is_rejected(self, client: TestClient):
        response = client.post("/api/templates", json={"name": "  ", "sql": "SELECT 1"})
        assert response.status_code == 400
        assert "Template name cannot be empty" in response.json()["error"]
