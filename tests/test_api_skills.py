"""Tests for skills endpoints."""

import pytest


@pytest.fixture
def skills(client):
    """Three stored skills across two categories."""
    bodies = [
        {"name": "SQL", "category": "Data", "order_index": 2, "is_highlight": True},
        {"name": "Excel", "category": "Data", "order_index": 1},
        {"name": "Jira", "category": "Tools", "level": "Advanced"},
    ]
    return [client.post("/api/skills", json=b).json() for b in bodies]


class TestListSkills:
    """Tests for GET /api/skills."""

    def test_ordered_by_order_index(self, client, skills):
        names = [s["name"] for s in client.get("/api/skills").json()]
        assert names == ["Jira", "Excel", "SQL"]

    def test_filter_category(self, client, skills):
        data = client.get("/api/skills", params={"category": "Data"}).json()
        assert {s["name"] for s in data} == {"SQL", "Excel"}

    def test_filter_highlight_true(self, client, skills):
        data = client.get("/api/skills", params={"highlight": "true"}).json()
        assert [s["name"] for s in data] == ["SQL"]

    def test_filter_highlight_other_value_means_false(self, client, skills):
        data = client.get("/api/skills", params={"highlight": "yes"}).json()
        assert {s["name"] for s in data} == {"Excel", "Jira"}


class TestCreateSkill:
    """Tests for POST /api/skills."""

    def test_create(self, client):
        response = client.post("/api/skills", json={"name": "Figma", "category": "Design"})
        assert response.status_code == 201
        data = response.json()
        assert isinstance(data["id"], int)
        assert data["order_index"] == 0
        assert data["is_highlight"] is False

    def test_missing_fields_listed(self, client):
        response = client.post("/api/skills", json={"level": "x"})
        assert response.status_code == 400
        assert response.json()["error"] == "Missing required fields: name, category"


class TestSkillById:
    """Tests for /api/skills/{id}."""

    def test_get(self, client, skills):
        skill = skills[2]
        response = client.get(f"/api/skills/{skill['id']}")
        assert response.status_code == 200
        assert response.json()["level"] == "Advanced"

    def test_id_with_trailing_text(self, client, skills):
        """Leading digits are used as the id."""
        skill = skills[0]
        response = client.get(f"/api/skills/{skill['id']}abc")
        assert response.status_code == 200
        assert response.json()["id"] == skill["id"]

    def test_non_integer_id(self, client):
        response = client.get("/api/skills/abc")
        assert response.status_code == 400
        assert response.json()["error"] == "Invalid ID format. Expected integer."

    def test_zero_id(self, client):
        response = client.get("/api/skills/0")
        assert response.status_code == 400
        assert response.json()["error"] == "ID must be a positive integer."

    def test_update(self, client, skills):
        skill = skills[1]
        response = client.put(
            f"/api/skills/{skill['id']}",
            json={"name": "Excel", "category": "Office", "is_highlight": True},
        )
        assert response.status_code == 200
        assert response.json()["category"] == "Office"
        assert response.json()["is_highlight"] is True

    def test_update_missing(self, client):
        response = client.put("/api/skills/999", json={"name": "x", "category": "y"})
        assert response.status_code == 404

    def test_delete(self, client, skills):
        response = client.delete(f"/api/skills/{skills[0]['id']}")
        assert response.json() == {"message": "Skill deleted successfully"}
        assert client.get(f"/api/skills/{skills[0]['id']}").status_code == 404

    def test_delete_missing(self, client):
        assert client.delete("/api/skills/999").status_code == 404


class TestMissingFieldsWriteNothing:
    """A 400 for missing fields leaves stored skills untouched."""

    def test_create_stores_nothing(self, client, skills):
        before = client.get("/api/skills").json()
        response = client.post("/api/skills", json={"name": "Tableau"})
        assert response.status_code == 400
        assert client.get("/api/skills").json() == before

    def test_update_keeps_row(self, client, skills):
        before = client.get("/api/skills").json()
        response = client.put(
            f"/api/skills/{skills[0]['id']}", json={"name": "Postgres", "order_index": 9}
        )
        assert response.status_code == 400
        assert response.json()["error"] == "Missing required fields: category"
        assert client.get("/api/skills").json() == before


class TestIntegerBounds:
    """Values beyond an integer column are rejected with 400."""

    def test_oversized_id(self, client):
        response = client.get("/api/skills/99999999999999999999")
        assert response.status_code == 400
        assert response.json()["error"] == "ID is out of range."

    def test_oversized_order_index(self, client):
        response = client.post(
            "/api/skills", json={"name": "SQL", "category": "Data", "order_index": 10**20}
        )
        assert response.status_code == 400
        assert "order_index" in response.json()["error"]
        assert client.get("/api/skills").json() == []
