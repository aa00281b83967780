"""Tests for portfolio endpoints (camelCase JSON)."""

import pytest

MISSING_ID = "3f2b8c1e-9d4a-4c6b-8e2f-1a2b3c4d5e6f"


@pytest.fixture
def item(client):
    response = client.post(
        "/api/portfolio",
        json={
            "title": "Loan workflow",
            "tagRole": "Business Analyst",
            "imageUrl": "https://img.test/a.png",
        },
    )
    assert response.status_code == 201
    return response.json()


class TestPortfolio:
    """Tests for /api/portfolio."""

    def test_camel_case_response(self, item):
        assert item["tagRole"] == "Business Analyst"
        assert item["imageUrl"] == "https://img.test/a.png"
        assert item["projectUrl"] is None
        assert "createdAt" in item
        assert "tag_role" not in item

    def test_missing_tag_role(self, client):
        response = client.post("/api/portfolio", json={"title": "x"})
        assert response.status_code == 400
        assert response.json()["error"] == "Missing required fields: tagRole"

    def test_get(self, client, item):
        response = client.get(f"/api/portfolio/{item['id']}")
        assert response.status_code == 200
        assert response.json() == item

    def test_get_missing(self, client):
        response = client.get(f"/api/portfolio/{MISSING_ID}")
        assert response.status_code == 404

    def test_update(self, client, item):
        response = client.put(
            f"/api/portfolio/{item['id']}",
            json={"title": "Loan workflow v2", "tagRole": "Product Owner"},
        )
        assert response.status_code == 200
        assert response.json()["tagRole"] == "Product Owner"
        assert response.json()["imageUrl"] is None

    def test_update_missing(self, client):
        response = client.put(
            f"/api/portfolio/{MISSING_ID}", json={"title": "x", "tagRole": "y"}
        )
        assert response.status_code == 404

    def test_delete(self, client, item):
        response = client.delete(f"/api/portfolio/{item['id']}")
        assert response.status_code == 200
        assert client.get("/api/portfolio").json() == []
