"""Tests for specializations endpoints."""


class TestSpecializations:
    """Tests for /api/specializations."""

    def test_create_and_list(self, client):
        response = client.post(
            "/api/specializations",
            json={"number": 1, "title": "Business Analysis", "description": "Processes"},
        )
        assert response.status_code == 201
        created = response.json()
        assert created["number"] == 1

        data = client.get("/api/specializations").json()
        assert [s["title"] for s in data] == ["Business Analysis"]

    def test_listed_by_id(self, client):
        for title in ["First", "Second"]:
            client.post("/api/specializations", json={"title": title})
        titles = [s["title"] for s in client.get("/api/specializations").json()]
        assert titles == ["First", "Second"]

    def test_missing_title(self, client):
        response = client.post("/api/specializations", json={"number": 2})
        assert response.status_code == 400

    def test_blank_number_is_null(self, client):
        response = client.post("/api/specializations", json={"title": "x", "number": ""})
        assert response.json()["number"] is None

    def test_update_and_delete(self, client):
        sid = client.post("/api/specializations", json={"title": "Old"}).json()["id"]

        response = client.put(f"/api/specializations/{sid}", json={"title": "New", "number": 3})
        assert response.status_code == 200
        assert response.json()["title"] == "New"

        response = client.delete(f"/api/specializations/{sid}")
        assert response.json() == {"message": "Specialization deleted successfully"}
        assert client.get(f"/api/specializations/{sid}").status_code == 404

    def test_update_missing(self, client):
        response = client.put("/api/specializations/42", json={"title": "x"})
        assert response.status_code == 404

    def test_oversized_number(self, client):
        response = client.post("/api/specializations", json={"title": "x", "number": 2**63})
        assert response.status_code == 400
        assert "number" in response.json()["error"]
