"""Tests for CMS dashboard pages (identity provider disabled)."""

import pytest

from folio.web.dashboard import RESOURCES, form_to_body, record_to_form


class TestFormConversion:
    """Tests for form <-> body conversion."""

    def test_form_to_body(self):
        fields = RESOURCES["experience"].fields
        body = form_to_body(
            fields,
            {
                "company": "Acme",
                "role": "BA",
                "start_date": "2021-01-01",
                "bullets": "First\n\n  Second  \n",
                "skills_text": "SQL, , BPMN",
            },
        )
        assert body["bullets"] == ["First", "Second"]
        assert body["skills_text"] == ["SQL", "BPMN"]
        assert body["is_current"] is False
        assert body["location"] == ""

    def test_checkbox_present_means_true(self):
        body = form_to_body(RESOURCES["skills"].fields, {"is_highlight": "on"})
        assert body["is_highlight"] is True

    def test_record_to_form_uses_record_attributes(self, client):
        from folio.db import portfolio_repository

        record = portfolio_repository.create_portfolio_item(title="T", tag_role="BA")
        values = record_to_form(RESOURCES["portfolio"].fields, record)
        assert values["tagRole"] == "BA"
        assert values["imageUrl"] == ""


class TestDashboardHome:
    """Tests for GET /dashboard."""

    def test_counts(self, client):
        client.post("/api/projects", json={"title": "One"})
        response = client.get("/dashboard")
        assert response.status_code == 200
        assert "Projects" in response.text
        assert "Portfolio" in response.text

    def test_unknown_section(self, client):
        response = client.get("/dashboard/widgets")
        assert response.status_code == 404
        assert response.headers["content-type"].startswith("text/html")
        assert "Page not found" in response.text


class TestResourceForms:
    """Tests for list/new/edit/delete pages."""

    def test_create_project(self, client):
        response = client.post(
            "/dashboard/projects/new",
            data={"title": "Churn study", "summary": "", "tags_text": "SQL, Python"},
            follow_redirects=False,
        )
        assert response.status_code == 303
        assert response.headers["location"] == "/dashboard/projects"

        projects = client.get("/api/projects").json()
        assert projects[0]["title"] == "Churn study"
        assert projects[0]["summary"] is None
        assert projects[0]["tags_text"] == ["SQL", "Python"]

        assert "Churn study" in client.get("/dashboard/projects").text

    def test_missing_required_rerenders_form(self, client):
        response = client.post("/dashboard/skills/new", data={"name": "SQL"})
        assert response.status_code == 400
        assert "Missing required fields: category" in response.text
        assert 'value="SQL"' in response.text

    def test_create_experience_with_bullets(self, client):
        response = client.post(
            "/dashboard/experience/new",
            data={
                "company": "Acme",
                "role": "BA",
                "start_date": "2021-01-01",
                "is_current": "on",
                "bullets": "Mapped processes\nRan workshops",
            },
            follow_redirects=False,
        )
        assert response.status_code == 303

        exp = client.get("/api/experience").json()[0]
        assert exp["is_current"] is True
        assert [b["text"] for b in exp["bullets"]] == ["Mapped processes", "Ran workshops"]

    def test_edit_and_update(self, client):
        skill = client.post("/api/skills", json={"name": "Excel", "category": "Office"}).json()

        page = client.get(f"/dashboard/skills/{skill['id']}/edit")
        assert page.status_code == 200
        assert 'value="Excel"' in page.text

        response = client.post(
            f"/dashboard/skills/{skill['id']}/edit",
            data={"name": "Excel", "category": "Data", "order_index": "4"},
            follow_redirects=False,
        )
        assert response.status_code == 303

        updated = client.get(f"/api/skills/{skill['id']}").json()
        assert updated["category"] == "Data"
        assert updated["order_index"] == 4

    def test_edit_portfolio_camel_fields(self, client):
        item = client.post("/api/portfolio", json={"title": "A", "tagRole": "BA"}).json()
        response = client.post(
            f"/dashboard/portfolio/{item['id']}/edit",
            data={"title": "A", "tagRole": "PO", "projectUrl": "https://x.test"},
            follow_redirects=False,
        )
        assert response.status_code == 303
        updated = client.get(f"/api/portfolio/{item['id']}").json()
        assert updated["tagRole"] == "PO"
        assert updated["projectUrl"] == "https://x.test"

    @pytest.mark.parametrize("slug, raw_id", [("skills", "abc"), ("projects", "123")])
    def test_malformed_id_is_404(self, client, slug, raw_id):
        response = client.get(f"/dashboard/{slug}/{raw_id}/edit")
        assert response.status_code == 404
        assert response.headers["content-type"].startswith("text/html")
        assert "Back to the dashboard" in response.text

    def test_delete(self, client):
        card = client.post("/api/specializations", json={"title": "Gone"}).json()
        response = client.post(
            f"/dashboard/specializations/{card['id']}/delete", follow_redirects=False
        )
        assert response.status_code == 303
        assert client.get("/api/specializations").json() == []

    def test_delete_missing(self, client):
        response = client.post("/dashboard/specializations/99/delete")
        assert response.status_code == 404
        assert "Specialization not found" in response.text

    def test_update_missing(self, client):
        response = client.post(
            "/dashboard/specializations/99/edit", data={"title": "Ghost"}
        )
        assert response.status_code == 404
        assert response.headers["content-type"].startswith("text/html")
        assert client.get("/api/specializations").json() == []


class TestHeroForm:
    """Tests for /dashboard/hero."""

    def test_shows_defaults(self, client):
        response = client.get("/dashboard/hero")
        assert response.status_code == 200
        assert "Business Analyst" in response.text

    def test_save(self, client):
        response = client.post(
            "/dashboard/hero",
            data={"name": "Mason", "title": "Product Analyst"},
            follow_redirects=False,
        )
        assert response.status_code == 303
        hero = client.get("/api/hero").json()
        assert hero["name"] == "Mason"
        assert hero["title"] == "Product Analyst"
        assert hero["greeting"] == "Hey!"
