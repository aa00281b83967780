"""Tests for repository functions against SQLite."""

import pytest
from sqlalchemy import text
from sqlalchemy.exc import IntegrityError

from folio.db import get_db
from folio.db import (
    experience_repository,
    hero_repository,
    projects_repository,
    skills_repository,
)


@pytest.fixture(autouse=True)
def database(db_url):
    return db_url


class TestHeroRepository:
    """Tests for the hero singleton."""

    def test_get_hero_none_before_save(self):
        assert hero_repository.get_hero() is None
        assert hero_repository.get_hero_or_default().name == hero_repository.DEFAULT_NAME

    def test_upsert_keeps_one_row(self):
        hero_repository.upsert_hero(name="A")
        hero_repository.upsert_hero(name="B")

        with get_db() as conn:
            count = conn.execute(text("SELECT COUNT(*) FROM hero_content")).scalar()
        assert count == 1
        assert hero_repository.get_hero().name == "B"

    def test_upsert_keeps_created_at(self):
        first = hero_repository.upsert_hero(name="A")
        second = hero_repository.upsert_hero(name="B")
        assert second.created_at == first.created_at


class TestProjectsRepository:
    """Tests for projects."""

    def test_tags_round_trip(self):
        created = projects_repository.create_project(title="P", tags_text=["a", "b"])
        assert projects_repository.get_project(created.id).tags_text == ["a", "b"]

    def test_update_missing_returns_none(self):
        assert projects_repository.update_project(
            "3f2b8c1e-9d4a-4c6b-8e2f-1a2b3c4d5e6f", title="x"
        ) is None

    def test_delete_missing_returns_false(self):
        assert projects_repository.delete_project("3f2b8c1e-9d4a-4c6b-8e2f-1a2b3c4d5e6f") is False


class TestSkillsRepository:
    """Tests for skills."""

    def test_duplicate_slug_rejected(self):
        skills_repository.create_skill(name="SQL", category="Data", slug="sql")
        with pytest.raises(IntegrityError):
            skills_repository.create_skill(name="SQL 2", category="Data", slug="sql")

    def test_null_slugs_allowed(self):
        skills_repository.create_skill(name="A", category="X")
        skills_repository.create_skill(name="B", category="X")
        assert len(skills_repository.list_skills()) == 2


class TestExperienceRepository:
    """Tests for experience and bullets."""

    def test_bullets_kept_in_order(self):
        exp = experience_repository.create_experience(
            company="Acme", role="BA", start_date="2020-01-01", bullets=["c", "a", "b"]
        )
        fetched = experience_repository.get_experience(exp.id)
        assert [b.text for b in fetched.bullets] == ["c", "a", "b"]

    def test_update_replaces_bullets(self):
        exp = experience_repository.create_experience(
            company="Acme", role="BA", start_date="2020-01-01", bullets=["old"]
        )
        updated = experience_repository.update_experience(
            exp.id, company="Acme", role="BA", start_date="2020-01-01", bullets=["new1", "new2"]
        )
        assert [b.text for b in updated.bullets] == ["new1", "new2"]

    def test_failed_create_rolls_back(self, monkeypatch):
        def broken_insert(conn, experience_id, bullets):
            raise RuntimeError("bullet insert failed")

        monkeypatch.setattr(experience_repository, "_insert_bullets", broken_insert)
        with pytest.raises(RuntimeError):
            experience_repository.create_experience(
                company="Acme", role="BA", start_date="2020-01-01", bullets=["x"]
            )

        assert experience_repository.list_experiences() == []
