"""Tests for the folio CLI."""

import pytest
from typer.testing import CliRunner

from folio.cli.commands import app
from folio.db import dispose_engine, hero_repository, specializations_repository

runner = CliRunner()


@pytest.fixture
def cli_db(tmp_path, monkeypatch):
    """Point the CLI at a temporary SQLite database."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{tmp_path / 'cli.db'}")
    yield tmp_path / "cli.db"
    dispose_engine()


class TestInitDb:
    """Tests for `folio init-db`."""

    def test_creates_database(self, cli_db):
        result = runner.invoke(app, ["init-db"])
        assert result.exit_code == 0
        assert "Database initialized" in result.stdout
        assert cli_db.exists()


class TestSeed:
    """Tests for `folio seed`."""

    def test_seeds_hero_and_specializations(self, cli_db):
        result = runner.invoke(app, ["seed"])
        assert result.exit_code == 0

        hero = hero_repository.get_hero()
        assert hero is not None
        assert hero.description == hero_repository.DEFAULT_DESCRIPTION

        cards = specializations_repository.list_specializations()
        assert [c.number for c in cards] == [1, 2, 3]
        assert cards[0].title == "Business Analysis"

    def test_second_run_skips(self, cli_db):
        runner.invoke(app, ["seed"])
        hero_repository.upsert_hero(name="Custom")

        result = runner.invoke(app, ["seed"])
        assert result.exit_code == 0
        assert "skipped" in result.stdout
        assert hero_repository.get_hero().name == "Custom"
        assert len(specializations_repository.list_specializations()) == 3

    def test_force_overwrites_hero(self, cli_db):
        runner.invoke(app, ["seed"])
        hero_repository.upsert_hero(name="Custom")

        runner.invoke(app, ["seed", "--force"])
        assert hero_repository.get_hero().name == hero_repository.DEFAULT_NAME

    def test_vietnamese_cards(self, cli_db):
        runner.invoke(app, ["seed", "--language", "vi"])
        cards = specializations_repository.list_specializations()
        assert cards[0].title == "Phân tích nghiệp vụ"


class TestStats:
    """Tests for `folio stats`."""

    def test_counts(self, cli_db):
        runner.invoke(app, ["seed"])
        result = runner.invoke(app, ["stats"])
        assert result.exit_code == 0
        assert "specializations" in result.stdout
        assert "saved" in result.stdout


class TestServe:
    """Tests for `folio serve`."""

    @pytest.fixture
    def uvicorn_calls(self, monkeypatch):
        calls = []
        monkeypatch.setattr("uvicorn.run", lambda target, **kwargs: calls.append((target, kwargs)))
        return calls

    def test_api_defaults(self, cli_db, uvicorn_calls):
        result = runner.invoke(app, ["serve"])
        assert result.exit_code == 0
        target, kwargs = uvicorn_calls[0]
        assert target == "folio.web.api:app"
        assert kwargs["port"] == 3000

    def test_site(self, cli_db, uvicorn_calls):
        runner.invoke(app, ["serve", "--site"])
        target, kwargs = uvicorn_calls[0]
        assert target == "folio.site.app:app"
        assert kwargs["port"] == 5173

    def test_port_from_env(self, cli_db, uvicorn_calls, monkeypatch):
        monkeypatch.setenv("PORT", "8080")
        runner.invoke(app, ["serve"])
        assert uvicorn_calls[0][1]["port"] == 8080
