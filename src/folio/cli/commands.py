"""CLI commands for folio.

- init-db: Create the database schema
- seed: Insert the default hero and specialization cards
- stats: Row counts per content section
- serve: Run the API/dashboard or the public site with uvicorn
"""

import typer
from rich.console import Console
from sqlalchemy.exc import SQLAlchemyError

from folio.config import load_app_config
from folio.db import (
    init_db,
    experience_repository,
    hero_repository,
    portfolio_repository,
    projects_repository,
    skills_repository,
    specializations_repository,
)
from folio.i18n import DEFAULT_LANGUAGE, translate

app = typer.Typer(
    name="folio",
    help="Portfolio content API, CMS dashboard and public site.",
    no_args_is_help=True,
)

console = Console()

SEED_SPECIALIZATIONS = ("skill1", "skill2", "skill3")


def _init_db_or_exit() -> None:
    config = load_app_config()
    try:
        init_db(config.database.url, echo=config.database.echo)
    except SQLAlchemyError as e:
        console.print(f"[red]✗ Database error: {e}[/red]")
        raise typer.Exit(code=1)


@app.command(name="init-db")
def init_db_command() -> None:
    """Create all tables if they don't exist."""
    _init_db_or_exit()
    url = load_app_config().database.url
    console.print("[green]✓ Database initialized[/green]")
    console.print(f"  [dim]url:[/dim] {url.split('@')[-1]}")


@app.command()
def seed(
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite existing hero content"),
    language: str = typer.Option(
        DEFAULT_LANGUAGE, "--language", "-l", help="Language of seeded cards: en, vi"
    ),
) -> None:
    """Insert the default hero and specialization cards."""
    _init_db_or_exit()

    if hero_repository.get_hero() is None or force:
        hero_repository.upsert_hero(description=hero_repository.DEFAULT_DESCRIPTION)
        console.print("[green]✓ Hero content set to defaults[/green]")
    else:
        console.print("[yellow]⚠ Hero content exists, skipped (use --force to overwrite)[/yellow]")

    if specializations_repository.list_specializations():
        console.print("[yellow]⚠ Specializations exist, skipped[/yellow]")
        return

    for key in SEED_SPECIALIZATIONS:
        specializations_repository.create_specialization(
            title=translate(f"skills.{key}.title", language),
            number=int(translate(f"skills.{key}.number", language)),
            description=translate(f"skills.{key}.description", language),
        )
    console.print(f"[green]✓ Added {len(SEED_SPECIALIZATIONS)} specializations[/green]")


@app.command()
def stats() -> None:
    """Show row counts per content section."""
    from rich.table import Table

    _init_db_or_exit()

    counts = {
        "hero": "saved" if hero_repository.get_hero() else "defaults",
        "projects": len(projects_repository.list_projects()),
        "skills": len(skills_repository.list_skills()),
        "experience": len(experience_repository.list_experiences()),
        "specializations": len(specializations_repository.list_specializations()),
        "portfolio": len(portfolio_repository.list_portfolio_items()),
    }

    table = Table(show_header=True, header_style="bold")
    table.add_column("Section")
    table.add_column("Entries", justify="right")
    for section, count in counts.items():
        table.add_row(section, str(count))

    console.print(table)


@app.command()
def serve(
    site: bool = typer.Option(False, "--site", help="Serve the public site instead of the API"),
    host: str | None = typer.Option(None, "--host", help="Bind address"),
    port: int | None = typer.Option(None, "--port", "-p", help="Port"),
    reload: bool = typer.Option(False, "--reload", help="Reload on code changes"),
) -> None:
    """Run the API/dashboard (or the public site) with uvicorn."""
    import uvicorn

    server = load_app_config().server
    target = "folio.site.app:app" if site else "folio.web.api:app"
    host = host or server.host
    port = port or (server.site_port if site else server.port)

    console.print(f"[blue]Serving {target} on http://{host}:{port}[/blue]")
    uvicorn.run(target, host=host, port=port, reload=reload)


if __name__ == "__main__":
    app()
