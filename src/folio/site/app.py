"""Public portfolio site.

Server-rendered pages reading the same repositories as the API. Labels
come from the string tables of the visitor's language.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any, AsyncGenerator

import structlog
from fastapi import FastAPI, Form, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates

from folio.config import AppConfig, load_app_config
from folio.db import (
    dispose_engine,
    init_db,
    experience_repository,
    hero_repository,
    portfolio_repository,
    projects_repository,
    skills_repository,
    specializations_repository,
)
from folio.i18n import (
    LANGUAGE_COOKIE,
    SUPPORTED_LANGUAGES,
    get_language_from_request,
    translate,
)
from folio.utils.validators import is_valid_uuid

logger = structlog.get_logger(__name__)

templates = Jinja2Templates(directory=str(Path(__file__).parent / "templates"))

# One year
LANGUAGE_COOKIE_MAX_AGE = 60 * 60 * 24 * 365

FALLBACK_SPECIALIZATIONS = ("skill1", "skill2", "skill3")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    config: AppConfig = app.state.config
    init_db(config.database.url, echo=config.database.echo)
    logger.info("site_startup", environment=config.environment)
    yield
    dispose_engine()


def _context(request: Request, **extra: Any) -> dict[str, Any]:
    language = get_language_from_request(request)

    def t(key: str, default: str | None = None) -> Any:
        return translate(key, language, default)

    return {"language": language, "languages": SUPPORTED_LANGUAGES, "t": t, **extra}


def _specializations(language: str) -> list[dict[str, Any]]:
    """Stored specialization cards, or the built-in ones when none are stored."""
    stored = specializations_repository.list_specializations()
    if stored:
        return [
            {"number": s.number, "title": s.title, "description": s.description}
            for s in stored
        ]

    return [
        {
            "number": translate(f"skills.{key}.number", language),
            "title": translate(f"skills.{key}.title", language),
            "description": translate(f"skills.{key}.description", language),
        }
        for key in FALLBACK_SPECIALIZATIONS
    ]


async def home(request: Request) -> HTMLResponse:
    """Landing page with every content section."""
    context = _context(request)
    language = context["language"]

    context.update(
        hero=hero_repository.get_hero_or_default(),
        specializations=_specializations(language),
        skills=skills_repository.list_skills(),
        experiences=experience_repository.list_experiences(),
        projects=projects_repository.list_projects(),
        portfolio=portfolio_repository.list_portfolio_items(),
    )
    return templates.TemplateResponse(request, "home.html", context)


async def project_detail(request: Request, project_id: str) -> HTMLResponse:
    """Case study page for one project."""
    project = None
    if is_valid_uuid(project_id):
        project = projects_repository.get_project(project_id)

    if project is None:
        return templates.TemplateResponse(
            request, "not_found.html", _context(request), status_code=404
        )

    return templates.TemplateResponse(
        request, "project.html", _context(request, project=project)
    )


async def set_language(
    request: Request,
    language: str = Form(...),
    next_url: str = Form("/", alias="next"),
) -> RedirectResponse:
    """Persist the visitor's language choice in a cookie."""
    if not next_url.startswith("/") or next_url.startswith("//"):
        next_url = "/"

    response = RedirectResponse(next_url, status_code=303)
    if language in SUPPORTED_LANGUAGES:
        response.set_cookie(
            LANGUAGE_COOKIE, language, max_age=LANGUAGE_COOKIE_MAX_AGE, samesite="lax"
        )
    return response


def create_site_app(config: AppConfig | None = None) -> FastAPI:
    """Create the public site application.

    Returns:
        Configured FastAPI app instance
    """
    config = config or load_app_config()

    app = FastAPI(
        title="Folio site",
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
        lifespan=lifespan,
    )
    app.state.config = config

    app.add_api_route("/", home, methods=["GET"], response_class=HTMLResponse)
    app.add_api_route(
        "/projects/{project_id}", project_detail, methods=["GET"], response_class=HTMLResponse
    )
    app.add_api_route("/language", set_language, methods=["POST"])

    return app


# Default app instance for uvicorn
app = create_site_app()
