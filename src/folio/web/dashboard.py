"""CMS dashboard pages: login, logout and content forms.

Pages are server-rendered with Jinja2. Forms are converted to the same
dict shape the JSON API receives, so required-field checks and input
models are shared with the API routes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable

import structlog
from fastapi import APIRouter, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates
from pydantic import BaseModel

from folio.db import (
    experience_repository,
    hero_repository,
    portfolio_repository,
    projects_repository,
    skills_repository,
    specializations_repository,
)
from folio.web.auth import (
    ACCESS_TOKEN_COOKIE,
    AuthError,
    is_auth_cookie_name,
    sign_in_with_password,
)
from folio.web.errors import ApiError, database_errors
from folio.web.request_parsing import build_payload, int_param, require_fields, uuid_param
from folio.web.schemas import (
    ExperienceInput,
    HeroInput,
    PortfolioInput,
    ProjectInput,
    SkillInput,
    SpecializationInput,
)

logger = structlog.get_logger(__name__)

templates = Jinja2Templates(directory=str(Path(__file__).parent / "templates"))

router = APIRouter(include_in_schema=False)


# =============================================================================
# RESOURCE REGISTRY
# =============================================================================


@dataclass
class FormField:
    """One input of a dashboard form.

    `name` is the key in the API body; `attr` the record attribute.
    kind: text | textarea | url | number | date | checkbox | tags | lines
    """

    name: str
    label: str
    kind: str = "text"
    required: bool = False
    attr: str | None = None

    @property
    def record_attr(self) -> str:
        return self.attr or self.name


@dataclass
class DashboardResource:
    """How the dashboard lists, edits and stores one resource."""

    slug: str
    title: str
    singular: str
    fields: list[FormField]
    input_model: type[BaseModel]
    id_kind: str
    list_items: Callable[[], list]
    get_item: Callable[[Any], Any]
    create_item: Callable[..., Any]
    update_item: Callable[..., Any]
    delete_item: Callable[[Any], bool]
    label: Callable[[Any], str]
    to_kwargs: Callable[[Any], dict] = field(default=lambda payload: payload.model_dump())

    @property
    def required(self) -> list[str]:
        return [f.name for f in self.fields if f.required]

    def parse_id(self, raw: str) -> Any:
        if self.id_kind == "int":
            return int_param(raw)
        return uuid_param(raw, self.singular.lower())


RESOURCES: dict[str, DashboardResource] = {
    "projects": DashboardResource(
        slug="projects",
        title="Projects",
        singular="Project",
        fields=[
            FormField("title", "Title", required=True),
            FormField("summary", "Summary", "textarea"),
            FormField("hero_image_url", "Hero image URL", "url"),
            FormField("case_study_url", "Case study URL", "url"),
            FormField("tags_text", "Tags (comma-separated)", "tags"),
        ],
        input_model=ProjectInput,
        id_kind="uuid",
        list_items=projects_repository.list_projects,
        get_item=projects_repository.get_project,
        create_item=projects_repository.create_project,
        update_item=projects_repository.update_project,
        delete_item=projects_repository.delete_project,
        label=lambda p: p.title,
    ),
    "skills": DashboardResource(
        slug="skills",
        title="Skills",
        singular="Skill",
        fields=[
            FormField("name", "Name", required=True),
            FormField("category", "Category", required=True),
            FormField("slug", "Slug"),
            FormField("level", "Level"),
            FormField("icon_url", "Icon URL", "url"),
            FormField("description", "Description", "textarea"),
            FormField("order_index", "Order", "number"),
            FormField("is_highlight", "Highlight", "checkbox"),
        ],
        input_model=SkillInput,
        id_kind="int",
        list_items=skills_repository.list_skills,
        get_item=skills_repository.get_skill,
        create_item=skills_repository.create_skill,
        update_item=skills_repository.update_skill,
        delete_item=skills_repository.delete_skill,
        label=lambda s: f"{s.name} ({s.category})",
    ),
    "experience": DashboardResource(
        slug="experience",
        title="Experience",
        singular="Experience",
        fields=[
            FormField("company", "Company", required=True),
            FormField("role", "Role", required=True),
            FormField("location", "Location"),
            FormField("start_date", "Start date", "date", required=True),
            FormField("end_date", "End date", "date"),
            FormField("is_current", "Current position", "checkbox"),
            FormField("description", "Description", "textarea"),
            FormField("bullets", "Bullets (one per line)", "lines"),
            FormField("skills_text", "Skills (comma-separated)", "tags"),
        ],
        input_model=ExperienceInput,
        id_kind="uuid",
        list_items=experience_repository.list_experiences,
        get_item=experience_repository.get_experience,
        create_item=experience_repository.create_experience,
        update_item=experience_repository.update_experience,
        delete_item=experience_repository.delete_experience,
        label=lambda e: f"{e.role} at {e.company}",
        to_kwargs=lambda payload: payload.to_repository_kwargs(),
    ),
    "specializations": DashboardResource(
        slug="specializations",
        title="Specializations",
        singular="Specialization",
        fields=[
            FormField("number", "Number", "number"),
            FormField("title", "Title", required=True),
            FormField("description", "Description", "textarea"),
            FormField("icon_url", "Icon URL", "url"),
        ],
        input_model=SpecializationInput,
        id_kind="int",
        list_items=specializations_repository.list_specializations,
        get_item=specializations_repository.get_specialization,
        create_item=specializations_repository.create_specialization,
        update_item=specializations_repository.update_specialization,
        delete_item=specializations_repository.delete_specialization,
        label=lambda s: f"{s.number or '-'}. {s.title}",
    ),
    "portfolio": DashboardResource(
        slug="portfolio",
        title="Portfolio",
        singular="Portfolio",
        fields=[
            FormField("title", "Title", required=True),
            FormField("tagRole", "Role tag", required=True, attr="tag_role"),
            FormField("description", "Description", "textarea"),
            FormField("imageUrl", "Image URL", "url", attr="image_url"),
            FormField("projectUrl", "Project URL", "url", attr="project_url"),
        ],
        input_model=PortfolioInput,
        id_kind="uuid",
        list_items=portfolio_repository.list_portfolio_items,
        get_item=portfolio_repository.get_portfolio_item,
        create_item=portfolio_repository.create_portfolio_item,
        update_item=portfolio_repository.update_portfolio_item,
        delete_item=portfolio_repository.delete_portfolio_item,
        label=lambda p: f"{p.title} [{p.tag_role}]",
    ),
}

HERO_FIELDS = [
    FormField("greeting", "Greeting"),
    FormField("greeting_part2", "Greeting (part 2)"),
    FormField("name", "Name"),
    FormField("title", "Title"),
    FormField("description", "Description", "textarea"),
    FormField("linkedin_url", "LinkedIn URL", "url"),
    FormField("github_url", "GitHub URL", "url"),
    FormField("email_url", "Email link", "url"),
    FormField("profile_image_url", "Profile image URL", "url"),
]


# =============================================================================
# FORM CONVERSION
# =============================================================================


def form_to_body(fields: list[FormField], form: Any) -> dict[str, Any]:
    """Convert submitted form data into an API-shaped body."""
    body: dict[str, Any] = {}
    for f in fields:
        raw = form.get(f.name)
        if f.kind == "checkbox":
            body[f.name] = raw is not None
        elif f.kind == "tags":
            body[f.name] = [t.strip() for t in (raw or "").split(",") if t.strip()]
        elif f.kind == "lines":
            body[f.name] = [line.strip() for line in (raw or "").splitlines() if line.strip()]
        else:
            body[f.name] = raw if raw is not None else ""
    return body


def record_to_form(fields: list[FormField], record: Any) -> dict[str, Any]:
    """Values to pre-fill a form from a stored record."""
    values: dict[str, Any] = {}
    for f in fields:
        value = getattr(record, f.record_attr, None)
        if f.kind == "tags":
            values[f.name] = ", ".join(value or [])
        elif f.kind == "lines":
            values[f.name] = "\n".join(getattr(v, "text", v) for v in value or [])
        elif f.kind == "checkbox":
            values[f.name] = bool(value)
        else:
            values[f.name] = "" if value is None else value
    return values


class DashboardNotFound(Exception):
    """Unknown dashboard section or missing row, rendered as an HTML 404."""


async def dashboard_not_found_handler(request: Request, exc: DashboardNotFound) -> HTMLResponse:
    return _render(request, "dashboard/not_found.html", status_code=404, message=str(exc))


def _get_resource(slug: str) -> DashboardResource:
    resource = RESOURCES.get(slug)
    if resource is None:
        raise DashboardNotFound("Page not found")
    return resource


def _render(request: Request, name: str, status_code: int = 200, **context: Any) -> HTMLResponse:
    context.setdefault("user", getattr(request.state, "user", None))
    context.setdefault("resources", RESOURCES)
    return templates.TemplateResponse(request, name, context, status_code=status_code)


def _see_other(url: str) -> RedirectResponse:
    return RedirectResponse(url, status_code=status.HTTP_303_SEE_OTHER)


# =============================================================================
# LOGIN / LOGOUT
# =============================================================================


@router.get("/login", response_class=HTMLResponse)
async def login_page(request: Request) -> HTMLResponse:
    return _render(request, "login.html", error=None, email="")


@router.post("/login", response_class=HTMLResponse)
async def login_submit(request: Request):
    """Sign in with the identity provider and store the access token cookie."""
    auth = request.app.state.config.auth
    form = await request.form()
    email = str(form.get("email") or "").strip()
    password = str(form.get("password") or "")

    if not auth.enabled:
        return _render(
            request, "login.html", status_code=503,
            error="Authentication is not configured", email=email,
        )

    if not email or not password:
        return _render(
            request, "login.html", status_code=400,
            error="Email and password are required", email=email,
        )

    try:
        session = await sign_in_with_password(email, password, auth)
    except AuthError as e:
        return _render(request, "login.html", status_code=401, error=str(e), email=email)

    response = _see_other("/dashboard")
    response.set_cookie(
        ACCESS_TOKEN_COOKIE,
        session["access_token"],
        max_age=int(session.get("expires_in", 3600)),
        httponly=True,
        samesite="lax",
        secure=request.app.state.config.is_production,
    )
    return response


@router.post("/logout")
async def logout(request: Request) -> RedirectResponse:
    """Clear every session cookie, whichever convention set it."""
    response = _see_other("/login")
    names = {name for name in request.cookies if is_auth_cookie_name(name)}
    for name in sorted(names | {ACCESS_TOKEN_COOKIE}):
        response.delete_cookie(name)
    logger.info("auth.signed_out")
    return response


# =============================================================================
# DASHBOARD PAGES
# =============================================================================


@router.get("/dashboard", response_class=HTMLResponse)
async def dashboard_home(request: Request) -> HTMLResponse:
    """Overview with row counts per resource."""
    with database_errors("load dashboard"):
        counts = {slug: len(r.list_items()) for slug, r in RESOURCES.items()}
        hero = hero_repository.get_hero()

    return _render(request, "dashboard/index.html", counts=counts, hero_saved=hero is not None)


@router.get("/dashboard/hero", response_class=HTMLResponse)
async def hero_form(request: Request) -> HTMLResponse:
    with database_errors("fetch hero section"):
        hero = hero_repository.get_hero_or_default()

    return _render(
        request, "dashboard/form.html",
        heading="Hero", fields=HERO_FIELDS,
        values=record_to_form(HERO_FIELDS, hero),
        action="/dashboard/hero", cancel_url="/dashboard", error=None,
    )


@router.post("/dashboard/hero", response_class=HTMLResponse)
async def hero_submit(request: Request):
    body = form_to_body(HERO_FIELDS, await request.form())
    try:
        payload = build_payload(HeroInput, body)
        with database_errors("update hero section"):
            hero_repository.upsert_hero(**payload.model_dump())
    except ApiError as e:
        return _render(
            request, "dashboard/form.html", status_code=e.status_code,
            heading="Hero", fields=HERO_FIELDS, values=body,
            action="/dashboard/hero", cancel_url="/dashboard", error=e.message,
        )

    return _see_other("/dashboard")


@router.get("/dashboard/{slug}", response_class=HTMLResponse)
async def resource_list(request: Request, slug: str) -> HTMLResponse:
    resource = _get_resource(slug)
    with database_errors(f"fetch {slug}"):
        items = resource.list_items()

    return _render(request, "dashboard/list.html", resource=resource, items=items)


@router.get("/dashboard/{slug}/new", response_class=HTMLResponse)
async def resource_new(request: Request, slug: str) -> HTMLResponse:
    resource = _get_resource(slug)
    return _render(
        request, "dashboard/form.html",
        heading=f"New {resource.singular.lower()}", fields=resource.fields,
        values={}, action=f"/dashboard/{slug}/new",
        cancel_url=f"/dashboard/{slug}", error=None,
    )


@router.post("/dashboard/{slug}/new", response_class=HTMLResponse)
async def resource_create(request: Request, slug: str):
    resource = _get_resource(slug)
    body = form_to_body(resource.fields, await request.form())

    try:
        require_fields(body, resource.required)
        payload = build_payload(resource.input_model, body)
        with database_errors(f"create {resource.singular.lower()}"):
            resource.create_item(**resource.to_kwargs(payload))
    except ApiError as e:
        return _render(
            request, "dashboard/form.html", status_code=e.status_code,
            heading=f"New {resource.singular.lower()}", fields=resource.fields,
            values=_redisplay(resource.fields, body), action=f"/dashboard/{slug}/new",
            cancel_url=f"/dashboard/{slug}", error=e.message,
        )

    return _see_other(f"/dashboard/{slug}")


@router.get("/dashboard/{slug}/{item_id}/edit", response_class=HTMLResponse)
async def resource_edit(request: Request, slug: str, item_id: str) -> HTMLResponse:
    resource = _get_resource(slug)
    record = _load(resource, item_id)

    return _render(
        request, "dashboard/form.html",
        heading=f"Edit {resource.singular.lower()}", fields=resource.fields,
        values=record_to_form(resource.fields, record),
        action=f"/dashboard/{slug}/{item_id}/edit",
        cancel_url=f"/dashboard/{slug}", error=None,
    )


@router.post("/dashboard/{slug}/{item_id}/edit", response_class=HTMLResponse)
async def resource_update(request: Request, slug: str, item_id: str):
    resource = _get_resource(slug)
    pk = _parse_or_404(resource, item_id)
    body = form_to_body(resource.fields, await request.form())

    try:
        require_fields(body, resource.required)
        payload = build_payload(resource.input_model, body)
        with database_errors(f"update {resource.singular.lower()}"):
            record = resource.update_item(pk, **resource.to_kwargs(payload))
    except ApiError as e:
        return _render(
            request, "dashboard/form.html", status_code=e.status_code,
            heading=f"Edit {resource.singular.lower()}", fields=resource.fields,
            values=_redisplay(resource.fields, body),
            action=f"/dashboard/{slug}/{item_id}/edit",
            cancel_url=f"/dashboard/{slug}", error=e.message,
        )

    if record is None:
        raise DashboardNotFound(f"{resource.singular} not found")

    return _see_other(f"/dashboard/{slug}")


@router.post("/dashboard/{slug}/{item_id}/delete")
async def resource_delete(request: Request, slug: str, item_id: str) -> RedirectResponse:
    resource = _get_resource(slug)
    pk = _parse_or_404(resource, item_id)

    with database_errors(f"delete {resource.singular.lower()}"):
        deleted = resource.delete_item(pk)

    if not deleted:
        raise DashboardNotFound(f"{resource.singular} not found")

    return _see_other(f"/dashboard/{slug}")


def _parse_or_404(resource: DashboardResource, raw: str) -> Any:
    try:
        return resource.parse_id(raw)
    except ApiError:
        raise DashboardNotFound(f"{resource.singular} not found")


def _load(resource: DashboardResource, raw: str) -> Any:
    pk = _parse_or_404(resource, raw)
    with database_errors(f"fetch {resource.singular.lower()}"):
        record = resource.get_item(pk)
    if record is None:
        raise DashboardNotFound(f"{resource.singular} not found")
    return record


def _redisplay(fields: list[FormField], body: dict[str, Any]) -> dict[str, Any]:
    """Turn a parsed body back into form values after a failed submit."""
    values = dict(body)
    for f in fields:
        if f.kind == "tags":
            values[f.name] = ", ".join(body.get(f.name) or [])
        elif f.kind == "lines":
            values[f.name] = "\n".join(body.get(f.name) or [])
    return values
