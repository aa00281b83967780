"""Route handlers for Web API."""

from folio.web.routes.health import router as health_router
from folio.web.routes.hero import router as hero_router
from folio.web.routes.projects import router as projects_router
from folio.web.routes.skills import router as skills_router
from folio.web.routes.experience import router as experience_router
from folio.web.routes.specializations import router as specializations_router
from folio.web.routes.portfolio import router as portfolio_router

__all__ = [
    "health_router",
    "hero_router",
    "projects_router",
    "skills_router",
    "experience_router",
    "specializations_router",
    "portfolio_router",
]
