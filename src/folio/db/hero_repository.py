"""Repository functions for the hero_content singleton.

The table holds at most one row and every operation targets id = 1.
"""

from __future__ import annotations

from dataclasses import dataclass

import structlog
from sqlalchemy import text

from folio.db.database import get_db, utc_now

logger = structlog.get_logger(__name__)

HERO_ID = 1

DEFAULT_GREETING = "Hey!"
DEFAULT_GREETING_PART2 = "I'm"
DEFAULT_NAME = "Thế Kiệt (Mason)"
DEFAULT_TITLE = "Business Analyst"
DEFAULT_DESCRIPTION = (
    "Agency-quality business analysis with the personal touch of a freelancer."
)


@dataclass
class HeroRecord:
    """Hero content row from database."""

    id: int
    greeting: str
    greeting_part2: str
    name: str
    title: str
    description: str | None
    linkedin_url: str | None
    github_url: str | None
    email_url: str | None
    profile_image_url: str | None
    created_at: str
    updated_at: str


def default_hero() -> HeroRecord:
    """Hero shown before anything was saved."""
    now = utc_now()
    return HeroRecord(
        id=HERO_ID,
        greeting=DEFAULT_GREETING,
        greeting_part2=DEFAULT_GREETING_PART2,
        name=DEFAULT_NAME,
        title=DEFAULT_TITLE,
        description=DEFAULT_DESCRIPTION,
        linkedin_url=None,
        github_url=None,
        email_url=None,
        profile_image_url=None,
        created_at=now,
        updated_at=now,
    )


def get_hero() -> HeroRecord | None:
    """Get the hero row.

    Returns:
        HeroRecord if saved, None otherwise
    """
    with get_db() as conn:
        row = conn.execute(
            text("SELECT * FROM hero_content WHERE id = :id"), {"id": HERO_ID}
        ).mappings().fetchone()

    if row is None:
        return None

    return HeroRecord(**dict(row))


def get_hero_or_default() -> HeroRecord:
    return get_hero() or default_hero()


def upsert_hero(
    greeting: str | None = None,
    greeting_part2: str | None = None,
    name: str | None = None,
    title: str | None = None,
    description: str | None = None,
    linkedin_url: str | None = None,
    github_url: str | None = None,
    email_url: str | None = None,
    profile_image_url: str | None = None,
) -> HeroRecord:
    """Insert or replace the hero row (always id = 1).

    Blank display fields fall back to the defaults; blank links are stored
    as NULL.

    Returns:
        The stored HeroRecord
    """
    now = utc_now()
    params = {
        "id": HERO_ID,
        "greeting": greeting or DEFAULT_GREETING,
        "greeting_part2": greeting_part2 or DEFAULT_GREETING_PART2,
        "name": name or DEFAULT_NAME,
        "title": title or DEFAULT_TITLE,
        "description": description or None,
        "linkedin_url": linkedin_url or None,
        "github_url": github_url or None,
        "email_url": email_url or None,
        "profile_image_url": profile_image_url or None,
        "now": now,
    }

    with get_db() as conn:
        conn.execute(
            text(
                """
                INSERT INTO hero_content (
                    id, greeting, greeting_part2, name, title, description,
                    linkedin_url, github_url, email_url, profile_image_url,
                    created_at, updated_at
                ) VALUES (
                    :id, :greeting, :greeting_part2, :name, :title, :description,
                    :linkedin_url, :github_url, :email_url, :profile_image_url,
                    :now, :now
                )
                ON CONFLICT (id) DO UPDATE SET
                    greeting = excluded.greeting,
                    greeting_part2 = excluded.greeting_part2,
                    name = excluded.name,
                    title = excluded.title,
                    description = excluded.description,
                    linkedin_url = excluded.linkedin_url,
                    github_url = excluded.github_url,
                    email_url = excluded.email_url,
                    profile_image_url = excluded.profile_image_url,
                    updated_at = excluded.updated_at
                """
            ),
            params,
        )
        row = conn.execute(
            text("SELECT * FROM hero_content WHERE id = :id"), {"id": HERO_ID}
        ).mappings().one()

    logger.info("hero.saved")
    return HeroRecord(**dict(row))
