"""Table definitions for portfolio content.

Types are kept portable so the same DDL runs on PostgreSQL and SQLite:
UUIDs and timestamps are text, tag lists are JSON-encoded text.
"""

from sqlalchemy import (
    Boolean,
    Column,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    Text,
)

metadata = MetaData()

# Singleton: the application only ever reads and writes id = 1
hero_content = Table(
    "hero_content",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=False),
    Column("greeting", Text, nullable=False),
    Column("greeting_part2", Text, nullable=False),
    Column("name", Text, nullable=False),
    Column("title", Text, nullable=False),
    Column("description", Text),
    Column("linkedin_url", Text),
    Column("github_url", Text),
    Column("email_url", Text),
    Column("profile_image_url", Text),
    Column("created_at", String(40), nullable=False),
    Column("updated_at", String(40), nullable=False),
)

projects = Table(
    "projects",
    metadata,
    Column("id", String(36), primary_key=True),
    Column("title", Text, nullable=False),
    Column("summary", Text),
    Column("hero_image_url", Text),
    Column("case_study_url", Text),
    Column("tags_text", Text, nullable=False, default="[]"),
    Column("created_at", String(40), nullable=False),
    Column("updated_at", String(40), nullable=False),
    Index("idx_projects_created_at", "created_at"),
)

skills = Table(
    "skills",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", Text, nullable=False),
    Column("slug", Text, unique=True),
    Column("category", Text, nullable=False),
    Column("level", Text),
    Column("icon_url", Text),
    Column("description", Text),
    Column("order_index", Integer, nullable=False, default=0),
    Column("is_highlight", Boolean, nullable=False, default=False),
    Column("created_at", String(40), nullable=False),
    Column("updated_at", String(40), nullable=False),
    Index("idx_skills_category", "category"),
    Index("idx_skills_order", "order_index", "name"),
)

experience = Table(
    "experience",
    metadata,
    Column("id", String(36), primary_key=True),
    Column("company", Text, nullable=False),
    Column("role", Text, nullable=False),
    Column("location", Text),
    Column("start_date", String(10), nullable=False),
    Column("end_date", String(10)),
    Column("is_current", Boolean, nullable=False, default=False),
    Column("description", Text),
    Column("skills_text", Text, nullable=False, default="[]"),
    Column("created_at", String(40), nullable=False),
    Column("updated_at", String(40), nullable=False),
    Index("idx_experience_start_date", "start_date"),
)

experience_bullets = Table(
    "experience_bullets",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column(
        "experience_id",
        String(36),
        ForeignKey("experience.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("position", Integer, nullable=False, default=0),
    Column("text", Text, nullable=False),
    Index("idx_experience_bullets_experience_id", "experience_id"),
)

specializations = Table(
    "specializations",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("number", Integer),
    Column("title", Text, nullable=False),
    Column("description", Text),
    Column("icon_url", Text),
    Column("created_at", String(40), nullable=False),
    Column("updated_at", String(40), nullable=False),
)

portfolio = Table(
    "portfolio",
    metadata,
    Column("id", String(36), primary_key=True),
    Column("title", Text, nullable=False),
    Column("tag_role", Text, nullable=False),
    Column("description", Text),
    Column("image_url", Text),
    Column("project_url", Text),
    Column("created_at", String(40), nullable=False),
    Column("updated_at", String(40), nullable=False),
    Index("idx_portfolio_created_at", "created_at"),
)
