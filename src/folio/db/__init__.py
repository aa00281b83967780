"""Database module for portfolio content persistence.

Provides:
- Engine and transactional connection management
- Schema initialization (portable PostgreSQL / SQLite DDL)
- Repository functions, one module per resource
"""

from folio.db.database import dispose_engine, get_db, init_db

__all__ = ["dispose_engine", "get_db", "init_db"]
