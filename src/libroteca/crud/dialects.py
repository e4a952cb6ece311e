"""Dialect-specific INSERT constructs for ``ON CONFLICT`` upserts."""

from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.orm import Session


def upsert_insert(db: Session, model):
    """Return an INSERT for ``model`` that supports ``on_conflict_do_*``."""
    dialect = db.get_bind().dialect.name
    if dialect == "postgresql":
        return postgresql.insert(model)
    if dialect == "sqlite":
        return sqlite.insert(model)
    raise NotImplementedError(f"ON CONFLICT upserts are not supported on {dialect}")
