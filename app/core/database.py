import re
from typing import Any, Dict, List, Sequence

from sqlalchemy import create_engine, text
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from app.core.config import settings

# Create SQLAlchemy engine
engine = create_engine(
    settings.DATABASE_URL,
    pool_pre_ping=True,  # Verify connections before using them
    pool_size=10,  # Connection pool size
    max_overflow=20  # Allow up to 20 connections beyond pool_size
)

# Create SessionLocal class
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Create Base class for models
Base = declarative_base()

_POSITIONAL = re.compile(r"\$(\d+)")


def get_db():
    """
    Dependency function to get database session.
    Used in FastAPI endpoints with Depends(get_db)
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db():
    """
    Initialize database.

    We rely on Alembic for table creation, so this only makes sure the
    models are imported/registered on Base.metadata.

    Use "alembic upgrade head" to create/update database schema.
    """
    from app.models import company, job, user  # noqa: F401


def query(db: Session, sql: str, params: Sequence[Any] = ()) -> List[Dict[str, Any]]:
    """
    Run SQL written with positional $1..$n placeholders.

    The placeholders are rewritten to SQLAlchemy named binds (:p1..:pn) so
    the same statement runs on any dialect. On SQLite, ILIKE is rewritten to
    LIKE (which is already case-insensitive for ASCII there).

    Args:
        db: Database session
        sql: Statement text
        params: Values for $1..$n, in order

    Returns:
        Result rows as dicts (empty list for statements returning no rows)
    """
    statement = _POSITIONAL.sub(lambda m: f":p{m.group(1)}", sql)
    if db.get_bind().dialect.name == "sqlite":
        statement = statement.replace(" ILIKE ", " LIKE ")

    bound = {f"p{idx}": value for idx, value in enumerate(params, start=1)}
    result = db.execute(text(statement), bound)

    if not result.returns_rows:
        return []
    return [dict(row) for row in result.mappings().all()]
