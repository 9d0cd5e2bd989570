"""
Database engine and session management.
"""

from collections.abc import Generator

from sqlmodel import Session, SQLModel, create_engine

from app.core.config import settings


def normalize_database_url(database_url: str) -> str:
    """Point bare PostgreSQL URLs (as issued by hosting providers) at psycopg."""
    if database_url.startswith("postgresql://"):
        return f"postgresql+psycopg://{database_url[len('postgresql://'):]}"
    if database_url.startswith("postgres://"):
        return f"postgresql+psycopg://{database_url[len('postgres://'):]}"
    return database_url


def _connect_args(database_url: str) -> dict:
    # SQLite connections are shared across FastAPI's threadpool workers
    if database_url.startswith("sqlite"):
        return {"check_same_thread": False}
    return {}


_database_url = normalize_database_url(settings.DATABASE_URL)

engine = create_engine(
    _database_url,
    echo=settings.DB_ECHO,
    pool_pre_ping=True,
    connect_args=_connect_args(_database_url),
)


def create_db_and_tables() -> None:
    """Create all tables registered on SQLModel metadata."""
    # Table models must be imported so they are registered on the metadata
    from app.models import employee  # noqa: F401

    SQLModel.metadata.create_all(engine)


def get_session() -> Generator[Session, None, None]:
    """Yield a database session scoped to one request."""
    with Session(engine) as session:
        yield session
