import os
from urllib.parse import quote_plus

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import sessionmaker


def _is_cloud_run() -> bool:
    # Cloud Run sets K_SERVICE and PORT.
    return bool(os.getenv("K_SERVICE") or os.getenv("PORT"))


def build_database_url() -> str:
    """
    Explicit override:
      DATABASE_URL wins when set.

    Production (Cloud Run):
      Uses Cloud SQL Unix socket when these env vars exist:
        INSTANCE_CONNECTION_NAME, DB_NAME, DB_USER, DB_PASS

    Local development:
      Falls back to SQLite ./holiday_tracker.db
    """
    explicit = os.getenv("DATABASE_URL", "").strip()
    if explicit:
        return explicit

    instance = os.getenv("INSTANCE_CONNECTION_NAME", "").strip()
    db_name = os.getenv("DB_NAME", "").strip()
    db_user = os.getenv("DB_USER", "").strip()
    db_pass = os.getenv("DB_PASS", "").strip()

    # If running in Cloud Run, fail fast if required vars are missing.
    if _is_cloud_run():
        missing = [k for k, v in {
            "INSTANCE_CONNECTION_NAME": instance,
            "DB_NAME": db_name,
            "DB_USER": db_user,
            "DB_PASS": db_pass,
        }.items() if not v]
        if missing:
            raise RuntimeError(f"Missing required DB env vars in Cloud Run: {', '.join(missing)}")

    if instance and db_name and db_user and db_pass:
        safe_user = quote_plus(db_user)
        safe_pass = quote_plus(db_pass)
        return (
            f"postgresql+psycopg2://{safe_user}:{safe_pass}@/{db_name}"
            f"?host=/cloudsql/{instance}"
        )

    return "sqlite:///./holiday_tracker.db"


def make_engine(database_url: str) -> Engine:
    connect_args = {}
    if database_url.startswith("sqlite"):
        connect_args = {"check_same_thread": False}

    return create_engine(
        database_url,
        pool_pre_ping=True,
        connect_args=connect_args,
    )


DATABASE_URL = build_database_url()

engine = make_engine(DATABASE_URL)

SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)
