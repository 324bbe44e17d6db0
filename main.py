import logging
import os

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.routers.holidays import router as holidays_router
from app.routers.notifications import router as notifications_router
from app.services.storage import StorageError, build_key_value_store
from app.services.tracker import HolidayTracker
from db import engine
from models import Base

logger = logging.getLogger("holiday-tracker-api")
logging.basicConfig(level=os.getenv("LOG_LEVEL", "INFO").upper())


def _build_cors_origins() -> list[str]:
    required = {
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    }
    extra = os.getenv("CORS_ORIGINS", "")
    if extra:
        for origin in extra.split(","):
            stripped = origin.strip()
            if stripped:
                required.add(stripped)
    return sorted(required)


app = FastAPI(title="Holiday Tracker API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=_build_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["Content-Disposition"],
)

app.include_router(holidays_router)
app.include_router(notifications_router)


@app.exception_handler(StorageError)
def handle_storage_error(request: Request, exc: StorageError) -> JSONResponse:
    logger.error("Storage failure on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={
            "error": "storage_unavailable",
            "detail": str(exc),
        },
    )


def _should_create_schema() -> bool:
    """
    Safety switch. Keep OFF in Cloud Run.
    Only use for local/dev bootstrap.
    """
    return os.getenv("AUTO_CREATE_SCHEMA", "").strip().lower() in {
        "1",
        "true",
        "yes",
        "on",
    }


@app.on_event("startup")
def on_startup() -> None:
    if _should_create_schema():
        logger.warning("AUTO_CREATE_SCHEMA is enabled -> running Base.metadata.create_all()")
        Base.metadata.create_all(bind=engine)
    else:
        logger.info("AUTO_CREATE_SCHEMA is disabled -> NOT running create_all()")

    tracker = HolidayTracker(build_key_value_store())
    tracker.start()
    app.state.tracker = tracker


@app.get("/")
def root() -> dict:
    return {"ok": True, "service": "holiday-tracker-api", "docs": "/docs", "health": "/health"}


@app.get("/health")
def health() -> dict:
    return {"ok": True}
