"""Tutor fee backend entrypoint."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from tutor_backend.app.api import auth, dashboard, invoices, sessions, students
from tutor_backend.app.core.dev_seed import ensure_default_dev_user
from tutor_backend.app.core.exceptions import TutorBackendError
from tutor_backend.app.core.logging_config import configure_logging
from tutor_backend.app.core.settings import get_settings
from tutor_backend.app.db.base import Base
from tutor_backend.app.db.session import SessionLocal, engine

configure_logging()
logger = logging.getLogger(__name__)
settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting %s (%s)", settings.app_name, settings.environment)
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        ensure_default_dev_user(db)
    finally:
        db.close()
    yield
    logger.info("Shutting down %s", settings.app_name)


app = FastAPI(title=settings.app_name, version=settings.api_version, lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(TutorBackendError)
async def handle_domain_error(request: Request, exc: TutorBackendError):
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.detail)
    else:
        logger.info("%s %s rejected: %s", request.method, request.url.path, exc.detail)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})


app.include_router(auth.router)
app.include_router(students.router)
app.include_router(sessions.router)
app.include_router(invoices.router)
app.include_router(dashboard.router)


@app.get("/")
def read_root():
    return {"app": settings.app_name, "status": "ok"}


@app.get("/health")
def health_check():
    return {"status": "ok"}
