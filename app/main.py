# /luct-portal/app/main.py

# --- Core FastAPI Imports ---
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

# --- Application-specific Imports ---
from .core.config import CLIENT_ORIGINS
from .core.exceptions import PortalError
from .core.logging_config import configure_logging
from .db.base import Base
from .db.database import engine
from .routers import (
    auth_router,
    courses_router,
    classes_router,
    reports_router,
    student_router,
    ratings_router,
    lecturer_router,
    prl_router,
    pl_router,
    dashboard_router,
)

logger = logging.getLogger(__name__)


# --- Application Lifecycle Management ---
@asynccontextmanager
async def lifespan(app: FastAPI):
    # Runs once at start-up: logging first, then the schema.
    configure_logging()
    Base.metadata.create_all(bind=engine)
    logger.info("LUCT Portal API started")
    yield


# --- FastAPI Application Instance Creation ---
app = FastAPI(
    title="LUCT Portal API",
    description="Faculty reporting backend: lecture reports, attendance, ratings and monitoring for students, lecturers, PRLs and PLs.",
    version="1.0.0",
    lifespan=lifespan
)

# --- Middleware Configuration ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=CLIENT_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# --- Exception Handlers ---
@app.exception_handler(PortalError)
async def portal_error_handler(request: Request, exc: PortalError):
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail}, headers=exc.headers)


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception):
    # Database and other internal error text is logged, never returned.
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "An unexpected server error occurred."},
    )


# --- API Router Inclusion ---
app.include_router(auth_router.router, prefix="/auth", tags=["Authentication"])
app.include_router(courses_router.router, prefix="/courses", tags=["Courses"])
app.include_router(classes_router.router, prefix="/classes", tags=["Classes"])
app.include_router(reports_router.router, prefix="/reports", tags=["Lecture Reports"])
app.include_router(student_router.router, prefix="/student", tags=["Student"])
app.include_router(ratings_router.router, prefix="/ratings", tags=["Ratings"])
app.include_router(lecturer_router.router, prefix="/lecturer", tags=["Lecturer"])
app.include_router(prl_router.router, prefix="/prl", tags=["Principal Lecturer"])
app.include_router(pl_router.router, prefix="/pl", tags=["Programme Leader"])
app.include_router(dashboard_router.router, prefix="/dashboard", tags=["Dashboard"])


# --- Root / Health Check Endpoints ---
@app.get("/", tags=["Health Check"])
async def read_root():
    """A simple health check endpoint to confirm the API is online."""
    return {"status": "LUCT Portal API is running!", "version": app.version}


@app.get("/health", tags=["Health Check"])
async def health():
    return {"status": "ok"}
