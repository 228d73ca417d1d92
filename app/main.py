"""Job board API - application lifecycle service."""

import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.core.exceptions import FieldError, validation_error_body
from app.core.storage import dispose_engine, init_models
from app.routers import admin_router, applications_router

log_level = os.getenv("LOG_LEVEL", "INFO").upper()
logging.basicConfig(
    level=getattr(logging, log_level, logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    logger.info("Initializing application...")
    await init_models()
    logger.info("Application initialized")

    yield

    logger.info("Shutting down...")
    await dispose_engine()
    logger.info("Shutdown complete")


app = FastAPI(
    title="Job Board API",
    description="Job application lifecycle for seekers and recruiters",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(applications_router)
app.include_router(admin_router)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Report body/query validation failures as 400 with field errors."""
    errors = [
        FieldError(
            field=".".join(str(part) for part in error["loc"] if part != "body"),
            message=error["msg"],
        )
        for error in exc.errors()
    ]
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": validation_error_body(errors)},
    )


@app.get("/api")
async def api_info():
    """API information endpoint."""
    return {
        "message": "Job Board API",
        "version": "1.0.0",
        "docs": "/docs",
        "status": "active",
    }


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "service": "jobboard"}
