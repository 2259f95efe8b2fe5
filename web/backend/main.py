import os
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger

from tunevote import __version__
from tunevote.core.database import init_database


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_database()
    logger.info("TuneVote API ready")
    yield


app = FastAPI(title="TuneVote API", version=__version__, lifespan=lifespan)

# CORS: Allow environment override for production
allowed_origins_env = os.getenv("ALLOWED_ORIGINS", "")
allowed_origins = (
    [origin.strip() for origin in allowed_origins_env.split(",") if origin.strip()]
    if allowed_origins_env
    else ["*"]
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins,
    allow_credentials="*" not in allowed_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Report malformed request bodies as 400 instead of FastAPI's 422."""
    fields = ", ".join(
        str(error["loc"][-1]) for error in exc.errors() if error.get("loc")
    )
    logger.debug(f"Invalid request to {request.url.path}: {exc.errors()}")
    return JSONResponse(
        status_code=400,
        content={"detail": f"Invalid request fields: {fields}" if fields else "Invalid request"},
    )


# Include routers
from web.backend.routers import ratings  # noqa: E402
from web.backend.schemas import HealthResponse  # noqa: E402

app.include_router(ratings.router, prefix="/api", tags=["ratings"])


@app.get("/api/health", response_model=HealthResponse)
async def health_check():
    return HealthResponse(status="ok", message="Server is running")
