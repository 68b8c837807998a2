"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from neighborfit.api.deps import memory_areas
from neighborfit.api.routes import areas, matching, users
from neighborfit.config import settings
from neighborfit.data.dataset import load_dataset
from neighborfit.errors import NotFoundError, ValidationError

logging.basicConfig(level=settings.log_level)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Load the configured dataset into memory storage on startup."""
    if settings.storage_backend == "memory" and settings.dataset_path:
        for area in load_dataset(settings.dataset_path):
            memory_areas.put(area)
    yield


app = FastAPI(
    title="NeighborFit",
    description="Neighborhood matching and recommendations",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(areas.router)
app.include_router(matching.router)
app.include_router(users.router)


@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError):
    return JSONResponse(status_code=400, content={"error": str(exc)})


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError):
    logger.info("Not found on %s: %s", request.url.path, exc)
    return JSONResponse(status_code=404, content={"error": str(exc)})


@app.get("/health")
async def health():
    return {"status": "ok"}
