"""FastAPI application entry point."""

import logging
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from starlette.middleware.sessions import SessionMiddleware

from brandgallery.errors import StorageFailure, ValidationError
from brandgallery.ratelimit import limiter
from brandgallery.settings import settings

# Import all routers
from brandgallery.routers import (
    auth,
    galleries,
    photos,
    purchases,
    sheets,
)

app = FastAPI(
    title="Brand Gallery",
    description="Brand / person / date photo portal with spreadsheet links and purchase records",
    version="0.1.0"
)
logger = logging.getLogger(__name__)
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

app.add_middleware(
    SessionMiddleware,
    secret_key=settings.session_secret,
    same_site="lax",
    https_only=settings.is_production,
)


@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError):
    return JSONResponse(status_code=400, content={"detail": str(exc), "field": exc.field})


@app.exception_handler(StorageFailure)
async def storage_failure_handler(request: Request, exc: StorageFailure):
    logger.error("Storage failure on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=503, content={"detail": "Storage unavailable"})


# Register all routers
app.include_router(auth.router)
app.include_router(photos.router)
app.include_router(galleries.router)
app.include_router(sheets.router)
app.include_router(purchases.router)

# Local backend objects are served the same way the bucket would serve them
if settings.storage_backend.lower() == "local":
    uploads_dir = Path(settings.local_storage_dir)
    uploads_dir.mkdir(parents=True, exist_ok=True)
    app.mount("/uploads", StaticFiles(directory=uploads_dir), name="uploads")


# Health check endpoint
@app.get("/health")
async def health_check():
    return {"status": "healthy", "storage_backend": settings.storage_backend}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "brandgallery.api:app",
        host=settings.api_host,
        port=settings.api_port,
        workers=settings.api_workers,
        reload=settings.debug
    )
