# dashboard/app.py

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
import logging

from dashboard.config import settings
from dashboard.api import matching
from jobmatch import __version__
from jobmatch.exceptions import InvalidInputError, CompletionServiceError

logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title=settings.app_name,
    debug=settings.debug,
    version=__version__,
    docs_url="/api/docs" if settings.debug else None,
    redoc_url="/api/redoc" if settings.debug else None,
)

# Include API routers
app.include_router(matching.router, prefix="/api/match", tags=["matching"])

# ============= Health Check =============

@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "app": settings.app_name,
        "version": __version__
    }

# ============= Error Handlers =============

@app.exception_handler(InvalidInputError)
async def invalid_input_handler(request: Request, exc: InvalidInputError):
    """Malformed profile or job payloads"""
    logger.warning(f"Invalid input on {request.url.path}: {exc}")
    return JSONResponse(
        status_code=422,
        content={"detail": str(exc)}
    )

@app.exception_handler(CompletionServiceError)
async def completion_error_handler(request: Request, exc: CompletionServiceError):
    """Completion failures not translated by a route"""
    logger.error(f"Completion service error on {request.url.path}: {exc}")
    return JSONResponse(
        status_code=502,
        content={"detail": {"message": str(exc), "error_type": exc.error_type, "retryable": exc.retryable}}
    )

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "dashboard.app:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug
    )
