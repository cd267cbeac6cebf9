import logging

from app.api.api_v1.api import api_router
from app.core.config import settings
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from postgrest.exceptions import APIError

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.PROJECT_NAME,
    openapi_url=f"{settings.API_V1_STR}/openapi.json",
    redirect_slashes=False,  # Prevent 307 redirects that break CORS
)

# CORS configuration
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.BACKEND_CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router, prefix=settings.API_V1_STR)


@app.exception_handler(APIError)
async def supabase_error_handler(request: Request, exc: APIError):
    """Pass database errors through to the client with their original message."""
    logger.error(f"Database error on {request.method} {request.url.path}: {exc.message}")
    return JSONResponse(status_code=502, content={"detail": exc.message or str(exc)})


@app.get("/")
def read_root():
    return {"message": "Welcome to the Boulder Comp Scoring API"}


@app.get("/health")
def health_check():
    return {"status": "healthy"}
