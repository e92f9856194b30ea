# FastAPI Application
"""
Main FastAPI application for the Interview Prep coaching API.
"""

import logging
import sys
from contextlib import asynccontextmanager
from datetime import datetime

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .coaching_service import GENERIC_ERROR_MESSAGE, INVALID_JSON_MESSAGE, INVALID_ROLE_MESSAGE
from .llm import llm_provider
from .models import HealthResponse
from .routes import router
from interview_prep.config import LLM_CONFIG, SERVER_CONFIG

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[
        logging.StreamHandler(sys.stdout),
    ]
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    logger.info("🚀 Interview Prep API starting up...")
    if not llm_provider.has_default_credential:
        logger.warning(
            f"⚠️ {LLM_CONFIG['api_key_env']} is not set. Question generation will fail "
            "and coaching will only work with a per-request key."
        )
    yield
    logger.info("👋 Interview Prep API shutting down...")


# Create FastAPI app
app = FastAPI(
    title="Interview Prep API",
    description="""
    AI-powered coaching API for practicing role-specific interviews.

    ## Workflow

    1. **POST /api/generate-question** - Call five times to build an interview
    2. **POST /api/coach-answer** - Submit an answer and get a score, verdict,
       improved answer and watchouts

    Both endpoints are stateless; the client keeps the interview session.
    """,
    version=SERVER_CONFIG["version"],
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json"
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Configure appropriately for production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Include routers
app.include_router(router)


# ============================================================================
# Root Endpoints
# ============================================================================

@app.get("/", include_in_schema=False)
async def root():
    """Root endpoint with API info."""
    return {
        "name": "Interview Prep API",
        "version": SERVER_CONFIG["version"],
        "docs": "/docs",
        "health": "/health"
    }


@app.get(
    "/health",
    response_model=HealthResponse,
    tags=["system"],
    summary="Health check",
    description="Check if the API is running and whether a default model credential is configured."
)
async def health_check() -> HealthResponse:
    """Health check endpoint."""
    return HealthResponse(
        status="healthy",
        version=SERVER_CONFIG["version"],
        timestamp=datetime.now(),
        model=llm_provider.model,
        default_credential_configured=llm_provider.has_default_credential
    )


# ============================================================================
# Exception Handlers
# ============================================================================

@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Render HTTP errors in the {"error": ...} shape clients expect."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)}
    )


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    """
    Handler for bodies that cannot be bound to a request model.

    An empty or undecodable body is invalid JSON. Well-formed JSON that is
    not an object (null, a list, a string) reads as an empty object, whose
    first missing field is the role.
    """
    logger.info(f"Rejected request body on {request.url.path}: {exc.errors()}")
    body = await request.body()
    decode_failed = any(error.get("type") == "json_invalid" for error in exc.errors())
    message = INVALID_JSON_MESSAGE if decode_failed or not body.strip() else INVALID_ROLE_MESSAGE
    return JSONResponse(
        status_code=400,
        content={"error": message}
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler for unhandled errors."""
    logger.exception(f"Unhandled error: {exc}")
    return JSONResponse(
        status_code=500,
        content={"error": GENERIC_ERROR_MESSAGE}
    )


# ============================================================================
# Entry point for running directly
# ============================================================================

def run_server(host: str = SERVER_CONFIG["host"], port: int = SERVER_CONFIG["port"],
               reload: bool = False):
    """Run the FastAPI server."""
    import uvicorn
    uvicorn.run(
        "interview_prep.api.main:app",
        host=host,
        port=port,
        reload=reload,
        log_level="info"
    )


if __name__ == "__main__":
    run_server(reload=True)
