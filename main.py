"""
FastAPI Application Entry Point

Integrates:
  - AI assistant endpoints (/api/ia/ask, /api/ia/voice)
  - Health checks
  - Middleware for logging & error handling

Run: uvicorn main:app --reload --host 0.0.0.0 --port 8000
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware

from api.ia import router as ia_router
from agent.health import health_live, health_ready, initialize_health_checker
from config import Config

# Setup logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan: startup and shutdown handlers.
    """
    # Startup
    initialize_health_checker()
    logger.info("=" * 60)
    logger.info("EduVoice assistant starting up...")
    logger.info(f"Environment: {Config.ENVIRONMENT}")
    logger.info(f"AI Backend: {Config.AI_BACKEND}")
    if not Config.validate():
        logger.warning("No AI provider credentials configured; canned answers only")
    logger.info("=" * 60)

    yield

    # Shutdown
    logger.info("EduVoice assistant shutting down...")


# Create FastAPI app
app = FastAPI(
    title="EduVoice AI API",
    description="Study assistant: questions and voice transcription backed by external AI providers",
    version="1.0.0",
    lifespan=lifespan,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Restrict this in production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Middleware for logging
@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log all requests."""
    logger.debug(f"{request.method} {request.url.path}")
    try:
        response = await call_next(request)
        return response
    except Exception as e:
        logger.error(f"Request error: {str(e)}", exc_info=True)
        return JSONResponse(
            status_code=500,
            content={"detail": "Error al procesar la solicitud. Por favor, intente nuevamente."},
        )


# Include routers
app.include_router(ia_router)


# Health check endpoints
@app.get("/health/live")
async def live():
    """Live health check (Kubernetes liveness probe)."""
    return await health_live()


@app.get("/health/ready")
async def ready():
    """Readiness health check (Kubernetes readiness probe)."""
    result = await health_ready()
    status_code = 503 if result["status"] == "unhealthy" else 200
    return JSONResponse(content=result, status_code=status_code)


@app.get("/")
async def root():
    """Root endpoint with API info."""
    return {
        "name": "EduVoice AI API",
        "version": "1.0.0",
        "status": "running",
        "endpoints": {
            "ask": "POST /api/ia/ask",
            "voice": "POST /api/ia/voice",
            "health_live": "GET /health/live",
            "health_ready": "GET /health/ready",
        },
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        app,
        host="0.0.0.0",
        port=Config.AGENT_PORT,
        reload=Config.ENVIRONMENT == "development",
    )
