"""
FastAPI application main entry point.
Serves the pre-signing transaction analysis API.
"""
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from txguard.core.config import settings
from txguard.core.logger_config import setup_logging

# Import V1 API router
from txguard.api.v1.api import api_router as api_v1_router

setup_logging("DEBUG" if settings.debug else settings.log_level)

# Initialize FastAPI app
app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="Explains what an unsigned transaction will do, its risks and privacy impact, before you sign.",
    docs_url="/docs",
    redoc_url="/redoc"
)

# CORS middleware (adjust origins for production)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Restrict in production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include V1 API routes
app.include_router(api_v1_router, prefix="/v1")


@app.get("/")
async def root():
    """Health check and API info."""
    return {
        "status": "operational",
        "service": settings.app_name,
        "version": settings.app_version,
        "explanation_model_configured": bool(settings.openai_api_key),
        "onchain_registry_configured": settings.onchain_registry_configured,
        "endpoints": {
            "analyze_tx": "POST /v1/analyze-tx"
        }
    }


@app.get("/health")
async def health_check():
    """Health check endpoint for monitoring."""
    return {"status": "healthy", "service": settings.app_name}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
