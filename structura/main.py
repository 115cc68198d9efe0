"""
Workbench FastAPI application entry point.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from structura.api import workbench
from structura.config import settings
from structura.utils.logging import get_logger, setup_logging

# Configure structured logging
setup_logging(settings.log_level)

logger = get_logger(__name__)

# Create FastAPI application
app = FastAPI(
    title="Structura Grammar Workbench",
    description="Interactive flex and bison editor with live AST view and AI repair hints",
    version="0.1.0"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health")
async def health_check():
    """Health check endpoint for container orchestration."""
    return {"status": "healthy", "version": "0.1.0"}


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "Structura Grammar Workbench API",
        "version": "0.1.0",
        "docs": "/docs"
    }


# Include API routers
app.include_router(workbench.router)


@app.on_event("startup")
async def startup_event():
    """Log the engine the session will talk to."""
    logger.info(f"Starting Structura workbench; analysis engine at {settings.engine_url}")


@app.on_event("shutdown")
async def shutdown_event():
    """Cleanup services on application shutdown."""
    logger.info("Shutting down Structura workbench")

    from structura.services import workbench as workbench_service
    if workbench_service._workbench is not None:
        await workbench_service._workbench.close()
        logger.info("Workbench session closed")


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.workbench_host, port=settings.workbench_port)
