"""
Analysis engine FastAPI application entry point.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from structura.api import engine
from structura.config import settings
from structura.utils.logging import get_logger, setup_logging

# Configure structured logging
setup_logging(settings.log_level)

logger = get_logger(__name__)

app = FastAPI(
    title="Structura Analysis Engine",
    description="Lexer, parser and repair assistant for flex and bison sources",
    version="0.1.0"
)

# Any origin may call the engine; the workbench front end is served elsewhere
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "version": "0.1.0"}


app.include_router(engine.router)


@app.on_event("startup")
async def startup_event():
    logger.info(f"Starting analysis engine on {settings.engine_host}:{settings.engine_port}")


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.engine_host, port=settings.engine_port)
