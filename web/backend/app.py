#!/usr/bin/env python3
"""
Agent Discovery API - FastAPI Application

JSON API over the discovery engine: keyword recommendations, semantic
search, outcome recording and embedding coverage.

Usage:
    python -m web.backend.app

Then open:
    - http://localhost:8080/docs - API Documentation (Swagger UI)
    - http://localhost:8080/redoc - Alternative API Documentation
"""

import logging

from fastapi import FastAPI, HTTPException

from core.exceptions import PersistenceError, ProviderUnavailableError
from .config import get_config
from .exceptions import (
    ServiceException,
    service_exception_handler,
    persistence_exception_handler,
    provider_unavailable_handler,
    http_exception_handler,
    general_exception_handler
)
from .routers import (
    agents_router,
    outcomes_router,
    embeddings_router
)

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    """Build the FastAPI application with handlers and routers registered."""
    app = FastAPI(
        title="Agent Discovery API",
        description="Find, rank and explain marketplace agents for a request",
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc"
    )

    # Register exception handlers
    app.add_exception_handler(ServiceException, service_exception_handler)
    app.add_exception_handler(PersistenceError, persistence_exception_handler)
    app.add_exception_handler(ProviderUnavailableError, provider_unavailable_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    # Include routers
    app.include_router(agents_router)
    app.include_router(outcomes_router)
    app.include_router(embeddings_router)

    @app.get("/health")
    def health_check():
        """Health check endpoint."""
        return {"status": "healthy", "service": "agent-discovery"}

    return app


app = create_app()


def main():
    """Run the web server."""
    import uvicorn

    config = get_config()
    logger.info(f"Starting Agent Discovery API on {config.web.host}:{config.web.port}")
    logger.info(f"API Docs: http://{config.web.host}:{config.web.port}/docs")

    uvicorn.run(
        "web.backend.app:app",
        host=config.web.host,
        port=config.web.port,
        reload=False,
        log_level="info"
    )


if __name__ == "__main__":
    main()
