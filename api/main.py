"""
Stackeval API - FastAPI Application

Run with: uvicorn api.main:app --reload

Routes:
- GET  /health, /health/ready      (also under /api/v1)
- POST /api/v1/evaluate
- POST /api/v1/validate
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from stackeval import __version__
from stackeval.program import get_schema_path
from api.routes.evaluate import router as evaluate_router, DEFAULT_MAX_STEPS
from api.routes.validate import router as validate_router
from api.routes.health import router as health_router

logger = logging.getLogger(__name__)

API_PREFIX = "/api/v1"


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(
        "Stackeval API %s up (schema %s, default step budget %d)",
        __version__, get_schema_path(), DEFAULT_MAX_STEPS,
    )
    yield
    logger.info("Stackeval API stopped")


def create_app() -> FastAPI:
    """Build the evaluation service with its routers mounted."""
    application = FastAPI(
        title="Stackeval API",
        description="Evaluate untrusted stack bytecode submissions without running native code",
        version=__version__,
        lifespan=lifespan,
    )
    application.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    # Health is reachable both bare, for orchestrators, and under the API prefix
    application.include_router(health_router, tags=["Health"])
    application.include_router(health_router, prefix=API_PREFIX, tags=["Health"])
    application.include_router(evaluate_router, prefix=API_PREFIX, tags=["Evaluation"])
    application.include_router(validate_router, prefix=API_PREFIX, tags=["Validation"])

    @application.get("/")
    async def root():
        return {
            "name": "Stackeval API",
            "version": __version__,
            "docs": "/docs",
            "health": f"{API_PREFIX}/health",
            "evaluate": f"{API_PREFIX}/evaluate",
        }

    return application


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
