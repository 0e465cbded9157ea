"""
Main module for the FastAPI application.
"""
import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.ext.asyncio import AsyncSession

from medlink.__version__ import __version__
from medlink.api.v1 import routers as v1_routers
from medlink.core.config import settings
from medlink.core.logging import configure_logging
from medlink.db.session import SessionLocal, engine, get_db
from medlink.schemas.api import HealthResponse
from medlink.store.guard import readiness

configure_logging()
logger = logging.getLogger(__name__)


# Lifespan event handler
@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan event handler - runs on startup and shutdown.

    The store is probed once at start-up so the first request does not pay
    for it. An unreachable store does not stop the API from starting.
    """
    logger.info(f"MedLink API {__version__} starting")
    async with SessionLocal() as session:
        reachable = await readiness.probe(session)
    if reachable:
        logger.info("Data store reachable")
    else:
        logger.warning("Data store unreachable at start-up, serving defaults until it recovers")

    yield

    # Shutdown
    logger.info("MedLink API shutting down")
    await engine.dispose()


app = FastAPI(
    title="MedLink API",
    description="Data access API for the MedLink professional network",
    version=__version__,
    lifespan=lifespan,
)

# Configure CORS
if settings.CORS_ORIGINS:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

# Include routers
for router in v1_routers:
    app.include_router(router, prefix="/api/v1")


@app.get("/")
async def root():
    """
    Root endpoint.
    """
    return {"message": "MedLink API is running"}


@app.get("/health", response_model=HealthResponse, tags=["health"])
async def health(db: AsyncSession = Depends(get_db)):
    """
    Health check endpoint.

    Reports the cached store verdict, re-probing only when it is stale.
    The API itself stays up when the store is down, so status is "degraded"
    rather than an error code.
    """
    reachable = await readiness.ensure(db)
    return HealthResponse(
        status="ok" if reachable else "degraded",
        store_reachable=reachable,
        version=__version__,
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host=settings.API_HOST, port=settings.API_PORT, reload=False)
