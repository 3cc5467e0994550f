# main.py
"""
Application entrypoint. Configures logging, creates tables and includes routers.

Run with:
    uvicorn main:app --reload
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from fairgroup.api.routers import admin, assign, rosters
from fairgroup.config.settings import settings
from fairgroup.infrastructure import models  # noqa: F401  (registers tables on Base)
from fairgroup.infrastructure.db.session import Base, engine

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    Base.metadata.create_all(bind=engine)
    logger.info("Starting fairgroup backend (env=%s)", settings.ENV)
    yield
    engine.dispose()
    logger.info("Shutdown complete")


app = FastAPI(title="Fair Group Assignment Backend", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)

# include routers
app.include_router(assign.router, prefix="/api", tags=["assign"])
app.include_router(rosters.router, prefix="/api/rosters", tags=["rosters"])
app.include_router(admin.router, prefix="/api/admin", tags=["admin"])


@app.get("/")
async def index():
    """Health / basic info endpoint."""
    return {"status": "ok", "service": "fairgroup-backend", "env": settings.ENV}
