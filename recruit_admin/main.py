"""FastAPI entry point for the Recruit Admin backend."""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from recruit_admin.config import settings
from recruit_admin.errors import FetchError, http_error
from recruit_admin.routers import applications, companies, jobs
from recruit_admin.services.application_service import (
    ApplicationService,
    get_application_service,
)
from recruit_admin.services.store_client import store_client

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)-8s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    logger.info("Starting Recruit Admin backend on %s:%d", settings.host, settings.port)
    await store_client.connect()

    # Initial load (non-fatal if the store is down; /api/refresh retries on demand)
    try:
        await get_application_service().refresh()
    except FetchError as e:
        logger.warning("Initial load from store failed: %s", e)

    yield

    # Shutdown
    await store_client.disconnect()
    logger.info("Recruit Admin backend stopped")


app = FastAPI(
    title="Recruit Admin",
    description="Job/internship applicant tracking for the admin dashboard",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # localhost only; tighten in production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register routers
app.include_router(companies.router)
app.include_router(jobs.router)
app.include_router(applications.router)


@app.get("/health")
async def health(service: ApplicationService = Depends(get_application_service)) -> dict:
    snapshot = service.snapshot
    return {
        "status": "ok",
        "store_connected": store_client.is_connected,
        "jobs_loaded": snapshot.jobs_loaded,
        "applications_loaded": snapshot.applications_loaded,
    }


@app.post("/api/refresh")
async def refresh(service: ApplicationService = Depends(get_application_service)) -> dict:
    """Reload both collections from the store."""
    try:
        snapshot = await service.refresh()
    except FetchError as e:
        raise http_error(e)
    return {"jobs": len(snapshot.jobs), "applications": len(snapshot.applications)}


if __name__ == "__main__":
    uvicorn.run(
        "recruit_admin.main:app",
        host=settings.host,
        port=settings.port,
        reload=True,
    )
