"""Job and internship listing endpoint."""
from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from recruit_admin.models.company import JobListing
from recruit_admin.models.filters import ALL, JobFilters, PageRequest
from recruit_admin.services.application_service import (
    ApplicationService,
    get_application_service,
)

router = APIRouter(prefix="/api/jobs", tags=["jobs"])


@router.get("", response_model=JobListing)
async def list_jobs(
    search: str = "",
    type: str = ALL,
    location: str = ALL,
    status: str = ALL,
    category: str = ALL,
    page: int = Query(1, ge=1),
    page_size: int | None = Query(None, ge=1, le=100),
    service: ApplicationService = Depends(get_application_service),
) -> JobListing:
    filters = JobFilters(
        search_term=search,
        type_filter=type,
        location_filter=location,
        status_filter=status,
        category_filter=category,
    )
    page_request = PageRequest(page=page) if page_size is None else PageRequest(page=page, page_size=page_size)
    return service.jobs(filters, page_request)
