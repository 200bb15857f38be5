"""Company aggregate endpoints (list + detail)."""
from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from recruit_admin.errors import NotFoundError, http_error
from recruit_admin.models.company import CompanyDetail, CompanyListing
from recruit_admin.models.filters import ALL, ApplicationFilters, CompanyFilters, PageRequest, Tab
from recruit_admin.services.application_service import (
    ApplicationService,
    get_application_service,
)

router = APIRouter(prefix="/api/companies", tags=["companies"])


@router.get("", response_model=CompanyListing)
async def list_companies(
    search: str = "",
    status: str = ALL,
    type: str = ALL,
    page: int = Query(1, ge=1),
    page_size: int | None = Query(None, ge=1, le=100),
    service: ApplicationService = Depends(get_application_service),
) -> CompanyListing:
    filters = CompanyFilters(search_term=search, status_filter=status, type_filter=type)
    page_request = PageRequest(page=page) if page_size is None else PageRequest(page=page, page_size=page_size)
    return service.companies(filters, page_request)


@router.get("/{slug}", response_model=CompanyDetail)
async def get_company(
    slug: str,
    search: str = "",
    status: str = ALL,
    type: str = ALL,
    tab: Tab = Tab.ALL,
    service: ApplicationService = Depends(get_application_service),
) -> CompanyDetail:
    filters = ApplicationFilters(
        search_term=search, status_filter=status, type_filter=type, active_tab=tab
    )
    try:
        return service.company_detail(slug, filters)
    except NotFoundError as e:
        raise http_error(e)
