"""Search, categorical filters and pagination over the derived views.

Every function here is pure: inputs are never mutated and every active
predicate is ANDed. The ``ALL`` sentinel turns a categorical predicate off,
and a blank search term turns the text predicate off.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from typing import TypeVar

from recruit_admin.models.application import ApplicationStatus
from recruit_admin.models.company import ApplicationRow, CompanyAggregate
from recruit_admin.models.filters import (
    ALL,
    ApplicationFilters,
    CompanyFilters,
    JobFilters,
    Page,
    PageRequest,
    Tab,
)
from recruit_admin.models.job import Job, JobKind, JobStatus

T = TypeVar("T")

_TAB_KINDS = {
    Tab.JOBS: JobKind.JOB,
    Tab.INTERNSHIPS: JobKind.INTERNSHIP,
}


def is_all(value: str | None) -> bool:
    return value is None or value == "" or value == ALL


def matches_text(term: str, *fields: str | None) -> bool:
    """Case-insensitive substring match against any of the fields."""
    needle = term.strip().lower()
    if not needle:
        return True
    return any(needle in field.lower() for field in fields if field)


def filter_applications(
    rows: Sequence[ApplicationRow], filters: ApplicationFilters
) -> list[ApplicationRow]:
    tab_kind = _TAB_KINDS.get(filters.active_tab)
    result = []
    for row in rows:
        if not matches_text(
            filters.search_term,
            row.candidate_name,
            row.candidate_email,
            row.company,
            row.location,
            row.position,
        ):
            continue
        if not is_all(filters.status_filter) and row.status.value != filters.status_filter:
            continue
        if not is_all(filters.type_filter) and row.type.value != filters.type_filter:
            continue
        if tab_kind is not None and row.type is not tab_kind:
            continue
        result.append(row)
    return result


def _kind_count(company: CompanyAggregate, kind: str) -> int:
    if kind == JobKind.INTERNSHIP.value:
        return company.internship_applications
    if kind == JobKind.JOB.value:
        return company.job_applications
    return 0


def filter_companies(
    companies: Sequence[CompanyAggregate], filters: CompanyFilters
) -> list[CompanyAggregate]:
    result = []
    for company in companies:
        if not matches_text(filters.search_term, company.name, company.location):
            continue
        if not is_all(filters.status_filter):
            try:
                status = ApplicationStatus(filters.status_filter)
            except ValueError:
                continue
            if company.status_counts.get(status) == 0:
                continue
        if not is_all(filters.type_filter) and _kind_count(company, filters.type_filter) == 0:
            continue
        result.append(company)
    return result


def filter_jobs(jobs: Sequence[Job], filters: JobFilters) -> list[Job]:
    result = []
    for job in jobs:
        if not matches_text(filters.search_term, job.title, job.company, *job.tags):
            continue
        if not is_all(filters.type_filter) and job.type != filters.type_filter:
            continue
        if not is_all(filters.location_filter) and not matches_text(
            filters.location_filter, job.location
        ):
            continue
        job_status = job.status or JobStatus.ACTIVE.value
        if not is_all(filters.status_filter) and job_status != filters.status_filter:
            continue
        if not is_all(filters.category_filter):
            category = filters.category_filter
            if job.category != category and not matches_text(category, *job.tags):
                continue
        result.append(job)
    return result


def paginate(
    items: Sequence[T], request: PageRequest, item_type: type[T] | None = None
) -> Page[T]:
    """Slice one page out of items. Out-of-range pages are clamped.

    Pass item_type to get a parametrized Page (needed when the page is nested
    in another response model).
    """
    page_cls = Page[item_type] if item_type is not None else Page
    total_pages = math.ceil(len(items) / request.page_size) or 1
    page = min(max(request.page, 1), total_pages)
    start = (page - 1) * request.page_size
    return page_cls(
        items=list(items[start : start + request.page_size]),
        page=page,
        page_size=request.page_size,
        total_items=len(items),
        total_pages=total_pages,
    )
