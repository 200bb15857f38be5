"""Immutable view-local filter state handed to the pure filter functions."""
from __future__ import annotations

from enum import Enum
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from recruit_admin.config import settings

# Sentinel that disables a categorical predicate.
ALL = "All"

T = TypeVar("T")


class Tab(str, Enum):
    ALL = "all"
    JOBS = "jobs"
    INTERNSHIPS = "internships"


class CompanyFilters(BaseModel):
    model_config = ConfigDict(frozen=True)

    search_term: str = ""
    status_filter: str = ALL
    type_filter: str = ALL


class ApplicationFilters(BaseModel):
    model_config = ConfigDict(frozen=True)

    search_term: str = ""
    status_filter: str = ALL
    type_filter: str = ALL
    active_tab: Tab = Tab.ALL


class JobFilters(BaseModel):
    model_config = ConfigDict(frozen=True)

    search_term: str = ""
    type_filter: str = ALL
    location_filter: str = ALL
    status_filter: str = ALL
    category_filter: str = ALL


class PageRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    page: int = Field(1, ge=1)
    page_size: int = Field(default_factory=lambda: settings.page_size, ge=1, le=100)


class Page(BaseModel, Generic[T]):
    items: list[T]
    page: int
    page_size: int
    total_items: int
    total_pages: int
