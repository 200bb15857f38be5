from .application import (
    ApplicationCreate,
    ApplicationQuery,
    ApplicationStatus,
    ApplicationUpdate,
    JobApplication,
)
from .company import (
    AggregateTotals,
    AnnotatedApplication,
    ApplicationDetail,
    ApplicationRow,
    CompanyAggregate,
    CompanyBucket,
    CompanyDetail,
    CompanyListing,
    JobListing,
    RecentApplication,
    StatusCounts,
)
from .filters import ALL, ApplicationFilters, CompanyFilters, JobFilters, Page, PageRequest, Tab
from .job import Job, JobKind, JobQuery, JobStats, JobStatus
from .notice import ActionResult, Notice

__all__ = [
    "ALL",
    "ActionResult",
    "AggregateTotals",
    "AnnotatedApplication",
    "ApplicationCreate",
    "ApplicationDetail",
    "ApplicationFilters",
    "ApplicationQuery",
    "ApplicationRow",
    "ApplicationStatus",
    "ApplicationUpdate",
    "CompanyAggregate",
    "CompanyBucket",
    "CompanyDetail",
    "CompanyFilters",
    "CompanyListing",
    "Job",
    "JobApplication",
    "JobFilters",
    "JobKind",
    "JobListing",
    "JobQuery",
    "JobStats",
    "JobStatus",
    "Notice",
    "Page",
    "PageRequest",
    "RecentApplication",
    "StatusCounts",
    "Tab",
]
