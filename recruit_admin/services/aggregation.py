"""Per-company counters derived from grouped applications."""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable
from datetime import datetime, timezone

from recruit_admin.config import settings
from recruit_admin.models.application import ApplicationStatus, JobApplication
from recruit_admin.models.company import (
    AggregateTotals,
    AnnotatedApplication,
    CompanyAggregate,
    CompanyBucket,
    RecentApplication,
    StatusCounts,
)
from recruit_admin.models.job import Job, JobKind, JobStats, JobStatus
from recruit_admin.services.grouping import group_by_company

_OLDEST = datetime.min.replace(tzinfo=timezone.utc)


def count_statuses(statuses: Iterable[ApplicationStatus]) -> StatusCounts:
    # `applied` keeps its own counter; it is not folded into under_review.
    counts = Counter(statuses)
    return StatusCounts(**{status.value: counts.get(status, 0) for status in ApplicationStatus})


def recent_applications(
    items: Iterable[AnnotatedApplication], limit: int
) -> tuple[RecentApplication, ...]:
    """Newest first by created_at; undated applications sort last."""
    ordered = sorted(items, key=lambda item: item.application.created or _OLDEST, reverse=True)
    return tuple(
        RecentApplication(
            id=item.application.id,
            candidate_name=item.application.name,
            position=item.position,
            type=item.kind,
            status=item.status,
            applied_date=item.application.created_at,
        )
        for item in ordered[:limit]
    )


def aggregate_company(bucket: CompanyBucket, recent_limit: int | None = None) -> CompanyAggregate:
    if recent_limit is None:
        recent_limit = settings.recent_applications_limit
    items = bucket.applications
    internships = sum(1 for item in items if item.kind is JobKind.INTERNSHIP)
    return CompanyAggregate(
        slug=bucket.slug,
        name=bucket.name,
        location=bucket.location,
        total_applications=len(items),
        job_applications=len(items) - internships,
        internship_applications=internships,
        status_counts=count_statuses(item.status for item in items),
        recent_applications=recent_applications(items, recent_limit),
    )


def aggregate_companies(
    jobs: Iterable[Job],
    applications: Iterable[JobApplication],
    recent_limit: int | None = None,
) -> list[CompanyAggregate]:
    """Group + aggregate in one call. Pure: same inputs give the same output."""
    return [aggregate_company(bucket, recent_limit) for bucket in group_by_company(jobs, applications)]


def summarize(aggregates: Iterable[CompanyAggregate]) -> AggregateTotals:
    """Dashboard header totals across every company."""
    aggregates = list(aggregates)
    return AggregateTotals(
        companies=len(aggregates),
        total_applications=sum(a.total_applications for a in aggregates),
        job_applications=sum(a.job_applications for a in aggregates),
        internship_applications=sum(a.internship_applications for a in aggregates),
        status_counts=StatusCounts(
            **{
                status.value: sum(a.status_counts.get(status) for a in aggregates)
                for status in ApplicationStatus
            }
        ),
    )


def summarize_jobs(jobs: Iterable[Job]) -> JobStats:
    """Jobs board totals. A missing status counts as active; a missing salary as zero."""
    jobs = list(jobs)
    if not jobs:
        return JobStats()
    active = JobStatus.ACTIVE.value
    return JobStats(
        total_jobs=len(jobs),
        active_jobs=sum(1 for job in jobs if (job.status or active) == active),
        total_applicants=sum(job.applicants for job in jobs),
        average_salary=sum(job.salary or 0.0 for job in jobs) / len(jobs),
    )
