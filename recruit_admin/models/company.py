"""Derived, non-persisted view models rebuilt from the job/application snapshots."""
from __future__ import annotations

from pydantic import BaseModel, ConfigDict, computed_field

from recruit_admin.models.application import ApplicationStatus, JobApplication
from recruit_admin.models.filters import Page
from recruit_admin.models.job import Job, JobKind, JobStats

UNKNOWN_COMPANY = "Unknown Company"
UNKNOWN_LOCATION = "Location N/A"
UNKNOWN_POSITION = "Unknown Position"


class AnnotatedApplication(BaseModel):
    """An application carrying the job it resolved to (None when unresolved)."""

    model_config = ConfigDict(frozen=True)

    application: JobApplication
    job: Job | None = None

    @property
    def company(self) -> str:
        return self.job.company if self.job and self.job.company else UNKNOWN_COMPANY

    @property
    def location(self) -> str:
        return self.job.location if self.job and self.job.location else UNKNOWN_LOCATION

    @property
    def position(self) -> str:
        return self.job.title if self.job and self.job.title else UNKNOWN_POSITION

    @property
    def kind(self) -> JobKind:
        return self.job.kind if self.job else JobKind.JOB

    @property
    def status(self) -> ApplicationStatus:
        return self.application.status


class CompanyBucket(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    slug: str
    location: str
    applications: tuple[AnnotatedApplication, ...] = ()


class StatusCounts(BaseModel):
    model_config = ConfigDict(frozen=True)

    applied: int = 0
    under_review: int = 0
    shortlisted: int = 0
    interview_scheduled: int = 0
    hired: int = 0
    rejected: int = 0

    def get(self, status: ApplicationStatus) -> int:
        return getattr(self, status.value)

    def total(self) -> int:
        return sum(self.get(status) for status in ApplicationStatus)


class RecentApplication(BaseModel):
    id: str
    candidate_name: str
    position: str
    type: JobKind
    status: ApplicationStatus
    applied_date: str


class CompanyAggregate(BaseModel):
    model_config = ConfigDict(frozen=True)

    slug: str
    name: str
    location: str
    total_applications: int = 0
    job_applications: int = 0
    internship_applications: int = 0
    status_counts: StatusCounts = StatusCounts()
    recent_applications: tuple[RecentApplication, ...] = ()


class AggregateTotals(BaseModel):
    companies: int = 0
    total_applications: int = 0
    job_applications: int = 0
    internship_applications: int = 0
    status_counts: StatusCounts = StatusCounts()


class ApplicationRow(BaseModel):
    """Flat row rendered on the company detail view."""

    id: str
    candidate_name: str
    candidate_email: str
    candidate_phone: str
    company: str
    location: str
    position: str
    job_id: str
    type: JobKind
    status: ApplicationStatus
    applied_date: str
    interview_scheduled: bool = False
    interview_date: str | None = None
    notes: str = ""

    @computed_field
    @property
    def status_label(self) -> str:
        return self.status.label

    @classmethod
    def from_annotated(cls, item: AnnotatedApplication) -> ApplicationRow:
        app = item.application
        return cls(
            id=app.id,
            candidate_name=app.name,
            candidate_email=app.email,
            candidate_phone=app.phone,
            company=item.company,
            location=item.location,
            position=item.position,
            job_id=app.job_id,
            type=item.kind,
            status=app.status,
            applied_date=app.created_at,
            interview_scheduled=app.interview_scheduled,
            interview_date=app.interview_date,
            notes=app.notes,
        )


class CompanyDetail(BaseModel):
    company: CompanyAggregate
    applications: list[ApplicationRow]


class ApplicationDetail(BaseModel):
    application: JobApplication
    job: Job | None = None


class CompanyListing(BaseModel):
    page: Page[CompanyAggregate]
    totals: AggregateTotals


class JobListing(BaseModel):
    page: Page[Job]
    stats: JobStats
