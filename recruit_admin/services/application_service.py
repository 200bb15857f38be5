"""Applicant tracking orchestration.

Holds immutable snapshots of the job and application collections, derives the
company views from them on every request, and runs confirmed mutations
against the remote store.
"""

from __future__ import annotations

import asyncio
import logging

from pydantic import BaseModel, ConfigDict

from recruit_admin.config import settings
from recruit_admin.errors import NotFoundError, RecruitAdminError
from recruit_admin.models.application import (
    ApplicationCreate,
    ApplicationQuery,
    ApplicationStatus,
    ApplicationUpdate,
    JobApplication,
)
from recruit_admin.models.company import (
    ApplicationDetail,
    ApplicationRow,
    CompanyAggregate,
    CompanyDetail,
    CompanyListing,
    JobListing,
)
from recruit_admin.models.filters import (
    ApplicationFilters,
    CompanyFilters,
    JobFilters,
    PageRequest,
)
from recruit_admin.models.job import Job, JobQuery
from recruit_admin.models.notice import ActionResult, Notice
from recruit_admin.services.aggregation import aggregate_company, summarize, summarize_jobs
from recruit_admin.services.filtering import (
    filter_applications,
    filter_companies,
    filter_jobs,
    paginate,
)
from recruit_admin.services.grouping import annotate, build_job_index, group_by_company
from recruit_admin.services.store_client import RemoteStoreClient, store_client
from recruit_admin.services.validation import validate_create, validate_update

logger = logging.getLogger(__name__)

JOBS = "jobs"
APPLICATIONS = "applications"


class Snapshot(BaseModel):
    """Point-in-time copy of both collections. Replaced, never mutated."""

    model_config = ConfigDict(frozen=True)

    jobs: tuple[Job, ...] = ()
    applications: tuple[JobApplication, ...] = ()
    jobs_loaded: bool = False
    applications_loaded: bool = False


class RequestGenerations:
    """Latest-wins bookkeeping: only the newest request per collection may apply."""

    def __init__(self) -> None:
        self._latest: dict[str, int] = {}

    def issue(self, key: str) -> int:
        self._latest[key] = self._latest.get(key, 0) + 1
        return self._latest[key]

    def is_current(self, key: str, token: int) -> bool:
        return self._latest.get(key, 0) == token


class ApplicationService:
    def __init__(self, client: RemoteStoreClient) -> None:
        self._client = client
        self._snapshot = Snapshot()
        self._generations = RequestGenerations()
        self._pending_search: asyncio.Task | None = None

    @property
    def snapshot(self) -> Snapshot:
        return self._snapshot

    # -- Loading --

    async def _load_jobs(self, query: JobQuery | None) -> bool:
        token = self._generations.issue(JOBS)
        jobs = await self._client.fetch_jobs(query)
        if not self._generations.is_current(JOBS, token):
            logger.debug("Discarding stale jobs response (request %d)", token)
            return False
        self._snapshot = self._snapshot.model_copy(
            update={"jobs": tuple(jobs), "jobs_loaded": True}
        )
        return True

    async def _load_applications(self, query: ApplicationQuery | None) -> list[JobApplication] | None:
        token = self._generations.issue(APPLICATIONS)
        applications = await self._client.fetch_applications(query)
        if not self._generations.is_current(APPLICATIONS, token):
            logger.debug("Discarding stale applications response (request %d)", token)
            return None
        self._set_applications(applications)
        return applications

    def _set_applications(self, applications: list[JobApplication] | tuple[JobApplication, ...]) -> None:
        self._snapshot = self._snapshot.model_copy(
            update={"applications": tuple(applications), "applications_loaded": True}
        )

    async def refresh(
        self,
        job_query: JobQuery | None = None,
        application_query: ApplicationQuery | None = None,
    ) -> Snapshot:
        """Fetch both collections concurrently.

        Whichever side succeeds is applied even when the other fails; the
        first failure is raised afterwards.
        """
        results = await asyncio.gather(
            self._load_jobs(job_query),
            self._load_applications(application_query),
            return_exceptions=True,
        )
        for result in results:
            if isinstance(result, BaseException):
                logger.error("Refresh failed: %s", result)
                raise result
        logger.info(
            "Loaded %d jobs and %d applications",
            len(self._snapshot.jobs),
            len(self._snapshot.applications),
        )
        return self._snapshot

    async def _debounced_search(self, q: str) -> list[JobApplication] | None:
        await asyncio.sleep(settings.search_debounce_ms / 1000)
        return await self._load_applications(ApplicationQuery(q=q or None))

    async def search_applications(self, q: str) -> list[JobApplication] | None:
        """Store-side search. Returns None when a newer search superseded this one."""
        if self._pending_search is not None and not self._pending_search.done():
            self._pending_search.cancel()
        task = asyncio.create_task(self._debounced_search(q))
        self._pending_search = task
        try:
            await asyncio.wait({task})
        except asyncio.CancelledError:
            task.cancel()
            raise
        if task.cancelled():
            logger.debug("Search %r superseded by a newer one", q)
            return None
        return task.result()

    # -- Views --

    def _aggregates(self) -> list[CompanyAggregate]:
        if not self._snapshot.applications_loaded:
            return []
        buckets = group_by_company(self._snapshot.jobs, self._snapshot.applications)
        return [aggregate_company(bucket) for bucket in buckets]

    def companies(
        self, filters: CompanyFilters | None = None, page: PageRequest | None = None
    ) -> CompanyListing:
        aggregates = self._aggregates()
        filtered = filter_companies(aggregates, filters or CompanyFilters())
        return CompanyListing(
            page=paginate(filtered, page or PageRequest(), CompanyAggregate),
            totals=summarize(aggregates),
        )

    def company_detail(self, slug: str, filters: ApplicationFilters | None = None) -> CompanyDetail:
        """Aggregate plus filtered rows for one company. Unknown slugs are terminal."""
        if self._snapshot.applications_loaded:
            buckets = group_by_company(self._snapshot.jobs, self._snapshot.applications)
        else:
            buckets = []
        for bucket in buckets:
            if bucket.slug == slug:
                rows = [ApplicationRow.from_annotated(item) for item in bucket.applications]
                return CompanyDetail(
                    company=aggregate_company(bucket),
                    applications=filter_applications(rows, filters or ApplicationFilters()),
                )
        raise NotFoundError("company", slug)

    def jobs(self, filters: JobFilters | None = None, page: PageRequest | None = None) -> JobListing:
        """Filtered page of jobs plus board stats over the whole jobs snapshot."""
        filtered = filter_jobs(self._snapshot.jobs, filters or JobFilters())
        return JobListing(
            page=paginate(filtered, page or PageRequest(), Job),
            stats=summarize_jobs(self._snapshot.jobs),
        )

    def rows(self, applications: list[JobApplication]) -> list[ApplicationRow]:
        job_index = build_job_index(self._snapshot.jobs)
        return [ApplicationRow.from_annotated(item) for item in annotate(applications, job_index)]

    async def application_detail(self, application_id: str) -> ApplicationDetail:
        application = await self._client.fetch_application(application_id)
        job = build_job_index(self._snapshot.jobs).get(application.job_id)
        return ApplicationDetail(application=application, job=job)

    # -- Mutations --

    def _replace_application(self, updated: JobApplication) -> None:
        # Supersede in-flight fetches so they cannot overwrite the confirmed record.
        self._generations.issue(APPLICATIONS)
        if not self._snapshot.applications_loaded:
            return
        self._set_applications(
            [updated if app.id == updated.id else app for app in self._snapshot.applications]
        )

    async def _update(self, application_id: str, update: ApplicationUpdate) -> JobApplication:
        validate_update(update)
        try:
            updated = await self._client.update_application(application_id, update)
        except RecruitAdminError as e:
            logger.error("Failed to update application %s: %s", application_id, e)
            raise
        self._replace_application(updated)
        return updated

    async def update_status(self, application_id: str, status: ApplicationStatus) -> ActionResult:
        updated = await self._update(application_id, ApplicationUpdate(status=status))
        logger.info("Application %s status -> %s", application_id, status.value)
        return ActionResult(
            application=updated,
            notice=Notice(
                message=f"Status Updated: Application status changed to {status.value.replace('_', ' ')}"
            ),
        )

    async def save_notes(self, application_id: str, notes: str) -> ActionResult:
        updated = await self._update(application_id, ApplicationUpdate(notes=notes))
        logger.info("Application %s notes saved", application_id)
        return ActionResult(
            application=updated,
            notice=Notice(message="Success: Internal notes have been updated."),
        )

    async def create_application(self, payload: ApplicationCreate) -> ActionResult:
        validate_create(payload)
        try:
            created = await self._client.create_application(payload)
        except RecruitAdminError as e:
            logger.error("Failed to create application for job %s: %s", payload.job_id, e)
            raise
        self._generations.issue(APPLICATIONS)
        if self._snapshot.applications_loaded:
            self._set_applications((created, *self._snapshot.applications))
        logger.info("Application %s created for job %s", created.id, created.job_id)
        return ActionResult(
            application=created, notice=Notice(message=f"Application from {created.name} added")
        )

    async def delete_application(self, application_id: str) -> ActionResult:
        try:
            await self._client.delete_application(application_id)
        except RecruitAdminError as e:
            logger.error("Failed to delete application %s: %s", application_id, e)
            raise
        self._generations.issue(APPLICATIONS)
        if self._snapshot.applications_loaded:
            self._set_applications(
                [app for app in self._snapshot.applications if app.id != application_id]
            )
        logger.info("Application %s deleted", application_id)
        return ActionResult(notice=Notice(message="Application deleted"))


application_service = ApplicationService(store_client)


def get_application_service() -> ApplicationService:
    return application_service
