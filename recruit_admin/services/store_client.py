"""Async REST client for the remote job/application store."""

from __future__ import annotations

import logging
from typing import Any, TypeVar

import httpx
import pydantic

from recruit_admin.config import settings
from recruit_admin.errors import FetchError, NotFoundError
from recruit_admin.models.application import (
    ApplicationCreate,
    ApplicationQuery,
    ApplicationUpdate,
    JobApplication,
)
from recruit_admin.models.job import Job, JobQuery
from recruit_admin.services.envelope import error_message, unwrap_collection, unwrap_record

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=pydantic.BaseModel)

JOBS_PATH = "/admin/jobs"
APPLICATIONS_PATH = "/admin/applications"


def _parse_many(model: type[M], records: list[dict[str, Any]]) -> list[M]:
    items: list[M] = []
    for record in records:
        try:
            items.append(model.model_validate(record))
        except pydantic.ValidationError as e:
            logger.warning(
                "Skipping malformed %s record %r: %s",
                model.__name__,
                record.get("_id") or record.get("id"),
                e.errors()[0]["msg"] if e.errors() else e,
            )
    return items


class RemoteStoreClient:
    """Thin wrapper over httpx that normalizes envelopes and raises FetchError."""

    def __init__(
        self, base_url: str | None = None, transport: httpx.AsyncBaseTransport | None = None
    ) -> None:
        self._base_url = base_url
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def connect(self, base_url: str | None = None) -> None:
        base_url = base_url or self._base_url or settings.api_base_url
        self._client = httpx.AsyncClient(
            base_url=base_url,
            timeout=settings.request_timeout,
            transport=self._transport,
        )
        logger.info("Remote store client ready at %s", base_url)

    async def disconnect(self) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None
        logger.info("Remote store client closed")

    @property
    def is_connected(self) -> bool:
        return self._client is not None

    async def _request(
        self,
        method: str,
        path: str,
        *,
        what: str,
        params: dict[str, str] | None = None,
        json: Any = None,
    ) -> Any:
        """Send one request; returns the decoded JSON body (None for empty bodies)."""
        if self._client is None:
            await self.connect()
        assert self._client is not None

        try:
            response = await self._client.request(method, path, params=params, json=json)
        except httpx.HTTPError as e:
            logger.error("%s %s failed: %s", method, path, e)
            raise FetchError(f"Failed to {what}") from e

        body: Any = None
        if response.content:
            try:
                body = response.json()
            except ValueError:
                body = None

        if response.status_code == 401:
            logger.error("Authentication error from store on %s %s: %s", method, path, body)
        if response.is_error:
            logger.error("%s %s returned HTTP %d", method, path, response.status_code)
            raise FetchError(
                error_message(body, f"Failed to {what}"), status_code=response.status_code
            )
        return body

    async def _request_record(
        self, method: str, path: str, key: str, *, what: str, json: Any = None
    ) -> JobApplication:
        try:
            body = await self._request(method, path, what=what, json=json)
        except FetchError as e:
            if e.status_code == 404:
                raise NotFoundError("application", key) from e
            raise
        record = unwrap_record(body)
        if record is None:
            raise FetchError(f"Failed to {what}: unexpected response")
        try:
            return JobApplication.model_validate(record)
        except pydantic.ValidationError as e:
            raise FetchError(f"Failed to {what}: malformed application") from e

    # -- Collections --

    async def fetch_jobs(self, query: JobQuery | None = None) -> list[Job]:
        params = query.to_params() if query else None
        body = await self._request("GET", JOBS_PATH, what="fetch jobs", params=params)
        jobs = _parse_many(Job, unwrap_collection(body))
        logger.debug("Fetched %d jobs (params=%s)", len(jobs), params)
        return jobs

    async def fetch_applications(self, query: ApplicationQuery | None = None) -> list[JobApplication]:
        params = query.to_params() if query else None
        body = await self._request(
            "GET", APPLICATIONS_PATH, what="fetch job applications", params=params
        )
        applications = _parse_many(JobApplication, unwrap_collection(body))
        logger.debug("Fetched %d applications (params=%s)", len(applications), params)
        return applications

    # -- Single applications --

    async def fetch_application(self, application_id: str) -> JobApplication:
        return await self._request_record(
            "GET",
            f"{APPLICATIONS_PATH}/{application_id}",
            application_id,
            what="fetch job application",
        )

    async def update_application(
        self, application_id: str, update: ApplicationUpdate
    ) -> JobApplication:
        return await self._request_record(
            "PATCH",
            f"{APPLICATIONS_PATH}/{application_id}",
            application_id,
            what="update job application",
            json=update.to_payload(),
        )

    async def create_application(self, payload: ApplicationCreate) -> JobApplication:
        body = await self._request(
            "POST", APPLICATIONS_PATH, what="create job application", json=payload.to_payload()
        )
        record = unwrap_record(body)
        if record is None:
            raise FetchError("Failed to create job application: unexpected response")
        try:
            return JobApplication.model_validate(record)
        except pydantic.ValidationError as e:
            raise FetchError("Failed to create job application: malformed application") from e

    async def delete_application(self, application_id: str) -> None:
        try:
            await self._request(
                "DELETE",
                f"{APPLICATIONS_PATH}/{application_id}",
                what="delete job application",
            )
        except FetchError as e:
            if e.status_code == 404:
                raise NotFoundError("application", application_id) from e
            raise


store_client = RemoteStoreClient()
