import json
from datetime import datetime, timezone

import httpx
import pytest

from conftest import APPLICATIONS, JOBS, make_client, store_handler
from recruit_admin.errors import FetchError, NotFoundError
from recruit_admin.models import (
    ApplicationCreate,
    ApplicationQuery,
    ApplicationStatus,
    ApplicationUpdate,
    JobQuery,
)
from recruit_admin.services.grouping import group_by_company


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "payload", [JOBS, {"docs": JOBS}, {"data": {"docs": JOBS}}], ids=["flat", "docs", "data-docs"]
)
async def test_fetch_jobs_accepts_every_envelope(payload):
    client = make_client(store_handler(jobs_payload=payload))

    jobs = await client.fetch_jobs()

    assert [j.id for j in jobs] == ["j1", "j2", "j3"]
    assert jobs[2].salary == 850000.0
    assert jobs[2].tags == ["SQL", "Python"]


@pytest.mark.asyncio
async def test_unknown_envelope_yields_empty_list():
    client = make_client(store_handler(applications_payload={"results": APPLICATIONS}))
    assert await client.fetch_applications() == []


@pytest.mark.asyncio
async def test_only_non_object_entries_are_skipped():
    payload = [{"_id": "ok", "jobId": "j1"}, {"_id": "nested", "name": {"first": "x"}}, "oops", 7]
    client = make_client(store_handler(applications_payload=payload))

    applications = await client.fetch_applications()

    assert [a.id for a in applications] == ["ok", "nested"]
    assert applications[1].name == ""


@pytest.mark.asyncio
async def test_numeric_scalars_are_coerced_instead_of_dropping_the_record():
    payload = [
        {"_id": "a1", "phone": "98765", "jobId": "j1"},
        {"_id": "a2", "phone": 9876543210, "jobId": "j1"},
        {"_id": 3, "createdAt": 1710000000000, "interviewScheduled": "yes", "status": {"x": 1}},
    ]
    client = make_client(store_handler(applications_payload=payload))

    applications = await client.fetch_applications()
    buckets = group_by_company(await client.fetch_jobs(), applications)

    assert [a.id for a in applications] == ["a1", "a2", "3"]
    assert applications[1].phone == "9876543210"
    assert applications[2].created == datetime(2024, 3, 9, 16, 0, tzinfo=timezone.utc)
    assert applications[2].interview_scheduled is True
    assert applications[2].status is ApplicationStatus.APPLIED
    assert sum(len(b.applications) for b in buckets) == len(payload)


@pytest.mark.asyncio
async def test_loose_job_fields_keep_the_job_and_its_applications():
    jobs_payload = [
        {"_id": "j1", "company": "Acme", "location": 411001, "tags": [None, "SQL", 3, {"x": 1}],
         "salary": "12 LPA", "applicants": "many"},
    ]
    client = make_client(
        store_handler(jobs_payload=jobs_payload, applications_payload=[{"_id": "a1", "jobId": "j1"}])
    )

    jobs = await client.fetch_jobs()
    buckets = group_by_company(jobs, await client.fetch_applications())

    assert jobs[0].location == "411001"
    assert jobs[0].tags == ["SQL", "3"]
    assert jobs[0].salary == 12.0
    assert jobs[0].applicants == 0
    assert [b.name for b in buckets] == ["Acme"]


@pytest.mark.asyncio
async def test_query_params_are_forwarded_without_blanks():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen[request.url.path] = dict(request.url.params)
        return httpx.Response(200, json=[])

    client = make_client(handler)
    await client.fetch_jobs(JobQuery(q="python", location="Pune", type=None, category=""))
    await client.fetch_applications(ApplicationQuery(status="hired", job_id="j1"))

    assert seen["/api/admin/jobs"] == {"q": "python", "location": "Pune"}
    assert seen["/api/admin/applications"] == {"status": "hired", "jobId": "j1"}


@pytest.mark.asyncio
async def test_http_error_becomes_fetch_error_with_status_and_message():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(503, json={"message": "Store under maintenance"})

    with pytest.raises(FetchError) as excinfo:
        await make_client(handler).fetch_jobs()

    assert excinfo.value.status_code == 503
    assert excinfo.value.message == "Store under maintenance"


@pytest.mark.asyncio
async def test_transport_error_becomes_fetch_error_without_status():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(FetchError) as excinfo:
        await make_client(handler).fetch_applications()

    assert excinfo.value.status_code is None
    assert str(excinfo.value) == "Failed to fetch job applications"


@pytest.mark.asyncio
async def test_update_sends_only_set_fields():
    sent = {}

    def handler(request: httpx.Request) -> httpx.Response:
        sent["method"] = request.method
        sent["path"] = request.url.path
        sent["body"] = json.loads(request.content)
        return httpx.Response(200, json={"data": {"_id": "a1", "status": "shortlisted"}})

    updated = await make_client(handler).update_application(
        "a1", ApplicationUpdate(status=ApplicationStatus.SHORTLISTED)
    )

    assert sent == {"method": "PATCH", "path": "/api/admin/applications/a1", "body": {"status": "shortlisted"}}
    assert updated.status is ApplicationStatus.SHORTLISTED
    assert updated.notes == ""


@pytest.mark.asyncio
async def test_missing_application_raises_not_found():
    client = make_client(store_handler())
    with pytest.raises(NotFoundError):
        await client.fetch_application("nope")
    with pytest.raises(NotFoundError):
        await client.delete_application("nope")


@pytest.mark.asyncio
async def test_create_posts_camel_case_payload():
    sent = {}

    def handler(request: httpx.Request) -> httpx.Response:
        sent.update(json.loads(request.content))
        return httpx.Response(201, json={"data": {"_id": "a9", **sent}})

    created = await make_client(handler).create_application(
        ApplicationCreate(name="Rahul", email="rahul@example.com", phone="+91 98765 43215", job_id="j2")
    )

    assert sent["jobId"] == "j2"
    assert created.id == "a9"
    assert created.job_id == "j2"
    assert created.status is ApplicationStatus.APPLIED
