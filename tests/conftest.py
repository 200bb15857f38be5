import httpx
import pytest
from fastapi.testclient import TestClient

from recruit_admin.main import app
from recruit_admin.models import Job, JobApplication
from recruit_admin.services.application_service import ApplicationService, get_application_service
from recruit_admin.services.store_client import RemoteStoreClient

BASE_URL = "http://store.test/api"

JOBS = [
    {"_id": "j1", "title": "Backend Engineer", "company": "Acme", "location": "Pune, India", "type": "job"},
    {"_id": "j2", "title": "Design Intern", "company": "Acme", "location": "Pune, India", "type": "internship"},
    {"_id": "j3", "title": "Data Analyst", "company": "Globex", "location": "Mumbai, India", "type": "Full-time",
     "category": "Data Science", "tags": ["SQL", "Python"], "stipend": "₹8,50,000"},
]

APPLICATIONS = [
    {"_id": "a1", "name": "Rajesh Kumar", "email": "rajesh@example.com", "jobId": "j1", "status": "hired",
     "createdAt": "2024-03-10T09:00:00Z"},
    {"_id": "a2", "name": "Priya Sharma", "email": "priya@example.com", "jobId": "j2", "status": "applied",
     "createdAt": "2024-03-14T09:00:00Z"},
    {"_id": "a3", "name": "Amit Patel", "email": "amit@example.com", "jobId": "j9", "status": "rejected",
     "createdAt": "2024-03-12T09:00:00Z"},
    {"_id": "a4", "name": "Sneha Gupta", "email": "sneha@example.com", "jobId": "j3", "status": "under_review",
     "createdAt": "2024-03-15T09:00:00Z"},
]


def make_client(handler) -> RemoteStoreClient:
    """Store client whose requests are answered by `handler` instead of the network."""
    return RemoteStoreClient(base_url=BASE_URL, transport=httpx.MockTransport(handler))


def store_handler(jobs_payload=None, applications_payload=None, overrides=None):
    """Default store: envelopes both collections the way the real API does."""
    jobs_payload = jobs_payload if jobs_payload is not None else {"data": {"docs": JOBS}}
    applications_payload = (
        applications_payload if applications_payload is not None else {"data": {"docs": APPLICATIONS}}
    )
    overrides = overrides or {}

    def handler(request: httpx.Request) -> httpx.Response:
        key = (request.method, request.url.path)
        if key in overrides:
            return overrides[key](request)
        if key == ("GET", "/api/admin/jobs"):
            return httpx.Response(200, json=jobs_payload)
        if key == ("GET", "/api/admin/applications"):
            return httpx.Response(200, json=applications_payload)
        return httpx.Response(404, json={"message": "Not found"})

    return handler


@pytest.fixture
def jobs() -> list[Job]:
    return [Job.model_validate(j) for j in JOBS]


@pytest.fixture
def applications() -> list[JobApplication]:
    return [JobApplication.model_validate(a) for a in APPLICATIONS]


@pytest.fixture
def service() -> ApplicationService:
    return ApplicationService(make_client(store_handler()))


@pytest.fixture
def test_client(service):
    """TestClient whose routes use a service backed by the mock store."""
    original = app.dependency_overrides.get(get_application_service)
    app.dependency_overrides[get_application_service] = lambda: service

    yield TestClient(app)

    if original:
        app.dependency_overrides[get_application_service] = original
    else:
        del app.dependency_overrides[get_application_service]
