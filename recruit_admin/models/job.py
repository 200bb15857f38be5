from __future__ import annotations

import re
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from recruit_admin.models.records import coerce_fields, text_list

_TEXT_FIELDS = ("title", "company", "location", "type", "stipend", "category", "status")
_TIMESTAMP_FIELDS = ("postedAt", "posted_at")


class JobKind(str, Enum):
    JOB = "job"
    INTERNSHIP = "internship"


class JobStatus(str, Enum):
    ACTIVE = "active"
    CLOSED = "closed"
    PAUSED = "paused"


def parse_salary(stipend: str | None) -> float | None:
    """Pull a number out of a free-form stipend like '₹25,000 /month'."""
    if not stipend:
        return None
    numeric = re.sub(r"[^\d.]", "", stipend)
    try:
        return float(numeric)
    except ValueError:
        return None


class Job(BaseModel):
    """A posted position as the remote store returns it. Read-only here."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
        coerce_numbers_to_str=True,
    )

    id: str = ""
    title: str = ""
    company: str = ""
    location: str = ""
    type: str = ""  # store value, e.g. "internship", "Full-time"
    salary: float | None = None
    stipend: str | None = None
    category: str = ""
    status: str = JobStatus.ACTIVE.value
    tags: list[str] = Field(default_factory=list)
    applicants: int = 0
    posted_at: str = ""

    @model_validator(mode="before")
    @classmethod
    def _normalize_raw(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        data = coerce_fields(dict(data), _TEXT_FIELDS, _TIMESTAMP_FIELDS)
        data["id"] = str(data.get("id") or data.get("_id") or "")
        salary = data.get("salary")
        if isinstance(salary, bool) or not isinstance(salary, (int, float)):
            salary = parse_salary(salary) if isinstance(salary, str) else None
            data["salary"] = salary if salary is not None else parse_salary(data.get("stipend"))
        data["tags"] = text_list(data.get("tags"))
        applicants = data.get("applicants")
        if isinstance(applicants, bool) or not isinstance(applicants, int):
            data.pop("applicants", None)
        if not data.get("status"):
            data.pop("status", None)
        # Stores send explicit nulls for unset text fields.
        return {k: v for k, v in data.items() if v is not None or k in ("salary", "stipend")}

    @property
    def kind(self) -> JobKind:
        if self.type.strip().lower() == JobKind.INTERNSHIP.value:
            return JobKind.INTERNSHIP
        return JobKind.JOB


class JobQuery(BaseModel):
    """Query filters forwarded to GET /admin/jobs."""

    q: str | None = None
    location: str | None = None
    type: str | None = None
    category: str | None = None
    status: str | None = None

    def to_params(self) -> dict[str, str]:
        return {k: v for k, v in self.model_dump().items() if v}


class JobStats(BaseModel):
    """Header figures for the jobs board, over every loaded job."""

    total_jobs: int = 0
    active_jobs: int = 0
    total_applicants: int = 0
    average_salary: float = 0.0
