from __future__ import annotations

import logging
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator, model_validator
from pydantic.alias_generators import to_camel

from recruit_admin.models.records import as_flag, coerce_fields

logger = logging.getLogger(__name__)

_TEXT_FIELDS = (
    "name", "email", "phone", "message", "resume", "notes",
    "coverLetter", "cover_letter", "jobId", "job_id", "userId", "user_id",
)
_TIMESTAMP_FIELDS = (
    "createdAt", "created_at", "updatedAt", "updated_at", "interviewDate", "interview_date",
)


class ApplicationStatus(str, Enum):
    APPLIED = "applied"
    UNDER_REVIEW = "under_review"
    SHORTLISTED = "shortlisted"
    INTERVIEW_SCHEDULED = "interview_scheduled"
    HIRED = "hired"
    REJECTED = "rejected"

    @property
    def label(self) -> str:
        """Human label, e.g. 'Interview Scheduled'."""
        return " ".join(word.capitalize() for word in self.value.split("_"))


class JobApplication(BaseModel):
    """A candidate's submission against a job, as the remote store returns it."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
        coerce_numbers_to_str=True,
    )

    id: str = ""
    name: str = ""
    email: str = ""
    phone: str = ""
    message: str = ""
    cover_letter: str = ""
    job_id: str = ""
    user_id: str = ""
    resume: str = ""
    status: ApplicationStatus = ApplicationStatus.APPLIED
    notes: str = ""
    interview_scheduled: bool = False
    interview_date: str | None = None
    created_at: str = ""
    updated_at: str = ""

    @model_validator(mode="before")
    @classmethod
    def _normalize_raw(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        data = dict(data)
        data["id"] = str(data.get("id") or data.get("_id") or "")
        # jobId may be a populated job document instead of a bare id
        for key in ("jobId", "job_id"):
            job_ref = data.get(key)
            if isinstance(job_ref, dict):
                data[key] = str(job_ref.get("_id") or job_ref.get("id") or "")
        coerce_fields(data, _TEXT_FIELDS, _TIMESTAMP_FIELDS)
        for key in ("interviewScheduled", "interview_scheduled"):
            if data.get(key) is not None:
                data[key] = as_flag(data[key])
        return {k: v for k, v in data.items() if v is not None or k in ("interviewDate", "interview_date")}

    @field_validator("status", mode="before")
    @classmethod
    def _known_status(cls, value: Any) -> Any:
        try:
            return ApplicationStatus(value)
        except (ValueError, TypeError):
            logger.warning("Unknown application status %r, treating as 'applied'", value)
            return ApplicationStatus.APPLIED

    @property
    def created(self) -> datetime | None:
        """Parsed created_at, or None when missing or malformed."""
        if not self.created_at:
            return None
        try:
            parsed = datetime.fromisoformat(self.created_at.replace("Z", "+00:00"))
        except ValueError:
            return None
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        return parsed


class ApplicationQuery(BaseModel):
    """Query filters forwarded to GET /admin/applications."""

    q: str | None = None
    status: str | None = None
    job_id: str | None = None

    def to_params(self) -> dict[str, str]:
        params = {"q": self.q, "status": self.status, "jobId": self.job_id}
        return {k: v for k, v in params.items() if v}


class ApplicationUpdate(BaseModel):
    """PATCH body: only the fields that are set are sent to the store."""

    status: ApplicationStatus | None = None
    notes: str | None = None

    def to_payload(self) -> dict[str, str]:
        return self.model_dump(mode="json", exclude_none=True)


class ApplicationCreate(BaseModel):
    """Submission from the admin 'add application' form."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    name: str
    email: str
    phone: str
    job_id: str
    cover_letter: str = ""
    message: str = ""
    resume: str = ""

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)
