"""Error taxonomy shared by the store client, the service layer and the routers."""
from __future__ import annotations

from fastapi import HTTPException

from recruit_admin.models.notice import Notice


class RecruitAdminError(Exception):
    """Base class for errors surfaced to the admin dashboard."""

    def to_notice(self) -> Notice:
        return Notice(level="error", message=f"Error: {self}")


class FetchError(RecruitAdminError):
    """Network or HTTP failure while talking to the remote store."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code

    def __str__(self) -> str:
        if self.status_code is None:
            return self.message
        return f"{self.message} (HTTP {self.status_code})"


class NotFoundError(RecruitAdminError):
    """A company slug or application id that does not resolve. Terminal, never retried."""

    def __init__(self, resource: str, key: str) -> None:
        super().__init__(f"{resource} '{key}' not found")
        self.resource = resource
        self.key = key

    def to_notice(self) -> Notice:
        return Notice(level="warning", message=f"{self.resource.capitalize()} not found")


class ValidationError(RecruitAdminError):
    """Form field check that blocks a submission before it reaches the store."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(f"{field}: {message}")
        self.field = field
        self.message = message

    def to_notice(self) -> Notice:
        return Notice(level="error", message=self.message)


def http_error(error: RecruitAdminError) -> HTTPException:
    """Map a service error to the HTTPException a router raises at the call site."""
    detail: dict = {"message": str(error), "notice": error.to_notice().model_dump()}
    if isinstance(error, NotFoundError):
        detail["back"] = "/api/companies"
        return HTTPException(status_code=404, detail=detail)
    if isinstance(error, ValidationError):
        detail["field"] = error.field
        return HTTPException(status_code=422, detail=detail)
    if isinstance(error, FetchError) and error.status_code and 400 <= error.status_code < 500:
        return HTTPException(status_code=error.status_code, detail=detail)
    return HTTPException(status_code=502, detail=detail)
