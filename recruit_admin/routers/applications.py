"""Application detail, search and mutation endpoints."""
from __future__ import annotations

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from recruit_admin.errors import RecruitAdminError, http_error
from recruit_admin.models.application import ApplicationCreate, ApplicationStatus
from recruit_admin.models.company import ApplicationDetail, ApplicationRow
from recruit_admin.models.notice import ActionResult
from recruit_admin.services.application_service import (
    ApplicationService,
    get_application_service,
)

router = APIRouter(prefix="/api/applications", tags=["applications"])


class StatusChange(BaseModel):
    status: ApplicationStatus


class NotesChange(BaseModel):
    notes: str


class SearchResult(BaseModel):
    superseded: bool = False
    applications: list[ApplicationRow] = []


@router.get("/search", response_model=SearchResult)
async def search_applications(
    q: str = "", service: ApplicationService = Depends(get_application_service)
) -> SearchResult:
    """Debounced store-side search; a newer search makes this one return superseded."""
    try:
        applications = await service.search_applications(q)
    except RecruitAdminError as e:
        raise http_error(e)
    if applications is None:
        return SearchResult(superseded=True)
    return SearchResult(applications=service.rows(applications))


@router.get("/{application_id}", response_model=ApplicationDetail)
async def get_application(
    application_id: str, service: ApplicationService = Depends(get_application_service)
) -> ApplicationDetail:
    try:
        return await service.application_detail(application_id)
    except RecruitAdminError as e:
        raise http_error(e)


@router.post("", response_model=ActionResult, status_code=201)
async def create_application(
    payload: ApplicationCreate, service: ApplicationService = Depends(get_application_service)
) -> ActionResult:
    try:
        return await service.create_application(payload)
    except RecruitAdminError as e:
        raise http_error(e)


@router.patch("/{application_id}/status", response_model=ActionResult)
async def update_status(
    application_id: str,
    change: StatusChange,
    service: ApplicationService = Depends(get_application_service),
) -> ActionResult:
    try:
        return await service.update_status(application_id, change.status)
    except RecruitAdminError as e:
        raise http_error(e)


@router.patch("/{application_id}/notes", response_model=ActionResult)
async def save_notes(
    application_id: str,
    change: NotesChange,
    service: ApplicationService = Depends(get_application_service),
) -> ActionResult:
    try:
        return await service.save_notes(application_id, change.notes)
    except RecruitAdminError as e:
        raise http_error(e)


@router.delete("/{application_id}", response_model=ActionResult)
async def delete_application(
    application_id: str, service: ApplicationService = Depends(get_application_service)
) -> ActionResult:
    try:
        return await service.delete_application(application_id)
    except RecruitAdminError as e:
        raise http_error(e)
