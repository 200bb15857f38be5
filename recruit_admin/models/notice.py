from __future__ import annotations

from typing import Literal

from pydantic import BaseModel

from recruit_admin.models.application import JobApplication


class Notice(BaseModel):
    """Transient notification shown to the admin after an action."""

    level: Literal["success", "warning", "error"] = "success"
    message: str


class ActionResult(BaseModel):
    """Answer to a mutating request: the confirmed record plus a notice."""

    application: JobApplication | None = None
    notice: Notice
