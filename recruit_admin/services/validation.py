"""Form field checks run before a mutation is sent to the store."""

from __future__ import annotations

import re

from recruit_admin.config import settings
from recruit_admin.errors import ValidationError
from recruit_admin.models.application import ApplicationCreate, ApplicationUpdate

_EMAIL = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def validate_update(update: ApplicationUpdate) -> ApplicationUpdate:
    if update.status is None and update.notes is None:
        raise ValidationError("update", "Nothing to update: provide a status or notes")
    if update.notes is not None and len(update.notes) > settings.max_notes_length:
        raise ValidationError(
            "notes", f"Notes must be at most {settings.max_notes_length} characters"
        )
    return update


def validate_create(payload: ApplicationCreate) -> ApplicationCreate:
    for field in ("name", "email", "phone", "job_id"):
        if not getattr(payload, field).strip():
            raise ValidationError(field, f"{field.replace('_', ' ').capitalize()} is required")
    if not _EMAIL.match(payload.email.strip()):
        raise ValidationError("email", "Please enter a valid email address")
    digits = re.sub(r"\D", "", payload.phone)
    if not 7 <= len(digits) <= 15:
        raise ValidationError("phone", "Please enter a valid phone number")
    return payload
