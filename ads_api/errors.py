# ads_api/errors.py
from __future__ import annotations

from typing import Any


class AdsError(Exception):
    """Base for every error the API reports to clients."""

    status_code = 500
    kind = "error"

    def __init__(self, detail: str = "", **extra: Any):
        super().__init__(detail)
        self.detail = detail
        self.extra = extra

    def to_dict(self) -> dict:
        return {"ok": False, "error": self.kind, "detail": self.detail, **self.extra}


# ---- client errors ----

class ValidationError(AdsError, ValueError):
    status_code = 400
    kind = "validation_error"


class NotFound(AdsError, LookupError):
    status_code = 404
    kind = "not_found"


class Conflict(AdsError):
    status_code = 409
    kind = "conflict"


class AlreadyPosted(AdsError):
    status_code = 409
    kind = "already_posted"


class NotEditable(AdsError):
    status_code = 409
    kind = "not_editable"


# ---- server errors ----

class ConfigurationMissing(AdsError):
    status_code = 500
    kind = "configuration_missing"


class PublishFailed(AdsError):
    status_code = 502
    kind = "publish_failed"

    def __init__(self, detail: str, status: int | None = None, body: str | None = None):
        super().__init__(detail, status=status, body=body)
        self.status = status
        self.body = body


class EditFailed(AdsError):
    status_code = 502
    kind = "edit_failed"

    def __init__(self, detail: str, error_code: int | None = None, description: str | None = None):
        super().__init__(detail, error_code=error_code, description=description)
        self.error_code = error_code
        self.description = description
