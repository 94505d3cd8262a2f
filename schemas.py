"""
Request schemas validated at the HTTP boundary.

Malformed bodies are rejected here with a 400 before anything reaches the
store.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Literal

from flask import request
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

DEFAULT_COLOR = "#4f46e5"
DEFAULT_ICON = "Book"


def to_utc_iso(moment: datetime) -> str:
    """Render ``moment`` in UTC as ``YYYY-MM-DDTHH:MM:SS.mmmZ``. Naive values are taken as UTC."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def utc_now_iso() -> str:
    """Current UTC time as an ISO-8601 string with millisecond precision."""
    return to_utc_iso(datetime.now(timezone.utc))


class SubjectIn(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(min_length=1, max_length=120)
    color: str = DEFAULT_COLOR
    icon: str = DEFAULT_ICON


class SessionIn(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    subject_id: int = Field(gt=0)
    duration: int = Field(ge=0)
    date: str = Field(default_factory=utc_now_iso)
    notes: str | None = None

    @field_validator("date")
    @classmethod
    def _iso_timestamp(cls, value: str) -> str:
        # Stored dates are compared as text, so they must share one UTC form.
        try:
            parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError as exc:
            raise ValueError("date must be an ISO-8601 timestamp") from exc
        return to_utc_iso(parsed)


class GoalIn(BaseModel):
    subject_id: int = Field(gt=0)
    target_hours: int = Field(gt=0)
    period: Literal["daily", "weekly"] = "weekly"


class ChatTurn(BaseModel):
    role: Literal["user", "assistant"]
    content: str


class TutorMessageIn(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    message: str = Field(min_length=1)
    history: list[ChatTurn] = Field(default_factory=list)


class RequestValidationError(Exception):
    """Raised when a request body fails schema validation."""

    def __init__(self, message: str, details: list | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or []


def parse_body(model: type[BaseModel]) -> BaseModel:
    """Validate the current request's JSON body against ``model``."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise RequestValidationError("Request body must be a JSON object")
    try:
        return model.model_validate(data)
    except ValidationError as exc:
        details = [
            {"field": ".".join(str(p) for p in err["loc"]), "message": err["msg"]}
            for err in exc.errors()
        ]
        raise RequestValidationError("Invalid request body", details) from exc
