"""Outbound payload models — Datadog events and Slack attachments."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict


class AlertType(str, Enum):
    """Datadog ``alert_type`` values."""

    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    SUCCESS = "success"


class Priority(str, Enum):
    """Datadog event priority.  Omitting it means ``normal``."""

    NORMAL = "normal"
    LOW = "low"


class AlertPayload(BaseModel):
    """Body of a Datadog ``POST /events`` request."""

    model_config = ConfigDict(frozen=True)

    title: str
    text: str
    priority: Priority | None = None
    alert_type: AlertType = AlertType.INFO
    aggregation_key: str | None = None
    tags: list[str] = []
    date_happened: int | None = None

    def to_request_body(self) -> dict[str, Any]:
        """JSON body with unset optional fields left out."""
        return self.model_dump(mode="json", exclude_none=True)


class ChatField(BaseModel):
    """A labelled value rendered inside a Slack attachment."""

    model_config = ConfigDict(frozen=True)

    title: str
    value: str
    short: bool = True


class ChatMessage(BaseModel):
    """A single Slack attachment describing one pipeline event."""

    model_config = ConfigDict(frozen=True)

    pretext: str
    title: str
    color: str
    fields: list[ChatField] = []

    def to_webhook_body(self) -> dict[str, Any]:
        """Wrap the attachment in the incoming-webhook envelope."""
        return {"text": "", "attachments": [self.model_dump(mode="json")]}
