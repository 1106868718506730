"""Message mapping — PipelineEvent → Datadog event and Slack attachment.

Every function here is pure: the output depends only on the event passed
in, and nothing is remembered between calls.
"""

from __future__ import annotations

from datetime import datetime, timezone

from pipeline_notifier.core.errors import UnsupportedEventTypeError
from pipeline_notifier.models.events import DetailType, PipelineEvent
from pipeline_notifier.models.payloads import (
    AlertPayload,
    AlertType,
    ChatField,
    ChatMessage,
    Priority,
)

# ---------------------------------------------------------------------------
# Severity
# ---------------------------------------------------------------------------

_STATE_ALERT_TYPES: dict[str, AlertType] = {
    "FAILED": AlertType.ERROR,
    "SUCCEEDED": AlertType.SUCCESS,
}

# Slack attachment colours per alert type
ALERT_COLORS: dict[AlertType, str] = {
    AlertType.ERROR: "#dc3545",
    AlertType.WARNING: "#ffc107",
    AlertType.INFO: "#17a2b8",
    AlertType.SUCCESS: "#28a745",
}


def severity_for_state(state: str) -> AlertType:
    """FAILED → error, SUCCEEDED → success, anything else → info."""
    return _STATE_ALERT_TYPES.get(state, AlertType.INFO)


def color_for_state(state: str) -> str:
    return ALERT_COLORS[severity_for_state(state)]


# ---------------------------------------------------------------------------
# Text
# ---------------------------------------------------------------------------


def describe_event(event: PipelineEvent) -> tuple[str, Priority | None]:
    """Return the human-readable text and Datadog priority for an event.

    Raises
    ------
    UnsupportedEventTypeError
        For any detail-type other than the three CodePipeline state changes.
    """
    detail = event.detail
    prefix = f"Pipeline {detail.pipeline} in {event.region}"

    kind = event.kind
    if kind is DetailType.PIPELINE_STATE_CHANGE:
        return f"{prefix} changed state to {detail.state}", None
    if kind is DetailType.STAGE_STATE_CHANGE:
        return (
            f"{prefix} changed stage {detail.stage} state to {detail.state}",
            Priority.LOW,
        )
    if kind is DetailType.ACTION_STATE_CHANGE:
        return (
            f"{prefix} changed state of action {detail.action} "
            f"in stage {detail.stage} to {detail.state}",
            Priority.LOW,
        )
    raise UnsupportedEventTypeError(event.detail_type)


def _event_timestamp(event: PipelineEvent) -> int | None:
    if not event.time:
        return None
    try:
        happened = datetime.fromisoformat(event.time.replace("Z", "+00:00"))
    except ValueError:
        return None
    if happened.tzinfo is None:
        happened = happened.replace(tzinfo=timezone.utc)
    return int(happened.timestamp())


# ---------------------------------------------------------------------------
# Payload builders
# ---------------------------------------------------------------------------


def event_tags(event: PipelineEvent) -> list[str]:
    return [f"pipeline:{event.pipeline}", f"region:{event.region}"]


def build_alert_payload(event: PipelineEvent) -> AlertPayload:
    """Build the Datadog event for a pipeline notification.

    The execution id is the aggregation key, so every stage and action
    event of one run is grouped together in the Datadog event stream.
    """
    text, priority = describe_event(event)
    return AlertPayload(
        title=f"{event.pipeline} {event.detail_type}",
        text=text,
        priority=priority,
        alert_type=severity_for_state(event.state),
        aggregation_key=event.execution_id,
        tags=event_tags(event),
        date_happened=_event_timestamp(event),
    )


def build_chat_message(event: PipelineEvent) -> ChatMessage:
    """Build the Slack attachment for a pipeline notification."""
    text, _ = describe_event(event)
    return ChatMessage(
        pretext=text,
        title=event.pipeline,
        color=color_for_state(event.state),
        fields=[
            ChatField(title="Region", value=event.region),
            ChatField(title="State", value=event.state),
            ChatField(title="Execution", value=event.execution_id, short=False),
        ],
    )
