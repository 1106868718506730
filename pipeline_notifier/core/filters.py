"""Event filtering ahead of the mapper."""

from __future__ import annotations

from pipeline_notifier.models.events import DetailType, PipelineEvent


def is_forwardable(event: PipelineEvent) -> bool:
    """False only for CloudTrail API-call audit events.

    Unrecognised detail-types pass; the mapper rejects them later.
    """
    return event.detail_type != DetailType.CLOUDTRAIL_API_CALL.value


def is_chat_notified(event: PipelineEvent) -> bool:
    """Only pipeline-level state changes go to the chat channel."""
    return event.detail_type == DetailType.PIPELINE_STATE_CHANGE.value
