"""pipeline-notifier data models — all Pydantic v2, all frozen (immutable)."""

from pipeline_notifier.models.events import (
    ActionType,
    DetailType,
    PipelineEvent,
    PipelineEventDetail,
)
from pipeline_notifier.models.payloads import (
    AlertPayload,
    AlertType,
    ChatField,
    ChatMessage,
    Priority,
)
from pipeline_notifier.models.results import BatchReport, DeliveryResult
from pipeline_notifier.models.status import (
    ExecutionStatus,
    PipelineStatusSnapshot,
    worst_status,
)

__all__ = [
    # events
    "ActionType",
    "DetailType",
    "PipelineEvent",
    "PipelineEventDetail",
    # payloads
    "AlertPayload",
    "AlertType",
    "ChatField",
    "ChatMessage",
    "Priority",
    # results
    "BatchReport",
    "DeliveryResult",
    # status
    "ExecutionStatus",
    "PipelineStatusSnapshot",
    "worst_status",
]
