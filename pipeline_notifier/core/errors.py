"""Exceptions raised by the forwarding pipeline."""

from __future__ import annotations


class NotifierError(Exception):
    """Base class for pipeline-notifier faults."""


class EnvelopeDecodeError(NotifierError):
    """An SQS record could not be decoded into a PipelineEvent."""

    def __init__(self, message_id: str, reason: str) -> None:
        super().__init__(f"Record {message_id or '<unknown>'}: {reason}")
        self.message_id = message_id
        self.reason = reason


class UnsupportedEventTypeError(NotifierError):
    """The event's detail-type has no message mapping."""

    def __init__(self, detail_type: str) -> None:
        super().__init__(f"Unsupported event detail type: {detail_type}")
        self.detail_type = detail_type
