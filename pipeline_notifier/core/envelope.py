"""Envelope unwrapping — SQS record → SNS notification → PipelineEvent.

Each SQS record body is an SNS notification serialized as JSON, whose
``Message`` field is itself the JSON-serialized EventBridge event.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from typing import Any

from pydantic import ValidationError

from pipeline_notifier.core.errors import EnvelopeDecodeError
from pipeline_notifier.models.events import PipelineEvent

logger = logging.getLogger(__name__)


def unwrap_record(record: dict[str, Any]) -> PipelineEvent:
    """Decode one SQS record into a PipelineEvent.

    Raises
    ------
    EnvelopeDecodeError
        If either layer is not valid JSON, the notification carries no
        ``Message``, or the event does not match the PipelineEvent shape.
    """
    if not isinstance(record, dict):
        raise EnvelopeDecodeError("", f"record is a {type(record).__name__}, not an object")
    message_id = str(record.get("messageId", ""))

    try:
        notification = json.loads(record["body"])
    except KeyError:
        raise EnvelopeDecodeError(message_id, "record has no body") from None
    except (TypeError, ValueError, RecursionError) as exc:
        raise EnvelopeDecodeError(message_id, f"body is not JSON: {exc}") from exc

    if not isinstance(notification, dict) or "Message" not in notification:
        raise EnvelopeDecodeError(message_id, "notification has no Message field")

    try:
        payload = json.loads(notification["Message"])
    except (TypeError, ValueError, RecursionError) as exc:
        raise EnvelopeDecodeError(message_id, f"Message is not JSON: {exc}") from exc

    try:
        return PipelineEvent.model_validate(payload)
    except ValidationError as exc:
        raise EnvelopeDecodeError(
            message_id, f"not a pipeline event ({exc.error_count()} errors)"
        ) from exc


def unwrap_batch(
    records: Iterable[dict[str, Any]],
) -> tuple[list[PipelineEvent], list[EnvelopeDecodeError]]:
    """Decode every record, collecting faults instead of raising.

    Returns the decoded events in input order and the decode faults.
    """
    events: list[PipelineEvent] = []
    faults: list[EnvelopeDecodeError] = []
    for record in records:
        try:
            events.append(unwrap_record(record))
        except EnvelopeDecodeError as exc:
            fault = exc
        except Exception as exc:  # noqa: BLE001
            message_id = record.get("messageId", "") if isinstance(record, dict) else ""
            fault = EnvelopeDecodeError(str(message_id), f"{type(exc).__name__}: {exc}")
            fault.__cause__ = exc
        else:
            continue
        logger.error(
            "Dropping undecodable record",
            extra={"message_id": fault.message_id, "reason": fault.reason},
        )
        faults.append(fault)
    return events, faults
