"""EventForwarder — the SQS-triggered forwarding flow.

unwrap → filter → map → dispatch.  Faults are caught at the smallest scope
(per record, per sink call), logged, and counted in the returned
``BatchReport``; none of them fail the invocation.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

import requests

from pipeline_notifier.config import NotifierConfig
from pipeline_notifier.core.envelope import unwrap_batch
from pipeline_notifier.core.errors import UnsupportedEventTypeError
from pipeline_notifier.core.filters import is_forwardable
from pipeline_notifier.core.mapper import describe_event, severity_for_state
from pipeline_notifier.models.events import PipelineEvent
from pipeline_notifier.models.results import BatchReport
from pipeline_notifier.routing.dispatcher import SinkDispatcher
from pipeline_notifier.routing.sinks.datadog import DatadogSink
from pipeline_notifier.routing.sinks.slack import SlackSink

logger = logging.getLogger(__name__)


class EventForwarder:
    """Forwards a batch of SQS records to every configured sink."""

    def __init__(self, dispatcher: SinkDispatcher) -> None:
        self._dispatcher = dispatcher

    @classmethod
    def from_config(
        cls, config: NotifierConfig, session: requests.Session | None = None
    ) -> EventForwarder:
        """Wire the Datadog and Slack sinks from configuration.

        A sink whose credential is empty is left out with a warning.
        """
        session = session or requests.Session()
        dispatcher = SinkDispatcher(max_workers=config.max_workers)

        if config.monitoring_enabled:
            dispatcher.register_sink(
                DatadogSink(
                    api_key=config.monitoring_api_key,
                    session=session,
                    base_url=config.monitoring_base_url,
                    timeout=config.request_timeout_seconds,
                )
            )
        else:
            logger.warning("No monitoring API key configured; Datadog sink disabled")

        if config.chat_enabled:
            dispatcher.register_sink(
                SlackSink(
                    webhook_url=config.chat_webhook_url,
                    session=session,
                    timeout=config.request_timeout_seconds,
                )
            )
        else:
            logger.warning("No chat webhook configured; Slack sink disabled")

        return cls(dispatcher)

    @property
    def dispatcher(self) -> SinkDispatcher:
        return self._dispatcher

    def select_events(
        self, records: Iterable[dict[str, Any]]
    ) -> tuple[list[PipelineEvent], BatchReport]:
        """Decode, filter and validate a batch without sending anything.

        Returns the mappable events and a report with the skip counts.
        """
        records = list(records)
        decoded, faults = unwrap_batch(records)

        forwardable = [e for e in decoded if is_forwardable(e)]
        filtered = len(decoded) - len(forwardable)

        mappable: list[PipelineEvent] = []
        unsupported = 0
        for event in forwardable:
            try:
                describe_event(event)
            except UnsupportedEventTypeError as exc:
                logger.error(str(exc), extra={"execution_id": event.execution_id})
                unsupported += 1
                continue
            logger.info(
                "Pipeline event received",
                extra={
                    "event": event.model_dump(mode="json", by_alias=True),
                    "alert_type": severity_for_state(event.state).value,
                },
            )
            mappable.append(event)

        report = BatchReport(
            received=len(records),
            filtered=filtered,
            decode_failures=len(faults),
            unsupported=unsupported,
        )
        return mappable, report

    def forward(self, records: Iterable[dict[str, Any]]) -> BatchReport:
        """Forward every record of an SQS batch."""
        events, report = self.select_events(records)
        deliveries = self._dispatcher.dispatch_all(events)
        report = report.model_copy(update={"deliveries": deliveries})

        logger.info(
            "Batch forwarded",
            extra={
                "received": report.received,
                "forwarded": len(events),
                "filtered": report.filtered,
                "decode_failures": report.decode_failures,
                "unsupported": report.unsupported,
                "failed_deliveries": len(report.failed_deliveries),
            },
        )
        return report
