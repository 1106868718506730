"""AWS Lambda entry points.

- ``forward_handler``: SQS-triggered event forwarder.
- ``poll_handler``: scheduled status poller.

Configuration is read once per cold start and injected into the
forwarder and poller; the HTTP session and boto3 clients are reused
across warm invocations.
"""

from __future__ import annotations

import functools
import logging
from typing import Any

from pipeline_notifier.bridge.codepipeline import CodePipelineGateway, boto3_client_factory
from pipeline_notifier.config import NotifierConfig
from pipeline_notifier.core.forwarder import EventForwarder
from pipeline_notifier.logs import configure_logging
from pipeline_notifier.monitor.poller import StatusPoller

logger = logging.getLogger(__name__)


@functools.lru_cache(maxsize=1)
def _config() -> NotifierConfig:
    config = NotifierConfig()
    configure_logging(config.log_level)
    return config


@functools.lru_cache(maxsize=1)
def _forwarder() -> EventForwarder:
    return EventForwarder.from_config(_config())


@functools.lru_cache(maxsize=1)
def _poller() -> StatusPoller:
    config = _config()
    gateway = CodePipelineGateway(
        home_region=config.region,
        client_factory=boto3_client_factory(config.request_timeout_seconds),
    )
    return StatusPoller(gateway, max_workers=config.max_workers)


def forward_handler(event: dict[str, Any], context: Any = None) -> dict[str, Any]:
    """Forward an SQS batch to Datadog and Slack.

    Every record is reported as processed, whatever happened to it, so a
    bad record or an unreachable sink never blocks the queue.
    """
    _forwarder().forward(event.get("Records", []))
    return {"batchItemFailures": []}


def poll_handler(event: dict[str, Any] | None = None, context: Any = None) -> None:
    """Log the status of every pipeline in every region."""
    _poller().run()
