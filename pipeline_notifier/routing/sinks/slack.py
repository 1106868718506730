"""Slack sink — posts an attachment to an incoming webhook."""

from __future__ import annotations

import logging

import requests

from pipeline_notifier.core.filters import is_chat_notified
from pipeline_notifier.core.mapper import build_chat_message
from pipeline_notifier.models.events import PipelineEvent

logger = logging.getLogger(__name__)


class SlackSink:
    """Sends pipeline-level state changes to a Slack channel.

    Stage and action changes are too noisy for chat and are not accepted.
    """

    def __init__(
        self,
        webhook_url: str,
        session: requests.Session,
        timeout: float = 10.0,
    ) -> None:
        self._webhook_url = webhook_url
        self._session = session
        self._timeout = timeout

    @property
    def sink_name(self) -> str:
        return "slack"

    def accepts(self, event: PipelineEvent) -> bool:
        return is_chat_notified(event)

    def send(self, event: PipelineEvent) -> int:
        message = build_chat_message(event)
        response = self._session.post(
            self._webhook_url,
            json=message.to_webhook_body(),
            timeout=self._timeout,
        )
        response.raise_for_status()
        logger.debug("Slack notification sent for %s", event.pipeline)
        return response.status_code
