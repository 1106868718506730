"""Datadog sink — posts pipeline events to the Events API.

See: https://docs.datadoghq.com/api/latest/events/#post-an-event
The API key travels as the ``api_key`` query parameter.
"""

from __future__ import annotations

import logging

import requests

from pipeline_notifier.config import DATADOG_API_BASE
from pipeline_notifier.core.mapper import build_alert_payload
from pipeline_notifier.models.events import PipelineEvent

logger = logging.getLogger(__name__)


class DatadogSink:
    """Creates one Datadog event per pipeline notification.

    Parameters
    ----------
    api_key:
        Datadog API key.
    session:
        HTTP session used for the request.  Shared with other sinks.
    base_url:
        API root, e.g. ``https://api.datadoghq.eu/api/v1`` for the EU site.
    timeout:
        Per-request timeout in seconds.
    """

    def __init__(
        self,
        api_key: str,
        session: requests.Session,
        base_url: str = DATADOG_API_BASE,
        timeout: float = 10.0,
    ) -> None:
        self._api_key = api_key
        self._session = session
        self._url = f"{base_url.rstrip('/')}/events"
        self._timeout = timeout

    @property
    def sink_name(self) -> str:
        return "datadog"

    def accepts(self, event: PipelineEvent) -> bool:
        return True

    def send(self, event: PipelineEvent) -> int:
        payload = build_alert_payload(event)
        response = self._session.post(
            self._url,
            params={"api_key": self._api_key},
            json=payload.to_request_body(),
            timeout=self._timeout,
        )
        response.raise_for_status()
        logger.debug("Datadog event created for execution %s", event.execution_id)
        return response.status_code
