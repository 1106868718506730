"""CodePipeline bridge — read-only AWS calls behind a small gateway.

The poller depends on ``CodePipelineGateway`` rather than on boto3
directly, so tests can substitute fake clients through ``client_factory``.

boto3 sessions are not thread-safe but clients are: clients are created
once per (service, region) under a lock and then shared by worker threads.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from typing import Any

import boto3
from botocore.config import Config

from pipeline_notifier.models.status import ExecutionStatus

logger = logging.getLogger(__name__)

ClientFactory = Callable[[str, str], Any]


def boto3_client_factory(timeout: float = 10.0) -> ClientFactory:
    """Build a factory producing boto3 clients with bounded timeouts."""
    session = boto3.session.Session()
    config = Config(
        connect_timeout=timeout,
        read_timeout=timeout,
        retries={"max_attempts": 1, "mode": "standard"},
    )

    def _factory(service: str, region: str) -> Any:
        return session.client(service, region_name=region, config=config)

    return _factory


class CodePipelineGateway:
    """Lists regions and pipelines and reads pipeline state.

    Parameters
    ----------
    home_region:
        Region used for the ``DescribeRegions`` call.
    client_factory:
        ``(service, region) -> client``.  Defaults to boto3.
    """

    def __init__(
        self,
        home_region: str,
        client_factory: ClientFactory | None = None,
    ) -> None:
        self._home_region = home_region
        self._factory = client_factory or boto3_client_factory()
        self._clients: dict[tuple[str, str], Any] = {}
        self._lock = threading.Lock()

    def _client(self, service: str, region: str) -> Any:
        key = (service, region)
        with self._lock:
            if key not in self._clients:
                self._clients[key] = self._factory(service, region)
            return self._clients[key]

    # ------------------------------------------------------------------
    # Listing
    # ------------------------------------------------------------------

    def list_regions(self) -> list[str]:
        """Return every region enabled for the account."""
        response = self._client("ec2", self._home_region).describe_regions()
        return [r["RegionName"] for r in response.get("Regions", [])]

    def list_pipeline_names(self, region: str) -> list[str]:
        """Return every pipeline name in *region*, following ``nextToken``."""
        client = self._client("codepipeline", region)
        names: list[str] = []
        token: str | None = None
        while True:
            kwargs = {"nextToken": token} if token else {}
            page = client.list_pipelines(**kwargs)
            names.extend(p["name"] for p in page.get("pipelines", []))
            token = page.get("nextToken")
            if not token:
                return names

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    def get_action_statuses(self, region: str, pipeline: str) -> set[ExecutionStatus]:
        """Latest execution status of every action across every stage.

        Actions that have never run, and statuses outside the
        Succeeded/InProgress/Failed ordering (e.g. Abandoned), are skipped.
        """
        state = self._client("codepipeline", region).get_pipeline_state(name=pipeline)
        statuses: set[ExecutionStatus] = set()
        for stage in state.get("stageStates", []):
            for action in stage.get("actionStates", []):
                raw = (action.get("latestExecution") or {}).get("status")
                if raw is None:
                    continue
                try:
                    statuses.add(ExecutionStatus(raw))
                except ValueError:
                    logger.debug(
                        "Ignoring status %s of %s/%s", raw, pipeline, action.get("actionName")
                    )
        return statuses
