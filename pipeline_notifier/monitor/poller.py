"""StatusPoller — scheduled fan-out over every region and pipeline.

Each run is stateless: list regions, list pipelines per region in
parallel, read each pipeline's state in parallel, reduce to the worst
action status and write the whole result as one JSON log line.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor

from pipeline_notifier.bridge.codepipeline import CodePipelineGateway
from pipeline_notifier.models.status import PipelineStatusSnapshot, worst_status

logger = logging.getLogger(__name__)


class StatusPoller:
    """Computes a fresh ``PipelineStatusSnapshot`` list on every call.

    Listing faults degrade: a region that cannot be listed contributes no
    pipelines, and a pipeline whose state cannot be read is left out.
    """

    def __init__(self, gateway: CodePipelineGateway, max_workers: int = 16) -> None:
        self._gateway = gateway
        self._max_workers = max_workers

    def _regions(self) -> list[str]:
        try:
            return self._gateway.list_regions()
        except Exception as exc:  # noqa: BLE001
            logger.error("Could not list regions: %s", exc)
            return []

    def _pipelines_in(self, region: str) -> list[tuple[str, str]]:
        try:
            names = self._gateway.list_pipeline_names(region)
        except Exception as exc:  # noqa: BLE001
            logger.error("Could not list pipelines in %s: %s", region, exc)
            return []
        return [(region, name) for name in names]

    def _snapshot(self, region: str, pipeline: str) -> PipelineStatusSnapshot | None:
        try:
            statuses = self._gateway.get_action_statuses(region, pipeline)
        except Exception as exc:  # noqa: BLE001
            logger.error("Could not read state of %s in %s: %s", pipeline, region, exc)
            return None
        return PipelineStatusSnapshot(
            region=region, pipeline=pipeline, status=worst_status(statuses)
        )

    def poll(self) -> list[PipelineStatusSnapshot]:
        """Return one snapshot per readable pipeline, grouped by region."""
        regions = self._regions()
        if not regions:
            return []

        with ThreadPoolExecutor(max_workers=self._max_workers) as pool:
            per_region = list(pool.map(self._pipelines_in, regions))
            pairs = [pair for listing in per_region for pair in listing]
            snapshots = list(pool.map(lambda pair: self._snapshot(*pair), pairs))

        return [s for s in snapshots if s is not None]

    def run(self) -> list[PipelineStatusSnapshot]:
        """Poll and emit the result as a single structured log line."""
        snapshots = self.poll()
        logger.info(
            "Pipeline status",
            extra={"pipelines": [s.model_dump(mode="json") for s in snapshots]},
        )
        return snapshots
