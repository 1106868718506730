"""Pipeline status models used by the scheduled poller."""

from __future__ import annotations

from collections.abc import Iterable
from enum import Enum

from pydantic import BaseModel, ConfigDict


class ExecutionStatus(str, Enum):
    """Action execution status as reported by ``GetPipelineState``.

    Only the three statuses that take part in the severity ordering are
    modelled; anything else the service reports is ignored by the poller.
    """

    SUCCEEDED = "Succeeded"
    IN_PROGRESS = "InProgress"
    FAILED = "Failed"

    @property
    def severity(self) -> int:
        return _SEVERITY[self]


_SEVERITY: dict[ExecutionStatus, int] = {
    ExecutionStatus.SUCCEEDED: 0,
    ExecutionStatus.IN_PROGRESS: 1,
    ExecutionStatus.FAILED: 2,
}


def worst_status(statuses: Iterable[ExecutionStatus]) -> ExecutionStatus:
    """Reduce a set of action statuses to the most severe one.

    Succeeded < InProgress < Failed.  An empty input is Succeeded.
    """
    return max(statuses, key=lambda s: s.severity, default=ExecutionStatus.SUCCEEDED)


class PipelineStatusSnapshot(BaseModel):
    """Point-in-time status of one pipeline.  Computed per poll, never stored."""

    model_config = ConfigDict(frozen=True)

    region: str
    pipeline: str
    status: ExecutionStatus
