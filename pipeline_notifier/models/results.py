"""Per-branch outcome records collected from fan-out work.

Fan-out branches never raise across the join; they return one of these
records instead and the caller decides what to log.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class DeliveryResult(BaseModel):
    """Outcome of delivering one event to one sink."""

    model_config = ConfigDict(frozen=True)

    sink: str
    execution_id: str
    ok: bool
    status_code: int | None = None
    error: str | None = None


class BatchReport(BaseModel):
    """Summary of one forwarder invocation."""

    model_config = ConfigDict(frozen=True)

    received: int = 0
    filtered: int = 0
    decode_failures: int = 0
    unsupported: int = 0
    deliveries: list[DeliveryResult] = []

    @property
    def failed_deliveries(self) -> list[DeliveryResult]:
        return [d for d in self.deliveries if not d.ok]
