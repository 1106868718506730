"""SinkDispatcher — fans pipeline events out to every accepting sink.

All (event, sink) deliveries of a batch run concurrently on a thread pool
and are joined with an all-complete barrier.  Each delivery catches its own
failure and reports it as a ``DeliveryResult``; one failed call never
cancels or hides its siblings.  Nothing is retried.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from concurrent.futures import ThreadPoolExecutor, wait
from typing import TYPE_CHECKING

from pipeline_notifier.models.events import PipelineEvent
from pipeline_notifier.models.results import DeliveryResult

if TYPE_CHECKING:
    from pipeline_notifier.routing.sinks import BaseSink

logger = logging.getLogger(__name__)


class SinkDispatcher:
    """Routes events to all registered sinks that accept them.

    Usage
    -----
    >>> dispatcher = SinkDispatcher(max_workers=8)
    >>> dispatcher.register_sink(datadog_sink)
    >>> dispatcher.register_sink(slack_sink)
    >>> results = dispatcher.dispatch_all(events)
    """

    def __init__(
        self, sinks: Iterable[BaseSink] = (), max_workers: int = 16
    ) -> None:
        self._sinks: list[BaseSink] = []
        self._max_workers = max_workers
        for sink in sinks:
            self.register_sink(sink)

    # ------------------------------------------------------------------
    # Sink management
    # ------------------------------------------------------------------

    def register_sink(self, sink: BaseSink) -> None:
        """Register a sink.  Registering the same instance twice is a no-op."""
        if sink not in self._sinks:
            self._sinks.append(sink)
            logger.debug("Registered sink: %s", sink.sink_name)

    @property
    def registered_sinks(self) -> list[BaseSink]:
        return list(self._sinks)

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def deliver(self, sink: BaseSink, event: PipelineEvent) -> DeliveryResult:
        """Send one event to one sink, converting any failure into a result."""
        try:
            status_code = sink.send(event)
        except Exception as exc:  # noqa: BLE001
            logger.error(
                "Sink %s failed for execution %s: %s",
                sink.sink_name,
                event.execution_id,
                exc,
            )
            return DeliveryResult(
                sink=sink.sink_name,
                execution_id=event.execution_id,
                ok=False,
                error=f"{type(exc).__name__}: {exc}",
            )
        return DeliveryResult(
            sink=sink.sink_name,
            execution_id=event.execution_id,
            ok=True,
            status_code=status_code,
        )

    def dispatch_all(self, events: Sequence[PipelineEvent]) -> list[DeliveryResult]:
        """Deliver every event to every accepting sink concurrently.

        Results come back in submission order: events in input order and,
        per event, sinks in registration order.
        """
        jobs = [
            (sink, event)
            for event in events
            for sink in self._sinks
            if sink.accepts(event)
        ]
        if not jobs:
            return []

        workers = min(self._max_workers, len(jobs))
        with ThreadPoolExecutor(max_workers=workers) as pool:
            futures = [pool.submit(self.deliver, sink, event) for sink, event in jobs]
            wait(futures)

        results = [future.result() for future in futures]
        failed = sum(1 for r in results if not r.ok)
        if failed:
            logger.warning("%d/%d deliveries failed", failed, len(results))
        return results
