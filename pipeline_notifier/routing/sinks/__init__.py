"""Sink protocol for pipeline event routing.

All sinks implement the ``BaseSink`` protocol: a ``sink_name`` property,
an ``accepts(event)`` predicate and a ``send(event)`` method.  The
dispatcher calls ``send`` on every sink that accepts a given event.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from pipeline_notifier.models.events import PipelineEvent


@runtime_checkable
class BaseSink(Protocol):
    """Protocol that every outbound sink must implement.

    Attributes
    ----------
    sink_name : str
        A unique human-readable identifier (e.g. ``"datadog"``, ``"slack"``).
    """

    @property
    def sink_name(self) -> str:
        """Return the unique name of this sink."""
        ...

    def accepts(self, event: PipelineEvent) -> bool:
        """Return ``True`` if this sink should receive *event*."""
        ...

    def send(self, event: PipelineEvent) -> int:
        """Deliver the event and return the HTTP status code.

        Implementations raise on transport or HTTP errors; the dispatcher
        catches and records them so sibling deliveries are unaffected.
        """
        ...
