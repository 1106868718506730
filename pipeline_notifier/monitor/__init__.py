"""Scheduled pipeline status polling and its terminal rendering."""

from pipeline_notifier.monitor.poller import StatusPoller

__all__ = ["StatusPoller"]
