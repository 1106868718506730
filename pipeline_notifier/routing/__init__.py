"""Outbound routing — dispatches pipeline events to Datadog and Slack.

Sinks are pluggable targets implementing the ``BaseSink`` protocol.  The
SinkDispatcher fans each event out to every sink that accepts it, in
parallel, and reports one ``DeliveryResult`` per attempted delivery.
"""
