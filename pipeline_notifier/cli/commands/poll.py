"""``pipeline-notifier poll`` — run one status poll from the terminal."""

from __future__ import annotations

import json

import typer
from rich.console import Console

from pipeline_notifier.bridge.codepipeline import CodePipelineGateway, boto3_client_factory
from pipeline_notifier.config import NotifierConfig
from pipeline_notifier.logs import configure_logging
from pipeline_notifier.monitor.poller import StatusPoller
from pipeline_notifier.monitor.renderer import StatusRenderer

console = Console()


def poll_cmd(
    region: str = typer.Option(
        None,
        "--region",
        "-r",
        help="Region for the region-listing call (defaults to config).",
    ),
    as_json: bool = typer.Option(
        False,
        "--json",
        help="Print snapshots as JSON instead of a table.",
    ),
) -> None:
    """Show the worst action status of every pipeline in every region."""
    config = NotifierConfig()
    configure_logging("WARNING")

    gateway = CodePipelineGateway(
        home_region=region or config.region,
        client_factory=boto3_client_factory(config.request_timeout_seconds),
    )
    snapshots = StatusPoller(gateway, max_workers=config.max_workers).poll()

    if as_json:
        console.print_json(json.dumps([s.model_dump(mode="json") for s in snapshots]))
        return
    StatusRenderer(console=console).render_snapshots(snapshots)
