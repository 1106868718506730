"""``pipeline-notifier forward BATCH_FILE`` — replay a saved SQS batch.

The file holds an SQS trigger event (``{"Records": [...]}``) or a bare
list of records.  With ``--dry-run`` nothing is sent; the Datadog and
Slack request bodies are printed instead.
"""

from __future__ import annotations

import json
from pathlib import Path

import typer
from rich.console import Console

from pipeline_notifier.config import NotifierConfig
from pipeline_notifier.core.filters import is_chat_notified
from pipeline_notifier.core.forwarder import EventForwarder
from pipeline_notifier.core.mapper import build_alert_payload, build_chat_message
from pipeline_notifier.logs import configure_logging
from pipeline_notifier.monitor.renderer import StatusRenderer

console = Console()


def forward_cmd(
    batch_file: Path = typer.Argument(
        ...,
        exists=True,
        dir_okay=False,
        help="JSON file containing an SQS event or a list of SQS records.",
    ),
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        "-n",
        help="Print the outbound payloads instead of sending them.",
    ),
) -> None:
    """Forward a saved SQS batch to Datadog and Slack."""
    try:
        data = json.loads(batch_file.read_text(encoding="utf-8"))
    except ValueError as exc:
        console.print(f"[bold red]Invalid JSON:[/bold red] {exc}")
        raise typer.Exit(code=1)

    records = data.get("Records", []) if isinstance(data, dict) else data
    config = NotifierConfig()
    configure_logging(config.log_level)
    forwarder = EventForwarder.from_config(config)
    renderer = StatusRenderer(console=console)

    if dry_run:
        events, report = forwarder.select_events(records)
        for event in events:
            chat = build_chat_message(event) if is_chat_notified(event) else None
            renderer.render_payload(build_alert_payload(event), chat)
        renderer.render_report(report)
        return

    report = forwarder.forward(records)
    renderer.render_report(report)
    if report.failed_deliveries:
        raise typer.Exit(code=1)
