"""Rich terminal rendering for poll results and dry-run payloads.

Color scheme
------------
- green : Succeeded
- yellow: InProgress
- red   : Failed
"""

from __future__ import annotations

import json
from collections.abc import Sequence

from rich.console import Console
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table

from pipeline_notifier.models.payloads import AlertPayload, ChatMessage
from pipeline_notifier.models.results import BatchReport
from pipeline_notifier.models.status import ExecutionStatus, PipelineStatusSnapshot

_STATUS_STYLES: dict[ExecutionStatus, str] = {
    ExecutionStatus.SUCCEEDED: "green",
    ExecutionStatus.IN_PROGRESS: "yellow",
    ExecutionStatus.FAILED: "bold red",
}


class StatusRenderer:
    """Renders poller and forwarder output for the CLI.

    Parameters
    ----------
    console:
        Rich Console instance.  A new one is created if not provided.
    """

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def snapshot_table(self, snapshots: Sequence[PipelineStatusSnapshot]) -> Table:
        table = Table(title="Pipeline Status")
        table.add_column("Region", style="cyan")
        table.add_column("Pipeline")
        table.add_column("Status", justify="center")

        for s in sorted(snapshots, key=lambda s: (s.region, s.pipeline)):
            style = _STATUS_STYLES[s.status]
            table.add_row(s.region, s.pipeline, f"[{style}]{s.status.value}[/{style}]")
        return table

    def render_snapshots(self, snapshots: Sequence[PipelineStatusSnapshot]) -> None:
        if not snapshots:
            self.console.print("[dim]No pipelines found.[/dim]")
            return
        self.console.print(self.snapshot_table(snapshots))

    def render_payload(
        self, alert: AlertPayload, chat: ChatMessage | None = None
    ) -> None:
        """Print the request bodies a dry run would have sent."""
        body = json.dumps(alert.to_request_body(), indent=2)
        self.console.print(
            Panel(Syntax(body, "json"), title=f"Datadog: {alert.title}", border_style="blue")
        )
        if chat is not None:
            body = json.dumps(chat.to_webhook_body(), indent=2)
            self.console.print(Panel(Syntax(body, "json"), title="Slack", border_style=chat.color))

    def render_report(self, report: BatchReport) -> None:
        table = Table(title="Batch Report", show_header=False)
        table.add_row("Records received", str(report.received))
        table.add_row("Filtered (CloudTrail)", str(report.filtered))
        table.add_row("Decode failures", str(report.decode_failures))
        table.add_row("Unsupported types", str(report.unsupported))
        table.add_row("Deliveries", str(len(report.deliveries)))
        table.add_row("Failed deliveries", str(len(report.failed_deliveries)))
        self.console.print(table)

        for d in report.failed_deliveries:
            self.console.print(f"[red]{d.sink}[/red] {d.execution_id}: {d.error}")
