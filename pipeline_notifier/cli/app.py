"""Main Typer application — imports and registers all CLI commands.

Entry point: ``pipeline-notifier`` (configured via pyproject.toml scripts).
"""

from __future__ import annotations

import typer

from pipeline_notifier import __version__
from pipeline_notifier.cli.commands.forward import forward_cmd
from pipeline_notifier.cli.commands.poll import poll_cmd

app = typer.Typer(
    name="pipeline-notifier",
    help="Forward CodePipeline events to Datadog and Slack, and poll pipeline status.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=False,
)

app.command(name="forward", help="Replay a saved SQS batch.")(forward_cmd)
app.command(name="poll", help="Poll pipeline status across all regions.")(poll_cmd)


@app.command(name="version", help="Show the installed version.")
def version_cmd() -> None:
    typer.echo(__version__)


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
