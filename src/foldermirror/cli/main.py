"""
FolderMirror CLI Main Entry Point.

Provides the command-line interface for one-off and periodic
synchronization runs.
"""

from __future__ import annotations

import json
import signal
import sys
from datetime import timedelta
from pathlib import Path
from typing import Any

import click
import humanize
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from foldermirror import __version__
from foldermirror.core.config import FolderMirrorConfig, LoggingConfig, SyncConfig, load_config
from foldermirror.core.logging import setup_logging
from foldermirror.core.models import SyncResult
from foldermirror.sync.coordinator import SyncCoordinator
from foldermirror.sync.scheduler import PeriodicSyncRunner
from foldermirror.sync.status import load_status, save_status

console = Console()


@click.group()
@click.version_option(version=__version__, prog_name="FolderMirror")
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path to configuration file",
)
@click.option("--json", "json_output", is_flag=True, help="Output in JSON format")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output")
@click.pass_context
def cli(
    ctx: click.Context,
    config: Path | None,
    json_output: bool,
    quiet: bool,
) -> None:
    """
    FolderMirror - One-way folder synchronization tool.

    Keeps a replica folder identical to a source folder, either once or
    on a fixed interval.
    """
    ctx.ensure_object(dict)

    if config:
        ctx.obj["config"] = FolderMirrorConfig.load(config)
    else:
        ctx.obj["config"] = load_config()

    ctx.obj["json_output"] = json_output
    ctx.obj["quiet"] = quiet


def _resolve_sync_config(
    config: FolderMirrorConfig,
    source: Path | None,
    replica: Path | None,
    interval: int | None,
    verify: bool | None,
) -> SyncConfig:
    overrides: dict[str, Any] = {}
    if source is not None:
        overrides["source"] = source
    if replica is not None:
        overrides["replica"] = replica
    if interval is not None:
        overrides["interval_seconds"] = interval
    if verify is not None:
        overrides["comparison_mode"] = "content" if verify else "metadata"
    return SyncConfig.model_validate({**config.sync.model_dump(), **overrides})


def _resolve_logging_config(
    config: FolderMirrorConfig,
    log_file: Path | None,
    console_enabled: bool,
) -> LoggingConfig:
    data = config.logging.model_dump()
    if log_file is not None:
        data["log_file"] = log_file
    if not console_enabled:
        data["console_enabled"] = False
    return LoggingConfig.model_validate(data)


def print_result(result: SyncResult, json_output: bool, quiet: bool) -> None:
    """Report one pass to the terminal."""
    if json_output:
        click.echo(json.dumps(result.to_dict(), indent=2))
        return

    if quiet:
        click.echo(result.summary_message())
        return

    table = Table(title="Synchronization Summary")
    table.add_column("Counter", style="cyan")
    table.add_column("Value", justify="right")
    table.add_row("Files copied", str(result.files_copied))
    table.add_row("Files updated", str(result.files_updated))
    table.add_row("Files deleted", str(result.files_deleted))
    table.add_row("Directories created", str(result.directories_created))
    table.add_row("Directories deleted", str(result.directories_deleted))
    error_style = "red" if result.has_errors else "green"
    table.add_row("Errors", f"[{error_style}]{result.errors_encountered}[/{error_style}]")
    console.print(table)

    duration = humanize.naturaldelta(timedelta(seconds=result.duration_seconds or 0))
    console.print(
        Panel(
            f"""[cyan]Source:[/cyan] {result.source}
[cyan]Replica:[/cyan] {result.replica}
[cyan]Mode:[/cyan] {result.mode.value}
[cyan]Duration:[/cyan] {duration}
{result.summary_message()}""",
            title="Pass Complete",
        )
    )


@cli.command("sync")
@click.option("--source", "-s", type=click.Path(file_okay=False, path_type=Path), help="Source directory")
@click.option("--replica", "-r", type=click.Path(file_okay=False, path_type=Path), help="Replica directory")
@click.option(
    "--interval",
    "-i",
    type=click.IntRange(min=0),
    help="Seconds between passes (0 runs once)",
)
@click.option(
    "--verify/--no-verify",
    default=None,
    help="Compare file contents when size and timestamp match",
)
@click.option("--log", "log_file", type=click.Path(dir_okay=False, path_type=Path), help="Log file path")
@click.pass_context
def sync_command(
    ctx: click.Context,
    source: Path | None,
    replica: Path | None,
    interval: int | None,
    verify: bool | None,
    log_file: Path | None,
) -> None:
    """Synchronize a replica folder with a source folder."""
    config: FolderMirrorConfig = ctx.obj["config"]
    json_output = ctx.obj.get("json_output", False)
    quiet = ctx.obj.get("quiet", False)

    sync_config = _resolve_sync_config(config, source, replica, interval, verify)
    if sync_config.source is None or sync_config.replica is None:
        raise click.UsageError("Both --source and --replica are required (or set them in the config file)")

    setup_logging(_resolve_logging_config(config, log_file, not (json_output or quiet)))

    def report(result: SyncResult) -> None:
        print_result(result, json_output, quiet)
        if sync_config.status_file:
            save_status(result, sync_config.status_file)

    coordinator = SyncCoordinator.from_config(sync_config)

    if sync_config.interval_seconds == 0:
        result = coordinator.run(sync_config.source, sync_config.replica, sync_config.mode)
        report(result)
        if result.has_errors:
            sys.exit(1)
        return

    runner = PeriodicSyncRunner(
        coordinator,
        sync_config.source,
        sync_config.replica,
        mode=sync_config.mode,
        interval_seconds=sync_config.interval_seconds,
        on_result=report,
    )

    def request_stop(signum: int, frame: Any) -> None:
        if not json_output:
            console.print("\n[yellow]Shutdown requested, finishing current pass...[/yellow]")
        runner.stop()

    previous_handler = signal.signal(signal.SIGINT, request_stop)
    try:
        results = runner.run_forever()
    finally:
        signal.signal(signal.SIGINT, previous_handler)

    if not json_output:
        console.print("[yellow]Periodic sync stopped by user[/yellow]")
    if results and results[-1].has_errors:
        sys.exit(1)


@cli.command("status")
@click.option(
    "--status-file",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Status file to read (defaults to the configured one)",
)
@click.pass_context
def status_command(ctx: click.Context, status_file: Path | None) -> None:
    """Show the result of the last recorded pass."""
    config: FolderMirrorConfig = ctx.obj["config"]
    json_output = ctx.obj.get("json_output", False)

    path = status_file or config.sync.status_file
    if path is None:
        console.print("[red]No status file configured.[/red]")
        sys.exit(1)

    status = load_status(path)
    if status is None:
        console.print(f"[yellow]No status recorded at {path}[/yellow]")
        return

    if json_output:
        click.echo(json.dumps(status, indent=2))
        return

    summary = status.get("summary", {})
    lines = [
        f"[cyan]Source:[/cyan] {status.get('source')}",
        f"[cyan]Replica:[/cyan] {status.get('replica')}",
        f"[cyan]Mode:[/cyan] {status.get('mode')}",
        f"[cyan]Started:[/cyan] {status.get('started_at')}",
        f"[cyan]Ended:[/cyan] {status.get('ended_at')}",
    ]
    lines.extend(
        f"[cyan]{key.replace('_', ' ').capitalize()}:[/cyan] {value}"
        for key, value in summary.items()
    )
    console.print(Panel("\n".join(lines), title="Last Synchronization"))


@cli.command("config-show")
@click.pass_context
def config_show(ctx: click.Context) -> None:
    """Print the effective configuration."""
    config: FolderMirrorConfig = ctx.obj["config"]
    click.echo(json.dumps(config.model_dump(mode="json"), indent=2))


def main() -> None:
    """Main entry point."""
    try:
        cli(obj={})
    except KeyboardInterrupt:
        console.print("\n[yellow]Operation cancelled[/yellow]")
        sys.exit(130)
    except Exception as e:
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)


if __name__ == "__main__":
    main()
