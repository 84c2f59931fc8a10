"""CLI interface for devsweep."""

import logging
import signal
import threading
import time
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Optional

import typer
from rich.logging import RichHandler

from devsweep import __version__
from devsweep.catalog import get_all_specs
from devsweep.collectors import build_collectors
from devsweep.config import Policy, Settings, load_settings
from devsweep.detector import StackDetector
from devsweep.display import (
    confirm_cleanup,
    console,
    err_console,
    show_catalog,
    show_clean_results,
    show_detection,
    show_estimation,
    show_failures,
    show_header,
    show_safety_legend,
    show_scanning_progress,
    show_target_details,
)
from devsweep.errors import CleanupCancelled, ConfigError
from devsweep.models import CleanLevel, CleanupReport, Domain
from devsweep.orchestrator import CleanupOrchestrator

logger = logging.getLogger(__name__)

# Create Typer app
app = typer.Typer(
    name="devsweep",
    help="Reclaim disk space taken by developer caches and build artifacts",
    add_completion=False,
)

EXIT_CONFIG_ERROR = 2
EXIT_CANCELLED = 130


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"devsweep version {__version__}")
        raise typer.Exit()


def setup_logging(verbose: bool) -> None:
    """Route log records through rich, on stderr."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


@app.callback()
def main(
    ctx: typer.Context,
    version: bool = typer.Option(
        None,
        "--version",
        "-V",
        help="Show version and exit.",
        callback=version_callback,
        is_eager=True,
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show detailed output."),
) -> None:
    """devsweep - clean development caches safely."""
    setup_logging(verbose)
    ctx.obj = {"verbose": verbose}


def _is_verbose(ctx: typer.Context) -> bool:
    return bool(ctx.obj and ctx.obj.get("verbose"))


@contextmanager
def cancel_on_interrupt() -> Iterator[threading.Event]:
    """Turn the first Ctrl+C into a cancellation request.

    A second Ctrl+C interrupts immediately.
    """
    cancel = threading.Event()
    if threading.current_thread() is not threading.main_thread():
        yield cancel
        return

    def handler(signum, frame):
        if cancel.is_set():
            raise KeyboardInterrupt
        logger.warning("Interrupted, stopping after the current item...")
        cancel.set()

    original = signal.signal(signal.SIGINT, handler)
    try:
        yield cancel
    finally:
        signal.signal(signal.SIGINT, original)


def _load_settings() -> Settings:
    try:
        return load_settings()
    except ConfigError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(EXIT_CONFIG_ERROR)


def _build_policy(
    level: str,
    dry_run: bool,
    interactive: bool,
    domains: Optional[list[str]],
) -> Policy:
    try:
        return Policy.from_options(
            level, dry_run=dry_run, interactive=interactive, domains=domains
        )
    except ConfigError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(EXIT_CONFIG_ERROR)


def _scan(
    orchestrator: CleanupOrchestrator,
    policy: Policy,
    cancel: threading.Event,
) -> CleanupReport:
    with show_scanning_progress() as progress:
        progress.add_task("Scanning for cleanable items...", total=None)
        return orchestrator.scan(policy, cancel)


def _cancelled(e: CleanupCancelled, verbose: bool) -> typer.Exit:
    console.print("\n[yellow]Cancelled[/yellow]")
    if e.report.results:
        show_clean_results(e.report, verbose)
    else:
        show_failures(e.report)
    return typer.Exit(EXIT_CANCELLED)


def _show_plan(report: CleanupReport, verbose: bool) -> None:
    show_estimation(report)
    show_failures(report)
    if verbose:
        show_target_details(report)
    console.print()
    show_safety_legend()


@app.command()
def clean(
    ctx: typer.Context,
    dry_run: bool = typer.Option(
        False, "--dry-run", help="Show what would be cleaned without deleting"
    ),
    yes: bool = typer.Option(False, "-y", "--yes", help="Skip confirmation prompts"),
    level: str = typer.Option(
        "standard", "--level", "-l", help="Clean level (conservative|standard|aggressive)"
    ),
    domain: Optional[list[str]] = typer.Option(
        None,
        "--domain",
        "-d",
        help="Domains to clean, comma separated or repeated (default: all)",
    ),
) -> None:
    """Scan and clean development caches and build artifacts."""
    verbose = _is_verbose(ctx)
    policy = _build_policy(level, dry_run, not yes, domain)
    settings = _load_settings()

    show_header()
    if dry_run:
        console.print("[yellow]DRY RUN - No files will be deleted[/yellow]\n")

    progress = show_scanning_progress()
    progress.add_task("Scanning for cleanable items...", total=None)
    plan_shown = False

    def confirm(scanned: CleanupReport) -> bool:
        nonlocal plan_shown
        progress.stop()
        _show_plan(scanned, verbose)
        plan_shown = True
        if not confirm_cleanup(scanned.total_targets, scanned.total_bytes):
            return False
        console.print("[bold]Cleaning...[/bold]")
        return True

    orchestrator = CleanupOrchestrator(build_collectors(settings), confirm=confirm)

    with cancel_on_interrupt() as cancel:
        try:
            with progress:
                report = orchestrator.run(policy, cancel)
        except CleanupCancelled as e:
            raise _cancelled(e, verbose)

    if report.total_targets == 0:
        show_estimation(report)
        show_failures(report)
        raise typer.Exit(0)

    if report.aborted:
        console.print("[yellow]Cancelled[/yellow]")
        raise typer.Exit(0)

    if not plan_shown:
        _show_plan(report, verbose)
    show_clean_results(report, verbose)


@app.command()
def report(
    ctx: typer.Context,
    level: str = typer.Option(
        "standard", "--level", "-l", help="Clean level (conservative|standard|aggressive)"
    ),
    domain: Optional[list[str]] = typer.Option(
        None,
        "--domain",
        "-d",
        help="Domains to report on, comma separated or repeated (default: all)",
    ),
) -> None:
    """Show what could be cleaned without deleting anything."""
    verbose = _is_verbose(ctx)
    policy = _build_policy(level, True, False, domain)
    settings = _load_settings()

    show_header()
    orchestrator = CleanupOrchestrator(build_collectors(settings))

    started = time.monotonic()
    with cancel_on_interrupt() as cancel:
        try:
            scan_report = _scan(orchestrator, policy, cancel)
        except CleanupCancelled as e:
            raise _cancelled(e, verbose)
    elapsed = time.monotonic() - started

    show_estimation(scan_report)
    if verbose:
        show_target_details(scan_report)
    show_failures(scan_report)
    console.print(f"\n[dim]Scan completed in {elapsed:.1f}s[/dim]")
    if scan_report.total_targets:
        console.print("[dim]Run [bold]devsweep clean[/bold] to clean these items[/dim]")


@app.command()
def smart(
    ctx: typer.Context,
    dry_run: bool = typer.Option(
        False, "--dry-run", help="Show what would be cleaned without deleting"
    ),
) -> None:
    """Conservative automatic cleanup of the domains whose tools are installed."""
    verbose = _is_verbose(ctx)
    settings = _load_settings()

    show_header()
    console.print("[blue]Running smart cleanup with conservative settings...[/blue]\n")

    detection = StackDetector().detect_all()
    domains = [d for d in Domain if d == Domain.SYSTEM or detection.has(d)]
    if verbose:
        show_detection(detection)

    policy = Policy(
        clean_level=CleanLevel.CONSERVATIVE,
        dry_run=dry_run,
        interactive=False,
        domains=domains,
    )
    orchestrator = CleanupOrchestrator(build_collectors(settings))

    with cancel_on_interrupt() as cancel:
        try:
            with show_scanning_progress() as progress:
                progress.add_task("Cleaning...", total=None)
                result = orchestrator.run(policy, cancel)
        except CleanupCancelled as e:
            raise _cancelled(e, verbose)

    show_estimation(result)
    if result.total_targets:
        show_clean_results(result, verbose)
    else:
        show_failures(result)


@app.command()
def detect() -> None:
    """Detect installed development tools."""
    show_detection(StackDetector().detect_all())


@app.command(name="list")
def list_collectors() -> None:
    """List all collectors in the catalog."""
    show_catalog(get_all_specs())
    console.print()
    show_safety_legend()
    console.print("[dim]Run [bold]devsweep report[/bold] to see what can be cleaned[/dim]")


if __name__ == "__main__":
    app()
