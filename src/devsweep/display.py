"""Rich terminal display for devsweep."""

from rich.console import Console
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn, TimeElapsedColumn
from rich.table import Table

from devsweep.detector import DetectionResult
from devsweep.models import CleanTarget, CleanupReport, CollectorSpec, SafetyLevel, format_size

console = Console()
err_console = Console(stderr=True)


def safety_icon(safety: SafetyLevel) -> str:
    """Get icon for safety level."""
    icons = {
        SafetyLevel.SAFE: "[green]✓[/green]",
        SafetyLevel.MODERATE: "[yellow]![/yellow]",
        SafetyLevel.DANGEROUS: "[red]✗[/red]",
    }
    return icons.get(safety, "?")


def safety_label(safety: SafetyLevel) -> str:
    """Get styled label for safety level."""
    labels = {
        SafetyLevel.SAFE: "[green]Safe[/green]",
        SafetyLevel.MODERATE: "[yellow]Moderate[/yellow]",
        SafetyLevel.DANGEROUS: "[red]Dangerous[/red]",
    }
    return labels.get(safety, "Unknown")


def show_header() -> None:
    console.print(
        Panel(
            "[bold]devsweep[/bold] - developer cache cleanup",
            border_style="blue",
        )
    )


def show_safety_legend() -> None:
    """Explain the safety icons."""
    meanings = {
        SafetyLevel.SAFE: "caches and logs, rebuilt automatically",
        SafetyLevel.MODERATE: "dependencies and builds, may need reinstall",
        SafetyLevel.DANGEROUS: "backups and data, may be unrecoverable",
    }
    console.print("[bold]Safety Levels:[/bold]")
    for level, meaning in meanings.items():
        console.print(f"  {safety_icon(level)} {safety_label(level)}: {meaning}")
    console.print()


def _safety_mix(targets: list[CleanTarget]) -> str:
    counts = {level: 0 for level in SafetyLevel}
    for target in targets:
        counts[target.safety] += 1
    return " ".join(
        f"{safety_icon(level)} {count}" for level, count in counts.items() if count
    )


def show_estimation(report: CleanupReport) -> None:
    """Display what a scan found, one row per collector."""
    if report.total_targets == 0:
        console.print("[green]Nothing to clean.[/green]")
        return

    table = Table(title="Cleanup Estimation", show_header=True, header_style="bold")
    table.add_column("Collector")
    table.add_column("Items", justify="right")
    table.add_column("Size", justify="right")
    table.add_column("Safety")

    for name, targets in report.targets_by_collector.items():
        table.add_row(
            name,
            str(len(targets)),
            format_size(sum(t.size_bytes for t in targets)),
            _safety_mix(targets),
        )

    console.print(table)
    console.print(
        f"\n[bold]Total: {report.total_targets} items, {format_size(report.total_bytes)}[/bold]"
    )


def show_target_details(report: CleanupReport) -> None:
    """List every target, largest first within each collector."""
    for name, targets in report.targets_by_collector.items():
        console.print(f"\n[bold]{name}[/bold]")
        for target in sorted(targets, key=lambda t: t.size_bytes, reverse=True):
            console.print(
                f"  {safety_icon(target.safety)} {target.size_human:>10}  "
                f"{target.description} [dim]{target.path}[/dim]"
            )


def show_failures(report: CleanupReport) -> None:
    """Display collector-level failures."""
    if not report.failures:
        return
    console.print()
    console.print("[bold red]Collector errors:[/bold red]")
    for failure in report.failures:
        console.print(f"  [red]✗[/red] {failure.collector} ({failure.stage}): {failure.error}")


def show_clean_results(report: CleanupReport, verbose: bool = False) -> None:
    """Display cleanup summary."""
    console.print()
    if report.dry_run:
        console.print("[yellow]DRY RUN - No files were deleted[/yellow]")
    elif report.cancelled:
        console.print("[yellow]Cleanup cancelled[/yellow]")
    else:
        console.print("[bold green]Cleanup Complete![/bold green]")
    console.print()

    table = Table(show_header=False)
    table.add_column("Metric", style="bold")
    table.add_column("Value", justify="right")

    freed_label = "Space that would be freed" if report.dry_run else "Space freed"
    table.add_row(freed_label, format_size(report.bytes_freed))
    table.add_row("Items cleaned", str(report.success_count))
    if report.failure_count > 0:
        table.add_row("[red]Failed[/red]", str(report.failure_count))

    console.print(table)

    failed = [r for r in report.results if not r.success]
    if failed:
        console.print()
        console.print("[bold red]Failed items:[/bold red]")
        shown = failed if verbose else failed[:10]
        for result in shown:
            console.print(f"  [red]✗[/red] {result.target.path}: {result.error}")
        if len(failed) > len(shown):
            console.print(f"  [dim]... and {len(failed) - len(shown)} more (use --verbose)[/dim]")

    show_failures(report)


def show_detection(result: DetectionResult) -> None:
    """Display detected tools grouped by domain."""
    console.print(Panel(result.summary(), title="Detected Tools", border_style="cyan"))


def show_catalog(specs: list[CollectorSpec]) -> None:
    """Display the collector catalog."""
    table = Table(title="Collectors", show_header=True, header_style="bold")
    table.add_column("ID", style="bold")
    table.add_column("Name")
    table.add_column("Domain")
    table.add_column("Paths", justify="right")
    table.add_column("Patterns", justify="right")

    for spec in specs:
        table.add_row(
            spec.id,
            spec.name,
            spec.domain.label,
            str(len(spec.paths)),
            str(len(spec.patterns)),
        )

    console.print(table)


def show_scanning_progress() -> Progress:
    """Create spinner for scanning."""
    return Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        TimeElapsedColumn(),
        console=console,
        transient=True,
    )


def confirm_action(message: str) -> bool:
    """Ask for confirmation."""
    from rich.prompt import Confirm

    return Confirm.ask(message, console=console)


def confirm_cleanup(item_count: int, total_bytes: int) -> bool:
    """Ask whether to delete the scanned items."""
    console.print()
    return confirm_action(f"Delete {item_count} items ({format_size(total_bytes)})?")
