"""Shared Rich display functions for plans and run results.

Provides table builders and summary printers used by the ``clean`` and
``plan`` commands.
"""

from rich.markup import escape
from rich.table import Table

from cleanctl.core.planner import DeletionPlan
from cleanctl.filesystem.models import TargetKind
from cleanctl.models.outcome import DeletionOutcome, OutcomeStatus, RunReport
from cleanctl.utils.formatting import (
    console,
    format_duration,
    format_size,
    print_success,
    print_warning,
)

_STATUS_LABELS: dict[OutcomeStatus, str] = {
    OutcomeStatus.DELETED: "[outcome.deleted]deleted[/]",
    OutcomeStatus.SKIPPED: "[outcome.skipped]skipped[/]",
    OutcomeStatus.FAILED: "[outcome.failed]failed[/]",
}


def _kind_label(kind: TargetKind) -> str:
    return f"[kind.{kind.value}]{kind.value}[/]"


def create_plan_table(plan: DeletionPlan, title: str = "Deletion Plan") -> Table:
    """Create a Rich table listing the targets of a plan.

    Args:
        plan: Plan to display.
        title: Table title.

    Returns:
        Rich Table with one row per target.
    """
    table = Table(
        title=title,
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("#", justify="right", width=4)
    table.add_column("Path", style="path")
    table.add_column("Type", width=10)
    table.add_column("Entry", justify="right", width=6, style="muted")

    for position, target in enumerate(plan.targets, start=1):
        table.add_row(
            str(position),
            escape(target.path),
            _kind_label(target.kind),
            str(target.entry_index + 1),
        )

    return table


def create_results_table(outcomes: list[DeletionOutcome]) -> Table:
    """Create a Rich table displaying deletion outcomes.

    Args:
        outcomes: Outcomes to display.

    Returns:
        Rich Table with Status, Path and Details columns.
    """
    table = Table(
        title="Results",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Status", width=8, justify="center")
    table.add_column("Path", no_wrap=True)
    table.add_column("Details")

    for outcome in outcomes:
        if outcome.is_deleted:
            detail = format_size(outcome.bytes_freed)
        elif outcome.is_skipped:
            detail = outcome.reason or ""
        else:
            detail = outcome.error or "Unknown error"
        table.add_row(
            _STATUS_LABELS[outcome.status],
            escape(outcome.path),
            f"[muted]{escape(detail)}[/muted]",
        )

    return table


def format_outcome_line(position: int, total: int, outcome: DeletionOutcome) -> str:
    """Format a one-line progress message for a processed target."""
    label = _STATUS_LABELS[outcome.status]
    detail = ""
    if outcome.is_skipped and outcome.reason:
        detail = f" [muted]({escape(outcome.reason)})[/muted]"
    elif outcome.is_failed and outcome.error:
        detail = f" [muted]({escape(outcome.error)})[/muted]"
    return f"[muted]{position + 1}/{total}[/muted] {label} {escape(outcome.path)}{detail}"


def print_plan_warnings(plan: DeletionPlan) -> None:
    """Print entries that were left out of the plan because they failed to resolve."""
    for failure in plan.failures:
        print_warning(
            f"Entry {failure.entry_index + 1} skipped ({escape(failure.entry.describe())}): "
            f"{escape(failure.error)}"
        )


def print_excluded(plan: DeletionPlan) -> None:
    """Print matches spared by exception rules."""
    for match in plan.excluded:
        console.print(f"[info]Keeping[/] {escape(match.path)}")


def print_report_summary(report: RunReport) -> None:
    """Print a summary of a deletion run.

    Shows deleted/skipped/failed counts, reclaimed space and duration.

    Args:
        report: Report of the run.
    """
    size = format_size(report.bytes_freed)
    duration = format_duration(report.elapsed)

    if report.failed == 0:
        print_success(
            f"Deleted {report.deleted} path(s), skipped {report.skipped}, "
            f"reclaiming {size} in {duration}."
        )
    else:
        console.print(
            f"\n[success]{report.deleted} deleted[/success], "
            f"[outcome.skipped]{report.skipped} skipped[/], "
            f"[error]{report.failed} failed[/error] "
            f"({size} reclaimed in {duration})"
        )
