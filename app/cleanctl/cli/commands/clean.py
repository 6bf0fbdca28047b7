"""Clean command implementation.

Loads a profile, resolves it into a deletion plan and deletes the
targets under the chosen confirmation mode.
"""

from pathlib import Path
from typing import Annotated

import typer
from rich.markup import escape

from cleanctl.cli.display import (
    create_results_table,
    format_outcome_line,
    print_excluded,
    print_plan_warnings,
    print_report_summary,
)
from cleanctl.cli.prompts import ConsoleConfirmer
from cleanctl.core.engine import build_plan, execute_plan
from cleanctl.core.errors import CleanctlError
from cleanctl.core.policy import ConfirmationMode, entry_filter
from cleanctl.core.profile import require_profile
from cleanctl.filesystem.operator import LocalFilesystem
from cleanctl.models.outcome import DeletionOutcome
from cleanctl.utils.formatting import console, print_error, print_info

app = typer.Typer(
    help="Delete everything a profile describes.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def clean(
    ctx: typer.Context,
    profile: Annotated[
        Path,
        typer.Option(
            "--profile",
            "-p",
            help="Profile JSON file, or the name of a profile in the profiles directory.",
        ),
    ],
    mode: Annotated[
        ConfirmationMode,
        typer.Option(
            "--mode",
            "-m",
            help="Confirmation mode: every-path, every-entry, or silent.",
            case_sensitive=False,
        ),
    ],
    strict: Annotated[
        bool,
        typer.Option("--strict", help="Abort if any entry cannot be resolved."),
    ] = False,
) -> None:
    """Delete the files, directories and pattern matches listed in a profile."""
    quiet = bool(ctx.obj and ctx.obj.get("quiet"))

    loaded = require_profile(profile)
    if not quiet:
        print_info(f"Discovering paths using profile '{escape(loaded.name)}'...")

    filesystem = LocalFilesystem()
    confirmer = ConsoleConfirmer() if mode != ConfirmationMode.SILENT else None

    try:
        plan = build_plan(
            loaded,
            filesystem,
            strict=strict,
            include=entry_filter(mode, confirmer),
        )
    except CleanctlError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_plan_warnings(plan)
    if not quiet:
        print_excluded(plan)

    if plan.is_empty:
        print_info("Nothing to delete.")
        return

    if not quiet:
        print_info(f"Deleting {len(plan)} path(s)...")

    def report_progress(position: int, outcome: DeletionOutcome) -> None:
        if not quiet:
            console.print(format_outcome_line(position, len(plan), outcome))

    report = execute_plan(
        plan,
        mode,
        confirmer=confirmer,
        filesystem=filesystem,
        on_outcome=report_progress,
    )

    failures = [o for o in report.outcomes if o.is_failed]
    if failures:
        console.print(create_results_table(failures))

    print_report_summary(report)
