"""Plan command implementation.

Resolves a profile and shows what ``clean`` would delete, without
deleting anything.
"""

import json
from enum import Enum
from pathlib import Path
from typing import Annotated

import typer
from rich.markup import escape

from cleanctl.cli.display import create_plan_table, print_excluded, print_plan_warnings
from cleanctl.core.engine import build_plan
from cleanctl.core.errors import CleanctlError
from cleanctl.core.planner import DeletionPlan
from cleanctl.core.profile import require_profile
from cleanctl.utils.formatting import console, print_error, print_info

app = typer.Typer(
    help="Preview the deletion plan of a profile.",
    invoke_without_command=True,
)


class OutputFormat(str, Enum):
    """Output format options."""

    TABLE = "table"
    JSON = "json"


@app.callback(invoke_without_command=True)
def show_plan(
    ctx: typer.Context,
    profile: Annotated[
        Path,
        typer.Option(
            "--profile",
            "-p",
            help="Profile JSON file, or the name of a profile in the profiles directory.",
        ),
    ],
    output_format: Annotated[
        OutputFormat,
        typer.Option(
            "--format",
            "-f",
            help="Output format.",
            case_sensitive=False,
        ),
    ] = OutputFormat.TABLE,
    strict: Annotated[
        bool,
        typer.Option("--strict", help="Abort if any entry cannot be resolved."),
    ] = False,
) -> None:
    """Show the paths a profile currently resolves to."""
    quiet = bool(ctx.obj and ctx.obj.get("quiet"))
    loaded = require_profile(profile)

    try:
        plan = build_plan(loaded, strict=strict)
    except CleanctlError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    if output_format == OutputFormat.JSON:
        _print_json(loaded.name, plan)
        return

    print_plan_warnings(plan)
    if plan.is_empty:
        print_info(f"Profile '{escape(loaded.name)}' currently resolves to nothing.")
        if not quiet:
            print_excluded(plan)
        return

    console.print(create_plan_table(plan, title=f"Deletion Plan: {escape(loaded.name)}"))
    if not quiet:
        print_excluded(plan)
        console.print(f"\n[dim]{len(plan)} path(s) would be deleted[/dim]")


def _print_json(name: str, plan: DeletionPlan) -> None:
    """Display a plan as JSON."""
    data = {
        "name": name,
        "targets": [
            {"path": t.path, "type": t.kind.value, "entry": t.entry_index}
            for t in plan.targets
        ],
        "excluded": [m.path for m in plan.excluded],
        "failures": [
            {"entry": f.entry_index, "error": f.error} for f in plan.failures
        ],
    }
    console.print_json(json.dumps(data))
