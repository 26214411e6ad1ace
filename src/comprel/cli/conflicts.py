"""comprel conflicts command - compatibility check of several components."""

import json
from pathlib import Path
from typing import Any

import click
from rich.console import Console
from rich.table import Table

from comprel.cli.utils import failure_exception, load_cli_config, resolve_db_path
from comprel.relations.ops import RelationOps
from comprel.store.catalog import ComponentCatalog
from comprel.store.db import Database

_RISK_STYLES = {
    "none": "green",
    "low": "green",
    "moderate": "yellow",
    "high": "red",
    "critical": "bold red",
}


def _render_report(console: Console, result: dict[str, Any]) -> None:
    analysis = result["analysis"]
    summary = result["summary"]
    level = analysis["risk_level"]

    console.print(f"[bold]Components:[/bold] {', '.join(result['components'])}")
    console.print(
        f"[bold]Risk:[/bold] [{_RISK_STYLES.get(level, 'white')}]{level}[/] ({analysis['risk_score']}/100)"
    )

    if analysis["conflicts"]:
        table = Table(title="Conflicts", title_justify="left")
        table.add_column("Component", style="cyan")
        table.add_column("Conflicts with", style="cyan")
        table.add_column("Details")
        for conflict in analysis["conflicts"]:
            table.add_row(conflict["component1"], conflict["component2"], conflict["details"] or "-")
        console.print(table)

    for warning in analysis.get("warnings", []):
        subject = warning.get("component1")
        scope = f"{subject} + {warning['component2']}: " if subject else ""
        console.print(f"  [yellow]![/yellow] {scope}{warning['issue']}", highlight=False)
        console.print(f"    [dim]{warning['recommendation']}[/dim]", highlight=False)

    for rec in analysis.get("recommendations", []):
        if rec["type"] == "alternative":
            console.print(f"  [cyan]→[/cyan] {rec['suggestion']}: {', '.join(rec['alternatives'])}")
        else:
            console.print(f"  [cyan]→[/cyan] {rec['suggestion']}: {', '.join(rec['shared_features'])}")

    verdict = "[green]safe to combine[/green]" if summary["safe_to_combine"] else "[red]not safe to combine[/red]"
    console.print(f"\n{verdict}")


@click.command()
@click.argument("component_names", nargs=-1, required=True)
@click.option(
    "--db",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Component database (default: database.path from config)",
)
@click.option("--project", type=click.Path(exists=True, file_okay=False, path_type=Path), default=".")
@click.option("--warnings/--no-warnings", default=True, help="Include warnings")
@click.option("--recommendations/--no-recommendations", default=True, help="Include recommendations")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def conflicts_command(
    ctx: click.Context,
    component_names: tuple[str, ...],
    db: Path | None,
    project: Path,
    warnings: bool,
    recommendations: bool,
    as_json: bool,
) -> None:
    """Check whether COMPONENT_NAMES can be used together."""
    verbose = bool(ctx.obj and ctx.obj.get("verbose"))
    project_root = project.resolve()
    config = load_cli_config(project_root, verbose=verbose)
    db_path = resolve_db_path(project_root, db, config)

    database = Database(db_path, busy_timeout_ms=config.database.busy_timeout_ms)
    try:
        ops = RelationOps(ComponentCatalog(database), config.resolver)
        result = ops.analyze_conflicts(
            list(component_names),
            include_warnings=warnings,
            include_recommendations=recommendations,
        )
    finally:
        database.dispose()

    if as_json:
        click.echo(json.dumps(result, indent=2))
        if not result["success"]:
            ctx.exit(1)
        return

    if not result["success"]:
        raise failure_exception(result)

    _render_report(Console(), result)
