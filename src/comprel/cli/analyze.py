"""comprel analyze command - dependency analysis of one component."""

import json
from pathlib import Path
from typing import Any

import click
from rich.console import Console
from rich.table import Table
from rich.tree import Tree

from comprel.cli.utils import failure_exception, load_cli_config, resolve_db_path
from comprel.relations.ops import RelationOps
from comprel.store.catalog import ComponentCatalog
from comprel.store.db import Database


def _render_report(console: Console, result: dict[str, Any]) -> None:
    component = result["component"]
    deps = result["dependencies"]
    required = deps["required"]

    table = Table(title=f"{component['name']} dependencies", show_header=False, title_justify="left")
    table.add_column("Category", style="cyan")
    table.add_column("Value")
    table.add_row("Title", component.get("title") or "-")
    table.add_row("Complexity", component["complexity"])
    table.add_row("Framework", required["framework"])
    table.add_row("Needs scripting", "yes" if required["needs_scripting"] else "no")
    table.add_row("Stylesheets", ", ".join(required["stylesheets"]) or "-")
    table.add_row("Scripts", ", ".join(required["scripts"]) or "-")
    table.add_row("Required components", ", ".join(required["components"]) or "-")
    if "suggested" in deps:
        table.add_row("Suggested", ", ".join(deps["suggested"]["components"]) or "-")
        table.add_row("Enhancements", ", ".join(deps["suggested"]["enhancements"]) or "-")
    if "conflicts" in deps:
        table.add_row("Conflicts", ", ".join(deps["conflicts"]["components"]) or "-")
    console.print(table)

    if "conflicts" in deps and deps["conflicts"]["warnings"]:
        console.print("\n[bold yellow]Warnings[/bold yellow]")
        for warning in deps["conflicts"]["warnings"]:
            console.print(f"  [yellow]![/yellow] {warning}")

    if result.get("accessibility_requirements"):
        console.print("\n[bold]Accessibility[/bold]")
        for item in result["accessibility_requirements"]:
            criterion = f" ({item['wcag_criterion']})" if item.get("wcag_criterion") else ""
            console.print(f"  [cyan]•[/cyan] {item['requirement']}{criterion}")

    if "dependency_chain" in result:
        tree = Tree(f"[bold]{component['name']}[/bold]")
        for entry in result["dependency_chain"]:
            requires = ", ".join(entry["requires"])
            label = f"{entry['component']}" + (f" [dim]requires {requires}[/dim]" if requires else "")
            tree.add(label)
        console.print("\n[bold]Dependency chain[/bold]")
        console.print(tree)

    console.print("\n[bold]Installation[/bold]")
    for i, note in enumerate(result["installation_notes"], 1):
        console.print(f"  {i}. {note}", markup=False, highlight=False)


@click.command()
@click.argument("component_name")
@click.option(
    "--db",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Component database (default: database.path from config)",
)
@click.option("--project", type=click.Path(exists=True, file_okay=False, path_type=Path), default=".")
@click.option("--suggestions/--no-suggestions", default=True, help="Include suggested components")
@click.option("--conflicts/--no-conflicts", default=True, help="Include conflicting components")
@click.option("-r", "--recursive", is_flag=True, help="Expand the chain of required components")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def analyze_command(
    ctx: click.Context,
    component_name: str,
    db: Path | None,
    project: Path,
    suggestions: bool,
    conflicts: bool,
    recursive: bool,
    as_json: bool,
) -> None:
    """Analyze the dependencies of COMPONENT_NAME."""
    verbose = bool(ctx.obj and ctx.obj.get("verbose"))
    project_root = project.resolve()
    config = load_cli_config(project_root, verbose=verbose)
    db_path = resolve_db_path(project_root, db, config)

    database = Database(db_path, busy_timeout_ms=config.database.busy_timeout_ms)
    try:
        ops = RelationOps(ComponentCatalog(database), config.resolver)
        result = ops.analyze_dependencies(
            component_name,
            include_suggestions=suggestions,
            include_conflicts=conflicts,
            recursive=recursive,
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
