"""comprel serve command - run the MCP server over stdio."""

from pathlib import Path

import click

from comprel.cli.utils import load_cli_config, resolve_db_path


@click.command()
@click.option(
    "--db",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Component database (default: database.path from config)",
)
@click.option("--project", type=click.Path(exists=True, file_okay=False, path_type=Path), default=".")
@click.pass_context
def serve_command(ctx: click.Context, db: Path | None, project: Path) -> None:
    """Serve the comprel analysis tools to MCP clients over stdio."""
    from comprel.mcp.server import run_server

    verbose = bool(ctx.obj and ctx.obj.get("verbose"))
    project_root = project.resolve()
    config = load_cli_config(project_root, verbose=verbose)
    if verbose:
        config = config.model_copy(
            update={"logging": config.logging.model_copy(update={"level": "DEBUG"})}
        )
    db_path = resolve_db_path(project_root, db, config)

    run_server(db_path, config)
