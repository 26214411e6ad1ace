"""comprel CLI - component relationship resolver."""

import click

from comprel.cli.analyze import analyze_command
from comprel.cli.conflicts import conflicts_command
from comprel.cli.serve import serve_command


@click.group()
@click.version_option(version="0.1.0", prog_name="comprel")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """comprel - dependency analysis for documented UI components."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose


cli.add_command(analyze_command, name="analyze")
cli.add_command(conflicts_command, name="conflicts")
cli.add_command(serve_command, name="serve")


if __name__ == "__main__":
    cli()
