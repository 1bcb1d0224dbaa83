"""CLI entry point."""

from __future__ import annotations

import sys
from pathlib import Path

import rich_click as click
from rich.console import Console

from livecon.core.autostart import run_autostart
from livecon.core.config import ConfigError, ConsoleConfig, load_config
from livecon.core.logging_config import configure_logging
from livecon.core.session import ConsoleSession
from livecon.frontends.cli.autostart import (
    ensure_autostart_file,
    load_statements,
    open_autostart_file,
)

click.rich_click.USE_RICH_MARKUP = True
click.rich_click.USE_MARKDOWN = True
click.rich_click.SHOW_ARGUMENTS = True
click.rich_click.GROUP_ARGUMENTS_OPTIONS = True
click.rich_click.STYLE_ERRORS_SUGGESTION = "magenta italic"
click.rich_click.ERRORS_SUGGESTION = "Try running '--help' for more information."
click.rich_click.ERRORS_EPILOGUE = ""
click.rich_click.MAX_WIDTH = 100


def _load_config(ctx: click.Context, **overrides: object) -> ConsoleConfig:
    try:
        return load_config(ctx.obj.get("config_file"), **overrides)
    except ConfigError as e:
        raise click.ClickException(str(e)) from e


@click.group()
@click.version_option(package_name="livecon")
@click.option(
    "--config",
    "-c",
    "config_file",
    type=click.Path(dir_okay=False),
    default=None,
    help="YAML config file (default: $LIVECON_CONFIG)",
)
@click.option("--log-level", default=None, help="Log level (default: $LIVECON_LOG_LEVEL or WARNING)")
@click.pass_context
def cli(ctx: click.Context, config_file: str | None, log_level: str | None):
    """livecon - interactive Python console.

    Evaluates Python snippets against a persistent namespace, with
    completion for names, attributes and modules.

    **Commands:**

        livecon repl         Start the interactive console

        livecon run FILE     Run a statement file and print the transcript

        livecon autostart    Show, create or open the autostart file
    """
    configure_logging(level=log_level)
    ctx.ensure_object(dict)
    ctx.obj["config_file"] = config_file


@cli.command()
@click.option("--autostart", "autostart_file", default=None, help="Autostart file to run first")
@click.option("--no-autostart", is_flag=True, help="Skip the autostart file")
@click.option("--theme", default=None, help="Theme (default, nord, mono)")
@click.pass_context
def repl(ctx: click.Context, autostart_file: str | None, no_autostart: bool, theme: str | None):
    """Start the interactive console.

    Statements from the autostart file run before the first prompt.
    Type **:help** inside the console for console commands.

    **Examples:**

        livecon repl

        livecon repl --autostart setup.py --theme nord
    """
    from livecon.frontends.tui.console import ConsoleApp

    config = _load_config(ctx, autostart_file=autostart_file, theme=theme)
    session = ConsoleSession.create(config)
    session.forward_logs()

    if not no_autostart:
        statements = load_statements(config.autostart_file)
        run_autostart(session, statements, source=config.autostart_file)

    ConsoleApp(session).run()


@cli.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
@click.pass_context
def run(ctx: click.Context, file: str):
    """Run a statement file through the console and print the transcript.

    Blank lines and lines starting with "#" are skipped. A failing line is
    reported and the following lines still run.

    **Examples:**

        livecon run setup.py
    """
    config = _load_config(ctx)
    session = ConsoleSession.create(config)
    try:
        run_autostart(session, load_statements(file), source=file)
    finally:
        session.close()

    console = Console()
    for line in session.transcript.lines:
        console.print(line, markup=False, highlight=False)


@cli.command()
@click.option("--create", is_flag=True, help="Create the file with a template if missing")
@click.option("--edit", is_flag=True, help="Open the file in the default editor")
@click.pass_context
def autostart(ctx: click.Context, create: bool, edit: bool):
    """Show the autostart file and the statements it will run."""
    config = _load_config(ctx)
    path = Path(config.autostart_file)

    if edit:
        click.echo(f"Opening autostart file at {path}")
        open_autostart_file(path)
        return
    if create:
        ensure_autostart_file(path)

    if not path.exists():
        click.echo(f"No autostart file at {path} (use --create to make one)")
        sys.exit(1)

    statements = load_statements(path)
    click.echo(f"Autostart file: {path}")
    click.echo(f"Statements: {len(statements)}")
    for statement in statements:
        click.echo(f"  {statement}")


def main() -> None:
    """Main entry point for the CLI."""
    cli(obj={})


if __name__ == "__main__":
    main()
