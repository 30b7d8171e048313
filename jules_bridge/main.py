"""CLI entry point for jules-bridge."""

import sys
from pathlib import Path

import click
import structlog

from jules_bridge.cli.chat import chat_command
from jules_bridge.cli.credentials import credentials_group, set_github_token, set_jules_key
from jules_bridge.config.settings import load_settings
from jules_bridge.exceptions import ConfigurationError
from jules_bridge.utils.logging_config import configure_logging

log = structlog.get_logger(__name__)


@click.group()
@click.option("--log-level", default=None, help="Logging level (default: WARNING)")
@click.option(
    "--workspace",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Repository folder for pull request commands (default: current directory)",
)
@click.version_option(package_name="jules-bridge")
@click.pass_context
def cli(ctx: click.Context, log_level: str | None, workspace: Path | None) -> None:
    """jules-bridge: chat with Jules and turn its plans into pull requests."""
    try:
        settings = load_settings(log_level=log_level, workspace=workspace)
    except ConfigurationError as e:
        click.echo(f"Error: {e.message}", err=True)
        sys.exit(1)

    configure_logging(settings.log_level)
    log.debug("cli_started", command=ctx.invoked_subcommand)
    ctx.obj = {"settings": settings}


cli.add_command(chat_command)
cli.add_command(set_jules_key)
cli.add_command(set_github_token)
cli.add_command(credentials_group)


if __name__ == "__main__":
    cli()
