"""CLI commands for credential management.

Two secrets are used:
    - jules: Jules API key, sent as ``x-goog-api-key``
    - github: GitHub personal access token

Example:
    $ jules-bridge set-jules-key
    $ jules-bridge set-github-token
    $ jules-bridge credentials status
"""

import sys

import click

from jules_bridge.credentials import GITHUB, JULES, NAMESPACES, CredentialError, CredentialStore


def _store(ctx: click.Context) -> CredentialStore:
    settings = ctx.obj["settings"]
    return CredentialStore(service=settings.keyring_service)


def _save(ctx: click.Context, namespace: str, value: str) -> None:
    try:
        _store(ctx).set(namespace, value)
    except CredentialError as e:
        click.echo(click.style(f"Error: {e.message}", fg="red"), err=True)
        sys.exit(1)
    except ValueError as e:
        click.echo(click.style(f"Error: {e}", fg="red"), err=True)
        sys.exit(1)

    click.echo(click.style(f"{NAMESPACES[namespace].label} set successfully.", fg="green"))


@click.command(name="set-jules-key")
@click.option(
    "--value",
    prompt="Enter your Jules API Key",
    hide_input=True,
    help="Jules API key (will prompt if not provided)",
)
@click.pass_context
def set_jules_key(ctx: click.Context, value: str) -> None:
    """Store the Jules API key in the OS keyring."""
    _save(ctx, JULES, value)


@click.command(name="set-github-token")
@click.option(
    "--value",
    prompt="Enter your GitHub Token",
    hide_input=True,
    help="GitHub personal access token (will prompt if not provided)",
)
@click.pass_context
def set_github_token(ctx: click.Context, value: str) -> None:
    """Store the GitHub token in the OS keyring."""
    _save(ctx, GITHUB, value)


@click.group(name="credentials")
def credentials_group() -> None:
    """Inspect or remove stored credentials."""
    pass


@credentials_group.command(name="status")
@click.pass_context
def credentials_status(ctx: click.Context) -> None:
    """Show which credentials are stored (values are masked)."""
    store = _store(ctx)
    try:
        for namespace, info in NAMESPACES.items():
            value = store.get(namespace)
            click.echo(f"{info.label}: ", nl=False)
            if value is None:
                click.echo(click.style(f"not set (run: jules-bridge {info.command})", fg="yellow"))
            else:
                click.echo(click.style(f"set ({_mask(value)})", fg="green"))
    except CredentialError as e:
        click.echo(click.style(f"Error: {e.message}", fg="red"), err=True)
        sys.exit(1)


@credentials_group.command(name="delete")
@click.argument("namespace", type=click.Choice(list(NAMESPACES)))
@click.confirmation_option(prompt="Are you sure you want to delete this credential?")
@click.pass_context
def delete_credential(ctx: click.Context, namespace: str) -> None:
    """Delete a stored credential (NAMESPACE is jules or github)."""
    try:
        deleted = _store(ctx).delete(namespace)
    except CredentialError as e:
        click.echo(click.style(f"Error: {e.message}", fg="red"), err=True)
        sys.exit(1)

    if deleted:
        click.echo(click.style("Credential deleted successfully", fg="green"))
    else:
        click.echo(click.style("Credential not found", fg="yellow"))


def _mask(value: str) -> str:
    if len(value) > 8:
        return value[:4] + "*" * (len(value) - 8) + value[-4:]
    return "*" * len(value)
