"""Terminal chat panel.

The panel is a dumb renderer: it turns input lines into ChatEvents for
the orchestrator and prints the ChatUpdates it receives. All workflow
state (session, plan, pull request) lives in the orchestrator.

Input:
    plain text   send a message to Jules
    /approve     approve the current plan and open a pull request
    /reject      reject the current plan
    /checkout    check out the current pull request locally
    /merge       merge the current pull request
    /help        list commands
    /quit        close the panel (Ctrl-D also works)
"""

import asyncio
import sys
from collections.abc import Callable
from pathlib import Path

import click
import structlog

from jules_bridge.config.settings import BridgeSettings
from jules_bridge.credentials import CredentialStore
from jules_bridge.engine.orchestrator import ChatOrchestrator
from jules_bridge.exceptions import JulesBridgeError
from jules_bridge.git.workspace import Workspace
from jules_bridge.models.domain import ChatEvent, ChatEventKind, ChatUpdate
from jules_bridge.providers.github_rest import PullRequestClient
from jules_bridge.providers.jules_rest import JulesSessionClient

log = structlog.get_logger(__name__)

SLASH_COMMANDS = {
    "/approve": ChatEventKind.APPROVE_PLAN,
    "/reject": ChatEventKind.REJECT_PLAN,
    "/checkout": ChatEventKind.CHECKOUT_PULL_REQUEST,
    "/merge": ChatEventKind.MERGE_PULL_REQUEST,
}

QUIT_COMMANDS = {"/quit", "/exit"}

HELP_TEXT = "Commands: /approve, /reject, /checkout, /merge, /help, /quit. Anything else is sent to Jules."


class TerminalPresenter:
    """Print chat updates and keep the transcript for display."""

    def __init__(self, echo: Callable[..., None] = click.echo) -> None:
        self.echo = echo
        self.transcript: list[str] = []

    def render(self, update: ChatUpdate) -> None:
        if update.text is not None:
            self.transcript.append(update.text)
            color = "red" if update.is_error else None
            self.echo(click.style(update.text, fg=color))

        if update.plan is not None:
            self.echo(click.style("\nPlan", bold=True))
            self.echo(update.plan.description)
            self.echo(click.style("/approve or /reject\n", fg="cyan"))

        if update.pull_request is not None:
            pr = update.pull_request
            self.echo(click.style(f"\nPull Request #{pr.number}", bold=True))
            self.echo(pr.html_url)
            self.echo(click.style("/checkout or /merge\n", fg="cyan"))


def parse_input(line: str) -> ChatEvent | None:
    """Map one input line to a ChatEvent.

    Returns:
        The event, or None for blank lines and unknown slash commands.
    """
    line = line.strip()
    if not line:
        return None
    if line.startswith("/"):
        kind = SLASH_COMMANDS.get(line.split()[0].lower())
        return ChatEvent(kind) if kind else None
    return ChatEvent(ChatEventKind.SEND_MESSAGE, text=line)


async def run_chat(
    orchestrator: ChatOrchestrator,
    read_line: Callable[[], str],
    echo: Callable[..., None] = click.echo,
) -> None:
    """Open the session and process input lines until /quit or EOF.

    Each event is handled to completion before the next line is read.
    """
    await orchestrator.open()
    if orchestrator.session is None:
        orchestrator.close()
        return

    echo(click.style(HELP_TEXT, dim=True))
    try:
        while True:
            try:
                line = read_line()
            except (EOFError, click.Abort):
                break

            command = line.strip().lower()
            if command in QUIT_COMMANDS:
                break
            if command == "/help":
                echo(HELP_TEXT)
                continue

            event = parse_input(line)
            if event is None:
                if command.startswith("/"):
                    echo(click.style(f"Unknown command: {line.strip()}", fg="yellow"))
                    echo(HELP_TEXT)
                continue

            await orchestrator.dispatch(event)
    finally:
        orchestrator.close()


def build_orchestrator(settings: BridgeSettings, presenter: TerminalPresenter) -> ChatOrchestrator:
    """Wire clients, workspace, and presenter for one chat panel."""
    credentials = CredentialStore(service=settings.keyring_service)
    workspace = Workspace(settings.workspace if settings.workspace is not None else Path.cwd())
    return ChatOrchestrator(
        sessions=JulesSessionClient(credentials, base_url=settings.jules_api_base_url),
        pulls=PullRequestClient(credentials, workspace, base_url=settings.github_api_base_url),
        presenter=presenter,
        pr_branch=settings.pr_branch,
        pr_title=settings.pr_title,
        pr_body=settings.pr_body,
    )


def _read_line() -> str:
    return click.prompt("you", prompt_suffix="> ", default="", show_default=False)


@click.command(name="chat")
@click.pass_context
def chat_command(ctx: click.Context) -> None:
    """Start a chat with Jules."""
    settings: BridgeSettings = ctx.obj["settings"]
    click.echo(click.style("Jules Chat", bold=True))

    try:
        orchestrator = build_orchestrator(settings, TerminalPresenter())
        asyncio.run(run_chat(orchestrator, _read_line))
    except JulesBridgeError as e:
        click.echo(click.style(f"Error: {e.message}", fg="red"), err=True)
        log.debug("chat_error", exc_info=True)
        sys.exit(1)
    except KeyboardInterrupt:
        click.echo("\nInterrupted by user", err=True)
        sys.exit(130)
    except Exception as e:
        click.echo(click.style(f"Error: {e}", fg="red"), err=True)
        log.error("chat_unexpected_error", exc_info=True)
        sys.exit(1)
