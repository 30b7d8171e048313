"""
Chat workflow orchestrator.

This module provides the ChatOrchestrator class, which owns the workflow
state of one chat panel and turns each user action into exactly one
sequence of remote calls:

- panel opened -> create a Jules session
- send message -> post it to the session; a returned plan becomes current
- approve plan -> approve it remotely, then open a pull request
- reject plan -> drop the current plan (no remote call)
- checkout / merge -> act on the current pull request

State Lifecycle:
    INITIALIZING -> ACTIVE(session, current_plan?, current_pr?) -> CLOSED

Error Handling:
    Every failure is caught here, logged, and rendered as an ``Error:``
    transcript entry. State is only updated after the whole call sequence
    succeeds, so a failed action leaves it exactly as it was.

Example:
    >>> orchestrator = ChatOrchestrator(jules, pulls, presenter)
    >>> await orchestrator.open()
    >>> await orchestrator.dispatch(ChatEvent(ChatEventKind.SEND_MESSAGE, "fix bug"))
"""

from collections.abc import Awaitable, Callable
from enum import Enum
from typing import Protocol

import structlog

from jules_bridge.exceptions import JulesBridgeError
from jules_bridge.models.domain import (
    AgentReply,
    ChatEvent,
    ChatEventKind,
    ChatUpdate,
    MergeResult,
    Plan,
    PullRequest,
    Session,
)

log = structlog.get_logger(__name__)

DEFAULT_PR_BRANCH = "jules-branch"
DEFAULT_PR_TITLE = "Jules PR"
DEFAULT_PR_BODY = "This is a PR created by Jules."


class SessionClient(Protocol):
    async def create_session(self) -> Session: ...

    async def send_message(self, session_id: str, text: str) -> AgentReply: ...

    async def approve_plan(self, session_id: str, plan_id: str) -> object: ...


class PullRequestService(Protocol):
    async def create_pull_request(self, branch: str, title: str, body: str) -> PullRequest: ...

    async def checkout_pull_request(self, number: int) -> object: ...

    async def merge_pull_request(self, number: int) -> MergeResult: ...


class Presenter(Protocol):
    """Renders state changes. Never a source of workflow state."""

    def render(self, update: ChatUpdate) -> None: ...


class ChatStatus(str, Enum):
    INITIALIZING = "initializing"
    ACTIVE = "active"
    CLOSED = "closed"


class ChatOrchestrator:
    """Own one chat panel's session, current plan, and current pull request.

    Attributes:
        status: Lifecycle state of the panel
        session: Jules session, set once the panel is ACTIVE
        current_plan: Plan awaiting approval, if any
        current_pr: Pull request created from the last approved plan, if any
    """

    def __init__(
        self,
        sessions: SessionClient,
        pulls: PullRequestService,
        presenter: Presenter,
        pr_branch: str = DEFAULT_PR_BRANCH,
        pr_title: str = DEFAULT_PR_TITLE,
        pr_body: str = DEFAULT_PR_BODY,
    ) -> None:
        self.sessions = sessions
        self.pulls = pulls
        self.presenter = presenter
        self.pr_branch = pr_branch
        self.pr_title = pr_title
        self.pr_body = pr_body

        self.status = ChatStatus.INITIALIZING
        self.session: Session | None = None
        self.current_plan: Plan | None = None
        self.current_pr: PullRequest | None = None

        self._handlers: dict[ChatEventKind, Callable[[ChatEvent], Awaitable[None]]] = {
            ChatEventKind.SEND_MESSAGE: lambda event: self.send_message(event.text),
            ChatEventKind.APPROVE_PLAN: lambda event: self.approve_plan(),
            ChatEventKind.REJECT_PLAN: lambda event: self.reject_plan(),
            ChatEventKind.CHECKOUT_PULL_REQUEST: lambda event: self.checkout_pull_request(),
            ChatEventKind.MERGE_PULL_REQUEST: lambda event: self.merge_pull_request(),
        }

    async def dispatch(self, event: ChatEvent) -> None:
        """Route one inbound UI event to its handler."""
        await self._handlers[event.kind](event)

    async def open(self) -> None:
        """Create the session for this panel."""
        self._render(text="Creating session...")
        try:
            session = await self.sessions.create_session()
        except Exception as e:
            self._fail("open", e, prefix="Error creating session")
            return

        self.session = session
        self.status = ChatStatus.ACTIVE
        self._render(text=f"Session created: {session.id}", session=session)

    async def send_message(self, text: str) -> None:
        if self.session is None:
            self._render(text="Error: No active session.", is_error=True)
            return

        text = text.strip()
        if not text:
            return

        try:
            reply = await self.sessions.send_message(self.session.id, text)
        except Exception as e:
            self._fail("send_message", e)
            return

        if reply.plan is not None:
            self.current_plan = reply.plan
        self._render(text=reply.text, plan=reply.plan)

    async def approve_plan(self) -> None:
        """Approve the current plan and open a pull request for it."""
        if self.session is None or self.current_plan is None:
            log.debug("approve_plan_ignored", reason="no current plan")
            return

        plan = self.current_plan
        try:
            await self.sessions.approve_plan(self.session.id, plan.id)
            self._render(text="Plan approved! Creating pull request...")
            pr = await self.pulls.create_pull_request(self.pr_branch, self.pr_title, self.pr_body)
        except Exception as e:
            self._fail("approve_plan", e)
            return

        self.current_plan = None
        self.current_pr = pr
        self._render(text=f"Pull request #{pr.number} created: {pr.html_url}", plan_cleared=True, pull_request=pr)

    async def reject_plan(self) -> None:
        if self.current_plan is None:
            log.debug("reject_plan_ignored", reason="no current plan")
            return

        log.info("plan_rejected", plan_id=self.current_plan.id)
        self.current_plan = None
        self._render(text="Plan rejected.", plan_cleared=True)

    async def checkout_pull_request(self) -> None:
        if self.current_pr is None:
            log.debug("checkout_ignored", reason="no current pull request")
            return

        number = self.current_pr.number
        try:
            await self.pulls.checkout_pull_request(number)
        except Exception as e:
            self._fail("checkout_pull_request", e)
            return

        self._render(text=f"Checked out PR #{number}")

    async def merge_pull_request(self) -> None:
        if self.current_pr is None:
            log.debug("merge_ignored", reason="no current pull request")
            return

        number = self.current_pr.number
        try:
            result = await self.pulls.merge_pull_request(number)
        except Exception as e:
            self._fail("merge_pull_request", e)
            return

        if result.merged:
            self._render(text=f"Merged PR #{number}")
        else:
            self._render(text=f"Error: PR #{number} was not merged: {result.message}", is_error=True)

    def close(self) -> None:
        self.status = ChatStatus.CLOSED
        log.info("chat_closed", session_id=self.session.id if self.session else None)

    def _render(self, **fields) -> None:
        self.presenter.render(ChatUpdate(**fields))

    def _fail(self, action: str, error: Exception, prefix: str = "Error") -> None:
        if isinstance(error, JulesBridgeError):
            log.warning("chat_action_failed", action=action, error_type=type(error).__name__, error=str(error))
        else:
            log.error("chat_action_unexpected_error", action=action, exc_info=True)
        self._render(text=f"{prefix}: {error}", is_error=True)
