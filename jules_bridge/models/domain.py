"""
Domain models for jules-bridge.

These are the normalized values passed between the Jules client, the pull
request client, the orchestrator, and the presenter. All of them are
transient: nothing here is persisted beyond the life of a chat panel.

Example:
    Converting a Jules reply::

        reply = AgentReply.from_api({"text": "ok", "plan": {"id": "p1", "description": "..."}})
        if reply.plan:
            print(reply.plan.description)
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any


@dataclass(frozen=True)
class Session:
    """One conversation with the Jules service.

    ``id`` is the session resource name (e.g. ``sessions/123``); it is
    interpolated directly into the message and approval URLs.
    """

    id: str

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "Session":
        session_id = data.get("name") or data.get("id")
        if not session_id:
            raise ValueError("Session response has no 'name' or 'id'")
        return cls(id=str(session_id))


@dataclass(frozen=True)
class Plan:
    """A proposed set of changes awaiting user approval."""

    id: str
    description: str

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "Plan":
        return cls(id=str(data["id"]), description=str(data.get("description", "")))


@dataclass(frozen=True)
class AgentReply:
    """Response to a chat message: reply text and an optional plan."""

    text: str
    plan: Plan | None = None

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "AgentReply":
        """Build a reply from a sendMessage response body.

        The text comes from ``text`` when present, otherwise from
        ``message``, which may be a plain string or a ``{"text": ...}`` object.
        """
        text = data.get("text")
        if text is None:
            message = data.get("message")
            text = message.get("text") if isinstance(message, dict) else message

        plan_data = data.get("plan")
        plan = Plan.from_api(plan_data) if plan_data else None
        return cls(text=text or "", plan=plan)


@dataclass(frozen=True)
class RepositoryContext:
    """The GitHub ``owner/repo`` pair of the local workspace."""

    owner: str
    repo: str

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.repo}"


@dataclass(frozen=True)
class PullRequest:
    """A pull request created from an approved plan."""

    number: int
    html_url: str


@dataclass(frozen=True)
class MergeResult:
    """Outcome of a pull request merge."""

    merged: bool
    message: str
    sha: str | None = None


class ChatEventKind(str, Enum):
    """User actions a chat panel can forward to the orchestrator."""

    SEND_MESSAGE = "send_message"
    APPROVE_PLAN = "approve_plan"
    REJECT_PLAN = "reject_plan"
    CHECKOUT_PULL_REQUEST = "checkout_pull_request"
    MERGE_PULL_REQUEST = "merge_pull_request"


@dataclass(frozen=True)
class ChatEvent:
    """One inbound UI event. ``text`` is only used by SEND_MESSAGE."""

    kind: ChatEventKind
    text: str = ""


@dataclass(frozen=True)
class ChatUpdate:
    """One outbound state change pushed to the presenter.

    Attributes:
        text: Transcript line to append, if any
        session: Set when a session has just been created
        plan: Set when a new plan should be revealed
        plan_cleared: True when the plan UI should be hidden
        pull_request: Set when a new PR should be revealed
        is_error: True for ``Error:`` transcript entries
    """

    text: str | None = None
    session: Session | None = None
    plan: Plan | None = None
    plan_cleared: bool = False
    pull_request: PullRequest | None = None
    is_error: bool = False
