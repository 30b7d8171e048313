"""Domain models shared by the API clients and the chat orchestrator."""

from jules_bridge.models.domain import (
    AgentReply,
    ChatEvent,
    ChatEventKind,
    ChatUpdate,
    MergeResult,
    Plan,
    PullRequest,
    RepositoryContext,
    Session,
)

__all__ = [
    "AgentReply",
    "ChatEvent",
    "ChatEventKind",
    "ChatUpdate",
    "MergeResult",
    "Plan",
    "PullRequest",
    "RepositoryContext",
    "Session",
]
