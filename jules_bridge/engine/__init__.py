"""Chat workflow engine."""

from jules_bridge.engine.orchestrator import ChatOrchestrator, ChatStatus, Presenter

__all__ = ["ChatOrchestrator", "ChatStatus", "Presenter"]
