"""Tests for jules_bridge/engine/orchestrator.py - chat workflow state machine."""

from unittest.mock import AsyncMock, Mock

import pytest

from jules_bridge.engine.orchestrator import ChatOrchestrator, ChatStatus
from jules_bridge.exceptions import (
    CredentialMissingError,
    ExternalServiceError,
    LocalCommandError,
    LocalContextError,
)
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

PLAN = Plan(id="p1", description="Change the login handler")
PR = PullRequest(number=42, html_url="https://github.com/acme/widgets/pull/42")


class RecordingPresenter:
    def __init__(self) -> None:
        self.updates: list[ChatUpdate] = []

    def render(self, update: ChatUpdate) -> None:
        self.updates.append(update)

    @property
    def texts(self) -> list[str]:
        return [u.text for u in self.updates if u.text is not None]


@pytest.fixture
def sessions():
    client = Mock()
    client.create_session = AsyncMock(return_value=Session(id="s1"))
    client.send_message = AsyncMock(return_value=AgentReply(text="ok", plan=PLAN))
    client.approve_plan = AsyncMock(return_value={})
    return client


@pytest.fixture
def pulls():
    client = Mock()
    client.create_pull_request = AsyncMock(return_value=PR)
    client.checkout_pull_request = AsyncMock(return_value="pr-42")
    client.merge_pull_request = AsyncMock(return_value=MergeResult(merged=True, message="merged", sha="abc"))
    return client


@pytest.fixture
def presenter():
    return RecordingPresenter()


@pytest.fixture
def orchestrator(sessions, pulls, presenter):
    return ChatOrchestrator(sessions, pulls, presenter)


async def _with_plan(orchestrator: ChatOrchestrator) -> ChatOrchestrator:
    await orchestrator.open()
    await orchestrator.send_message("fix bug")
    return orchestrator


async def _with_pr(orchestrator: ChatOrchestrator) -> ChatOrchestrator:
    await _with_plan(orchestrator)
    await orchestrator.approve_plan()
    return orchestrator


class TestOpen:
    """Panel opened -> session created."""

    @pytest.mark.asyncio
    async def test_session_created_and_displayed(self, orchestrator, presenter):
        assert orchestrator.status == ChatStatus.INITIALIZING

        await orchestrator.open()

        assert orchestrator.status == ChatStatus.ACTIVE
        assert orchestrator.session == Session(id="s1")
        assert presenter.texts == ["Creating session...", "Session created: s1"]
        assert presenter.updates[-1].session == Session(id="s1")

    @pytest.mark.asyncio
    async def test_session_failure(self, orchestrator, sessions, presenter):
        sessions.create_session.side_effect = CredentialMissingError(
            'Jules API key not set. Please run "jules-bridge set-jules-key".'
        )

        await orchestrator.open()

        assert orchestrator.status == ChatStatus.INITIALIZING
        assert orchestrator.session is None
        assert presenter.texts[-1] == (
            'Error creating session: Jules API key not set. Please run "jules-bridge set-jules-key".'
        )
        assert presenter.updates[-1].is_error

    @pytest.mark.asyncio
    async def test_message_without_session(self, orchestrator, sessions, presenter):
        await orchestrator.send_message("hello")

        sessions.send_message.assert_not_awaited()
        assert presenter.texts == ["Error: No active session."]


class TestSendMessage:
    @pytest.mark.asyncio
    async def test_reply_with_plan_sets_current_plan(self, orchestrator, sessions, presenter):
        await _with_plan(orchestrator)

        sessions.send_message.assert_awaited_once_with("s1", "fix bug")
        assert orchestrator.current_plan == PLAN
        assert presenter.updates[-1] == ChatUpdate(text="ok", plan=PLAN)

    @pytest.mark.asyncio
    async def test_reply_without_plan_keeps_existing_plan(self, orchestrator, sessions, presenter):
        await _with_plan(orchestrator)
        sessions.send_message.return_value = AgentReply(text="anything else?")

        await orchestrator.send_message("what does it do?")

        assert orchestrator.current_plan == PLAN
        assert presenter.updates[-1] == ChatUpdate(text="anything else?")

    @pytest.mark.asyncio
    async def test_blank_message_ignored(self, orchestrator, sessions):
        await orchestrator.open()

        await orchestrator.send_message("   ")

        sessions.send_message.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_remote_failure_surfaces_verbatim(self, orchestrator, sessions, presenter):
        await orchestrator.open()
        sessions.send_message.side_effect = ExternalServiceError("API key not valid", status_code=403)

        await orchestrator.send_message("fix bug")

        assert presenter.texts[-1] == "Error: API key not valid (HTTP 403)"
        assert orchestrator.current_plan is None
        assert orchestrator.status == ChatStatus.ACTIVE


class TestApprovePlan:
    @pytest.mark.asyncio
    async def test_end_to_end_plan_to_pull_request(self, orchestrator, sessions, pulls, presenter):
        """open -> fix bug -> plan -> approve -> PR #42 shown."""
        await _with_plan(orchestrator)

        await orchestrator.approve_plan()

        sessions.approve_plan.assert_awaited_once_with("s1", "p1")
        pulls.create_pull_request.assert_awaited_once_with("jules-branch", "Jules PR", "This is a PR created by Jules.")
        assert orchestrator.current_plan is None
        assert orchestrator.current_pr == PR
        assert "Plan approved! Creating pull request..." in presenter.texts
        last = presenter.updates[-1]
        assert last.pull_request == PR
        assert last.plan_cleared is True

    @pytest.mark.asyncio
    async def test_custom_pr_fields(self, sessions, pulls, presenter):
        orchestrator = ChatOrchestrator(
            sessions, pulls, presenter, pr_branch="bot/fix", pr_title="Fix", pr_body="Automated fix"
        )
        await _with_plan(orchestrator)

        await orchestrator.approve_plan()

        pulls.create_pull_request.assert_awaited_once_with("bot/fix", "Fix", "Automated fix")

    @pytest.mark.asyncio
    async def test_without_plan_is_noop(self, orchestrator, sessions, pulls, presenter):
        await orchestrator.open()
        before = list(presenter.updates)

        await orchestrator.approve_plan()

        sessions.approve_plan.assert_not_awaited()
        pulls.create_pull_request.assert_not_awaited()
        assert presenter.updates == before

    @pytest.mark.asyncio
    async def test_approval_failure_keeps_plan(self, orchestrator, sessions, pulls, presenter):
        await _with_plan(orchestrator)
        sessions.approve_plan.side_effect = ExternalServiceError("Plan not found", status_code=404)

        await orchestrator.approve_plan()

        pulls.create_pull_request.assert_not_awaited()
        assert orchestrator.current_plan == PLAN
        assert orchestrator.current_pr is None
        assert presenter.texts[-1] == "Error: Plan not found (HTTP 404)"

    @pytest.mark.asyncio
    async def test_pr_context_failure_keeps_plan(self, orchestrator, pulls, presenter):
        """LocalContextError while creating the PR leaves state untouched."""
        await _with_plan(orchestrator)
        pulls.create_pull_request.side_effect = LocalContextError("No workspace folder open.")

        await orchestrator.approve_plan()

        assert orchestrator.current_plan == PLAN
        assert orchestrator.current_pr is None
        assert presenter.texts[-1] == "Error: No workspace folder open."

    @pytest.mark.asyncio
    async def test_unexpected_error_is_contained(self, orchestrator, pulls, presenter):
        await _with_plan(orchestrator)
        pulls.create_pull_request.side_effect = RuntimeError("boom")

        await orchestrator.approve_plan()

        assert presenter.texts[-1] == "Error: boom"
        assert orchestrator.current_plan == PLAN


class TestRejectPlan:
    @pytest.mark.asyncio
    async def test_reject_clears_plan(self, orchestrator, sessions, presenter):
        await _with_plan(orchestrator)

        await orchestrator.reject_plan()

        assert orchestrator.current_plan is None
        assert presenter.updates[-1] == ChatUpdate(text="Plan rejected.", plan_cleared=True)
        sessions.approve_plan.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_reject_twice_is_noop(self, orchestrator, presenter):
        await _with_plan(orchestrator)
        await orchestrator.reject_plan()
        count = len(presenter.updates)

        await orchestrator.reject_plan()

        assert orchestrator.current_plan is None
        assert len(presenter.updates) == count


class TestPullRequestActions:
    @pytest.mark.asyncio
    async def test_checkout(self, orchestrator, pulls, presenter):
        await _with_pr(orchestrator)

        await orchestrator.checkout_pull_request()

        pulls.checkout_pull_request.assert_awaited_once_with(42)
        assert presenter.texts[-1] == "Checked out PR #42"

    @pytest.mark.asyncio
    async def test_checkout_shell_failure(self, orchestrator, pulls, presenter):
        await _with_pr(orchestrator)
        pulls.checkout_pull_request.side_effect = LocalCommandError(
            ["git", "checkout", "pr-42"], 1, "error: pathspec 'pr-42' did not match"
        )

        await orchestrator.checkout_pull_request()

        assert presenter.texts[-1] == (
            "Error: Command failed: git checkout pr-42: error: pathspec 'pr-42' did not match"
        )
        assert orchestrator.current_pr == PR
        assert orchestrator.status == ChatStatus.ACTIVE

    @pytest.mark.asyncio
    async def test_merge(self, orchestrator, pulls, presenter):
        await _with_pr(orchestrator)

        await orchestrator.merge_pull_request()

        pulls.merge_pull_request.assert_awaited_once_with(42)
        assert presenter.texts[-1] == "Merged PR #42"

    @pytest.mark.asyncio
    async def test_merge_not_merged(self, orchestrator, pulls, presenter):
        await _with_pr(orchestrator)
        pulls.merge_pull_request.return_value = MergeResult(merged=False, message="Head branch was modified")

        await orchestrator.merge_pull_request()

        assert presenter.texts[-1] == "Error: PR #42 was not merged: Head branch was modified"

    @pytest.mark.asyncio
    async def test_actions_without_pr_are_noops(self, orchestrator, pulls):
        await orchestrator.open()

        await orchestrator.checkout_pull_request()
        await orchestrator.merge_pull_request()

        pulls.checkout_pull_request.assert_not_awaited()
        pulls.merge_pull_request.assert_not_awaited()


class TestDispatch:
    @pytest.mark.asyncio
    async def test_routes_every_event_kind(self, orchestrator, sessions, pulls, presenter):
        await orchestrator.open()

        await orchestrator.dispatch(ChatEvent(ChatEventKind.SEND_MESSAGE, text="fix bug"))
        await orchestrator.dispatch(ChatEvent(ChatEventKind.APPROVE_PLAN))
        await orchestrator.dispatch(ChatEvent(ChatEventKind.CHECKOUT_PULL_REQUEST))
        await orchestrator.dispatch(ChatEvent(ChatEventKind.MERGE_PULL_REQUEST))

        sessions.send_message.assert_awaited_once_with("s1", "fix bug")
        sessions.approve_plan.assert_awaited_once_with("s1", "p1")
        pulls.checkout_pull_request.assert_awaited_once_with(42)
        pulls.merge_pull_request.assert_awaited_once_with(42)

    @pytest.mark.asyncio
    async def test_reject_event(self, orchestrator, presenter):
        await _with_plan(orchestrator)

        await orchestrator.dispatch(ChatEvent(ChatEventKind.REJECT_PLAN))

        assert orchestrator.current_plan is None
        assert presenter.texts[-1] == "Plan rejected."

    def test_close(self, orchestrator):
        orchestrator.close()

        assert orchestrator.status == ChatStatus.CLOSED
