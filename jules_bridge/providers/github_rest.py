"""GitHub pull request client using PyGithub."""

import asyncio
from collections.abc import Callable
from typing import TypeVar

import structlog
from github import Auth, Github, GithubException
from github.Repository import Repository

from jules_bridge.credentials.store import GITHUB, CredentialStore
from jules_bridge.exceptions import ExternalServiceError
from jules_bridge.git.workspace import Workspace
from jules_bridge.models.domain import MergeResult, PullRequest, RepositoryContext

log = structlog.get_logger(__name__)

T = TypeVar("T")

DEFAULT_BASE_URL = "https://api.github.com"


async def _run_sync(func: Callable[[], T]) -> T:
    """Run a synchronous PyGithub call in a thread pool."""
    return await asyncio.to_thread(func)


class PullRequestClient:
    """Create, check out, and merge pull requests for the local workspace.

    The GitHub token is read and a ``Github`` client is built per call.
    Missing credentials and an unresolvable repository context are both
    reported before any request is sent.
    """

    def __init__(
        self,
        credentials: CredentialStore,
        workspace: Workspace,
        base_url: str = DEFAULT_BASE_URL,
    ):
        """Initialize the pull request client.

        Args:
            credentials: Store holding the "github" token
            workspace: Local repository the PRs belong to
            base_url: GitHub API base URL (for GitHub Enterprise)
        """
        self.credentials = credentials
        self.workspace = workspace
        self.base_url = base_url.rstrip("/")

    async def create_pull_request(self, branch: str, title: str, body: str) -> PullRequest:
        """Open a PR from ``<owner>:<branch>`` into the locally checked-out branch."""
        token = self.credentials.require(GITHUB)
        context = self.workspace.require_repository_context()
        head = f"{context.owner}:{branch}"
        base = await self.workspace.current_branch()

        log.info("create_pull_request", repo=context.full_name, head=head, base=base)

        def _create() -> PullRequest:
            gh_pr = self._get_repo(token, context).create_pull(title=title, body=body, head=head, base=base)
            return PullRequest(number=gh_pr.number, html_url=gh_pr.html_url)

        pr = await self._call(_create, "github_create_pr_failed")
        log.info("pull_request_created", number=pr.number, url=pr.html_url)
        return pr

    async def checkout_pull_request(self, number: int) -> str:
        """Fetch the PR head into ``pr-<number>`` and check it out."""
        return await self.workspace.checkout_pull_request(number)

    async def merge_pull_request(self, number: int) -> MergeResult:
        """Merge a PR by number."""
        token = self.credentials.require(GITHUB)
        context = self.workspace.require_repository_context()

        log.info("merge_pull_request", repo=context.full_name, number=number)

        def _merge() -> MergeResult:
            status = self._get_repo(token, context).get_pull(number).merge()
            return MergeResult(merged=bool(status.merged), message=status.message or "", sha=status.sha)

        result = await self._call(_merge, "github_merge_pr_failed")
        log.info("pull_request_merged", number=number, merged=result.merged)
        return result

    def _get_repo(self, token: str, context: RepositoryContext) -> Repository:
        client = Github(auth=Auth.Token(token), base_url=self.base_url)
        # lazy=True skips the repository GET; the create/merge call reports 404s
        return client.get_repo(context.full_name, lazy=True)

    async def _call(self, func: Callable[[], T], event: str) -> T:
        try:
            return await _run_sync(func)
        except GithubException as e:
            message = _github_message(e)
            log.error(event, status=e.status, error=message)
            raise ExternalServiceError(message, status_code=e.status, response_text=str(e.data)) from e


def _github_message(e: GithubException) -> str:
    data = e.data if isinstance(e.data, dict) else {}
    message = str(data.get("message") or "GitHub API request failed")
    errors = data.get("errors")
    if isinstance(errors, list):
        details = [err.get("message") for err in errors if isinstance(err, dict) and err.get("message")]
        if details:
            message = f"{message}: {'; '.join(details)}"
    return message
