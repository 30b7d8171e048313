"""Repository context resolution and local git commands for one workspace.

The workspace is the folder the chat panel operates on. When no workspace
is open (``path`` is None) every operation fails closed: context resolution
returns None and commands raise LocalContextError.

Dependencies:
    Requires GitPython for reading the repository configuration.
"""

import configparser
import subprocess
from pathlib import Path

import git
import structlog
from git.exc import InvalidGitRepositoryError, NoSuchPathError

from jules_bridge.exceptions import LocalCommandError, LocalContextError
from jules_bridge.git.parser import parse_github_remote
from jules_bridge.models.domain import RepositoryContext
from jules_bridge.utils.async_subprocess import run_command

log = structlog.get_logger(__name__)


class Workspace:
    """Local repository the pull request commands run against.

    Nothing is cached: the remote URL and branch are read again on every
    call, so changes to the local configuration are always picked up.

    Attributes:
        path: Workspace folder, or None when no workspace is open.

    Example:
        >>> workspace = Workspace("/path/to/repo")
        >>> context = workspace.resolve_repository_context()
        >>> branch = await workspace.current_branch()
    """

    def __init__(self, path: str | Path | None) -> None:
        self.path = Path(path).resolve() if path is not None else None

    @property
    def is_open(self) -> bool:
        return self.path is not None

    def resolve_repository_context(self) -> RepositoryContext | None:
        """Derive ``{owner, repo}`` from the first configured remote URL.

        Returns:
            RepositoryContext, or None if no workspace is open, the
            repository configuration cannot be read, there is no remote,
            or its URL is not a github.com HTTPS/SSH URL.
        """
        if self.path is None:
            log.debug("repository_context_no_workspace")
            return None

        try:
            repo = git.Repo(self.path)
            remotes = list(repo.remotes)
            url = remotes[0].url if remotes else None
        except (InvalidGitRepositoryError, NoSuchPathError, OSError, ValueError, configparser.Error) as e:
            log.debug("repository_config_unreadable", path=str(self.path), error=str(e))
            return None

        if not url:
            log.debug("repository_no_remote", path=str(self.path))
            return None

        context = parse_github_remote(url)
        if context is None:
            log.debug("repository_remote_unrecognized", url=url)
        return context

    def require_repository_context(self) -> RepositoryContext:
        """Like resolve_repository_context, but raise instead of returning None.

        Raises:
            LocalContextError: If the context cannot be determined
        """
        if self.path is None:
            raise LocalContextError("No workspace folder open.")

        context = self.resolve_repository_context()
        if context is None:
            raise LocalContextError(
                f"Could not determine the GitHub repository for {self.path}. "
                "Expected a github.com HTTPS or SSH remote."
            )
        return context

    async def current_branch(self) -> str:
        """Return the abbreviated name of the checked-out branch.

        Raises:
            LocalContextError: If no workspace is open
            LocalCommandError: If git exits with a non-zero status
        """
        stdout = await self._git("rev-parse", "--abbrev-ref", "HEAD")
        return stdout.strip()

    async def checkout_pull_request(self, number: int) -> str:
        """Fetch a PR's head into ``pr-<number>`` and check it out.

        Returns:
            The local branch name

        Raises:
            LocalContextError: If no workspace is open
            LocalCommandError: If either git command fails
        """
        branch = f"pr-{number}"
        await self._git("fetch", "origin", f"pull/{number}/head:{branch}")
        await self._git("checkout", branch)
        log.info("pull_request_checked_out", number=number, branch=branch)
        return branch

    async def _git(self, *args: str) -> str:
        if self.path is None:
            raise LocalContextError("No workspace folder open.")

        command = ["git", *args]
        try:
            stdout, _, _ = await run_command(*command, cwd=self.path)
        except subprocess.CalledProcessError as e:
            log.warning("git_command_failed", command=command, returncode=e.returncode)
            raise LocalCommandError(command, e.returncode, e.stderr or "") from e
        except OSError as e:
            raise LocalCommandError(command, -1, str(e)) from e
        return stdout
