"""GitHub remote URL parsing.

Only two remote forms are recognized:

    URL form (any scheme: https, http, ssh, git):
        - https://github.com/owner/repo.git
        - https://github.com/owner/repo
        - ssh://git@github.com/owner/repo.git
    scp-like SSH:
        - git@github.com:owner/repo.git
        - git@github.com:owner/repo

Anything else (other hosts, other users, nested paths) yields None rather
than a guess.

Example:
    >>> parse_github_remote("git@github.com:acme/widgets.git")
    RepositoryContext(owner='acme', repo='widgets')
    >>> parse_github_remote("https://gitlab.com/x/y") is None
    True
"""

import re

from jules_bridge.models.domain import RepositoryContext

# Matches: https://github.com/owner/repo.git, ssh://git@github.com/owner/repo.git, git://github.com/...
URL_PATTERN = re.compile(r"^[a-z][a-z0-9+.-]*://(?:[^@/]+@)?github\.com/(?P<owner>[^/]+)/(?P<repo>[^/]+?)/?$")

# Matches: git@github.com:owner/repo.git
SSH_PATTERN = re.compile(r"^git@github\.com:(?P<owner>[^/]+)/(?P<repo>[^/]+?)/?$")


def parse_github_remote(url: str) -> RepositoryContext | None:
    """Extract owner and repo from a github.com remote URL.

    Args:
        url: Remote URL as written in the git configuration. Surrounding
            whitespace is ignored.

    Returns:
        RepositoryContext, or None if the URL matches neither form.
    """
    url = url.strip()

    for pattern in (URL_PATTERN, SSH_PATTERN):
        match = pattern.match(url)
        if match:
            repo = match.group("repo").removesuffix(".git")
            if not repo:
                return None
            return RepositoryContext(owner=match.group("owner"), repo=repo)

    return None
