"""Local repository access: remote URL parsing and git commands.

Key Exports:
    parse_github_remote: Match a remote URL against the github.com HTTPS/SSH forms.
    Workspace: Repository context, current branch, and PR checkout for one folder.
"""

from jules_bridge.git.parser import parse_github_remote
from jules_bridge.git.workspace import Workspace

__all__ = ["Workspace", "parse_github_remote"]
