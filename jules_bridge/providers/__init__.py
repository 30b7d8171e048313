"""Remote API clients.

Key Exports:
    JulesSessionClient: Session create / message / plan approval against the Jules API.
    PullRequestClient: Pull request create / checkout / merge against GitHub.
"""

from jules_bridge.providers.github_rest import PullRequestClient
from jules_bridge.providers.jules_rest import JulesSessionClient

__all__ = ["JulesSessionClient", "PullRequestClient"]
