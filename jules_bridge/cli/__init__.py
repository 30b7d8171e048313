"""CLI commands for jules-bridge.

Key Commands:
    chat (jules_bridge.cli.chat):
        Open a terminal chat panel bound to a new Jules session.

    set-jules-key / set-github-token (jules_bridge.cli.credentials):
        Prompt for a secret and store it in the OS keyring.

    credentials (jules_bridge.cli.credentials):
        Show or delete the stored secrets.
"""

from jules_bridge.cli.chat import chat_command
from jules_bridge.cli.credentials import credentials_group, set_github_token, set_jules_key

__all__ = ["chat_command", "credentials_group", "set_github_token", "set_jules_key"]
