"""Custom exception hierarchy for jules-bridge.

Every failure the chat workflow can hit maps onto one of these classes, so
the orchestrator can turn any of them into a transcript entry without
knowing which client raised it.

Exception Hierarchy:
    JulesBridgeError (base)
    ├── ConfigurationError
    ├── CredentialError
    │   └── CredentialMissingError
    ├── ExternalServiceError
    ├── LocalContextError
    └── GitOperationError
        └── LocalCommandError

Example Usage:
    >>> from jules_bridge.exceptions import CredentialMissingError
    >>> try:
    ...     token = store.require("github")
    ... except CredentialMissingError as e:
    ...     print(e.suggestion)
"""


class JulesBridgeError(Exception):
    """Base exception for all jules-bridge errors.

    Attributes:
        message: Human-readable error description
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ConfigurationError(JulesBridgeError):
    """Settings are invalid or could not be loaded."""

    pass


class CredentialError(JulesBridgeError):
    """Credential-related errors.

    Raised when the keyring cannot be read or written, or when a
    required credential is not present.

    Attributes:
        message: Human-readable error description
        namespace: Credential namespace involved ("jules" or "github")
        suggestion: Optional suggestion for resolution
    """

    def __init__(
        self,
        message: str,
        namespace: str | None = None,
        suggestion: str | None = None,
    ) -> None:
        """Initialize exception.

        Args:
            message: Error message
            namespace: The credential namespace that failed
            suggestion: Optional suggestion for resolution
        """
        self.namespace = namespace
        self.suggestion = suggestion
        super().__init__(message)


class CredentialMissingError(CredentialError):
    """A required credential is not stored.

    Raised before any network request is made, so the remote call is never
    attempted without its credential.
    """

    pass


class ExternalServiceError(JulesBridgeError):
    """A remote API (Jules or GitHub) returned a non-success response.

    Attributes:
        message: Error message, usually the upstream error text
        status_code: HTTP status code (if applicable)
        response_text: Response body text (if applicable)
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        response_text: str | None = None,
    ) -> None:
        """Initialize exception.

        Args:
            message: Error message
            status_code: HTTP status code (if applicable)
            response_text: Response body text (if applicable)
        """
        self.status_code = status_code
        self.response_text = response_text

        full_message = message
        if status_code:
            full_message = f"{message} (HTTP {status_code})"

        super().__init__(full_message)
        # Keep the bare upstream message (super sets self.message to full_message)
        self.message = message


class LocalContextError(JulesBridgeError):
    """The local repository context could not be determined.

    Examples:
        - No workspace folder is open
        - The workspace has no readable Git configuration
        - The remote URL is not a github.com HTTPS or SSH URL
    """

    pass


class GitOperationError(JulesBridgeError):
    """Base class for local Git failures."""

    pass


class LocalCommandError(GitOperationError):
    """A local git command exited with a non-zero status.

    Attributes:
        command: The command line that was executed
        returncode: Process exit code
        stderr: Captured standard error
    """

    def __init__(self, command: list[str], returncode: int, stderr: str = "") -> None:
        self.command = command
        self.returncode = returncode
        self.stderr = stderr.strip()

        detail = self.stderr or f"exit code {returncode}"
        super().__init__(f"Command failed: {' '.join(command)}: {detail}")
