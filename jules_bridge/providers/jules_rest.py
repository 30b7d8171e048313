"""Jules session API client using direct REST calls."""

from typing import Any

import httpx
import structlog

from jules_bridge.credentials.store import JULES, CredentialStore
from jules_bridge.exceptions import ExternalServiceError
from jules_bridge.models.domain import AgentReply, Session

log = structlog.get_logger(__name__)

DEFAULT_BASE_URL = "https://jules.googleapis.com"
API_VERSION = "v1alpha"


class JulesSessionClient:
    """Client for the Jules AI coding-session API.

    The API key is read from the credential store at the start of every
    call and a fresh HTTP client is opened for that call alone; the client
    object holds no authenticated state between calls.

    Example:
        >>> client = JulesSessionClient(CredentialStore())
        >>> session = await client.create_session()
        >>> reply = await client.send_message(session.id, "fix bug")
    """

    def __init__(
        self,
        credentials: CredentialStore,
        base_url: str = DEFAULT_BASE_URL,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize Jules client.

        Args:
            credentials: Store holding the "jules" API key
            base_url: Jules API base URL
            transport: Optional httpx transport (used to stub the API in tests)
        """
        self.credentials = credentials
        self.base_url = base_url.rstrip("/")
        self.api_base = f"{self.base_url}/{API_VERSION}"
        self._transport = transport

    async def create_session(self) -> Session:
        """Create a new session."""
        data = await self._post("/sessions", {})
        session = Session.from_api(data)
        log.info("session_created", session_id=session.id)
        return session

    async def send_message(self, session_id: str, text: str) -> AgentReply:
        """Post a user message to a session and return the agent's reply."""
        log.info("send_message", session_id=session_id)
        data = await self._post(f"/{session_id}:sendMessage", {"message": {"text": text}})
        reply = AgentReply.from_api(data)
        log.info("message_reply_received", session_id=session_id, has_plan=reply.plan is not None)
        return reply

    async def approve_plan(self, session_id: str, plan_id: str) -> dict[str, Any]:
        """Approve a plan proposed in a session."""
        log.info("approve_plan", session_id=session_id, plan_id=plan_id)
        return await self._post(f"/{session_id}:approvePlan", {"planId": plan_id})

    async def _post(self, path: str, body: dict[str, Any]) -> dict[str, Any]:
        api_key = self.credentials.require(JULES)
        headers = {
            "Content-Type": "application/json",
            "x-goog-api-key": api_key,
        }

        try:
            async with httpx.AsyncClient(base_url=self.api_base, headers=headers, transport=self._transport) as client:
                response = await client.post(path, json=body)
        except httpx.HTTPError as e:
            log.error("jules_request_failed", path=path, error=str(e))
            raise ExternalServiceError(f"Jules API request failed: {e}") from e

        if response.is_error:
            message = _error_message(response)
            log.error("jules_api_error", path=path, status_code=response.status_code, error=message)
            raise ExternalServiceError(message, status_code=response.status_code, response_text=response.text)

        if not response.content:
            return {}
        try:
            return response.json()
        except ValueError as e:
            log.error("jules_invalid_json", path=path, status_code=response.status_code)
            raise ExternalServiceError(
                "Jules API returned invalid JSON",
                status_code=response.status_code,
                response_text=response.text,
            ) from e


def _error_message(response: httpx.Response) -> str:
    """Pull the upstream error text out of a Google-style error body."""
    try:
        data = response.json()
    except ValueError:
        data = None

    if isinstance(data, dict):
        error = data.get("error")
        if isinstance(error, dict) and error.get("message"):
            return str(error["message"])
        if isinstance(error, str):
            return error

    return response.text or response.reason_phrase or "Jules API request failed"
