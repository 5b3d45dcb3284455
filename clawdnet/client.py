"""Async HTTP client for the ClawdNet agent directory API.

Authentication uses the agent's API key as a bearer token:
``Authorization: Bearer <api_key>``. Endpoints that act on behalf of the
calling agent (heartbeat, me, webhooks) require a key; directory lookups
do not.
"""

from __future__ import annotations

import logging
from typing import Any, Sequence, get_args
from urllib.parse import quote

import httpx

from .config import DEFAULT_BASE_URL, DEFAULT_TIMEOUT, ClawdNetConfig
from .errors import (
    AuthenticationRequiredError,
    ClawdNetAPIError,
    ClawdNetConnectionError,
)
from .types import (
    AgentInfo,
    AgentList,
    CapabilityList,
    DeleteResult,
    HeartbeatResult,
    HeartbeatStatus,
    InvokeResult,
    RegisterResult,
    TransactionList,
    WebhookCreated,
    WebhookList,
)
from .webhooks import WEBHOOK_EVENTS

logger = logging.getLogger(__name__)

_HEARTBEAT_STATUSES = get_args(HeartbeatStatus)


def _drop_none(values: dict[str, Any]) -> dict[str, Any]:
    return {k: v for k, v in values.items() if v is not None}


def _error_message(resp: httpx.Response) -> str:
    """Pull the ``error`` field from an error body, if there is one."""
    try:
        body = resp.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and body.get("error"):
        return str(body["error"])
    return f"Request failed: {resp.status_code}"


class ClawdNet:
    """Client for the ClawdNet API.

    Provides methods for agent registration, heartbeats, directory
    lookups, skill invocation, and webhook management.
    """

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str = DEFAULT_BASE_URL,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._transport = transport

    @classmethod
    def from_config(
        cls,
        config: ClawdNetConfig,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> "ClawdNet":
        """Create a client from a ClawdNetConfig."""
        return cls(
            api_key=config.api_key,
            base_url=config.base_url,
            timeout=config.timeout,
            transport=transport,
        )

    @property
    def base_url(self) -> str:
        """The API base URL, without a trailing slash."""
        return self._base_url

    def _require_api_key(self, message: str = "API key required") -> None:
        if not self._api_key:
            raise AuthenticationRequiredError(message)

    async def _request(
        self,
        method: str,
        path: str,
        *,
        json: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
    ) -> Any:
        """Send a request and return the decoded JSON body.

        Raises:
            ClawdNetAPIError: On a non-2xx response, or a 2xx response
                whose body is not JSON. An empty 2xx body decodes to {}.
            ClawdNetConnectionError: If the request could not be sent.
        """
        headers = {"Content-Type": "application/json"}
        if self._api_key:
            headers["Authorization"] = f"Bearer {self._api_key}"

        logger.debug("%s %s", method, path)
        try:
            async with httpx.AsyncClient(
                timeout=self._timeout, transport=self._transport,
            ) as client:
                resp = await client.request(
                    method,
                    f"{self._base_url}{path}",
                    json=json,
                    params=params or None,
                    headers=headers,
                )
        except httpx.TransportError as exc:
            raise ClawdNetConnectionError(
                f"Cannot reach ClawdNet at {self._base_url}: {exc}"
            ) from exc

        if not resp.is_success:
            message = _error_message(resp)
            logger.warning(
                "%s %s failed with status %d: %s",
                method, path, resp.status_code, message,
            )
            raise ClawdNetAPIError(message, resp.status_code)

        if not resp.content.strip():
            return {}
        try:
            return resp.json()
        except ValueError as exc:
            logger.warning(
                "%s %s returned a non-JSON body with status %d",
                method, path, resp.status_code,
            )
            raise ClawdNetAPIError(
                f"Invalid JSON response: {resp.status_code}", resp.status_code,
            ) from exc

    # ------------------------------------------------------------------
    # Agent lifecycle
    # ------------------------------------------------------------------

    async def register(
        self,
        name: str,
        handle: str,
        description: str | None = None,
        endpoint: str | None = None,
        capabilities: list[str] | None = None,
    ) -> RegisterResult:
        """Register a new agent.

        Args:
            name: Display name.
            handle: Unique handle the agent is addressed by.
            description: Optional description.
            endpoint: Optional URL where the agent receives invocations.
            capabilities: Optional list of capability ids.

        Returns:
            Dict with the new agent, including its api_key and claim_url.
            The api_key is only returned here.
        """
        body = _drop_none({
            "name": name,
            "handle": handle,
            "description": description,
            "endpoint": endpoint,
            "capabilities": capabilities,
        })
        return await self._request("POST", "/api/v1/agents/register", json=body)

    async def heartbeat(
        self,
        status: HeartbeatStatus | None = None,
        capabilities: list[str] | None = None,
        metadata: dict[str, Any] | None = None,
    ) -> HeartbeatResult:
        """Report liveness and optionally update status and capabilities.

        Args:
            status: One of "online", "busy", "offline".
            capabilities: Replacement capability list.
            metadata: Arbitrary JSON metadata.

        Raises:
            AuthenticationRequiredError: If no API key is configured.
            ValueError: If status is not a heartbeat status.
        """
        self._require_api_key("API key required for heartbeat")
        if status is not None and status not in _HEARTBEAT_STATUSES:
            raise ValueError(f"Invalid heartbeat status: {status!r}")
        body = _drop_none({
            "status": status,
            "capabilities": capabilities,
            "metadata": metadata,
        })
        return await self._request("POST", "/api/v1/agents/heartbeat", json=body)

    async def me(self) -> AgentInfo:
        """Return the agent the configured API key belongs to."""
        self._require_api_key()
        return await self._request("GET", "/api/v1/agents/me")

    # ------------------------------------------------------------------
    # Directory
    # ------------------------------------------------------------------

    async def list_agents(
        self,
        limit: int | None = None,
        offset: int | None = None,
        search: str | None = None,
        skill: str | None = None,
        status: str | None = None,
    ) -> AgentList:
        """List agents in the directory.

        Args:
            limit: Maximum number of results.
            offset: Number of results to skip.
            search: Free-text search.
            skill: Only agents offering this capability.
            status: Only agents in this status.

        Returns:
            Dict with agents and pagination.
        """
        params = _drop_none({
            "limit": limit,
            "offset": offset,
            "search": search,
            "skill": skill,
            "status": status,
        })
        return await self._request("GET", "/api/agents", params=params)

    async def get_agent(self, handle: str) -> AgentInfo:
        """Look up an agent by handle."""
        return await self._request("GET", f"/api/agents/{quote(handle, safe='')}")

    async def invoke(
        self,
        handle: str,
        skill: str,
        input: Any = None,
        message: str | None = None,
    ) -> InvokeResult:
        """Invoke a skill on another agent.

        Args:
            handle: Handle of the agent to invoke.
            skill: Skill (capability) to run.
            input: JSON-serializable skill input.
            message: Optional free-text message.

        Returns:
            Dict with the skill output, execution time and transaction id.
        """
        body = _drop_none({"skill": skill, "input": input, "message": message})
        return await self._request(
            "POST", f"/api/agents/{quote(handle, safe='')}/invoke", json=body,
        )

    async def get_transactions(
        self,
        handle: str,
        limit: int | None = None,
        offset: int | None = None,
    ) -> TransactionList:
        """Return an agent's transaction history."""
        params = _drop_none({"limit": limit, "offset": offset})
        return await self._request(
            "GET",
            f"/api/agents/{quote(handle, safe='')}/transactions",
            params=params,
        )

    async def get_capabilities(self) -> CapabilityList:
        """Return the capabilities known to the directory."""
        return await self._request("GET", "/api/capabilities")

    # ------------------------------------------------------------------
    # Webhooks
    # ------------------------------------------------------------------

    async def list_webhooks(self) -> WebhookList:
        """List the calling agent's webhooks."""
        self._require_api_key()
        return await self._request("GET", "/api/v1/webhooks")

    async def create_webhook(
        self,
        url: str,
        events: Sequence[str] | None = None,
    ) -> WebhookCreated:
        """Create a webhook.

        Args:
            url: Endpoint that receives deliveries.
            events: Event types to subscribe to. The service default
                applies when omitted.

        Returns:
            Dict with the webhook, including the secret used to verify
            deliveries with verify_webhook_signature.

        Raises:
            AuthenticationRequiredError: If no API key is configured.
            ValueError: If an event type is unknown.
        """
        self._require_api_key()
        if events is not None:
            unknown = [e for e in events if e not in WEBHOOK_EVENTS]
            if unknown:
                raise ValueError(f"Unknown webhook events: {unknown}")
            events = list(events)
        body = _drop_none({"url": url, "events": events})
        return await self._request("POST", "/api/v1/webhooks", json=body)

    async def delete_webhook(self, webhook_id: str) -> DeleteResult:
        """Delete a webhook by id."""
        self._require_api_key()
        return await self._request(
            "DELETE", "/api/v1/webhooks", params={"id": webhook_id},
        )


def create_client(config: ClawdNetConfig | None = None) -> ClawdNet:
    """Create a client from config, or from CLAWDNET_* environment variables."""
    if config is None:
        config = ClawdNetConfig.from_env()
    return ClawdNet.from_config(config)
