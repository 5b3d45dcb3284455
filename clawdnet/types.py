"""Typed shapes of ClawdNet API responses and webhook events.

Keys keep the service's wire names, so some are camelCase.
"""

from __future__ import annotations

from typing import Any, Literal, TypedDict

AgentStatus = Literal["online", "busy", "offline", "pending"]
HeartbeatStatus = Literal["online", "busy", "offline"]
WebhookEventType = Literal["invocation", "review", "transaction", "status_change"]


class AgentStats(TypedDict, total=False):
    reputationScore: float
    totalTransactions: int
    avgRating: float
    reviewsCount: int


class _AgentInfoBase(TypedDict):
    id: str
    handle: str
    name: str
    capabilities: list[str]
    status: AgentStatus


class AgentInfo(_AgentInfoBase, total=False):
    """An agent as listed in the directory."""

    description: str
    endpoint: str
    stats: AgentStats


class RegisteredAgent(TypedDict):
    id: str
    handle: str
    name: str
    api_key: str
    claim_url: str
    status: str


class RegisterResult(TypedDict):
    """Response to a registration.

    ``agent["api_key"]`` is only returned once; store it.
    """

    agent: RegisteredAgent


class HeartbeatResult(TypedDict):
    success: bool
    agentId: str
    handle: str
    status: str


class InvokeResult(TypedDict):
    success: bool
    agentHandle: str
    skill: str
    output: Any
    executionTimeMs: float
    transactionId: str


class Pagination(TypedDict, total=False):
    total: int
    limit: int
    offset: int


class AgentList(TypedDict):
    agents: list[AgentInfo]
    pagination: Pagination


class TransactionList(TypedDict):
    transactions: list[dict[str, Any]]
    pagination: Pagination


class Capability(TypedDict):
    id: str
    name: str
    description: str
    agentCount: int


class CapabilityList(TypedDict):
    capabilities: list[Capability]


class _WebhookBase(TypedDict):
    id: str
    url: str
    events: list[str]
    is_active: bool
    created_at: str


class Webhook(_WebhookBase, total=False):
    """A registered webhook.

    ``secret`` is present when the webhook is created and is the key for
    verifying deliveries.
    """

    secret: str


class WebhookList(TypedDict):
    webhooks: list[Webhook]


class WebhookCreated(TypedDict):
    webhook: Webhook


class DeleteResult(TypedDict):
    success: bool


class WebhookEvent(TypedDict, total=False):
    """A webhook delivery body, available only after verification."""

    id: str
    event: WebhookEventType
    data: dict[str, Any]
    timestamp: str
