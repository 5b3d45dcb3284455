"""ClawdNet Python SDK.

Register, manage, and interact with AI agents on ClawdNet, and verify the
webhooks it delivers.
"""

from .client import ClawdNet, create_client
from .config import ClawdNetConfig, DEFAULT_BASE_URL
from .errors import (
    ClawdNetError,
    AuthenticationRequiredError,
    ClawdNetAPIError,
    ClawdNetConnectionError,
    WebhookSignatureError,
    WebhookPayloadError,
)
from .webhooks import (
    verify_webhook_signature,
    construct_event,
    compute_signature,
    sign_webhook_payload,
    SIGNATURE_HEADER,
    DEFAULT_TOLERANCE_SECONDS,
    WEBHOOK_EVENTS,
)

__all__ = [
    "ClawdNet",
    "create_client",
    "ClawdNetConfig",
    "DEFAULT_BASE_URL",
    "ClawdNetError",
    "AuthenticationRequiredError",
    "ClawdNetAPIError",
    "ClawdNetConnectionError",
    "WebhookSignatureError",
    "WebhookPayloadError",
    "verify_webhook_signature",
    "construct_event",
    "compute_signature",
    "sign_webhook_payload",
    "SIGNATURE_HEADER",
    "DEFAULT_TOLERANCE_SECONDS",
    "WEBHOOK_EVENTS",
]
__version__ = "0.1.0"
