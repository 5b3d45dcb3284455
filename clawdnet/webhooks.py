"""Webhook signature verification for ClawdNet deliveries.

Each delivery carries a ``clawdnet-signature`` header of the form::

    t=<unix seconds>,v1=<hex HMAC-SHA256>

The digest is computed over ``<t>.<raw body>`` keyed by the webhook's
secret. Verification must run on the exact bytes received, before the body
is parsed or re-serialized.
"""

from __future__ import annotations

import json
import logging
import re
import time
from typing import Callable

from . import crypto
from .errors import WebhookPayloadError, WebhookSignatureError
from .types import WebhookEvent

logger = logging.getLogger(__name__)

SIGNATURE_HEADER = "clawdnet-signature"
DEFAULT_TOLERANCE_SECONDS = 300
WEBHOOK_EVENTS = ("invocation", "review", "transaction", "status_change")

_TIMESTAMP_PREFIX = "t="
_SIGNATURE_PREFIX = "v1="
# Anything longer than 20 digits is far outside any window.
_TIMESTAMP_RE = re.compile(r"[0-9]{1,20}")

Payload = str | bytes | bytearray | memoryview
Secret = str | bytes


def _parse_signature_header(signature_header: str) -> tuple[str, str] | None:
    """Extract the ``t`` and ``v1`` values, by key, first match wins.

    Returns None if either is missing or empty.
    """
    timestamp: str | None = None
    signature: str | None = None
    for field in signature_header.split(","):
        field = field.lstrip()
        if timestamp is None and field.startswith(_TIMESTAMP_PREFIX):
            timestamp = field[len(_TIMESTAMP_PREFIX):]
        elif signature is None and field.startswith(_SIGNATURE_PREFIX):
            signature = field[len(_SIGNATURE_PREFIX):]
    if not timestamp or not signature:
        return None
    return timestamp, signature


def compute_signature(payload: Payload, secret: Secret, timestamp: str | int) -> str:
    """Compute the hex digest a delivery signed at ``timestamp`` carries.

    Args:
        payload: Raw webhook body.
        secret: The webhook's shared secret.
        timestamp: Timestamp text exactly as it appears in the header.

    Returns:
        Lowercase hex HMAC-SHA256 of ``<timestamp>.<payload>``.
    """
    message = f"{timestamp}.".encode("ascii") + crypto.to_bytes(payload)
    return crypto.hmac_sha256_hex(crypto.to_bytes(secret), message)


def sign_webhook_payload(
    payload: Payload,
    secret: Secret,
    *,
    timestamp: int | None = None,
) -> str:
    """Build a signature header for a payload, as the service does.

    Args:
        payload: Raw webhook body.
        secret: The webhook's shared secret.
        timestamp: Unix timestamp. Defaults to the current time.

    Returns:
        Header value ``t=<timestamp>,v1=<digest>``.
    """
    if timestamp is None:
        timestamp = int(time.time())
    signature = compute_signature(payload, secret, str(timestamp))
    return f"{_TIMESTAMP_PREFIX}{timestamp},{_SIGNATURE_PREFIX}{signature}"


def verify_webhook_signature(
    payload: Payload,
    signature_header: str,
    secret: Secret,
    tolerance_seconds: float = DEFAULT_TOLERANCE_SECONDS,
    *,
    clock: Callable[[], float] | None = None,
) -> bool:
    """Verify that a webhook delivery was signed with ``secret``.

    Args:
        payload: The raw request body, unmodified.
        signature_header: Value of the ``clawdnet-signature`` header.
        secret: The webhook's shared secret.
        tolerance_seconds: Maximum allowed distance, in either direction,
            between the signed timestamp and the current time.
        clock: Returns the current Unix time. Defaults to time.time.

    Returns:
        True if the signature is valid and within the tolerance window,
        False otherwise. Malformed input of any kind yields False; the
        cause is not reported to the caller.
    """
    if not isinstance(signature_header, str):
        logger.debug("Webhook signature rejected: header is not a string")
        return False

    parsed = _parse_signature_header(signature_header)
    if parsed is None:
        logger.debug("Webhook signature rejected: missing t or v1 field")
        return False
    timestamp_text, received = parsed

    if _TIMESTAMP_RE.fullmatch(timestamp_text) is None:
        logger.debug("Webhook signature rejected: malformed timestamp")
        return False

    now = int((clock or time.time)())
    # A NaN tolerance must reject.
    if not abs(now - int(timestamp_text)) <= tolerance_seconds:
        logger.debug("Webhook signature rejected: timestamp outside tolerance")
        return False

    try:
        expected = compute_signature(payload, secret, timestamp_text)
        received_bytes = crypto.to_bytes(received)
    except (TypeError, UnicodeEncodeError):
        logger.debug("Webhook signature rejected: input cannot be encoded")
        return False

    if not crypto.constant_time_equal(expected.encode("ascii"), received_bytes):
        logger.debug("Webhook signature rejected: digest mismatch")
        return False
    return True


def construct_event(
    payload: Payload,
    signature_header: str,
    secret: Secret,
    tolerance_seconds: float = DEFAULT_TOLERANCE_SECONDS,
    *,
    clock: Callable[[], float] | None = None,
) -> WebhookEvent:
    """Verify a delivery and return its parsed body.

    The body is parsed only after the signature verifies.

    Raises:
        WebhookSignatureError: If verification fails for any reason.
        WebhookPayloadError: If the verified body is not a JSON object.
    """
    if not verify_webhook_signature(
        payload, signature_header, secret, tolerance_seconds, clock=clock,
    ):
        raise WebhookSignatureError("Invalid webhook signature")

    if isinstance(payload, memoryview):
        payload = payload.tobytes()
    try:
        event = json.loads(payload)
    except (ValueError, UnicodeDecodeError) as exc:
        raise WebhookPayloadError("Webhook body is not valid JSON") from exc
    if not isinstance(event, dict):
        raise WebhookPayloadError("Webhook body is not a JSON object")
    return event
