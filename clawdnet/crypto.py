"""HMAC and comparison primitives used for webhook signatures."""

from __future__ import annotations

from cryptography.hazmat.primitives import constant_time, hashes, hmac


def to_bytes(value: str | bytes | bytearray | memoryview) -> bytes:
    """Return value as bytes, encoding text as UTF-8.

    Raises:
        TypeError: If value is neither text nor bytes-like.
    """
    if isinstance(value, str):
        return value.encode("utf-8")
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)
    raise TypeError(f"Expected str or bytes, got {type(value).__name__}")


def hmac_sha256_hex(key: bytes, message: bytes) -> str:
    """Compute an HMAC-SHA256 digest.

    Args:
        key: The shared secret.
        message: The bytes to authenticate.

    Returns:
        Lowercase hex digest (64 characters).
    """
    mac = hmac.HMAC(key, hashes.SHA256())
    mac.update(message)
    return mac.finalize().hex()


def constant_time_equal(a: bytes, b: bytes) -> bool:
    """Compare two byte strings in constant time.

    Inputs of different length compare unequal.
    """
    return constant_time.bytes_eq(a, b)
