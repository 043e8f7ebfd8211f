"""GitHub webhook signature verification (HMAC-SHA256)."""

from __future__ import annotations

import hashlib
import hmac

from hookrelay.utils.logging import get_logger

log = get_logger(__name__)

SIGNATURE_HEADER = "X-Hub-Signature-256"
SIGNATURE_ALGORITHM = "sha256"

_DIGEST_SIZE = hashlib.sha256().digest_size
_HEX_CHARS = frozenset("0123456789abcdef")  # GitHub sends lowercase hex


def sign_payload(secret: bytes, raw_body: bytes) -> str:
    """Return the ``sha256=<hex>`` header value GitHub would send for *raw_body*."""
    digest = hmac.new(secret, raw_body, hashlib.sha256).hexdigest()
    return f"{SIGNATURE_ALGORITHM}={digest}"


def verify_signature(secret: bytes, header: str, raw_body: bytes) -> bool:
    """Check a ``X-Hub-Signature-256`` header against the raw request body.

    The MAC is computed over *raw_body* exactly as received, so callers must
    pass the bytes read off the wire rather than a re-serialized payload.

    Returns False for a missing secret, a missing or malformed header, or a
    mismatched digest. Never raises. The comparison is constant-time.
    """
    if not secret or not header:
        return False

    try:
        tag, sep, hex_digest = header.partition("=")
        if not sep or tag != SIGNATURE_ALGORITHM:
            log.debug("signature_malformed", reason="bad_algorithm_tag")
            return False

        # fromhex() tolerates whitespace and uppercase, so check the text form first
        if len(hex_digest) != _DIGEST_SIZE * 2:
            log.debug("signature_malformed", reason="bad_digest_length")
            return False
        if not all(c in _HEX_CHARS for c in hex_digest):
            log.debug("signature_malformed", reason="non_hex_digest")
            return False

        provided = bytes.fromhex(hex_digest)
        expected = hmac.new(secret, raw_body, hashlib.sha256).digest()
    except (ValueError, TypeError, UnicodeError) as exc:
        log.debug("signature_malformed", reason=type(exc).__name__)
        return False

    return hmac.compare_digest(expected, provided)
