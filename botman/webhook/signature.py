"""X-Hub-Signature-256 verification (HMAC-SHA256 over the raw body)."""

import hashlib
import hmac
import re
from http import HTTPStatus

SIGNATURE_PREFIX = "sha256="
_HEX_DIGEST_RE = re.compile(r"[0-9a-fA-F]{64}")


class SignatureError(Exception):
    """Delivery rejected before its payload is looked at."""

    def __init__(self, status: HTTPStatus, message: str) -> None:
        super().__init__(message)
        self.status = status


def sign(secret: str, body: bytes) -> str:
    """Header value GitHub would send for body."""
    digest = hmac.new(secret.encode("utf-8"), body, hashlib.sha256).hexdigest()
    return f"{SIGNATURE_PREFIX}{digest}"


def verify_signature(secret: str, body: bytes, header: str | None) -> None:
    """Raise SignatureError unless header is a valid signature of body.

    A missing or malformed header is 401; a well-formed header that does not
    match is 403.
    """
    if not header or not header.startswith(SIGNATURE_PREFIX):
        raise SignatureError(HTTPStatus.UNAUTHORIZED, "Missing or malformed signature header")
    digest = header[len(SIGNATURE_PREFIX):]
    if not _HEX_DIGEST_RE.fullmatch(digest):
        raise SignatureError(HTTPStatus.UNAUTHORIZED, "Malformed signature digest")
    if not hmac.compare_digest(sign(secret, body), f"{SIGNATURE_PREFIX}{digest.lower()}"):
        raise SignatureError(HTTPStatus.FORBIDDEN, "Signature mismatch")
