"""Inbound webhook: signature check, routing and HTTP server."""

from botman.webhook.router import route_event
from botman.webhook.server import handle_webhook_request, run_webhook_server
from botman.webhook.signature import SignatureError, verify_signature

__all__ = [
    "SignatureError",
    "handle_webhook_request",
    "route_event",
    "run_webhook_server",
    "verify_signature",
]
