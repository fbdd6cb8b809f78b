"""Webhook HTTP server: health check plus one POST path per surface.

Each delivery is handled on its own thread. Checks run in a fixed order:
body size, signature, event header, then payload.
"""

import json
import logging
from http import HTTPStatus
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Any, Dict, Mapping
from urllib.parse import urlsplit

from botman.actions.executor import CommandSurface
from botman.adapters.github import GitHubClient
from botman.config import AppConfig
from botman.mason import MasonSurface
from botman.registry import RegistrySurface
from botman.webhook.router import route_event
from botman.webhook.signature import SignatureError, verify_signature

LOG = logging.getLogger("botman.webhook")

SIGNATURE_HEADER = "X-Hub-Signature-256"
EVENT_HEADER = "X-GitHub-Event"
DELIVERY_HEADER = "X-GitHub-Delivery"


def handle_webhook_request(
    surface: CommandSurface,
    secret: str,
    headers: Mapping[str, str],
    body: bytes,
    max_body_bytes: int,
) -> HTTPStatus:
    """Validate a delivery and route it; returns the status to answer with."""
    if len(body) > max_body_bytes:
        LOG.warning("Rejecting %s byte delivery (limit %s)", len(body), max_body_bytes)
        return HTTPStatus.REQUEST_ENTITY_TOO_LARGE
    try:
        verify_signature(secret, body, headers.get(SIGNATURE_HEADER))
    except SignatureError as e:
        LOG.warning("Rejecting delivery %s: %s", headers.get(DELIVERY_HEADER), e)
        return e.status
    event_name = headers.get(EVENT_HEADER)
    if not event_name:
        LOG.warning("Rejecting delivery %s: missing %s", headers.get(DELIVERY_HEADER), EVENT_HEADER)
        return HTTPStatus.BAD_REQUEST
    LOG.info("Webhook event: %s on %s (delivery %s)", event_name, surface.name, headers.get(DELIVERY_HEADER))
    return route_event(surface, event_name, body)


def build_surfaces(config: AppConfig, client: GitHubClient) -> Dict[str, CommandSurface]:
    """Map each configured POST path to its surface."""
    return {
        config.webhook.mason_path: MasonSurface(client, config),
        config.webhook.registry_path: RegistrySurface(client, config),
    }


class WebhookHandler(BaseHTTPRequestHandler):
    """Handle GET /health and POST on every surface path."""

    config: AppConfig
    surfaces: Dict[str, CommandSurface] = {}

    def do_GET(self) -> None:
        if urlsplit(self.path).path in ("/health", "/"):
            self._respond(HTTPStatus.OK, {"status": "ok", "service": "botman"})
            return
        self._respond(HTTPStatus.NOT_FOUND)

    def do_POST(self) -> None:
        surface = self.surfaces.get(urlsplit(self.path).path)
        if surface is None:
            self._respond(HTTPStatus.NOT_FOUND)
            return
        try:
            length = int(self.headers.get("Content-Length", 0))
        except ValueError:
            self._respond(HTTPStatus.BAD_REQUEST)
            return
        if length > self.config.webhook.max_body_bytes:
            LOG.warning("Rejecting %s byte delivery (limit %s)", length, self.config.webhook.max_body_bytes)
            self.close_connection = True
            self._respond(HTTPStatus.REQUEST_ENTITY_TOO_LARGE)
            return
        body = self.rfile.read(length) if length > 0 else b""
        try:
            status = handle_webhook_request(
                surface,
                self.config.webhook_secret_resolved or "",
                self.headers,
                body,
                self.config.webhook.max_body_bytes,
            )
        except Exception:
            LOG.exception("Unhandled error while processing delivery %s", self.headers.get(DELIVERY_HEADER))
            status = HTTPStatus.INTERNAL_SERVER_ERROR
        self._respond(status)

    def _respond(self, status: HTTPStatus, payload: Dict[str, Any] | None = None) -> None:
        self.send_response(status)
        if status == HTTPStatus.NO_CONTENT:
            self.end_headers()
            return
        data = json.dumps(payload or {"status": status.value, "message": status.phrase}).encode()
        self.send_header("Content-Type", "application/json")
        self.send_header("Content-Length", str(len(data)))
        self.end_headers()
        self.wfile.write(data)

    def log_message(self, format: str, *args: Any) -> None:
        LOG.debug(format, *args)


def run_webhook_server(config: AppConfig, client: GitHubClient) -> None:
    """Run the threaded HTTP server until interrupted."""
    host = config.webhook.host
    port = config.webhook.port
    WebhookHandler.config = config
    WebhookHandler.surfaces = build_surfaces(config, client)
    server = ThreadingHTTPServer((host, port), WebhookHandler)
    LOG.info("Webhook server listening on %s:%s (%s)", host, port, ", ".join(WebhookHandler.surfaces))
    try:
        server.serve_forever()
    finally:
        server.server_close()
