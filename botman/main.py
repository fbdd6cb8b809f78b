"""botman entry point.

Usage: botman [serve] [--config PATH] [--check]. GITHUB_LOGIN, GITHUB_PAT
and GITHUB_WEBHOOK_SECRET must be set (the latter two may point at files via
*_FILE); the process exits with status 1 otherwise.
"""

import argparse
import logging
import sys
from pathlib import Path

from botman.adapters.github import GitHubClient
from botman.config import AppConfig, ConfigError, load_config
from botman.logging import BotmanLogging

LOG = logging.getLogger("botman")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse CLI with optional subcommand (only serve exists)."""
    argv = argv if argv is not None else sys.argv[1:]
    rest = list(argv)
    if rest and rest[0] == "serve":
        rest = rest[1:]

    parser = argparse.ArgumentParser(
        prog="botman",
        description="botman - GitHub webhook bot for the mason repositories",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        default=Path("config.yaml"),
        help="Path to YAML config file",
    )
    parser.add_argument(
        "--check",
        action="store_true",
        help="Only load and validate config, then exit",
    )
    return parser.parse_args(rest)


def build_client(config: AppConfig) -> GitHubClient:
    return GitHubClient(
        token=config.github_pat_resolved or "",
        api_url=config.github.api_url,
        graphql_url=config.github.graphql_url,
        user_agent=config.github.user_agent,
        timeout=config.github.timeout,
    )


def main(argv: list[str] | None = None) -> int:
    """Entry point: load config, verify credentials, serve webhooks."""
    args = parse_args(argv)

    config = load_config(args.config)
    BotmanLogging(config.logging).setup()

    try:
        config.require_credentials()
    except ConfigError as e:
        LOG.error("%s", e)
        return 1

    if args.check:
        LOG.info(
            "Config OK: bot %s, mason at %s, registry at %s",
            config.github.login,
            config.webhook.mason_path,
            config.webhook.registry_path,
        )
        return 0

    from botman.webhook.server import run_webhook_server

    try:
        run_webhook_server(config, build_client(config))
    except KeyboardInterrupt:
        return 0
    except Exception as e:
        LOG.exception("Fatal error: %s", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
