"""Configuration loading from YAML and environment.

Secrets (PAT, webhook secret) are taken from environment variables or from
files (Docker secrets). Never put real tokens in config files committed to
the repo.
"""

import os
from pathlib import Path
from typing import Any, List

import yaml
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Injected by load_config so secret resolution can read env/file
_current_env: dict[str, str] = {}


class ConfigError(Exception):
    """Raised when required settings are missing."""

    pass


def _read_secret(env_key: str, file_env_key: str) -> str | None:
    """Read secret from env var or from file path in env (e.g. Docker
    secrets)."""
    value = _current_env.get(env_key)
    if value:
        return value.strip()
    file_path = _current_env.get(file_env_key)
    if file_path:
        return Path(file_path).read_text().strip()
    return None


class BotConfig(BaseSettings):
    """Allow-list and commit identity."""

    model_config = SettingsConfigDict(env_prefix="BOT_", extra="ignore", frozen=True)

    authorized_users: List[str] = Field(
        default_factory=lambda: ["williamboman"],
        description="Logins allowed to trigger commands",
    )
    name: str | None = Field(default=None, description="Git user.name for commits; defaults to the bot login")
    email: str | None = Field(default=None, description="Git user.email for commits")


class GitHubConfig(BaseSettings):
    """GitHub identity, API endpoints and webhook secret."""

    model_config = SettingsConfigDict(env_prefix="GITHUB_", extra="ignore", frozen=True)

    login: str | None = Field(default=None, description="Bot GitHub login")
    pat: str | None = Field(default=None, description="Bot personal access token; use env or secret file")
    webhook_secret: str | None = Field(default=None, description="Shared secret for X-Hub-Signature-256")
    api_url: str = Field(default="https://api.github.com", description="REST API base URL")
    graphql_url: str = Field(default="https://api.github.com/graphql", description="GraphQL endpoint")
    user_agent: str = Field(default="botman (+https://github.com/williamboman/botman)")
    timeout: int = Field(default=30, ge=1, description="HTTP request timeout in seconds")


class WebhookConfig(BaseSettings):
    """Webhook server settings."""

    model_config = SettingsConfigDict(env_prefix="WEBHOOK_", extra="ignore", frozen=True)

    host: str = Field(default="0.0.0.0", description="Bind host")
    port: int = Field(default=8000, ge=1, le=65535, description="Bind port")
    mason_path: str = Field(default="/api/v1/mason/github-webhook")
    registry_path: str = Field(default="/api/v1/mason-registry/github-webhook")
    max_body_bytes: int = Field(default=1024 * 1024, ge=1, description="Largest accepted payload")


class MasonConfig(BaseSettings):
    """Commands run by the mason /fixup action."""

    model_config = SettingsConfigDict(env_prefix="MASON_", extra="ignore", frozen=True)

    generate_command: List[str] = Field(default_factory=lambda: ["make", "generate"])
    format_command: List[str] = Field(default_factory=lambda: ["stylua", "."])
    # Generated paths reset to upstream's copy after regeneration (best effort)
    restore_paths: List[str] = Field(default_factory=lambda: ["lua/mason-schemas"])


class RegistryConfig(BaseSettings):
    """Layout of the package registry repository."""

    model_config = SettingsConfigDict(env_prefix="REGISTRY_", extra="ignore", frozen=True)

    packages_dir: str = Field(default="packages")
    old_extension: str = Field(default=".yml")
    new_extension: str = Field(default=".yaml")


class LoggingConfig(BaseSettings):
    """Logging settings."""

    model_config = SettingsConfigDict(env_prefix="LOGGING_", extra="ignore", frozen=True)

    level: str = Field(default="INFO", description="Log level")
    format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Log format",
    )


class AppConfig(BaseSettings):
    """Root application config from YAML + env."""

    model_config = SettingsConfigDict(extra="ignore", frozen=True)

    bot: BotConfig = Field(default_factory=BotConfig)
    github: GitHubConfig = Field(default_factory=GitHubConfig)
    webhook: WebhookConfig = Field(default_factory=WebhookConfig)
    mason: MasonConfig = Field(default_factory=MasonConfig)
    registry: RegistryConfig = Field(default_factory=RegistryConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @property
    def github_pat_resolved(self) -> str | None:
        """Resolve the PAT from config, env or Docker secret file."""
        return self.github.pat or _read_secret("GITHUB_PAT", "GITHUB_PAT_FILE")

    @property
    def webhook_secret_resolved(self) -> str | None:
        """Resolve the webhook secret from config, env or Docker secret file."""
        return self.github.webhook_secret or _read_secret("GITHUB_WEBHOOK_SECRET", "GITHUB_WEBHOOK_SECRET_FILE")

    @property
    def mentionable_users(self) -> frozenset[str]:
        """Logins accepted after '@' in a command: the allow-list plus the bot itself."""
        users = set(self.bot.authorized_users)
        if self.github.login:
            users.add(self.github.login)
        return frozenset(users)

    @property
    def commit_name(self) -> str:
        return self.bot.name or self.github.login or "botman"

    @property
    def commit_email(self) -> str:
        return self.bot.email or f"{self.commit_name}@users.noreply.github.com"

    def require_credentials(self) -> None:
        """Raise ConfigError naming every missing required setting."""
        missing = []
        if not self.github.login:
            missing.append("GITHUB_LOGIN")
        if not self.github_pat_resolved:
            missing.append("GITHUB_PAT")
        if not self.webhook_secret_resolved:
            missing.append("GITHUB_WEBHOOK_SECRET")
        if missing:
            raise ConfigError(f"Missing required settings: {', '.join(missing)}")


def _substitute_env(value: Any) -> Any:
    """Replace ${VAR} and $VAR in strings with os.environ."""
    if isinstance(value, str):
        if value.startswith("${") and value.endswith("}"):
            key = value[2:-1].strip()
            return _current_env.get(key, value)
        if value.startswith("$") and not value.startswith("${"):
            key = value[1:].strip()
            return _current_env.get(key, value)
        return value
    if isinstance(value, dict):
        return {k: _substitute_env(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_substitute_env(v) for v in value]
    return value


def load_config(config_path: Path | None = None) -> AppConfig:
    """Load config from YAML file and environment.

    Required: GITHUB_LOGIN, GITHUB_PAT (or GITHUB_PAT_FILE) and
    GITHUB_WEBHOOK_SECRET (or GITHUB_WEBHOOK_SECRET_FILE). They are not
    checked here; call AppConfig.require_credentials() before serving.
    """
    global _current_env

    _current_env = dict(os.environ)

    path = config_path or Path("config.yaml")
    if not path.is_file():
        return AppConfig()

    raw = yaml.safe_load(path.read_text()) or {}
    raw = _substitute_env(raw)

    return AppConfig(
        bot=BotConfig(**(raw.get("bot") or {})),
        github=GitHubConfig(**(raw.get("github") or {})),
        webhook=WebhookConfig(**(raw.get("webhook") or {})),
        mason=MasonConfig(**(raw.get("mason") or {})),
        registry=RegistryConfig(**(raw.get("registry") or {})),
        logging=LoggingConfig(**(raw.get("logging") or {})),
    )
