"""Cloudflare tunnel configuration values."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from .env import optional_env_var, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .http_resilience import NO_RETRY, RateLimit, ResilienceConfig

CLOUDFLARE_BASE_URL = "https://api.cloudflare.com/client/v4/"
CLOUDFLARE_TIMEOUT_SECONDS = 30.0
TOKEN_FILE_PREFIX = "file:"


@dataclass(frozen=True, slots=True)
class CloudflareCredentials:
    """Either an API token or a legacy global API key with its account email."""

    api_token: str | None = None
    api_key: str | None = None
    api_email: str | None = None

    def headers(self) -> dict[str, str]:
        if self.api_token is not None:
            return {"Authorization": f"Bearer {self.api_token}"}
        if self.api_key is not None and self.api_email is not None:
            return {"X-Auth-Key": self.api_key, "X-Auth-Email": self.api_email}
        raise ConfigurationError("Cloudflare credentials are incomplete")


@dataclass(frozen=True, slots=True)
class CloudflareConfig:
    account_id: str
    tunnel_id: str
    credentials: CloudflareCredentials
    resilience: ResilienceConfig


def get_cloudflare_config(*, resilience: ResilienceConfig | None = None) -> CloudflareConfig:
    values = require_env_vars(("CF_ACCOUNT_ID", "CF_TUNNEL_ID"))
    credentials = get_cloudflare_credentials()
    return CloudflareConfig(
        account_id=values["CF_ACCOUNT_ID"],
        tunnel_id=values["CF_TUNNEL_ID"],
        credentials=credentials,
        resilience=resilience or default_cloudflare_resilience(credentials),
    )


def get_cloudflare_credentials() -> CloudflareCredentials:
    """Read credentials, preferring ``CF_API_TOKEN`` over ``CF_API_KEY``/``CF_API_EMAIL``.

    A token of the form ``file:<path>`` is read from that file.
    """

    token = optional_env_var("CF_API_TOKEN")
    if token is not None:
        return CloudflareCredentials(api_token=_resolve_token(token))

    values = require_env_vars(("CF_API_KEY", "CF_API_EMAIL"))
    return CloudflareCredentials(api_key=values["CF_API_KEY"], api_email=values["CF_API_EMAIL"])


def default_cloudflare_resilience(credentials: CloudflareCredentials) -> ResilienceConfig:
    # A failed cycle is retried by the calling controller, never by the transport.
    return ResilienceConfig(
        name="cloudflare",
        base_url=CLOUDFLARE_BASE_URL,
        timeout_seconds=CLOUDFLARE_TIMEOUT_SECONDS,
        retry=NO_RETRY,
        ratelimit=RateLimit(max_calls=4, per_seconds=1.0),
        default_headers=credentials.headers(),
    )


def _resolve_token(token: str) -> str:
    if not token.startswith(TOKEN_FILE_PREFIX):
        return token
    path = Path(token.removeprefix(TOKEN_FILE_PREFIX)).expanduser()
    try:
        contents = path.read_text(encoding="utf-8").strip()
    except OSError as exc:
        raise ConfigurationError(f"Failed to read CF_API_TOKEN from file {path}: {exc}") from exc
    if not contents:
        raise MissingConfigurationError(f"CF_API_TOKEN file {path} is empty")
    return contents
