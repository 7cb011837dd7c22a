"""Application configuration helpers."""

from __future__ import annotations

from .cloudflare import (
    CloudflareConfig,
    CloudflareCredentials,
    get_cloudflare_config,
    get_cloudflare_credentials,
)
from .domains import get_domain_filter
from .env import optional_env_var, require_env_vars, split_env_list
from .errors import ConfigurationError, MissingConfigurationError
from .http_resilience import NO_RETRY, RateLimit, ResilienceConfig, RetryPolicy
from .logging import configure_logging
from .slack import SlackConfig, get_slack_config

__all__ = [
    "NO_RETRY",
    "CloudflareConfig",
    "CloudflareCredentials",
    "ConfigurationError",
    "MissingConfigurationError",
    "RateLimit",
    "ResilienceConfig",
    "RetryPolicy",
    "SlackConfig",
    "configure_logging",
    "get_cloudflare_config",
    "get_cloudflare_credentials",
    "get_domain_filter",
    "get_slack_config",
    "optional_env_var",
    "require_env_vars",
    "split_env_list",
]
