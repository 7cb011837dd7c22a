"""Slack notification configuration values."""

from __future__ import annotations

from dataclasses import dataclass

from .env import optional_env_var, require_env_vars
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy

SLACK_BASE_URL = "https://slack.com/api/"
SLACK_TIMEOUT_SECONDS = 10.0
DEFAULT_OWNER = "tunnelsync"


@dataclass(frozen=True, slots=True)
class SlackConfig:
    token: str
    channel: str
    owner: str
    resilience: ResilienceConfig


def get_slack_config(
    *,
    owner: str | None = None,
    resilience: ResilienceConfig | None = None,
) -> SlackConfig:
    values = require_env_vars(("SLACK_TOKEN", "SLACK_CHANNEL"))
    return SlackConfig(
        token=values["SLACK_TOKEN"],
        channel=values["SLACK_CHANNEL"],
        owner=owner or optional_env_var("TUNNELSYNC_OWNER") or DEFAULT_OWNER,
        resilience=resilience or default_slack_resilience(),
    )


def default_slack_resilience() -> ResilienceConfig:
    # Only rate-limited posts are retried; anything else could double-post.
    return ResilienceConfig(
        name="slack",
        base_url=SLACK_BASE_URL,
        timeout_seconds=SLACK_TIMEOUT_SECONDS,
        retry=RetryPolicy(
            total=2,
            allowed_methods=frozenset({"POST"}),
            status_forcelist=frozenset({429}),
            retry_on_exceptions=(),
        ),
        ratelimit=RateLimit(max_calls=1, per_seconds=1.0),
    )
