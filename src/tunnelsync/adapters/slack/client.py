"""Slack implementation of the change notifier port."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

import httpx
from pydantic import ValidationError

from tunnelsync.adapters.http_resilience import ResilientClient
from tunnelsync.config.slack import SLACK_BASE_URL
from tunnelsync.domain.errors import NotificationError

from .messages import build_message
from .schema import PostMessageResponse

if TYPE_CHECKING:
    from collections.abc import Callable

    from tunnelsync.config.http_resilience import ResilienceConfig
    from tunnelsync.config.slack import SlackConfig
    from tunnelsync.domain.types import ChangeBatch

log = getLogger(__name__)


class SlackNotifier:
    """Posts change summaries to one Slack channel through ``chat.postMessage``."""

    def __init__(
        self,
        *,
        config: SlackConfig,
        client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
    ) -> None:
        self._config = config
        self._client_factory = client_factory or ResilientClient

    async def notify(self, batch: ChangeBatch, *, error: BaseException | None = None) -> None:
        if batch.is_empty:
            return

        payload = build_message(
            batch,
            channel=self._config.channel,
            owner=self._config.owner,
            succeeded=error is None,
        )
        base_url = (self._config.resilience.base_url or SLACK_BASE_URL).rstrip("/")
        try:
            async with self._client_factory(self._config.resilience) as client:
                response = await client.post(
                    f"{base_url}/chat.postMessage",
                    json=payload,
                    headers={"Authorization": f"Bearer {self._config.token}"},
                )
        except httpx.HTTPError as exc:
            raise NotificationError(f"Slack request failed: {exc}") from exc

        if response.is_error:
            raise NotificationError(f"Slack returned HTTP {response.status_code}")
        try:
            body = PostMessageResponse.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            raise NotificationError("Unexpected Slack response payload") from exc
        if not body.ok:
            raise NotificationError(f"Slack API error: {body.error or 'unknown'}")

        log.info("Sent change notification to Slack channel %s", self._config.channel)
