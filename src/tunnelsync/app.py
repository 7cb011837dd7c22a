"""Application orchestration entry points."""

from __future__ import annotations

import asyncio
from logging import getLogger
from typing import TYPE_CHECKING

from tunnelsync.adapters.cloudflare import CloudflareTunnelClient
from tunnelsync.adapters.slack import SlackNotifier
from tunnelsync.config import (
    MissingConfigurationError,
    get_cloudflare_config,
    get_domain_filter,
    get_slack_config,
)
from tunnelsync.domain.tunnel_sync import list_tunnel_records, sync_tunnel_changes
from tunnelsync.domain.types import TunnelRef

if TYPE_CHECKING:
    from tunnelsync.domain.ports import ChangeNotifier, TunnelConfigClient
    from tunnelsync.domain.tunnel_sync import ApplyResult, ListRecordsResult
    from tunnelsync.domain.types import ChangeBatch, DomainFilter


log = getLogger(__name__)


def list_tunnel_endpoints(
    *,
    source: TunnelConfigClient | None = None,
    tunnel: TunnelRef | None = None,
    domain_filter: DomainFilter | None = None,
    timeout: float | None = None,
) -> ListRecordsResult:
    """List the records currently routed by the configured tunnel."""

    effective_source, effective_tunnel = _resolve_tunnel(source, tunnel)
    result = asyncio.run(
        list_tunnel_records(
            client=effective_source,
            tunnel=effective_tunnel,
            domain_filter=domain_filter or get_domain_filter(),
            timeout=timeout,
        )
    )
    log.info(
        "Tunnel %s routes %s records (%s rules skipped)",
        effective_tunnel,
        len(result.records),
        result.skipped,
    )
    return result


def apply_tunnel_endpoint_changes(
    batch: ChangeBatch,
    *,
    source: TunnelConfigClient | None = None,
    tunnel: TunnelRef | None = None,
    notifier: ChangeNotifier | None = None,
    notify: bool = True,
    owner: str | None = None,
    domain_filter: DomainFilter | None = None,
    timeout: float | None = None,
) -> ApplyResult:
    """Apply ``batch`` to the configured tunnel and report it to Slack."""

    effective_source, effective_tunnel = _resolve_tunnel(source, tunnel)
    effective_notifier = (notifier or build_slack_notifier(owner=owner)) if notify else None
    log.info(
        "Starting tunnel sync: tunnel=%s, create=%s, update=%s, delete=%s, notify=%s",
        effective_tunnel,
        len(batch.create),
        len(batch.update_new),
        len(batch.delete),
        effective_notifier is not None,
    )

    result = asyncio.run(
        sync_tunnel_changes(
            client=effective_source,
            tunnel=effective_tunnel,
            batch=batch,
            notifier=effective_notifier,
            domain_filter=domain_filter or get_domain_filter(),
            timeout=timeout,
        )
    )

    log.info("Finished tunnel sync: outcome=%s", result.outcome)
    return result


def build_slack_notifier(*, owner: str | None = None) -> SlackNotifier | None:
    """Return a Slack notifier, or ``None`` when Slack is not configured."""

    try:
        config = get_slack_config(owner=owner)
    except MissingConfigurationError as exc:
        log.info("Slack notifications disabled: %s", exc)
        return None
    return SlackNotifier(config=config)


def _resolve_tunnel(
    source: TunnelConfigClient | None,
    tunnel: TunnelRef | None,
) -> tuple[TunnelConfigClient, TunnelRef]:
    if source is not None and tunnel is not None:
        return source, tunnel
    config = get_cloudflare_config()
    return (
        source or CloudflareTunnelClient.from_config(config),
        tunnel or TunnelRef(account_id=config.account_id, tunnel_id=config.tunnel_id),
    )
