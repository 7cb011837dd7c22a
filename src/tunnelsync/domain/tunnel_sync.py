"""Application services for listing and applying tunnel ingress records."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from enum import StrEnum
from logging import getLogger
from typing import TYPE_CHECKING

from .errors import (
    InvalidChangeBatchError,
    NotificationError,
    TunnelConfigError,
    TunnelConfigFetchError,
    TunnelConfigWriteError,
)
from .reconciliation import reconcile
from .rules import decode_rules

if TYPE_CHECKING:
    from .ports import ChangeNotifier, TunnelConfigClient
    from .types import ChangeBatch, DesiredRecord, DomainFilter, RuleCollection, TunnelRef

log = getLogger(__name__)


class ApplyOutcome(StrEnum):
    APPLIED = "applied"
    NOOP = "noop"


@dataclass(slots=True)
class ApplyResult:
    """Outcome of one reconciliation cycle."""

    outcome: ApplyOutcome
    batch: ChangeBatch
    collection: RuleCollection | None = None


@dataclass(slots=True)
class ListRecordsResult:
    """Records currently routed by the tunnel."""

    records: list[DesiredRecord]
    skipped: int = 0


async def list_tunnel_records(
    *,
    client: TunnelConfigClient,
    tunnel: TunnelRef,
    domain_filter: DomainFilter | None = None,
    timeout: float | None = None,
) -> ListRecordsResult:
    """Decode the tunnel's ingress rules into records.

    Rules that cannot be decoded are skipped and counted; rules outside
    ``domain_filter`` are left out without being counted.
    """

    current = await _fetch(client, tunnel, timeout=timeout)
    decoded = decode_rules(current.rules)
    records = decoded.records
    if domain_filter is not None:
        records = [record for record in records if domain_filter.matches(record.name)]
    if decoded.skipped:
        log.debug("Skipped %s undecodable ingress rules of tunnel %s", decoded.skipped, tunnel)
    return ListRecordsResult(records=records, skipped=decoded.skipped)


def scope_batch(batch: ChangeBatch, domain_filter: DomainFilter | None) -> ChangeBatch:
    """Drop records whose hostname is outside ``domain_filter``."""

    if domain_filter is None or not domain_filter.is_configured:
        return batch

    def accept(record: DesiredRecord) -> bool:
        if domain_filter.matches(record.name):
            return True
        log.warning("Ignoring change for %s: outside the configured domain filter", record.name)
        return False

    return batch.filtered(accept)


async def apply_tunnel_changes(
    *,
    client: TunnelConfigClient,
    tunnel: TunnelRef,
    batch: ChangeBatch,
    domain_filter: DomainFilter | None = None,
    timeout: float | None = None,
) -> ApplyResult:
    """Run one fetch, merge and replace cycle for ``batch``.

    An empty batch returns :attr:`ApplyOutcome.NOOP` without touching the
    remote. A create or update without targets raises
    :class:`InvalidChangeBatchError` before the fetch. Fetch and write failures
    propagate; nothing is retried here.
    ``timeout`` bounds each remote call separately.
    """

    scoped = scope_batch(batch, domain_filter)
    if scoped.is_empty:
        log.info("All records are already up to date")
        return ApplyResult(outcome=ApplyOutcome.NOOP, batch=scoped)
    _check_targets(scoped)

    log.info(
        "Applying changes to tunnel %s: create=%s, update=%s, delete=%s",
        tunnel,
        len(scoped.create),
        len(scoped.update_new),
        len(scoped.delete),
    )
    current = await _fetch(client, tunnel, timeout=timeout)
    desired = reconcile(current, scoped)
    await _replace(client, tunnel, desired, timeout=timeout)
    log.info("Tunnel %s now routes %s ingress rules", tunnel, len(desired.rules))
    return ApplyResult(outcome=ApplyOutcome.APPLIED, batch=scoped, collection=desired)


async def sync_tunnel_changes(
    *,
    client: TunnelConfigClient,
    tunnel: TunnelRef,
    batch: ChangeBatch,
    notifier: ChangeNotifier | None = None,
    domain_filter: DomainFilter | None = None,
    timeout: float | None = None,
) -> ApplyResult:
    """Apply ``batch`` and report the outcome through ``notifier``.

    Notification failures are logged and never change the result: a failed
    cycle still raises its own error, a successful one still returns.
    """

    scoped = scope_batch(batch, domain_filter)
    try:
        result = await apply_tunnel_changes(
            client=client, tunnel=tunnel, batch=scoped, timeout=timeout
        )
    except (TunnelConfigError, InvalidChangeBatchError) as exc:
        await notify_outcome(notifier, scoped, error=exc)
        raise

    if result.outcome is ApplyOutcome.APPLIED:
        await notify_outcome(notifier, result.batch)
    return result


async def notify_outcome(
    notifier: ChangeNotifier | None,
    batch: ChangeBatch,
    *,
    error: BaseException | None = None,
) -> bool:
    """Deliver a notification, returning whether it was sent without error."""

    if notifier is None:
        return False
    try:
        await notifier.notify(batch, error=error)
    except NotificationError as exc:
        log.warning("Failed to send change notification: %s", exc)
        return False
    return True


def _check_targets(batch: ChangeBatch) -> None:
    names = tuple(
        record.name for record in (*batch.create, *batch.update_new) if not record.targets
    )
    if names:
        log.error("Refusing change batch with records without targets: %s", ", ".join(names))
        raise InvalidChangeBatchError(names)


async def _fetch(
    client: TunnelConfigClient, tunnel: TunnelRef, *, timeout: float | None
) -> RuleCollection:
    try:
        async with asyncio.timeout(timeout):
            return await client.fetch(tunnel)
    except TimeoutError as exc:
        log.error("Timed out fetching configuration of tunnel %s", tunnel)
        msg = f"Timed out after {timeout}s fetching tunnel configuration"
        raise TunnelConfigFetchError(msg, tunnel=tunnel) from exc
    except TunnelConfigFetchError as exc:
        log.error("Failed to get tunnel configuration: %s", exc)
        raise


async def _replace(
    client: TunnelConfigClient,
    tunnel: TunnelRef,
    collection: RuleCollection,
    *,
    timeout: float | None,
) -> None:
    try:
        async with asyncio.timeout(timeout):
            await client.replace(tunnel, collection)
    except TimeoutError as exc:
        log.error("Timed out updating configuration of tunnel %s", tunnel)
        msg = f"Timed out after {timeout}s replacing tunnel configuration"
        raise TunnelConfigWriteError(msg, tunnel=tunnel) from exc
    except TunnelConfigWriteError as exc:
        log.error("Unable to update tunnel configuration: %s", exc)
        raise
