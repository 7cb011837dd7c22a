"""Tunnel ingress reconciliation core."""

from __future__ import annotations

from .errors import (
    InvalidChangeBatchError,
    NotificationError,
    TargetExtractionError,
    TunnelConfigError,
    TunnelConfigFetchError,
    TunnelConfigWriteError,
    TunnelSyncError,
)
from .reconciliation import reconcile
from .rules import decode_rules, to_ingress_rule, to_record
from .targets import extract_target
from .tunnel_sync import (
    ApplyOutcome,
    ApplyResult,
    ListRecordsResult,
    apply_tunnel_changes,
    list_tunnel_records,
    sync_tunnel_changes,
)
from .types import (
    ChangeBatch,
    DesiredRecord,
    DomainFilter,
    IngressRule,
    RecordType,
    RuleCollection,
    TunnelRef,
    WarpRouting,
)

__all__ = [
    "ApplyOutcome",
    "ApplyResult",
    "ChangeBatch",
    "DesiredRecord",
    "DomainFilter",
    "IngressRule",
    "InvalidChangeBatchError",
    "ListRecordsResult",
    "NotificationError",
    "RecordType",
    "RuleCollection",
    "TargetExtractionError",
    "TunnelConfigError",
    "TunnelConfigFetchError",
    "TunnelConfigWriteError",
    "TunnelRef",
    "TunnelSyncError",
    "WarpRouting",
    "apply_tunnel_changes",
    "decode_rules",
    "extract_target",
    "list_tunnel_records",
    "reconcile",
    "sync_tunnel_changes",
    "to_ingress_rule",
    "to_record",
]
