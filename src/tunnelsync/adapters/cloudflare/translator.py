"""Translate between Cloudflare tunnel payloads and domain rule collections."""

from __future__ import annotations

from typing import TYPE_CHECKING

from tunnelsync.domain.types import IngressRule, RuleCollection, WarpRouting

from .schema import (
    IngressRulePayload,
    TunnelConfiguration,
    TunnelConfigurationParams,
    WarpRoutingPayload,
)

if TYPE_CHECKING:
    from collections.abc import Mapping


def parse_rule_collection(config: TunnelConfiguration) -> RuleCollection:
    return RuleCollection(
        rules=tuple(_parse_rule(rule) for rule in config.ingress),
        origin_request=config.origin_request,
        warp_routing=(
            WarpRouting(enabled=config.warp_routing.enabled)
            if config.warp_routing is not None
            else None
        ),
    )


def build_configuration_params(collection: RuleCollection) -> TunnelConfigurationParams:
    return TunnelConfigurationParams(
        config=TunnelConfiguration(
            ingress=[_build_rule(rule) for rule in collection.rules],
            origin_request=_as_dict(collection.origin_request),
            warp_routing=(
                WarpRoutingPayload(enabled=collection.warp_routing.enabled)
                if collection.warp_routing is not None
                else None
            ),
        )
    )


def _parse_rule(payload: IngressRulePayload) -> IngressRule:
    return IngressRule(
        hostname=payload.hostname or "",
        service=payload.service,
        path=payload.path,
        origin_options=payload.origin_request,
    )


def _build_rule(rule: IngressRule) -> IngressRulePayload:
    return IngressRulePayload(
        hostname=rule.hostname or None,
        service=rule.service,
        path=rule.path,
        origin_request=_as_dict(rule.origin_options),
    )


def _as_dict(value: Mapping[str, object] | None) -> dict[str, object] | None:
    return dict(value) if value is not None else None
