"""Public interface for the Cloudflare tunnel adapter."""

from __future__ import annotations

from .client import CloudflareTunnelClient
from .schema import (
    IngressRulePayload,
    TunnelConfiguration,
    TunnelConfigurationParams,
    TunnelConfigurationResponse,
)
from .translator import build_configuration_params, parse_rule_collection

__all__ = [
    "CloudflareTunnelClient",
    "IngressRulePayload",
    "TunnelConfiguration",
    "TunnelConfigurationParams",
    "TunnelConfigurationResponse",
    "build_configuration_params",
    "parse_rule_collection",
]
