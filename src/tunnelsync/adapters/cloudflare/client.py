"""HTTP client for the Cloudflare tunnel configuration API."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING, Any

import httpx
from pydantic import ValidationError

from tunnelsync.adapters.http_resilience import ResilientClient
from tunnelsync.config.cloudflare import CLOUDFLARE_BASE_URL
from tunnelsync.domain.errors import (
    TunnelConfigError,
    TunnelConfigFetchError,
    TunnelConfigWriteError,
)

from .schema import TunnelConfigurationResponse
from .translator import build_configuration_params, parse_rule_collection

if TYPE_CHECKING:
    from collections.abc import Callable

    from tunnelsync.config.cloudflare import CloudflareConfig
    from tunnelsync.config.http_resilience import ResilienceConfig
    from tunnelsync.domain.types import RuleCollection, TunnelRef

log = getLogger(__name__)


class CloudflareTunnelClient:
    """Reads and replaces the ingress configuration of a named tunnel."""

    def __init__(
        self,
        *,
        resilience: ResilienceConfig,
        client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
    ) -> None:
        self._resilience = resilience
        self._client_factory = client_factory or ResilientClient

    @classmethod
    def from_config(
        cls,
        config: CloudflareConfig,
        *,
        client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
    ) -> CloudflareTunnelClient:
        return cls(resilience=config.resilience, client_factory=client_factory)

    async def fetch(self, tunnel: TunnelRef) -> RuleCollection:
        response = await self._perform_request(
            "GET", tunnel=tunnel, error_type=TunnelConfigFetchError
        )
        if response.result is None:
            raise TunnelConfigFetchError(
                "Cloudflare returned no tunnel configuration", tunnel=tunnel
            )
        return parse_rule_collection(response.result.config)

    async def replace(self, tunnel: TunnelRef, collection: RuleCollection) -> None:
        params = build_configuration_params(collection)
        response = await self._perform_request(
            "PUT",
            tunnel=tunnel,
            error_type=TunnelConfigWriteError,
            json=params.to_request_json(),
        )
        version = response.result.version if response.result is not None else None
        log.debug("Tunnel %s configuration replaced, version=%s", tunnel, version)

    async def _perform_request(
        self,
        method: str,
        *,
        tunnel: TunnelRef,
        error_type: type[TunnelConfigError],
        json: dict[str, Any] | None = None,
    ) -> TunnelConfigurationResponse:
        url = self._configuration_url(tunnel)
        try:
            async with self._client_factory(self._resilience) as client:
                if json is None:
                    response = await client.request(method, url)
                else:
                    response = await client.request(method, url, json=json)
        except httpx.HTTPError as exc:
            raise error_type(f"Cloudflare request failed: {exc}", tunnel=tunnel) from exc

        envelope = _parse_envelope(response)
        if envelope is None:
            response_text = response.text[:200]
            raise error_type(
                f"Unexpected Cloudflare response (HTTP {response.status_code}): {response_text}",
                tunnel=tunnel,
            )
        if response.is_error or not envelope.success:
            details = "; ".join(str(error) for error in envelope.errors) or "no error details"
            raise error_type(
                f"Cloudflare API error (HTTP {response.status_code}): {details}",
                tunnel=tunnel,
            )
        return envelope

    def _configuration_url(self, tunnel: TunnelRef) -> str:
        base_url = (self._resilience.base_url or CLOUDFLARE_BASE_URL).rstrip("/")
        return (
            f"{base_url}/accounts/{tunnel.account_id}"
            f"/cfd_tunnel/{tunnel.tunnel_id}/configurations"
        )


def _parse_envelope(response: httpx.Response) -> TunnelConfigurationResponse | None:
    try:
        payload = response.json()
    except ValueError:
        return None
    if not isinstance(payload, dict):
        return None
    try:
        return TunnelConfigurationResponse.model_validate(payload)
    except ValidationError as exc:
        log.warning("Malformed Cloudflare tunnel configuration payload: %s", exc)
        return None

