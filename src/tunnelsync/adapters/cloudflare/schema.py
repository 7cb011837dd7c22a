"""Pydantic models describing the Cloudflare tunnel configuration payloads."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class CloudflareBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class ResponseInfo(CloudflareBaseModel):
    code: int | None = None
    message: str = ""

    def __str__(self) -> str:
        return f"{self.code}: {self.message}" if self.code is not None else self.message


class IngressRulePayload(CloudflareBaseModel):
    hostname: str | None = None
    service: str
    path: str | None = None
    origin_request: dict[str, Any] | None = Field(default=None, alias="originRequest")


class WarpRoutingPayload(CloudflareBaseModel):
    enabled: bool = False


class TunnelConfiguration(CloudflareBaseModel):
    ingress: list[IngressRulePayload] = Field(default_factory=list)
    origin_request: dict[str, Any] | None = Field(default=None, alias="originRequest")
    warp_routing: WarpRoutingPayload | None = Field(default=None, alias="warp-routing")


class TunnelConfigurationResult(CloudflareBaseModel):
    tunnel_id: str | None = None
    version: int | None = None
    config: TunnelConfiguration = Field(default_factory=TunnelConfiguration)


class TunnelConfigurationResponse(CloudflareBaseModel):
    success: bool
    errors: list[ResponseInfo] = Field(default_factory=list)
    messages: list[ResponseInfo] = Field(default_factory=list)
    result: TunnelConfigurationResult | None = None


class TunnelConfigurationParams(CloudflareBaseModel):
    """Request body of ``PUT .../cfd_tunnel/{tunnel_id}/configurations``."""

    config: TunnelConfiguration

    def to_request_json(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
