"""Pydantic models describing the Slack Web API responses used here."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class SlackBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore")


class PostMessageResponse(SlackBaseModel):
    ok: bool
    error: str | None = None
    channel: str | None = None
    ts: str | None = None
