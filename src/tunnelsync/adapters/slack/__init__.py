"""Public interface for the Slack notification adapter."""

from __future__ import annotations

from .client import SlackNotifier
from .messages import build_message, change_lines
from .schema import PostMessageResponse

__all__ = ["PostMessageResponse", "SlackNotifier", "build_message", "change_lines"]
