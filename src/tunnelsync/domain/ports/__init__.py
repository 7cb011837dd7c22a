"""Domain port definitions for adapters."""

from __future__ import annotations

from .notification import ChangeNotifier
from .tunnel_config import TunnelConfigClient

__all__ = ["ChangeNotifier", "TunnelConfigClient"]
