"""Error taxonomy of the reconciliation core."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .types import TunnelRef


class TunnelSyncError(RuntimeError):
    """Base class for errors raised by tunnelsync."""


class TargetExtractionError(TunnelSyncError, ValueError):
    """Raised when no routable host can be found in a service descriptor."""

    def __init__(self, service: str) -> None:
        super().__init__(f"No hostname found in service descriptor {service!r}")
        self.service = service


class InvalidChangeBatchError(TunnelSyncError, ValueError):
    """Raised before any remote call when a batch cannot be encoded as rules."""

    def __init__(self, names: tuple[str, ...]) -> None:
        super().__init__(f"Records without targets: {', '.join(names)}")
        self.names = names


class TunnelConfigError(TunnelSyncError):
    """A reconciliation cycle failed talking to the tunnel configuration API."""

    def __init__(self, message: str, *, tunnel: TunnelRef | None = None) -> None:
        super().__init__(message)
        self.tunnel = tunnel


class TunnelConfigFetchError(TunnelConfigError):
    """Fetching the current configuration failed; nothing was changed."""


class TunnelConfigWriteError(TunnelConfigError):
    """Replacing the configuration failed; the remote document is unchanged."""


class NotificationError(TunnelSyncError):
    """Delivering a change notification failed."""


__all__ = [
    "InvalidChangeBatchError",
    "NotificationError",
    "TargetExtractionError",
    "TunnelConfigError",
    "TunnelConfigFetchError",
    "TunnelConfigWriteError",
    "TunnelSyncError",
]
