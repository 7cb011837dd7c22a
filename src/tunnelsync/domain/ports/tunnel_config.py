"""Port for reading and replacing a tunnel's configuration document."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from tunnelsync.domain.types import RuleCollection, TunnelRef


@runtime_checkable
class TunnelConfigClient(Protocol):
    """Fetch/replace access to a remote tunnel configuration.

    Implementations raise ``TunnelConfigFetchError`` from :meth:`fetch` and
    ``TunnelConfigWriteError`` from :meth:`replace`. Both calls are idempotent;
    there is no partial update.
    """

    async def fetch(self, tunnel: TunnelRef) -> RuleCollection: ...

    async def replace(self, tunnel: TunnelRef, collection: RuleCollection) -> None: ...


__all__ = ["TunnelConfigClient"]
