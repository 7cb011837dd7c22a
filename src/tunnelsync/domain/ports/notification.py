"""Port for announcing the outcome of a reconciliation cycle."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from tunnelsync.domain.types import ChangeBatch


@runtime_checkable
class ChangeNotifier(Protocol):
    """Best-effort delivery of a change summary.

    ``error`` is ``None`` when the batch was applied. Implementations return
    without delivering anything for an empty batch and raise
    ``NotificationError`` when delivery fails.
    """

    async def notify(self, batch: ChangeBatch, *, error: BaseException | None = None) -> None: ...


__all__ = ["ChangeNotifier"]
