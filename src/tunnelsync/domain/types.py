"""Value types shared by the tunnel reconciliation core."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping


class RecordType(StrEnum):
    A = "A"
    AAAA = "AAAA"
    CNAME = "CNAME"


@dataclass(frozen=True, slots=True)
class TunnelRef:
    """Identifies one tunnel configuration document."""

    account_id: str
    tunnel_id: str

    def __str__(self) -> str:
        return f"{self.account_id}/{self.tunnel_id}"


@dataclass(frozen=True, slots=True)
class DesiredRecord:
    """Endpoint record as computed by the controller.

    Only ``targets[0]`` is used when the record is encoded as an ingress rule.
    """

    name: str
    targets: tuple[str, ...]
    record_type: RecordType = RecordType.A

    @property
    def primary_target(self) -> str | None:
        return self.targets[0] if self.targets else None


@dataclass(frozen=True, slots=True)
class IngressRule:
    """One hostname-to-service mapping of a tunnel configuration.

    An empty ``hostname`` marks the catch-all rule.
    """

    hostname: str
    service: str
    path: str | None = None
    origin_options: Mapping[str, object] | None = None

    @property
    def is_catch_all(self) -> bool:
        return not self.hostname


@dataclass(frozen=True, slots=True)
class WarpRouting:
    enabled: bool = False


@dataclass(frozen=True, slots=True)
class RuleCollection:
    """Full tunnel configuration snapshot.

    ``origin_request`` and ``warp_routing`` are document-level settings that the
    reconciliation core never inspects; they are copied through verbatim.
    """

    rules: tuple[IngressRule, ...] = ()
    origin_request: Mapping[str, object] | None = None
    warp_routing: WarpRouting | None = None

    def find(self, hostname: str) -> IngressRule | None:
        for rule in self.rules:
            if rule.hostname == hostname:
                return rule
        return None

    @property
    def hostnames(self) -> tuple[str, ...]:
        return tuple(rule.hostname for rule in self.rules if not rule.is_catch_all)


@dataclass(frozen=True, slots=True)
class ChangeBatch:
    """Create/update/delete instructions for one reconciliation cycle."""

    create: tuple[DesiredRecord, ...] = ()
    update_old: tuple[DesiredRecord, ...] = ()
    update_new: tuple[DesiredRecord, ...] = ()
    delete: tuple[DesiredRecord, ...] = ()

    @property
    def is_empty(self) -> bool:
        # update_old carries no mutation instructions
        return not (self.create or self.update_new or self.delete)

    def filtered(self, predicate: Callable[[DesiredRecord], bool]) -> ChangeBatch:
        """Return a copy keeping only records accepted by ``predicate``."""

        return ChangeBatch(
            create=tuple(r for r in self.create if predicate(r)),
            update_old=tuple(r for r in self.update_old if predicate(r)),
            update_new=tuple(r for r in self.update_new if predicate(r)),
            delete=tuple(r for r in self.delete if predicate(r)),
        )


@dataclass(frozen=True, slots=True)
class DomainFilter:
    """Restricts which hostnames the core may touch.

    A hostname matches when it equals or is a subdomain of one of ``include``
    and of none of ``exclude``. An empty ``include`` matches every hostname.
    """

    include: tuple[str, ...] = field(default_factory=tuple)
    exclude: tuple[str, ...] = field(default_factory=tuple)

    def matches(self, hostname: str) -> bool:
        name = _normalize_domain(hostname)
        if any(_is_within(name, _normalize_domain(d)) for d in self.exclude):
            return False
        if not self.include:
            return True
        return any(_is_within(name, _normalize_domain(d)) for d in self.include)

    @property
    def is_configured(self) -> bool:
        return bool(self.include or self.exclude)


def _normalize_domain(value: str) -> str:
    return value.strip().lower().rstrip(".")


def _is_within(name: str, domain: str) -> bool:
    if not domain:
        return False
    if domain.startswith("."):
        return name.endswith(domain)
    return name == domain or name.endswith("." + domain)

