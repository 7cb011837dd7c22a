"""Conversions between desired records and tunnel ingress rules."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from types import MappingProxyType
from typing import TYPE_CHECKING, Final

from .errors import TargetExtractionError
from .targets import extract_target
from .types import DesiredRecord, IngressRule, RecordType

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

log = getLogger(__name__)

RULE_PATH: Final[str] = "/"
SERVICE_SCHEME: Final[str] = "https"
SERVICE_PORT: Final[int] = 443
ORIGIN_OPTIONS: Final[Mapping[str, object]] = MappingProxyType(
    {"http2Origin": True, "noTLSVerify": True}
)


def to_ingress_rule(record: DesiredRecord) -> IngressRule:
    """Encode ``record`` as an HTTPS ingress rule pointing at its first target."""

    target = record.primary_target
    if target is None:
        raise ValueError(f"Record {record.name!r} has no targets")
    return IngressRule(
        hostname=record.name,
        path=RULE_PATH,
        service=f"{SERVICE_SCHEME}://{target}:{SERVICE_PORT}",
        origin_options=dict(ORIGIN_OPTIONS),
    )


def to_record(rule: IngressRule) -> DesiredRecord:
    """Decode ``rule`` into an ``A`` record; raises :class:`TargetExtractionError`."""

    return DesiredRecord(
        name=rule.hostname,
        targets=(extract_target(rule.service),),
        record_type=RecordType.A,
    )


@dataclass(slots=True)
class DecodedRecords:
    """Records decoded from a rule list plus the number of rules dropped."""

    records: list[DesiredRecord]
    skipped: int = 0


def decode_rules(rules: Iterable[IngressRule]) -> DecodedRecords:
    """Decode every rule that can be decoded and silently drop the rest.

    Catch-all rules carry no hostname and are never reported as records.
    """

    result = DecodedRecords(records=[])
    for rule in rules:
        if rule.is_catch_all:
            result.skipped += 1
            continue
        try:
            result.records.append(to_record(rule))
        except TargetExtractionError:
            log.debug("Skipping rule %s with unparseable service %r", rule.hostname, rule.service)
            result.skipped += 1
    return result
