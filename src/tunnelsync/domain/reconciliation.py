"""Merge a change batch into a tunnel's ingress rule collection.

The tunnel API only supports replacing the whole configuration document, so
the merge always produces the complete rule list to write back. Rules are
keyed by hostname: creates and updates collapse into one upsert, deletes of
absent hostnames are ignored, and every rule the batch does not mention is
carried over untouched.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .rules import to_ingress_rule
from .types import IngressRule, RuleCollection

if TYPE_CHECKING:
    from collections.abc import Iterable

    from .types import ChangeBatch


def reconcile(current: RuleCollection, batch: ChangeBatch) -> RuleCollection:
    """Return the collection that results from applying ``batch`` to ``current``.

    Upserts from ``batch.create`` and then ``batch.update_new`` are applied
    before ``batch.delete``, so a hostname both created and deleted in the same
    batch ends up deleted. ``batch.update_old`` is not consulted.
    """

    working: dict[str, IngressRule] = {}
    for rule in current.rules:
        working[rule.hostname] = rule

    for record in (*batch.create, *batch.update_new):
        working[record.name] = to_ingress_rule(record)

    for record in batch.delete:
        working.pop(record.name, None)

    return RuleCollection(
        rules=ordered_rules(working.values()),
        origin_request=current.origin_request,
        warp_routing=current.warp_routing,
    )


def ordered_rules(rules: Iterable[IngressRule]) -> tuple[IngressRule, ...]:
    """Sort rules by hostname, keeping the catch-all rule last.

    The tunnel rejects a configuration whose catch-all rule is not the final
    entry.
    """

    hostname_rules: list[IngressRule] = []
    catch_all: list[IngressRule] = []
    for rule in rules:
        (catch_all if rule.is_catch_all else hostname_rules).append(rule)
    hostname_rules.sort(key=lambda rule: rule.hostname)
    return (*hostname_rules, *catch_all)
