from __future__ import annotations

import pytest

from tunnelsync.domain.types import (
    ChangeBatch,
    DesiredRecord,
    DomainFilter,
    IngressRule,
    RecordType,
    RuleCollection,
    TunnelRef,
)


@pytest.mark.parametrize(
    ("domain_filter", "hostname", "expected"),
    [
        (DomainFilter(), "anything.test", True),
        (DomainFilter(include=("example.com",)), "example.com", True),
        (DomainFilter(include=("example.com",)), "app.example.com", True),
        (DomainFilter(include=("example.com",)), "APP.Example.com.", True),
        (DomainFilter(include=("example.com",)), "badexample.com", False),
        (DomainFilter(include=("example.com",)), "app.example.org", False),
        (DomainFilter(include=(".example.com",)), "example.com", False),
        (DomainFilter(include=(".example.com",)), "app.example.com", True),
        (DomainFilter(exclude=("internal.example.com",)), "db.internal.example.com", False),
        (
            DomainFilter(include=("example.com",), exclude=("internal.example.com",)),
            "web.example.com",
            True,
        ),
        (
            DomainFilter(include=("example.com",), exclude=("internal.example.com",)),
            "internal.example.com",
            False,
        ),
    ],
)
def test_domain_filter_matches(domain_filter: DomainFilter, hostname: str, expected: bool) -> None:
    assert domain_filter.matches(hostname) is expected


def test_domain_filter_is_configured() -> None:
    assert not DomainFilter().is_configured
    assert DomainFilter(exclude=("x.test",)).is_configured


def test_change_batch_is_empty_ignores_update_old() -> None:
    record = DesiredRecord(name="a.example.com", targets=("1.1.1.1",))

    assert ChangeBatch().is_empty
    assert ChangeBatch(update_old=(record,)).is_empty
    assert not ChangeBatch(delete=(record,)).is_empty


def test_change_batch_filtered_applies_to_every_list() -> None:
    keep = DesiredRecord(name="keep.test", targets=("1.1.1.1",))
    drop = DesiredRecord(name="drop.test", targets=("2.2.2.2",))
    batch = ChangeBatch(
        create=(keep, drop),
        update_old=(drop,),
        update_new=(keep,),
        delete=(drop, keep),
    )

    filtered = batch.filtered(lambda record: record.name == "keep.test")

    assert filtered == ChangeBatch(create=(keep,), update_new=(keep,), delete=(keep,))


def test_desired_record_defaults() -> None:
    record = DesiredRecord(name="a.test", targets=())

    assert record.record_type is RecordType.A
    assert record.primary_target is None


def test_rule_collection_lookup_skips_catch_all() -> None:
    collection = RuleCollection(
        rules=(
            IngressRule(hostname="a.test", service="http://a:80"),
            IngressRule(hostname="", service="http_status:404"),
        )
    )

    assert collection.hostnames == ("a.test",)
    assert collection.find("a.test") == collection.rules[0]
    assert collection.find("missing.test") is None


def test_tunnel_ref_str() -> None:
    assert str(TunnelRef(account_id="acct", tunnel_id="tun")) == "acct/tun"
