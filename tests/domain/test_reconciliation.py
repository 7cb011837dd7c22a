from __future__ import annotations

from hypothesis import given
from hypothesis import strategies as st

from tunnelsync.domain.reconciliation import ordered_rules, reconcile
from tunnelsync.domain.types import (
    ChangeBatch,
    DesiredRecord,
    IngressRule,
    RuleCollection,
    WarpRouting,
)

HOSTNAMES = [f"h{index}.example.com" for index in range(6)]

hostnames = st.sampled_from(HOSTNAMES)
records = st.builds(
    DesiredRecord,
    name=hostnames,
    targets=st.tuples(st.sampled_from(["10.0.0.1", "10.0.0.2", "origin.lan"])),
)
record_tuples = st.lists(records, max_size=5).map(tuple)
batches = st.builds(
    ChangeBatch,
    create=record_tuples,
    update_new=record_tuples,
    delete=record_tuples,
)


@st.composite
def collections(draw: st.DrawFn) -> RuleCollection:
    existing = draw(st.lists(hostnames, unique=True, max_size=len(HOSTNAMES)))
    rules = [IngressRule(hostname=h, service=f"http://{h}:8080", path="/api") for h in existing]
    if draw(st.booleans()):
        rules.append(IngressRule(hostname="", service="http_status:404"))
    return RuleCollection(
        rules=tuple(rules),
        origin_request=draw(st.sampled_from([None, {"connectTimeout": 10}])),
        warp_routing=draw(st.sampled_from([None, WarpRouting(enabled=True)])),
    )


def _rules_by_hostname(collection: RuleCollection) -> dict[str, list[IngressRule]]:
    grouped: dict[str, list[IngressRule]] = {}
    for rule in collection.rules:
        grouped.setdefault(rule.hostname, []).append(rule)
    return grouped


def test_end_to_end_create_and_delete() -> None:
    current = RuleCollection(
        rules=(IngressRule(hostname="a.example.com", service="https://svc1:443"),),
    )
    batch = ChangeBatch(
        create=(DesiredRecord(name="b.example.com", targets=("10.0.0.1",)),),
        delete=(DesiredRecord(name="a.example.com", targets=("svc1",)),),
    )

    result = reconcile(current, batch)

    assert [(rule.hostname, rule.service) for rule in result.rules] == [
        ("b.example.com", "https://10.0.0.1:443")
    ]


def test_update_overwrites_existing_rule(current_collection: RuleCollection) -> None:
    batch = ChangeBatch(
        update_old=(DesiredRecord(name="a.example.com", targets=("svc1.internal",)),),
        update_new=(DesiredRecord(name="a.example.com", targets=("10.1.1.1",)),),
    )

    result = reconcile(current_collection, batch)

    updated = result.find("a.example.com")
    assert updated is not None
    assert updated.service == "https://10.1.1.1:443"
    assert updated.origin_options == {"http2Origin": True, "noTLSVerify": True}


def test_update_of_missing_hostname_inserts_rule() -> None:
    batch = ChangeBatch(update_new=(DesiredRecord(name="new.example.com", targets=("1.2.3.4",)),))

    result = reconcile(RuleCollection(), batch)

    assert result.hostnames == ("new.example.com",)


def test_delete_of_missing_hostname_is_ignored(current_collection: RuleCollection) -> None:
    batch = ChangeBatch(delete=(DesiredRecord(name="gone.example.com", targets=("1.2.3.4",)),))

    result = reconcile(current_collection, batch)

    assert result.rules == current_collection.rules


def test_create_then_delete_in_same_batch_deletes() -> None:
    record = DesiredRecord(name="flip.example.com", targets=("1.2.3.4",))
    batch = ChangeBatch(create=(record,), delete=(record,))

    result = reconcile(RuleCollection(), batch)

    assert result.find("flip.example.com") is None


def test_update_new_wins_over_create_for_same_hostname() -> None:
    batch = ChangeBatch(
        create=(DesiredRecord(name="x.example.com", targets=("1.1.1.1",)),),
        update_new=(DesiredRecord(name="x.example.com", targets=("2.2.2.2",)),),
    )

    result = reconcile(RuleCollection(), batch)

    rule = result.find("x.example.com")
    assert rule is not None
    assert rule.service == "https://2.2.2.2:443"


def test_duplicate_source_hostnames_keep_last_rule() -> None:
    current = RuleCollection(
        rules=(
            IngressRule(hostname="dup.example.com", service="http://first:80"),
            IngressRule(hostname="dup.example.com", service="http://second:80"),
        )
    )

    result = reconcile(current, ChangeBatch())

    assert result.rules == (IngressRule(hostname="dup.example.com", service="http://second:80"),)


def test_untouched_rules_are_carried_over_verbatim(current_collection: RuleCollection) -> None:
    batch = ChangeBatch(create=(DesiredRecord(name="b.example.com", targets=("10.0.0.9",)),))

    result = reconcile(current_collection, batch)

    assert result.find("a.example.com") == current_collection.find("a.example.com")


def test_ordered_rules_sorts_hostnames_and_keeps_catch_all_last() -> None:
    rules = [
        IngressRule(hostname="", service="http_status:404"),
        IngressRule(hostname="z.example.com", service="http://z:80"),
        IngressRule(hostname="a.example.com", service="http://a:80"),
    ]

    ordered = ordered_rules(rules)

    assert [rule.hostname for rule in ordered] == ["a.example.com", "z.example.com", ""]


@given(collections(), batches)
def test_reconcile_is_idempotent(current: RuleCollection, batch: ChangeBatch) -> None:
    once = reconcile(current, batch)

    assert reconcile(once, batch) == once


@given(collections(), batches)
def test_upserted_hostnames_have_exactly_one_rule(
    current: RuleCollection, batch: ChangeBatch
) -> None:
    result = reconcile(current, batch)
    grouped = _rules_by_hostname(result)
    deleted = {record.name for record in batch.delete}

    expected_targets: dict[str, str] = {}
    for record in (*batch.create, *batch.update_new):
        expected_targets[record.name] = record.targets[0]

    for hostname, target in expected_targets.items():
        if hostname in deleted:
            continue
        assert len(grouped[hostname]) == 1
        assert grouped[hostname][0].service == f"https://{target}:443"


@given(collections(), batches)
def test_deleted_hostnames_are_absent(current: RuleCollection, batch: ChangeBatch) -> None:
    result = reconcile(current, batch)

    for record in batch.delete:
        assert result.find(record.name) is None


@given(collections(), batches)
def test_document_settings_pass_through(current: RuleCollection, batch: ChangeBatch) -> None:
    result = reconcile(current, batch)

    assert result.origin_request == current.origin_request
    assert result.warp_routing == current.warp_routing


@given(collections(), batches)
def test_output_order_is_deterministic(current: RuleCollection, batch: ChangeBatch) -> None:
    result = reconcile(current, batch)
    names = [rule.hostname for rule in result.rules]
    hostname_names = [name for name in names if name]

    assert hostname_names == sorted(hostname_names)
    assert "" not in names[: len(hostname_names)]
    assert len(names) == len(set(names))
