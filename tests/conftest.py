from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from tests.helpers.tunnel import FakeTunnelConfigClient, RecordingNotifier
from tunnelsync.domain.types import IngressRule, RuleCollection, TunnelRef, WarpRouting

if TYPE_CHECKING:
    from collections.abc import Iterator


@pytest.fixture
def tunnel() -> TunnelRef:
    return TunnelRef(account_id="acct-123", tunnel_id="tun-456")


@pytest.fixture
def current_collection() -> RuleCollection:
    return RuleCollection(
        rules=(
            IngressRule(
                hostname="a.example.com",
                path="/",
                service="https://svc1.internal:443",
                origin_options={"http2Origin": True},
            ),
            IngressRule(hostname="", service="http_status:404"),
        ),
        origin_request={"connectTimeout": 30, "noHappyEyeballs": True},
        warp_routing=WarpRouting(enabled=True),
    )


@pytest.fixture
def fake_client(current_collection: RuleCollection) -> FakeTunnelConfigClient:
    return FakeTunnelConfigClient(current_collection)


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[pytest.MonkeyPatch]:
    for name in (
        "CF_ACCOUNT_ID",
        "CF_TUNNEL_ID",
        "CF_API_TOKEN",
        "CF_API_KEY",
        "CF_API_EMAIL",
        "SLACK_TOKEN",
        "SLACK_CHANNEL",
        "TUNNELSYNC_OWNER",
        "TUNNELSYNC_DOMAIN_FILTER",
        "TUNNELSYNC_EXCLUDE_DOMAINS",
    ):
        monkeypatch.delenv(name, raising=False)
    yield monkeypatch
