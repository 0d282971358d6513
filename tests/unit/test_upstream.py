from __future__ import annotations

import pytest

from gemini_live.errors import InvalidEndpointError
from gemini_live.relay.upstream import redact_url, build_upstream_url

PATH = "/ws/google.ai.generativelanguage.v1beta.GenerativeService.BidiGenerateContent"


def test_path_and_query_are_kept() -> None:
    url = build_upstream_url("wss://generativelanguage.googleapis.com", PATH, "key=peer-key&alt=json")

    assert url == f"wss://generativelanguage.googleapis.com{PATH}?key=peer-key&alt=json"


def test_configured_key_is_added_only_when_missing() -> None:
    injected = build_upstream_url("wss://upstream.test", "/ws/x", "", api_key="relay-key")
    kept = build_upstream_url("wss://upstream.test", "/ws/x", "key=peer-key", api_key="relay-key")

    assert injected == "wss://upstream.test/ws/x?key=relay-key"
    assert kept == "wss://upstream.test/ws/x?key=peer-key"


def test_upstream_base_path_prefix() -> None:
    assert build_upstream_url("ws://localhost:9000/proxy/", "/ws/x", "") == "ws://localhost:9000/proxy/ws/x"


@pytest.mark.parametrize("base", ["https://upstream.test", "upstream.test", "wss://"])
def test_invalid_upstream_base(base: str) -> None:
    with pytest.raises(InvalidEndpointError):
        build_upstream_url(base, "/ws/x", "")


def test_redact_url_masks_only_the_key() -> None:
    assert redact_url("wss://h/ws/x?key=secret&alt=json") == "wss://h/ws/x?key=%2A%2A%2A&alt=json"
    assert redact_url("wss://h/ws/x") == "wss://h/ws/x"
