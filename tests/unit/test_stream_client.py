from __future__ import annotations

import asyncio
import base64

import orjson
import pytest

from gemini_live.client import LiveStreamClient
from gemini_live.client.normalizer import decode_frame
from gemini_live.state.connection import ConnectionState
from gemini_live.state.events import EventKind, ConnectionFailure
from gemini_live.errors import ToolResultError, MissingCredentialError

from utils import (
    HANG,
    EventRecorder,
    FakeConnector,
    FakeTransport,
    wait_until,
    make_client_settings,
)

SESSION = {"model": "models/test-model", "generationConfig": {"responseModalities": "audio"}}


def _client(connector: FakeConnector, **overrides) -> tuple[LiveStreamClient, EventRecorder]:
    client = LiveStreamClient(make_client_settings(**overrides), SESSION, connector=connector)
    recorder = EventRecorder()
    client.on(None, recorder)
    return client, recorder


def _decoded(transport: FakeTransport) -> list[dict]:
    return [orjson.loads(frame) for frame in transport.sent]


@pytest.mark.asyncio
async def test_connect_sends_setup_then_queued_frames() -> None:
    connector = FakeConnector()
    client, recorder = _client(connector)
    await client.enqueue({"clientContent": {"turns": [], "turnComplete": True}})
    await client.enqueue({"realtimeInput": {"mediaChunks": []}})

    assert await client.connect() is True

    transport = connector.transports[0]
    assert _decoded(transport) == [
        {"setup": SESSION},
        {"clientContent": {"turns": [], "turnComplete": True}},
        {"realtimeInput": {"mediaChunks": []}},
    ]
    assert client.state is ConnectionState.OPEN
    assert client.status().pending_messages == 0
    assert recorder.kinds() == [EventKind.CONNECTING, EventKind.CONNECTED]
    assert connector.urls == ["wss://live.test/ws/live?key=test-key"]

    await client.disconnect()


@pytest.mark.asyncio
async def test_connect_requires_credential_before_any_io() -> None:
    connector = FakeConnector()
    client, _ = _client(connector, api_key="")

    with pytest.raises(MissingCredentialError):
        await client.connect()

    assert connector.calls == 0
    assert client.state is ConnectionState.IDLE


@pytest.mark.asyncio
async def test_concurrent_connects_share_one_attempt() -> None:
    connector = FakeConnector()
    client, _ = _client(connector)

    results = await asyncio.gather(client.connect(), client.connect(), client.connect())

    assert results == [True, True, True]
    assert connector.calls == 1
    assert await client.connect() is True
    assert connector.calls == 1

    await client.disconnect()


@pytest.mark.asyncio
async def test_connect_timeout_reports_failure_without_retrying() -> None:
    connector = FakeConnector(HANG)
    client, recorder = _client(connector, connect_timeout_s=0.05)

    assert await client.connect() is False

    errors = recorder.of(EventKind.ERROR)
    assert len(errors) == 1
    assert isinstance(errors[0].data, ConnectionFailure)
    assert errors[0].data.reason == "timeout"
    assert client.state is ConnectionState.CLOSED
    await asyncio.sleep(0.05)
    assert connector.calls == 1
    assert recorder.of(EventKind.RECONNECTING) == []


@pytest.mark.asyncio
async def test_send_connects_on_demand_and_fails_softly() -> None:
    connector = FakeConnector(OSError("refused"))
    client, recorder = _client(connector)

    assert await client.send_text("hello") is False
    assert recorder.of(EventKind.ERROR)[0].data.reason == "transport"

    assert await client.send_text("hello", end_of_turn=False) is True
    transport = connector.transports[0]
    assert _decoded(transport)[1] == {
        "clientContent": {
            "turns": [{"role": "user", "parts": [{"text": "hello"}]}],
            "turnComplete": False,
        }
    }

    await client.disconnect()


@pytest.mark.asyncio
async def test_outbound_helpers_compose_frames() -> None:
    connector = FakeConnector()
    client, _ = _client(connector)
    await client.connect()

    assert await client.send_media_chunk("image/jpeg", "AAAA")
    assert await client.send_audio(b"\x00\x01", mime_type="audio/pcm;rate=16000")
    assert await client.send_tool_result("call-1", output={"ok": True}, name="lookup")

    frames = _decoded(connector.transports[0])[1:]
    assert frames[0] == {"realtimeInput": {"mediaChunks": [{"mimeType": "image/jpeg", "data": "AAAA"}]}}
    chunk = frames[1]["realtimeInput"]["mediaChunks"][0]
    assert chunk["mimeType"] == "audio/pcm;rate=16000"
    assert base64.b64decode(chunk["data"]) == b"\x00\x01"
    assert frames[2]["toolResponse"]["functionResponses"][0] == {
        "id": "call-1",
        "name": "lookup",
        "response": {"output": {"ok": True}},
    }

    await client.disconnect()


@pytest.mark.asyncio
async def test_invalid_tool_result_raises_before_connecting() -> None:
    connector = FakeConnector()
    client, _ = _client(connector)

    with pytest.raises(ToolResultError):
        await client.send_tool_result("call-1", output=1, error="also")

    assert connector.calls == 0


@pytest.mark.asyncio
async def test_inbound_frames_are_published_and_probes_answered() -> None:
    connector = FakeConnector()
    client, recorder = _client(connector)
    await client.connect()
    transport = connector.transports[0]

    transport.feed('{"ping": 123}')
    transport.feed('{"pong": 456}')
    transport.feed(orjson.dumps({"serverContent": {"modelTurn": {"parts": [{"text": "hi"}]}, "turnComplete": True}}))

    await recorder.wait_for(EventKind.TURN_COMPLETE)
    assert recorder.of(EventKind.TEXT_DELTA)[0].data == "hi"
    assert "pong" in _decoded(transport)[1]
    assert len(transport.sent) == 2

    await client.disconnect()


@pytest.mark.asyncio
async def test_upstream_error_envelope_keeps_stream_open() -> None:
    connector = FakeConnector()
    client, recorder = _client(connector)
    await client.connect()

    connector.transports[0].feed('{"error": {"code": 429, "message": "slow down"}}')

    [event] = await recorder.wait_for(EventKind.ERROR)
    assert event.data == {"error": {"code": 429, "message": "slow down"}}
    assert client.is_connected()

    await client.disconnect()


@pytest.mark.asyncio
async def test_abnormal_close_reconnects_and_resends_setup() -> None:
    connector = FakeConnector()
    client, recorder = _client(connector, base_delay_s=0.01)
    await client.connect()

    connector.transports[0].drop(1006)
    await recorder.wait_for(EventKind.RECONNECTED)

    kinds = recorder.kinds()
    assert kinds[kinds.index(EventKind.DISCONNECTED) :] == [
        EventKind.DISCONNECTED,
        EventKind.RECONNECTING,
        EventKind.CONNECTING,
        EventKind.CONNECTED,
        EventKind.RECONNECTED,
    ]
    assert recorder.of(EventKind.DISCONNECTED)[0].data == {"code": 1006, "reason": ""}
    assert recorder.of(EventKind.RECONNECTING)[0].data == {"attempt": 1, "delay": 0.01}
    assert _decoded(connector.transports[1])[0] == {"setup": SESSION}
    assert client.status().reconnect_attempts == 0
    assert client.is_connected()

    await client.disconnect()


@pytest.mark.asyncio
async def test_clean_close_does_not_reconnect() -> None:
    connector = FakeConnector()
    client, recorder = _client(connector)
    await client.connect()

    connector.transports[0].drop(1000, "done")
    await recorder.wait_for(EventKind.DISCONNECTED)
    await asyncio.sleep(0.05)

    assert client.state is ConnectionState.CLOSED
    assert recorder.of(EventKind.RECONNECTING) == []
    assert connector.calls == 1


@pytest.mark.asyncio
async def test_reconnect_gives_up_once_after_max_attempts() -> None:
    connector = FakeConnector(FakeTransport(), OSError("down"), OSError("still down"))
    client, recorder = _client(connector, base_delay_s=0.01, max_attempts=2)
    await client.connect()

    connector.transports[0].drop(1011, "server error")
    await recorder.wait_for(EventKind.RECONNECT_FAILED)
    await asyncio.sleep(0.05)

    assert [e.data["attempt"] for e in recorder.of(EventKind.RECONNECTING)] == [1, 2]
    assert len(recorder.of(EventKind.RECONNECT_FAILED)) == 1
    assert connector.calls == 3
    assert client.state is ConnectionState.CLOSED


@pytest.mark.asyncio
async def test_disconnect_cancels_pending_reconnect() -> None:
    connector = FakeConnector()
    client, recorder = _client(connector, base_delay_s=5.0)
    await client.connect()

    connector.transports[0].drop(1006)
    await recorder.wait_for(EventKind.RECONNECTING)
    assert client.state is ConnectionState.RECONNECTING

    await client.disconnect()
    await client.disconnect()

    assert client.state is ConnectionState.CLOSED
    assert connector.calls == 1
    assert len(recorder.of(EventKind.DISCONNECTED)) == 2
    assert not client.is_connected()


@pytest.mark.asyncio
async def test_disconnect_closes_transport_and_clears_queue() -> None:
    connector = FakeConnector()
    client, recorder = _client(connector, base_delay_s=5.0)
    await client.connect()
    connector.transports[0].drop(1006)
    await recorder.wait_for(EventKind.RECONNECTING)
    await client.enqueue({"text": "later"})
    assert client.status().pending_messages == 1

    await client.disconnect()

    assert connector.transports[0].closed == (1000, "Normal closure")
    assert client.status().pending_messages == 0
    assert recorder.of(EventKind.DISCONNECTED)[-1].data == {"code": 1000, "reason": "Normal closure"}
    assert await client.connect() is True
    assert len(connector.transports[1].sent) == 1

    await client.disconnect()


@pytest.mark.asyncio
async def test_disconnect_during_connect_wins() -> None:
    connector = FakeConnector()
    connector.gate = asyncio.Event()
    client, _ = _client(connector)

    attempt = asyncio.create_task(client.connect())
    await wait_until(lambda: connector.calls == 1)
    await client.disconnect()
    connector.gate.set()

    assert await attempt is False
    assert client.state is ConnectionState.CLOSED
    assert connector.transports == []


@pytest.mark.asyncio
async def test_heartbeat_pings_a_silent_stream() -> None:
    connector = FakeConnector()
    client, _ = _client(connector, heartbeat_interval_s=0.02)
    await client.connect()
    transport = connector.transports[0]

    await wait_until(lambda: any("ping" in orjson.loads(f) for f in transport.sent[1:]))

    await client.disconnect()


@pytest.mark.asyncio
async def test_context_manager_connects_and_disconnects() -> None:
    connector = FakeConnector()

    async with LiveStreamClient(make_client_settings(), SESSION, connector=connector) as client:
        assert client.is_connected()

    assert client.state is ConnectionState.CLOSED
    assert connector.transports[0].closed is not None


@pytest.mark.asyncio
async def test_enqueue_while_open_sends_right_away() -> None:
    connector = FakeConnector()
    client, _ = _client(connector)
    await client.connect()

    await client.enqueue({"realtimeInput": {"mediaChunks": []}})

    assert _decoded(connector.transports[0]) == [{"setup": SESSION}, {"realtimeInput": {"mediaChunks": []}}]
    assert client.status().pending_messages == 0

    await client.disconnect()


@pytest.mark.asyncio
async def test_bad_frames_do_not_stop_the_receive_loop(monkeypatch: pytest.MonkeyPatch) -> None:
    def _decode(frame: str | bytes):
        if frame == "explode":
            raise TypeError("cannot decode")
        return decode_frame(frame)

    monkeypatch.setattr("gemini_live.client.stream.decode_frame", _decode)
    connector = FakeConnector()
    client, recorder = _client(connector)
    await client.connect()
    transport = connector.transports[0]

    transport.feed(orjson.dumps({"candidates": [{"content": {"parts": [{"text": "x"}]}, "finishReason": ["STOP"]}]}))
    transport.feed("explode")
    transport.feed('{"setupComplete": {}}')

    await recorder.wait_for(EventKind.SETUP_COMPLETE)
    assert recorder.of(EventKind.TRANSCRIPTION)[0].data == "x"
    assert client.is_connected()
    assert recorder.of(EventKind.DISCONNECTED) == []

    await client.disconnect()


@pytest.mark.asyncio
async def test_stream_opened_while_disconnecting_is_closed() -> None:
    connector = FakeConnector()
    connector.gate = asyncio.Event()
    client, _ = _client(connector)

    attempt = asyncio.create_task(client.connect())
    await wait_until(lambda: connector.calls == 1)
    connector.gate.set()
    await client.disconnect()

    assert await attempt is False
    await wait_until(lambda: bool(connector.transports) and connector.transports[0].closed is not None)
    assert connector.transports[0].closed == (1000, "Normal closure")
    assert connector.transports[0].sent == []
    assert client.state is ConnectionState.CLOSED
