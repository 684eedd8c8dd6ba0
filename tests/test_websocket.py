"""WebSocket play tests.

``TestClient`` is used as a context manager so the lifespan runs and every
request and socket shares one event loop with the engine timers.
"""

from __future__ import annotations

import pytest
from starlette.testclient import TestClient
from starlette.websockets import WebSocketDisconnect

from pocket_arcade.server.app import create_app


@pytest.fixture()
def tc():
    with TestClient(create_app()) as client:
        yield client


def _create(tc, **body) -> str:
    resp = tc.post("/sessions", json=body)
    assert resp.status_code == 201, resp.text
    return resp.json()["session_id"]


def _until_event(ws, name: str, limit: int = 200) -> dict:
    for _ in range(limit):
        msg = ws.receive_json()
        if msg["type"] == "event" and msg["event"]["name"] == name:
            return msg
    raise AssertionError(f"No {name} event received.")


class TestConnect:
    def test_initial_state(self, tc):
        session_id = _create(tc, game="snake")
        with tc.websocket_connect(f"/sessions/{session_id}/play") as ws:
            msg = ws.receive_json()
            assert msg["type"] == "state"
            assert msg["state"]["phase"] == "not_started"

    def test_unknown_session(self, tc):
        with pytest.raises(WebSocketDisconnect):
            with tc.websocket_connect("/sessions/nope/play") as ws:
                ws.receive_json()

    def test_closed_session_rejected(self, tc):
        session_id = _create(tc, game="snake")
        tc.delete(f"/sessions/{session_id}")
        with pytest.raises(WebSocketDisconnect):
            with tc.websocket_connect(f"/sessions/{session_id}/play") as ws:
                ws.receive_json()


class TestSnakePlay:
    def test_start_and_tick(self, tc):
        session_id = _create(
            tc, game="snake", initial_tick_ms=20, min_tick_ms=10, seed=3,
        )
        with tc.websocket_connect(f"/sessions/{session_id}/play") as ws:
            ws.receive_json()
            ws.send_json({"command": "start"})
            msg = ws.receive_json()
            while msg["type"] != "state":
                msg = ws.receive_json()
            assert msg["state"]["phase"] == "running"

            tick = _until_event(ws, "tick_applied")
            assert tick["cue"] is None
            assert tick["state"]["tick"] >= 1
            assert len(tick["event"]["snake_body"]) == 1

    def test_bad_messages_ignored(self, tc):
        session_id = _create(tc, game="snake")
        with tc.websocket_connect(f"/sessions/{session_id}/play") as ws:
            ws.receive_json()
            ws.send_text("not json")
            ws.send_json([1, 2])
            ws.send_json({"command": "fly"})
            ws.send_json({"command": "submit", "symbol": 0})
            ws.send_json({"command": "start"})
            msg = ws.receive_json()
            while msg["type"] != "state":
                msg = ws.receive_json()
            assert msg["state"]["phase"] == "running"


class TestSequencePlay:
    def test_round_over_socket(self, tc):
        session_id = _create(
            tc, game="sequence", seed=5, lead_in_ms=0, lit_ms=10, gap_ms=0,
        )
        with tc.websocket_connect(f"/sessions/{session_id}/play") as ws:
            ws.receive_json()
            ws.send_json({"command": "start"})

            restarted = ws.receive_json()
            assert restarted["event"]["name"] == "game_restarted"

            lit = _until_event(ws, "symbol_lit")
            assert lit["cue"]["frequency_hz"] == 200 + 100 * lit["event"]["symbol_id"]

            done = _until_event(ws, "playback_finished")
            assert done["state"]["phase"] == "awaiting_input"
            symbol = done["state"]["sequence"][0]

            ws.send_json({"command": "submit", "symbol": symbol})
            pressed = ws.receive_json()
            assert pressed["event"]["name"] == "symbol_pressed"
            assert pressed["cue"] is not None
            advanced = ws.receive_json()
            assert advanced["event"] == {"name": "round_advanced", "new_score": 1}


class TestClose:
    def test_delete_closes_socket(self, tc):
        session_id = _create(tc, game="sequence")
        with tc.websocket_connect(f"/sessions/{session_id}/play") as ws:
            ws.receive_json()
            assert tc.delete(f"/sessions/{session_id}").status_code == 200
            with pytest.raises(WebSocketDisconnect) as exc_info:
                ws.receive_json()
            assert exc_info.value.code == 1000
