"""Shared fixtures: sample API payloads and an in-memory transport."""

from __future__ import annotations

import copy
import os
import socket
import sys
import threading
from typing import Any, Dict, List, Optional, Tuple

import pytest

PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from sfds_status.common.errors import ApiStatusError  # noqa: E402

SERVER_URL = "https://game.example.net:7777"
TOKEN = "ey.fake-admin-token"

STATE_RESPONSE = {
    "data": {
        "serverGameState": {
            "activeSessionName": "Rocky Desert",
            "numConnectedPlayers": 2,
            "playerLimit": 4,
            "techTier": 7,
            "activeSchematic": "/Game/FactoryGame/Schematics/Progression/Schematic_7-2.Schematic_7-2_C",
            "gamePhase": "/Script/FactoryGame.FGGamePhase'/Game/FactoryGame/GamePhases/"
                         "GP_Project_Assembly_Phase_4.GP_Project_Assembly_Phase_4'",
            "isGameRunning": True,
            "totalGameDuration": 1755648,
            "isGamePaused": False,
            "averageTickRate": 29.98765,
            "autoLoadSessionName": "Rocky Desert",
        }
    }
}

OPTIONS_RESPONSE = {
    "data": {
        "serverOptions": {
            "FG.DSAutoPause": "True",
            "FG.DSAutoSaveOnDisconnect": "True",
            "FG.AutosaveInterval": "300",
            "FG.NetworkQuality": "3",
            "SendGameplayData": "False",
        },
        "pendingServerOptions": {},
    }
}

SETTINGS_RESPONSE = {
    "data": {
        "creativeModeEnabled": False,
        "advancedGameSettings": {
            "FG.GameRules.NoPower": "False",
            "FG.GameRules.GiveAllTiers": "False",
            "FG.PlayerRules.NoBuildCost": "False",
            "FG.PlayerRules.GodMode": "False",
        },
    }
}


class FakeTransport:
    """Records calls and answers them from canned responses.

    A response that is an exception instance is raised instead of returned.
    """

    def __init__(self, responses: Optional[Dict[str, Any]] = None, server_url: str = SERVER_URL) -> None:
        self.server_url = server_url
        self.responses: Dict[str, Any] = {
            "PasswordLogin": {"data": {"authenticationToken": TOKEN}},
            "QueryServerState": copy.deepcopy(STATE_RESPONSE),
            "GetServerOptions": copy.deepcopy(OPTIONS_RESPONSE),
            "GetAdvancedGameSettings": copy.deepcopy(SETTINGS_RESPONSE),
        }
        if responses:
            self.responses.update(responses)
        self.calls: List[Tuple[str, Any, Optional[str]]] = []

    def call(self, function: str, data: Optional[Dict[str, Any]] = None, token: Optional[str] = None) -> Any:
        self.calls.append((function, data, token))
        response = self.responses[function]
        if isinstance(response, BaseException):
            raise response
        return response

    @property
    def functions(self) -> List[str]:
        return [name for name, _data, _token in self.calls]


def wrong_password_error() -> ApiStatusError:
    body = {"errorCode": "wrong_password", "errorMessage": "Wrong password"}
    return ApiStatusError("API error 'wrong_password'", status=401, error_code="wrong_password",
                          error_message="Wrong password", body=body)


@pytest.fixture
def fake_transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def raw_parts():
    return (
        copy.deepcopy(STATE_RESPONSE["data"]),
        copy.deepcopy(OPTIONS_RESPONSE["data"]),
        copy.deepcopy(SETTINGS_RESPONSE["data"]),
    )


@pytest.fixture(autouse=True)
def _clean_probe_env(monkeypatch):
    for key in ("SFDS_SERVER_URL", "SFDS_ADMIN_PASSWORD", "SFDS_OUTPUT_FORMAT",
                "SFDS_TIMEOUT", "SFDS_INSECURE", "SFDS_LOG_LEVEL", "NO_COLOR"):
        monkeypatch.delenv(key, raising=False)


def _read_request(conn: socket.socket) -> None:
    data = b""
    while b"\r\n\r\n" not in data:
        chunk = conn.recv(4096)
        if not chunk:
            return
        data += chunk
    head, _, body = data.partition(b"\r\n\r\n")
    length = 0
    for line in head.split(b"\r\n")[1:]:
        name, _, value = line.partition(b":")
        if name.strip().lower() == b"content-length":
            length = int(value.strip())
    while len(body) < length:
        chunk = conn.recv(4096)
        if not chunk:
            return
        body += chunk


@pytest.fixture
def raw_http_server(monkeypatch):
    """Start a localhost server that answers one request with fixed raw bytes.

    Calling the fixture with the reply bytes returns the ``http://`` base URL.
    """
    for key in ("http_proxy", "HTTP_PROXY", "all_proxy", "ALL_PROXY"):
        monkeypatch.delenv(key, raising=False)
    threads = []
    listeners = []

    def start(reply: bytes) -> str:
        listener = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        listener.bind(("127.0.0.1", 0))
        listener.listen(1)
        listener.settimeout(5)
        listeners.append(listener)

        def serve():
            try:
                conn, _addr = listener.accept()
            except OSError:
                return
            with conn:
                conn.settimeout(5)
                _read_request(conn)
                conn.sendall(reply)
                conn.shutdown(socket.SHUT_WR)

        thread = threading.Thread(target=serve, daemon=True)
        thread.start()
        threads.append(thread)
        host, port = listener.getsockname()
        return f"http://{host}:{port}"

    yield start

    for thread in threads:
        thread.join(timeout=5)
    for listener in listeners:
        listener.close()
