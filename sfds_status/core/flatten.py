"""Flattening of the three query results into a single status record.

The record is an insertion-ordered mapping of field name to scalar value.
Fixed fields come first, followed by one ``Config_*`` field per server option
and one ``Setting_*`` field per advanced game setting. When two keys clean to
the same field name the later value wins.
"""

from __future__ import annotations

import json
import re
from datetime import datetime
from typing import Any, Dict, Iterable, Mapping, Optional

from ..common.constants import (
    ADVANCED_SETTING_PREFIXES,
    CONFIG_FIELD_PREFIX,
    GAME_PHASE_PREFIX,
    SERVER_OPTION_PREFIX,
    SETTING_FIELD_PREFIX,
    TIMESTAMP_FORMAT,
)
from .queries import ServerSnapshot

StatusRecord = Dict[str, Any]

_PATH_SEPARATORS = re.compile(r"[/\\]")


def game_phase_label(raw: Any) -> str:
    """Turn a game phase object path into a readable label.

    ``/Game/FactoryGame/GamePhases/GP_Project_Assembly_Phase_4.GP_Project_Assembly_Phase_4``
    becomes ``Project Assembly Phase 4``.
    """
    if raw is None:
        return ""
    label = _PATH_SEPARATORS.split(str(raw).strip())[-1].strip("'\"")
    head, sep, tail = label.partition(".")
    if sep and tail.startswith(head):
        label = head
    if label.startswith(GAME_PHASE_PREFIX):
        label = label[len(GAME_PHASE_PREFIX):]
    return label.replace("_", " ").strip()


def round_or_none(value: Any, digits: int = 2) -> Optional[float]:
    if isinstance(value, bool) or value is None:
        return None
    try:
        return round(float(value), digits)
    except (TypeError, ValueError):
        return None


def hours_from_seconds(seconds: Any) -> Optional[float]:
    if isinstance(seconds, bool) or seconds is None:
        return None
    try:
        return round(float(seconds) / 3600, 2)
    except (TypeError, ValueError):
        return None


def as_int(value: Any) -> int:
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        return 0


def as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("true", "1", "yes")
    return bool(value)


def scalar(value: Any) -> Any:
    """Collapse nested mappings and lists into compact JSON text."""
    if isinstance(value, (dict, list, tuple)):
        return json.dumps(value, separators=(",", ":"))
    return value


def strip_prefix(key: str, prefixes: Iterable[str]) -> str:
    for prefix in prefixes:
        if key.startswith(prefix):
            return key[len(prefix):]
    return key


def config_field_name(key: str) -> str:
    return CONFIG_FIELD_PREFIX + strip_prefix(key, (SERVER_OPTION_PREFIX,))


def setting_field_name(key: str) -> str:
    return SETTING_FIELD_PREFIX + strip_prefix(key, ADVANCED_SETTING_PREFIXES)


def _section(response: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    nested = response.get(key)
    if isinstance(nested, dict):
        return nested
    return response


def flatten(state: Mapping[str, Any], options: Mapping[str, Any], settings: Mapping[str, Any],
            server_url: str, now: Optional[datetime] = None) -> StatusRecord:
    """Build the flat status record from the three query results."""
    game_state = _section(state, "serverGameState")
    server_options = _section(options, "serverOptions")
    advanced_settings = _section(settings, "advancedGameSettings")

    timestamp = (now or datetime.now()).strftime(TIMESTAMP_FORMAT)
    connected = as_int(game_state.get("numConnectedPlayers"))

    record: StatusRecord = {
        "Timestamp": timestamp,
        "ServerUrl": server_url,
        "SessionName": game_state.get("activeSessionName"),
        "ConnectedPlayers": connected,
        "PlayerLimit": game_state.get("playerLimit"),
        "PlayersOnline": connected > 0,
        "TechTier": game_state.get("techTier"),
        "ActiveSchematic": scalar(game_state.get("activeSchematic")),
        "GamePhase": game_phase_label(game_state.get("gamePhase")),
        "IsGameRunning": as_bool(game_state.get("isGameRunning")),
        "IsGamePaused": as_bool(game_state.get("isGamePaused")),
        "TotalGameDurationHours": hours_from_seconds(game_state.get("totalGameDuration")),
        "AverageTickRate": round_or_none(game_state.get("averageTickRate")),
        "AutoLoadSessionName": game_state.get("autoLoadSessionName"),
        "CreativeModeEnabled": as_bool(settings.get("creativeModeEnabled")),
    }

    for key, value in server_options.items():
        record[config_field_name(key)] = scalar(value)
    for key, value in advanced_settings.items():
        record[setting_field_name(key)] = scalar(value)
    return record


def flatten_snapshot(snapshot: ServerSnapshot, server_url: str,
                     now: Optional[datetime] = None) -> StatusRecord:
    return flatten(snapshot.state, snapshot.options, snapshot.settings, server_url, now=now)


__all__ = [
    "StatusRecord",
    "flatten",
    "flatten_snapshot",
    "game_phase_label",
    "config_field_name",
    "setting_field_name",
]
