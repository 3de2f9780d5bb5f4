"""Report rendering for the status record.

Three formats are supported:
* console - human readable report with coloured status banners
* json - one flat JSON object, keys in record order
* csv - a header row and a single value row
"""

from __future__ import annotations

import csv
import io
import json
from typing import Any, List, Mapping, Optional

from ..common.config import OutputFormat
from ..common.constants import CONFIG_FIELD_PREFIX, SETTING_FIELD_PREFIX
from .queries import ServerSnapshot


class Colors:
    """ANSI escape sequences used by the console report."""
    RESET = "\033[0m"
    BOLD = "\033[1m"
    RED = "\033[31m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    CYAN = "\033[36m"


SECTION_WIDTH = 60


def render_json(record: Mapping[str, Any]) -> str:
    return json.dumps(dict(record), indent=2, ensure_ascii=False)


def _csv_value(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


def render_csv(record: Mapping[str, Any]) -> str:
    """Render a header row and one value row.

    Fields containing commas, quotes or line breaks are quoted and embedded
    quotes are doubled.
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_MINIMAL, lineterminator="\n")
    writer.writerow(list(record.keys()))
    writer.writerow([_csv_value(value) for value in record.values()])
    return buffer.getvalue().rstrip("\n")


def _paint(text: str, color: str, enabled: bool) -> str:
    if not enabled:
        return text
    return f"{color}{text}{Colors.RESET}"


def _header(title: str, enabled: bool) -> List[str]:
    rule = "=" * SECTION_WIDTH
    return ["", _paint(rule, Colors.CYAN, enabled), _paint(f" {title}", Colors.BOLD, enabled),
            _paint(rule, Colors.CYAN, enabled)]


def _label_value(label: str, value: Any) -> str:
    if value is None or value == "":
        value = "-"
    return f"  {label:<32} {value}"


def run_state_banner(record: Mapping[str, Any], enabled: bool) -> str:
    if record.get("IsGamePaused"):
        return _paint("PAUSED", Colors.YELLOW, enabled)
    if record.get("IsGameRunning"):
        return _paint("RUNNING", Colors.GREEN, enabled)
    return _paint("STOPPED", Colors.RED, enabled)


def players_banner(record: Mapping[str, Any], enabled: bool) -> str:
    connected = record.get("ConnectedPlayers") or 0
    if connected > 0:
        noun = "PLAYER" if connected == 1 else "PLAYERS"
        return _paint(f"{connected} {noun} ONLINE", Colors.GREEN, enabled)
    return _paint("NO PLAYERS ONLINE", Colors.YELLOW, enabled)


_STATE_FIELDS = (
    ("Session", "SessionName"),
    ("Auto-load session", "AutoLoadSessionName"),
    ("Players", None),
    ("Tech tier", "TechTier"),
    ("Active schematic", "ActiveSchematic"),
    ("Game phase", "GamePhase"),
    ("Running", "IsGameRunning"),
    ("Paused", "IsGamePaused"),
    ("Total play time (hours)", "TotalGameDurationHours"),
    ("Average tick rate", "AverageTickRate"),
    ("Creative mode", "CreativeModeEnabled"),
)


def render_console(record: Mapping[str, Any], snapshot: Optional[ServerSnapshot] = None,
                   color: bool = False) -> str:
    """Render the human readable report.

    ``snapshot`` is optional; when given, the active session name is taken
    from the raw server state so the report shows what the server actually
    answered.
    """
    lines: List[str] = []
    title = f"Dedicated Server Status - {record.get('ServerUrl', '')}"
    lines.append(_paint(title, Colors.BOLD, color))
    lines.append(f"Checked at {record.get('Timestamp', '')}")

    session = record.get("SessionName")
    if snapshot is not None:
        game_state = snapshot.state.get("serverGameState", snapshot.state)
        if isinstance(game_state, dict):
            session = game_state.get("activeSessionName", session)

    lines.append("")
    lines.append(f"  Status:  {run_state_banner(record, color)}")
    lines.append(f"  Players: {players_banner(record, color)}")
    if session:
        lines.append(f"  Session: {session}")

    lines.extend(_header("Server State", color))
    for label, key in _STATE_FIELDS:
        if key is None:
            limit = record.get("PlayerLimit")
            value = f"{record.get('ConnectedPlayers', 0)} / {limit if limit is not None else '?'}"
            lines.append(_label_value(label, value))
        else:
            lines.append(_label_value(label, record.get(key)))

    config_items = [(k, v) for k, v in record.items() if k.startswith(CONFIG_FIELD_PREFIX)]
    setting_items = [(k, v) for k, v in record.items() if k.startswith(SETTING_FIELD_PREFIX)]

    lines.extend(_header("Server Configuration", color))
    if not config_items:
        lines.append("  (no server options reported)")
    for key, value in config_items:
        lines.append(_label_value(key[len(CONFIG_FIELD_PREFIX):], value))

    lines.extend(_header("Advanced Game Settings", color))
    if not setting_items:
        lines.append("  (no advanced game settings reported)")
    for key, value in setting_items:
        lines.append(_label_value(key[len(SETTING_FIELD_PREFIX):], value))

    return "\n".join(lines)


def render(output_format: OutputFormat, record: Mapping[str, Any],
           snapshot: Optional[ServerSnapshot] = None, color: bool = False) -> str:
    """Render ``record`` in the requested format."""
    if output_format is OutputFormat.JSON:
        return render_json(record)
    if output_format is OutputFormat.CSV:
        return render_csv(record)
    return render_console(record, snapshot, color=color)


__all__ = ["render", "render_console", "render_csv", "render_json"]
