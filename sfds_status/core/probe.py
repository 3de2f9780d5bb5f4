"""One probe run: authenticate, query, flatten.

:func:`run_probe` never raises for expected failures; it returns a
:class:`ProbeResult` holding either the status record or the error that
stopped the pipeline, and the caller picks the exit code from it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..common.config import ServerConfig
from ..common.constants import ExitCodes
from ..common.errors import StatusProbeError
from ..common.logging_config import get_logger
from .auth import authenticate
from .flatten import StatusRecord, flatten_snapshot
from .queries import QueryClient, ServerSnapshot, fetch_snapshot
from .transport import ApiTransport

_log = get_logger(__name__)


@dataclass(frozen=True)
class ProbeResult:
    """Outcome of a probe run: a record and snapshot, or an error."""

    record: Optional[StatusRecord] = None
    snapshot: Optional[ServerSnapshot] = None
    error: Optional[StatusProbeError] = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.record is not None

    @property
    def exit_code(self) -> int:
        if not self.ok:
            return ExitCodes.ERROR
        if self.record.get("PlayersOnline"):
            return ExitCodes.PLAYERS_ONLINE
        return ExitCodes.NO_PLAYERS_ONLINE


def run_probe(config: ServerConfig, transport=None) -> ProbeResult:
    """Run the full authenticate → query → flatten pipeline once."""
    transport = transport or ApiTransport.from_config(config)
    try:
        token = authenticate(transport, config.password)
        client = QueryClient(transport, token)
        snapshot = fetch_snapshot(client, parallel=config.parallel)
        record = flatten_snapshot(snapshot, config.server_url)
    except StatusProbeError as exc:
        _log.debug("Probe aborted: %s", exc, exc_info=True)
        return ProbeResult(error=exc)

    _log.info(
        "Probe complete: %s player(s) connected, %d field(s) collected",
        record.get("ConnectedPlayers"),
        len(record),
    )
    return ProbeResult(record=record, snapshot=snapshot)


__all__ = ["ProbeResult", "run_probe"]
