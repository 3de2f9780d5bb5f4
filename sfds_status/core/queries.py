"""Read-only queries issued with an authenticated bearer token."""

from __future__ import annotations

from concurrent.futures import FIRST_EXCEPTION, ThreadPoolExecutor, wait
from dataclasses import dataclass
from typing import Any, Callable, Dict

from ..common.constants import ApiFunctions
from ..common.errors import MalformedResponseError
from ..common.logging_config import get_logger

_log = get_logger(__name__)

RawResponse = Dict[str, Any]


@dataclass(frozen=True)
class ServerSnapshot:
    """The three raw query results of one probe run."""

    state: RawResponse
    options: RawResponse
    settings: RawResponse


class QueryClient:
    """Issues the status queries on behalf of one authenticated session."""

    def __init__(self, transport, token: str) -> None:
        self.transport = transport
        self._token = token

    def _query(self, function: str) -> RawResponse:
        response = self.transport.call(function, {}, token=self._token)
        data = response.get("data") if isinstance(response, dict) else None
        if not isinstance(data, dict):
            raise MalformedResponseError(f"{function} response has no 'data' object: {response!r}")
        _log.debug("%s returned %d top-level field(s)", function, len(data))
        return data

    def query_server_state(self) -> RawResponse:
        return self._query(ApiFunctions.QUERY_SERVER_STATE)

    def query_server_options(self) -> RawResponse:
        return self._query(ApiFunctions.GET_SERVER_OPTIONS)

    def query_advanced_game_settings(self) -> RawResponse:
        return self._query(ApiFunctions.GET_ADVANCED_GAME_SETTINGS)


def _fetch_parallel(calls: Dict[str, Callable[[], RawResponse]]) -> Dict[str, RawResponse]:
    executor = ThreadPoolExecutor(max_workers=len(calls), thread_name_prefix="sfds-query")
    futures = {executor.submit(call): name for name, call in calls.items()}
    done, _pending = wait(futures, return_when=FIRST_EXCEPTION)
    for future in done:
        exc = future.exception()
        if exc is not None:
            # Running siblings are abandoned; their own timeout bounds them.
            executor.shutdown(wait=False, cancel_futures=True)
            raise exc
    executor.shutdown(wait=True)
    return {futures[future]: future.result() for future in futures}


def fetch_snapshot(client: QueryClient, parallel: bool = False) -> ServerSnapshot:
    """Run all three queries and collect their results.

    Queries run one after another unless ``parallel`` is set, in which case
    they share a small thread pool and the first failure aborts the run.
    """
    calls = {
        "state": client.query_server_state,
        "options": client.query_server_options,
        "settings": client.query_advanced_game_settings,
    }
    if parallel:
        _log.info("Querying server state, options and advanced settings concurrently")
        results = _fetch_parallel(calls)
    else:
        results = {}
        for name, call in calls.items():
            _log.info("Querying %s", name)
            results[name] = call()
    return ServerSnapshot(**results)
