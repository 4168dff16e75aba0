"""Background repository-status worker.

The session and the worker share nothing but two queues: requests flow in on
one, snapshots flow back on the other. The UI side only ever drains results
without blocking.
"""

from __future__ import annotations

import threading
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from queue import Empty, Queue

from loguru import logger

from ..git_status import RepoStatus, query_repo_status, sync_remote


@dataclass(frozen=True)
class RequestUpdate:
    directory: Path
    also_sync: bool = False


@dataclass(frozen=True)
class Stop:
    pass


@dataclass(frozen=True)
class StatusReady:
    """Snapshot for ``directory``; ``status`` is ``None`` outside a repository."""

    directory: Path
    status: RepoStatus | None


WorkerMessage = RequestUpdate | Stop


class StatusPoller:
    """Owns the single status worker thread of a session."""

    def __init__(
        self,
        query: Callable[[Path], RepoStatus | None] = query_repo_status,
        sync: Callable[[Path], bool] = sync_remote,
    ) -> None:
        self._query = query
        self._sync = sync
        self._requests: Queue[WorkerMessage] = Queue()
        self._results: Queue[StatusReady] = Queue()
        self._thread: threading.Thread | None = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self._thread is not None:
            return
        self._thread = threading.Thread(
            target=self._worker,
            name="jerm-status-worker",
            daemon=True,
        )
        self._thread.start()
        logger.debug("Status worker started")

    def _handle(self, request: RequestUpdate) -> StatusReady:
        if request.also_sync:
            try:
                self._sync(request.directory)
            except Exception as exc:
                logger.debug("Remote sync failed for {}: {}", request.directory, exc)
        try:
            status = self._query(request.directory)
        except Exception as exc:
            logger.warning("Status query failed for {}: {}", request.directory, exc)
            status = None
        return StatusReady(directory=request.directory, status=status)

    def _worker(self) -> None:
        while True:
            message = self._requests.get()
            if isinstance(message, Stop):
                logger.debug("Status worker stopping")
                return
            self._results.put(self._handle(message))

    def request_update(self, directory: Path, also_sync: bool = False) -> None:
        """Queue a status computation; never blocks."""
        self._requests.put(RequestUpdate(directory=directory, also_sync=also_sync))

    def drain(self) -> list[StatusReady]:
        """Return every snapshot that has arrived since the last drain."""
        out: list[StatusReady] = []
        while True:
            try:
                out.append(self._results.get_nowait())
            except Empty:
                break
        return out

    def stop(self, join_timeout: float | None = None) -> None:
        """Tell the worker to exit; waits only when ``join_timeout`` is given."""
        self._requests.put(Stop())
        if join_timeout is not None and self._thread is not None:
            self._thread.join(join_timeout)


__all__ = [
    "RequestUpdate",
    "StatusPoller",
    "StatusReady",
    "Stop",
    "WorkerMessage",
]
