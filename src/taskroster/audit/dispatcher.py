"""Fire-and-forget dispatch of audit records.

Each record gets its own background task. The request path never awaits
it, nothing bounds how many are outstanding, and a failed send is dropped
without being reported or retried.
"""

import asyncio
import contextlib
import logging
import threading
from typing import Optional

from taskroster.audit.sinks import get_audit_sink
from taskroster.config import settings
from taskroster.observability.metrics import metrics

logger = logging.getLogger("taskroster.audit")


class AuditDispatcher:
    """Spawns and tracks outstanding audit sends."""

    def __init__(self) -> None:
        # Strong references only; the event loop keeps weak ones
        self._pending: set[asyncio.Task] = set()

    @property
    def outstanding(self) -> int:
        return len(self._pending)

    def dispatch(self, payload: str) -> Optional[asyncio.Task]:
        """Start sending ``payload`` and return without waiting for it."""
        if not settings.audit_enabled:
            return None

        metrics.inc_counter("audit.dispatched")
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            # Sync caller outside any event loop
            threading.Thread(
                target=self._run_detached, args=(payload,), name="audit-dispatch", daemon=True
            ).start()
            return None

        task = loop.create_task(self._send(payload), name="audit-dispatch")
        self._pending.add(task)
        metrics.adjust_gauge("audit.outstanding", 1)
        task.add_done_callback(self._forget)
        return task

    async def _send(self, payload: str) -> None:
        await get_audit_sink().send(payload)

    def _run_detached(self, payload: str) -> None:
        with contextlib.suppress(Exception):
            asyncio.run(self._send(payload))

    def _forget(self, task: asyncio.Task) -> None:
        self._pending.discard(task)
        metrics.adjust_gauge("audit.outstanding", -1)
        if not task.cancelled():
            # Mark the exception retrieved so asyncio does not log it
            task.exception()

    async def shutdown(self, timeout: float) -> None:
        """
        Give outstanding sends ``timeout`` seconds, then cancel the rest.

        Sends dispatched while waiting are waited on within the same
        deadline, so nothing is left pending on return.
        """
        if not self._pending:
            return

        loop = asyncio.get_running_loop()
        deadline = loop.time() + timeout
        logger.info(f"Waiting for {len(self._pending)} outstanding audit dispatches")
        while self._pending:
            remaining = deadline - loop.time()
            if remaining <= 0:
                break
            await asyncio.wait(set(self._pending), timeout=remaining)

        still_running = set(self._pending)
        if still_running:
            logger.warning(f"Cancelling {len(still_running)} audit dispatches at shutdown")
            for task in still_running:
                task.cancel()
            await asyncio.gather(*still_running, return_exceptions=True)


dispatcher = AuditDispatcher()
