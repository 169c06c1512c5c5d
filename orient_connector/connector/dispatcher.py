"""
Command Dispatcher

Sends rendered statements to the open database, one at a time or as a
batch. Every statement is logged on the query channel together with the
correlation id of its batch.
"""

import asyncio
import logging
from collections.abc import Sequence
from typing import Any

from orient_connector.shared.database import OrientHandler
from orient_connector.shared.logging import QUERY_CHANNEL, generate_correlation_id, get_logger

Records = list[dict[str, Any]]


class CommandDispatcher:
    """Runs statements against the connection owned by the connector."""

    def __init__(
        self,
        handler: OrientHandler,
        logger: logging.Logger | None = None,
        max_parallel: int = 8,
    ):
        self._handler = handler
        self._logger = logger or get_logger(QUERY_CHANNEL)
        self._max_parallel = max(1, max_parallel)

    async def run(self, statement: str, correlation_id: str | None = None) -> Records:
        """Execute one statement and return its records."""
        correlation_id = correlation_id or generate_correlation_id()
        self._logger.debug("[%s] %s", correlation_id, statement)
        try:
            return await self._handler.command(statement)
        except Exception as exc:
            self._logger.debug("[%s] failed: %s", correlation_id, exc)
            raise

    async def run_series(self, statements: Sequence[str]) -> list[Records]:
        """Execute statements in order, stopping at the first failure.

        Raises:
            BackendError: The first failure; later statements never run.
        """
        correlation_id = generate_correlation_id()
        results: list[Records] = []
        for statement in statements:
            results.append(await self.run(statement, correlation_id))
        return results

    async def run_parallel(self, statements: Sequence[str]) -> list[Records]:
        """Execute independent statements concurrently.

        Waits for every statement to finish. Statements that succeeded keep
        their effect even when another one fails; there is no rollback.

        Returns:
            Records per statement, in input order.

        Raises:
            BackendError: The first failure in input order.
        """
        correlation_id = generate_correlation_id()
        semaphore = asyncio.Semaphore(self._max_parallel)

        async def _run_one(statement: str) -> Records:
            async with semaphore:
                return await self.run(statement, correlation_id)

        results = await asyncio.gather(
            *(_run_one(s) for s in statements), return_exceptions=True
        )
        failures = [r for r in results if isinstance(r, BaseException)]
        if failures:
            self._logger.warning(
                "[%s] %d of %d parallel statements failed",
                correlation_id, len(failures), len(results),
            )
            raise failures[0]
        return list(results)
