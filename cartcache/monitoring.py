"""Statement timing for the local cart store.

Store calls are synchronous and bounded by disk latency, so anything slower than
the configured threshold is worth a warning in the logs.
"""

import logging
import time
from typing import Any

from sqlalchemy import event
from sqlalchemy.engine import Engine

logger = logging.getLogger(__name__)


def setup_query_monitoring(engine: Engine, slow_query_threshold: float = 0.1) -> None:
    """Log a warning for every statement slower than ``slow_query_threshold``.

    Args:
        engine: SQLAlchemy engine to monitor
        slow_query_threshold: Log statements slower than this many seconds (default: 0.1s)
    """

    @event.listens_for(engine, "before_cursor_execute")
    def receive_before_cursor_execute(
        conn: Any,  # SQLAlchemy Connection - using Any due to incomplete typing in library
        cursor: Any,
        statement: str,
        parameters: Any,
        context: Any,
        executemany: bool,
    ) -> None:
        """Record statement start time."""
        conn.info.setdefault("query_start_time", []).append(time.perf_counter())

    @event.listens_for(engine, "after_cursor_execute")
    def receive_after_cursor_execute(
        conn: Any,
        cursor: Any,
        statement: str,
        parameters: Any,
        context: Any,
        executemany: bool,
    ) -> None:
        """Log slow statements after execution."""
        started = conn.info.get("query_start_time")
        if not started:
            return
        total = time.perf_counter() - started.pop()

        if total > slow_query_threshold:
            truncated_statement = statement[:500]
            if len(statement) > 500:
                truncated_statement += "..."

            logger.warning(
                f"Slow store statement ({total:.3f}s): {truncated_statement}",
                extra={
                    "duration_seconds": total,
                    "query": statement,
                    "threshold_seconds": slow_query_threshold,
                },
            )

    logger.info(
        f"Store statement monitoring enabled (slow threshold: {slow_query_threshold}s)"
    )
