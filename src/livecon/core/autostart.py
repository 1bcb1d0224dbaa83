"""Run a list of statements through a console session at startup."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from livecon.core.session import ConsoleSession
    from livecon.core.types import EvaluationResult

logger = logging.getLogger(__name__)


def run_autostart(
    session: ConsoleSession,
    statements: Iterable[str],
    source: str | None = None,
) -> list[EvaluationResult]:
    """Evaluate statements one after another.

    Statements arrive already filtered (no blank or comment lines). A
    statement that fails to compile or raises is reported in the transcript
    and the remaining statements still run.

    Args:
        session: Session to evaluate in.
        statements: Statements in execution order.
        source: Where the statements came from, for the announcement.

    Returns:
        One result per statement.
    """
    statements = list(statements)
    if not statements:
        return []

    if source:
        message = f"Executing code from {source}"
    else:
        message = f"Executing {len(statements)} autostart statement(s)"
    logger.info(message)
    session.transcript.append(message)

    return [session.evaluate(statement) for statement in statements]
