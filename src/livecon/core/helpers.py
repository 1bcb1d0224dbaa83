"""Helper functions preloaded into the console namespace."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from livecon.core.context import ConsoleContext

HELPER_DESCRIPTIONS = {
    "echo": "echo(obj) - write to the console transcript",
    "message": "message(obj) - write to the application log",
    "helpers": "helpers() - list these helpers",
}


def console_helpers(context: ConsoleContext) -> dict[str, Callable[..., Any]]:
    """Build the helper functions bound to one console context."""

    def echo(obj: object = "") -> None:
        context.transcript.append(obj)

    def message(obj: object) -> None:
        context.logger.info("%s", obj)

    def helpers() -> None:
        context.transcript.append("Console helpers:")
        for description in HELPER_DESCRIPTIONS.values():
            context.transcript.append(f"  {description}")

    return {"echo": echo, "message": message, "helpers": helpers}
