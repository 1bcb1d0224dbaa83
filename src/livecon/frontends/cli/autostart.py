"""Autostart file handling.

The console engine only accepts ready-made statement lists; reading,
filtering, creating and opening the file happen here.
"""

from __future__ import annotations

import logging
from pathlib import Path

import rich_click as click

logger = logging.getLogger(__name__)

COMMENT_PREFIX = "#"

AUTOSTART_TEMPLATE = (
    "# This Python code is executed by the console when it starts.\n"
    "# Only single-line statements are supported. Use echo(obj) to write to\n"
    "# the console transcript and message(obj) to write to the log.\n"
    "\n"
)


def load_statements(path: str | Path) -> list[str]:
    """Read the statements to run from an autostart file.

    Lines are trimmed; blank lines and "#" comment lines are dropped.

    Args:
        path: Autostart file path.

    Returns:
        Statements in file order, or [] if the file does not exist.
    """
    path = Path(path)
    if not path.is_file():
        logger.debug("autostart_missing: %s", path)
        return []

    statements = []
    for line in path.read_text(encoding="utf-8").splitlines():
        line = line.strip("\t \r\n")
        if line and not line.startswith(COMMENT_PREFIX):
            statements.append(line)
    return statements


def ensure_autostart_file(path: str | Path) -> Path:
    """Create the autostart file with an explanatory header if it is missing."""
    path = Path(path)
    if not path.exists():
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(AUTOSTART_TEMPLATE, encoding="utf-8")
        logger.info("Created autostart file %s", path)
    return path


def open_autostart_file(path: str | Path) -> Path:
    """Create the autostart file if needed and open it in the default editor.

    Raises:
        OSError: If the file cannot be created.
    """
    path = ensure_autostart_file(path)
    click.launch(str(path))
    return path
