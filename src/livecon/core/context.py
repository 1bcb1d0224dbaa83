"""Shared state handed to every console component."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from livecon.core.config import ConsoleConfig
from livecon.core.transcript import Transcript


@dataclass
class ConsoleContext:
    """Everything one console session shares between its components.

    Built once per session and passed by reference; there is no global
    console instance.

    Attributes:
        config: Resolved settings.
        transcript: Output lines shown to the user.
        logger: Logger the console reports through.
    """

    config: ConsoleConfig = field(default_factory=ConsoleConfig)
    transcript: Transcript = field(default_factory=Transcript)
    logger: logging.Logger = field(default_factory=lambda: logging.getLogger("livecon.console"))
