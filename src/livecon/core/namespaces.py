"""Enumerate the module namespaces offered as completions."""

from __future__ import annotations

import logging
import pkgutil
import sys
from collections.abc import Iterable

logger = logging.getLogger(__name__)


def _is_public(name: str) -> bool:
    return bool(name) and not any(part.startswith("_") for part in name.split("."))


def _with_parents(name: str) -> Iterable[str]:
    parts = name.split(".")
    for i in range(1, len(parts) + 1):
        yield ".".join(parts[:i])


def loaded_namespaces(include_installed: bool = False) -> set[str]:
    """Public dotted module names reachable from the running interpreter.

    Args:
        include_installed: Also list importable top-level modules that have
            not been imported yet. Scans sys.path, so it is slower.

    Returns:
        Set of names such as {"os", "os.path", "json", "json.decoder"}.
    """
    names: set[str] = set()
    for module_name in list(sys.modules):
        if _is_public(module_name):
            names.update(_with_parents(module_name))

    if include_installed:
        for module_info in pkgutil.iter_modules():
            if _is_public(module_info.name):
                names.add(module_info.name)

    logger.debug("namespaces_found: count=%d", len(names))
    return names
