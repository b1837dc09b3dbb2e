"""
Process-wide logging setup.

Modules log through `logging.getLogger(__name__)`; this only wires the root
handler so those records reach the operator console.
"""

from __future__ import annotations

import logging
import sys

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def configure_logging(level: str = "INFO") -> None:
    resolved = logging.getLevelName((level or "").strip().upper())
    if not isinstance(resolved, int):
        resolved = logging.INFO

    root = logging.getLogger()
    root.setLevel(resolved)
    # Avoid stacking handlers when the app factory runs more than once (tests).
    if any(getattr(h, "_users_api", False) for h in root.handlers):
        return None

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler._users_api = True  # type: ignore[attr-defined]
    root.addHandler(handler)
