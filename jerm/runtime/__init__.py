"""Public runtime orchestration entry points.

Groups the session bootstrap (`run_app`) and the event-loop pieces used by
tests and composition code.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .app import AppSettings
    from .loop import RuntimeLoopTiming, StatusSync


def run_app(*args, **kwargs):
    """Lazily import the bootstrap to keep ``import jerm.runtime`` cheap."""
    from .app import run_app as _run_app

    return _run_app(*args, **kwargs)


def __getattr__(name: str):
    if name == "AppSettings":
        from . import app as _app

        return _app.AppSettings
    if name in {"RuntimeLoopTiming", "StatusSync"}:
        from . import loop as _loop

        return getattr(_loop, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "AppSettings",
    "RuntimeLoopTiming",
    "StatusSync",
    "run_app",
]
