"""jerm: a full-screen front-end for the shell.

Adds a bookmark sidebar, a ``cd -list`` directory navigator, and a git-aware
status line around an ordinary command prompt.
"""

from __future__ import annotations


def main(*args, **kwargs):
    """Run the CLI; the import is deferred so ``import jerm`` stays cheap."""
    from .cli import main as _main

    return _main(*args, **kwargs)


__all__ = ["main"]
