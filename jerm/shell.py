"""External shell execution and change-directory path resolution."""

from __future__ import annotations

import os
import subprocess
from dataclasses import dataclass, field
from pathlib import Path

from .errors import CommandLaunchError, DirectoryNotFound, InvalidPath, NotADirectory
from .ansi import sanitize_terminal_text

DEFAULT_SHELL = "/bin/sh"


@dataclass(frozen=True)
class CommandResult:
    stdout: list[str] = field(default_factory=list)
    stderr: list[str] = field(default_factory=list)
    exit_code: int = 0

    @property
    def success(self) -> bool:
        return self.exit_code == 0

    def all_lines(self) -> list[str]:
        """Return stdout lines followed by stderr lines."""
        return [*self.stdout, *self.stderr]


def default_shell() -> str:
    """Return ``$SHELL`` when set, otherwise ``/bin/sh``."""
    return os.environ.get("SHELL") or DEFAULT_SHELL


def _output_lines(raw: bytes) -> list[str]:
    text = raw.decode("utf-8", errors="replace")
    return [sanitize_terminal_text(line) for line in text.splitlines()]


def run_command(command: str, cwd: Path, shell: str | None = None) -> CommandResult:
    """Run ``command`` through ``<shell> -c`` inside ``cwd`` and capture output.

    Raises :class:`CommandLaunchError` when the interpreter cannot be started;
    a non-zero exit status is reported through ``exit_code`` instead.
    """
    interpreter = shell or default_shell()
    try:
        proc = subprocess.run(
            [interpreter, "-c", command],
            cwd=str(cwd),
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            check=False,
        )
    except OSError as exc:
        raise CommandLaunchError(f"Failed to execute command: {exc}") from exc

    return CommandResult(
        stdout=_output_lines(proc.stdout),
        stderr=_output_lines(proc.stderr),
        exit_code=proc.returncode if proc.returncode >= 0 else -1,
    )


def resolve_cd_path(token: str, current_dir: Path, home: Path | None = None) -> Path:
    """Resolve a ``cd`` argument against ``current_dir``.

    A leading ``~`` expands to ``home``; absolute paths are taken as-is and
    anything else is joined onto ``current_dir``. The result is canonicalized
    and must be an existing directory. ``-`` is rejected.
    """
    if token == "-":
        raise InvalidPath("cd - not yet implemented")

    if token == "~" or token.startswith("~/"):
        home_dir = home if home is not None else Path.home()
        expanded = home_dir if token == "~" else home_dir / token[2:]
    elif token.startswith("~"):
        raise InvalidPath(f"cannot expand {token}")
    elif token.startswith("/"):
        expanded = Path(token)
    else:
        expanded = current_dir / token

    try:
        canonical = expanded.resolve(strict=True)
    except (OSError, RuntimeError) as exc:
        raise DirectoryNotFound(token) from exc

    if not canonical.is_dir():
        raise NotADirectory(token)
    return canonical


__all__ = [
    "CommandResult",
    "DEFAULT_SHELL",
    "default_shell",
    "run_command",
    "resolve_cd_path",
]
