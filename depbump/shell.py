"""Shell and git utilities.

Provides a thin wrapper around subprocess calls for git operations, plus
output formatting helpers.
"""

from __future__ import annotations

import os
import subprocess
import sys
from collections.abc import Mapping
from pathlib import Path

from .errors import VersionControlError


def _subcommand(args: tuple[str, ...]) -> str:
    """Name of the git subcommand in args, skipping `-c key=value` options."""
    it = iter(args)
    for arg in it:
        if arg == "-c":
            next(it, None)
        elif not arg.startswith("-"):
            return arg
    return ""


def git(
    *args: str,
    cwd: Path | str | None = None,
    env: Mapping[str, str] | None = None,
) -> str:
    """Run a git command and return stdout.

    Args:
        *args: Arguments to pass to git (e.g., "status", "--porcelain").
        cwd: Working directory to run git in.
        env: Extra environment variables layered over the current process
             environment for this call only.

    Returns:
        Stdout from the git command with trailing whitespace removed. Leading
        whitespace is significant in some formats (status --porcelain).

    Raises:
        VersionControlError: If git exits non-zero. The message carries the
            command and git's own stderr and stdout unchanged.
    """
    full_env = {**os.environ, **env} if env else None
    try:
        result = subprocess.run(
            ["git", *args],
            cwd=cwd,
            env=full_env,
            capture_output=True,
            text=True,
            check=True,
        )
    except subprocess.CalledProcessError as exc:
        streams = [s.strip() for s in (exc.stderr, exc.stdout) if s and s.strip()]
        detail = "\n".join(streams)
        raise VersionControlError(f"git {_subcommand(args)} failed: {detail}") from exc
    except FileNotFoundError as exc:
        raise VersionControlError("git executable not found on PATH") from exc
    return result.stdout.rstrip()


def step(msg: str) -> None:
    """Print a visually distinct step header.

    Used to separate the phases of the bump workflow in terminal output.
    """
    print(f"\n{'─' * 60}\n{msg}\n{'─' * 60}")


def fatal(msg: str) -> None:
    """Print an error message and exit with code 1.

    Use for unrecoverable errors that should halt the run.
    """
    print(f"ERROR: {msg}", file=sys.stderr)
    sys.exit(1)
