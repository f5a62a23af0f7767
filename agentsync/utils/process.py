# AgentSync Process Runner
# Blocking subprocess execution with captured output

import os
import subprocess
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from agentsync.exceptions import AgentSyncError


class CommandLaunchError(AgentSyncError):
    """The external tool could not be started at all."""

    def __init__(self, command_line: str, reason: str = ""):
        self.command_line = command_line
        self.reason = reason
        message = f"Failed to launch command: {command_line}"
        if reason:
            message += f" ({reason})"
        super().__init__(message, command_line=command_line, reason=reason)


@dataclass(frozen=True)
class CommandResult:
    """Exit code and captured text output of a finished process."""

    exit_code: int
    stdout: str
    stderr: str

    @property
    def ok(self) -> bool:
        return self.exit_code == 0

    @property
    def combined(self) -> str:
        """stderr and stdout joined, for substring matching."""
        return f"{self.stderr}\n{self.stdout}"


def run_command(
    command: str,
    args: Sequence[str] = (),
    *,
    cwd: Optional[Path] = None,
    extra_env: Optional[Mapping[str, str]] = None,
) -> CommandResult:
    """
    Run a process to completion and capture its output.

    Args:
        command: Executable name or path.
        args: Arguments passed to the executable.
        cwd: Working directory.
        extra_env: Variables overlaid on the current environment.

    Returns:
        CommandResult with exit code, stdout and stderr.

    Raises:
        CommandLaunchError: If the process could not be started.
    """
    cmd = [command, *args]
    env = None
    if extra_env:
        env = dict(os.environ)
        env.update(extra_env)

    try:
        result = subprocess.run(
            cmd,
            cwd=cwd,
            env=env,
            check=False,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
        )
    except (FileNotFoundError, PermissionError, NotADirectoryError) as e:
        raise CommandLaunchError(" ".join(cmd), e.strerror or str(e)) from e
    except OSError as e:
        raise CommandLaunchError(" ".join(cmd), str(e)) from e

    return CommandResult(
        exit_code=result.returncode,
        stdout=result.stdout or "",
        stderr=result.stderr or "",
    )
