"""Shell command execution with Result-based error handling.

Release commands are plain shell lines (`git push && git push --tags`), so
they run through the shell. Captured stdout comes back in Ok; a non-zero exit
or a spawn failure comes back as Err(ProcessError). Nothing is retried and no
timeout is applied.

Usage:
    match run("git rev-parse --abbrev-ref HEAD", silent=True, cwd=project):
        case Ok(branch):
            print(branch)
        case Err(error):
            print(f"Failed: {error.stderr}")
"""

from __future__ import annotations

import subprocess
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import IO

from reltag.core.result import Err, Ok, Result
from reltag.output.console import ConsoleProtocol, RichConsole, Style

__all__ = ["ProcessError", "run"]


@dataclass(frozen=True, slots=True)
class ProcessError:
    """Error from a failed shell command.

    Attributes:
        command: The command line that was executed.
        returncode: Exit code of the process, -1 if it could not be spawned.
        stdout: Standard output (may be empty).
        stderr: Standard error, or the spawn error message.
    """

    command: str
    returncode: int
    stdout: str
    stderr: str

    def __str__(self) -> str:
        tokens = self.command.split()
        cmd_str = " ".join(tokens[:3])
        if len(tokens) > 3:
            cmd_str += " ..."
        return f"{cmd_str} failed (exit {self.returncode})"


def run(
    command: str,
    silent: bool = True,
    cwd: Path | None = None,
    *,
    console: ConsoleProtocol | None = None,
) -> Result[str, ProcessError]:
    """Execute a shell command line and return its stdout.

    Args:
        command: Command line, run through the shell.
        silent: When False, stdout and stderr lines are echoed to the console
            as they arrive.
        cwd: Working directory, None for the current one. Passed through as is.
        console: Sink for streamed output (a RichConsole when omitted).

    Returns:
        Ok(stdout) without its trailing line terminator, Err(ProcessError)
        on non-zero exit or spawn failure.
    """
    try:
        if silent:
            proc = subprocess.run(
                command,
                shell=True,
                cwd=cwd,
                capture_output=True,
                encoding="utf-8",
                errors="replace",
                check=False,
            )
            returncode, stdout, stderr = proc.returncode, proc.stdout, proc.stderr
        else:
            returncode, stdout, stderr = _run_streaming(
                command, cwd, console if console is not None else RichConsole()
            )
    except OSError as e:
        return Err(ProcessError(command=command, returncode=-1, stdout="", stderr=str(e)))

    if returncode != 0:
        return Err(
            ProcessError(
                command=command,
                returncode=returncode,
                stdout=stdout,
                stderr=stderr,
            )
        )

    return Ok(_strip_line_terminator(stdout))


def _strip_line_terminator(text: str) -> str:
    if text.endswith("\r\n"):
        return text[:-2]
    return text.removesuffix("\n")


def _run_streaming(
    command: str,
    cwd: Path | None,
    console: ConsoleProtocol,
) -> tuple[int, str, str]:
    """Run a command while echoing its output line by line."""
    with subprocess.Popen(
        command,
        shell=True,
        cwd=cwd,
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
        encoding="utf-8",
        errors="replace",
        bufsize=1,
    ) as proc:
        assert proc.stdout is not None
        assert proc.stderr is not None

        stderr_chunks: list[str] = []
        # stderr is drained on its own thread so neither pipe can fill up and block
        pump = threading.Thread(
            target=_pump,
            args=(proc.stderr, stderr_chunks, console, Style.DIM),
            daemon=True,
        )
        pump.start()

        stdout_chunks: list[str] = []
        _pump(proc.stdout, stdout_chunks, console, Style.DEFAULT)

        pump.join()
        returncode = proc.wait()

    return returncode, "".join(stdout_chunks), "".join(stderr_chunks)


def _pump(
    stream: IO[str],
    chunks: list[str],
    console: ConsoleProtocol,
    style: Style,
) -> None:
    for line in stream:
        chunks.append(line)
        console.print(line.rstrip("\r\n"), style)
