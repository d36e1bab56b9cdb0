"""
Access to the host: sysfs reads and external command execution.

Both helpers are the only places that touch the OS, so collectors take them
as injectable callables.
"""

import asyncio
import logging
from typing import NamedTuple, Optional, Sequence

logger = logging.getLogger(__name__)


class CommandError(Exception):
    """Raised when an external command could not be executed."""


class CommandResult(NamedTuple):
    code: int
    stdout: str
    stderr: str


def read_sysfs(path: str) -> Optional[str]:
    """Return the file contents, or None when it cannot be read."""
    try:
        with open(path, "r") as f:
            return f.read()
    except OSError as e:
        logger.debug(f"Cannot read {path}: {e}")
        return None


async def run_command(argv: Sequence[str], timeout: Optional[float] = None) -> CommandResult:
    """
    Run a command without a shell and capture its output.

    Raises CommandError if the process cannot be started or does not finish
    within `timeout` seconds. A non-zero exit code is not an error here.
    """
    try:
        process = await asyncio.create_subprocess_exec(
            *argv,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except OSError as e:
        raise CommandError(str(e)) from e

    try:
        stdout, stderr = await asyncio.wait_for(process.communicate(), timeout)
    except asyncio.TimeoutError as e:
        try:
            process.kill()
        except ProcessLookupError:
            pass
        await process.wait()
        raise CommandError(f"{argv[0]} timed out after {timeout}s") from e

    return CommandResult(
        code=process.returncode,
        stdout=stdout.decode("utf-8", errors="replace"),
        stderr=stderr.decode("utf-8", errors="replace"),
    )
