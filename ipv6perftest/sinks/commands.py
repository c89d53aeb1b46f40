"""Subprocess helpers shared by sinks driving git and gh."""

import asyncio
import logging
from pathlib import Path

log = logging.getLogger(__name__)


async def run_command(*args: str, cwd: Path) -> str:
    """Run a command and return its stripped stdout.

    Raises:
        RuntimeError: If the command exits with a non-zero status

    """
    log.debug("Running %s in %s", " ".join(args[:3]), cwd)
    process = await asyncio.create_subprocess_exec(
        *args,
        cwd=cwd,
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.PIPE,
    )
    stdout, stderr = await process.communicate()

    if process.returncode != 0:
        raise RuntimeError(
            f"{' '.join(args[:2])} failed ({process.returncode}): "
            f"{stderr.decode().strip()}"
        )

    return stdout.decode().strip()
