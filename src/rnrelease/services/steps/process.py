"""
External process steps

Run the version bump command and then the generated sync script. Both are
inspected only for success; there is no timeout.
"""

import asyncio
import logging
from pathlib import Path
from typing import Sequence, Tuple

from rnrelease.errors import ExternalProcessError
from rnrelease.models.messages import StateReached
from rnrelease.models.session import FlowState, Session
from .base import StepContext, pause

logger = logging.getLogger(__name__)


async def run_process(argv: Sequence[str], cwd: Path) -> Tuple[str, str]:
    """
    Run a command to completion, capturing its output

    A cancelled run kills the child before the cancellation propagates.

    Returns:
        (stdout, stderr) decoded as UTF-8

    Raises:
        ExternalProcessError: If the command cannot be launched or exits non-zero
    """
    try:
        process = await asyncio.create_subprocess_exec(
            *argv,
            cwd=str(cwd),
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except OSError as e:
        raise ExternalProcessError(
            f"Cannot run {' '.join(argv)}: {e}", command=argv
        ) from e

    try:
        stdout_bytes, stderr_bytes = await process.communicate()
    except asyncio.CancelledError:
        if process.returncode is None:
            logger.warning(f"Killing {' '.join(argv)} after cancellation")
            process.kill()
        raise

    stdout = stdout_bytes.decode("utf-8", errors="replace") if stdout_bytes else ""
    stderr = stderr_bytes.decode("utf-8", errors="replace") if stderr_bytes else ""

    if process.returncode != 0:
        raise ExternalProcessError(
            f"{' '.join(argv)} exited with status {process.returncode}: {stderr.strip()}",
            command=argv,
            returncode=process.returncode,
            stderr=stderr,
        )

    return stdout, stderr


async def run_version_bump(session: Session, ctx: StepContext) -> StateReached:
    """
    Invoke the bump command with the selected increment kind as its argument

    Standard output is captured but not parsed, so the resulting version is
    not confirmed here.
    """
    if session.selected_increment is None:
        raise ExternalProcessError("No increment selected", command=list(ctx.bump_command))

    argv = [*ctx.bump_command, session.selected_increment.value]
    stdout, _ = await run_process(argv, ctx.project_dir)
    logger.info(f"Ran {' '.join(argv)}")
    logger.debug(f"Bump command output: {stdout.strip()}")

    return StateReached(FlowState.SYNCING_PLATFORM)


async def sync_with_platform(session: Session, ctx: StepContext) -> StateReached:
    """Execute the generated sync script with no arguments"""
    argv = [str(ctx.script_path)]
    stdout, _ = await run_process(argv, ctx.project_dir)
    logger.info(f"Sync script finished: {stdout.strip()}")

    await pause(ctx)
    return StateReached(FlowState.DONE)
