"""
Config directory steps

Create the config directory, then look for the generated sync script in it.
"""

import logging

from rnrelease.errors import SetupError
from rnrelease.models.messages import StateReached
from rnrelease.models.session import FlowState, Session
from .base import StepContext, pause

logger = logging.getLogger(__name__)


async def create_config_dir(session: Session, ctx: StepContext) -> StateReached:
    """
    Create the config directory if it does not exist yet

    Raises:
        SetupError: On any failure other than the directory already existing
    """
    try:
        ctx.config_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise SetupError(f"Cannot create config directory {ctx.config_dir}: {e}") from e

    logger.info(f"Config directory ready: {ctx.config_dir}")
    await pause(ctx)
    return StateReached(FlowState.INITIALIZED)


async def begin_file_check(session: Session, ctx: StepContext) -> StateReached:
    await pause(ctx)
    return StateReached(FlowState.CHECKING_FILES)


async def check_existing_files(session: Session, ctx: StepContext) -> StateReached:
    """
    List the config directory and look for the sync script

    Returns:
        FILES_CHECKED when the script exists, FILES_NOT_FOUND otherwise

    Raises:
        SetupError: If the directory cannot be listed
    """
    try:
        names = {entry.name for entry in ctx.config_dir.iterdir()}
    except OSError as e:
        raise SetupError(f"Cannot list config directory {ctx.config_dir}: {e}") from e

    if ctx.script_file_name in names:
        logger.info(f"Found existing sync script {ctx.script_path}")
        return StateReached(FlowState.FILES_CHECKED)

    logger.info(f"No sync script in {ctx.config_dir}, scaffolding required")
    return StateReached(FlowState.FILES_NOT_FOUND)


async def request_platform_paths(session: Session, ctx: StepContext) -> StateReached:
    """Start collecting platform file locations, iOS first"""
    return StateReached(FlowState.COLLECT_IOS_PATH)
