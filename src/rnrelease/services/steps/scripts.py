"""
Sync script scaffolding step
"""

import logging
import os

from rnrelease.errors import ScriptTemplateError
from rnrelease.models.messages import StateReached
from rnrelease.models.session import FlowState, Session
from rnrelease.services.config.template_service import get_template_service
from .base import StepContext, pause

logger = logging.getLogger(__name__)

SCRIPT_MODE = 0o777


async def create_script_files(session: Session, ctx: StepContext) -> StateReached:
    """
    Write the sync script from the template and make it executable

    The file is created and made executable before the template is rendered;
    a rendering failure leaves the empty file in place.

    Raises:
        ScriptTemplateError: If the file cannot be written or the template fails
    """
    template_service = get_template_service()

    try:
        with open(ctx.script_path, "w", encoding="utf-8") as script_output:
            os.chmod(ctx.script_path, SCRIPT_MODE)
            script_output.write(
                template_service.render_sync_script(
                    info_plist_location=session.ios_config_path,
                    build_gradle_location=session.android_config_path,
                )
            )
    except OSError as e:
        raise ScriptTemplateError(f"Cannot write sync script {ctx.script_path}: {e}") from e

    logger.info(
        f"Created {ctx.script_path} "
        f"(Info.plist: {session.ios_config_path}, build.gradle: {session.android_config_path})"
    )

    await pause(ctx)
    return StateReached(FlowState.CREATED_SCRIPTS)
