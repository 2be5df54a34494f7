"""
Commands scheduled by the flow controller

A Command wraps one step function together with the session snapshot and
context it runs against. Running it always yields exactly one message.
"""

import logging
from dataclasses import dataclass
from typing import NamedTuple, Optional

from rnrelease.errors import RnReleaseError
from rnrelease.models.messages import Message, StepFailed
from rnrelease.models.session import Session
from rnrelease.services.steps.base import Step, StepContext

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class Command:
    """One unit of background work, or the request to stop the loop"""

    name: str
    step: Optional[Step] = None
    session: Optional[Session] = None
    context: Optional[StepContext] = None
    quit: bool = False

    async def run(self) -> Message:
        """
        Execute the step

        Returns:
            The step's StateReached, or StepFailed if it raised RnReleaseError
        """
        if self.step is None:
            raise RuntimeError(f"Command {self.name!r} has no step to run")

        try:
            return await self.step(self.session, self.context)
        except RnReleaseError as e:
            logger.error(f"Step {self.name} failed ({e.kind}): {e}", exc_info=True)
            return StepFailed(step=self.name, error=e)


QUIT = Command(name="quit", quit=True)


class Transition(NamedTuple):
    """Controller output: the next session and zero-or-one command"""

    session: Session
    command: Optional[Command] = None
