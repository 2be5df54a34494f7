"""
Step Function Base

Shared context and helpers for step functions. A step is an async callable

    async def step(session: Session, ctx: StepContext) -> StateReached

that performs exactly one side effect and reports the next state. Steps read
the session snapshot they are given and never write to it; field changes are
returned in StateReached.updates for the controller to apply.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Awaitable, Callable, Optional, Tuple

from rnrelease.models.messages import StateReached
from rnrelease.models.session import FlowState, Session
from rnrelease.services.config.configuration_service import get_config_service

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StepContext:
    """Fixed inputs shared by all steps of one run"""

    project_dir: Path
    config_folder: str = ".rnrelease"
    script_file_name: str = "sync_version.sh"
    versioning_files: Tuple[str, ...] = ("package.json",)
    increment_kinds: Tuple[str, ...] = field(default_factory=tuple)
    bump_command: Tuple[str, ...] = ("npm", "version")
    pause_seconds: float = 2.0

    @property
    def config_dir(self) -> Path:
        return self.project_dir / self.config_folder

    @property
    def script_path(self) -> Path:
        return self.config_dir / self.script_file_name

    @classmethod
    def from_config(
        cls,
        project_dir: Path,
        config_service=None,
        pause_seconds: Optional[float] = None,
    ) -> "StepContext":
        """
        Build the context from the packaged release configuration

        Args:
            project_dir: Root of the app repository
            config_service: ConfigurationService instance (uses global if None)
            pause_seconds: Override of the step pause, used by tests
        """
        config_service = config_service or get_config_service()
        if pause_seconds is None:
            pause_seconds = config_service.get_step_pause_seconds()

        return cls(
            project_dir=Path(project_dir),
            config_folder=config_service.get_config_folder(),
            script_file_name=config_service.get_script_file_name(),
            versioning_files=tuple(config_service.get_versioning_files()),
            increment_kinds=tuple(config_service.get_increment_kinds()),
            bump_command=tuple(config_service.get_bump_command()),
            pause_seconds=pause_seconds,
        )


Step = Callable[[Session, StepContext], Awaitable[StateReached]]


async def pause(ctx: StepContext) -> None:
    """Fixed pause between steps so progress stays readable"""
    if ctx.pause_seconds > 0:
        await asyncio.sleep(ctx.pause_seconds)


def emit_state(state: FlowState) -> Step:
    """Step that performs no work and moves to `state`"""

    async def _emit(session: Session, ctx: StepContext) -> StateReached:
        return StateReached(state)

    _emit.__name__ = f"emit_{state.value}"
    return _emit
