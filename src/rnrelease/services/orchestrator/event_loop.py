"""
Event loop runner

Owns the Session and a message queue with a single consumer. Every message
is passed through the FlowController; the resulting command, if any, runs as
an asyncio task that posts exactly one message back onto the queue. At most
one such task exists at a time.

Input sources (keyboard, signals, spinner ticks) only ever call post().
"""

import asyncio
from typing import Callable, List, Optional

import structlog

from rnrelease.models.messages import Message, Tick
from rnrelease.models.session import Session
from rnrelease.utils.logging_context import bind_state_context, log_context, log_performance, unbind_context
from .commands import Command, Transition
from .flow_controller import FlowController

logger = structlog.get_logger(__name__)


class FlowRunner:
    """
    Single-consumer message loop around a FlowController

    Usage:
        runner = FlowRunner(controller, on_render=view.update)
        session = await runner.run()
    """

    def __init__(
        self,
        controller: FlowController,
        on_render: Optional[Callable[[Session], None]] = None,
        tick_interval: Optional[float] = None,
    ):
        """
        Args:
            controller: State machine to drive
            on_render: Called with the session after every consumed message
            tick_interval: Seconds between Tick messages; None disables ticking
        """
        self.controller = controller
        self.on_render = on_render
        self.tick_interval = tick_interval

        self.session = Session()
        self.queue: "asyncio.Queue[Message]" = asyncio.Queue()
        self.commands_issued: List[str] = []

        self._step_task: Optional[asyncio.Task] = None
        self._crash: Optional[BaseException] = None

    def post(self, message: Message) -> None:
        """Enqueue a message for the controller"""
        self.queue.put_nowait(message)

    async def run(self) -> Session:
        """
        Run the flow until the controller asks to quit

        Returns:
            The final session (check session.error for a fatal failure)

        Raises:
            Exception: Any non-flow exception raised inside a step
        """
        ticker = None
        if self.tick_interval:
            ticker = asyncio.create_task(self._tick())

        bind_state_context(current_state=self.session.state.value)
        try:
            self._apply(self.controller.start(self.session))

            while not self.session.quitting:
                message = await self.queue.get()
                if self._crash is not None:
                    break
                self._apply(self.controller.update(self.session, message))
        finally:
            if ticker is not None:
                ticker.cancel()
            await self._cancel_step()
            unbind_context("current_state", "previous_state")

        if self._crash is not None:
            raise self._crash

        logger.info(
            "flow_finished",
            state=self.session.state.value,
            error=self.session.error,
            steps=len(self.commands_issued),
        )
        return self.session

    def _apply(self, transition: Transition) -> None:
        previous_state = self.session.state
        self.session = transition.session
        if self.session.state != previous_state:
            bind_state_context(current_state=self.session.state.value, previous_state=previous_state.value)
        self._render()

        command = transition.command
        if command is None or command.quit:
            return

        if self._step_task is not None and not self._step_task.done():
            raise RuntimeError(f"Step {command.name} issued while another step is in flight")

        self.commands_issued.append(command.name)
        self._step_task = asyncio.create_task(self._execute(command))

    async def _execute(self, command: Command) -> None:
        try:
            with log_context(step=command.name), log_performance(command.name, logger):
                message = await command.run()
        except Exception as e:
            logger.error("step_crashed", step=command.name, exc_info=True)
            self._crash = e
            self.post(Tick())
            return

        self.post(message)

    async def _cancel_step(self) -> None:
        """Drop the in-flight step without waiting for its result"""
        task = self._step_task
        self._step_task = None
        if task is None or task.done():
            return

        logger.info("cancelling_in_flight_step")
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass

    async def _tick(self) -> None:
        while True:
            await asyncio.sleep(self.tick_interval)
            self.post(Tick())

    def _render(self) -> None:
        if self.on_render is not None:
            self.on_render(self.session)
