"""
Interactive terminal front end

Wires the FlowRunner to a Rich Live display, the keyboard reader and the
SIGINT/SIGWINCH signals.
"""

import asyncio
import shutil
import signal
from typing import Optional

import structlog
from rich.console import Console
from rich.live import Live

from rnrelease.models.messages import Interrupt, Resized
from rnrelease.models.session import Session
from rnrelease.services.orchestrator import FlowController, FlowRunner
from .keyboard import KeyReader
from .view import FlowView

logger = structlog.get_logger(__name__)

SPINNER_TICK_SECONDS = 0.1


class TerminalApp:
    """Runs one release flow in the current terminal"""

    def __init__(
        self,
        controller: FlowController,
        console: Optional[Console] = None,
        view: Optional[FlowView] = None,
    ):
        self.controller = controller
        self.console = console or Console()
        self.view = view or FlowView()

    async def run(self) -> Session:
        loop = asyncio.get_running_loop()
        runner = FlowRunner(self.controller, tick_interval=SPINNER_TICK_SECONDS)

        with Live(console=self.console, auto_refresh=False, transient=True) as live:

            def render(session: Session) -> None:
                live.update(self.view.render(session), refresh=True)

            runner.on_render = render

            def post_size() -> None:
                size = shutil.get_terminal_size()
                runner.post(Resized(width=size.columns, height=size.lines))

            loop.add_signal_handler(signal.SIGINT, runner.post, Interrupt())
            loop.add_signal_handler(signal.SIGWINCH, post_size)
            post_size()

            try:
                with KeyReader(loop, runner.post):
                    session = await runner.run()
            finally:
                loop.remove_signal_handler(signal.SIGINT)
                loop.remove_signal_handler(signal.SIGWINCH)

        logger.debug("terminal_closed", state=session.state.value)
        return session
