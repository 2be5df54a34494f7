"""
rnrelease - interactive semver bump and platform version sync
Command line entry point
"""

import argparse
import asyncio
import logging
import logging.handlers
import os
import sys
import uuid
from pathlib import Path
from typing import List, Optional

import structlog
from dotenv import load_dotenv
from rich.console import Console
from rich.style import Style
from rich.text import Text

from . import __version__
from .models.session import FlowState, Session
from .services.config import get_config_service, validate_configs_on_startup
from .services.orchestrator import FlowController
from .services.steps import StepContext
from .ui import FlowView, TerminalApp
from .utils.logging_context import bind_flow_context

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_INTERRUPTED = 130


def configure_logging():
    """
    Configure structured logging using structlog.

    - Production (ENV=production): JSON output for log aggregation
    - Development (ENV=development): Human-readable console output
    - Console output goes to stderr; the terminal view owns stdout
    - LOG_FILE_PATH adds a rotating file handler
    """
    env = os.getenv("ENV", "development").lower()
    log_level_str = os.getenv("LOG_LEVEL", "WARNING").upper()
    log_level = getattr(logging, log_level_str, logging.WARNING)

    timestamper = structlog.processors.TimeStamper(fmt="iso")

    shared_processors = [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.contextvars.merge_contextvars,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        timestamper,
    ]

    if env == "production":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(
            colors=sys.stderr.isatty(),
            exception_formatter=structlog.dev.plain_traceback
        )

    structlog.configure(
        processors=shared_processors + [
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()

    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setFormatter(formatter)
    root_logger.addHandler(stderr_handler)

    log_file_path = os.getenv("LOG_FILE_PATH")
    if log_file_path:
        log_file_path = str(Path(log_file_path).resolve())
        log_dir = os.path.dirname(log_file_path)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)

        file_handler = logging.handlers.RotatingFileHandler(
            filename=log_file_path,
            maxBytes=10 * 1024 * 1024,  # 10MB per file
            backupCount=5,
            encoding='utf-8'
        )
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    root_logger.setLevel(log_level)
    logging.getLogger("asyncio").setLevel(logging.WARNING)

    return structlog.get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rnrelease",
        description="Bump the project version with npm and sync it into the iOS and Android projects.",
    )
    parser.add_argument(
        "--project-dir",
        default=None,
        help="App repository root (default: $RNRELEASE_PROJECT_DIR or the current directory)",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def resolve_project_dir(cli_value: Optional[str]) -> Path:
    value = cli_value or os.getenv("RNRELEASE_PROJECT_DIR") or os.getcwd()
    return Path(value).resolve()


def exit_code_for(session: Session) -> int:
    if session.error:
        return EXIT_ERROR
    if session.state != FlowState.DONE:
        return EXIT_INTERRUPTED
    return EXIT_OK


def report(console: Console, session: Session, primary_color: str) -> None:
    """Print the final status line once the interactive view is gone"""
    if session.error:
        console.print(Text(f"\n   ✗ {session.error}\n", style="bold red"))
    elif session.state == FlowState.DONE:
        console.print(Text("\n   ✦ Done!\n", style=Style(color=primary_color)))
    else:
        console.print(Text("\n   Cancelled\n", style="dim"))


def main(argv: Optional[List[str]] = None) -> int:
    load_dotenv()
    logger = configure_logging()

    args = build_parser().parse_args(argv)
    project_dir = resolve_project_dir(args.project_dir)
    bind_flow_context(project_dir=str(project_dir), run_id=uuid.uuid4().hex[:8])

    console = Console()
    config_errors = validate_configs_on_startup()
    if config_errors:
        for error in config_errors:
            console.print(Text(f"   ✗ {error}", style="bold red"))
        return EXIT_ERROR

    config_service = get_config_service()
    primary_color = config_service.get_primary_color()
    context = StepContext.from_config(project_dir, config_service)

    logger.info("flow_starting", pause_seconds=context.pause_seconds)
    app = TerminalApp(
        FlowController(context),
        console=console,
        view=FlowView(primary_color),
    )
    session = asyncio.run(app.run())

    report(console, session, primary_color)
    code = exit_code_for(session)
    logger.info("flow_exit", exit_code=code)
    return code


if __name__ == "__main__":
    sys.exit(main())
