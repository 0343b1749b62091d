# src/pm_tracker/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState (load + migrate), then either:
- runs a single command given on the command line (`pm-tracker /tasks`), or
- starts the interactive console.
"""

from __future__ import annotations

import logging
import shlex
import sys

from ..cli.bootstrap import create_initial_state
from ..cli.commands import registry as command_registry
from ..config import get_settings
from ..connectors.console_connector import run_console_loop
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    settings = get_settings()

    # choose console log level from settings.log_level
    level_name = str(getattr(settings, "log_level", "INFO")).upper()
    console_level = getattr(logging, level_name, logging.INFO)

    log_dir = settings.data_dir if getattr(settings, "log_to_file", True) else None
    setup_logging(log_dir=log_dir, console_level=console_level)

    logger.info("Starting %s...", getattr(settings, "app_name", "pm-tracker"))

    state = create_initial_state(settings=settings)

    if argv:
        line = shlex.join(argv)
        if not line.startswith("/"):
            line = "/" + line
        try:
            response = command_registry.handle(state, line)
        except Exception:
            logger.exception("Command failed: %s", line)
            print("Internal error while handling a command.", file=sys.stderr)
            return 1
        print(response)
        return 0

    run_console_loop(state)
    logger.info("Bye.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
