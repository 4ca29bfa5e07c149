"""CLI entry points."""

import os
import sys
from typing import Optional

from common.constants import PVFS2_VERSION
from common.exceptions import PVFSClientError
from common.logging_config import setup_logging
from cli.commands import dispatch_command
from cli.constants import USAGE
from cli.models import VersionCommand
from cli.parser import ParseError, parse_args
from cli.repl import repl_loop
from sysint.session import ClusterSession


def _log_level(argv: list[str]) -> Optional[str]:
    if '--debug' in argv:
        argv.remove('--debug')
        return 'DEBUG'
    return os.getenv('LOG_LEVEL')


def run_tool(
    command_name: str,
    argv: Optional[list[str]] = None,
    prog: Optional[str] = None,
    session: Optional[ClusterSession] = None,
) -> int:
    """
    Run one tool invocation and return its exit status.

    Args:
        command_name: One of 'set-perf-interval', 'set-mode', 'mkdir'
        argv: Arguments without the program name (defaults to sys.argv[1:])
        prog: Program name for usage text
        session: Optional ClusterSession for dependency injection (testing)

    Returns:
        0 on success, 1 on any failure
    """
    argv = list(sys.argv[1:] if argv is None else argv)
    prog = prog or f"pvfs2-{command_name}"
    logger = setup_logging(prog, log_level=_log_level(argv))

    try:
        cmd = parse_args(command_name, argv)
    except ParseError as e:
        print(f"Error: {e}", file=sys.stderr)
        print(USAGE[command_name].format(prog=prog), file=sys.stderr)
        return 1

    if isinstance(cmd, VersionCommand):
        print(PVFS2_VERSION)
        return 0

    try:
        print(dispatch_command(cmd, session=session))
    except PVFSClientError as e:
        logger.debug(f"{prog} failed at step {e.step}", exc_info=True)
        print(f"Error ({e.step}): {e}", file=sys.stderr)
        return 1

    return 0


def set_perf_interval_main() -> None:
    sys.exit(run_tool("set-perf-interval"))


def set_mode_main() -> None:
    sys.exit(run_tool("set-mode"))


def mkdir_main() -> None:
    sys.exit(run_tool("mkdir"))


def main() -> None:
    """Entry point for the interactive shell."""
    logger = setup_logging('pvfs2-shell', log_level=_log_level(sys.argv))

    logger.info("Shell starting...")
    try:
        repl_loop()
    except Exception as e:
        logger.error(f"Shell error: {e}", exc_info=True)
        raise
    finally:
        logger.info("Shell exiting")


if __name__ == "__main__":
    main()
