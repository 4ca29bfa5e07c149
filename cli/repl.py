"""REPL with prompt_toolkit for interactive administration."""

import os
import sys
from prompt_toolkit import PromptSession
from prompt_toolkit.history import InMemoryHistory

from common.constants import PVFS2_VERSION
from common.exceptions import PVFSClientError
from common.logging_config import get_logger
from cli.commands import dispatch_command
from cli.completer import PVFS2Completer
from cli.constants import (
    HELP_TEXT,
    PROMPT_TEXT,
    STYLE,
    WELCOME_HELP,
    WELCOME_TITLE,
)
from cli.models import VersionCommand
from cli.parser import ParseError, parse_command
from sysint.config import Config, default_config_path
from sysint.mount_table import MountTable

logger = get_logger(__name__)


def clear_screen() -> None:
    """Clear the terminal screen (cross-platform)."""
    if sys.platform == "win32":
        os.system("cls")
    else:
        os.system("clear")


def show_welcome() -> None:
    print(WELCOME_TITLE)
    print(WELCOME_HELP)


def execute_line(user_input: str) -> str:
    """
    Parse and run one shell line.

    Each command opens and closes its own cluster session.

    Returns:
        Text to print, an error message on failure
    """
    try:
        cmd_obj = parse_command(user_input)
        if isinstance(cmd_obj, VersionCommand):
            return PVFS2_VERSION
        return dispatch_command(cmd_obj)
    except ParseError as e:
        return f"Error: {e}"
    except PVFSClientError as e:
        logger.debug(f"Command failed at step {e.step}: {e}")
        return f"Error ({e.step}): {e}"


def repl_loop() -> None:
    """Start interactive REPL with prompt_toolkit."""
    config = Config(default_config_path())
    completer = PVFS2Completer(MountTable.load(config.get_tabfile()).mount_dirs())
    history = InMemoryHistory()
    session: PromptSession = PromptSession(
        completer=completer, history=history, style=STYLE
    )

    show_welcome()

    while True:
        try:
            user_input = session.prompt([("class:prompt", PROMPT_TEXT)])

            if not user_input.strip():
                continue

            if user_input.strip() == "exit":
                print("Goodbye!")
                break

            if user_input.strip() == "help":
                print(HELP_TEXT)
                continue

            if user_input.strip() == "clear":
                clear_screen()
                show_welcome()
                continue

            print(execute_line(user_input))

        except KeyboardInterrupt:
            continue
        except EOFError:
            print("\nGoodbye!")
            break
