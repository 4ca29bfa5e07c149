"""Command parser for tool arguments and shell input."""

import re
import shlex

from common.constants import PATH_SEPARATOR, UINT64_MAX
from common.params import ServerMode
from cli.models import (
    CommandRequest,
    MkdirCommand,
    SetModeCommand,
    SetPerfIntervalCommand,
    VersionCommand,
)


class ParseError(Exception):
    """Raised when command parsing fails."""

    pass


_NUMBER = re.compile(r'^-?\d+$')


def parse_command(input_line: str) -> CommandRequest:
    """Parse a shell input line into a CommandRequest object.

    Args:
        input_line: Raw user input from REPL, e.g. "set-perf-interval -m /mnt/pvfs2 6000"

    Returns:
        CommandRequest object

    Raises:
        ParseError: If command syntax is invalid
    """
    if not input_line.strip():
        raise ParseError("Empty command")

    try:
        tokens = shlex.split(input_line)
    except ValueError as e:
        raise ParseError(f"Invalid syntax: {e}")

    if not tokens:
        raise ParseError("Empty command")

    return parse_args(tokens[0], tokens[1:])


def parse_args(command_name: str, args: list[str]) -> CommandRequest:
    """Parse the arguments of one command.

    Raises:
        ParseError: If the command is unknown or its arguments are invalid
    """
    if command_name == "set-perf-interval":
        return _parse_set_perf_interval(args)
    elif command_name == "set-mode":
        return _parse_set_mode(args)
    elif command_name == "mkdir":
        return _parse_mkdir(args)
    else:
        raise ParseError(f"Unknown command: {command_name}")


def _split_options(args: list[str], value_flags: str, bool_flags: str) -> tuple[dict, list[str]]:
    """
    Split getopt-style arguments into options and positionals.

    Value flags accept both "-m /mnt" and "-m/mnt". Negative numbers are
    treated as positionals so range checks can report them.
    """
    options: dict = {}
    positionals: list[str] = []
    index = 0

    while index < len(args):
        arg = args[index]
        if arg == "--":
            positionals.extend(args[index + 1:])
            break

        if len(arg) < 2 or not arg.startswith("-") or _NUMBER.match(arg):
            positionals.append(arg)
            index += 1
            continue

        flag = arg[1]
        if flag in bool_flags and len(arg) == 2:
            options[flag] = True
        elif flag in value_flags:
            if len(arg) > 2:
                options[flag] = arg[2:]
            elif index + 1 < len(args):
                index += 1
                options[flag] = args[index]
            else:
                raise ParseError(f"option -{flag} requires an argument")
        else:
            raise ParseError(f"unknown option: {arg}")
        index += 1

    return options, positionals


def _parse_interval(value: str) -> int:
    try:
        interval = int(value)
    except ValueError:
        raise ParseError(f"Interval must be an integer, got '{value}'")
    if interval <= 0:
        raise ParseError("Interval must be greater than 0.")
    if interval > UINT64_MAX:
        raise ParseError("Interval is too large.")
    return interval


def _parse_set_perf_interval(args: list[str]) -> CommandRequest:
    """Parse 'set-perf-interval [-s server] -m <mount point> <interval>'."""
    options, positionals = _split_options(args, value_flags="ms", bool_flags="v")
    if options.get("v"):
        return VersionCommand()

    errors = []
    if "m" not in options:
        errors.append("Mount point is required.")
    if not positionals:
        errors.append("Interval is required.")
    elif len(positionals) > 1:
        errors.append(f"Unexpected arguments: {' '.join(positionals[1:])}")
    if errors:
        raise ParseError(" ".join(errors))

    return SetPerfIntervalCommand(
        mount_point=options["m"],
        interval=_parse_interval(positionals[0]),
        server=options.get("s"),
    )


def _parse_set_mode(args: list[str]) -> CommandRequest:
    """Parse 'set-mode [-s server] -m <mount point> <admin|normal>'."""
    options, positionals = _split_options(args, value_flags="ms", bool_flags="v")
    if options.get("v"):
        return VersionCommand()

    errors = []
    if "m" not in options:
        errors.append("Mount point is required.")
    if len(positionals) != 1:
        errors.append("Exactly one mode is required.")
    if errors:
        raise ParseError(" ".join(errors))

    mode = positionals[0].lower()
    if mode not in ServerMode.MODES:
        raise ParseError(f"Mode must be one of: {', '.join(ServerMode.MODES)}")

    return SetModeCommand(mount_point=options["m"], mode=mode, server=options.get("s"))


def _parse_mkdir(args: list[str]) -> CommandRequest:
    """Parse 'mkdir <path>'."""
    options, positionals = _split_options(args, value_flags="", bool_flags="v")
    if options.get("v"):
        return VersionCommand()

    if len(positionals) != 1:
        raise ParseError("mkdir requires exactly 1 argument: <path>")

    path = positionals[0]
    if not path.startswith(PATH_SEPARATOR):
        raise ParseError(f"You forgot the leading '{PATH_SEPARATOR}': {path}")

    return MkdirCommand(path=path)
