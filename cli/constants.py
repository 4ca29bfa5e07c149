"""CLI constants and help text."""

from prompt_toolkit.styles import Style

COMMANDS = ["set-perf-interval", "set-mode", "mkdir", "clear", "exit", "help"]

# Commands whose arguments take a mount point or a path under one
PATH_COMMANDS = ("set-perf-interval", "set-mode", "mkdir")

STYLE = Style.from_dict(
    {
        "prompt": "#3A7BD5 bold",
        "command": "#0088ff bold",
    }
)

WELCOME_TITLE = "PVFS2 admin shell"
WELCOME_HELP = "Type 'help' for commands or 'exit' to quit.\n"

PROMPT_TEXT = "pvfs2> "

USAGE = {
    "set-perf-interval": """Usage  : {prog} [-s server] -m <filesystem mount point> <interval>

Mount point and interval are required. If server is given, then interval will be set only on that server; otherwise, interval is set on all servers for the given mount point.

Example:All-Servers: {prog} -m /mnt/pvfs2 6000
Example:One-Server: {prog} -s tcp://localhost:3334/pvfs2-fs -m /mnt/pvfs2 10000

Interval is an integer greater than 0 in milliseconds""",
    "set-mode": """Usage  : {prog} [-s server] -m <filesystem mount point> <admin|normal>

Mount point and mode are required. If server is given, then the mode will be set only on that server; otherwise, it is set on all servers for the given mount point.

Example: {prog} -m /mnt/pvfs2 admin""",
    "mkdir": """Usage  : {prog} <path>

Creates a directory with full permissions, owned by the calling user.

Example: {prog} /mnt/pvfs2/newdir""",
}

HELP_TEXT = """Available commands:
  set-perf-interval [-s server] -m <mount point> <interval>   Set performance interval (ms)
  set-mode [-s server] -m <mount point> <admin|normal>        Set server mode
  mkdir <path>                                                 Create a directory
  clear                                                        Clear screen
  help                                                         Show this help
  exit                                                         Exit shell

Without -s the change is sent to every server of the filesystem.
Examples:
  set-perf-interval -m /mnt/pvfs2 6000
  set-perf-interval -s tcp://localhost:3334/pvfs2-fs -m /mnt/pvfs2 10000
  set-mode -m /mnt/pvfs2 admin
  mkdir /mnt/pvfs2/newdir"""
