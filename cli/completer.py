"""Custom completer for the PVFS2 shell with mount point completion."""

from typing import Iterable

from prompt_toolkit.completion import Completer, Completion
from prompt_toolkit.document import Document

from cli.constants import COMMANDS, PATH_COMMANDS


class PVFS2Completer(Completer):
    """
    Custom completer that provides:
    - Command name completion for the first token
    - Mount point completion for '-m' values and mkdir paths
    """

    def __init__(self, mount_dirs: Iterable[str]):
        self.mount_dirs = sorted(set(mount_dirs))

    def get_completions(
        self, document: Document, complete_event
    ) -> Iterable[Completion]:
        """
        Generate completions based on cursor position and context.

        For the first token, completes command names.
        After '-m', or for the mkdir path argument, completes mount points.
        """
        text = document.text_before_cursor
        tokens = text.split()

        is_typing_new_token = text.endswith(" ") or not tokens

        if not tokens or (len(tokens) == 1 and not is_typing_new_token):
            yield from self._complete_commands(tokens[0] if tokens else "")
            return

        command = tokens[0].lower()
        if command not in PATH_COMMANDS:
            return

        current_word = "" if is_typing_new_token else tokens[-1]
        previous = tokens[-1] if is_typing_new_token else (tokens[-2] if len(tokens) > 1 else "")

        if command == "mkdir" or previous == "-m":
            yield from self._complete_mount_dirs(current_word)

    def _complete_commands(self, partial: str) -> Iterable[Completion]:
        """Complete command names matching the partial input."""
        partial_lower = partial.lower()
        for cmd in COMMANDS:
            if cmd.startswith(partial_lower):
                yield Completion(cmd, start_position=-len(partial))

    def _complete_mount_dirs(self, partial: str) -> Iterable[Completion]:
        """
        Complete mount directories from the mount table.

        Shows a message if the table has no pvfs2 entries.
        """
        if not self.mount_dirs:
            yield Completion(
                "",
                start_position=0,
                display="(no pvfs2 mount points configured)",
            )
            return

        for mount_dir in self.mount_dirs:
            if mount_dir.startswith(partial):
                yield Completion(mount_dir, start_position=-len(partial))
