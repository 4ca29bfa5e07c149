"""Mount table loading and local-path resolution."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional

from common.constants import DEFAULT_TABFILES, FS_TYPE, PATH_SEPARATOR, TABFILE_ENV_VAR
from common.exceptions import NoSuchMountError
from common.logging_config import get_logger
from common.types import FilesystemIdentity, RelativePath

logger = get_logger(__name__)


@dataclass(frozen=True)
class MountEntry:
    """One pvfs2 line of a mount table."""

    server_uri: str
    mount_dir: str
    fs_type: str
    options: tuple[str, ...]

    @property
    def config_server(self) -> str:
        return self.server_uri.rsplit(PATH_SEPARATOR, 1)[0]

    @property
    def fs_name(self) -> str:
        return self.server_uri.rsplit(PATH_SEPARATOR, 1)[1]

    def identity(self) -> FilesystemIdentity:
        return FilesystemIdentity(
            fs_name=self.fs_name,
            config_server=self.config_server,
            mount_dir=self.mount_dir,
        )


def with_trailing_separator(path: str) -> str:
    """
    Append a separator to a mount-point style argument if it lacks one.

    The resolver only matches a mount directory that is followed by a
    separator, so bare mount points must pass through here first.
    """
    if path.endswith(PATH_SEPARATOR):
        return path
    return path + PATH_SEPARATOR


def _strip_trailing_separators(path: str) -> str:
    stripped = path.rstrip(PATH_SEPARATOR)
    return stripped or PATH_SEPARATOR


def parse_mount_line(line: str) -> Optional[MountEntry]:
    """
    Parse one fstab-style line.

    Returns None for blank lines, comments, and entries of another
    filesystem type.
    """
    line = line.strip()
    if not line or line.startswith('#'):
        return None

    fields = line.split()
    if len(fields) < 3:
        logger.debug(f"Skipping short mount table line: {line!r}")
        return None

    server_uri, mount_dir, fs_type = fields[0], fields[1], fields[2]
    if fs_type != FS_TYPE:
        return None

    if '://' not in server_uri or server_uri.rstrip(PATH_SEPARATOR).count(PATH_SEPARATOR) < 3:
        logger.warning(f"Skipping mount entry without filesystem name: {server_uri}")
        return None

    options = tuple(fields[3].split(',')) if len(fields) > 3 else ()
    return MountEntry(
        server_uri=server_uri.rstrip(PATH_SEPARATOR),
        mount_dir=_strip_trailing_separators(mount_dir),
        fs_type=fs_type,
        options=options,
    )


def parse_mount_table(lines: Iterable[str]) -> list[MountEntry]:
    entries = []
    for line in lines:
        entry = parse_mount_line(line)
        if entry is not None:
            entries.append(entry)
    return entries


def candidate_tabfiles(tabfile: Optional[str] = None) -> list[Path]:
    """List mount table locations in lookup order."""
    candidates = []
    if tabfile:
        candidates.append(Path(tabfile))
    env_tabfile = os.environ.get(TABFILE_ENV_VAR)
    if env_tabfile:
        candidates.append(Path(env_tabfile))
    candidates.extend(Path(p) for p in DEFAULT_TABFILES)
    return candidates


class MountTable:
    """Mount configuration for the current invocation."""

    def __init__(self, entries: list[MountEntry], source: Optional[Path] = None):
        self.entries = list(entries)
        self.source = source

    @classmethod
    def load(cls, tabfile: Optional[str] = None) -> 'MountTable':
        """
        Load the first mount table that has at least one pvfs2 entry.

        Args:
            tabfile: Explicit table path, tried before the environment and defaults

        Returns:
            MountTable instance, empty if no table could be found
        """
        for path in candidate_tabfiles(tabfile):
            try:
                with open(path, 'r') as f:
                    entries = parse_mount_table(f)
            except OSError as e:
                logger.debug(f"Cannot read mount table {path}: {e}")
                continue
            if entries:
                logger.debug(f"Loaded {len(entries)} pvfs2 mount entries from {path}")
                return cls(entries, source=path)

        logger.warning("No pvfs2 mount table found")
        return cls([])

    def mount_dirs(self) -> list[str]:
        return [entry.mount_dir for entry in self.entries]

    def resolve(self, local_path: str) -> tuple[FilesystemIdentity, RelativePath]:
        """
        Map a local path to a filesystem and a cluster-relative path.

        Entries are tried in table order and the first match wins.

        Args:
            local_path: Absolute local path, e.g. "/mnt/pvfs2/dir/"

        Returns:
            Tuple of (FilesystemIdentity, RelativePath)

        Raises:
            NoSuchMountError: If no entry covers the path
        """
        if not local_path:
            raise NoSuchMountError(local_path, "empty path")

        if not self.entries:
            raise NoSuchMountError(local_path, f"no pvfs2 mount table found while resolving {local_path}")

        if not local_path.startswith(PATH_SEPARATOR):
            raise NoSuchMountError(local_path, f"{local_path} is not an absolute path")

        for entry in self.entries:
            relative = _remove_dir_prefix(local_path, entry.mount_dir)
            if relative is not None:
                logger.debug(f"Resolved {local_path} to {entry.server_uri} path {relative}")
                return entry.identity(), RelativePath(relative)

        raise NoSuchMountError(local_path)


def _remove_dir_prefix(path: str, prefix: str) -> Optional[str]:
    if prefix == PATH_SEPARATOR:
        return path
    if not path.startswith(prefix):
        return None
    if len(path) == len(prefix) or path[len(prefix)] != PATH_SEPARATOR:
        return None
    return path[len(prefix):]
