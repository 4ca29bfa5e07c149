"""Parent resolution and directory creation in the cluster namespace."""

import time
from typing import Optional

from common.constants import ALL_PERMISSIONS, NAME_MAX, PATH_MAX, PATH_SEPARATOR
from common.exceptions import InvalidPathError
from common.logging_config import get_logger
from common.types import AttrMask, Attributes, Credential, FilesystemIdentity, ObjectRef, RelativePath

logger = get_logger(__name__)


def split_entry_name(relative_path: RelativePath) -> tuple[str, str]:
    """
    Split a cluster-relative path into its parent path and leaf name.

    Trailing and repeated separators are ignored, so "/a/b" and "/a//b/"
    both give ("/a", "b").

    Raises:
        InvalidPathError: If the path has no leaf component or the leaf is unusable
    """
    path = str(relative_path)
    if len(path) > PATH_MAX:
        raise InvalidPathError(path, f"path exceeds {PATH_MAX} characters")

    segments = [segment for segment in path.split(PATH_SEPARATOR) if segment]
    if not segments:
        raise InvalidPathError(path, "path denotes the filesystem root")

    entry_name = segments[-1]
    if entry_name in ('.', '..'):
        raise InvalidPathError(path, f"'{entry_name}' cannot be created")
    if len(entry_name) > NAME_MAX:
        raise InvalidPathError(path, f"entry name exceeds {NAME_MAX} characters")

    parent_path = PATH_SEPARATOR + PATH_SEPARATOR.join(segments[:-1])
    return parent_path, entry_name


def lookup_parent_handle(session, parent_path: str, fs: FilesystemIdentity, credential: Credential) -> int:
    """
    Resolve the handle of a parent directory.

    Raises:
        ParentNotFoundError: If any segment is missing or not a directory
    """
    handle = session.client.lookup(fs, parent_path, credential)
    logger.debug(f"Parent {parent_path} on {fs} has handle {handle}")
    return handle


def build_attributes(credential: Credential, now: Optional[int] = None) -> Attributes:
    """Initial attributes for a new directory: caller's identity, full permissions."""
    timestamp = int(now if now is not None else time.time())
    return Attributes(
        owner=credential.user_id,
        group=credential.primary_group_id,
        perms=ALL_PERMISSIONS,
        atime=timestamp,
        mtime=timestamp,
        ctime=timestamp,
        mask=AttrMask.ALL_SETABLE,
    )


def create_directory(session, local_path: str, credential: Credential) -> ObjectRef:
    """
    Create a directory at a local path inside a mounted filesystem.

    The path must already carry a trailing separator when it names a
    bare mount point (see ``with_trailing_separator``).

    Args:
        session: Open ClusterSession
        local_path: Absolute local path of the directory to create
        credential: Identity the directory is created as

    Returns:
        ObjectRef of the new directory

    Raises:
        NoSuchMountError: If no mount covers the path
        InvalidPathError: If the path has no separable leaf
        ParentNotFoundError: If the parent directory cannot be resolved
        CreateFailedError: If the cluster refuses the creation
    """
    fs, relative_path = session.resolve(local_path)
    parent_path, entry_name = split_entry_name(relative_path)
    logger.info(f"Creating directory {entry_name} in {parent_path} on {fs}")

    parent_handle = lookup_parent_handle(session, parent_path, fs, credential)
    parent = ObjectRef(fs=fs, handle=parent_handle)

    attributes = build_attributes(credential)
    return session.client.mkdir(entry_name, parent, attributes, credential)
