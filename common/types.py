"""Shared value types (FilesystemIdentity, RelativePath, Credential, ObjectRef, etc.)."""

from dataclasses import dataclass
from enum import Enum, Flag, auto

from common.constants import PATH_SEPARATOR


@dataclass(frozen=True)
class FilesystemIdentity:
    """
    One cluster filesystem, as named by a mount table entry.
    """
    fs_name: str
    config_server: str
    mount_dir: str

    def __str__(self) -> str:
        return f"{self.config_server}/{self.fs_name}"


@dataclass(frozen=True)
class RelativePath:
    """
    Cluster-local path produced by the mount resolver.
    """
    value: str

    def __post_init__(self):
        if not self.value.startswith(PATH_SEPARATOR):
            raise ValueError(f"relative path must begin with '{PATH_SEPARATOR}': {self.value!r}")

    @property
    def is_root(self) -> bool:
        return not self.value.strip(PATH_SEPARATOR)

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Credential:
    """
    Identity presented with administrative and namespace requests.
    """
    user_id: int
    group_ids: tuple[int, ...]
    issuer: str
    expires_at: int

    def __post_init__(self):
        if not self.group_ids:
            raise ValueError("credential requires at least one group")

    @property
    def primary_group_id(self) -> int:
        return self.group_ids[0]


class ServerRole(Enum):
    METADATA = "meta"
    DATA_STORE = "io"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class ServerAddress:
    """
    A server connection string that has passed roster validation.
    """
    uri: str
    role: ServerRole

    def __str__(self) -> str:
        return self.uri


@dataclass(frozen=True)
class ObjectRef:
    fs: FilesystemIdentity
    handle: int


class AttrMask(Flag):
    UID = auto()
    GID = auto()
    PERM = auto()
    ATIME = auto()
    MTIME = auto()
    CTIME = auto()

    ALL_SETABLE = UID | GID | PERM | ATIME | MTIME | CTIME


@dataclass(frozen=True)
class Attributes:
    """
    Initial attributes for a new namespace entry.
    """
    owner: int
    group: int
    perms: int
    atime: int
    mtime: int
    ctime: int
    mask: AttrMask

    def mask_names(self) -> list[str]:
        return [flag.name.lower() for flag in AttrMask if flag in self.mask and flag is not AttrMask.ALL_SETABLE]


@dataclass(frozen=True)
class Ack:
    """
    Aggregate acknowledgement of a set-parameter request.
    """
    target: str
    servers: int
