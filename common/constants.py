"""Project-wide constants (name limits, default permissions, mount table locations)."""

PVFS2_VERSION: str = "2.9.0"

NAME_MAX: int = 256
PATH_MAX: int = 4096

PATH_SEPARATOR: str = "/"

# Permission bits every created directory requests
ALL_PERMISSIONS: int = 0o777

CREDENTIAL_TIMEOUT_SECONDS: int = 3600

UINT64_MAX: int = 2 ** 64 - 1

FS_TYPE: str = "pvfs2"
TABFILE_ENV_VAR: str = "PVFS2TAB_FILE"
DEFAULT_TABFILES: tuple[str, ...] = ("/etc/pvfs2tab", "/etc/fstab")
