"""Error taxonomy for the PVFS2 client tools.

Every failure kind is terminal for the current invocation. The ``step``
attribute names the stage that failed so the CLI can report it.
"""

from typing import Optional


class PVFSClientError(Exception):
    """
    Base exception class for all client-side errors.
    """

    step = "unknown"

    def __init__(self, message: str, code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.code = code

    def __str__(self) -> str:
        return self.message


class NoSuchMountError(PVFSClientError):
    """
    Raised when no configured mount covers a local path.
    """

    step = "resolve"

    def __init__(self, path: str, message: Optional[str] = None):
        super().__init__(message or f"could not find filesystem for {path} in pvfstab")
        self.path = path


class IdentityUnavailableError(PVFSClientError):
    """
    Raised when the calling environment cannot report user or group identity.
    """

    step = "credential"


class SessionError(PVFSClientError):
    """
    Raised when the cluster session cannot load filesystem configuration.
    """

    step = "session"


class UnknownServerError(PVFSClientError):
    """
    Raised when a server address is not in the filesystem's roster or has an unrecognized role.
    """

    step = "validate-server"

    def __init__(self, address: str, message: Optional[str] = None):
        super().__init__(message or f"Server string ({address}) is undefined. Check config file.")
        self.address = address


class DispatchError(PVFSClientError):
    """
    Raised when the cluster rejects or fails a set-parameter request.
    """

    step = "setparam"

    def __init__(self, reason: str, target: str, code: Optional[str] = None):
        super().__init__(f"setting parameter on {target} failed: {reason}", code)
        self.reason = reason
        self.target = target


class InvalidPathError(PVFSClientError):
    """
    Raised when a path cannot be split into a parent directory and an entry name.
    """

    step = "split-path"

    def __init__(self, path: str, reason: str):
        super().__init__(f"Cannot retrieve dir name for creation on {path}: {reason}")
        self.path = path
        self.reason = reason


class ParentNotFoundError(PVFSClientError):
    """
    Raised when the parent directory lookup fails.
    """

    step = "lookup-parent"

    def __init__(self, path: str, reason: str, code: Optional[str] = None):
        super().__init__(f"Parent lookup failed for {path}: {reason}", code)
        self.path = path
        self.reason = reason


class CreateFailedError(PVFSClientError):
    """
    Raised when the cluster refuses to create a directory entry.
    """

    step = "mkdir"

    def __init__(self, name: str, reason: str, code: Optional[str] = None):
        super().__init__(f"mkdir failed for {name}: {reason}", code)
        self.name = name
        self.reason = reason
