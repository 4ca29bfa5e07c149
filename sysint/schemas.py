"""Pydantic schemas for cluster gateway requests and responses."""

from typing import List, Optional, Union
from pydantic import BaseModel


class CredentialPayload(BaseModel):
    """Credential as presented to the gateway."""
    user_id: int
    group_ids: List[int]
    issuer: str
    expires_at: int


class ServerEntry(BaseModel):
    """One server in a filesystem roster."""
    address: str
    type: str


class ServerRosterResponse(BaseModel):
    """Response model for a filesystem's server roster."""
    fs_name: str
    servers: List[ServerEntry]


class ParamPayload(BaseModel):
    """Tagged parameter value."""
    kind: str
    type: str
    value: Union[int, str]


class SetParamRequest(BaseModel):
    """Request model for setting a server parameter."""
    fs_name: str
    config_server: str
    credential: CredentialPayload
    param: ParamPayload
    server: Optional[str] = None


class SetParamResponse(BaseModel):
    """Aggregate acknowledgement from a set-parameter request."""
    status: str
    servers: int


class LookupRequest(BaseModel):
    """Request model for resolving a path to a handle."""
    fs_name: str
    config_server: str
    path: str
    credential: CredentialPayload
    follow_links: bool = True


class LookupResponse(BaseModel):
    """Response model for path lookup."""
    handle: int
    type: str = "directory"


class AttrPayload(BaseModel):
    """Initial attributes for a new entry."""
    owner: int
    group: int
    perms: int
    atime: int
    mtime: int
    ctime: int
    mask: List[str]


class MkdirRequest(BaseModel):
    """Request model for directory creation."""
    fs_name: str
    config_server: str
    parent_handle: int
    name: str
    attr: AttrPayload
    credential: CredentialPayload


class MkdirResponse(BaseModel):
    """Response model for directory creation."""
    handle: int


class ErrorResponse(BaseModel):
    """Error body returned by the gateway on failure."""
    detail: str = "Unknown error"
    code: str = "UNKNOWN"
