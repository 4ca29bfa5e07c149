"""Server roster validation for single-server administrative requests."""

from common.exceptions import UnknownServerError
from common.logging_config import get_logger
from common.types import FilesystemIdentity, ServerAddress, ServerRole

logger = get_logger(__name__)


# Roster type strings; a combined server is addressed as a metadata server
ROLE_BY_TYPE = {
    'meta': ServerRole.METADATA,
    'all': ServerRole.METADATA,
    'io': ServerRole.DATA_STORE,
}


def role_for_type(server_type: str) -> ServerRole:
    return ROLE_BY_TYPE.get(server_type.lower(), ServerRole.UNKNOWN)


def classify_server(session, fs: FilesystemIdentity, address: str) -> ServerRole:
    """
    Classify a server address against the filesystem's configured roster.

    Args:
        session: Open ClusterSession
        fs: Filesystem the server should belong to
        address: Server connection string, e.g. "tcp://localhost:3334/pvfs2-fs"

    Returns:
        ServerRole of the server

    Raises:
        UnknownServerError: If the address is not in the roster or has an unrecognized role
        SessionError: If the roster cannot be fetched
    """
    roster = session.server_roster(fs)
    wanted = address.rstrip('/')

    for entry in roster.servers:
        if entry.address.rstrip('/') != wanted:
            continue
        role = role_for_type(entry.type)
        if role is ServerRole.UNKNOWN:
            logger.warning(f"Server {address} has unrecognized type {entry.type!r}")
            raise UnknownServerError(
                address,
                f"Server string ({address}) has unrecognized role '{entry.type}'. Check config file.",
            )
        logger.debug(f"Classified {address} as {role.name}")
        return role

    logger.warning(f"Server {address} not found in roster of {fs}")
    raise UnknownServerError(address)


def validate_server(session, fs: FilesystemIdentity, address: str) -> ServerAddress:
    """Classify a server and wrap it as a validated ServerAddress."""
    role = classify_server(session, fs, address)
    return ServerAddress(uri=address, role=role)
