"""Set-parameter dispatch to one server or to every server of a filesystem.

Neither path retries. A server that disappears between roster
validation and dispatch surfaces as an ordinary DispatchError.
"""

from common.logging_config import get_logger
from common.params import ParameterSpec
from common.types import Ack, Credential, FilesystemIdentity
from sysint.roster import validate_server

logger = get_logger(__name__)


def set_on_server(
    session,
    fs: FilesystemIdentity,
    credential: Credential,
    param: ParameterSpec,
    address: str,
) -> Ack:
    """
    Set a parameter on a single named server.

    The address is validated against the roster first; on validation
    failure no request is sent.

    Raises:
        UnknownServerError: If the address fails roster validation
        DispatchError: If the server rejects or fails the request
    """
    server = validate_server(session, fs, address)
    logger.info(f"Setting {param.describe()} on {server.role.name} server {server}")
    return session.client.setparam_single(fs, credential, param, server)


def set_on_all_servers(
    session,
    fs: FilesystemIdentity,
    credential: Credential,
    param: ParameterSpec,
) -> Ack:
    """
    Set a parameter on every server of a filesystem in one broadcast request.

    Raises:
        DispatchError: If the broadcast fails
    """
    logger.info(f"Setting {param.describe()} on all servers of {fs}")
    return session.client.setparam_all(fs, credential, param)
