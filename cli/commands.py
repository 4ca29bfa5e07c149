"""Command handler functions for CLI operations."""

from typing import Optional

from common.constants import ALL_PERMISSIONS
from common.logging_config import get_logger
from common.params import ParameterSpec, PerfInterval, ServerMode
from cli.models import (
    CommandRequest,
    MkdirCommand,
    SetModeCommand,
    SetPerfIntervalCommand,
)
from cli.utils import format_interval, format_permissions
from sysint.credentials import default_credential
from sysint.dispatcher import set_on_all_servers, set_on_server
from sysint.mount_table import with_trailing_separator
from sysint.namespace import create_directory
from sysint.session import ClusterSession

logger = get_logger(__name__)


def _set_param(
    mount_point: str,
    server: Optional[str],
    param: ParameterSpec,
    description: str,
    session: Optional[ClusterSession],
) -> str:
    if session is None:
        with ClusterSession() as session:
            return _set_param(mount_point, server, param, description, session)

    fs, _ = session.resolve(with_trailing_separator(mount_point))
    credential = default_credential()

    if server is not None:
        ack = set_on_server(session, fs, credential, param, server)
        return f"Successfully set {description} on server ({ack.target})"

    ack = set_on_all_servers(session, fs, credential, param)
    return f"Successfully set {description} for mount point ({mount_point}) on {ack.servers} server(s)"


def handle_set_perf_interval(cmd: SetPerfIntervalCommand, session: Optional[ClusterSession] = None) -> str:
    """
    Handle 'set-perf-interval' command.

    Args:
        cmd: SetPerfIntervalCommand with mount point, interval and optional server
        session: Optional ClusterSession for dependency injection (testing)

    Returns:
        Success message

    Raises:
        PVFSClientError: On any resolution, validation or dispatch failure
    """
    logger.info(f"Executing set-perf-interval: mount={cmd.mount_point} interval={cmd.interval} server={cmd.server}")
    param = PerfInterval(cmd.interval)
    return _set_param(cmd.mount_point, cmd.server, param, f"interval {format_interval(cmd.interval)}", session)


def handle_set_mode(cmd: SetModeCommand, session: Optional[ClusterSession] = None) -> str:
    """
    Handle 'set-mode' command.

    Args:
        cmd: SetModeCommand with mount point, mode and optional server
        session: Optional ClusterSession for dependency injection (testing)

    Returns:
        Success message
    """
    logger.info(f"Executing set-mode: mount={cmd.mount_point} mode={cmd.mode} server={cmd.server}")
    param = ServerMode(cmd.mode)
    return _set_param(cmd.mount_point, cmd.server, param, f"mode ({cmd.mode})", session)


def handle_mkdir(cmd: MkdirCommand, session: Optional[ClusterSession] = None) -> str:
    """
    Handle 'mkdir' command.

    Args:
        cmd: MkdirCommand with the local path to create
        session: Optional ClusterSession for dependency injection (testing)

    Returns:
        Handle and filesystem of the new directory
    """
    if session is None:
        with ClusterSession() as session:
            return handle_mkdir(cmd, session)

    logger.info(f"Executing mkdir: path={cmd.path}")
    credential = default_credential()
    ref = create_directory(session, with_trailing_separator(cmd.path), credential)
    logger.debug("mkdir command completed")
    return (
        f"Created directory {cmd.path}\n"
        f"Handle: {ref.handle}\n"
        f"Filesystem: {ref.fs}\n"
        f"Permissions: {format_permissions(ALL_PERMISSIONS)}"
    )


def dispatch_command(cmd_obj: CommandRequest, session: Optional[ClusterSession] = None) -> str:
    """Dispatch parsed command to appropriate handler."""
    if isinstance(cmd_obj, SetPerfIntervalCommand):
        return handle_set_perf_interval(cmd_obj, session)
    elif isinstance(cmd_obj, SetModeCommand):
        return handle_set_mode(cmd_obj, session)
    elif isinstance(cmd_obj, MkdirCommand):
        return handle_mkdir(cmd_obj, session)
    else:
        raise TypeError(f"Unknown command type: {type(cmd_obj)}")
