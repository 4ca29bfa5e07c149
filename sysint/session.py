"""Scoped cluster session: gateway client, mount table and roster cache for one invocation."""

from typing import Optional

from common.logging_config import get_logger
from common.types import FilesystemIdentity, RelativePath
from sysint.cluster_client import ClusterClient
from sysint.config import Config, default_config_path
from sysint.mount_table import MountTable
from sysint.schemas import ServerRosterResponse

logger = get_logger(__name__)


class ClusterSession:
    """
    Resources held for the duration of one client operation.

    Use as a context manager; the gateway connection is released on
    every exit path.
    """

    def __init__(
        self,
        config: Optional[Config] = None,
        mount_table: Optional[MountTable] = None,
        client: Optional[ClusterClient] = None,
    ):
        self.config = config if config is not None else Config(default_config_path())
        self.mount_table = mount_table if mount_table is not None else MountTable.load(self.config.get_tabfile())
        self.client = client if client is not None else ClusterClient(self.config)
        self._rosters: dict[FilesystemIdentity, ServerRosterResponse] = {}
        self.closed = False

    def __enter__(self) -> 'ClusterSession':
        logger.debug("Cluster session opened")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def resolve(self, local_path: str) -> tuple[FilesystemIdentity, RelativePath]:
        """Resolve a local path through this session's mount table."""
        return self.mount_table.resolve(local_path)

    def server_roster(self, fs: FilesystemIdentity) -> ServerRosterResponse:
        """
        Return the server roster for a filesystem, fetching it once per session.

        Raises:
            SessionError: If the roster cannot be fetched
        """
        if fs not in self._rosters:
            self._rosters[fs] = self.client.get_server_roster(fs)
            logger.debug(f"Cached roster for {fs}: {len(self._rosters[fs].servers)} servers")
        return self._rosters[fs]

    def close(self) -> None:
        if self.closed:
            return
        self.client.close()
        self._rosters.clear()
        self.closed = True
        logger.debug("Cluster session closed")
