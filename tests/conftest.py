"""Shared pytest fixtures for all tests."""

import json

import httpx
import pytest

from common.types import Credential
from sysint.cluster_client import ClusterClient
from sysint.config import Config
from sysint.mount_table import MountTable, parse_mount_table
from sysint.session import ClusterSession


TAB_LINES = [
    "# pvfs2 mount table",
    "tcp://localhost:3334/pvfs2-fs /mnt/pvfs2 pvfs2 defaults,noauto 0 0",
    "tcp://otherhost:3334/scratch-fs /mnt/scratch/ pvfs2 defaults 0 0",
]

SERVER_ALL = "tcp://localhost:3334/pvfs2-fs"
SERVER_IO = "tcp://localhost:3335/pvfs2-fs"
ROOT_HANDLE = 1048576


class FakeGateway:
    """In-memory cluster gateway behind an httpx.MockTransport."""

    def __init__(self):
        self.servers = [
            {"address": SERVER_ALL, "type": "all"},
            {"address": SERVER_IO, "type": "io"},
        ]
        self.namespace = {"/": {"handle": ROOT_HANDLE, "type": "directory"}}
        self.next_handle = ROOT_HANDLE + 1
        self.calls = []
        self.setparam_error = None

    def count(self, path: str) -> int:
        """Number of requests received for an endpoint path."""
        return sum(1 for _, p, _ in self.calls if p == path)

    def bodies(self, path: str) -> list:
        return [body for _, p, body in self.calls if p == path]

    def _error(self, status: int, code: str, detail: str) -> httpx.Response:
        return httpx.Response(status, json={"detail": detail, "code": code})

    def handler(self, request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content) if request.content else None
        path = request.url.path
        self.calls.append((request.method, path, body))

        if request.method == "GET" and path.startswith("/filesystems/") and path.endswith("/servers"):
            fs_name = path.split("/")[2]
            if fs_name != "pvfs2-fs":
                return self._error(404, "ENOENT", f"unknown filesystem {fs_name}")
            return httpx.Response(200, json={"fs_name": fs_name, "servers": self.servers})

        if path in ("/mgmt/setparam/single", "/mgmt/setparam/all"):
            if self.setparam_error:
                status, code = self.setparam_error
                return self._error(status, code, "setparam failed")
            servers = 1 if path.endswith("single") else len(self.servers)
            return httpx.Response(200, json={"status": "ok", "servers": servers})

        if path == "/sys/lookup":
            entry = self.namespace.get(body["path"])
            if entry is None:
                return self._error(404, "ENOENT", f"no such path {body['path']}")
            return httpx.Response(200, json={"handle": entry["handle"], "type": entry["type"]})

        if path == "/sys/mkdir":
            parent_path = next(
                (p for p, e in self.namespace.items() if e["handle"] == body["parent_handle"]),
                None,
            )
            if parent_path is None:
                return self._error(404, "ENOENT", "parent vanished")
            child = parent_path.rstrip("/") + "/" + body["name"]
            if child in self.namespace:
                return self._error(409, "EEXIST", f"{child} exists")
            handle = self.next_handle
            self.next_handle += 1
            self.namespace[child] = {"handle": handle, "type": "directory", "attr": body["attr"]}
            return httpx.Response(201, json={"handle": handle})

        return httpx.Response(404)


@pytest.fixture
def temp_config_dir(tmp_path):
    """
    Create temporary config directory.

    Returns:
        Path to temporary .pvfs2 directory
    """
    config_dir = tmp_path / '.pvfs2'
    config_dir.mkdir()
    return config_dir


@pytest.fixture
def temp_config(temp_config_dir, monkeypatch):
    """
    Create temporary config instance with environment overrides cleared.

    Returns:
        Config instance with temp config file
    """
    monkeypatch.delenv("PVFS2_GATEWAY_HOST", raising=False)
    monkeypatch.delenv("PVFS2_GATEWAY_PORT", raising=False)
    return Config(temp_config_dir / 'config.json')


@pytest.fixture
def tabfile(tmp_path):
    """Write a pvfs2tab with two filesystems."""
    path = tmp_path / 'pvfs2tab'
    path.write_text("\n".join(TAB_LINES) + "\n")
    return path


@pytest.fixture
def mount_table():
    return MountTable(parse_mount_table(TAB_LINES))


@pytest.fixture
def gateway():
    return FakeGateway()


@pytest.fixture
def cluster_client(temp_config, gateway):
    """Create ClusterClient with mocked HTTP transport."""
    client = ClusterClient(temp_config)
    client.session = httpx.Client(transport=httpx.MockTransport(gateway.handler), base_url='http://test')
    return client


@pytest.fixture
def cluster_session(temp_config, mount_table, cluster_client):
    """Open ClusterSession wired to the fake gateway."""
    with ClusterSession(temp_config, mount_table, cluster_client) as session:
        yield session


@pytest.fixture
def credential():
    return Credential(user_id=1000, group_ids=(100, 10, 20), issuer="C:testhost", expires_at=1700003600)
