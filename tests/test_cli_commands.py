"""Tests for CLI command handlers."""

from unittest.mock import Mock

import pytest

from cli.commands import dispatch_command, handle_mkdir, handle_set_mode, handle_set_perf_interval
from cli.models import MkdirCommand, SetModeCommand, SetPerfIntervalCommand, VersionCommand
from common.exceptions import CreateFailedError, NoSuchMountError, UnknownServerError
from common.types import Ack
from sysint.cluster_client import ClusterClient
from sysint.session import ClusterSession
from tests.conftest import SERVER_ALL


def test_handle_set_perf_interval_broadcast(cluster_session, gateway):
    cmd = SetPerfIntervalCommand(mount_point="/mnt/pvfs2", interval=6000)

    result = handle_set_perf_interval(cmd, session=cluster_session)

    assert "Successfully set interval 6000 ms" in result
    assert "mount point (/mnt/pvfs2)" in result
    assert gateway.count("/mgmt/setparam/all") == 1
    assert gateway.count("/mgmt/setparam/single") == 0


def test_handle_set_perf_interval_single_server(cluster_session, gateway):
    cmd = SetPerfIntervalCommand(mount_point="/mnt/pvfs2", interval=10000, server=SERVER_ALL)

    result = handle_set_perf_interval(cmd, session=cluster_session)

    assert f"on server ({SERVER_ALL})" in result
    assert gateway.count("/mgmt/setparam/single") == 1
    assert gateway.count("/mgmt/setparam/all") == 0
    assert gateway.bodies("/mgmt/setparam/single")[0]["param"]["value"] == 10000


def test_handle_set_perf_interval_unknown_server(cluster_session, gateway):
    cmd = SetPerfIntervalCommand(mount_point="/mnt/pvfs2", interval=10000, server="tcp://nope:1/pvfs2-fs")

    with pytest.raises(UnknownServerError):
        handle_set_perf_interval(cmd, session=cluster_session)

    assert gateway.count("/mgmt/setparam/single") == 0


def test_handle_set_perf_interval_unmounted_makes_no_requests(temp_config, mount_table):
    mock_client = Mock(spec=ClusterClient)
    session = ClusterSession(temp_config, mount_table, mock_client)
    cmd = SetPerfIntervalCommand(mount_point="/mnt/elsewhere", interval=6000)

    with pytest.raises(NoSuchMountError):
        handle_set_perf_interval(cmd, session=session)

    mock_client.get_server_roster.assert_not_called()
    mock_client.setparam_all.assert_not_called()
    mock_client.setparam_single.assert_not_called()


def test_handle_set_perf_interval_with_mocked_client(temp_config, mount_table):
    mock_client = Mock(spec=ClusterClient)
    mock_client.setparam_all.return_value = Ack(target="/mnt/pvfs2", servers=4)
    session = ClusterSession(temp_config, mount_table, mock_client)

    result = handle_set_perf_interval(SetPerfIntervalCommand(mount_point="/mnt/pvfs2/", interval=6000), session)

    assert "on 4 server(s)" in result
    fs, _, param = mock_client.setparam_all.call_args.args
    assert fs.fs_name == "pvfs2-fs"
    assert param.milliseconds == 6000


def test_handle_set_mode(cluster_session, gateway):
    result = handle_set_mode(SetModeCommand(mount_point="/mnt/pvfs2", mode="normal"), session=cluster_session)

    assert "mode (normal)" in result
    assert gateway.bodies("/mgmt/setparam/all")[0]["param"]["value"] == "normal"


def test_handle_mkdir(cluster_session, gateway):
    result = handle_mkdir(MkdirCommand(path="/mnt/pvfs2/newdir"), session=cluster_session)

    assert "Created directory /mnt/pvfs2/newdir" in result
    assert "Permissions: rwxrwxrwx" in result
    assert "/newdir" in gateway.namespace
    assert gateway.bodies("/sys/lookup")[0]["path"] == "/"


def test_handle_mkdir_twice(cluster_session):
    handle_mkdir(MkdirCommand(path="/mnt/pvfs2/newdir"), session=cluster_session)

    with pytest.raises(CreateFailedError):
        handle_mkdir(MkdirCommand(path="/mnt/pvfs2/newdir"), session=cluster_session)


def test_dispatch_command_routes(cluster_session, gateway):
    dispatch_command(SetPerfIntervalCommand(mount_point="/mnt/pvfs2", interval=1), cluster_session)
    dispatch_command(MkdirCommand(path="/mnt/pvfs2/d"), cluster_session)

    assert gateway.count("/mgmt/setparam/all") == 1
    assert gateway.count("/sys/mkdir") == 1


def test_dispatch_command_rejects_unknown_type(cluster_session):
    with pytest.raises(TypeError):
        dispatch_command(VersionCommand(), cluster_session)
