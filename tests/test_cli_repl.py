"""Tests for shell line execution."""

import httpx

from cli.repl import execute_line
from common.constants import PVFS2_VERSION


def test_execute_line_parse_error():
    assert execute_line("frobnicate /mnt/pvfs2") == "Error: Unknown command: frobnicate"


def test_execute_line_version():
    assert execute_line("mkdir -v") == PVFS2_VERSION


def test_execute_line_opens_session_per_command(cluster_session, gateway, monkeypatch):
    monkeypatch.setattr("cli.commands.ClusterSession", lambda: cluster_session)

    result = execute_line("mkdir /mnt/pvfs2/fromshell")

    assert "Created directory /mnt/pvfs2/fromshell" in result
    assert cluster_session.closed
    assert "/fromshell" in gateway.namespace


def test_execute_line_reports_failing_step(cluster_session, monkeypatch):
    monkeypatch.setattr("cli.commands.ClusterSession", lambda: cluster_session)

    result = execute_line("set-perf-interval -m /mnt/nowhere 6000")

    assert result.startswith("Error (resolve):")
    assert cluster_session.closed


def test_execute_line_survives_transport_failure(cluster_session, monkeypatch):
    def handler(request):
        raise httpx.RemoteProtocolError("peer closed connection", request=request)

    monkeypatch.setattr("sysint.cluster_client.time.sleep", lambda delay: None)
    cluster_session.client.session = httpx.Client(transport=httpx.MockTransport(handler), base_url='http://test')
    monkeypatch.setattr("cli.commands.ClusterSession", lambda: cluster_session)

    result = execute_line("mkdir /mnt/pvfs2/fromshell")

    assert result.startswith("Error (lookup-parent):")
    assert "peer closed connection" in result
