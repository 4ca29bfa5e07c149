"""Tests for parent resolution and directory creation."""

import pytest

from common.constants import ALL_PERMISSIONS, NAME_MAX
from common.exceptions import (
    CreateFailedError,
    InvalidPathError,
    NoSuchMountError,
    ParentNotFoundError,
)
from common.types import AttrMask, Credential, RelativePath
from sysint.namespace import build_attributes, create_directory, lookup_parent_handle, split_entry_name
from tests.conftest import ROOT_HANDLE


@pytest.mark.parametrize("path,expected", [
    ("/a/b", ("/a", "b")),
    ("/newdir/", ("/", "newdir")),
    ("/a//b/", ("/a", "b")),
    ("/a/b/c", ("/a/b", "c")),
])
def test_split_entry_name(path, expected):
    assert split_entry_name(RelativePath(path)) == expected


@pytest.mark.parametrize("path", ["/", "//", "/a/..", "/.", "/" + "x" * (NAME_MAX + 1)])
def test_split_entry_name_rejects(path):
    with pytest.raises(InvalidPathError):
        split_entry_name(RelativePath(path))


def test_relative_path_requires_leading_separator():
    with pytest.raises(ValueError):
        RelativePath("a/b")


def test_build_attributes(credential):
    attr = build_attributes(credential, now=1700000000)

    assert attr.owner == 1000
    assert attr.group == 100
    assert attr.perms == ALL_PERMISSIONS
    assert attr.atime == attr.mtime == attr.ctime == 1700000000
    assert attr.mask == AttrMask.ALL_SETABLE
    assert attr.mask_names() == ["uid", "gid", "perm", "atime", "mtime", "ctime"]


@pytest.mark.parametrize("user_id,groups", [(0, (0,)), (4242, (77, 1))])
def test_build_attributes_follows_credential(user_id, groups):
    credential = Credential(user_id=user_id, group_ids=groups, issuer="C:h", expires_at=0)

    attr = build_attributes(credential)

    assert (attr.owner, attr.group, attr.perms) == (user_id, groups[0], 0o777)


def test_lookup_parent_handle_root(cluster_session, credential):
    fs, _ = cluster_session.resolve("/mnt/pvfs2/")
    assert lookup_parent_handle(cluster_session, "/", fs, credential) == ROOT_HANDLE


def test_lookup_parent_handle_missing(cluster_session, credential):
    fs, _ = cluster_session.resolve("/mnt/pvfs2/")

    with pytest.raises(ParentNotFoundError) as exc_info:
        lookup_parent_handle(cluster_session, "/missing", fs, credential)
    assert exc_info.value.code == "ENOENT"


def test_lookup_parent_handle_not_a_directory(cluster_session, gateway, credential):
    gateway.namespace["/file"] = {"handle": 7, "type": "file"}
    fs, _ = cluster_session.resolve("/mnt/pvfs2/")

    with pytest.raises(ParentNotFoundError) as exc_info:
        lookup_parent_handle(cluster_session, "/file", fs, credential)
    assert exc_info.value.code == "ENOTDIR"


def test_create_directory_under_root(cluster_session, gateway, credential):
    ref = create_directory(cluster_session, "/mnt/pvfs2/newdir/", credential)

    assert ref.handle == ROOT_HANDLE + 1
    assert ref.fs.fs_name == "pvfs2-fs"
    assert gateway.bodies("/sys/lookup")[0]["path"] == "/"
    assert gateway.count("/sys/mkdir") == 1

    body = gateway.bodies("/sys/mkdir")[0]
    assert body["name"] == "newdir"
    assert body["parent_handle"] == ROOT_HANDLE
    assert body["attr"]["perms"] == 0o777
    assert body["attr"]["owner"] == credential.user_id
    assert body["attr"]["group"] == credential.primary_group_id


def test_create_directory_nested(cluster_session, gateway, credential):
    create_directory(cluster_session, "/mnt/pvfs2/a/", credential)
    ref = create_directory(cluster_session, "/mnt/pvfs2/a/b/", credential)

    assert gateway.namespace["/a/b"]["handle"] == ref.handle


def test_create_directory_twice_fails(cluster_session, gateway, credential):
    create_directory(cluster_session, "/mnt/pvfs2/newdir/", credential)

    with pytest.raises(CreateFailedError) as exc_info:
        create_directory(cluster_session, "/mnt/pvfs2/newdir/", credential)

    assert exc_info.value.code == "EEXIST"
    assert "File exists" in str(exc_info.value)
    assert gateway.count("/sys/mkdir") == 2


def test_create_directory_missing_parent(cluster_session, gateway, credential):
    with pytest.raises(ParentNotFoundError):
        create_directory(cluster_session, "/mnt/pvfs2/missing/child/", credential)
    assert gateway.count("/sys/mkdir") == 0


def test_create_directory_at_root_is_invalid(cluster_session, gateway, credential):
    with pytest.raises(InvalidPathError):
        create_directory(cluster_session, "/mnt/pvfs2/", credential)
    assert gateway.calls == []


def test_create_directory_unmounted_path_makes_no_requests(cluster_session, gateway, credential):
    with pytest.raises(NoSuchMountError):
        create_directory(cluster_session, "/tmp/newdir/", credential)
    assert gateway.calls == []
