"""Tests for the SFTP store."""

import os

import paramiko
import pytest

from stackfs.backends import SFTPStore
from stackfs.exceptions import ErrorKind, PathError
from stackfs.files import MemoryFile


class TestSFTPStore:
    """Tests for SFTPStore against a fake client."""

    def test_put_and_open(self, sftp_store):
        """Test storing and reading back a file."""
        content = os.urandom(4096)
        stored = sftp_store.put(MemoryFile("blob.bin", content))

        assert stored.stat().name == "blob.bin"
        assert stored.stat().size == len(content)
        assert stored.read() == content
        stored.close()

        with sftp_store.open("blob.bin") as f:
            assert f.read() == content

    def test_stat(self, sftp_store):
        """Test remote stat maps onto FileInfo."""
        sftp_store.put(MemoryFile("a.txt", b"hello")).close()

        info = sftp_store.stat("a.txt")
        assert info.name == "a.txt"
        assert info.size == 5
        assert info.is_dir is False

    def test_stat_nonexistent(self, sftp_store):
        """Test stat on a missing remote file."""
        with pytest.raises(PathError) as exc_info:
            sftp_store.stat("missing")

        assert exc_info.value.op == "stat"
        assert exc_info.value.path == "missing"
        assert exc_info.value.kind is ErrorKind.NOT_EXIST

    def test_put_unreadable_source_is_tagged_put(self, sftp_store):
        """Test that a failed read of the input is reported as a put error."""
        source = MemoryFile("a.txt", b"data")
        source.close()

        with pytest.raises(PathError) as exc_info:
            sftp_store.put(source)

        assert exc_info.value.op == "put"
        assert exc_info.value.path == "a.txt"
        assert exc_info.value.kind is ErrorKind.CLOSED

    def test_remove(self, sftp_store):
        """Test removing a remote file."""
        sftp_store.put(MemoryFile("a.txt", b"x")).close()
        sftp_store.remove("a.txt")

        with pytest.raises(PathError) as exc_info:
            sftp_store.open("a.txt")
        assert exc_info.value.kind is ErrorKind.NOT_EXIST

    def test_sub_creates_each_component(self, sftp_store, sftp_client):
        """Test that sub creates missing directories one level at a time."""
        child = sftp_store.sub("a/b")

        assert isinstance(child, SFTPStore)
        assert child.client is sftp_client
        assert os.path.isdir(child.dir)
        assert sftp_client.mkdirs == [
            os.path.join(sftp_store.dir, "a"),
            os.path.join(sftp_store.dir, "a", "b"),
        ]

    def test_sub_existing_creates_nothing(self, sftp_store, sftp_client):
        """Test that sub on an existing directory is idempotent."""
        sftp_store.sub("a")
        sftp_client.mkdirs.clear()

        sftp_store.sub("a")
        assert sftp_client.mkdirs == []

    def test_sub_onto_file_fails(self, sftp_store):
        """Test that sub onto a file fails with a sub error."""
        sftp_store.put(MemoryFile("plain", b"x")).close()

        with pytest.raises(PathError) as exc_info:
            sftp_store.sub("plain")
        assert exc_info.value.op == "sub"

    @pytest.mark.parametrize(
        "error",
        [EOFError(), paramiko.SSHException("Socket is closed"), OSError("Socket is closed")],
    )
    def test_dropped_session_surfaces(self, sftp_store, sftp_client, error):
        """Test that a dropped connection is reported, not retried."""
        sftp_client.fail_with = error

        with pytest.raises(PathError) as exc_info:
            sftp_store.stat("a.txt")

        assert exc_info.value.op == "stat"
        assert exc_info.value.cause is error

    def test_rejects_escaping_names(self, sftp_store):
        """Test that remote names are validated like local ones."""
        with pytest.raises(PathError) as exc_info:
            sftp_store.put(MemoryFile("../up", b"x"))
        assert exc_info.value.kind is ErrorKind.INVALID

    def test_close_without_connection_is_noop(self, sftp_store):
        """Test that close leaves a caller-owned client alone."""
        sftp_store.close()


class FakeSSHClient:
    """Records what SFTPStore.connect does with paramiko.SSHClient."""

    instances = []

    def __init__(self):
        self.policy = None
        self.connected = None
        self.closed = False
        self.sftp = None
        FakeSSHClient.instances.append(self)

    def load_system_host_keys(self):
        pass

    def set_missing_host_key_policy(self, policy):
        self.policy = policy

    def connect(self, host, **kwargs):
        self.connected = (host, kwargs)

    def open_sftp(self):
        self.sftp = ClosableClient()
        return self.sftp

    def close(self):
        self.closed = True


class ClosableClient:
    closed = False

    def close(self):
        self.closed = True


class TestSFTPConnect:
    """Tests for SFTPStore.connect."""

    @pytest.fixture(autouse=True)
    def fake_ssh(self, monkeypatch):
        FakeSSHClient.instances.clear()
        monkeypatch.setattr(paramiko, "SSHClient", FakeSSHClient)

    def test_connect_and_close(self):
        """Test that connect opens a session which close() drops."""
        store = SFTPStore.connect("files.example.com", 2222, username="deploy", path="/upload")

        ssh = FakeSSHClient.instances[0]
        assert ssh.connected == (
            "files.example.com",
            {"port": 2222, "username": "deploy", "password": None, "key_filename": None},
        )
        assert isinstance(ssh.policy, paramiko.RejectPolicy)
        assert store.client is ssh.sftp
        assert store.dir == "/upload"

        store.close()
        assert ssh.closed
        assert ssh.sftp.closed

        store.close()
