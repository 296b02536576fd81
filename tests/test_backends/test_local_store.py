"""Tests for the local filesystem store."""

import os
import stat

import pytest

from stackfs.backends import LocalStore
from stackfs.exceptions import ErrorKind, PathError
from stackfs.files import MemoryFile
from stackfs.protocols import Store


class TestLocalStore:
    """Tests for LocalStore."""

    def test_satisfies_protocol(self, local_store):
        """Test that LocalStore is a Store."""
        assert isinstance(local_store, Store)

    def test_creates_root(self, tmp_path):
        """Test that the root directory is created on construction."""
        LocalStore(tmp_path / "a" / "b")
        assert (tmp_path / "a" / "b").is_dir()

    def test_put_and_open(self, local_store):
        """Test storing and reading back a file."""
        content = b"Hello, World!"
        stored = local_store.put(MemoryFile("test.txt", content))

        assert stored.stat().name == "test.txt"
        assert stored.read() == content
        stored.close()

        with local_store.open("test.txt") as f:
            assert f.read() == content
            assert f.stat().size == len(content)

    def test_put_returns_file_at_start(self, local_store):
        """Test that the returned file can be re-read immediately."""
        stored = local_store.put(MemoryFile("a.bin", b"abc"))
        assert stored.read(1) == b"a"
        stored.close()

    def test_put_overwrites(self, local_store):
        """Test that putting an existing name replaces its content."""
        local_store.put(MemoryFile("a.txt", b"first version")).close()
        local_store.put(MemoryFile("a.txt", b"second")).close()

        with local_store.open("a.txt") as f:
            assert f.read() == b"second"

    def test_stat(self, local_store):
        """Test getting metadata without content."""
        local_store.put(MemoryFile("dir-less.txt", b"12345")).close()

        info = local_store.stat("dir-less.txt")
        assert info.name == "dir-less.txt"
        assert info.size == 5
        assert info.is_dir is False

    def test_stat_nonexistent(self, local_store):
        """Test stat on a missing file."""
        with pytest.raises(PathError) as exc_info:
            local_store.stat("missing.txt")

        err = exc_info.value
        assert err.op == "stat"
        assert err.path == "missing.txt"
        assert err.kind is ErrorKind.NOT_EXIST
        assert isinstance(err.cause, FileNotFoundError)

    def test_open_nonexistent(self, local_store):
        """Test open on a missing file."""
        with pytest.raises(PathError) as exc_info:
            local_store.open("missing.txt")

        assert exc_info.value.op == "open"
        assert exc_info.value.kind is ErrorKind.NOT_EXIST

    def test_remove(self, local_store):
        """Test removing a file."""
        local_store.put(MemoryFile("a.txt", b"x")).close()
        local_store.remove("a.txt")

        with pytest.raises(PathError) as exc_info:
            local_store.stat("a.txt")
        assert exc_info.value.kind is ErrorKind.NOT_EXIST

    def test_remove_nonexistent(self, local_store):
        """Test removing a missing file fails with not-exist."""
        with pytest.raises(PathError) as exc_info:
            local_store.remove("missing.txt")

        assert exc_info.value.op == "remove"
        assert exc_info.value.kind is ErrorKind.NOT_EXIST

    def test_sub(self, local_store):
        """Test that sub scopes to a new directory."""
        child = local_store.sub("child")

        assert isinstance(child, LocalStore)
        assert os.path.isdir(os.path.join(local_store.dir, "child"))
        mode = stat.S_IMODE(os.stat(child.dir).st_mode)
        assert mode & 0o007 == 0

        child.put(MemoryFile("a.txt", b"in child")).close()

        assert local_store.stat("child/a.txt").size == 8
        with pytest.raises(PathError):
            local_store.stat("a.txt")

    def test_sub_is_idempotent(self, local_store):
        """Test that sub on an existing directory succeeds."""
        local_store.sub("child").put(MemoryFile("a", b"x")).close()
        again = local_store.sub("child")

        assert again.stat("a").size == 1

    def test_sub_nested(self, local_store):
        """Test that sub creates missing parents."""
        child = local_store.sub("a/b/c")
        assert os.path.isdir(child.dir)

    def test_sub_does_not_change_parent(self, local_store):
        """Test that the parent keeps its root."""
        root = local_store.dir
        local_store.sub("child")
        assert local_store.dir == root

    def test_sub_on_file_fails(self, local_store):
        """Test that sub onto an existing file fails with a sub error."""
        local_store.put(MemoryFile("plain", b"x")).close()

        with pytest.raises(PathError) as exc_info:
            local_store.sub("plain")

        assert exc_info.value.op == "sub"
        assert exc_info.value.path == "plain"

    @pytest.mark.parametrize("name", ["../escape.txt", "/etc/passwd", "a/../../b", ""])
    def test_rejects_escaping_names(self, local_store, name):
        """Test that names escaping the root are invalid."""
        with pytest.raises(PathError) as exc_info:
            local_store.open(name)

        assert exc_info.value.kind is ErrorKind.INVALID

    def test_put_rejects_escaping_name(self, local_store, tmp_path):
        """Test that put does not write outside the root."""
        with pytest.raises(PathError) as exc_info:
            local_store.put(MemoryFile("../outside.txt", b"x"))

        assert exc_info.value.op == "put"
        assert exc_info.value.kind is ErrorKind.INVALID
        assert not (tmp_path / "outside.txt").exists()

    def test_put_copies_from_current_position(self, local_store):
        """Test that put stores what is left to read in the input."""
        source = MemoryFile("a.txt", b"skip-keep")
        source.read(5)

        with local_store.put(source) as stored:
            assert stored.read() == b"keep"

    def test_put_unreadable_source_is_tagged_put(self, local_store):
        """Test that a failed read of the input is reported as a put error."""
        source = MemoryFile("a.txt", b"data")
        source.close()

        with pytest.raises(PathError) as exc_info:
            local_store.put(source)

        err = exc_info.value
        assert err.op == "put"
        assert err.path == "a.txt"
        assert err.kind is ErrorKind.CLOSED
