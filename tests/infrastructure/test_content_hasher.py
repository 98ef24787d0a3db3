"""Tests for Sha256ContentHasher."""

import os

import pytest

from venvhooks.domain.errors import HashComputationError
from venvhooks.domain.value_objects.fingerprint import Fingerprint
from venvhooks.infrastructure.adapters.content_hasher import Sha256ContentHasher


@pytest.fixture
def tree(tmp_path):
    root = tmp_path / "tree"
    (root / "pkg" / "sub").mkdir(parents=True)
    (root / "pkg" / "__init__.py").write_text("a = 1\n")
    (root / "pkg" / "sub" / "mod.py").write_text("b = 2\n")
    (root / "README").write_text("readme\n")
    return root


class TestSha256ContentHasher:
    def test_returns_fingerprint(self, tree):
        result = Sha256ContentHasher().fingerprint([tree])
        assert isinstance(result, Fingerprint)
        assert len(str(result)) == 64

    def test_deterministic(self, tree):
        hasher = Sha256ContentHasher()
        assert hasher.fingerprint([tree]) == hasher.fingerprint([tree])

    def test_file_content_change(self, tree):
        hasher = Sha256ContentHasher()
        before = hasher.fingerprint([tree])
        (tree / "pkg" / "sub" / "mod.py").write_text("b = 3\n")
        assert hasher.fingerprint([tree]) != before

    def test_mtime_is_ignored(self, tree):
        hasher = Sha256ContentHasher()
        before = hasher.fingerprint([tree])
        os.utime(tree / "README", (0, 0))
        assert hasher.fingerprint([tree]) == before

    def test_rename_changes_digest(self, tree):
        hasher = Sha256ContentHasher()
        before = hasher.fingerprint([tree])
        (tree / "README").rename(tree / "README.md")
        assert hasher.fingerprint([tree]) != before

    def test_empty_directory_counts(self, tree):
        hasher = Sha256ContentHasher()
        before = hasher.fingerprint([tree])
        (tree / "empty").mkdir()
        assert hasher.fingerprint([tree]) != before

    def test_extra_changes_digest(self, tree):
        hasher = Sha256ContentHasher()
        assert hasher.fingerprint([tree], "a") != hasher.fingerprint([tree], "b")

    def test_input_order_matters(self, tmp_path):
        a = tmp_path / "a"
        b = tmp_path / "b"
        a.write_text("a")
        b.write_text("b")
        hasher = Sha256ContentHasher()
        assert hasher.fingerprint([a, b]) != hasher.fingerprint([b, a])

    def test_boundaries_are_unambiguous(self, tmp_path):
        one = tmp_path / "one"
        two = tmp_path / "two"
        one.mkdir()
        two.mkdir()
        (one / "ab").write_text("c")
        (two / "a").write_text("bc")
        hasher = Sha256ContentHasher()
        assert hasher.fingerprint([one]) != hasher.fingerprint([two])

    def test_file_and_directory_differ(self, tmp_path):
        as_file = tmp_path / "x"
        as_file.write_text("")
        file_digest = Sha256ContentHasher().fingerprint([as_file])
        as_file.unlink()
        as_file.mkdir()
        assert Sha256ContentHasher().fingerprint([as_file]) != file_digest

    def test_symlink_hashed_by_target(self, tree, tmp_path):
        outside = tmp_path / "outside.txt"
        outside.write_text("v1")
        (tree / "link").symlink_to(outside)
        hasher = Sha256ContentHasher()
        before = hasher.fingerprint([tree])

        outside.write_text("v2")
        assert hasher.fingerprint([tree]) == before

        (tree / "link").unlink()
        (tree / "link").symlink_to(tmp_path / "elsewhere.txt")
        assert hasher.fingerprint([tree]) != before

    def test_dangling_symlink_is_fine(self, tree):
        (tree / "dangling").symlink_to(tree / "nowhere")
        Sha256ContentHasher().fingerprint([tree])

    def test_excluded_names_ignored(self, tree):
        hasher = Sha256ContentHasher(exclude=("__pycache__", "*.pyc"))
        before = hasher.fingerprint([tree])
        cache = tree / "pkg" / "__pycache__"
        cache.mkdir()
        (cache / "mod.cpython-312.pyc").write_bytes(b"\x00")
        (tree / "pkg" / "stray.pyc").write_bytes(b"\x00")
        assert hasher.fingerprint([tree]) == before

    def test_without_excludes_cache_counts(self, tree):
        hasher = Sha256ContentHasher()
        before = hasher.fingerprint([tree])
        (tree / "pkg" / "__pycache__").mkdir()
        assert hasher.fingerprint([tree]) != before

    def test_missing_input(self, tmp_path):
        with pytest.raises(HashComputationError, match="absent"):
            Sha256ContentHasher().fingerprint([tmp_path / "absent"])

    def test_no_inputs(self):
        hasher = Sha256ContentHasher()
        assert hasher.fingerprint([]) == hasher.fingerprint([])
        assert hasher.fingerprint([], "x") != hasher.fingerprint([])

    def test_str_paths_accepted(self, tree):
        hasher = Sha256ContentHasher()
        assert hasher.fingerprint([str(tree)]) == hasher.fingerprint([tree])

    @pytest.mark.skipif(os.geteuid() == 0, reason="root can read anything")
    def test_unreadable_file(self, tree):
        secret = tree / "secret"
        secret.write_text("x")
        secret.chmod(0)
        try:
            with pytest.raises(HashComputationError):
                Sha256ContentHasher().fingerprint([tree])
        finally:
            secret.chmod(0o644)
