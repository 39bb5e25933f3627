import os

import pytest

from canopy import Composite, DepthMeter, Leaf, PathCollector, SizeCalculator, run_visitor, scan_directory


def _populate(root):
    (root / "a.txt").write_bytes(b"x" * 120)
    (root / "b.txt").write_bytes(b"x" * 2048)
    sub = root / "sub"
    sub.mkdir()
    (sub / "d.txt").write_bytes(b"x" * 12)
    (sub / "c.txt").write_bytes(b"x" * 45)


def test_scan_mirrors_directory(tmp_path):
    _populate(tmp_path)
    root = scan_directory(tmp_path)
    assert isinstance(root, Composite)
    assert root.name == tmp_path.name
    assert run_visitor(root, SizeCalculator()) == 2225
    assert run_visitor(root, PathCollector()) == [
        f"{tmp_path.name}/a.txt",
        f"{tmp_path.name}/b.txt",
        f"{tmp_path.name}/sub/c.txt",
        f"{tmp_path.name}/sub/d.txt",
    ]


def test_scan_keeps_empty_directories(tmp_path):
    (tmp_path / "empty").mkdir()
    root = scan_directory(tmp_path)
    child = root.get_child(0)
    assert isinstance(child, Composite)
    assert child.name == "empty"
    assert child.is_empty
    assert run_visitor(root, SizeCalculator()) == 0


def test_scan_skips_hidden_entries_by_default(tmp_path):
    _populate(tmp_path)
    (tmp_path / ".secret").write_bytes(b"x" * 1000)
    hidden_dir = tmp_path / ".cache"
    hidden_dir.mkdir()
    (hidden_dir / "blob.bin").write_bytes(b"x" * 5000)

    assert run_visitor(scan_directory(tmp_path), SizeCalculator()) == 2225
    assert run_visitor(scan_directory(tmp_path, include_hidden=True), SizeCalculator()) == 8225


def test_scan_leaf_values_are_file_sizes(tmp_path):
    (tmp_path / "one.bin").write_bytes(b"\0" * 3)
    leaf = scan_directory(tmp_path).get_child(0)
    assert isinstance(leaf, Leaf)
    assert (leaf.name, leaf.value) == ("one.bin", 3)


def test_scan_rejects_missing_and_file_roots(tmp_path):
    with pytest.raises(FileNotFoundError):
        scan_directory(tmp_path / "nope")
    f = tmp_path / "file.txt"
    f.write_text("hi")
    with pytest.raises(NotADirectoryError):
        scan_directory(f)


def test_scan_unreadable_root_raises_oserror(tmp_path, monkeypatch):
    locked = tmp_path / "locked"
    locked.mkdir()
    real_scandir = os.scandir

    def _scandir(p="."):
        if os.fspath(p) == str(locked):
            raise PermissionError(13, "Permission denied", str(locked))
        return real_scandir(p)

    monkeypatch.setattr(os, "scandir", _scandir)
    with pytest.raises(PermissionError):
        scan_directory(locked)


needs_symlinks = pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks unsupported")


@needs_symlinks
def test_scan_ignores_symlinked_directories_by_default(tmp_path):
    root = tmp_path / "root"
    root.mkdir()
    (root / "f.bin").write_bytes(b"x" * 10)
    outside = tmp_path / "outside"
    outside.mkdir()
    (outside / "g.bin").write_bytes(b"x" * 7)
    os.symlink(outside, root / "link", target_is_directory=True)

    tree = scan_directory(root)
    assert run_visitor(tree, PathCollector()) == ["root/f.bin"]

    followed = scan_directory(root, follow_symlinks=True)
    assert run_visitor(followed, PathCollector()) == ["root/f.bin", "root/link/g.bin"]
    assert run_visitor(followed, SizeCalculator()) == 17


@needs_symlinks
def test_scan_cuts_symlink_loops_when_following(tmp_path):
    (tmp_path / "f.bin").write_bytes(b"x" * 10)
    sub = tmp_path / "sub"
    sub.mkdir()
    os.symlink(tmp_path, tmp_path / "loop", target_is_directory=True)
    os.symlink(tmp_path, sub / "back", target_is_directory=True)

    root = scan_directory(tmp_path, follow_symlinks=True)
    assert run_visitor(root, SizeCalculator()) == 10
    assert run_visitor(root, DepthMeter()) == 2
    assert [c.name for c in root.children] == ["f.bin", "sub"]
