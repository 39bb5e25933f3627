import logging
import os
import textwrap

from typer.testing import CliRunner

from canopy.cli import app

runner = CliRunner()

SAMPLE_YAML = textwrap.dedent(
    """
    tree:
      name: root
      children:
        - {name: a.txt, value: 120}
        - {name: b.txt, value: 2048}
        - name: sub
          children:
            - {name: c.txt, value: 45}
            - {name: d.txt, value: 12}
    """
)


def _tree_file(tmp_path, text=SAMPLE_YAML):
    f = tmp_path / "tree.yml"
    f.write_text(text)
    return f


def test_size_command(tmp_path):
    result = runner.invoke(app, ["size", str(_tree_file(tmp_path))])
    assert result.exit_code == 0
    assert result.stdout.strip() == "2225"


def test_size_command_debug_flag(tmp_path):
    result = runner.invoke(app, ["--debug", "size", str(_tree_file(tmp_path))])
    assert result.exit_code == 0
    assert "2225" in result.stdout


def test_show_plain(tmp_path):
    result = runner.invoke(app, ["show", str(_tree_file(tmp_path)), "--plain"])
    assert result.exit_code == 0
    assert result.stdout.splitlines() == [
        "[root]",
        "  a.txt (120 bytes)",
        "  b.txt (2048 bytes)",
        "  [sub]",
        "    c.txt (45 bytes)",
        "    d.txt (12 bytes)",
    ]


def test_show_rich_tree(tmp_path):
    result = runner.invoke(app, ["show", str(_tree_file(tmp_path)), "--no-icons", "--max-children", "2"])
    assert result.exit_code == 0
    assert "root" in result.stdout
    assert "a.txt" in result.stdout
    assert "+1 more" in result.stdout
    assert "📄" not in result.stdout


def test_stats_command(tmp_path):
    result = runner.invoke(app, ["stats", str(_tree_file(tmp_path))])
    assert result.exit_code == 0
    for word in ["Leaves", "Composites", "Depth", "Total size", "2225"]:
        assert word in result.stdout


def test_invalid_tree_exits_with_error(tmp_path):
    bad = _tree_file(tmp_path, "tree: {name: neg, value: -1}\n")
    result = runner.invoke(app, ["size", str(bad)])
    assert result.exit_code == 1
    assert "Error" in result.stdout


def test_malformed_yaml_exits_with_error(tmp_path):
    bad = _tree_file(tmp_path, "tree: [unclosed\n")
    result = runner.invoke(app, ["size", str(bad)])
    assert result.exit_code == 1


def test_missing_file_is_a_usage_error(tmp_path):
    result = runner.invoke(app, ["size", str(tmp_path / "missing.yml")])
    assert result.exit_code == 2


def test_scan_command(tmp_path):
    data = tmp_path / "data"
    data.mkdir()
    (data / "a.bin").write_bytes(b"x" * 100)
    (data / "sub").mkdir()
    (data / "sub" / "b.bin").write_bytes(b"x" * 23)

    result = runner.invoke(app, ["scan", str(data), "--show"])
    assert result.exit_code == 0
    assert "123 bytes" in result.stdout
    assert "b.bin" in result.stdout


def test_scan_unreadable_directory_exits_cleanly(tmp_path, monkeypatch):
    locked = tmp_path / "locked"
    locked.mkdir()
    real_scandir = os.scandir

    def _scandir(p="."):
        if os.fspath(p) == str(locked):
            raise PermissionError(13, "Permission denied", str(locked))
        return real_scandir(p)

    monkeypatch.setattr(os, "scandir", _scandir)
    result = runner.invoke(app, ["scan", str(locked)])
    assert result.exit_code == 1
    assert "Error scanning" in result.stdout


def test_debug_flag_sets_logger_level(tmp_path):
    tree_file = _tree_file(tmp_path)
    logger = logging.getLogger("canopy")

    assert runner.invoke(app, ["--debug", "size", str(tree_file)]).exit_code == 0
    assert logger.level == logging.DEBUG
    assert runner.invoke(app, ["size", str(tree_file)]).exit_code == 0
    assert logger.level == logging.INFO
