"""Integration tests for the export and index commands"""

import pytest
from typer.testing import CliRunner

from roampub.cli.cli import app


runner = CliRunner()


@pytest.fixture(autouse=True)
def chdir_tmp(tmp_path, monkeypatch):
    """Run each command from an empty directory so no config.yaml is picked up."""
    monkeypatch.chdir(tmp_path)


def test_export_cmd_writes_files(notes_dir, tmp_path):
    """export prints every written path and exits 0."""
    out = tmp_path / "out"
    result = runner.invoke(app, ["export", str(notes_dir), str(out)])

    assert result.exit_code == 0, result.output
    assert (out / "notes.md").exists()
    assert (out / "sub.md").exists()
    assert str(out / "notes.md") in result.output
    assert "Wrote 2 file(s)" in result.output


def test_export_cmd_dry_run(notes_dir, tmp_path):
    out = tmp_path / "out"
    result = runner.invoke(app, ["export", str(notes_dir), str(out), "--dry"])

    assert result.exit_code == 0, result.output
    assert "Would write 2 file(s)" in result.output
    assert str(out / "sub.md") in result.output
    assert not out.exists()


def test_export_cmd_extension_and_anchor(notes_dir, tmp_path):
    out = tmp_path / "out"
    result = runner.invoke(app, ["export", str(notes_dir), str(out), "--ext", "mdx", "--anchor-heading"])

    assert result.exit_code == 0, result.output
    assert (out / "sub.mdx").read_text(encoding="utf-8").endswith("# Sub\n")
    assert "![[sub.mdx]]" in (out / "notes.mdx").read_text(encoding="utf-8")


def test_export_cmd_duplicate_ids(write_org, tmp_path):
    write_org("one.org", ":PROPERTIES:\n:ID: same\n:END:\n")
    write_org("two.org", ":PROPERTIES:\n:ID: same\n:END:\n")
    result = runner.invoke(app, ["export", str(tmp_path / "notes"), str(tmp_path / "out")])

    assert result.exit_code == 1
    assert "duplicate identifier 'same'" in result.output


def test_export_cmd_missing_source(tmp_path):
    result = runner.invoke(app, ["export", str(tmp_path / "nope"), str(tmp_path / "out")])
    assert result.exit_code == 1
    assert "does not exist" in result.output


def test_export_cmd_invalid_config(notes_dir, tmp_path, monkeypatch):
    monkeypatch.setenv("ROAMPUB_SLUG_COLLISIONS", "sometimes")
    result = runner.invoke(app, ["export", str(notes_dir), str(tmp_path / "out")])
    assert result.exit_code == 1
    assert "Invalid configuration" in result.output


def test_index_cmd_lists_ids(notes_dir):
    result = runner.invoke(app, ["index", str(notes_dir)])

    assert result.exit_code == 0, result.output
    assert "F1\tnotes.md\t" in result.output
    assert "H1\tsub.md\t" in result.output
    assert "Indexed 2 id(s)" in result.output
