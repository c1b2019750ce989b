"""Tests for the ignorezip command line."""

import zipfile

from ignorezip.cli import main


class TestUsage:
    def test_no_arguments(self, runner):
        result = runner.invoke(main, [])
        assert result.exit_code == 1
        assert "Usage:" in result.output

    def test_one_argument(self, runner, tmp_path):
        result = runner.invoke(main, [str(tmp_path)])
        assert result.exit_code == 1

    def test_too_many_arguments(self, runner, tmp_path):
        result = runner.invoke(main, [str(tmp_path), "a.zip", "extra"])
        assert result.exit_code == 1

    def test_unknown_option(self, runner, tmp_path):
        result = runner.invoke(main, ["--bogus", str(tmp_path), "a.zip"])
        assert result.exit_code == 1

    def test_help(self, runner):
        result = runner.invoke(main, ["--help"])
        assert result.exit_code == 0
        assert ".customignore" in result.output


class TestArchiveCommand:
    def test_basic(self, runner, project, tmp_path):
        out = tmp_path / "out.zip"
        result = runner.invoke(main, [str(project), str(out)])
        assert result.exit_code == 0, result.output
        with zipfile.ZipFile(out, "r") as zf:
            names = zf.namelist()
        assert "a.txt" in names
        assert "debug.log" not in names
        assert "sub/secret.txt" not in names
        assert "Total files included: 8" in result.output
        assert f"Archive: {out}" in result.output

    def test_progress_shown(self, runner, project, tmp_path):
        result = runner.invoke(main, [str(project), str(tmp_path / "out.zip")])
        assert result.exit_code == 0, result.output
        assert "Included file: a.txt" in result.output
        assert "Processing .customignore file: sub/.customignore" in result.output

    def test_quiet(self, runner, project, tmp_path):
        result = runner.invoke(main, ["-q", str(project), str(tmp_path / "out.zip")])
        assert result.exit_code == 0, result.output
        assert "Included file:" not in result.output
        assert "Summary:" in result.output

    def test_dry_run(self, runner, project, tmp_path):
        out = tmp_path / "out.zip"
        result = runner.invoke(main, ["--dry-run", str(project), str(out)])
        assert result.exit_code == 0, result.output
        assert not out.exists()
        assert "Dry run: no archive written" in result.output


class TestRuntimeFailures:
    def test_missing_root(self, runner, tmp_path):
        result = runner.invoke(main, [str(tmp_path / "nope"), str(tmp_path / "out.zip")])
        assert result.exit_code == 2
        assert "Root folder not found" in result.output

    def test_bad_pattern(self, runner, make_tree, tmp_path):
        root = make_tree({"sub/.gitignore": "ok\n[bad\n"})
        result = runner.invoke(main, [str(root), str(tmp_path / "out.zip")])
        assert result.exit_code == 2
        assert "sub/.gitignore:2" in result.output

    def test_unwritable_output(self, runner, make_tree, tmp_path):
        root = make_tree({"a.txt": "a"})
        out = tmp_path / "missing" / "out.zip"
        result = runner.invoke(main, [str(root), str(out)])
        assert result.exit_code == 2
        assert "Cannot write archive" in result.output
        assert "Total files included" not in result.output
