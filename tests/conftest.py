"""Shared fixtures for ignorezip tests."""

import pytest
from click.testing import CliRunner


def write_tree(root, files):
    """Create *files* (``{rel_path: text}``) under *root*; return *root*."""
    root.mkdir(parents=True, exist_ok=True)
    for rel, text in files.items():
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text)
    return root


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def make_tree(tmp_path):
    """Return a factory building a directory tree under ``tmp_path/proj``."""
    def _make(files, name="proj"):
        return write_tree(tmp_path / name, files)
    return _make


@pytest.fixture
def project(make_tree):
    """A small project with layered ignore files.

    Tree:
        .gitignore          (*.log, build/, !keep.log)
        .git/HEAD
        a.txt, keep.log, debug.log,
        build/out.bin, build/sub/deep.txt,
        src/main.py, src/.gitignore (/local.cfg),
        src/local.cfg, src/pkg/local.cfg,
        sub/.customignore   (secret.txt),
        sub/secret.txt, sub/public.txt
    """
    return make_tree({
        ".gitignore": "# build output\n*.log\nbuild/\n!keep.log\n",
        ".git/HEAD": "ref: refs/heads/main\n",
        "a.txt": "a",
        "keep.log": "keep",
        "debug.log": "debug",
        "build/out.bin": "bin",
        "build/sub/deep.txt": "deep",
        "src/main.py": "print('hi')\n",
        "src/.gitignore": "/local.cfg\n",
        "src/local.cfg": "cfg",
        "src/pkg/local.cfg": "cfg",
        "sub/.customignore": "secret.txt\n",
        "sub/secret.txt": "secret",
        "sub/public.txt": "public",
    })
