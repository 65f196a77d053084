"""Tests for the git changed-file wrapper."""

from __future__ import annotations

import subprocess
from pathlib import Path

import pytest

from depimpact import vcs
from depimpact.exceptions import VCSError


def _completed(stdout: str = "", returncode: int = 0, stderr: str = ""):
    return subprocess.CompletedProcess(args=[], returncode=returncode, stdout=stdout, stderr=stderr)


class TestFilterSourceFiles:
    def test_keeps_source_files(self):
        paths = ["src/a.ts", "README.md", "src/b.tsx", "package.json", "lib/c.py"]
        assert vcs.filter_source_files(paths) == ["src/a.ts", "src/b.tsx", "lib/c.py"]

    def test_custom_extensions(self):
        assert vcs.filter_source_files(["a.ts", "b.py"], [".py"]) == ["b.py"]

    def test_normalizes_and_dedupes(self):
        assert vcs.filter_source_files(["src\\a.ts", "src/a.ts"]) == ["src/a.ts"]


class TestGitChangedFiles:
    def test_runs_git_diff(self, monkeypatch, tmp_path: Path):
        calls = []

        def fake_run(cmd, **kwargs):
            calls.append((cmd, kwargs["cwd"]))
            return _completed("src/a.ts\n\nsrc/b.ts\n")

        monkeypatch.setattr(vcs.subprocess, "run", fake_run)
        assert vcs.git_changed_files(tmp_path, "base1", "head2") == ["src/a.ts", "src/b.ts"]
        assert calls == [(["git", "diff", "--name-only", "base1", "head2"], tmp_path)]

    def test_nonzero_exit(self, monkeypatch, tmp_path: Path):
        monkeypatch.setattr(vcs.subprocess, "run", lambda cmd, **kw: _completed(returncode=128, stderr="bad revision"))
        with pytest.raises(VCSError, match="bad revision"):
            vcs.git_changed_files(tmp_path, "nope")

    def test_git_missing(self, monkeypatch, tmp_path: Path):
        def fake_run(cmd, **kwargs):
            raise FileNotFoundError("git")

        monkeypatch.setattr(vcs.subprocess, "run", fake_run)
        with pytest.raises(VCSError):
            vcs.git_changed_files(tmp_path, "main")


class TestGetChangedFiles:
    def test_refs_from_env(self, monkeypatch, tmp_path: Path):
        seen = {}

        def fake_run(cmd, **kwargs):
            seen["cmd"] = cmd
            return _completed("src/a.ts\ndocs/x.md\n")

        monkeypatch.setenv("BASE_SHA", "abc")
        monkeypatch.setenv("HEAD_SHA", "def")
        monkeypatch.setattr(vcs.subprocess, "run", fake_run)
        assert vcs.get_changed_files(tmp_path) == ["src/a.ts"]
        assert seen["cmd"][-2:] == ["abc", "def"]

    def test_no_base(self, monkeypatch, tmp_path: Path):
        monkeypatch.delenv("BASE_SHA", raising=False)
        monkeypatch.delenv("HEAD_SHA", raising=False)
        assert vcs.get_changed_files(tmp_path) == []

    def test_failure_degrades_to_empty(self, monkeypatch, tmp_path: Path):
        monkeypatch.setattr(vcs.subprocess, "run", lambda cmd, **kw: _completed(returncode=1))
        assert vcs.get_changed_files(tmp_path, "main") == []
