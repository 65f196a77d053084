"""Git plumbing: list the files a change set touches."""

from __future__ import annotations

import logging
import os
import subprocess
from pathlib import Path

from depimpact.exceptions import VCSError
from depimpact.graph.paths import has_source_extension, normalize_path

logger = logging.getLogger("depimpact.vcs")

BASE_ENV = "BASE_SHA"
HEAD_ENV = "HEAD_SHA"


def refs_from_env() -> tuple[str | None, str | None]:
    """Base and head commit references supplied by the CI environment."""
    return os.environ.get(BASE_ENV) or None, os.environ.get(HEAD_ENV) or None


def git_changed_files(root: Path, base: str, head: str | None = None) -> list[str]:
    """Run ``git diff --name-only`` between two refs.

    Raises VCSError if git is unavailable or the refs cannot be diffed.
    """
    cmd = ["git", "diff", "--name-only", base]
    if head:
        cmd.append(head)
    try:
        result = subprocess.run(
            cmd,
            cwd=root,
            capture_output=True,
            text=True,
            timeout=30,
        )
    except (subprocess.TimeoutExpired, FileNotFoundError) as e:
        raise VCSError(f"git diff failed: {e}") from e
    if result.returncode != 0:
        raise VCSError(f"git diff failed: {result.stderr.strip()}")
    return [line.strip() for line in result.stdout.splitlines() if line.strip()]


def filter_source_files(paths: list[str], extensions: list[str] | None = None) -> list[str]:
    """Keep analysable source files, normalized, in first-seen order."""
    seen: dict[str, None] = {}
    for p in paths:
        if has_source_extension(p, extensions):
            seen.setdefault(normalize_path(p), None)
    return list(seen)


def get_changed_files(
    root: Path,
    base: str | None = None,
    head: str | None = None,
    extensions: list[str] | None = None,
) -> list[str]:
    """Changed source files between base and head.

    Refs default to the environment. Any git failure is logged and yields
    an empty list so the pipeline step still produces a report.
    """
    env_base, env_head = refs_from_env()
    base = base or env_base
    head = head or env_head
    if not base:
        logger.warning(f"No base reference given (set {BASE_ENV} or --base)")
        return []
    try:
        paths = git_changed_files(root, base, head)
    except VCSError as e:
        logger.warning(str(e))
        return []
    return filter_source_files(paths, extensions)
