"""Canonical path forms used for every graph comparison."""

from __future__ import annotations

import re

SOURCE_EXTENSIONS: tuple[str, ...] = (
    ".tsx",
    ".ts",
    ".jsx",
    ".js",
    ".mjs",
    ".cjs",
    ".pyi",
    ".py",
)

_EXT_RE = re.compile(r"\.(?:tsx|ts|jsx|js|mjs|cjs|pyi|py)$")
_MULTI_SEP_RE = re.compile(r"/{2,}")


def normalize_path(path: str) -> str:
    """Map a path to its canonical form.

    All separators become ``/``, runs of separators collapse and any
    leading ``./`` segments are dropped.
    """
    norm = _MULTI_SEP_RE.sub("/", path.replace("\\", "/"))
    while norm.startswith("./"):
        norm = norm[2:]
    return norm


def strip_source_extension(path: str) -> str:
    """Remove one conventional source-file extension, if present."""
    return _EXT_RE.sub("", path)


def has_source_extension(path: str, extensions: list[str] | tuple[str, ...] | None = None) -> bool:
    exts = tuple(extensions) if extensions else SOURCE_EXTENSIONS
    return path.lower().endswith(exts)
