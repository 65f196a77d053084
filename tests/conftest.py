"""Shared test fixtures for depimpact."""

from __future__ import annotations

from pathlib import Path

import pytest

from depimpact.extractors.base import SymbolExtractor


def make_document(edges: dict[str, list[str | None]]) -> dict:
    """Graph document from {source: [target or None, ...]}."""
    return {
        "modules": [
            {
                "source": source,
                "dependencies": [{"resolved": t} if t else {"module": "ext"} for t in targets],
            }
            for source, targets in edges.items()
        ]
    }


class FakeExtractor(SymbolExtractor):
    """Deterministic symbol extractor backed by a dict."""

    def __init__(self, exports: dict[str, list[str]] | None = None, failing: set[str] | None = None):
        self.exports = exports or {}
        self.failing = failing or set()
        self.calls: list[str] = []

    def extract_exports(self, file_path: str) -> list[str]:
        self.calls.append(file_path)
        if file_path in self.failing:
            raise RuntimeError(f"cannot analyze {file_path}")
        return self.exports.get(file_path, [])


@pytest.fixture
def chain_document() -> dict:
    """A depends on B, B depends on C."""
    return make_document({"A": ["B"], "B": ["C"], "C": []})


@pytest.fixture
def cycle_document() -> dict:
    """A and B depend on each other."""
    return make_document({"A": ["B"], "B": ["A"]})


@pytest.fixture
def ts_document() -> dict:
    """A dependency-cruiser style document for a small TS project."""
    return {
        "modules": [
            {
                "source": "src/app.tsx",
                "dependencies": [
                    {"module": "./widgets/button", "resolved": "src/widgets/button.tsx"},
                    {"module": "./api", "resolved": "src/api.ts"},
                    {"module": "react", "resolved": "react", "coreModule": False, "couldNotResolve": True},
                ],
            },
            {
                "source": "src\\widgets\\button.tsx",
                "dependencies": [{"module": "../util", "resolved": "src\\util.ts"}],
            },
            {
                "source": "src/api.ts",
                "dependencies": [
                    {"module": "./util", "resolved": "src/util.ts"},
                    {"module": "fs", "resolved": "fs", "coreModule": True},
                ],
            },
            {"source": "src/util.ts", "dependencies": []},
            {"source": "src/y.ts", "dependencies": []},
        ]
    }


@pytest.fixture
def fake_extractor() -> FakeExtractor:
    return FakeExtractor()


@pytest.fixture
def tmp_project(tmp_path: Path) -> Path:
    """A temporary project with a small Python package under src/."""
    pkg = tmp_path / "src" / "shop"
    pkg.mkdir(parents=True)

    (pkg / "__init__.py").write_text('''"""Shop package."""

from shop.models import Order, User
''')

    (pkg / "utils.py").write_text('''"""Utility functions."""

TAX_RATE = 0.08


def calculate_total(items):
    prices = {"widget": 9.99, "gadget": 24.99}
    return sum(prices.get(item, 0) for item in items) * (1 + TAX_RATE)


def _internal():
    return None
''')

    (pkg / "models.py").write_text('''"""Data models."""

from .utils import calculate_total


class User:
    def __init__(self, name):
        self.name = name


class Order:
    def __init__(self, user, items):
        self.user = user
        self.items = items

    def total(self):
        return calculate_total(self.items)
''')

    api = pkg / "api"
    api.mkdir()
    (api / "__init__.py").write_text("")
    (api / "routes.py").write_text('''"""API routes."""

import json

from shop import models
from ..models import Order


def create_order(user, items):
    order = Order(user, items)
    return json.dumps({"total": order.total()})
''')

    (tmp_path / "src" / "broken.py").write_text("def oops(:\n")
    return tmp_path
