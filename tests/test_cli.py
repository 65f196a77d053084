"""Tests for the CLI interface."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from depimpact.cli import main


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def graphed_project(runner: CliRunner, tmp_project: Path) -> Path:
    """A tmp_project with a dependency graph already written."""
    result = runner.invoke(main, ["build-graph", "--path", str(tmp_project)])
    assert result.exit_code == 0, f"build-graph failed: {result.output}"
    return tmp_project


class TestCLIInit:
    def test_init(self, runner: CliRunner, tmp_path: Path):
        result = runner.invoke(main, ["init", "--path", str(tmp_path), "--max-depth", "4"])
        assert result.exit_code == 0
        data = json.loads((tmp_path / ".depimpact" / "config.json").read_text())
        assert data["impact"]["max_depth"] == 4
        assert "Change-impact analysis" in result.output

    def test_init_nonexistent_path(self, runner: CliRunner):
        result = runner.invoke(main, ["init", "--path", "/nonexistent/path"])
        assert result.exit_code != 0


class TestCLIBuildGraph:
    def test_writes_graph(self, runner: CliRunner, graphed_project: Path):
        graph_file = graphed_project / ".github" / "ai" / "dep-graph.json"
        data = json.loads(graph_file.read_text())
        sources = [m["source"] for m in data["modules"]]
        assert "src/shop/utils.py" in sources

    def test_custom_output(self, runner: CliRunner, tmp_project: Path):
        out = tmp_project / "graph.json"
        result = runner.invoke(
            main, ["build-graph", "--path", str(tmp_project), "--output", str(out)]
        )
        assert result.exit_code == 0
        assert out.exists()

    def test_unreadable_inputs_not_fatal(self, runner: CliRunner, tmp_project: Path):
        (tmp_project / ".gitignore").write_bytes(b"\xff\xfe\n")
        (tmp_project / "src" / "nul.py").write_bytes(b"x = 1\x00\n")
        result = runner.invoke(main, ["build-graph", "--path", str(tmp_project)])
        assert result.exit_code == 0, result.output
        data = json.loads((tmp_project / ".github" / "ai" / "dep-graph.json").read_text())
        assert "src/nul.py" in [m["source"] for m in data["modules"]]


class TestCLIImpact:
    def test_impact_report(self, runner: CliRunner, graphed_project: Path):
        result = runner.invoke(
            main,
            ["impact", "--path", str(graphed_project), "--changed", "src/shop/utils.py"],
        )
        assert result.exit_code == 0, result.output
        report = json.loads((graphed_project / ".github" / "ai" / "impact.json").read_text())
        assert report["changed"] == ["src/shop/utils.py"]
        assert report["impacted"] == [
            {"file": "src/shop/models.py", "depth": 1},
            {"file": "src/shop/__init__.py", "depth": 2},
            {"file": "src/shop/api/routes.py", "depth": 2},
        ]
        assert report["exports"]["src/shop/utils.py"] == ["TAX_RATE", "calculate_total"]
        assert report["exports"]["src/shop/models.py"] == ["User", "Order"]
        assert "src/shop/models.py" in result.output
        assert "3 module(s) impacted, max depth 2" in result.output

    def test_json_format(self, runner: CliRunner, graphed_project: Path):
        result = runner.invoke(
            main,
            [
                "impact", "--path", str(graphed_project),
                "--changed", "src/shop/models.py", "--format", "json", "--max-depth", "1",
            ],
        )
        assert result.exit_code == 0, result.output
        report = json.loads(result.output)
        assert report["impacted"] == [
            {"file": "src/shop/__init__.py", "depth": 1},
            {"file": "src/shop/api/routes.py", "depth": 1},
        ]

    def test_missing_graph_is_not_fatal(self, runner: CliRunner, tmp_path: Path):
        result = runner.invoke(
            main, ["impact", "--path", str(tmp_path), "--changed", "src/a.ts"]
        )
        assert result.exit_code == 0
        report = json.loads((tmp_path / ".github" / "ai" / "impact.json").read_text())
        assert report == {"changed": ["src/a.ts"], "impacted": [], "exports": {}}

    def test_non_utf8_graph_is_not_fatal(self, runner: CliRunner, tmp_path: Path):
        graph_file = tmp_path / ".github" / "ai" / "dep-graph.json"
        graph_file.parent.mkdir(parents=True)
        graph_file.write_bytes(b'{"modules": [{"source": "\xff\xfe"}]}')
        result = runner.invoke(
            main, ["impact", "--path", str(tmp_path), "--changed", "a.ts"]
        )
        assert result.exit_code == 0, result.output
        report = json.loads((tmp_path / ".github" / "ai" / "impact.json").read_text())
        assert report == {"changed": ["a.ts"], "impacted": [], "exports": {}}

    def test_non_source_files_dropped(self, runner: CliRunner, tmp_path: Path):
        out = tmp_path / "impact.json"
        result = runner.invoke(
            main,
            [
                "impact", "--path", str(tmp_path), "--changed", "README.md",
                "--changed", "src/a.ts", "--output", str(out),
            ],
        )
        assert result.exit_code == 0
        assert json.loads(out.read_text())["changed"] == ["src/a.ts"]

    def test_unwritable_output_fails(self, runner: CliRunner, tmp_path: Path):
        (tmp_path / "blocker").write_text("")
        result = runner.invoke(
            main,
            [
                "impact", "--path", str(tmp_path), "--changed", "a.ts",
                "--output", str(tmp_path / "blocker" / "impact.json"),
            ],
        )
        assert result.exit_code == 1

    def test_negative_depth_rejected(self, runner: CliRunner, tmp_path: Path):
        result = runner.invoke(
            main, ["impact", "--path", str(tmp_path), "--changed", "a.ts", "--max-depth", "-1"]
        )
        assert result.exit_code == 1


class TestCLIConfig:
    def test_show(self, runner: CliRunner, tmp_path: Path):
        result = runner.invoke(main, ["config", "show", "--path", str(tmp_path)])
        assert result.exit_code == 0
        assert json.loads(result.output)["impact"]["max_depth"] == 6

    def test_set_and_get(self, runner: CliRunner, tmp_path: Path):
        result = runner.invoke(
            main, ["config", "set", "impact.export_limit", "10", "--path", str(tmp_path)]
        )
        assert result.exit_code == 0
        result = runner.invoke(
            main, ["config", "get", "impact.export_limit", "--path", str(tmp_path)]
        )
        assert result.output.strip() == "10"

    def test_set_invalid_key(self, runner: CliRunner, tmp_path: Path):
        result = runner.invoke(
            main, ["config", "set", "nope.key", "1", "--path", str(tmp_path)]
        )
        assert result.exit_code == 1
