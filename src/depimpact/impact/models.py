"""Data models for impact analysis results."""

from __future__ import annotations

import json

from pydantic import BaseModel, Field


class ImpactEntry(BaseModel):
    """A module reachable from the change and its minimal hop distance."""

    file: str
    depth: int


class ImpactReport(BaseModel):
    """The engine's output artifact."""

    changed: list[str] = Field(default_factory=list)
    impacted: list[ImpactEntry] = Field(default_factory=list)
    exports: dict[str, list[str]] = Field(default_factory=dict)

    @classmethod
    def degenerate(cls, changed: list[str]) -> ImpactReport:
        """Report for a run without a usable graph."""
        return cls(changed=list(changed))

    @property
    def impacted_files(self) -> list[str]:
        return [entry.file for entry in self.impacted]

    def max_depth(self) -> int:
        return max((entry.depth for entry in self.impacted), default=0)

    def to_json(self) -> str:
        return json.dumps(self.model_dump(), indent=2)
