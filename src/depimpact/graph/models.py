"""Data models for the dependency graph document."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


class DependencyEdge(BaseModel):
    """A single outgoing dependency of a module.

    ``resolved`` is the target module path, or empty when the extractor
    could not map the import to a module (external package, dynamic
    import target, ...).
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    resolved: str | None = None
    module: str = ""  # raw import specifier, informational only
    could_not_resolve: bool = Field(default=False, alias="couldNotResolve")
    core_module: bool = Field(default=False, alias="coreModule")

    @property
    def is_resolved(self) -> bool:
        return bool(self.resolved) and not self.could_not_resolve and not self.core_module


class ModuleRecord(BaseModel):
    """A module and its outgoing dependencies."""

    model_config = ConfigDict(extra="ignore")

    source: str
    dependencies: list[DependencyEdge] = Field(default_factory=list)

    @field_validator("dependencies", mode="before")
    @classmethod
    def _null_dependencies(cls, v):
        return [] if v is None else v


class GraphDocument(BaseModel):
    """The serialized graph exchanged between the extractor and the engine."""

    model_config = ConfigDict(extra="ignore")

    modules: list[ModuleRecord]

    def to_json_dict(self) -> dict:
        return {
            "modules": [
                {
                    "source": m.source,
                    "dependencies": [
                        d.model_dump(by_alias=True, exclude_defaults=True)
                        for d in m.dependencies
                    ],
                }
                for m in self.modules
            ]
        }
