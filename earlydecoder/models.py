"""
Pydantic models for the facts the early decoder extracts from a module.

``DecodedModule`` is the accumulator: the caller creates one per module and
passes it to the decoder once per file. Every map is keyed by a string built
only from the declaring block's labels, so a later declaration with the same
labels replaces the earlier one.
"""

from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field

from .diagnostics import Diagnostics


class ProviderRef(BaseModel):
    """Reference to a provider configuration by local name and optional alias."""

    model_config = ConfigDict(frozen=True)

    local_name: str = ""
    alias: str = ""

    def is_resolved(self) -> bool:
        return self.local_name != ""

    def __str__(self) -> str:
        if self.alias:
            return f"{self.local_name}.{self.alias}"
        return self.local_name


class ProviderRequirement(BaseModel):
    """A provider dependency: where it comes from and which versions are acceptable."""
    source: str = ""
    version_constraints: List[str] = Field(default_factory=list)


class ProviderConfig(BaseModel):
    """A ``provider`` block."""
    name: str
    alias: str = ""

    def map_key(self) -> str:
        if self.alias:
            return f"{self.name}.{self.alias}"
        return self.name


class Resource(BaseModel):
    """A ``resource`` block and the provider it binds to."""
    type: str
    name: str
    provider: ProviderRef = ProviderRef()

    def map_key(self) -> str:
        return f"{self.type}.{self.name}"


class DataSource(BaseModel):
    """A ``data`` block and the provider it binds to."""
    type: str
    name: str
    provider: ProviderRef = ProviderRef()

    def map_key(self) -> str:
        return f"data.{self.type}.{self.name}"


class ModuleCall(BaseModel):
    """A ``module`` block."""
    name: str
    source: str = ""

    def map_key(self) -> str:
        return f"module.{self.name}"


class DecodedModule(BaseModel):
    """Everything the early decoder learned about one module."""

    required_core: List[str] = Field(default_factory=list)
    provider_requirements: Dict[str, ProviderRequirement] = Field(default_factory=dict)
    provider_configs: Dict[str, ProviderConfig] = Field(default_factory=dict)
    resources: Dict[str, Resource] = Field(default_factory=dict)
    data_sources: Dict[str, DataSource] = Field(default_factory=dict)
    module_calls: Dict[str, ModuleCall] = Field(default_factory=dict)

    def merge(self, other: "DecodedModule") -> Diagnostics:
        """
        Fold a separately decoded module into this one.

        Applies the same rules the decoder applies when it is handed a shared
        accumulator: core constraints are appended, provider requirements are
        merged with the source-consistency check, and every keyed record from
        ``other`` replaces the one at the same key.

        Args:
            other: Module decoded from later files

        Returns:
            Diagnostics from the provider requirement merge
        """
        from .requirements import merge_requirements

        self.required_core.extend(other.required_core)
        diags = merge_requirements(
            self.provider_requirements,
            {name: req.model_copy(deep=True) for name, req in other.provider_requirements.items()},
        )
        self.provider_configs.update(other.provider_configs)
        self.resources.update(other.resources)
        self.data_sources.update(other.data_sources)
        self.module_calls.update(other.module_calls)
        return diags

    def summary(self) -> Dict[str, Any]:
        """Return a JSON-ready dictionary of the decoded facts."""
        data = self.model_dump(mode="json")
        for section in ("resources", "data_sources"):
            for record in data[section].values():
                record["provider"] = str(ProviderRef(**record["provider"]))
        return data
