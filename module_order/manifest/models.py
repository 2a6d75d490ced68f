"""Pydantic schemas for module manifests."""

from pydantic import BaseModel
from pydantic import Field
from pydantic import model_validator


class ModuleSpec(BaseModel):
    """A single module entry in a manifest."""

    key: str = Field(..., min_length=1, description="Unique module key")
    depends_on: list[str] = Field(default_factory=list, description="Keys of direct dependencies, in priority order")
    description: str | None = Field(None, description="Human-readable description")


class ModuleManifest(BaseModel):
    """Ordered list of modules and their declared dependencies."""

    modules: list[ModuleSpec] = Field(default_factory=list, description="Modules in load priority order")

    @model_validator(mode="after")
    def _check_unique_keys(self) -> "ModuleManifest":
        seen: set[str] = set()
        duplicates: list[str] = []
        for spec in self.modules:
            if spec.key in seen and spec.key not in duplicates:
                duplicates.append(spec.key)
            seen.add(spec.key)
        if duplicates:
            raise ValueError(f"Duplicate module keys: {', '.join(duplicates)}")
        return self

    def get_spec(self, key: str) -> ModuleSpec | None:
        """Get the manifest entry for a key, or None."""
        return next((spec for spec in self.modules if spec.key == key), None)

    def dependency_graph(self) -> dict[str, list[str]]:
        """Get module key -> declared dependency keys."""
        return {spec.key: list(spec.depends_on) for spec in self.modules}
