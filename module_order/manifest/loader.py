"""Load module manifests from YAML and turn them into iterable modules.

Dependency keys that name no manifest entry are treated as foreign modules:
a stub module is created for the key on first use and served like any
other dependency.
"""

import logging
from dataclasses import dataclass
from pathlib import Path

import yaml
from pydantic import ValidationError

from ..iterator import DependencyModuleIterator
from ..providers import KeyedDependencyProvider
from .models import ModuleManifest

logger = logging.getLogger(__name__)


class ManifestError(Exception):
    """Manifest could not be read or failed validation."""


@dataclass(frozen=True)
class ManifestModule:
    """Module built from a manifest entry (or a foreign dependency key)."""

    key: str
    description: str | None = None
    foreign: bool = False


def load_manifest(path: Path) -> ModuleManifest:
    """Load and validate a manifest file.

    Args:
        path: Path to the YAML manifest

    Returns:
        Validated ModuleManifest

    Raises:
        ManifestError: File missing, unparsable, or invalid
    """
    if not path.exists():
        raise ManifestError(f"Manifest not found: {path}")

    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ManifestError(f"Invalid YAML in {path}: {e}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise ManifestError(f"Cannot read manifest {path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ManifestError(f"Manifest {path} must be a mapping with a 'modules' list")

    try:
        manifest = ModuleManifest.model_validate(data)
    except ValidationError as e:
        raise ManifestError(f"Invalid manifest {path}:\n{e}") from e

    logger.debug(f"Loaded manifest {path} ({len(manifest.modules)} modules)")
    return manifest


class ManifestGraph:
    """Modules and dependency provider derived from one manifest."""

    def __init__(self, manifest: ModuleManifest):
        self.manifest = manifest
        self._modules = {
            spec.key: ManifestModule(key=spec.key, description=spec.description) for spec in manifest.modules
        }
        self._foreign: dict[str, ManifestModule] = {}

    @classmethod
    def from_file(cls, path: Path) -> "ManifestGraph":
        return cls(load_manifest(path))

    @property
    def modules(self) -> list[ManifestModule]:
        """Manifest modules in declaration order."""
        return list(self._modules.values())

    @property
    def foreign_modules(self) -> list[ManifestModule]:
        """Stubs created so far for dependency keys missing from the manifest."""
        return list(self._foreign.values())

    def get(self, key: str) -> ManifestModule:
        """Get the module for a key, creating a foreign stub if needed."""
        if key in self._modules:
            return self._modules[key]
        if key not in self._foreign:
            logger.info(f"Dependency '{key}' is not declared in the manifest, treating as foreign module")
            self._foreign[key] = ManifestModule(key=key, foreign=True)
        return self._foreign[key]

    def create_provider(self) -> KeyedDependencyProvider:
        return KeyedDependencyProvider(self.manifest.dependency_graph(), self.get)

    def create_iterator(self) -> DependencyModuleIterator:
        return DependencyModuleIterator(self.modules, self.create_provider())

    def load_order(self) -> list[ManifestModule]:
        """Resolve the full load order, foreign modules included."""
        return list(self.create_iterator())
