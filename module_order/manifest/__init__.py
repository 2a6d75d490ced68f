"""YAML module manifests."""

from .loader import ManifestError
from .loader import ManifestGraph
from .loader import ManifestModule
from .loader import load_manifest
from .models import ModuleManifest
from .models import ModuleSpec

__all__ = [
    "ManifestError",
    "ManifestGraph",
    "ManifestModule",
    "ModuleManifest",
    "ModuleSpec",
    "load_manifest",
]
