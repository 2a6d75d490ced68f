"""Dependency provider implementations.

Concrete implementations of the DependencyProvider protocol:
- AttributeDependencyProvider: dependencies stored on the module itself
- KeyedDependencyProvider: dependency keys per module key, resolved to modules
- CallableDependencyProvider: wraps a plain function
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from collections.abc import Mapping
from collections.abc import Sequence

from .protocols import Module

logger = logging.getLogger(__name__)


class AttributeDependencyProvider:
    """Read dependencies from an attribute of each module.

    A missing attribute or a None value means no dependencies.
    """

    def __init__(self, attribute: str = "dependencies"):
        self.attribute = attribute

    def get_dependencies(self, module: Module) -> list[Module | None]:
        return list(getattr(module, self.attribute, None) or ())

    def __repr__(self) -> str:
        return f"AttributeDependencyProvider({self.attribute!r})"


class KeyedDependencyProvider:
    """Look up dependency keys by module key and resolve them to modules.

    Keys that ``resolve_key`` cannot map come back as None, which the
    iterator ignores.
    """

    def __init__(
        self,
        graph: Mapping[str, Sequence[str]],
        resolve_key: Callable[[str], Module | None],
    ):
        """Initialize provider.

        Args:
            graph: Module key -> ordered dependency keys
            resolve_key: Maps a dependency key to a module instance (or None)
        """
        self.graph = graph
        self.resolve_key = resolve_key

    def get_dependencies(self, module: Module) -> list[Module | None]:
        dependencies = []
        for key in self.graph.get(module.key, ()):
            dependency = self.resolve_key(key)
            if dependency is None:
                logger.debug(f"[module:deps] {module.key}: no module for dependency key '{key}'")
            dependencies.append(dependency)
        return dependencies

    def __repr__(self) -> str:
        return f"KeyedDependencyProvider(modules={len(self.graph)})"


class CallableDependencyProvider:
    """Adapt a function ``module -> dependencies`` to the provider protocol."""

    def __init__(self, func: Callable[[Module], Sequence[Module | None] | None]):
        self.func = func

    def get_dependencies(self, module: Module) -> list[Module | None]:
        return list(self.func(module) or ())

    def __repr__(self) -> str:
        return f"CallableDependencyProvider({getattr(self.func, '__name__', self.func)!r})"
