"""Dependency-aware module iteration.

Wraps the plain list walk of :class:`ModuleIterator` so that every module's
unserved dependencies are exposed before the module itself. Dependencies are
discovered lazily: a module's provider is only queried when the walk reaches
that module.

Cycles are broken, never reported. While resolving a chain, every visited
module is recorded in an ignore set and treated as satisfied if it shows up
again. For "A requires B, B requires A" with A reached first, B is served
before A.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from ..protocols import DependencyProvider
from ..protocols import Module
from .base import ModuleIterator

logger = logging.getLogger(__name__)


class DependencyModuleIterator(ModuleIterator):
    """Serve each module exactly once, after its unserved dependencies.

    ``current()`` may differ from the module at the list cursor: it is the
    deepest not-yet-served dependency reachable from that module, following
    the first eligible dependency at every level.

    Dependencies that are modules but not part of the list ("foreign"
    modules) are accepted and served in place like any other dependency.

    A pass starts with ``rewind()``; before that the iterator is invalid.

    Preconditions (not guarded): the module list and the dependency graph
    must not change during a pass, and one instance serves one pass at a time
    from a single thread.
    """

    def __init__(self, modules: Iterable[Module], provider: DependencyProvider) -> None:
        self.provider = provider
        self._served: dict[str, Module] = {}
        self._current: Module | None = None
        super().__init__(modules)

    @property
    def served_modules(self) -> dict[str, Module]:
        """Modules served so far in this pass, mapped by key, in serve order."""
        return dict(self._served)

    def is_served(self, key: str) -> bool:
        """Check whether a module key was already served in this pass."""
        return key in self._served

    def get_unserved_dependencies(self, module: Module) -> list[Module]:
        """Get a module's dependencies that still need serving.

        Entries that are not modules are dropped, as are modules already
        served in this pass. Provider order is preserved.

        Args:
            module: Module whose dependencies to inspect

        Returns:
            Unserved dependency modules, in provider order
        """
        unserved = []
        for dependency in self.provider.get_dependencies(module):
            if not isinstance(dependency, Module):
                logger.debug(f"[module:deps] {module.key}: ignoring non-module dependency {dependency!r}")
                continue
            if dependency.key in self._served:
                continue
            if self.get_module(dependency.key) is None:
                logger.debug(f"[module:deps] {module.key}: foreign dependency '{dependency.key}'")
            unserved.append(dependency)
        return unserved

    def resolve(self, module: Module) -> Module:
        """Find the module to serve in place of ``module``.

        Walks depth-first along the first unserved dependency at each level
        until reaching a module with no unserved dependency left. Modules
        already visited on the walk count as satisfied, so cycles end the walk
        instead of looping.

        Args:
            module: Unserved module reached by the list walk

        Returns:
            The deepest unserved dependency of ``module``, or ``module`` itself
        """
        ignore: set[str] = set()
        while True:
            ignore.add(module.key)
            pending = [dep for dep in self.get_unserved_dependencies(module) if dep.key not in ignore]
            if not pending:
                return module
            logger.debug(f"[module:resolve] {module.key} -> {pending[0].key}")
            module = pending[0]

    def rewind(self) -> None:
        """Start a new pass and prime the first module to serve."""
        self._served = {}
        self._current = None
        super().rewind()
        self.advance()

    def current(self) -> Module | None:
        """Get the module to serve at this step, or None when exhausted."""
        return self._current

    def advance(self) -> None:
        """Serve the current module and determine the next one."""
        if self._current is not None:
            self._served[self._current.key] = self._current
            logger.debug(f"[module:serve] {self._current.key}")

        # Skip list entries that were pulled forward as dependencies
        while super().valid() and self._raw_current().key in self._served:
            super().advance()

        raw = self._raw_current()
        self._current = None if raw is None else self.resolve(raw)

    def valid(self) -> bool:
        """Check whether there is a module to serve at this step."""
        return self._current is not None

    def _raw_current(self) -> Module | None:
        return self._module_at(self.index)


def resolve_load_order(modules: Iterable[Module], provider: DependencyProvider) -> list[Module]:
    """Run one full dependency-aware pass over ``modules``.

    Args:
        modules: Modules in priority order
        provider: Supplies each module's direct dependencies

    Returns:
        Every module (plus any foreign dependencies) exactly once, each after
        its unserved dependencies
    """
    return list(DependencyModuleIterator(modules, provider))
