"""Plain forward iteration over an ordered list of modules."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from collections.abc import Iterator

from ..protocols import Module

logger = logging.getLogger(__name__)


class ModuleIterator:
    """Iterate modules strictly in list order, one per step.

    The iterator exposes the classic cursor protocol:

    - ``rewind()`` moves back to the first module
    - ``valid()`` tells whether a module is available at this step
    - ``current()`` / ``key()`` read the module at this step
    - ``advance()`` moves to the next step

    Iterating with ``for`` runs that protocol from a rewind until exhaustion.

    Instances are stateful and not reentrant: use one pass at a time from a
    single thread, and do not replace or mutate the module list mid-pass.
    """

    def __init__(self, modules: Iterable[Module] = ()) -> None:
        self._modules: list[Module] = []
        self._module_map: dict[str, Module] | None = None
        self._index = 0
        self.set_modules(modules)

    @property
    def modules(self) -> list[Module]:
        """Modules being iterated, in list order."""
        return list(self._modules)

    @property
    def index(self) -> int:
        """Zero-based cursor into the module list.

        A value equal to (or past) the list length means the list is exhausted.
        """
        return self._index

    def set_modules(self, modules: Iterable[Module]) -> None:
        """Replace the modules to iterate.

        Order is preserved and positions are re-indexed from zero. The key map
        is invalidated and rebuilt on its next read.

        Args:
            modules: Module instances, in load-order priority
        """
        self._modules = list(modules)
        self._clear_module_map()

    def get_module_map(self) -> dict[str, Module]:
        """Get the modules mapped by their keys.

        Returns:
            Dict of module key -> module
        """
        if self._module_map is None:
            self._module_map = self._create_module_map(self._modules)
        return self._module_map

    def get_module(self, key: str) -> Module | None:
        """Get a module by key.

        Args:
            key: Module key

        Returns:
            The module, or None if no module in the list has that key
        """
        return self.get_module_map().get(key)

    def rewind(self) -> None:
        """Move the cursor back to the first module."""
        self._index = 0

    def current(self) -> Module | None:
        """Get the module for the current step, or None when exhausted."""
        return self._module_at(self._index)

    def key(self) -> str | None:
        """Get the key of the current module, or None when exhausted."""
        current = self.current()
        return None if current is None else current.key

    def advance(self) -> None:
        """Move to the next step.

        Advancing past the end is allowed; the iterator simply stays invalid.
        """
        self._index += 1

    def valid(self) -> bool:
        """Check whether the current step has a module."""
        return self._module_at(self._index) is not None

    def __iter__(self) -> Iterator[Module]:
        self.rewind()
        while self.valid():
            current = self.current()
            # valid() guarantees a module here
            assert current is not None
            yield current
            self.advance()

    def _module_at(self, index: int) -> Module | None:
        if 0 <= index < len(self._modules):
            return self._modules[index]
        return None

    def _clear_module_map(self) -> None:
        self._module_map = None

    @staticmethod
    def _create_module_map(modules: Iterable[Module]) -> dict[str, Module]:
        """Map modules by key.

        Duplicate keys are not rejected: a later module shadows an earlier one
        with the same key.
        """
        module_map: dict[str, Module] = {}
        for module in modules:
            if module.key in module_map and module_map[module.key] is not module:
                logger.warning(f"Duplicate module key '{module.key}', later module shadows earlier one")
            module_map[module.key] = module
        return module_map

    def __repr__(self) -> str:
        return f"{type(self).__name__}(modules={len(self._modules)}, index={self._index})"
