"""Protocols for the collaborators a module iterator works with.

The iterators never construct or mutate modules. They only read a module's
key and ask a dependency provider for its direct dependencies.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol
from typing import runtime_checkable


@runtime_checkable
class Module(Protocol):
    """A named unit that can be loaded.

    Keys must be stable and unique within one module list; they are used as
    mapping keys for lookup, served tracking and cycle breaking.
    """

    @property
    def key(self) -> str:
        """Unique module key."""
        ...


@runtime_checkable
class DependencyProvider(Protocol):
    """Strategy that supplies the direct dependencies of a module.

    Dependencies are returned in the order they should be considered. Entries
    that are not modules (e.g. ``None``) are ignored by the iterator.
    """

    def get_dependencies(self, module: Module) -> Sequence[Module | None]:
        """Get the direct dependencies of a module."""
        ...
