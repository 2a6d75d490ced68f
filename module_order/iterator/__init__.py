"""Module iterators: plain list order and dependency-aware load order."""

from .base import ModuleIterator
from .dependency import DependencyModuleIterator
from .dependency import resolve_load_order

__all__ = [
    "ModuleIterator",
    "DependencyModuleIterator",
    "resolve_load_order",
]
