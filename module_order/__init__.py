"""Lazy, dependency-aware load ordering for named modules."""

from .iterator import DependencyModuleIterator
from .iterator import ModuleIterator
from .iterator import resolve_load_order
from .protocols import DependencyProvider
from .protocols import Module
from .providers import AttributeDependencyProvider
from .providers import CallableDependencyProvider
from .providers import KeyedDependencyProvider

__all__ = [
    "Module",
    "DependencyProvider",
    "ModuleIterator",
    "DependencyModuleIterator",
    "resolve_load_order",
    "AttributeDependencyProvider",
    "KeyedDependencyProvider",
    "CallableDependencyProvider",
]
