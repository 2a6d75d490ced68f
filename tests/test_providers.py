"""Tests for dependency provider implementations."""

from dataclasses import dataclass

from module_order.protocols import DependencyProvider
from module_order.protocols import Module
from module_order.providers import AttributeDependencyProvider
from module_order.providers import CallableDependencyProvider
from module_order.providers import KeyedDependencyProvider


@dataclass(eq=False)
class Mod:
    key: str


class Plain:
    """Object with custom dependency attribute."""

    def __init__(self, key, requires=None):
        self.key = key
        self.requires = requires


def test_providers_satisfy_protocol():
    """Test every provider is recognized as a DependencyProvider."""
    providers = [
        AttributeDependencyProvider(),
        KeyedDependencyProvider({}, lambda key: None),
        CallableDependencyProvider(lambda module: []),
    ]

    assert all(isinstance(p, DependencyProvider) for p in providers)


def test_module_protocol_requires_key():
    """Test Module instance check looks for a key attribute."""
    assert isinstance(Mod("a"), Module)
    assert not isinstance(None, Module)
    assert not isinstance("a", Module)


class TestAttributeDependencyProvider:
    def test_reads_custom_attribute(self):
        """Test dependencies are read from the configured attribute."""
        dep = Plain("dep")
        provider = AttributeDependencyProvider("requires")

        assert provider.get_dependencies(Plain("top", [dep])) == [dep]

    def test_missing_or_none_attribute_means_no_dependencies(self):
        """Test modules without the attribute have no dependencies."""
        provider = AttributeDependencyProvider("requires")

        assert provider.get_dependencies(Mod("a")) == []
        assert provider.get_dependencies(Plain("b", None)) == []

    def test_returns_new_list(self):
        """Test callers can't mutate the module's own dependency list."""
        deps = [Plain("x")]
        provider = AttributeDependencyProvider("requires")

        provider.get_dependencies(Plain("top", deps)).clear()

        assert len(deps) == 1


class TestKeyedDependencyProvider:
    def test_resolves_keys_in_order(self):
        """Test dependency keys map to modules, preserving order."""
        modules = {key: Mod(key) for key in ("a", "b", "c")}
        provider = KeyedDependencyProvider({"a": ["c", "b"]}, modules.get)

        assert provider.get_dependencies(modules["a"]) == [modules["c"], modules["b"]]

    def test_unknown_module_has_no_dependencies(self):
        """Test modules missing from the graph have no dependencies."""
        provider = KeyedDependencyProvider({}, lambda key: Mod(key))

        assert provider.get_dependencies(Mod("a")) == []

    def test_unresolvable_keys_become_none(self):
        """Test keys the resolver can't map are passed through as None."""
        b = Mod("b")
        provider = KeyedDependencyProvider({"a": ["missing", "b"]}, {"b": b}.get)

        assert provider.get_dependencies(Mod("a")) == [None, b]


class TestCallableDependencyProvider:
    def test_delegates_to_function(self):
        """Test the wrapped function receives the module."""
        dep = Mod("dep")
        provider = CallableDependencyProvider(lambda module: [dep] if module.key == "top" else [])

        assert provider.get_dependencies(Mod("top")) == [dep]
        assert provider.get_dependencies(Mod("other")) == []

    def test_none_result_means_no_dependencies(self):
        """Test a function returning None is treated as no dependencies."""
        provider = CallableDependencyProvider(lambda module: None)

        assert provider.get_dependencies(Mod("a")) == []
