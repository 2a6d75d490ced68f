"""Tests for manifest loading and ManifestGraph."""

from pathlib import Path

import pytest

from module_order.manifest import ManifestError
from module_order.manifest import ManifestGraph
from module_order.manifest import ManifestModule
from module_order.manifest import load_manifest
from module_order.manifest.models import ModuleManifest
from module_order.manifest.models import ModuleSpec


def write_manifest(path: Path, content: str) -> Path:
    path.write_text(content, encoding="utf-8")
    return path


class TestLoadManifest:
    def test_loads_valid_manifest(self, tmp_path):
        """Test a well-formed manifest is parsed in declaration order."""
        path = write_manifest(
            tmp_path / "modules.yaml",
            """
modules:
  - key: app
    depends_on: [db]
  - key: db
    description: Database
""",
        )

        manifest = load_manifest(path)

        assert [spec.key for spec in manifest.modules] == ["app", "db"]
        assert manifest.get_spec("db").description == "Database"

    def test_missing_file(self, tmp_path):
        """Test a missing manifest raises ManifestError."""
        with pytest.raises(ManifestError, match="Manifest not found"):
            load_manifest(tmp_path / "nope.yaml")

    def test_invalid_yaml(self, tmp_path):
        """Test YAML syntax errors are wrapped."""
        path = write_manifest(tmp_path / "bad.yaml", "modules: [unclosed\n")

        with pytest.raises(ManifestError, match="Invalid YAML"):
            load_manifest(path)

    def test_non_mapping_document(self, tmp_path):
        """Test a top-level list is rejected."""
        path = write_manifest(tmp_path / "list.yaml", "- key: a\n")

        with pytest.raises(ManifestError, match="must be a mapping"):
            load_manifest(path)

    def test_validation_error(self, tmp_path):
        """Test schema violations are wrapped."""
        path = write_manifest(tmp_path / "dup.yaml", "modules:\n  - key: a\n  - key: a\n")

        with pytest.raises(ManifestError, match="Invalid manifest"):
            load_manifest(path)

    def test_empty_file(self, tmp_path):
        """Test an empty file is an empty manifest."""
        path = write_manifest(tmp_path / "empty.yaml", "")

        assert load_manifest(path).modules == []

    def test_invalid_utf8(self, tmp_path):
        """Test undecodable bytes are wrapped instead of leaking UnicodeDecodeError."""
        path = tmp_path / "binary.yaml"
        path.write_bytes(b"modules:\n  - key: \xff\xfe\n")

        with pytest.raises(ManifestError, match="Cannot read manifest"):
            load_manifest(path)

    def test_directory_path(self, tmp_path):
        """Test a directory given as manifest is wrapped instead of leaking OSError."""
        path = tmp_path / "manifest_dir"
        path.mkdir()

        with pytest.raises(ManifestError, match="Cannot read manifest"):
            load_manifest(path)


class TestManifestGraph:
    def make_graph(self, *specs: ModuleSpec) -> ManifestGraph:
        return ManifestGraph(ModuleManifest(modules=list(specs)))

    def test_modules_in_declaration_order(self):
        """Test modules are built for every entry, in order."""
        graph = self.make_graph(ModuleSpec(key="a", description="A"), ModuleSpec(key="b"))

        assert graph.modules == [ManifestModule("a", "A"), ManifestModule("b")]

    def test_load_order(self):
        """Test the graph resolves dependencies before dependents."""
        graph = self.make_graph(
            ModuleSpec(key="M1", depends_on=["M3"]),
            ModuleSpec(key="M2"),
            ModuleSpec(key="M3"),
        )

        assert [m.key for m in graph.load_order()] == ["M3", "M1", "M2"]

    def test_cycle(self):
        """Test cyclic manifests still produce every module once."""
        graph = self.make_graph(
            ModuleSpec(key="M1", depends_on=["M2"]),
            ModuleSpec(key="M2", depends_on=["M1"]),
        )

        assert [m.key for m in graph.load_order()] == ["M2", "M1"]

    def test_undeclared_dependency_is_foreign(self):
        """Test an unknown dependency key becomes a foreign module served in place."""
        graph = self.make_graph(ModuleSpec(key="app", depends_on=["plugin"]), ModuleSpec(key="db"))

        load_order = graph.load_order()

        assert [m.key for m in load_order] == ["plugin", "app", "db"]
        assert load_order[0].foreign is True
        assert graph.foreign_modules == [ManifestModule("plugin", foreign=True)]

    def test_foreign_stub_is_cached(self):
        """Test the same stub instance is returned for a foreign key."""
        graph = self.make_graph(ModuleSpec(key="a"))

        assert graph.get("x") is graph.get("x")
        assert graph.get("a").foreign is False

    def test_create_iterator_supports_manual_pass(self):
        """Test the iterator from a graph follows the cursor protocol."""
        graph = self.make_graph(ModuleSpec(key="b", depends_on=["a"]), ModuleSpec(key="a"))
        iterator = graph.create_iterator()

        iterator.rewind()

        assert iterator.key() == "a"

    def test_from_file(self, tmp_path):
        """Test building a graph straight from a manifest file."""
        path = write_manifest(tmp_path / "m.yaml", "modules:\n  - key: x\n    depends_on: [y]\n  - key: y\n")

        graph = ManifestGraph.from_file(path)

        assert [m.key for m in graph.load_order()] == ["y", "x"]
