"""Tests for top-level namespace bookkeeping"""

from pathlib import Path

from slice2ts.core.declarations import ModuleDeclaration, SliceSource
from slice2ts.module_system.loader import LoadedSlice
from slice2ts.module_system.namespaces import (
    generate_index_js,
    generate_index_typings,
    generate_namespace,
    get_namespace_file_paths,
    get_top_level_modules,
)


def loaded(*module_names):
    source = SliceSource(modules=[ModuleDeclaration(name=name) for name in module_names])
    return LoadedSlice(root_dir=Path("."), contents="", parsed=source)


class TestTopLevelModules:
    """Test suite for get_top_level_modules"""

    def test_usages_in_input_order(self):
        """Test each module lists its declaring input slices"""
        slices = {
            "A/B/C": loaded("Foo"),
            "A/D/E": loaded("Foo", "Bar"),
            "Ice/Identity": loaded("Ice"),
        }
        usages = get_top_level_modules(["A/B/C", "A/D/E"], slices)
        assert usages == {"Foo": ["A/B/C", "A/D/E"], "Bar": ["A/D/E"]}

    def test_module_reopened_in_one_slice(self):
        """Test a slice is listed once per module"""
        usages = get_top_level_modules(["X"], {"X": loaded("Foo", "Foo")})
        assert usages == {"Foo": ["X"]}


class TestNamespaceFilePaths:
    """Test suite for get_namespace_file_paths"""

    def test_common_ancestor_dir(self):
        """Test namespace file is placed in the common ancestor dir"""
        paths = get_namespace_file_paths({"Foo": ["A/B/C", "A/D/E"]})
        assert paths == {"Foo": "A/Foo.ns.d.ts"}

    def test_single_slice(self):
        """Test a single slice keeps its own dir"""
        assert get_namespace_file_paths({"Foo": ["A/B/C"]}) == {"Foo": "A/B/Foo.ns.d.ts"}

    def test_root_level(self):
        """Test slices without common dir use the output root"""
        paths = get_namespace_file_paths({"Foo": ["A/C", "B/D"], "Bar": ["Top"]})
        assert paths == {"Foo": "Foo.ns.d.ts", "Bar": "Bar.ns.d.ts"}


class TestNamespaceFiles:
    """Test suite for namespace and index file contents"""

    def test_generate_namespace(self):
        """Test namespace file declares an empty namespace"""
        assert generate_namespace("Foo") == "export namespace Foo {}\n"

    def test_generate_index_js(self):
        """Test index re-exports from the first slice"""
        assert generate_index_js("Foo", ["A/B", "A/C"]) == (
            "exports.Foo = require('./A/B').Foo;\n"
            "require('./A/C');\n"
        )

    def test_generate_index_typings(self):
        """Test index typings mirror the index module"""
        assert generate_index_typings("Foo", ["A/B", "A/C"]) == (
            "export {Foo} from './A/B';\n"
            "import './A/C';\n"
        )
