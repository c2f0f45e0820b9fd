"""Tests for import generation"""

from pathlib import Path

import pytest
from slice2ts.core.declarations import ModuleDeclaration, SliceSource
from slice2ts.generators.imports import generate_imports, is_built_in, relative_prefix
from slice2ts.module_system.loader import LoadedSlice


def loaded(modules=(), includes=()):
    source = SliceSource(
        modules=[ModuleDeclaration(name=name) for name in modules],
        includes=list(includes),
    )
    return LoadedSlice(root_dir=Path("."), contents="", parsed=source)


@pytest.fixture
def slices():
    return {
        "Foo/Main": loaded(["Foo"], [
            "Ice/Identity",
            "Glacier2/Session",
            "Foo/Types",
            "Foo/Empty",
            "Bar/Other",
        ]),
        "Ice/Identity": loaded(["Ice"]),
        "Glacier2/Session": loaded(["Glacier2", "Ice"]),
        "Foo/Types": loaded(["Foo"]),
        "Foo/Empty": loaded(["Foo"]),
        "Bar/Other": loaded(["Bar", "Baz"]),
        "Top": loaded(["Top"], ["Bar/Other"]),
    }


class TestImportHelpers:
    """Test suite for import helpers"""

    def test_is_built_in(self):
        """Test built-in slice folders"""
        assert is_built_in("Ice/Identity")
        assert is_built_in("IceStorm/IceStorm")
        assert not is_built_in("Foo/Ice")

    def test_relative_prefix(self):
        """Test one parent step per directory level"""
        assert relative_prefix("Top") == "./"
        assert relative_prefix("A/B") == "../"
        assert relative_prefix("A/B/C") == "../../"


class TestGenerateImports:
    """Test suite for generate_imports"""

    def test_default_imports(self, slices):
        """Test built-in namespaces come from the ice package"""
        assert generate_imports("Foo/Main", slices) == (
            'import { Ice, Glacier2 } from "ice";\n'
            'import { Foo } from "../Foo/Types";\n'
            'import "../Foo/Empty";\n'
            'import { Bar, Baz } from "../Bar/Other";\n'
        )

    def test_ice_imports(self, slices):
        """Test built-in slices imported from their own files"""
        assert generate_imports("Foo/Main", slices, ice_imports=True) == (
            'import { Ice } from "ice";\n'
            'import "../Ice/Identity";\n'
            'import { Glacier2 } from "../Glacier2/Session";\n'
            'import { Foo } from "../Foo/Types";\n'
            'import "../Foo/Empty";\n'
            'import { Bar, Baz } from "../Bar/Other";\n'
        )

    def test_top_level_slice(self, slices):
        """Test a slice at the root imports without parent steps"""
        assert generate_imports("Top", slices) == (
            'import { Ice } from "ice";\n'
            'import { Bar, Baz } from "./Bar/Other";\n'
        )
