"""Tests for Slice parser"""

import pytest
from slice2ts.core.declarations import (
    ClassDeclaration,
    ClassForwardDeclaration,
    ConstDeclaration,
    DictionaryDeclaration,
    EnumDeclaration,
    ExceptionDeclaration,
    InterfaceDeclaration,
    ModuleDeclaration,
    SequenceDeclaration,
    StructDeclaration,
)
from slice2ts.core.errors import SliceSyntaxError
from slice2ts.parser import SliceParser, parse_includes, parse_slice
from slice2ts.parser.slice_parser import doc_text


def only_module(text):
    source = parse_slice(text)
    assert len(source.modules) == 1
    return source.modules[0]


class TestSliceParser:
    """Test suite for SliceParser"""

    def test_empty_module(self):
        """Test parsing an empty module"""
        module = only_module("module Foo {};")
        assert isinstance(module, ModuleDeclaration)
        assert module.name == "Foo"
        assert module.content == []

    def test_nested_module_shorthand(self):
        """Test `module A::B` expands to nested modules"""
        module = only_module("module A::B { struct S { int x; }; };")
        assert module.name == "A"
        inner = module.content[0]
        assert isinstance(inner, ModuleDeclaration)
        assert inner.name == "B"
        assert inner.content[0].name == "S"

    def test_struct(self):
        """Test parsing a struct with fields and defaults"""
        module = only_module("""
module Foo
{
    struct Point
    {
        int x = 5;
        string label;
        Ice::Identity id;
    };
};
""")
        struct = module.content[0]
        assert isinstance(struct, StructDeclaration)
        assert [f.name for f in struct.fields] == ["x", "label", "id"]
        assert [f.data_type for f in struct.fields] == ["int", "string", "Ice::Identity"]
        assert struct.fields[0].default_value == "5"
        assert struct.fields[1].default_value is None

    def test_class(self):
        """Test parsing a class with base, compact id and optional field"""
        module = only_module("""
module Foo
{
    class Shape {};
    class Circle(3) extends Shape
    {
        optional(1) double radius;
        ::Foo::Shape* owner;
    };
};
""")
        circle = module.content[1]
        assert isinstance(circle, ClassDeclaration)
        assert circle.extends == "Shape"
        assert circle.compact_id == 3
        assert circle.local is False
        assert circle.fields[0].optional == 1
        assert circle.fields[1].optional is None
        assert circle.fields[1].data_type == "::Foo::Shape*"

    def test_class_with_two_bases(self):
        """Test a class may only extend one class"""
        with pytest.raises(SliceSyntaxError):
            parse_slice("module Foo { class A {}; class B {}; class C extends A, B {}; };")

    def test_local_class_with_operations(self):
        """Test local class members mix fields and operations"""
        module = only_module("""
module Foo
{
    local class Logger
    {
        string prefix;
        void print(string message);
    };
};
""")
        logger = module.content[0]
        assert logger.local is True
        assert [f.name for f in logger.fields] == ["prefix"]
        assert [o.name for o in logger.operations] == ["print"]

    def test_forward_declarations(self):
        """Test class forward declarations"""
        module = only_module("module Foo { class Node; local class Other; };")
        assert isinstance(module.content[0], ClassForwardDeclaration)
        assert module.content[1].local is True

    def test_interface(self):
        """Test parsing interface operations and parameters"""
        module = only_module("""
module Foo
{
    exception Failure {};
    interface Base {};
    interface Service extends Base
    {
        idempotent optional(1) string find(int id, optional(2) string hint, out int count, out Base* next)
            throws Failure;
        void ping();
    };
};
""")
        service = module.content[2]
        assert isinstance(service, InterfaceDeclaration)
        assert service.extends == ["Base"]

        find, ping = service.content
        assert find.idempotent is True
        assert find.return_type == "string"
        assert find.return_optional == 1
        assert find.throws == ["Failure"]
        assert [p.name for p in find.parameters] == ["id", "hint", "count", "next"]
        assert [p.out for p in find.parameters] == [False, False, True, True]
        assert find.parameters[1].optional == 2
        assert find.parameters[3].data_type == "Base*"

        assert ping.idempotent is False
        assert ping.parameters == []

    def test_exception(self):
        """Test parsing exceptions"""
        module = only_module("""
module Foo
{
    exception Base { string reason; };
    local exception Derived extends Base { int code; };
};
""")
        derived = module.content[1]
        assert isinstance(derived, ExceptionDeclaration)
        assert derived.local is True
        assert derived.extends == "Base"
        assert [f.name for f in derived.fields] == ["code"]

    def test_enum(self):
        """Test parsing enumerators with values and trailing comma"""
        module = only_module("module Foo { enum Color { Red, Green = 4, Blue, }; };")
        color = module.content[0]
        assert isinstance(color, EnumDeclaration)
        assert [e.name for e in color.enums] == ["Red", "Green", "Blue"]
        assert color.enums[1].value == "4"

    def test_sequence_and_dictionary(self):
        """Test parsing sequences and dictionaries with type metadata"""
        module = only_module("""
module Foo
{
    sequence<["ts:type:Buffer"] byte> Bytes;
    dictionary<string, Ice::Identity> ById;
};
""")
        sequence, dictionary = module.content
        assert isinstance(sequence, SequenceDeclaration)
        assert sequence.data_type == "byte"
        assert sequence.data_type_metadata == ["ts:type:Buffer"]

        assert isinstance(dictionary, DictionaryDeclaration)
        assert dictionary.key_type == "string"
        assert dictionary.value_type == "Ice::Identity"

    def test_const(self):
        """Test parsing constants"""
        module = only_module("""
module Foo
{
    const string Name = "foo";
    const long Big = -12;
};
""")
        name, big = module.content
        assert isinstance(name, ConstDeclaration)
        assert name.data_type == "string"
        assert name.value == '"foo"'
        assert big.value == "-12"

    def test_metadata(self):
        """Test file and local metadata"""
        source = parse_slice("""
[["js:es6-module"]]
["js:module:foo"]
module Foo
{
    ["deprecate:use Bar", "ts:generic:T"] struct Old { int x; };
};
""")
        assert source.metadata == ["js:es6-module"]
        module = source.modules[0]
        assert module.metadata == ["js:module:foo"]
        assert module.content[0].metadata == ["deprecate:use Bar", "ts:generic:T"]

    def test_escaped_identifier(self):
        """Test backslash-escaped keywords are identifiers"""
        module = only_module("module Foo { struct \\module { int \\class; }; };")
        struct = module.content[0]
        assert struct.name == "module"
        assert struct.fields[0].name == "class"

    def test_includes_and_preprocessor(self):
        """Test include directives are collected and skipped by the grammar"""
        source = parse_slice("""
#pragma once
#include <Ice/Identity.ice>
#include "Foo/Bar.ice"

module Foo {};
""")
        assert source.includes == ["Ice/Identity", "Foo/Bar"]
        assert source.modules[0].name == "Foo"

    def test_doc_comments(self):
        """Test doc comments attach to the following declaration"""
        module = only_module("""
/** The module. */
module Foo
{
    /**
     * A point.
     * Second line.
     */
    struct Point
    {
        /** X coordinate */
        int x;
        // not a doc
        int y;
    };

    /* plain */
    struct Other {};
};
""")
        assert module.doc == "The module."
        point, other = module.content
        assert point.doc == "A point.\nSecond line."
        assert point.fields[0].doc == "X coordinate"
        assert point.fields[1].doc is None
        assert other.doc is None

    def test_syntax_error(self):
        """Test invalid Slice raises SliceSyntaxError with location"""
        with pytest.raises(SliceSyntaxError) as exc_info:
            parse_slice("module Foo {\n  struct ;\n};")
        assert exc_info.value.line == 2

    def test_parser_is_reusable(self):
        """Test one parser instance parses several files"""
        parser = SliceParser()
        first = parser.parse("/** a */ module A {};")
        second = parser.parse("module B {};")
        assert first.modules[0].doc == "a"
        assert second.modules[0].doc is None


class TestParseHelpers:
    """Test suite for parser helpers"""

    def test_parse_includes_without_extension(self):
        """Test include names drop the .ice extension"""
        assert parse_includes('#include <Glacier2/Session.ice>\n') == ["Glacier2/Session"]

    def test_doc_text_strips_decorations(self):
        """Test comment markers are stripped"""
        assert doc_text("/**\n * One\n *\n * Two\n */") == "One\n\nTwo"
