"""Tests for naming scheme"""

from slice2ts.generators.naming import NamingScheme, escape


class TestNamingScheme:
    """Test suite for NamingScheme"""

    def test_escape_plain_identifier(self):
        """Test ordinary identifiers are unchanged"""
        assert NamingScheme.escape("Identity") == "Identity"

    def test_escape_reserved_word(self):
        """Test reserved words get an underscore prefix"""
        assert NamingScheme.escape("delete") == "_delete"
        assert escape("function") == "_function"

    def test_escape_is_case_sensitive(self):
        """Test only exact reserved words are escaped"""
        assert escape("Delete") == "Delete"

    def test_qualified_absolute(self):
        """Test absolute scoped names become dotted names"""
        assert NamingScheme.qualified("::Ice::Identity") == "Ice.Identity"

    def test_qualified_relative(self):
        """Test relative scoped names become dotted names"""
        assert NamingScheme.qualified("Bar::Baz") == "Bar.Baz"

    def test_qualified_escapes_segments(self):
        """Test each segment is escaped"""
        assert NamingScheme.qualified("::Foo::in::Bar") == "Foo._in.Bar"
