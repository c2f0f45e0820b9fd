"""Identifier escaping for generated TypeScript

slice2js maps Slice identifiers that are JavaScript reserved words by
prefixing an underscore; typings must use the same names.
"""


class NamingScheme:
    """Maps Slice identifiers to TypeScript identifiers"""

    ESCAPE_PREFIX = "_"

    JS_KEYWORDS = {
        'await', 'break', 'case', 'catch', 'class', 'const', 'continue',
        'debugger', 'default', 'delete', 'do', 'else', 'enum', 'export',
        'extends', 'false', 'finally', 'for', 'function', 'if', 'implements',
        'import', 'in', 'instanceof', 'interface', 'let', 'new', 'null',
        'package', 'private', 'protected', 'public', 'return', 'static',
        'super', 'switch', 'this', 'throw', 'true', 'try', 'typeof', 'var',
        'void', 'while', 'with', 'yield',
    }

    @classmethod
    def escape(cls, name: str) -> str:
        """Escape a single identifier

        Args:
            name: Slice identifier

        Returns:
            ``_name`` for reserved words, ``name`` otherwise
        """
        if name in cls.JS_KEYWORDS:
            return f"{cls.ESCAPE_PREFIX}{name}"
        return name

    @classmethod
    def qualified(cls, type_name: str) -> str:
        """Convert a Slice scoped name to a dotted TypeScript name

        ``::Ice::Identity`` and ``Ice::Identity`` both give ``Ice.Identity``.
        """
        if type_name.startswith("::"):
            type_name = type_name[2:]
        return ".".join(cls.escape(part) for part in type_name.split("::"))


escape = NamingScheme.escape
