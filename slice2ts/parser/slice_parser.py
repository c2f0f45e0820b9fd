"""Slice parser built on lark

Turns Slice source text into a SliceSource declaration tree. Doc comments
are collected by the lexer and attached to the declaration that directly
follows them.
"""

import re
from functools import lru_cache
from pathlib import Path
from typing import List, Optional

from lark import Lark, Token, Tree
from lark.exceptions import UnexpectedInput

from slice2ts.core.declarations import (
    ClassDeclaration,
    ClassForwardDeclaration,
    ConstDeclaration,
    DictionaryDeclaration,
    EnumDeclaration,
    EnumElement,
    ExceptionDeclaration,
    FieldDeclaration,
    InterfaceDeclaration,
    InterfaceForwardDeclaration,
    ModuleDeclaration,
    OperationDeclaration,
    ParameterDeclaration,
    SequenceDeclaration,
    SliceSource,
    StructDeclaration,
)
from slice2ts.core.errors import SliceSyntaxError

_GRAMMAR_PATH = Path(__file__).with_name("grammar.lark")

_INCLUDE_RE = re.compile(r'^[ \t]*#[ \t]*include[ \t]*[<"]([^>"]+)[>"]', re.MULTILINE)
_ICE_EXTENSION_RE = re.compile(r'\.ice$')


class SliceParser:
    """Parses Slice source text

    One instance holds one compiled grammar; reuse it across files.
    Not safe for concurrent use.
    """

    def __init__(self) -> None:
        self._comments: List[Token] = []
        self._text = ""
        self._lark = Lark(
            _GRAMMAR_PATH.read_text(encoding="utf-8"),
            parser="lalr",
            start="start",
            propagate_positions=True,
            maybe_placeholders=False,
            lexer_callbacks={"COMMENT": self._comments.append},
        )

    def parse(self, text: str) -> SliceSource:
        """Parse Slice source

        Args:
            text: Contents of a ``.ice`` file

        Returns:
            Parsed declaration tree

        Raises:
            SliceSyntaxError: If the text is not valid Slice
        """
        self._comments.clear()
        self._text = text

        try:
            tree = self._lark.parse(text)
        except UnexpectedInput as e:
            line = e.line if e.line > 0 else None
            column = e.column if e.column > 0 else None
            raise SliceSyntaxError(str(e).strip().splitlines()[0], line, column) from e

        try:
            return self._build_source(tree)
        finally:
            self._comments.clear()
            self._text = ""

    def _build_source(self, tree: Tree) -> SliceSource:
        source = SliceSource(includes=parse_includes(self._text))
        for child in tree.children:
            kind = _name(child)
            if kind == "file_metadata":
                source.metadata.extend(_strings(child))
            elif kind == "module_def":
                source.modules.append(self._build_module(child))
        return source

    def _build_module(self, tree: Tree) -> ModuleDeclaration:
        name_node = _child(tree, "module_name")
        names = [_ident(token) for token in name_node.children if token.type == "IDENT"]

        innermost = ModuleDeclaration(name=names[-1])
        for child in tree.children:
            if isinstance(child, Tree) and child.data not in ("metadata", "module_name"):
                innermost.content.append(self._build_definition(child))

        # `module A::B` is shorthand for nested modules
        declaration = innermost
        for name in reversed(names[:-1]):
            declaration = ModuleDeclaration(name=name, content=[declaration])

        declaration.doc = self._doc(tree)
        declaration.metadata = _metadata(tree)
        return declaration

    def _build_definition(self, tree: Tree):
        kind = _name(tree)
        if kind == "module_def":
            return self._build_module(tree)
        if kind == "class_def":
            return self._build_class(tree)
        if kind == "class_forward":
            return ClassForwardDeclaration(
                name=_first_ident(tree),
                local=_has(tree, "LOCAL"),
                metadata=_metadata(tree),
            )
        if kind == "interface_def":
            return self._build_interface(tree)
        if kind == "interface_forward":
            return InterfaceForwardDeclaration(
                name=_first_ident(tree),
                local=_has(tree, "LOCAL"),
                metadata=_metadata(tree),
            )
        if kind == "exception_def":
            return self._build_exception(tree)
        if kind == "struct_def":
            return StructDeclaration(
                name=_first_ident(tree),
                local=_has(tree, "LOCAL"),
                fields=[self._build_field(f) for f in _children(tree, "field_def")],
                doc=self._doc(tree),
                metadata=_metadata(tree),
            )
        if kind == "enum_def":
            return EnumDeclaration(
                name=_first_ident(tree),
                local=_has(tree, "LOCAL"),
                enums=[self._build_enumerator(e) for e in _children(tree, "enumerator")],
                doc=self._doc(tree),
                metadata=_metadata(tree),
            )
        if kind == "sequence_def":
            element = _child(tree, "typed_element")
            return SequenceDeclaration(
                name=_first_ident(tree),
                data_type=_type_name(_child(element, "type")),
                local=_has(tree, "LOCAL"),
                data_type_metadata=_metadata(element),
                doc=self._doc(tree),
                metadata=_metadata(tree),
            )
        if kind == "dictionary_def":
            key, value = _children(tree, "typed_element")
            return DictionaryDeclaration(
                name=_first_ident(tree),
                key_type=_type_name(_child(key, "type")),
                value_type=_type_name(_child(value, "type")),
                local=_has(tree, "LOCAL"),
                key_type_metadata=_metadata(key),
                value_type_metadata=_metadata(value),
                doc=self._doc(tree),
                metadata=_metadata(tree),
            )
        if kind == "const_def":
            element = _child(tree, "typed_element")
            return ConstDeclaration(
                name=_first_ident(tree),
                data_type=_type_name(_child(element, "type")),
                value=_const_value(_child(tree, "const_value")),
                data_type_metadata=_metadata(element),
                doc=self._doc(tree),
                metadata=_metadata(tree),
            )
        raise ValueError(f"unexpected definition: {kind}")

    def _build_class(self, tree: Tree) -> ClassDeclaration:
        compact_id = _optional_child(tree, "compact_id")
        content = []
        for child in tree.children:
            if _name(child) == "field_def":
                content.append(self._build_field(child))
            elif _name(child) == "operation_def":
                content.append(self._build_operation(child))

        bases = _scoped_names(_optional_child(tree, "extends_clause"))
        if len(bases) > 1:
            raise SliceSyntaxError(
                f"class {_first_ident(tree)} can only extend one class",
                tree.meta.line,
                tree.meta.column,
            )

        return ClassDeclaration(
            name=_first_ident(tree),
            local=_has(tree, "LOCAL"),
            extends=bases[0] if bases else None,
            content=content,
            compact_id=int(compact_id.children[0].value) if compact_id is not None else None,
            doc=self._doc(tree),
            metadata=_metadata(tree),
        )

    def _build_interface(self, tree: Tree) -> InterfaceDeclaration:
        return InterfaceDeclaration(
            name=_first_ident(tree),
            local=_has(tree, "LOCAL"),
            extends=_scoped_names(_optional_child(tree, "extends_clause")),
            content=[self._build_operation(op) for op in _children(tree, "operation_def")],
            doc=self._doc(tree),
            metadata=_metadata(tree),
        )

    def _build_exception(self, tree: Tree) -> ExceptionDeclaration:
        bases = _scoped_names(_optional_child(tree, "extends_clause"))
        if len(bases) > 1:
            raise SliceSyntaxError(
                f"exception {_first_ident(tree)} can only extend one exception",
                tree.meta.line,
                tree.meta.column,
            )

        return ExceptionDeclaration(
            name=_first_ident(tree),
            local=_has(tree, "LOCAL"),
            extends=bases[0] if bases else None,
            content=[self._build_field(f) for f in _children(tree, "field_def")],
            doc=self._doc(tree),
            metadata=_metadata(tree),
        )

    def _build_field(self, tree: Tree) -> FieldDeclaration:
        default = _optional_child(tree, "const_value")
        return FieldDeclaration(
            name=_first_ident(tree),
            data_type=_type_name(_child(tree, "type")),
            optional=_optional_tag(tree),
            default_value=_const_value(default) if default is not None else None,
            doc=self._doc(tree),
            metadata=_metadata(tree),
        )

    def _build_operation(self, tree: Tree) -> OperationDeclaration:
        return OperationDeclaration(
            name=_first_ident(tree),
            return_type=_type_name(_child(tree, "type")),
            parameters=[_build_parameter(p) for p in _children(tree, "parameter")],
            return_optional=_optional_tag(tree),
            throws=_scoped_names(_optional_child(tree, "throws_clause")),
            idempotent=_has(tree, "IDEMPOTENT"),
            doc=self._doc(tree),
            metadata=_metadata(tree),
        )

    def _build_enumerator(self, tree: Tree) -> EnumElement:
        value = _optional_child(tree, "const_value")
        return EnumElement(
            name=_first_ident(tree),
            value=_const_value(value) if value is not None else None,
            doc=self._doc(tree),
            metadata=_metadata(tree),
        )

    def _doc(self, tree: Tree) -> Optional[str]:
        """Doc comment directly preceding a declaration, if any"""
        if tree.meta.empty:
            return None

        start = tree.meta.start_pos
        preceding = None
        for comment in self._comments:
            if comment.end_pos <= start:
                preceding = comment
            else:
                break

        if preceding is None or not preceding.value.startswith("/**"):
            return None
        if preceding.value == "/**/":
            return None
        if self._text[preceding.end_pos:start].strip():
            return None

        return doc_text(preceding.value)


def _build_parameter(tree: Tree) -> ParameterDeclaration:
    return ParameterDeclaration(
        name=_last_ident(tree),
        data_type=_type_name(_child(tree, "type")),
        out=_has(tree, "OUT"),
        optional=_optional_tag(tree),
        metadata=_metadata(tree),
    )


def doc_text(comment: str) -> str:
    """Strip comment markers from a ``/** ... */`` block

    Leading ``*`` decorations are removed from every line; surrounding
    blank lines are dropped.
    """
    body = comment[3:-2]
    lines = []
    for line in body.split("\n"):
        line = line.strip()
        if line.startswith("*"):
            line = line[1:]
            if line.startswith(" "):
                line = line[1:]
        lines.append(line.rstrip())

    while lines and not lines[0]:
        lines.pop(0)
    while lines and not lines[-1]:
        lines.pop()

    return "\n".join(lines)


def parse_includes(text: str) -> List[str]:
    """Module-relative names of ``#include`` directives, without ``.ice``"""
    return [_ICE_EXTENSION_RE.sub("", match.group(1)) for match in _INCLUDE_RE.finditer(text)]


@lru_cache(maxsize=None)
def _default_parser() -> SliceParser:
    return SliceParser()


def parse_slice(text: str) -> SliceSource:
    """Parse Slice source with a shared parser instance"""
    return _default_parser().parse(text)


def _name(node) -> Optional[str]:
    return node.data if isinstance(node, Tree) else None


def _children(tree: Tree, kind: str) -> List[Tree]:
    return [child for child in tree.children if _name(child) == kind]


def _optional_child(tree: Optional[Tree], kind: str) -> Optional[Tree]:
    if tree is None:
        return None
    return next((child for child in tree.children if _name(child) == kind), None)


def _child(tree: Tree, kind: str) -> Tree:
    child = _optional_child(tree, kind)
    if child is None:
        raise ValueError(f"expected {kind} in {tree.data}")
    return child


def _has(tree: Tree, token_type: str) -> bool:
    return any(isinstance(child, Token) and child.type == token_type for child in tree.children)


def _ident(token: Token) -> str:
    return token.value[1:] if token.value.startswith("\\") else token.value


def _first_ident(tree: Tree) -> str:
    token = next(child for child in tree.children if isinstance(child, Token) and child.type == "IDENT")
    return _ident(token)


def _last_ident(tree: Tree) -> str:
    tokens = [child for child in tree.children if isinstance(child, Token) and child.type == "IDENT"]
    return _ident(tokens[-1])


def _strings(tree: Tree) -> List[str]:
    return [
        _unquote(token.value)
        for token in tree.children
        if isinstance(token, Token) and token.type == "STRING"
    ]


def _metadata(tree: Optional[Tree]) -> List[str]:
    metadata = _optional_child(tree, "metadata")
    return _strings(metadata) if metadata is not None else []


def _optional_tag(tree: Tree) -> Optional[int]:
    tag = _optional_child(tree, "optional_tag")
    return int(tag.children[0].value) if tag is not None else None


def _scoped_name(tree: Tree) -> str:
    return "".join(_ident(token) if token.type == "IDENT" else token.value for token in tree.children)


def _scoped_names(tree: Optional[Tree]) -> List[str]:
    if tree is None:
        return []
    return [_scoped_name(child) for child in _children(tree, "scoped_name")]


def _type_name(tree: Tree) -> str:
    name = _scoped_name(_child(tree, "scoped_name"))
    return f"{name}*" if _has(tree, "PROXY") else name


def _const_value(tree: Tree) -> str:
    value = tree.children[0]
    if isinstance(value, Tree):
        return _scoped_name(value)
    return value.value


def _unquote(value: str) -> str:
    return re.sub(r'\\(.)', r'\1', value[1:-1])
