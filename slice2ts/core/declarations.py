"""Declaration tree for parsed Slice files

The parser produces one SliceSource per file. Every declaration carries
its name, an optional doc comment and a list of metadata strings, e.g.
``["ts:type:Foo", "deprecate:use Bar"]``.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Union


@dataclass
class FieldDeclaration:
    """Data member of a class, exception or struct"""
    name: str
    data_type: str
    optional: Optional[int] = None  # optional tag, None if required
    default_value: Optional[str] = None
    doc: Optional[str] = None
    metadata: List[str] = field(default_factory=list)


@dataclass
class ParameterDeclaration:
    """Operation parameter"""
    name: str
    data_type: str
    out: bool = False
    optional: Optional[int] = None
    metadata: List[str] = field(default_factory=list)


@dataclass
class OperationDeclaration:
    """Interface or local class operation"""
    name: str
    return_type: str
    parameters: List[ParameterDeclaration] = field(default_factory=list)
    return_optional: Optional[int] = None
    throws: List[str] = field(default_factory=list)
    idempotent: bool = False
    doc: Optional[str] = None
    metadata: List[str] = field(default_factory=list)


@dataclass
class EnumElement:
    """Enumerator"""
    name: str
    value: Optional[str] = None
    doc: Optional[str] = None
    metadata: List[str] = field(default_factory=list)


@dataclass
class ClassDeclaration:
    name: str
    local: bool = False
    extends: Optional[str] = None
    content: List[Union[FieldDeclaration, OperationDeclaration]] = field(default_factory=list)
    compact_id: Optional[int] = None
    doc: Optional[str] = None
    metadata: List[str] = field(default_factory=list)

    @property
    def fields(self) -> List[FieldDeclaration]:
        return [child for child in self.content if isinstance(child, FieldDeclaration)]

    @property
    def operations(self) -> List[OperationDeclaration]:
        return [child for child in self.content if isinstance(child, OperationDeclaration)]


@dataclass
class ClassForwardDeclaration:
    name: str
    local: bool = False
    doc: Optional[str] = None
    metadata: List[str] = field(default_factory=list)


@dataclass
class InterfaceDeclaration:
    name: str
    local: bool = False
    extends: List[str] = field(default_factory=list)
    content: List[OperationDeclaration] = field(default_factory=list)
    doc: Optional[str] = None
    metadata: List[str] = field(default_factory=list)


@dataclass
class InterfaceForwardDeclaration:
    name: str
    local: bool = False
    doc: Optional[str] = None
    metadata: List[str] = field(default_factory=list)


@dataclass
class ExceptionDeclaration:
    name: str
    local: bool = False
    extends: Optional[str] = None
    content: List[FieldDeclaration] = field(default_factory=list)
    doc: Optional[str] = None
    metadata: List[str] = field(default_factory=list)

    @property
    def fields(self) -> List[FieldDeclaration]:
        return list(self.content)


@dataclass
class StructDeclaration:
    name: str
    local: bool = False
    fields: List[FieldDeclaration] = field(default_factory=list)
    doc: Optional[str] = None
    metadata: List[str] = field(default_factory=list)


@dataclass
class EnumDeclaration:
    name: str
    local: bool = False
    enums: List[EnumElement] = field(default_factory=list)
    doc: Optional[str] = None
    metadata: List[str] = field(default_factory=list)


@dataclass
class SequenceDeclaration:
    name: str
    data_type: str
    local: bool = False
    data_type_metadata: List[str] = field(default_factory=list)
    doc: Optional[str] = None
    metadata: List[str] = field(default_factory=list)


@dataclass
class DictionaryDeclaration:
    name: str
    key_type: str
    value_type: str
    local: bool = False
    key_type_metadata: List[str] = field(default_factory=list)
    value_type_metadata: List[str] = field(default_factory=list)
    doc: Optional[str] = None
    metadata: List[str] = field(default_factory=list)


@dataclass
class ConstDeclaration:
    name: str
    data_type: str
    value: str
    data_type_metadata: List[str] = field(default_factory=list)
    doc: Optional[str] = None
    metadata: List[str] = field(default_factory=list)


@dataclass
class ModuleDeclaration:
    name: str
    content: List['ModuleChild'] = field(default_factory=list)
    doc: Optional[str] = None
    metadata: List[str] = field(default_factory=list)


TypeDeclaration = Union[
    ClassDeclaration,
    InterfaceDeclaration,
    ExceptionDeclaration,
    StructDeclaration,
    EnumDeclaration,
    SequenceDeclaration,
    DictionaryDeclaration,
    ConstDeclaration,
]

ModuleChild = Union[
    ModuleDeclaration,
    ClassDeclaration,
    ClassForwardDeclaration,
    InterfaceDeclaration,
    InterfaceForwardDeclaration,
    ExceptionDeclaration,
    StructDeclaration,
    EnumDeclaration,
    SequenceDeclaration,
    DictionaryDeclaration,
    ConstDeclaration,
]

FORWARD_DECLARATIONS = (ClassForwardDeclaration, InterfaceForwardDeclaration)


@dataclass
class SliceSource:
    """Complete parse result of one Slice file"""
    modules: List[ModuleDeclaration] = field(default_factory=list)
    includes: List[str] = field(default_factory=list)
    metadata: List[str] = field(default_factory=list)


def declaration_kind(declaration) -> str:
    """Human readable kind of a declaration, e.g. ``class`` or ``classForward``"""
    return {
        ModuleDeclaration: 'module',
        ClassDeclaration: 'class',
        ClassForwardDeclaration: 'classForward',
        InterfaceDeclaration: 'interface',
        InterfaceForwardDeclaration: 'interfaceForward',
        ExceptionDeclaration: 'exception',
        StructDeclaration: 'struct',
        EnumDeclaration: 'enum',
        SequenceDeclaration: 'sequence',
        DictionaryDeclaration: 'dictionary',
        ConstDeclaration: 'const',
    }.get(type(declaration), type(declaration).__name__)
