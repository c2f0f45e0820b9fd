"""TypeScript typings generator

Renders the declarations of one slice into a ``.d.ts`` module. Every
top-level Slice module becomes an ambient namespace merged into the shared
namespace file of that module and re-exported from the generated module.

Type references are resolved through the TypeScope. When a referenced
type's top-level namespace is shadowed at the point of use, the namespace
is imported under a ``$``-prefixed alias. Alias needs are only known once
the declarations have been walked, so generation runs twice: a collecting
pass records every alias, then the final pass renders with the complete
alias set.
"""

import posixpath
import re
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

from slice2ts.core.declarations import (
    ClassDeclaration,
    ClassForwardDeclaration,
    ConstDeclaration,
    DictionaryDeclaration,
    EnumDeclaration,
    ExceptionDeclaration,
    FieldDeclaration,
    InterfaceDeclaration,
    InterfaceForwardDeclaration,
    ModuleDeclaration,
    OperationDeclaration,
    SequenceDeclaration,
    StructDeclaration,
    declaration_kind,
)
from slice2ts.core.errors import GenerationError, UnsupportedConstruct
from slice2ts.core.generation_log import EventKind, GenerationLog
from slice2ts.core.type_scope import (
    QualifiedDeclaration,
    TypeScope,
    get_child_scope,
    get_type_by_name,
)
from slice2ts.generators.imports import ICE_NAMESPACE, generate_imports
from slice2ts.generators.naming import NamingScheme, escape
from slice2ts.generators.render import format_typescript, render, render_blocks
from slice2ts.module_system.loader import LoadedSlice
from slice2ts.module_system.namespaces import NamespaceFilePaths

PRIMITIVE_TYPES = {
    'bool': 'boolean',
    'string': 'string',
    'void': 'void',
    'byte': 'number',
    'short': 'number',
    'int': 'number',
    'float': 'number',
    'double': 'number',
    'LocalObject': 'object',
}

# primitives mapped to a type of the Ice runtime
ICE_PRIMITIVE_TYPES = {
    'long': 'Long',
}

# key types that can be compared by value in a native Map
NATIVE_KEY_TYPES = frozenset(['bool', 'byte', 'short', 'int', 'float', 'double', 'string'])

ALIAS_PREFIX = "$"
PROXY_SUFFIX = "Prx"
DEPRECATE_PREFIX = "deprecate"

_COMPLEX_TYPE_RE = re.compile(r'^(.*?)(\s*\*)?$')
_TYPE_OVERRIDE_RE = re.compile(r'^ts:type:(.+)$')
_GENERIC_RE = re.compile(r'^ts:generic:(.+)$')


def get_type_override(metadata: Optional[Iterable[str]]) -> Optional[str]:
    """Type given by ``ts:type:<type>`` metadata, if any"""
    for meta in metadata or ():
        match = _TYPE_OVERRIDE_RE.match(meta)
        if match:
            return match.group(1)
    return None


def get_generic_parameters(metadata: Optional[Iterable[str]]) -> str:
    """Generic parameter list from ``ts:generic:<params>`` metadata, or ``''``"""
    for meta in metadata or ():
        match = _GENERIC_RE.match(meta)
        if match:
            return f"<{match.group(1)}>"
    return ""


def normalize_ignored(name: str) -> str:
    """``Ice::Foo`` and ``::Ice::Foo`` both give ``::Ice::Foo``"""
    return name if name.startswith("::") else f"::{name}"


@dataclass
class GeneratorState:
    """Alias bookkeeping for the generation of one file

    Attributes:
        collecting: True during the collecting pass
        namespaces_to_alias: Top-level namespaces that need an alias
            import, in discovery order
    """
    collecting: bool = True
    namespaces_to_alias: Dict[str, None] = field(default_factory=dict)


@dataclass
class _OperationSource:
    """Operation together with the interface scope that declares it"""
    scope: TypeScope
    operation: OperationDeclaration
    # declared by an ancestor in another module
    external: bool


def generate_typings(
    scope: TypeScope,
    slice_name: str,
    slices: Mapping[str, LoadedSlice],
    namespace_file_paths: NamespaceFilePaths,
    ignore: Iterable[str] = (),
    ice_imports: bool = False,
    no_nullable_values: bool = False,
    log: Optional[GenerationLog] = None,
) -> str:
    """Generate the ``.d.ts`` contents for one slice

    Raises:
        GenerationError: Wrapping any error, with the slice name attached
    """
    try:
        return TypingsGenerator(
            scope,
            slice_name,
            slices,
            namespace_file_paths,
            ignore=ignore,
            ice_imports=ice_imports,
            no_nullable_values=no_nullable_values,
            log=log,
        ).generate()
    except GenerationError:
        raise
    except Exception as e:
        raise GenerationError(slice_name, e) from e


class TypingsGenerator:
    """Generates TypeScript typings for a single slice"""

    def __init__(
        self,
        scope: TypeScope,
        slice_name: str,
        slices: Mapping[str, LoadedSlice],
        namespace_file_paths: NamespaceFilePaths,
        ignore: Iterable[str] = (),
        ice_imports: bool = False,
        no_nullable_values: bool = False,
        log: Optional[GenerationLog] = None,
    ) -> None:
        """Initialize typings generator

        Args:
            scope: Root type scope built from every loaded slice
            slice_name: Slice to generate, e.g. ``Ice/Identity``
            slices: Loaded slices
            namespace_file_paths: Namespace file of each top-level module
            ignore: Fully-qualified names of declarations to leave out
            ice_imports: Import built-in slices from their own files
            no_nullable_values: Don't add ``| null`` to class-typed values
            log: Optional generation log
        """
        self.scope = scope
        self.slice_name = slice_name
        self.slices = slices
        self.namespace_file_paths = namespace_file_paths
        self.ignore = {normalize_ignored(name) for name in ignore}
        self.ice_imports = ice_imports
        self.no_nullable_values = no_nullable_values
        self.log = log
        self._state = GeneratorState()

    def generate(self) -> str:
        """Generate formatted typings"""
        imports = generate_imports(self.slice_name, self.slices, self.ice_imports)

        self._state = GeneratorState(collecting=True)
        self._generate_top_level_modules()
        namespaces_to_alias = self._state.namespaces_to_alias

        self._state = GeneratorState(collecting=False, namespaces_to_alias=namespaces_to_alias)
        top_level_modules = self._generate_top_level_modules()

        aliases = [
            f"import {ALIAS_PREFIX}{escape(namespace)} = {escape(namespace)};"
            for namespace in namespaces_to_alias
        ]

        if self.log is not None:
            for namespace in namespaces_to_alias:
                self.log.log_event(EventKind.NAMESPACE_ALIASED, self.slice_name, namespace)

        return format_typescript(render_blocks(imports, aliases, top_level_modules))

    def _generate_top_level_modules(self) -> List[str]:
        return [
            self._generate_top_level_module(declaration)
            for declaration in self.slices[self.slice_name].parsed.modules
        ]

    def _alias(self, namespace: str) -> None:
        if self._state.collecting:
            self._state.namespaces_to_alias[namespace] = None
        elif namespace not in self._state.namespaces_to_alias:
            raise RuntimeError(f"Alias for namespace {namespace} was not collected")

    def namespace_import_path(self, module: str) -> str:
        """Path of a module's namespace file relative to the generated slice

        Returns:
            Import specifier without extension, e.g. ``../Ice.ns``
        """
        namespace_file_path = self.namespace_file_paths.get(module)
        if namespace_file_path is None:
            raise KeyError(f"No namespace file for module {module}")

        target = posixpath.join(
            posixpath.dirname(namespace_file_path),
            posixpath.basename(namespace_file_path)[:-len(".d.ts")],
        )
        relative = posixpath.relpath(target, posixpath.dirname(self.slice_name) or ".")

        if not relative.startswith("."):
            relative = f"./{relative}"
        return relative

    def _generate_top_level_module(self, declaration: ModuleDeclaration) -> str:
        path = self.namespace_import_path(declaration.name)

        return render(
            f'declare module "{path}" {{',
            self._generate_module(self.scope, declaration),
            "}",
            f'export {{ {escape(declaration.name)} }} from "{path}";',
        )

    def _generate_doc_comment(self, what) -> str:
        deprecate = next(
            (meta for meta in what.metadata if meta.startswith(DEPRECATE_PREFIX)),
            None,
        )

        if what.doc is None and deprecate is None:
            return ""

        lines = what.doc.split("\n") if what.doc is not None else []

        if deprecate is not None:
            if lines:
                lines.append("")
            lines.append(f"@deprecated {deprecate[len(DEPRECATE_PREFIX) + 1:]}".rstrip())

        body = "\n".join(f" * {line}".rstrip() for line in lines).replace("*/", "*\\/")
        return f"/**\n{body}\n */"

    def _generate_module(self, scope: TypeScope, declaration: ModuleDeclaration) -> str:
        child_scope = get_child_scope(scope, declaration.name)

        return render(
            self._generate_doc_comment(declaration),
            f"namespace {escape(declaration.name)} {{",
            [self._generate_module_child(child_scope, child) for child in declaration.content],
            "}",
        )

    def _generate_module_child(self, scope: TypeScope, child) -> str:
        qualified_name = f"{scope.module}::{child.name}"
        if qualified_name in self.ignore:
            if self.log is not None and not self._state.collecting:
                self.log.log_event(EventKind.TYPE_IGNORED, self.slice_name, qualified_name)
            return ""

        if isinstance(child, ModuleDeclaration):
            return self._generate_module(scope, child)
        if isinstance(child, ClassDeclaration):
            return self._generate_class(scope, child)
        if isinstance(child, (ClassForwardDeclaration, InterfaceForwardDeclaration)):
            return ""
        if isinstance(child, InterfaceDeclaration):
            return self._generate_interface(scope, child)
        if isinstance(child, ExceptionDeclaration):
            return self._generate_exception(scope, child)
        if isinstance(child, StructDeclaration):
            return self._generate_struct(scope, child)
        if isinstance(child, EnumDeclaration):
            return self._generate_enum(scope, child)
        if isinstance(child, SequenceDeclaration):
            return self._generate_sequence(scope, child)
        if isinstance(child, DictionaryDeclaration):
            return self._generate_dictionary(scope, child)
        if isinstance(child, ConstDeclaration):
            return self._generate_constant(scope, child)

        raise UnsupportedConstruct(f"Unknown declaration kind: {type(child).__name__}")

    def _ice_type(self, scope: TypeScope, name: str) -> str:
        """Reference to a type of the Ice runtime from ``scope``"""
        if self._is_shadowed(scope, ICE_NAMESPACE):
            self._alias(ICE_NAMESPACE)
            return f"{ALIAS_PREFIX}{ICE_NAMESPACE}.{name}"
        return f"{ICE_NAMESPACE}.{name}"

    def _generate_complex_type(
        self,
        scope: TypeScope,
        data_type: str,
        external: bool = False,
        no_null: bool = False,
        emit_scope: Optional[TypeScope] = None,
    ) -> str:
        """Render a reference to a user-defined type

        Args:
            scope: Scope the type name is resolved in
            data_type: Slice type name, possibly suffixed with ``*``
            external: Render the fully-qualified name
            no_null: Never add ``| null`` (base type positions)
            emit_scope: Scope the reference is written into, if it differs
                from ``scope`` (members inherited from another module)
        """
        site = emit_scope or scope

        match = _COMPLEX_TYPE_RE.match(data_type)
        type_name = match.group(1)
        is_proxy = match.group(2) is not None

        if type_name == "Object":
            ts_type = self._ice_type(site, "Object" if is_proxy else "Value")
            is_class = True
        elif type_name == "Value":
            ts_type = self._ice_type(site, "Value")
            is_class = True
        else:
            member = get_type_by_name(scope, type_name)
            is_class = isinstance(member.declaration, ClassDeclaration)

            namespace = member.scope.top_level_module
            needs_alias = self._is_shadowed(site, namespace)

            if external or needs_alias or namespace != site.top_level_module:
                type_name = member.qualified_name

            ts_type = NamingScheme.qualified(type_name)

            # the namespace is hidden by a namespace or declaration of the
            # same name enclosing the reference
            if needs_alias:
                self._alias(namespace)
                ts_type = f"{ALIAS_PREFIX}{ts_type}"

        if is_proxy:
            ts_type = f"{ts_type}{PROXY_SUFFIX}"

        if not no_null and (is_proxy or (is_class and not self.no_nullable_values)):
            ts_type = f"{ts_type} | null"

        return ts_type

    @staticmethod
    def _is_shadowed(scope: TypeScope, namespace: Optional[str]) -> bool:
        current = scope
        while current.parent is not None:
            if current.has_own(namespace):
                return True
            current = current.parent
        return False

    def _generate_data_type(
        self,
        scope: TypeScope,
        data_type: str,
        external: bool = False,
        emit_scope: Optional[TypeScope] = None,
    ) -> str:
        primitive = PRIMITIVE_TYPES.get(data_type)
        if primitive is not None:
            return primitive
        if data_type in ICE_PRIMITIVE_TYPES:
            return self._ice_type(emit_scope or scope, ICE_PRIMITIVE_TYPES[data_type])
        return self._generate_complex_type(scope, data_type, external, emit_scope=emit_scope)

    def _generate_class(self, scope: TypeScope, declaration: ClassDeclaration) -> str:
        params = get_generic_parameters(declaration.metadata)

        if declaration.extends:
            base = self._generate_complex_type(scope, declaration.extends, no_null=True)
        elif not declaration.local:
            base = self._ice_type(scope, "Value")
        else:
            base = None

        operations = declaration.operations

        if operations and not declaration.local:
            raise UnsupportedConstruct(
                f"Class operations not supported: {scope.module}::{declaration.name}"
            )

        extends = f" extends {base}" if base else ""

        return render(
            self._generate_doc_comment(declaration),
            f"class {escape(declaration.name)}{params}{extends} {{",
            render_blocks(
                self._generate_class_constructor(scope, declaration),
                [self._generate_class_field(scope, child) for child in declaration.fields],
                [self._generate_local_operation(scope, operation, False) for operation in operations],
            ),
            "}",
        )

    def _inheritance_chain(self, scope: TypeScope, declaration) -> List[QualifiedDeclaration]:
        """Declaration and its ancestors, root ancestor first"""
        member = scope.lookup_local(declaration.name)
        if not isinstance(member, QualifiedDeclaration):
            member = get_type_by_name(scope, declaration.name)

        chain = [member]
        seen = {member.qualified_name}

        while chain[0].declaration.extends:
            parent = get_type_by_name(chain[0].scope, chain[0].declaration.extends)

            if type(parent.declaration) is not type(declaration):
                raise UnsupportedConstruct(
                    f"{member.qualified_name} cannot extend "
                    f"{declaration_kind(parent.declaration)} {parent.qualified_name}"
                )
            if parent.qualified_name in seen:
                raise UnsupportedConstruct(f"Circular inheritance: {member.qualified_name}")

            seen.add(parent.qualified_name)
            chain.insert(0, parent)

        return chain

    def _generate_class_constructor(self, scope: TypeScope, declaration) -> str:
        """Constructor accepting the fields of the whole inheritance chain"""
        chain = self._inheritance_chain(scope, declaration)
        own_module = chain[-1].module

        parameters = []
        for link in chain:
            external = link.module != own_module

            for child in link.declaration.fields:
                data_type = get_type_override(child.metadata) or self._generate_data_type(
                    link.scope, child.data_type, external, emit_scope=scope
                )
                undefined = " | undefined" if child.optional is not None else ""
                parameters.append(f"{escape(child.name)}?: {data_type}{undefined}")

        if not parameters:
            return ""

        return f"constructor({', '.join(parameters)});"

    def _generate_class_field(self, scope: TypeScope, child: FieldDeclaration) -> str:
        data_type = get_type_override(child.metadata) or self._generate_data_type(scope, child.data_type)
        optional = "?" if child.optional is not None else ""

        return render(
            self._generate_doc_comment(child),
            f"{escape(child.name)}{optional}: {data_type};",
        )

    def _collect_operations(self, scope: TypeScope, declaration: InterfaceDeclaration) -> List[_OperationSource]:
        """Operations of an interface and all its ancestors, ancestors first"""
        member = scope.lookup_local(declaration.name)
        if not isinstance(member, QualifiedDeclaration):
            member = get_type_by_name(scope, declaration.name)

        interfaces = [member]
        visited = {member.qualified_name}

        for current in interfaces:
            for parent_name in current.declaration.extends:
                parent = get_type_by_name(current.scope, parent_name)

                if not isinstance(parent.declaration, InterfaceDeclaration):
                    raise UnsupportedConstruct(
                        f"{current.qualified_name} cannot extend "
                        f"{declaration_kind(parent.declaration)} {parent.qualified_name}"
                    )

                if parent.qualified_name not in visited:
                    visited.add(parent.qualified_name)
                    interfaces.append(parent)

        interfaces.reverse()

        return [
            _OperationSource(
                scope=interface.scope,
                operation=operation,
                external=interface.module != member.module,
            )
            for interface in interfaces
            for operation in interface.declaration.content
        ]

    def _generate_interface(self, scope: TypeScope, declaration: InterfaceDeclaration) -> str:
        operations = self._collect_operations(scope, declaration)
        name = escape(declaration.name)
        doc = self._generate_doc_comment(declaration)
        parents = [
            self._generate_complex_type(scope, parent, no_null=True)
            for parent in declaration.extends
        ]

        if declaration.local:
            extends = f" extends {', '.join(parents)}" if parents else ""

            return render(
                doc,
                f"interface {name}{extends} {{",
                [
                    self._generate_local_operation(source.scope, source.operation, source.external, scope)
                    for source in operations
                ],
                "}",
            )

        params = get_generic_parameters(declaration.metadata)
        implements = f" implements {', '.join(parents)}" if parents else ""
        proxy_implements = (
            f" implements {', '.join(parent + PROXY_SUFFIX for parent in parents)}"
            if parents else ""
        )

        servant = render(
            doc,
            f"abstract class {name}{params} extends {self._ice_type(scope, 'Object')}{implements} {{",
            [
                self._generate_operation(source.scope, source.operation, source.external, scope)
                for source in operations
            ],
            "}",
        )

        proxy = render(
            doc,
            f"class {name}{PROXY_SUFFIX}{params} extends {self._ice_type(scope, 'ObjectPrx')}{proxy_implements} {{",
            [
                self._generate_proxy_operation(source.scope, source.operation, source.external, scope)
                for source in operations
            ],
            "}",
        )

        return render_blocks(servant, proxy)

    def _parameter_type(
        self,
        scope: TypeScope,
        parameter,
        external: bool,
        emit_scope: Optional[TypeScope] = None,
    ) -> str:
        return get_type_override(parameter.metadata) or self._generate_data_type(
            scope, parameter.data_type, external, emit_scope
        )

    def _generate_trailing_optional_parameters(
        self,
        scope: TypeScope,
        operation: OperationDeclaration,
        external: bool,
        emit_scope: Optional[TypeScope] = None,
        seed: Tuple[str, ...] = (),
    ) -> List[str]:
        """In-parameters with optional ones marked ``?`` where legal

        Scans backwards: an optional parameter followed by a required one
        cannot be marked ``?`` and is typed ``T | undefined`` instead.

        Args:
            seed: Already-rendered optional parameters that end the list
        """
        reversed_strings = list(reversed(seed))
        seen_required = False

        for parameter in reversed([p for p in operation.parameters if not p.out]):
            data_type = self._parameter_type(scope, parameter, external, emit_scope)
            name = escape(parameter.name)

            if parameter.optional is not None:
                if seen_required:
                    reversed_strings.append(f"{name}: {data_type} | undefined")
                else:
                    reversed_strings.append(f"{name}?: {data_type}")
            else:
                reversed_strings.append(f"{name}: {data_type}")
                seen_required = True

        reversed_strings.reverse()
        return reversed_strings

    def _generate_local_operation(
        self,
        scope: TypeScope,
        operation: OperationDeclaration,
        external: bool,
        emit_scope: Optional[TypeScope] = None,
    ) -> str:
        parameters = self._generate_trailing_optional_parameters(scope, operation, external, emit_scope)
        return_type = self._generate_return_type(scope, operation, external, emit_scope)

        return render(
            self._generate_doc_comment(operation),
            f"{escape(operation.name)}({', '.join(parameters)}): {return_type};",
        )

    def _generate_operation(
        self,
        scope: TypeScope,
        operation: OperationDeclaration,
        external: bool,
        emit_scope: Optional[TypeScope] = None,
    ) -> str:
        parameters = self._generate_parameters(scope, operation, external, emit_scope)
        return_type = self._generate_return_type(scope, operation, external, emit_scope)
        result = self._ice_type(emit_scope or scope, "OperationResult")

        return render(
            self._generate_doc_comment(operation),
            f"abstract {escape(operation.name)}({parameters}): {result}<{return_type}>;",
        )

    def _generate_parameters(
        self,
        scope: TypeScope,
        operation: OperationDeclaration,
        external: bool,
        emit_scope: Optional[TypeScope] = None,
    ) -> str:
        """Servant parameters: in-parameters in order, then the current"""
        parameter_strings = []

        for parameter in operation.parameters:
            if parameter.out:
                continue

            data_type = self._parameter_type(scope, parameter, external, emit_scope)
            parameter_string = f"{escape(parameter.name)}: {data_type}"
            if parameter.optional is not None:
                parameter_string += " | undefined"

            parameter_strings.append(parameter_string)

        current_name = _reserved_parameter_name(operation, "current")
        parameter_strings.append(f"{current_name}: {self._ice_type(emit_scope or scope, 'Current')}")

        return ", ".join(parameter_strings)

    def _generate_proxy_operation(
        self,
        scope: TypeScope,
        operation: OperationDeclaration,
        external: bool,
        emit_scope: Optional[TypeScope] = None,
    ) -> str:
        parameters = self._generate_proxy_parameters(scope, operation, external, emit_scope)
        return_type = self._generate_return_type(scope, operation, external, emit_scope)
        result = self._ice_type(emit_scope or scope, "AsyncResult")

        return render(
            self._generate_doc_comment(operation),
            f"{escape(operation.name)}({parameters}): {result}<{return_type}>;",
        )

    def _generate_proxy_parameters(
        self,
        scope: TypeScope,
        operation: OperationDeclaration,
        external: bool,
        emit_scope: Optional[TypeScope] = None,
    ) -> str:
        context_name = _reserved_parameter_name(operation, "ctx")
        context_type = self._ice_type(emit_scope or scope, "Context")
        return ", ".join(
            self._generate_trailing_optional_parameters(
                scope, operation, external, emit_scope, seed=(f"{context_name}?: {context_type}",)
            )
        )

    def _generate_return_type(
        self,
        scope: TypeScope,
        operation: OperationDeclaration,
        external: bool,
        emit_scope: Optional[TypeScope] = None,
    ) -> str:
        out_parameters = [parameter for parameter in operation.parameters if parameter.out]

        return_type = get_type_override(operation.metadata) or self._generate_data_type(
            scope, operation.return_type, external, emit_scope
        )

        if not out_parameters:
            return f"{return_type} | void" if operation.return_optional is not None else return_type

        return_types = [
            f"{return_type} | undefined" if operation.return_optional is not None else return_type
        ]

        for parameter in out_parameters:
            parameter_type = self._parameter_type(scope, parameter, external, emit_scope)
            return_types.append(
                f"{parameter_type} | undefined" if parameter.optional is not None else parameter_type
            )

        return f"[{', '.join(return_types)}]"

    def _generate_exception(self, scope: TypeScope, declaration: ExceptionDeclaration) -> str:
        if declaration.extends:
            base = self._generate_complex_type(scope, declaration.extends, no_null=True)
        elif declaration.local:
            base = self._ice_type(scope, "LocalException")
        else:
            base = self._ice_type(scope, "UserException")

        return render(
            self._generate_doc_comment(declaration),
            f"class {escape(declaration.name)} extends {base} {{",
            render_blocks(
                self._generate_class_constructor(scope, declaration),
                [self._generate_class_field(scope, child) for child in declaration.fields],
            ),
            "}",
        )

    def _generate_struct(self, scope: TypeScope, declaration: StructDeclaration) -> str:
        parameters = []
        fields = []

        for child in declaration.fields:
            data_type = get_type_override(child.metadata) or self._generate_data_type(scope, child.data_type)
            name = escape(child.name)

            parameters.append(f"{name}?: {data_type}")
            fields.append(render(self._generate_doc_comment(child), f"{name}: {data_type};"))

        return render(
            self._generate_doc_comment(declaration),
            f"class {escape(declaration.name)} implements {self._ice_type(scope, 'Struct')} {{",
            render_blocks(
                f"constructor({', '.join(parameters)});",
                fields,
                render(
                    "clone(): this;",
                    "equals(other: this): boolean;",
                    "hashCode(): number;",
                ),
            ),
            "}",
        )

    def _generate_enum(self, scope: TypeScope, declaration: EnumDeclaration) -> str:
        class_name = escape(declaration.name)
        names_type = f"{class_name}Name"
        names = " | ".join(f"'{escape(element.name)}'" for element in declaration.enums) or "never"
        enum_base = self._ice_type(scope, "EnumBase")

        return render_blocks(
            f"type {names_type} = {names};",
            render(
                self._generate_doc_comment(declaration),
                f"class {class_name}<Name extends {names_type} = {names_type}> extends {enum_base}<Name> {{",
                [
                    render(
                        self._generate_doc_comment(element),
                        f"static {escape(element.name)}: {class_name}<'{escape(element.name)}'>;",
                    )
                    for element in declaration.enums
                ],
                "}",
            ),
        )

    def _generate_sequence(self, scope: TypeScope, declaration: SequenceDeclaration) -> str:
        params = get_generic_parameters(declaration.metadata)
        override = get_type_override(declaration.data_type_metadata)

        if declaration.data_type == "byte" and override is None:
            data_type = "Uint8Array"
        else:
            data_type = f"Array<{override or self._generate_data_type(scope, declaration.data_type)}>"

        return render(
            self._generate_doc_comment(declaration),
            f"type {escape(declaration.name)}{params} = {data_type};",
        )

    def _is_native_key_type(self, scope: TypeScope, key_type: str) -> bool:
        if key_type in NATIVE_KEY_TYPES:
            return True
        if key_type in PRIMITIVE_TYPES or key_type in ICE_PRIMITIVE_TYPES:
            return False
        return isinstance(get_type_by_name(scope, key_type).declaration, EnumDeclaration)

    def _generate_dictionary(self, scope: TypeScope, declaration: DictionaryDeclaration) -> str:
        params = get_generic_parameters(declaration.metadata)

        key_type = get_type_override(declaration.key_type_metadata) or self._generate_data_type(
            scope, declaration.key_type
        )
        value_type = get_type_override(declaration.value_type_metadata) or self._generate_data_type(
            scope, declaration.value_type
        )

        type_name = escape(declaration.name)

        if self._is_native_key_type(scope, declaration.key_type):
            container = "Map"
            constructor_arg = f"entries?: ReadonlyArray<[{key_type}, {value_type}]>"
        else:
            container = self._ice_type(scope, "HashMap")
            constructor_arg = ""

        doc = self._generate_doc_comment(declaration)

        return render(
            doc,
            f"type {type_name}{params} = {container}<{key_type}, {value_type}>;",
            f"const {type_name}: {{",
            doc,
            f"new {params}({constructor_arg}): {container}<{key_type}, {value_type}>;",
            "};",
        )

    def _generate_constant(self, scope: TypeScope, declaration: ConstDeclaration) -> str:
        data_type = get_type_override(declaration.data_type_metadata) or self._generate_data_type(
            scope, declaration.data_type
        )

        return render(
            self._generate_doc_comment(declaration),
            f"const {escape(declaration.name)}: {data_type};",
        )


def _reserved_parameter_name(operation: OperationDeclaration, name: str) -> str:
    """``name``, or ``_name`` if an operation parameter already uses it"""
    if any(parameter.name == name for parameter in operation.parameters):
        return f"_{name}"
    return name
