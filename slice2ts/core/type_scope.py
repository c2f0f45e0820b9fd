"""Type scopes for Slice name resolution

Builds one TypeScope per Slice module and resolves type names following
Slice scoping rules:
- Modules reopened in several files share a single scope
- A scope sees every name visible from its fallback chain unless it
  shadows the name locally
- Unqualified names are searched from the innermost scope outwards
"""

from collections import deque
from dataclasses import dataclass
from typing import TYPE_CHECKING, Deque, Dict, Iterable, List, Mapping, Optional, Tuple, Union

from slice2ts.core.declarations import (
    FORWARD_DECLARATIONS,
    ModuleDeclaration,
    SliceSource,
    TypeDeclaration,
    declaration_kind,
)
from slice2ts.core.errors import ModuleNotFound, NamingConflict, TypeNotFound

if TYPE_CHECKING:
    from slice2ts.module_system.loader import LoadedSlice


@dataclass(eq=False)
class QualifiedDeclaration:
    """Declaration together with the scope that declares it"""
    declaration: TypeDeclaration
    scope: 'TypeScope'

    @property
    def module(self) -> str:
        """Fully-qualified module of the declaring scope"""
        return self.scope.module

    @property
    def qualified_name(self) -> str:
        return f"{self.scope.module}::{self.declaration.name}"


ScopeEntry = Union['TypeScope', QualifiedDeclaration]


class TypeScope:
    """Name table for one Slice module

    Lookups that miss the local table continue in the fallback scope. The
    fallback is normally the lexical parent; a module that shadows an
    unrelated module of the same simple name falls back to that module
    instead.
    """

    def __init__(
        self,
        module: str = '',
        parent: Optional['TypeScope'] = None,
        fallback: Optional['TypeScope'] = None,
    ) -> None:
        """Initialize scope

        Args:
            module: Fully-qualified module name, e.g. ``::Ice::Foo``.
                Empty for the root scope.
            parent: Lexical parent scope (None for the root scope)
            fallback: Scope consulted when a lookup misses the local
                table. Defaults to the parent.
        """
        self.module = module
        self.parent = parent
        self.fallback = fallback if fallback is not None else parent
        self.names: Dict[str, ScopeEntry] = {}

    def __repr__(self) -> str:
        return f"TypeScope(module={self.module!r}, names={sorted(self.names)!r})"

    def lookup(self, name: str) -> Optional[ScopeEntry]:
        """Look up a name in this scope and its fallback chain"""
        current: Optional[TypeScope] = self
        while current is not None:
            entry = current.names.get(name)
            if entry is not None:
                return entry
            current = current.fallback
        return None

    def lookup_local(self, name: str) -> Optional[ScopeEntry]:
        """Look up a name in this scope only"""
        return self.names.get(name)

    def has_own(self, name: str) -> bool:
        return name in self.names

    def bind(self, name: str, entry: ScopeEntry) -> None:
        self.names[name] = entry

    @property
    def root(self) -> 'TypeScope':
        current = self
        while current.parent is not None:
            current = current.parent
        return current

    def is_root(self) -> bool:
        return self.parent is None

    def get_depth(self) -> int:
        """Get nesting depth (0 for the root scope)"""
        depth = 0
        current = self
        while current.parent is not None:
            depth += 1
            current = current.parent
        return depth

    @property
    def top_level_module(self) -> Optional[str]:
        return top_level_module(self.module)


def top_level_module(module: str) -> Optional[str]:
    """Top-level module of a fully-qualified module name

    ``::Ice::Foo`` gives ``Ice``; the root module gives None.
    """
    segments = module.split('::')
    return segments[1] if len(segments) > 1 else None


def create_type_scope(sources: Iterable[SliceSource]) -> TypeScope:
    """Build the root scope from every loaded slice

    Modules are populated breadth-first across all files so that every
    ancestor binding exists before a nested module decides whether it
    shadows a name, which keeps the result independent of file order.

    Raises:
        NamingConflict: If a name is declared twice in the same module
    """
    root = TypeScope()
    queue: Deque[Tuple[TypeScope, ModuleDeclaration]] = deque()

    for source in sources:
        for module in source.modules:
            queue.append((root, module))

    while queue:
        parent, declaration = queue.popleft()
        scope = _module_scope(parent, declaration.name)

        for child in declaration.content:
            if isinstance(child, ModuleDeclaration):
                queue.append((scope, child))
            elif not isinstance(child, FORWARD_DECLARATIONS):
                _declare(scope, child)

    return root


def _module_scope(parent: TypeScope, name: str) -> TypeScope:
    module = f"{parent.module}::{name}"
    existing = parent.lookup(name)

    if isinstance(existing, TypeScope):
        if existing.module == module:
            return existing
        # unrelated module with the same simple name visible from an
        # ancestor: shadow it, but keep its names reachable
        scope = TypeScope(module, parent=parent, fallback=existing)
    elif existing is not None and parent.has_own(name):
        raise NamingConflict(module, declaration_kind(existing.declaration), 'module')
    else:
        scope = TypeScope(module, parent=parent)

    parent.bind(name, scope)
    return scope


def _declare(scope: TypeScope, declaration: TypeDeclaration) -> None:
    existing = scope.lookup_local(declaration.name)

    if existing is not None:
        existing_kind = (
            'module' if isinstance(existing, TypeScope)
            else declaration_kind(existing.declaration)
        )
        raise NamingConflict(
            f"{scope.module}::{declaration.name}",
            existing_kind,
            declaration_kind(declaration),
        )

    scope.bind(declaration.name, QualifiedDeclaration(declaration, scope))


def get_type_by_name(scope: TypeScope, type_name: str) -> QualifiedDeclaration:
    """Resolve a possibly qualified type name

    A name starting with ``::`` is resolved from the root scope only.
    Otherwise the name is resolved relative to ``scope`` and, failing that,
    relative to each enclosing scope in turn. The innermost match wins.

    Args:
        scope: Scope the name is referenced from
        type_name: Type name, e.g. ``Identity``, ``Ice::Identity``
            or ``::Ice::Identity``

    Returns:
        Declaration and its declaring scope

    Raises:
        ModuleNotFound: If no search level could resolve the qualifier
        TypeNotFound: If the qualifier resolved but the type did not
    """
    if type_name.startswith('::'):
        start: Optional[TypeScope] = scope.root
        name = type_name[2:]
        outward = False
    else:
        start = scope
        name = type_name
        outward = True

    parts = name.split('::')
    path: List[str] = parts[:-1]
    last = parts[-1]

    module_found = not path
    current = start

    while current is not None:
        target = _walk_path(current, path)

        if target is not None:
            module_found = True
            entry = target.lookup(last)
            if isinstance(entry, QualifiedDeclaration):
                return entry

        current = current.parent if outward else None

    if not module_found:
        raise ModuleNotFound('::'.join(path))

    raise TypeNotFound(type_name)


def _walk_path(scope: TypeScope, path: List[str]) -> Optional[TypeScope]:
    target = scope
    for segment in path:
        entry = target.lookup(segment)
        if not isinstance(entry, TypeScope):
            return None
        target = entry
    return target


def get_child_scope(scope: TypeScope, module: str) -> TypeScope:
    """Scope of a module declared directly in ``scope``

    Raises:
        ModuleNotFound: If ``scope`` has no such child module
    """
    child = scope.lookup_local(module)

    if not isinstance(child, TypeScope):
        raise ModuleNotFound(f"{scope.module}::{module}")

    return child


def create_type_scope_from_slices(slices: Mapping[str, 'LoadedSlice']) -> TypeScope:
    """Build the root scope from a name -> LoadedSlice mapping"""
    return create_type_scope(slices[name].parsed for name in slices)
