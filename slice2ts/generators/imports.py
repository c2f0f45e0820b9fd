"""Import generation for generated modules

Namespaces from Ice's own slices are imported from the ``ice`` package;
every other include becomes a relative import of the generated module.
"""

from typing import Dict, List, Mapping

from slice2ts.generators.naming import escape
from slice2ts.module_system.loader import LoadedSlice

ICE_PACKAGE = "ice"
ICE_NAMESPACE = "Ice"

BUILT_IN_FOLDERS = frozenset([
    'Ice',
    'Glacier2',
    'IceBox',
    'IceBT',
    'IceDiscovery',
    'IceGrid',
    'IceIAP',
    'IceLocatorDiscovery',
    'IcePatch2',
    'IceSSL',
    'IceStorm',
])


def is_built_in(slice_name: str) -> bool:
    """True if the slice lives in one of Ice's own slice folders"""
    return slice_name.split("/")[0] in BUILT_IN_FOLDERS


def relative_prefix(slice_name: str) -> str:
    """``../`` repeated once per directory level of the slice, ``./`` at the root"""
    depth = len(slice_name.split("/")) - 1
    return "../" * depth if depth else "./"


def generate_imports(
    slice_name: str,
    slices: Mapping[str, LoadedSlice],
    ice_imports: bool = False,
) -> str:
    """Generate ES module imports for a slice

    A namespace is imported from the first include that declares it; later
    includes declaring the same namespace are imported for their side
    effect only.

    Args:
        slice_name: Slice being generated
        slices: Loaded slices, including every include of the slice
        ice_imports: If True, built-in slices are imported from their own
            files instead of the ``ice`` package

    Returns:
        Import statements, one per line, ``ice`` import first
    """
    parsed = slices[slice_name].parsed

    seen_namespaces = {ICE_NAMESPACE}
    # ordered set of namespaces imported from "ice"
    ice_namespaces: Dict[str, None] = {ICE_NAMESPACE: None}
    imports: List[str] = []

    prefix = relative_prefix(slice_name)

    for name in parsed.includes:
        namespaces = [
            module.name
            for module in slices[name].parsed.modules
            if module.name not in seen_namespaces
        ]
        # a slice may declare the same top-level module twice
        namespaces = list(dict.fromkeys(namespaces))
        seen_namespaces.update(namespaces)

        if not ice_imports and is_built_in(name):
            for namespace in namespaces:
                ice_namespaces[namespace] = None
            continue

        import_path = prefix + name

        if namespaces:
            escaped = ", ".join(escape(namespace) for namespace in namespaces)
            imports.append(f'import {{ {escaped} }} from "{import_path}";')
        else:
            imports.append(f'import "{import_path}";')

    imports.insert(0, f'import {{ {", ".join(ice_namespaces)} }} from "{ICE_PACKAGE}";')

    return "\n".join(imports) + "\n"
