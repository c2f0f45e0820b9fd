"""Top-level namespace bookkeeping

A top-level Slice module may be declared by many slices. Its TypeScript
namespace is anchored in a single namespace file placed in the common
ancestor directory of those slices, e.g. slices ``A/B/C`` and ``A/D/E``
both declaring ``Foo`` share ``A/Foo.ns.d.ts``.
"""

import posixpath
from typing import Dict, List, Mapping, Sequence

from slice2ts.generators.naming import escape
from slice2ts.module_system.loader import LoadedSlice

NAMESPACE_FILE_SUFFIX = ".ns.d.ts"

NamespaceUsages = Dict[str, List[str]]
NamespaceFilePaths = Dict[str, str]


def get_top_level_modules(
    slice_names: Sequence[str],
    slices: Mapping[str, LoadedSlice],
) -> NamespaceUsages:
    """Slice names declaring each top-level module

    Args:
        slice_names: Input slice names
        slices: Loaded slices

    Returns:
        Dict mapping top-level module name -> declaring slice names
    """
    usages: NamespaceUsages = {}

    for slice_name in slice_names:
        for module in slices[slice_name].parsed.modules:
            names = usages.setdefault(module.name, [])
            if slice_name not in names:
                names.append(slice_name)

    return usages


def get_namespace_file_paths(usages: Mapping[str, Sequence[str]]) -> NamespaceFilePaths:
    """Namespace file path for each top-level module, relative to the out dir"""
    paths: NamespaceFilePaths = {}

    for module, slice_names in usages.items():
        dirs = ["/" + posixpath.dirname(name) for name in slice_names]
        common = posixpath.commonpath(dirs)[1:]
        paths[module] = posixpath.join(common, f"{module}{NAMESPACE_FILE_SUFFIX}")

    return paths


def generate_namespace(module: str) -> str:
    """Contents of a namespace file"""
    return f"export namespace {escape(module)} {{}}\n"


def generate_index_js(module: str, slice_names: Sequence[str]) -> str:
    """CommonJS index re-exporting a top-level module

    The first declaring slice provides the export; the rest are required
    for their side effect of extending the namespace.
    """
    lines = []
    for index, slice_name in enumerate(slice_names):
        if index == 0:
            lines.append(f"exports.{module} = require('./{slice_name}').{module};")
        else:
            lines.append(f"require('./{slice_name}');")
    return "\n".join(lines) + "\n"


def generate_index_typings(module: str, slice_names: Sequence[str]) -> str:
    """Typings for the index produced by generate_index_js"""
    lines = []
    for index, slice_name in enumerate(slice_names):
        if index == 0:
            lines.append(f"export {{{module}}} from './{slice_name}';")
        else:
            lines.append(f"import './{slice_name}';")
    return "\n".join(lines) + "\n"
