"""Generation driver

Resolves input globs, loads the slices, builds the type scope once and
writes namespace files, optional index files, runtime modules and typings
into the output directory.
"""

import glob
import os
from dataclasses import dataclass, field
from fnmatch import fnmatch
from pathlib import Path
from typing import List, Optional, Sequence

from slice2ts.core.generation_log import EventKind, GenerationLog
from slice2ts.core.type_scope import create_type_scope_from_slices
from slice2ts.generators.js_generator import DEFAULT_COMPILER, generate_js
from slice2ts.generators.typings_generator import generate_typings
from slice2ts.module_system.loader import load_slices
from slice2ts.module_system.namespaces import (
    generate_index_js,
    generate_index_typings,
    generate_namespace,
    get_namespace_file_paths,
    get_top_level_modules,
)

try:
    import Ice
except ImportError:
    Ice = None  # zeroc-ice is optional


@dataclass
class Slice2TsOptions:
    """Options of a generation run

    Attributes:
        files: Slice file paths or globs
        exclude: File paths or globs to exclude
        root_dirs: Root dirs. Output files keep the layout of the slices
            relative to these dirs; includes are resolved in them too.
        out_dir: Directory where generated files are written
        no_js: Only generate typings
        ice_imports: Import Ice modules from their own files instead of "ice"
        ignore: Fully-qualified names of types to leave out of the typings
        index: Generate an index file per top-level module
        no_nullable_values: Don't add ``| null`` to class-typed values
        slice2js: Compiler executable
        ice_slice_dir: Add the slice dir of an installed zeroc-ice to the
            root dirs
        verbose: Print a generation summary
    """
    files: List[str]
    root_dirs: List[str]
    out_dir: str
    exclude: List[str] = field(default_factory=list)
    no_js: bool = False
    ice_imports: bool = False
    ignore: List[str] = field(default_factory=list)
    index: bool = False
    no_nullable_values: bool = False
    slice2js: str = DEFAULT_COMPILER
    ice_slice_dir: bool = True
    verbose: bool = False


def default_slice_dir() -> Optional[str]:
    """Slice dir shipped with zeroc-ice, or None if it is not installed"""
    if Ice is None:
        return None
    return Ice.getSliceDir()


def resolve_globs(
    patterns: Sequence[str],
    exclude: Sequence[str] = (),
    log: Optional[GenerationLog] = None,
) -> List[str]:
    """Expand globs into unique paths, in pattern order

    Args:
        patterns: File paths or globs; ``**`` matches nested dirs
        exclude: Paths or globs whose matches are dropped
        log: Receives a warning for each pattern matching nothing
    """
    paths: List[str] = []
    seen = set()

    for pattern in patterns:
        matches = sorted(glob.glob(pattern, recursive=True))

        if not matches and log is not None:
            log.log_warning(f"No files match {pattern}")

        for path in matches:
            normalized = os.path.normpath(path)
            if normalized in seen or _is_excluded(normalized, exclude):
                continue
            seen.add(normalized)
            paths.append(path)

    return paths


def _is_excluded(path: str, exclude: Sequence[str]) -> bool:
    return any(fnmatch(path, os.path.normpath(pattern)) for pattern in exclude)


def slice2ts(options: Slice2TsOptions, log: Optional[GenerationLog] = None) -> GenerationLog:
    """Run a generation

    Args:
        options: Generation options
        log: Log to fill, a new one if omitted

    Returns:
        The generation log

    Raises:
        Slice2TsError: On the first load, compile or generation failure
    """
    if log is None:
        log = GenerationLog()

    paths = resolve_globs(options.files, options.exclude, log)
    root_dirs = [Path(os.path.abspath(root_dir)) for root_dir in options.root_dirs]

    if options.ice_slice_dir:
        slice_dir = default_slice_dir()
        if slice_dir is not None and Path(os.path.abspath(slice_dir)) not in root_dirs:
            root_dirs.append(Path(os.path.abspath(slice_dir)))

    out_dir = Path(options.out_dir)

    loaded = load_slices(paths, root_dirs)
    slices = loaded.slices

    top_level_modules = get_top_level_modules(loaded.input_names, slices)
    namespace_file_paths = get_namespace_file_paths(top_level_modules)
    type_scope = create_type_scope_from_slices(slices)

    for module, namespace_file_path in namespace_file_paths.items():
        _write_file(out_dir / namespace_file_path, generate_namespace(module), log)

        if options.index:
            _write_file(
                out_dir / f"{module}.js",
                generate_index_js(module, top_level_modules[module]),
                log,
            )
            _write_file(
                out_dir / f"{module}.d.ts",
                generate_index_typings(module, top_level_modules[module]),
                log,
            )

    for name in loaded.input_names:
        if not options.no_js:
            _write_file(
                out_dir / f"{name}.js",
                generate_js(name, slices, root_dirs, options.slice2js),
                log,
                name,
            )

        typings = generate_typings(
            type_scope,
            name,
            slices,
            namespace_file_paths,
            ignore=options.ignore,
            ice_imports=options.ice_imports,
            no_nullable_values=options.no_nullable_values,
            log=log,
        )
        _write_file(out_dir / f"{name}.d.ts", typings, log, name)

    return log


def _write_file(path: Path, contents: str, log: GenerationLog, slice_name: Optional[str] = None) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(contents, encoding="utf-8")
    log.log_event(EventKind.FILE_WRITTEN, slice_name, str(path))
