"""Runtime JavaScript generation via the external slice2js compiler"""

import os
import re
import subprocess
import tempfile
import uuid
from pathlib import Path
from typing import Mapping, Sequence, Union

from slice2ts.core.errors import CompilerError
from slice2ts.generators.imports import generate_imports
from slice2ts.module_system.loader import LoadedSlice

DEFAULT_COMPILER = "slice2js"

ES6_METADATA = '[["js:es6-module"]]\n'

_IMPORTS_RE = re.compile(r'(^import.*\r?\n)+', re.MULTILINE)


def generate_js(
    slice_name: str,
    slices: Mapping[str, LoadedSlice],
    root_dirs: Sequence[Union[str, Path]],
    compiler: str = DEFAULT_COMPILER,
) -> str:
    """Compile a slice to an ES module

    The compiler's own imports are replaced by the ones generated for the
    typings so both files import the same modules.

    Raises:
        CompilerError: If the compiler fails or cannot be run
    """
    compiled = compile_slice_with_es6(slice_name, slices[slice_name], root_dirs, compiler)
    return generate_imports(slice_name, slices) + _IMPORTS_RE.sub("", compiled)


def compile_slice_with_es6(
    slice_name: str,
    loaded: LoadedSlice,
    root_dirs: Sequence[Union[str, Path]],
    compiler: str = DEFAULT_COMPILER,
) -> str:
    """Compile a copy of the slice with ES6 module metadata prepended

    Diagnostics mentioning the temporary copy are rewritten to point at
    the input slice; line numbers account for the metadata line.
    """
    unique_name = str(uuid.uuid4())
    temp_slice_path = os.path.join(tempfile.gettempdir(), f"{unique_name}.ice")

    with open(temp_slice_path, "w", encoding="utf-8") as f:
        f.write(ES6_METADATA + loaded.contents)

    try:
        source = compile_slice_raw(temp_slice_path, root_dirs, compiler)
    except CompilerError as e:
        message = re.sub(
            rf'^.*{re.escape(temp_slice_path)}:(\d+)',
            lambda match: f"{slice_name}.ice:{int(match.group(1)) - 1}",
            str(e),
            flags=re.MULTILINE,
        )
        raise CompilerError(message) from e
    finally:
        os.unlink(temp_slice_path)

    return (
        source
        .replace(os.path.basename(temp_slice_path), f"{slice_name}.ice", 1)
        .replace(unique_name, slice_name, 1)
    )


def compile_slice_raw(
    slice_path: str,
    root_dirs: Sequence[Union[str, Path]],
    compiler: str = DEFAULT_COMPILER,
) -> str:
    """Run the compiler on a slice file and return the generated source"""
    args = [compiler, *[f"-I{root_dir}" for root_dir in root_dirs], "--stdout", slice_path]

    try:
        result = subprocess.run(args, capture_output=True, text=True)
    except OSError as e:
        raise CompilerError(f"Cannot run {compiler}: {e}") from e

    if result.returncode != 0:
        raise CompilerError(result.stderr)

    return result.stdout
