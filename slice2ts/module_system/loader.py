"""Slice loading for slice2ts

Loads input slices and, transitively, every slice they include. Slice
names are paths relative to a root dir without the ``.ice`` extension,
e.g. ``Ice/Identity``.
"""

import os
from collections import deque
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Deque, Dict, List, Optional, Sequence, Union

from slice2ts.core.declarations import SliceSource
from slice2ts.core.errors import SliceLoadError, SliceSyntaxError
from slice2ts.parser import parse_slice

ParseFunction = Callable[[str], SliceSource]


@dataclass
class LoadedSlice:
    """Contents and parse result of one slice file"""
    root_dir: Path
    contents: str
    parsed: SliceSource


@dataclass
class LoadResult:
    """Result of loading a set of input slices

    Attributes:
        input_names: Names of the input slices, in input order
        slices: Every loaded slice, including included ones
    """
    input_names: List[str] = field(default_factory=list)
    slices: Dict[str, LoadedSlice] = field(default_factory=dict)


def slice_name_for_path(path: Union[str, Path], root_dirs: Sequence[Path]) -> str:
    """Module-relative slice name of an input path

    When the path lies inside several root dirs the shortest relative
    path wins.

    Raises:
        SliceLoadError: If the path is outside every root dir or does not
            have the ``.ice`` extension
    """
    abs_path = Path(os.path.abspath(path))
    relative: Optional[Path] = None

    for root_dir in root_dirs:
        try:
            candidate = abs_path.relative_to(Path(os.path.abspath(root_dir)))
        except ValueError:
            continue
        if relative is None or len(str(candidate)) < len(str(relative)):
            relative = candidate

    if relative is None:
        raise SliceLoadError(f"Slice file {path} is not contained in any of the root dirs")

    if relative.suffix != ".ice":
        raise SliceLoadError(f"Invalid slice file extension: {relative.as_posix()}")

    return relative.with_suffix("").as_posix()


def load_slices(
    paths: Sequence[Union[str, Path]],
    root_dirs: Sequence[Path],
    parse: ParseFunction = parse_slice,
) -> LoadResult:
    """Load input slices and their includes

    Every slice is loaded at most once, however many slices include it.

    Args:
        paths: Input slice file paths
        root_dirs: Dirs in which input slices live and includes are resolved
        parse: Parser collaborator

    Returns:
        Input slice names and every loaded slice

    Raises:
        SliceLoadError: If a slice cannot be located, read or parsed
    """
    result = LoadResult()
    for path in paths:
        name = slice_name_for_path(path, root_dirs)
        if name not in result.input_names:
            result.input_names.append(name)

    queue: Deque[str] = deque(result.input_names)
    while queue:
        name = queue.popleft()
        if name in result.slices:
            continue

        loaded = load_slice(name, root_dirs, parse)
        result.slices[name] = loaded

        for include in loaded.parsed.includes:
            if include not in result.slices:
                queue.append(include)

    return result


def load_slice(
    slice_name: str,
    root_dirs: Sequence[Path],
    parse: ParseFunction = parse_slice,
) -> LoadedSlice:
    """Read and parse one slice from the first root dir that has it

    Args:
        slice_name: Module-relative slice name, e.g. ``Ice/Identity``
        root_dirs: Dirs to look in, in order
        parse: Parser collaborator

    Raises:
        SliceLoadError: If no root dir has a readable slice of that name or
            the slice fails to parse
    """
    slice_path = f"{slice_name}.ice"

    for root_dir in root_dirs:
        try:
            contents = (Path(root_dir) / slice_path).read_text(encoding="utf-8")
        except OSError:
            continue

        try:
            parsed = parse(contents)
        except SliceSyntaxError as e:
            raise SliceLoadError(f"{slice_path}\n{e}") from e

        return LoadedSlice(root_dir=Path(root_dir), contents=contents, parsed=parsed)

    raise SliceLoadError(f"Failed to load slice file: {slice_path}")
