"""slice2ts - TypeScript typings for ZeroC Ice Slice files"""

from slice2ts.core.errors import (
    CompilerError,
    GenerationError,
    ModuleNotFound,
    NamingConflict,
    Slice2TsError,
    SliceLoadError,
    SliceSyntaxError,
    TypeNotFound,
    UnsupportedConstruct,
)
from slice2ts.core.generation_log import EventKind, GenerationLog
from slice2ts.project import Slice2TsOptions, slice2ts

__version__ = '0.1.0'

__all__ = [
    'CompilerError',
    'EventKind',
    'GenerationError',
    'GenerationLog',
    'ModuleNotFound',
    'NamingConflict',
    'Slice2TsError',
    'Slice2TsOptions',
    'SliceLoadError',
    'SliceSyntaxError',
    'TypeNotFound',
    'UnsupportedConstruct',
    'slice2ts',
]
