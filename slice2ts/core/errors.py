"""Error types for slice2ts

Slice2TsError (base)
  ModuleNotFound        qualifier segment of a type name has no module binding
  TypeNotFound          terminal name has no declaration after full outward search
  NamingConflict        two concrete declarations bound to one name in one scope
  UnsupportedConstruct  valid Slice that has no TypeScript mapping
  SliceSyntaxError      parser failure
  SliceLoadError        slice file cannot be located, read or parsed
  CompilerError         slice2js failure, with a line-numbered diagnostic
  GenerationError       any of the above raised while generating one file
"""

from typing import Optional


class Slice2TsError(Exception):
    """Base class for all slice2ts errors"""


class ModuleNotFound(Slice2TsError):
    """Qualified type name refers to a module that cannot be found"""

    def __init__(self, module: str) -> None:
        self.module = module
        super().__init__(f"Module not found: {module}")


class TypeNotFound(Slice2TsError):
    """Type name could not be resolved from any enclosing scope"""

    def __init__(self, type_name: str) -> None:
        self.type_name = type_name
        super().__init__(f"Type not found: {type_name}")


class NamingConflict(Slice2TsError):
    """Name is bound twice in the same scope"""

    def __init__(self, qualified_name: str, existing: str, new: str) -> None:
        self.qualified_name = qualified_name
        super().__init__(
            f"Naming conflict: {qualified_name} is already declared as {existing}, "
            f"cannot redeclare it as {new}"
        )


class UnsupportedConstruct(Slice2TsError):
    """Slice construct that cannot be expressed in TypeScript typings"""


class SliceSyntaxError(Slice2TsError):
    """Slice source could not be parsed

    Attributes:
        line: 1-based line of the offending token, if known
        column: 1-based column of the offending token, if known
    """

    def __init__(self, message: str, line: Optional[int] = None, column: Optional[int] = None) -> None:
        self.line = line
        self.column = column
        location = f"{line}:{column}: " if line is not None else ""
        super().__init__(f"{location}{message}")


class SliceLoadError(Slice2TsError):
    """Slice file could not be located, read or parsed"""


class CompilerError(Slice2TsError):
    """External slice2js compiler reported an error"""


class GenerationError(Slice2TsError):
    """Error raised while generating output for a single slice

    Attributes:
        slice_name: Module-relative slice name, e.g. ``Ice/Identity``
        cause: Original exception
    """

    def __init__(self, slice_name: str, cause: BaseException) -> None:
        self.slice_name = slice_name
        self.cause = cause
        super().__init__(f"{slice_name}: {cause}")
