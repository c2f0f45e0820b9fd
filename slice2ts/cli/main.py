"""Main CLI entry point for slice2ts"""

import argparse
import sys
from typing import List, Optional

from slice2ts.core.errors import Slice2TsError
from slice2ts.core.generation_log import GenerationLog
from slice2ts.generators.js_generator import DEFAULT_COMPILER
from slice2ts.project import Slice2TsOptions, slice2ts

ROOT_DIRS_HELP = """Root dirs.
Output files will have the same structure as source files relative to root dirs.
Ice includes are also resolved in these dirs, and in the slice dir of
zeroc-ice when it is installed."""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='slice2ts',
        description='Generate TypeScript typings for Ice Slice files',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  slice2ts --root-dir slices -o build slices/Foo/*.ice
  slice2ts --root-dir slices --root-dir /usr/share/ice/slice -o build --no-js 'slices/**/*.ice'
  slice2ts --root-dir slices -o build -i Foo::Internal --index slices/Foo.ice
        """
    )

    parser.add_argument('files', nargs='+', help='Slice file paths or globs')
    parser.add_argument(
        '--root-dir', dest='root_dirs', action='append', default=[], metavar='DIR',
        help=ROOT_DIRS_HELP
    )
    parser.add_argument(
        '-e', '--exclude', action='append', default=[], metavar='FILE',
        help='File paths or globs to exclude'
    )
    parser.add_argument(
        '-o', '--out-dir', required=True, metavar='DIR',
        help='Directory where to put generated files'
    )
    parser.add_argument(
        '--no-js', action='store_true',
        help='Only generate the typings'
    )
    parser.add_argument(
        '--ice-imports', action='store_true',
        help='Import Ice modules from particular files instead of "ice"'
    )
    parser.add_argument(
        '-i', '--ignore', action='append', default=[], metavar='TYPE',
        help="Don't generate typings for these types"
    )
    parser.add_argument(
        '--index', action='store_true',
        help='Generate an index file for each top-level slice module'
    )
    parser.add_argument(
        '--no-nullable-values', action='store_true',
        help="Don't add '| null' to class-typed fields and parameters"
    )
    parser.add_argument(
        '--slice2js', default=DEFAULT_COMPILER, metavar='PATH',
        help=f'slice2js executable (default: {DEFAULT_COMPILER})'
    )
    parser.add_argument(
        '--no-ice-slice-dir', dest='ice_slice_dir', action='store_false',
        help="Don't add the slice dir of an installed zeroc-ice to the root dirs"
    )
    parser.add_argument(
        '--verbose', '-v', action='store_true',
        help='Print a generation summary'
    )

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Main CLI entry point"""
    args = build_parser().parse_args(argv)

    options = Slice2TsOptions(
        files=args.files,
        exclude=args.exclude,
        root_dirs=args.root_dirs,
        out_dir=args.out_dir,
        no_js=args.no_js,
        ice_imports=args.ice_imports,
        ignore=args.ignore,
        index=args.index,
        no_nullable_values=args.no_nullable_values,
        slice2js=args.slice2js,
        ice_slice_dir=args.ice_slice_dir,
        verbose=args.verbose,
    )

    log = GenerationLog()

    try:
        slice2ts(options, log)
    except Slice2TsError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    for path in log.written_files():
        print(f"Generated: {path}")

    for warning in log.warnings:
        print(f"Warning: {warning}", file=sys.stderr)

    if options.verbose:
        print(log.print_summary(), file=sys.stderr)


if __name__ == '__main__':
    main()
