"""Slice parser"""

from .slice_parser import SliceParser, parse_slice, parse_includes

__all__ = ['SliceParser', 'parse_slice', 'parse_includes']
