"""Slice loading and top-level namespace bookkeeping"""
