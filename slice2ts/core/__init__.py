"""Slice declaration model, type scopes and errors"""
