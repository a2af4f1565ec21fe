"""Retrieval: ranking chunks against a query and packing them into context."""

from .assembler import CONTEXT_SEPARATOR, ContextAssembler

__all__ = ["CONTEXT_SEPARATOR", "ContextAssembler"]
