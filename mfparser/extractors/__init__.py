"""Extraction sub-package: tree access, classification and value extraction."""

from .builder import ItemBuilder
from .counter import count_document
from .rels import extract_rels
from .roots import RootSpec, classify_root, iter_roots
from .tree import DepthLimitError, check_depth, load_document
from .urlnorm import resolve_url

__all__ = [
    "DepthLimitError",
    "ItemBuilder",
    "RootSpec",
    "check_depth",
    "classify_root",
    "count_document",
    "extract_rels",
    "iter_roots",
    "load_document",
    "resolve_url",
]
