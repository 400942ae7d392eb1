"""
XML layer for the ADT wire protocol.

- builders: request documents (virtual-folder queries, class definitions)
- parsers: response documents (node structures, virtual folders, discovery)
"""
from .builders import VirtualFoldersQuery, build_class_document
from .parsers import (
    parse_discovery,
    parse_repository_nodes,
    parse_virtual_folders,
)

__all__ = [
    'VirtualFoldersQuery',
    'build_class_document',
    'parse_discovery',
    'parse_repository_nodes',
    'parse_virtual_folders',
]
