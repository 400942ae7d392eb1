"""Repository object operations: source retrieval and class creation."""
from .source import SourceFetcher
from .creator import ClassCreator, generate_class_source

__all__ = [
    'SourceFetcher',
    'ClassCreator',
    'generate_class_source',
]
