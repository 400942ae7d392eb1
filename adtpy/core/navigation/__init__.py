"""Repository navigation: facet queries and flat package listings."""
from .facets import (
    FACET_QUERY_BUILDERS,
    GROUP,
    PACKAGE,
    ROOT_PACKAGE,
    TYPE,
    FacetContext,
    build_facet_query,
)
from .navigator import FacetNavigator
from .packages import PackageBrowser

__all__ = [
    'FacetNavigator',
    'PackageBrowser',
    'FacetContext',
    'FACET_QUERY_BUILDERS',
    'build_facet_query',
    'ROOT_PACKAGE',
    'PACKAGE',
    'GROUP',
    'TYPE',
]
