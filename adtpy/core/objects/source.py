"""
Source code retrieval for ABAP repository objects.
"""
from typing import Awaitable, Callable, Dict
from urllib.parse import quote, urlsplit

from ..api import AsyncAPIClient
from ..api.config import ADT_PATH

SOURCE_MAIN = '/source/main'
TEXT_HEADERS = {'Accept': 'text/plain'}


def _segment(name: str) -> str:
    return quote(name.strip(), safe='')


def relative_uri(uri: str) -> str:
    """Turn an absolute or service-rooted URI into a path below the service root."""
    path = urlsplit(uri).path if '://' in uri else uri
    if not path.startswith('/'):
        path = f"/{path}"
    if path.startswith(ADT_PATH + '/'):
        path = path[len(ADT_PATH):]
    return path


class SourceFetcher:
    """
    Fetches source text of programs, classes, DDL sources and arbitrary
    object URIs.
    """

    def __init__(self, client: AsyncAPIClient):
        self._client = client
        self._by_kind: Dict[str, Callable[[str], Awaitable[str]]] = {
            'program': self.get_program_source,
            'prog': self.get_program_source,
            'class': self.get_class_source,
            'clas': self.get_class_source,
            'ddl': self.get_ddl_source,
            'ddls': self.get_ddl_source,
            'uri': self.get_object_source,
        }

    @property
    def kinds(self):
        return sorted(self._by_kind)

    async def _get_text(self, path: str) -> str:
        return await self._client.request(path, 'GET', headers=TEXT_HEADERS)

    async def get_program_source(self, name: str) -> str:
        return await self._get_text(f"/programs/programs/{_segment(name)}{SOURCE_MAIN}")

    async def get_class_source(self, name: str) -> str:
        return await self._get_text(f"/oo/classes/{_segment(name)}{SOURCE_MAIN}")

    async def get_ddl_source(self, name: str) -> str:
        return await self._get_text(f"/ddic/ddl/sources/{_segment(name)}{SOURCE_MAIN}")

    async def get_object_source(self, uri: str) -> str:
        """
        Fetch source for an object URI, e.g. from a facet node.

        '/source/main' is appended unless the URI already points at a source.
        """
        path = relative_uri(uri).rstrip('/')
        if '/source/' not in path:
            path = f"{path}{SOURCE_MAIN}"
        return await self._get_text(path)

    async def get_source(self, kind: str, name_or_uri: str) -> str:
        """
        Fetch source by object kind.

        Args:
            kind: program/prog, class/clas, ddl/ddls or uri (also
                ADT types like 'CLAS/OC')
            name_or_uri: Object name, or URI for kind 'uri'

        Raises:
            ValueError: If the kind is unknown
        """
        key = kind.split('/', 1)[0].lower()
        fetch = self._by_kind.get(key)
        if fetch is None:
            raise ValueError(f"Unknown source kind: {kind!r} (expected one of {', '.join(self.kinds)})")
        return await fetch(name_or_uri)
