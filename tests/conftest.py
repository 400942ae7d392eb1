"""Pytest fixtures for adtpy tests."""
import asyncio
from dataclasses import dataclass, field
from typing import Dict, List, Optional

import pytest
from multidict import CIMultiDict

from adtpy.core.api import APIConfig, AsyncAPIClient

BASE_URL = 'http://sap.example.com:50000/sap/bc/adt'


DISCOVERY_XML = """<?xml version="1.0" encoding="utf-8"?>
<app:service xmlns:app="http://www.w3.org/2007/app" xmlns:atom="http://www.w3.org/2005/Atom">
  <app:workspace>
    <atom:title>Object Repository</atom:title>
    <app:collection href="/sap/bc/adt/repository/nodestructure">
      <atom:title>Node Structure</atom:title>
      <app:accept>application/xml</app:accept>
    </app:collection>
    <app:collection href="/sap/bc/adt/repository/informationsystem/virtualfolders/contents">
      <atom:title>Virtual Folders</atom:title>
      <app:accept>application/vnd.sap.adt.repository.virtualfolders.request.v1+xml</app:accept>
    </app:collection>
  </app:workspace>
  <app:workspace>
    <atom:title>Classes</atom:title>
    <app:collection href="/sap/bc/adt/oo/classes">
      <atom:title>Classes</atom:title>
    </app:collection>
  </app:workspace>
</app:service>
"""

NODESTRUCTURE_XML = """<?xml version="1.0" encoding="utf-8"?>
<asx:abap xmlns:asx="http://www.sap.com/abapxml" version="1.0">
  <asx:values>
    <DATA>
      <TREE_CONTENT>
        <SEU_ADT_REPOSITORY_OBJ_NODE>
          <OBJECT_TYPE>DEVC/K</OBJECT_TYPE>
          <OBJECT_NAME>ZTEST</OBJECT_NAME>
          <OBJECT_URI>/sap/bc/adt/packages/ZTEST</OBJECT_URI>
        </SEU_ADT_REPOSITORY_OBJ_NODE>
      </TREE_CONTENT>
    </DATA>
  </asx:values>
</asx:abap>
"""


def virtual_folders_xml(*entries: str) -> str:
    """Wrap entry elements in a virtualFoldersResult document."""
    body = '\n  '.join(entries)
    return (
        '<?xml version="1.0" encoding="utf-8"?>\n'
        '<vfs:virtualFoldersResult xmlns:vfs="http://www.sap.com/adt/ris/virtualFolders" objectCount="0">\n'
        f'  {body}\n'
        '</vfs:virtualFoldersResult>'
    )


@dataclass
class FakeCall:
    """One request seen by the fake transport."""
    method: str
    path: str
    headers: Dict[str, str]
    data: Optional[str] = None
    params: Optional[Dict[str, str]] = None

    @property
    def is_token_fetch(self) -> bool:
        return self.headers.get('X-CSRF-Token') == 'Fetch'


@dataclass
class FakeResponse:
    """Stand-in for aiohttp.ClientResponse."""
    status: int = 200
    body: str = ''
    reason: str = 'OK'
    headers: CIMultiDict = field(default_factory=CIMultiDict)

    async def text(self) -> str:
        await asyncio.sleep(0)
        return self.body

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        return False


def make_response(status=200, body='', headers=None, cookies=(), reason=None) -> FakeResponse:
    header_items = list((headers or {}).items())
    header_items += [('Set-Cookie', cookie) for cookie in cookies]
    return FakeResponse(
        status=status,
        body=body,
        reason=reason or ('OK' if status < 400 else 'Error'),
        headers=CIMultiDict(header_items)
    )


class FakeHTTPSession:
    """
    Stand-in for aiohttp.ClientSession.

    Responses are queued per (method, path); the last queued response of a
    route is repeated. Token fetches (X-CSRF-Token: Fetch) use the 'FETCH'
    method key.
    """

    def __init__(self, base_url: str = BASE_URL):
        self.base_url = base_url
        self.calls: List[FakeCall] = []
        self.closed = False
        self._routes: Dict[tuple, List] = {}
        self.on('FETCH', '/discovery', make_response(headers={'x-csrf-token': 'ABC123'}))
        self.on('GET', '/discovery', make_response(body=DISCOVERY_XML))

    def on(self, method: str, path: str, *responses):
        self._routes[(method, path)] = list(responses)
        return self

    def request(self, method, url, headers=None, data=None, params=None, **kwargs):
        path = url[len(self.base_url):] if url.startswith(self.base_url) else url
        call = FakeCall(method, path, dict(headers or {}), data, dict(params) if params else None)
        self.calls.append(call)

        key = ('FETCH' if call.is_token_fetch else method, path)
        queue = self._routes.get(key)
        if not queue:
            return make_response(404, f'no route for {key}')
        item = queue.pop(0) if len(queue) > 1 else queue[0]
        if isinstance(item, BaseException):
            raise item
        if callable(item):
            return item(call)
        return item

    async def close(self):
        self.closed = True

    # Inspection helpers

    def calls_to(self, method: str, path: str) -> List[FakeCall]:
        return [c for c in self.calls if c.method == method and c.path == path and not c.is_token_fetch]

    @property
    def token_fetches(self) -> List[FakeCall]:
        return [c for c in self.calls if c.is_token_fetch]

    @property
    def real_calls(self) -> List[FakeCall]:
        return [c for c in self.calls if not c.is_token_fetch]


@pytest.fixture
def config():
    """Configuration for a reachable test system."""
    return APIConfig(host='sap.example.com', port='50000')


@pytest.fixture
def fake_http():
    """Fake aiohttp session with discovery and token routes."""
    return FakeHTTPSession()


@pytest.fixture
def api(config, fake_http):
    """Request engine bound to the fake transport, not yet connected."""
    return AsyncAPIClient(config, http_session=fake_http)


@pytest.fixture
def connected_api(api):
    """Request engine with credentials already stored."""
    api.session.set_credentials('DEVELOPER', 'secret')
    return api
