"""
Async ADT request engine.

Issues authenticated HTTP requests against the ADT service, manages the
CSRF token and classifies failures.
"""
import asyncio
from typing import Dict, Optional, Mapping
import aiohttp

from .config import APIConfig
from ..exceptions import AuthError, HttpError, TransportError
from ..logging import get_logger, truncate
from ..session import AdtSession

DISCOVERY_PATH = '/discovery'
CSRF_HEADER = 'X-CSRF-Token'


class AsyncAPIClient:
    """
    Asynchronous ADT request engine.

    Features:
    - Basic authentication from the shared AdtSession
    - CSRF token fetch before every non-GET request
    - Token refresh and writes serialized through one lock; reads run
      concurrently once a token exists
    - Full response body kept on every failure

    Example:
        >>> config = APIConfig(host='vhcala4hci', port='50000')
        >>> async with AsyncAPIClient(config) as client:
        ...     client.session.set_credentials('DEVELOPER', 'secret')
        ...     xml = await client.request('/discovery')
    """

    def __init__(
        self,
        config: Optional[APIConfig] = None,
        session: Optional[AdtSession] = None,
        http_session: Optional[aiohttp.ClientSession] = None
    ):
        """
        Initialize the request engine.

        Args:
            config: Connection configuration (validated here)
            session: Session state; created from the config when omitted
            http_session: Optional shared aiohttp session (not closed by us)

        Raises:
            ConfigError: If the configuration has no usable host
        """
        self._config = config or APIConfig.default()
        self._config.validate()
        self._session = session or AdtSession(self._config.base_url)
        self._http = http_session
        self._owns_http = http_session is None
        self._connector: Optional[aiohttp.TCPConnector] = None
        self._logger = get_logger('adtpy.api')

    @property
    def config(self) -> APIConfig:
        return self._config

    @property
    def session(self) -> AdtSession:
        return self._session

    async def __aenter__(self) -> 'AsyncAPIClient':
        await self._ensure_session()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def _ensure_session(self) -> aiohttp.ClientSession:
        """Ensure the aiohttp session is created and open."""
        if self._http is None or self._http.closed:
            self._connector = aiohttp.TCPConnector(
                **self._config.get_connector_kwargs()
            )
            # Cookies are forwarded explicitly, see _fetch_csrf_token
            self._http = aiohttp.ClientSession(
                connector=self._connector,
                cookie_jar=aiohttp.DummyCookieJar(),
                **self._config.get_session_kwargs()
            )
            self._owns_http = True
        return self._http

    async def close(self):
        """Close the transport if this client created it."""
        if self._owns_http and self._http and not self._http.closed:
            await self._http.close()
        self._http = None if self._owns_http else self._http

        if self._connector and not self._connector.closed:
            await self._connector.close()
        self._connector = None

    def _build_url(self, path: str) -> str:
        if not path.startswith('/'):
            path = f"/{path}"
        return f"{self._session.base_url}{path}"

    def _base_headers(self, extra: Optional[Mapping[str, str]] = None) -> Dict[str, str]:
        headers = {
            'Authorization': f"Basic {self._session.credentials}",
            'Accept': '*/*',
        }
        if self._session.cookie:
            headers['Cookie'] = self._session.cookie
        if extra:
            headers.update(extra)
        return headers

    @staticmethod
    def _select_cookie(set_cookies) -> Optional[str]:
        """Pick the cookie to forward: the second one wins when present."""
        cookies = [c for c in set_cookies if c]
        if not cookies:
            return None
        chosen = cookies[1] if len(cookies) > 1 else cookies[0]
        return chosen.split(';', 1)[0].strip()

    async def _fetch_csrf_token(self) -> Optional[str]:
        """
        Fetch a fresh CSRF token from the discovery endpoint.

        Must be called with the session's token_lock held.
        """
        http = await self._ensure_session()
        url = self._build_url(DISCOVERY_PATH)
        headers = {
            'Accept': '*/*',
            'Authorization': f"Basic {self._session.credentials}",
            CSRF_HEADER: 'Fetch',
        }
        if self._session.cookie:
            headers['Cookie'] = self._session.cookie

        self._logger.debug(f"Fetching CSRF token from {url}")
        try:
            async with http.request(
                'GET',
                url,
                headers=headers,
                **self._config.get_request_kwargs()
            ) as response:
                status = response.status
                reason = response.reason or ''
                token = response.headers.get('x-csrf-token', '')
                cookie = self._select_cookie(response.headers.getall('Set-Cookie', []))
                body = await response.text()
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            self._logger.error(f"Network error fetching CSRF token: {e}")
            raise TransportError(f"Network error: {e}", 'GET', url) from e

        if status == 401:
            self._logger.error(f"CSRF token fetch rejected ({status} {reason}): {body}")
            self._session.clear()
            raise AuthError("SAP rejected the credentials", status, reason, body)

        if not 200 <= status < 300:
            # The request that needed the token is still sent; its answer decides
            self._logger.error(f"CSRF token fetch failed ({status} {reason}): {body}")
        elif not token:
            self._logger.warning(f"No CSRF token in discovery response ({status} {reason})")

        self._session.csrf_token = token
        if cookie:
            self._session.cookie = cookie
        return token

    async def request(
        self,
        path: str,
        method: str = 'GET',
        body: Optional[str] = None,
        headers: Optional[Mapping[str, str]] = None,
        params: Optional[Mapping[str, str]] = None
    ) -> str:
        """
        Make an authenticated request to the ADT service.

        Args:
            path: Path below the service root, e.g. '/discovery'
            method: HTTP method
            body: Raw request body
            headers: Extra headers; these win over the defaults
            params: Query string parameters

        Returns:
            Response body as text

        Raises:
            AuthError: If not connected or the server answers 401
            HttpError: If the response status is not 2xx
            TransportError: If no response was received
        """
        method = method.upper()
        if not self._session.is_connected:
            raise AuthError("Not connected to SAP")

        lock = self._session.token_lock

        if method == 'GET':
            if not self._session.csrf_token:
                async with lock:
                    if not self._session.csrf_token:
                        await self._fetch_csrf_token()
            return await self._send(method, path, body, headers, params)

        async with lock:
            await self._fetch_csrf_token()
            return await self._send(method, path, body, headers, params)

    async def _send(
        self,
        method: str,
        path: str,
        body: Optional[str],
        headers: Optional[Mapping[str, str]],
        params: Optional[Mapping[str, str]]
    ) -> str:
        http = await self._ensure_session()
        url = self._build_url(path)
        request_headers = self._base_headers(headers)
        if method != 'GET':
            request_headers[CSRF_HEADER] = self._session.csrf_token or ''

        self._logger.debug(f"{method} {url} params={dict(params) if params else {}}")
        if body:
            self._logger.debug(f"Request body: {truncate(body, 300)}")

        try:
            async with http.request(
                method,
                url,
                data=body,
                headers=request_headers,
                params=params,
                **self._config.get_request_kwargs()
            ) as response:
                status = response.status
                reason = response.reason or ''
                response_text = await response.text()
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            self._logger.error(f"Network error on {method} {url}: {e}")
            raise TransportError(f"Network error: {e}", method, url) from e

        self._logger.debug(f"Response {status}: {truncate(response_text)}")

        if status == 401:
            self._logger.error(f"{method} {url} unauthorized ({status} {reason}): {response_text}")
            self._session.clear()
            raise AuthError("SAP rejected the credentials", status, reason, response_text)

        if not 200 <= status < 300:
            self._logger.error(f"{method} {url} failed ({status} {reason}): {response_text}")
            raise HttpError(status, reason, response_text)

        return response_text
