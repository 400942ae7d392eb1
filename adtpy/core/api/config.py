"""
Connection settings for an ADT system.

One APIConfig describes one SAP application server endpoint plus the
aiohttp transport options (TLS, proxy, timeouts, pool sizes) used to
reach it.
"""
import os
import ssl
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Optional

import aiohttp

from ..exceptions import ConfigError

ADT_PATH = '/sap/bc/adt'
OFFLINE_BASE_URL = f'http://test.sap.server:44300{ADT_PATH}'
HTTPS_PORT = '44300'

_TRUE_VALUES = ('1', 'true', 'yes')


@dataclass
class ProxyConfig:
    """Outbound HTTP proxy, e.g. a corporate proxy in front of the SAP host."""
    url: Optional[str] = None
    username: Optional[str] = None
    password: Optional[str] = None

    def request_kwargs(self) -> Dict[str, Any]:
        """Keyword arguments for ClientSession.request()."""
        if not self.url:
            return {}
        kwargs: Dict[str, Any] = {'proxy': self.url}
        if self.username:
            kwargs['proxy_auth'] = aiohttp.BasicAuth(self.username, self.password or '')
        return kwargs


@dataclass
class SSLConfig:
    """
    TLS settings.

    Development systems usually present a self-signed ICM certificate;
    either point ``ca_file`` at the exported system certificate or turn
    ``verify`` off.
    """
    verify: bool = True
    check_hostname: bool = True
    ca_file: Optional[str] = None
    client_cert: Optional[str] = None
    client_key: Optional[str] = None

    def create_ssl_context(self):
        """Build the context handed to the connector (False disables checks)."""
        if not self.verify:
            return False

        context = ssl.create_default_context(cafile=self.ca_file)
        context.check_hostname = self.check_hostname
        if self.client_cert:
            # X.509 client certificate logon
            context.load_cert_chain(self.client_cert, self.client_key)
        return context


@dataclass
class TimeoutConfig:
    """Transport timeouts in seconds; the request engine adds none of its own."""
    total: Optional[float] = 300.0
    connect: Optional[float] = 30.0
    sock_read: Optional[float] = 120.0
    sock_connect: Optional[float] = 30.0

    def to_aiohttp_timeout(self) -> aiohttp.ClientTimeout:
        return aiohttp.ClientTimeout(**asdict(self))


@dataclass
class APIConfig:
    """
    Complete ADT connection configuration.

    Attributes:
        host: SAP application server host
        port: ICM HTTP(S) port
        protocol: 'http' or 'https'; derived from the port when None
        sap_client: SAP client (mandant), sent as 'sap-client' header
        user_agent: Tool identifier sent on virtual-folder calls
        offline: Test/disconnected mode with a placeholder URL
        extra_headers: Headers added to every request
        max_connections: Connection pool size
        max_connections_per_host: Pool size towards the SAP host
    """
    host: Optional[str] = None
    port: str = '8000'
    protocol: Optional[str] = None
    sap_client: Optional[str] = None

    user_agent: str = 'adtpy/1.0.0'
    offline: bool = False

    proxy: Optional[ProxyConfig] = None
    ssl: SSLConfig = field(default_factory=SSLConfig)
    timeout: TimeoutConfig = field(default_factory=TimeoutConfig)
    extra_headers: Dict[str, str] = field(default_factory=dict)

    max_connections: int = 20
    max_connections_per_host: int = 6

    @classmethod
    def default(cls) -> 'APIConfig':
        return cls()

    @classmethod
    def offline_mode(cls, **kwargs) -> 'APIConfig':
        """Configuration for tests without a reachable system."""
        return cls(offline=True, **kwargs)

    @classmethod
    def insecure(cls, **kwargs) -> 'APIConfig':
        """Configuration that accepts any server certificate."""
        return cls(ssl=SSLConfig(verify=False, check_hostname=False), **kwargs)

    @classmethod
    def from_env(cls, **overrides) -> 'APIConfig':
        """
        Load connection settings from environment variables.

        Reads SAP_HOST, SAP_PORT, SAP_CLIENT, SAP_PROTOCOL and ADT_OFFLINE.
        Keyword overrides that are not None take precedence.
        """
        values: Dict[str, Any] = {
            'host': os.getenv('SAP_HOST'),
            'port': os.getenv('SAP_PORT', '8000'),
            'sap_client': os.getenv('SAP_CLIENT'),
            'protocol': os.getenv('SAP_PROTOCOL'),
            'offline': os.getenv('ADT_OFFLINE', '').lower() in _TRUE_VALUES,
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)

    @property
    def scheme(self) -> str:
        """URL scheme; https on the standard ADT HTTPS port unless set."""
        if self.protocol:
            return self.protocol.lower()
        return 'https' if str(self.port) == HTTPS_PORT else 'http'

    @property
    def base_url(self) -> str:
        """Base URL of the ADT service."""
        if self.offline:
            return OFFLINE_BASE_URL
        return f"{self.scheme}://{self.host}:{self.port}{ADT_PATH}"

    def validate(self) -> None:
        """
        Check the configuration before a client is built.

        Raises:
            ConfigError: If the host is missing or the port/protocol is invalid
        """
        if self.offline:
            return

        if not self.host:
            raise ConfigError(
                "SAP host not configured. Set SAP_HOST or pass host explicitly."
            )

        try:
            port = int(self.port)
        except (TypeError, ValueError):
            raise ConfigError(f"Invalid SAP port: {self.port!r}")
        if not 0 < port < 65536:
            raise ConfigError(f"SAP port out of range: {port}")

        if self.scheme not in ('http', 'https'):
            raise ConfigError(f"Unsupported protocol: {self.protocol!r}")

    def get_connector_kwargs(self) -> Dict[str, Any]:
        """Keyword arguments for aiohttp.TCPConnector."""
        return {
            'limit': self.max_connections,
            'limit_per_host': self.max_connections_per_host,
            'ssl': self.ssl.create_ssl_context(),
        }

    def get_session_kwargs(self) -> Dict[str, Any]:
        """Keyword arguments for aiohttp.ClientSession."""
        headers = dict(self.extra_headers)
        if self.sap_client:
            headers['sap-client'] = self.sap_client
        return {'headers': headers, 'timeout': self.timeout.to_aiohttp_timeout()}

    def get_request_kwargs(self) -> Dict[str, Any]:
        """Per-request keyword arguments (proxy settings)."""
        return self.proxy.request_kwargs() if self.proxy else {}
