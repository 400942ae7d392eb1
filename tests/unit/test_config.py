"""Tests for connection configuration."""
import aiohttp
import pytest

from adtpy.core.api import APIConfig, ProxyConfig, SSLConfig, TimeoutConfig
from adtpy.core.api.config import OFFLINE_BASE_URL
from adtpy.core.exceptions import ConfigError


class TestAPIConfig:
    """Test suite for APIConfig."""

    def test_base_url_http(self):
        """Test base URL on a plain HTTP port."""
        config = APIConfig(host='vhcala4hci', port='50000')

        assert config.base_url == 'http://vhcala4hci:50000/sap/bc/adt'

    def test_default_port(self):
        """Test default ICM port."""
        config = APIConfig(host='vhcala4hci')

        assert config.port == '8000'
        assert config.base_url == 'http://vhcala4hci:8000/sap/bc/adt'

    def test_https_port_selects_https(self):
        """Test port 44300 switches to https."""
        config = APIConfig(host='vhcala4hci', port='44300')

        assert config.scheme == 'https'
        assert config.base_url.startswith('https://vhcala4hci:44300')

    def test_explicit_protocol_wins(self):
        """Test explicit protocol overrides the port rule."""
        config = APIConfig(host='vhcala4hci', port='44300', protocol='HTTP')

        assert config.scheme == 'http'

    def test_offline_base_url(self):
        """Test offline mode uses the placeholder URL."""
        config = APIConfig.offline_mode()

        assert config.base_url == OFFLINE_BASE_URL
        config.validate()

    def test_validate_missing_host(self):
        """Test missing host is rejected."""
        with pytest.raises(ConfigError, match="SAP host not configured"):
            APIConfig().validate()

    @pytest.mark.parametrize('port', ['abc', '0', '70000'])
    def test_validate_bad_port(self, port):
        """Test invalid ports are rejected."""
        with pytest.raises(ConfigError):
            APIConfig(host='h', port=port).validate()

    def test_validate_bad_protocol(self):
        """Test unsupported protocols are rejected."""
        with pytest.raises(ConfigError, match="Unsupported protocol"):
            APIConfig(host='h', protocol='ftp').validate()

    def test_from_env(self, monkeypatch):
        """Test settings are read from the environment."""
        monkeypatch.setenv('SAP_HOST', 'envhost')
        monkeypatch.setenv('SAP_PORT', '44300')
        monkeypatch.setenv('SAP_CLIENT', '001')
        monkeypatch.delenv('SAP_PROTOCOL', raising=False)
        monkeypatch.delenv('ADT_OFFLINE', raising=False)

        config = APIConfig.from_env()

        assert config.host == 'envhost'
        assert config.sap_client == '001'
        assert config.base_url == 'https://envhost:44300/sap/bc/adt'

    def test_from_env_overrides(self, monkeypatch):
        """Test explicit overrides win and None overrides are ignored."""
        monkeypatch.setenv('SAP_HOST', 'envhost')
        monkeypatch.setenv('SAP_PORT', '8000')

        config = APIConfig.from_env(host='cli-host', port=None)

        assert config.host == 'cli-host'
        assert config.port == '8000'

    def test_from_env_offline_flag(self, monkeypatch):
        """Test ADT_OFFLINE enables offline mode."""
        monkeypatch.delenv('SAP_HOST', raising=False)
        monkeypatch.setenv('ADT_OFFLINE', 'true')

        config = APIConfig.from_env()

        assert config.offline
        config.validate()

    def test_session_kwargs_sap_client_header(self):
        """Test the SAP client is sent as a default header."""
        config = APIConfig(host='h', sap_client='100', extra_headers={'X-Test': '1'})

        headers = config.get_session_kwargs()['headers']

        assert headers == {'X-Test': '1', 'sap-client': '100'}

    def test_session_kwargs_without_client(self):
        """Test no sap-client header without a client."""
        headers = APIConfig(host='h').get_session_kwargs()['headers']

        assert 'sap-client' not in headers

    def test_insecure(self):
        """Test insecure preset disables verification."""
        config = APIConfig.insecure(host='h')

        assert config.get_connector_kwargs()['ssl'] is False


class TestTransportConfigs:
    """Test suite for proxy, SSL and timeout settings."""

    def test_proxy_with_credentials(self):
        """Test proxy credentials become proxy_auth."""
        config = APIConfig(host='h', proxy=ProxyConfig(url='http://proxy:3128', username='u', password='p'))

        kwargs = config.get_request_kwargs()

        assert kwargs['proxy'] == 'http://proxy:3128'
        assert kwargs['proxy_auth'] == aiohttp.BasicAuth('u', 'p')

    def test_proxy_without_url(self):
        """Test no proxy arguments without a proxy."""
        assert ProxyConfig().request_kwargs() == {}
        assert APIConfig(host='h').get_request_kwargs() == {}

    def test_ssl_context_created(self):
        """Test verifying SSL config builds a context."""
        context = SSLConfig().create_ssl_context()

        assert context is not False
        assert context.check_hostname is True

    def test_timeout_conversion(self):
        """Test timeouts map onto aiohttp ClientTimeout."""
        timeout = TimeoutConfig(total=10, connect=2, sock_read=5, sock_connect=2).to_aiohttp_timeout()

        assert timeout.total == 10
        assert timeout.sock_read == 5
