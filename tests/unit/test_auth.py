"""Tests for the authentication service."""
import aiohttp
import pytest

from adtpy.core.api import AsyncAuthService
from adtpy.core.exceptions import AuthError, ProtocolError, TransportError
from adtpy.core.session import ConnectionState

from conftest import make_response


@pytest.fixture
def auth(api):
    return AsyncAuthService(api)


class TestConnect:
    """Test suite for set_credentials."""

    @pytest.mark.asyncio
    async def test_connect_checks_discovery(self, auth, fake_http):
        """Test a successful discovery check connects the session."""
        info = await auth.set_credentials('DEVELOPER', 'secret')

        assert info.is_connected
        assert info.username == 'DEVELOPER'
        assert info.url == 'http://sap.example.com:50000/sap/bc/adt'
        assert auth.session.state == ConnectionState.CONNECTED
        assert len(fake_http.calls_to('GET', '/discovery')) == 1

    @pytest.mark.asyncio
    async def test_rejected_credentials(self, auth, fake_http):
        """Test a 401 leaves the session disconnected."""
        fake_http.on('FETCH', '/discovery', make_response(401, 'Logon failed', reason='Unauthorized'))

        with pytest.raises(AuthError) as exc_info:
            await auth.set_credentials('DEVELOPER', 'wrong')

        assert exc_info.value.status == 401
        assert not auth.get_connection_info().is_connected
        assert auth.session.credentials is None

    @pytest.mark.asyncio
    async def test_discovery_http_error_becomes_auth_error(self, auth, fake_http):
        """Test any non-2xx discovery answer fails the connect."""
        fake_http.on('GET', '/discovery', make_response(503, 'Service unavailable', reason='Service Unavailable'))

        with pytest.raises(AuthError) as exc_info:
            await auth.set_credentials('DEVELOPER', 'secret')

        assert exc_info.value.status == 503
        assert exc_info.value.body == 'Service unavailable'
        assert "discovery failed" in str(exc_info.value)
        assert not auth.session.is_connected

    @pytest.mark.asyncio
    async def test_unreachable_system(self, auth, fake_http):
        """Test transport failures propagate and disconnect."""
        fake_http.on('FETCH', '/discovery', aiohttp.ClientConnectionError('Connection refused'))

        with pytest.raises(TransportError):
            await auth.set_credentials('DEVELOPER', 'secret')

        assert not auth.session.is_connected

    @pytest.mark.asyncio
    async def test_reconnect_as_other_user(self, auth, fake_http):
        """Test a second connect replaces the user."""
        await auth.set_credentials('DEVELOPER', 'secret')
        info = await auth.set_credentials('TESTER', 'other')

        assert info.username == 'TESTER'
        assert len(fake_http.token_fetches) == 2


class TestDisconnect:
    """Test suite for disconnect and connection info."""

    @pytest.mark.asyncio
    async def test_disconnect(self, auth):
        """Test disconnect clears user and token."""
        await auth.set_credentials('DEVELOPER', 'secret')

        auth.disconnect()

        info = auth.get_connection_info()
        assert not info.is_connected
        assert info.username is None
        assert auth.session.csrf_token is None

    def test_disconnect_idempotent(self, auth):
        """Test disconnecting a disconnected session is harmless."""
        auth.disconnect()
        auth.disconnect()

        assert auth.get_connection_info().username is None

    @pytest.mark.asyncio
    async def test_request_after_disconnect(self, auth, api):
        """Test requests fail once disconnected."""
        await auth.set_credentials('DEVELOPER', 'secret')
        auth.disconnect()

        with pytest.raises(AuthError):
            await api.request('/discovery')

    def test_connection_info_without_io(self, auth, fake_http):
        """Test connection info is a pure read."""
        info = auth.get_connection_info()

        assert info.url.endswith('/sap/bc/adt')
        assert fake_http.calls == []


class TestDiscover:
    """Test suite for the discovery document."""

    @pytest.mark.asyncio
    async def test_discover_collections(self, auth, fake_http):
        """Test discovery lists advertised collections."""
        await auth.set_credentials('DEVELOPER', 'secret')

        collections = await auth.discover()

        assert [c.href for c in collections] == [
            '/sap/bc/adt/repository/nodestructure',
            '/sap/bc/adt/repository/informationsystem/virtualfolders/contents',
            '/sap/bc/adt/oo/classes',
        ]
        assert collections[0].workspace == 'Object Repository'
        assert collections[2].workspace == 'Classes'
        assert fake_http.calls_to('GET', '/discovery')[-1].headers['Accept'] == 'application/atomsvc+xml'

    @pytest.mark.asyncio
    async def test_discover_malformed(self, auth, fake_http):
        """Test an HTML answer raises ProtocolError."""
        auth.session.set_credentials('DEVELOPER', 'secret')
        fake_http.on('GET', '/discovery', make_response(body='<html><body>Logon</body></html>'))

        with pytest.raises(ProtocolError):
            await auth.discover()
