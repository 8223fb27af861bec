"""Tests for client configuration."""
import ssl

import aiohttp

from pgrest.core.api import APIConfig, ProxyConfig, SSLConfig, TimeoutConfig


class TestProxyConfig:
    """Test suite for ProxyConfig."""

    def test_no_url(self):
        assert ProxyConfig().to_aiohttp_proxy() is None

    def test_plain_url(self):
        assert ProxyConfig(url='http://proxy:8080').to_aiohttp_proxy() == 'http://proxy:8080'

    def test_credentials_are_embedded(self):
        """Test username and password are inserted into the URL."""
        proxy = ProxyConfig(url='http://proxy:8080', username='u', password='p')

        assert proxy.to_aiohttp_proxy() == 'http://u:p@proxy:8080'


class TestSSLConfig:
    """Test suite for SSLConfig."""

    def test_verify_disabled(self):
        """Test aiohttp's ssl=False convention."""
        assert SSLConfig(verify=False).create_ssl_context() is False

    def test_default_context(self):
        context = SSLConfig().create_ssl_context()

        assert isinstance(context, ssl.SSLContext)
        assert context.check_hostname is True


class TestAPIConfig:
    """Test suite for APIConfig."""

    def test_defaults(self):
        config = APIConfig.default()

        assert config.base_url == 'http://localhost:3000'
        assert config.token is None
        assert config.default_headers() == {}

    def test_with_token(self):
        """Test the token becomes a bearer Authorization header."""
        config = APIConfig.with_token('https://db.example.com', 'jwt')

        assert config.base_url == 'https://db.example.com'
        assert config.default_headers() == {'Authorization': 'Bearer jwt'}

    def test_schema_and_extra_headers(self):
        """Test schema maps to Accept-Profile next to extra headers."""
        config = APIConfig(schema='api', extra_headers={'Prefer': 'count=exact'})

        assert config.default_headers() == {'Prefer': 'count=exact', 'Accept-Profile': 'api'}

    def test_default_headers_copy(self):
        """Test callers cannot mutate extra_headers through the result."""
        config = APIConfig(extra_headers={'X': '1'})
        config.default_headers()['Y'] = '2'

        assert config.extra_headers == {'X': '1'}

    def test_insecure(self):
        config = APIConfig.insecure(base_url='https://self-signed.local')

        assert config.ssl.verify is False
        assert config.get_connector_kwargs()['ssl'] is False

    def test_connector_kwargs(self):
        config = APIConfig(limit=5, limit_per_host=2)

        kwargs = config.get_connector_kwargs()

        assert kwargs['limit'] == 5
        assert kwargs['limit_per_host'] == 2

    def test_session_kwargs(self):
        """Test user agent and timeout reach the session kwargs."""
        config = APIConfig(user_agent='tests/1.0', timeout=TimeoutConfig(total=5.0))

        kwargs = config.get_session_kwargs()

        assert kwargs['headers'] == {'User-Agent': 'tests/1.0'}
        assert isinstance(kwargs['timeout'], aiohttp.ClientTimeout)
        assert kwargs['timeout'].total == 5.0
