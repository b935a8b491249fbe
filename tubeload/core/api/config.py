"""
Upload client configuration.

Groups the OAuth client settings and the HTTP transport settings used by
the negotiator and the chunk uploader.
"""
from dataclasses import dataclass, field
from typing import Optional, Dict, Any, Tuple, Union
import ssl

import aiohttp


SCOPES: Tuple[str, ...] = (
    'https://www.googleapis.com/auth/youtube',
    'https://www.googleapis.com/auth/youtube.upload',
)

UPLOAD_ENDPOINT = 'https://www.googleapis.com/upload/youtube/v3/videos'
DEFAULT_CHUNK_SIZE = 8 * 1024 * 1024  # 8 MiB


@dataclass
class ProxyConfig:
    """
    HTTP(S) proxy for every upload call.

    Credentials travel as a Proxy-Authorization header rather than inside
    the URL.
    """
    url: str
    username: Optional[str] = None
    password: Optional[str] = None

    def to_request_kwargs(self) -> Dict[str, Any]:
        """Keyword arguments for aiohttp request methods."""
        kwargs: Dict[str, Any] = {'proxy': self.url}
        if self.username:
            kwargs['proxy_auth'] = aiohttp.BasicAuth(self.username, self.password or '')
        return kwargs


@dataclass
class SSLConfig:
    """TLS verification settings."""
    verify: bool = True
    ca_file: Optional[str] = None

    def create_ssl_context(self) -> Union[ssl.SSLContext, bool]:
        """Create an SSL context, or False to disable verification."""
        if not self.verify:
            return False
        return ssl.create_default_context(cafile=self.ca_file)


@dataclass
class TimeoutConfig:
    """
    Per-call timeouts in seconds.

    A whole chunk call has no overall cap; an 8 MiB window on a slow uplink
    is bounded by the socket read timeout instead.
    """
    connect: float = 30.0
    sock_read: float = 300.0
    total: Optional[float] = None

    def to_aiohttp_timeout(self) -> aiohttp.ClientTimeout:
        return aiohttp.ClientTimeout(
            total=self.total,
            connect=self.connect,
            sock_connect=self.connect,
            sock_read=self.sock_read
        )


@dataclass
class OAuthConfig:
    """
    OAuth client configuration.

    The client identifier is the only required value; scopes are fixed to
    the upload and management scopes.
    """
    client_id: str = ''
    client_secret: Optional[str] = None
    scopes: Tuple[str, ...] = SCOPES
    grant_timeout: float = 300.0  # Seconds to wait for the consent flow

    @property
    def is_configured(self) -> bool:
        """Returns True if a client identifier is available."""
        return bool(self.client_id)


@dataclass
class APIConfig:
    """
    Complete upload client configuration.

    Example:
        >>> config = APIConfig.for_client("1234.apps.googleusercontent.com", chunk_size=16 * 1024 * 1024)
    """
    upload_endpoint: str = UPLOAD_ENDPOINT
    upload_parts: str = 'snippet,status'
    user_agent: str = 'tubeload/1.0.0'
    chunk_size: int = DEFAULT_CHUNK_SIZE

    oauth: OAuthConfig = field(default_factory=OAuthConfig)
    proxy: Optional[ProxyConfig] = None
    ssl: SSLConfig = field(default_factory=SSLConfig)
    timeout: TimeoutConfig = field(default_factory=TimeoutConfig)
    extra_headers: Dict[str, str] = field(default_factory=dict)

    # Transfers are sequential; one upload never needs more than a couple of sockets
    limit_per_host: int = 2
    limit: int = 10

    def __post_init__(self):
        if self.chunk_size <= 0:
            raise ValueError("Chunk size must be positive")

    @classmethod
    def default(cls) -> 'APIConfig':
        return cls()

    @classmethod
    def for_client(cls, client_id: str, client_secret: Optional[str] = None, **kwargs) -> 'APIConfig':
        """Create configuration for an OAuth client."""
        return cls(
            oauth=OAuthConfig(client_id=client_id, client_secret=client_secret),
            **kwargs
        )

    @classmethod
    def with_proxy(cls, proxy_url: str, **kwargs) -> 'APIConfig':
        """Create configuration that routes uploads through a proxy."""
        return cls(proxy=ProxyConfig(url=proxy_url), **kwargs)

    def request_kwargs(self) -> Dict[str, Any]:
        """Per-request kwargs shared by negotiation and chunk calls."""
        return self.proxy.to_request_kwargs() if self.proxy else {}

    def get_connector_kwargs(self) -> Dict[str, Any]:
        """Get kwargs for aiohttp TCPConnector."""
        return {
            'limit': self.limit,
            'limit_per_host': self.limit_per_host,
            'ssl': self.ssl.create_ssl_context(),
        }

    def get_session_kwargs(self) -> Dict[str, Any]:
        """Get kwargs for aiohttp ClientSession."""
        return {
            'headers': {'User-Agent': self.user_agent, **self.extra_headers},
            'timeout': self.timeout.to_aiohttp_timeout(),
        }
