"""Upload API configuration and events."""
from .events import EventEmitter
from .config import (
    APIConfig,
    OAuthConfig,
    ProxyConfig,
    SSLConfig,
    TimeoutConfig,
    SCOPES,
    DEFAULT_CHUNK_SIZE
)

__all__ = [
    # Configuration
    'APIConfig',
    'OAuthConfig',
    'ProxyConfig',
    'SSLConfig',
    'TimeoutConfig',
    'SCOPES',
    'DEFAULT_CHUNK_SIZE',

    # Events
    'EventEmitter',
]
