"""
tubeload - Async direct-to-YouTube resumable uploads.

Usage:
    >>> from tubeload import YouTubeUploader
    >>>
    >>> async with YouTubeUploader(client_id="...") as yt:
    ...     result = await yt.upload("clip.mp4", title="My clip")
    ...     print(result.video_id)
"""
from .core.logging import setup_logging
from .client import YouTubeUploader

# Configuration
from .core.api import (
    APIConfig,
    OAuthConfig,
    ProxyConfig,
    SSLConfig,
    TimeoutConfig,
    SCOPES
)

# Authorization
from .core.auth import Credential, TokenProvider, InstalledAppTokenClient

# Upload pipeline
from .core.upload import (
    UploadCoordinator,
    UploadStatus,
    ChunkedTransferEngine,
    SessionNegotiator,
    FilePayload,
    BytesPayload,
    PrivacyStatus,
    UploadRequest,
    UploadSession,
    UploadResult,
    parse_tags
)

# Errors
from .core.exceptions import (
    UploadException,
    AuthorizationError,
    SessionError,
    SessionLocatorMissingError,
    TransferError,
    ProtocolError,
    UploadError
)

__version__ = '1.0.0'


__all__ = [
    'YouTubeUploader',
    'APIConfig',
    'OAuthConfig',
    'ProxyConfig',
    'SSLConfig',
    'TimeoutConfig',
    'SCOPES',
    'Credential',
    'TokenProvider',
    'InstalledAppTokenClient',
    'UploadCoordinator',
    'UploadStatus',
    'ChunkedTransferEngine',
    'SessionNegotiator',
    'FilePayload',
    'BytesPayload',
    'PrivacyStatus',
    'UploadRequest',
    'UploadSession',
    'UploadResult',
    'parse_tags',
    'UploadException',
    'AuthorizationError',
    'SessionError',
    'SessionLocatorMissingError',
    'TransferError',
    'ProtocolError',
    'UploadError',
    'setup_logging',
]
