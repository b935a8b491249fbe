"""
YouTubeUploader - High-level async client for direct resumable uploads.

Example:
    >>> async with YouTubeUploader(client_id="...apps.googleusercontent.com") as yt:
    ...     result = await yt.upload("clip.mp4", title="My clip")
    ...     print(result.watch_url)
"""
from datetime import datetime
from pathlib import Path
from typing import Optional, Union, Iterable

import aiohttp

from .core.api import APIConfig, OAuthConfig, EventEmitter
from .core.auth import Credential, TokenProvider, TokenClientFactory
from .core.upload import (
    UploadCoordinator,
    ChunkedTransferEngine,
    SessionNegotiator,
    ChunkUploader,
    FixedSizeChunkingStrategy,
    FilePayload,
    PrivacyStatus,
    UploadRequest,
    UploadResult
)
from .core.upload.protocols import MediaPayloadProtocol, ProgressCallback, StatusCallback
from .core.logging import get_logger


logger = get_logger('tubeload.client')


class YouTubeUploader:
    """
    High-level async client: one token provider, one HTTP session.

    The HTTP session is opened on entry and closed on exit. The cached
    credential lives as long as this object and is never written to disk.
    """

    def __init__(
        self,
        client_id: Optional[str] = None,
        client_secret: Optional[str] = None,
        config: Optional[APIConfig] = None,
        token_client_factory: Optional[TokenClientFactory] = None
    ):
        """
        Initialize uploader.

        Args:
            client_id: OAuth client identifier (overrides config.oauth)
            client_secret: OAuth client secret (overrides config.oauth)
            config: Upload client configuration
            token_client_factory: Custom interactive token client factory
        """
        self._config = config or APIConfig.default()
        if client_id is not None:
            self._config.oauth = OAuthConfig(
                client_id=client_id,
                client_secret=client_secret,
                scopes=self._config.oauth.scopes,
                grant_timeout=self._config.oauth.grant_timeout
            )
        self._tokens = TokenProvider(self._config.oauth, token_client_factory)
        self._events = EventEmitter()
        self._session: Optional[aiohttp.ClientSession] = None
        self._connector: Optional[aiohttp.TCPConnector] = None
        self._coordinator: Optional[UploadCoordinator] = None

    @property
    def config(self) -> APIConfig:
        """Get current configuration."""
        return self._config

    @property
    def tokens(self) -> TokenProvider:
        return self._tokens

    @property
    def ready(self) -> bool:
        """Returns True when uploads can be started."""
        return self._tokens.ready

    @property
    def is_authorized(self) -> bool:
        return self._tokens.credential is not None

    def on(self, event: str, callback) -> 'YouTubeUploader':
        """Register a handler for 'status', 'progress' or 'error' events."""
        self._events.on(event, callback)
        return self

    def off(self, event: str, callback=None) -> 'YouTubeUploader':
        self._events.off(event, callback)
        return self

    async def __aenter__(self) -> 'YouTubeUploader':
        await self._ensure_session()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def _ensure_session(self) -> aiohttp.ClientSession:
        """Ensure session is created and open, and wire the pipeline to it."""
        if self._session is None or self._session.closed:
            self._connector = aiohttp.TCPConnector(
                **self._config.get_connector_kwargs()
            )
            self._session = aiohttp.ClientSession(
                connector=self._connector,
                **self._config.get_session_kwargs()
            )
            engine = ChunkedTransferEngine(
                ChunkUploader(self._config, self._session),
                FixedSizeChunkingStrategy(self._config.chunk_size)
            )
            self._coordinator = UploadCoordinator(
                SessionNegotiator(self._config, self._session),
                engine,
                self._events
            )
        return self._session

    async def close(self):
        """Close client and release resources."""
        if self._session and not self._session.closed:
            await self._session.close()
        self._session = None
        self._connector = None
        self._coordinator = None

    async def authorize(self, force: bool = False) -> Credential:
        """
        Obtain a credential now.

        Args:
            force: Run a new grant even if a credential is cached

        Returns:
            Credential
        """
        if force:
            return await self._tokens.reauthorize()
        return await self._tokens.ensure_token()

    def build_request(
        self,
        source: Union[str, Path, MediaPayloadProtocol],
        title: Optional[str] = None,
        description: str = '',
        tags: Iterable[str] = (),
        privacy: Union[str, PrivacyStatus] = PrivacyStatus.PRIVATE,
        publish_at: Optional[datetime] = None,
        media_type: Optional[str] = None,
        category_id: Optional[str] = None
    ) -> UploadRequest:
        """
        Build an UploadRequest.

        Title defaults to the file name without its extension.
        """
        if isinstance(source, (str, Path)):
            payload = FilePayload(source, media_type=media_type)
        else:
            payload = source

        if not title:
            title = Path(payload.name).stem if payload.name else ''

        kwargs = {}
        if category_id:
            kwargs['category_id'] = category_id

        return UploadRequest(
            payload=payload,
            title=title,
            description=description,
            tags=tuple(tags),
            privacy=PrivacyStatus(privacy),
            publish_at=publish_at,
            **kwargs
        )

    async def upload(
        self,
        source: Union[str, Path, MediaPayloadProtocol, UploadRequest],
        title: Optional[str] = None,
        description: str = '',
        tags: Iterable[str] = (),
        privacy: Union[str, PrivacyStatus] = PrivacyStatus.PRIVATE,
        publish_at: Optional[datetime] = None,
        on_status: Optional[StatusCallback] = None,
        on_progress: Optional[ProgressCallback] = None
    ) -> UploadResult:
        """
        Upload a video: authorize, create session, transfer.

        Args:
            source: File path, payload, or a prepared UploadRequest
            title: Video title (defaults to file stem)
            description: Video description
            tags: Tags
            privacy: 'private', 'unlisted' or 'public'
            publish_at: Optional scheduled publication instant
            on_status: Optional callback for status transitions
            on_progress: Optional callback for integer percentages

        Returns:
            UploadResult

        Raises:
            UploadError: If any step fails
            FileNotFoundError: If the file doesn't exist
            ValueError: If the request is malformed (empty file, no title)
        """
        if isinstance(source, UploadRequest):
            request = source
        else:
            request = self.build_request(
                source,
                title=title,
                description=description,
                tags=tags,
                privacy=privacy,
                publish_at=publish_at
            )

        await self._ensure_session()
        logger.info(f"Starting upload: {request.payload.name or request.title}")
        return await self._coordinator.run(
            request,
            self._tokens,
            on_status=on_status,
            on_progress=on_progress
        )
