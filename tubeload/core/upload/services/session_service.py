"""
Session negotiation service.

Opens a resumable upload session sized to the exact payload length.
"""
from typing import Optional
import asyncio
import json
import time

import aiohttp

from ..models import UploadRequest, UploadSession
from ...api.config import APIConfig
from ...auth.models import Credential
from ...exceptions import SessionError, SessionLocatorMissingError
from ...logging import get_logger


class SessionNegotiator:
    """
    Negotiates resumable upload sessions.

    Responsibilities:
    - Declare payload size and media type ahead of the transfer
    - Send the video metadata document
    - Extract the session locator from the response
    """

    METADATA_CONTENT_TYPE = 'application/json; charset=UTF-8'

    def __init__(
        self,
        config: Optional[APIConfig] = None,
        session: Optional[aiohttp.ClientSession] = None
    ):
        """
        Initialize session negotiator.

        Args:
            config: Upload client configuration
            session: Optional shared HTTP session
        """
        self._config = config or APIConfig.default()
        self._session = session
        self._owns_session = False
        self._logger = get_logger('tubeload.upload.session')

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create HTTP session."""
        if self._session is None:
            self._session = aiohttp.ClientSession(
                connector=aiohttp.TCPConnector(**self._config.get_connector_kwargs()),
                **self._config.get_session_kwargs()
            )
            self._owns_session = True
        return self._session

    async def close(self):
        """Close session if we own it."""
        if self._owns_session and self._session:
            await self._session.close()
            self._session = None
            self._owns_session = False

    def build_headers(self, credential: Credential, request: UploadRequest) -> dict:
        """Headers for the negotiation call; size/type hints describe the media, not the body."""
        return {
            'Authorization': credential.authorization_header,
            'Content-Type': self.METADATA_CONTENT_TYPE,
            'X-Upload-Content-Length': str(request.total_bytes),
            'X-Upload-Content-Type': request.media_type,
        }

    def build_params(self) -> dict:
        return {
            'uploadType': 'resumable',
            'part': self._config.upload_parts,
        }

    async def open(self, credential: Credential, request: UploadRequest) -> UploadSession:
        """
        Open a resumable upload session.

        Args:
            credential: Bearer credential
            request: Upload request

        Returns:
            UploadSession holding the session locator

        Raises:
            SessionError: If the provider rejects the request or cannot be reached
            SessionLocatorMissingError: If a success response has no Location header
        """
        session = await self._get_session()
        body = json.dumps(request.to_metadata())
        size_mb = request.total_bytes / (1024 * 1024)
        self._logger.info(
            f"Creating upload session for '{request.title}' ({size_mb:.2f} MB, {request.media_type})"
        )

        start = time.time()
        try:
            async with session.post(
                self._config.upload_endpoint,
                params=self.build_params(),
                data=body,
                headers=self.build_headers(credential, request),
                **self._config.request_kwargs()
            ) as response:
                status = response.status
                if not 200 <= status < 300:
                    text = await response.text()
                    self._logger.error(f"Session negotiation rejected: HTTP {status}")
                    raise SessionError.from_response(
                        "Failed to create upload session", status, text
                    )

                location = response.headers.get('Location')
                if not location:
                    text = await response.text()
                    self._logger.error(f"Session negotiation returned HTTP {status} without Location")
                    raise SessionLocatorMissingError(
                        "Upload session missing Location header",
                        status=status,
                        body=text
                    )
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            self._logger.error(f"Session negotiation failed: {e!r}")
            raise SessionError(f"Failed to create upload session: {e!r}") from e

        self._logger.debug(f"Upload session created in {time.time() - start:.2f}s")
        return UploadSession(url=location, request=request)
