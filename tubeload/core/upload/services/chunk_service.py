"""
Chunk upload service.

Sends individual payload windows to a resumable session locator.
"""
from dataclasses import dataclass
from typing import Optional
import asyncio
import time

import aiohttp

from ..models import ChunkInfo
from ...api.config import APIConfig
from ...exceptions import TransferError
from ...logging import get_logger


RESUME_INCOMPLETE = 308


@dataclass(frozen=True)
class ChunkResponse:
    """
    Provider answer to one chunk call.

    Attributes:
        status: HTTP status code
        body: Response body text
        range_header: 'Range' header acknowledging persisted bytes, if any
    """
    status: int
    body: str = ''
    range_header: Optional[str] = None

    @property
    def is_resume_incomplete(self) -> bool:
        return self.status == RESUME_INCOMPLETE

    @property
    def is_success(self) -> bool:
        return 200 <= self.status < 300

    def acknowledged_offset(self) -> Optional[int]:
        """
        Offset after the last byte the provider reports as persisted.

        Parses 'bytes=0-N' (returns N + 1). Returns None when the header is
        absent or malformed.
        """
        if not self.range_header:
            return None
        value = self.range_header.strip()
        if '=' in value:
            value = value.split('=', 1)[1]
        start_end = value.split('-', 1)
        if len(start_end) != 2 or not start_end[1].strip().isdigit():
            return None
        return int(start_end[1]) + 1


class ChunkUploader:
    """
    Uploads payload windows to a session locator.

    Reuses the HTTP session for all chunks.

    Responsibilities:
    - PUT one window with its Content-Range
    - Return the raw provider answer for interpretation
    """

    def __init__(
        self,
        config: Optional[APIConfig] = None,
        session: Optional[aiohttp.ClientSession] = None
    ):
        """
        Initialize chunk uploader.

        Args:
            config: Upload client configuration
            session: Optional shared session (RECOMMENDED for performance)
        """
        self._config = config or APIConfig.default()
        self._session = session
        self._owns_session = False
        self._logger = get_logger('tubeload.upload.chunk')

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

    async def upload_chunk(
        self,
        session_url: str,
        chunk: ChunkInfo,
        data: bytes,
        total: int,
        media_type: str
    ) -> ChunkResponse:
        """
        Upload a single window.

        Args:
            session_url: Session locator
            chunk: Window boundaries
            data: Window bytes
            total: Total payload size
            media_type: Media type declared at negotiation

        Returns:
            ChunkResponse

        Raises:
            ValueError: If the window is empty or does not match its data
            TransferError: If a network error occurs
        """
        if not data:
            raise ValueError(f"Cannot upload empty chunk {chunk.index}")
        if len(data) != chunk.size:
            raise ValueError(
                f"Chunk {chunk.index} holds {len(data)} bytes, expected {chunk.size}"
            )

        content_range = chunk.content_range(total)
        headers = {
            'Content-Length': str(chunk.size),
            'Content-Type': media_type,
            'Content-Range': content_range,
        }
        session = await self._get_session()

        chunk_size_kb = chunk.size / 1024
        upload_start = time.time()
        self._logger.debug(f"Uploading chunk {chunk.index}: {content_range} ({chunk_size_kb:.1f} KB)")

        try:
            async with session.put(
                session_url,
                data=data,
                headers=headers,
                allow_redirects=False,
                **self._config.request_kwargs()
            ) as response:
                body = await response.text()
                result = ChunkResponse(
                    status=response.status,
                    body=body,
                    range_header=response.headers.get('Range')
                )
        except asyncio.TimeoutError as e:
            upload_time = time.time() - upload_start
            self._logger.error(f"Chunk {chunk.index} upload timeout after {upload_time:.2f}s")
            raise TransferError(f"Upload failed: chunk {chunk.index} timed out") from e
        except aiohttp.ClientError as e:
            upload_time = time.time() - upload_start
            self._logger.error(f"Chunk {chunk.index} upload failed after {upload_time:.2f}s: {e!r}")
            raise TransferError(f"Upload failed: {e!r}") from e

        upload_time = time.time() - upload_start
        speed_kbps = (chunk_size_kb / upload_time) if upload_time > 0 else 0
        self._logger.debug(
            f"Chunk {chunk.index} answered HTTP {result.status} in {upload_time:.2f}s ({speed_kbps:.1f} KB/s)"
        )
        return result
