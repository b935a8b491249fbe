"""
Chunked transfer engine.

Drives a payload into a resumable session one window at a time. The
transfer is modelled as a small state machine:

    TRANSFERRING(offset) --308--> TRANSFERRING(offset')
    TRANSFERRING(offset) --2xx--> COMPLETED(resource)
    TRANSFERRING(offset) --other/error--> FAILED(error)
    TRANSFERRING(total)  -------> FAILED(ProtocolError)

The offset only moves forward, and only from the provider's acknowledgment.
"""
import asyncio
import json
import time
from enum import Enum
from typing import Optional

from .models import ChunkInfo, UploadProgress, UploadResult, UploadSession
from .protocols import ChunkingStrategy, ProgressCallback
from .services import ChunkUploader, ChunkResponse
from .strategies import FixedSizeChunkingStrategy
from ..exceptions import UploadException, TransferError, ProtocolError
from ..logging import get_logger


logger = get_logger('tubeload.upload.engine')


class TransferPhase(Enum):
    """Phases of one transfer."""
    TRANSFERRING = 'transferring'
    COMPLETED = 'completed'
    FAILED = 'failed'


class TransferState:
    """
    Mutable state of one transfer, owned by the engine.

    Attributes:
        total: Payload size in bytes
        offset: Acknowledged offset (0 <= offset <= total)
        phase: Current phase
        result: Upload result once COMPLETED
        error: Error once FAILED
    """

    def __init__(self, total: int):
        self.total = total
        self.offset = 0
        self.chunks_sent = 0
        self.phase = TransferPhase.TRANSFERRING
        self.result: Optional[UploadResult] = None
        self.error: Optional[UploadException] = None

    @property
    def is_terminal(self) -> bool:
        return self.phase is not TransferPhase.TRANSFERRING

    @property
    def is_exhausted(self) -> bool:
        """True when every byte is acknowledged but no success was observed."""
        return self.phase is TransferPhase.TRANSFERRING and self.offset >= self.total

    @property
    def progress(self) -> UploadProgress:
        return UploadProgress(
            total_bytes=self.total,
            uploaded_bytes=self.offset,
            uploaded_chunks=self.chunks_sent,
            completed=self.phase is TransferPhase.COMPLETED
        )

    def advance(self, offset: int) -> None:
        """
        Move to a new acknowledged offset.

        Raises:
            ProtocolError: If the offset does not move forward or exceeds total
        """
        self._require_transferring()
        if offset <= self.offset:
            raise ProtocolError(
                f"Provider acknowledged offset {offset}, not past {self.offset}"
            )
        if offset > self.total:
            raise ProtocolError(
                f"Provider acknowledged offset {offset} beyond payload size {self.total}"
            )
        self.offset = offset
        self.chunks_sent += 1

    def complete(self, result: UploadResult) -> None:
        self._require_transferring()
        self.chunks_sent += 1
        self.offset = self.total
        self.result = result
        self.phase = TransferPhase.COMPLETED

    def fail(self, error: UploadException) -> None:
        if self.is_terminal:
            return
        self.error = error
        self.phase = TransferPhase.FAILED

    def _require_transferring(self) -> None:
        if self.phase is not TransferPhase.TRANSFERRING:
            raise RuntimeError(f"Transfer already {self.phase.value}")

    def __repr__(self) -> str:
        return f"TransferState(phase={self.phase.value}, offset={self.offset}, total={self.total})"


class ChunkedTransferEngine:
    """
    Transfers a payload into an open upload session.

    Chunks are sent strictly in order, one at a time; the next window is
    computed from the previous acknowledgment. Nothing is retried.

    Example:
        >>> engine = ChunkedTransferEngine(ChunkUploader(config, session))
        >>> result = await engine.transfer(upload_session, on_progress=print)
    """

    def __init__(
        self,
        uploader: Optional[ChunkUploader] = None,
        chunking_strategy: Optional[ChunkingStrategy] = None
    ):
        """
        Initialize transfer engine.

        Args:
            uploader: Chunk uploader
            chunking_strategy: Window sizing strategy (8 MiB fixed windows by default)
        """
        self._uploader = uploader or ChunkUploader()
        self._chunking = chunking_strategy or FixedSizeChunkingStrategy()

    async def transfer(
        self,
        session: UploadSession,
        on_progress: Optional[ProgressCallback] = None
    ) -> UploadResult:
        """
        Transfer the session's payload.

        Args:
            session: Open upload session
            on_progress: Optional callback receiving integer percentages

        Returns:
            UploadResult built from the provider's resource

        Raises:
            TransferError: If the payload cannot be read or a chunk call is
                rejected or cannot be sent
            ProtocolError: If the provider's answers violate the protocol
        """
        request = session.request
        payload = request.payload
        state = TransferState(request.total_bytes)
        size_mb = state.total / (1024 * 1024)
        expected_chunks = len(self._chunking.calculate_chunks(state.total))
        logger.info(f"Uploading {size_mb:.2f} MB in {expected_chunks} chunk(s)")

        start = time.time()
        try:
            await payload.open()
        except (OSError, ValueError) as e:
            logger.error(f"Could not open payload {payload.name!r}: {e}")
            raise TransferError(f"Could not open payload: {e}") from e

        try:
            while not state.is_terminal:
                try:
                    await self._step(session, state, on_progress)
                except UploadException as e:
                    state.fail(e)
        except asyncio.CancelledError:
            state.fail(TransferError("Upload cancelled"))
            logger.warning(f"Upload cancelled at offset {state.offset}/{state.total}")
            raise
        finally:
            await payload.close()

        if state.phase is TransferPhase.FAILED:
            logger.error(f"Upload failed at offset {state.offset}/{state.total}: {state.error}")
            raise state.error

        elapsed = time.time() - start
        logger.info(f"Upload completed in {elapsed:.2f}s: {state.result.video_id}")
        return state.result

    async def _step(
        self,
        session: UploadSession,
        state: TransferState,
        on_progress: Optional[ProgressCallback]
    ) -> None:
        """Send one window and apply the provider's answer to the state."""
        if state.is_exhausted:
            state.fail(ProtocolError("Unexpected termination of upload loop"))
            return

        request = session.request
        start, end = self._chunking.next_window(state.offset, state.total)
        chunk = ChunkInfo(index=state.chunks_sent, start=start, end=end)

        try:
            data = await request.payload.read(start, end)
        except (OSError, ValueError) as e:
            raise TransferError(f"Could not read payload window {start}-{end}: {e}") from e

        try:
            response = await self._uploader.upload_chunk(
                session.url,
                chunk,
                data,
                state.total,
                request.media_type
            )
        except ValueError as e:
            raise TransferError(f"Payload window {start}-{end} is invalid: {e}") from e

        if response.is_resume_incomplete:
            state.advance(self._next_offset(chunk, response))
            logger.debug(f"Provider acknowledged {state.offset}/{state.total} bytes")
            self._notify(on_progress, state)
        elif response.is_success:
            state.complete(UploadResult.from_resource(self._parse_resource(response), state.total))
            self._notify(on_progress, state)
        else:
            raise TransferError.from_response("Upload failed", response.status, response.body)

    def _next_offset(self, chunk: ChunkInfo, response: ChunkResponse) -> int:
        """
        Offset to resume from after a 308.

        The provider's Range acknowledgment wins when present; otherwise the
        whole window is taken as persisted.
        """
        acknowledged = response.acknowledged_offset()
        if acknowledged is None:
            return chunk.end
        if acknowledged > chunk.end:
            raise ProtocolError(
                f"Provider acknowledged {acknowledged} bytes but only {chunk.end} were sent"
            )
        return acknowledged

    def _parse_resource(self, response: ChunkResponse) -> dict:
        try:
            resource = json.loads(response.body) if response.body else {}
        except ValueError as e:
            raise ProtocolError(
                f"Upload completed with an unreadable response: {response.status}",
                status=response.status,
                body=response.body
            ) from e
        if not isinstance(resource, dict):
            raise ProtocolError(
                f"Upload completed with an unexpected response: {response.status}",
                status=response.status,
                body=response.body
            )
        return resource

    @staticmethod
    def _notify(on_progress: Optional[ProgressCallback], state: TransferState) -> None:
        if on_progress is not None:
            on_progress(state.progress.percentage)
