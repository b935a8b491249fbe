"""
Protocol definitions for upload module.

Defines interfaces (protocols) for dependency injection and strategy pattern.
"""
from typing import Protocol, List, Tuple, Optional, Callable, TYPE_CHECKING

if TYPE_CHECKING:
    from .models import UploadSession, UploadRequest, UploadResult
    from ..auth.models import Credential


ProgressCallback = Callable[[int], None]
StatusCallback = Callable[[str], None]


class ChunkingStrategy(Protocol):
    """
    Protocol for payload chunking strategies.

    Allows different chunking algorithms to be plugged in.
    """

    def next_window(self, offset: int, total: int) -> Tuple[int, int]:
        """
        Calculate the window that starts at an offset.

        Args:
            offset: Acknowledged offset
            total: Total payload size in bytes

        Returns:
            (start, end) tuple, end exclusive
        """
        ...

    def calculate_chunks(self, file_size: int) -> List[Tuple[int, int]]:
        """
        Calculate chunk boundaries assuming every window is fully accepted.

        Args:
            file_size: Total file size in bytes

        Returns:
            List of (start, end) tuples representing chunk boundaries
        """
        ...


class MediaPayloadProtocol(Protocol):
    """Protocol for binary payloads with a fixed size."""

    @property
    def size(self) -> int: ...

    @property
    def media_type(self) -> str: ...

    @property
    def name(self) -> str: ...

    async def open(self) -> None: ...

    async def close(self) -> None: ...

    async def read(self, start: int, end: int) -> bytes:
        """
        Read a window of the payload.

        Args:
            start: Start position in bytes
            end: End position in bytes (exclusive)

        Returns:
            Window data
        """
        ...


class SessionNegotiatorProtocol(Protocol):
    """Protocol for opening resumable upload sessions."""

    async def open(self, credential: 'Credential', request: 'UploadRequest') -> 'UploadSession':
        ...


class TransferEngineProtocol(Protocol):
    """Protocol for driving a payload into an open session."""

    async def transfer(
        self,
        session: 'UploadSession',
        on_progress: Optional[ProgressCallback] = None
    ) -> 'UploadResult':
        ...


class TokenSourceProtocol(Protocol):
    """Protocol for anything that hands out bearer credentials."""

    async def ensure_token(self) -> 'Credential': ...

    def invalidate(self) -> None: ...
