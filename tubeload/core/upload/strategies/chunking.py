"""
Chunking strategies for resumable uploads.

Implements Strategy Pattern for window sizing.
Open for extension (new strategies), closed for modification.
"""
from abc import ABC, abstractmethod
from typing import List, Tuple

from ...api.config import DEFAULT_CHUNK_SIZE
from ...logging import get_logger


logger = get_logger('tubeload.upload.chunking')


class BaseChunkingStrategy(ABC):
    """Abstract base class for chunking strategies."""

    @abstractmethod
    def next_window(self, offset: int, total: int) -> Tuple[int, int]:
        """Calculate the window starting at an offset."""
        pass

    def calculate_chunks(self, file_size: int) -> List[Tuple[int, int]]:
        """
        Calculate chunk boundaries assuming full-window acceptance.

        Args:
            file_size: Total file size in bytes

        Returns:
            List of (start, end) tuples
        """
        chunks = []
        position = 0

        while position < file_size:
            start, end = self.next_window(position, file_size)
            chunks.append((start, end))
            position = end

        return chunks


class FixedSizeChunkingStrategy(BaseChunkingStrategy):
    """
    Fixed-size windows; the last window is whatever remains.

    8 MiB balances per-request overhead against the memory held by one
    window in transit. Resumable endpoints expect every window except the
    last to be a multiple of 256 KiB.
    """

    GRANULARITY = 256 * 1024

    def __init__(self, chunk_size: int = DEFAULT_CHUNK_SIZE):
        """
        Initialize with chunk size.

        Args:
            chunk_size: Size of each window in bytes
        """
        if chunk_size <= 0:
            raise ValueError("Chunk size must be positive")
        self.chunk_size = chunk_size
        if not self.is_aligned:
            logger.warning(
                f"Chunk size {chunk_size} is not a multiple of {self.GRANULARITY // 1024} KiB; "
                f"the provider may reject every window but the last"
            )

    @property
    def is_aligned(self) -> bool:
        """Returns True if the chunk size is a multiple of 256 KiB."""
        return self.chunk_size % self.GRANULARITY == 0

    def next_window(self, offset: int, total: int) -> Tuple[int, int]:
        """
        Calculate the window starting at an offset.

        Args:
            offset: Acknowledged offset
            total: Total payload size in bytes

        Returns:
            (start, end) tuple, end exclusive

        Raises:
            ValueError: If offset is outside [0, total)
        """
        if offset < 0 or offset >= total:
            raise ValueError(f"Offset {offset} outside payload of {total} bytes")
        return offset, min(offset + self.chunk_size, total)
