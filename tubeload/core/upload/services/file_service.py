"""
Payload services.

Single Responsibility: validation of local files and window reads.
"""
from pathlib import Path
from typing import Tuple, Optional, Union
import mimetypes

import aiofiles

from ..models import DEFAULT_MEDIA_TYPE
from ...logging import get_logger


class FileValidator:
    """
    Validates files before upload.

    Responsibilities:
    - Check file existence
    - Verify file is not a directory
    - Get file size
    """

    def validate(self, file_path: Union[str, Path]) -> Tuple[Path, int]:
        """
        Validate a file for upload.

        Args:
            file_path: Path to the file

        Returns:
            Tuple of (validated Path, file size in bytes)

        Raises:
            FileNotFoundError: If file doesn't exist
            ValueError: If path is not a regular file or is empty
        """
        path = Path(file_path) if isinstance(file_path, str) else file_path

        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")

        if not path.is_file():
            raise ValueError(f"Path is not a file: {path}")

        file_size = path.stat().st_size
        self.validate_size(file_size)

        return path, file_size

    def validate_size(self, file_size: int, max_size: Optional[int] = None) -> None:
        """
        Validate file size.

        Args:
            file_size: File size in bytes
            max_size: Optional maximum allowed size

        Raises:
            ValueError: If file is empty or exceeds max size
        """
        if file_size == 0:
            raise ValueError("Cannot upload empty file")

        if max_size and file_size > max_size:
            raise ValueError(
                f"File size {file_size} exceeds maximum {max_size}"
            )


class BytesPayload:
    """In-memory payload."""

    def __init__(self, data: bytes, media_type: Optional[str] = None, name: str = ''):
        self._data = bytes(data)
        self._media_type = media_type or DEFAULT_MEDIA_TYPE
        self._name = name

    @property
    def size(self) -> int:
        return len(self._data)

    @property
    def media_type(self) -> str:
        return self._media_type

    @property
    def name(self) -> str:
        return self._name

    async def open(self) -> None:
        pass

    async def close(self) -> None:
        pass

    async def read(self, start: int, end: int) -> bytes:
        return self._data[start:end]


class FilePayload:
    """
    Payload read from a local file with aiofiles.

    The size is captured once at construction, since the remote session is
    sized against it. Keeps the file handle open between open() and close()
    to avoid repeated open/close operations for each window.
    """

    def __init__(
        self,
        file_path: Union[str, Path],
        media_type: Optional[str] = None,
        validator: Optional[FileValidator] = None
    ):
        """
        Initialize file payload.

        Args:
            file_path: Path to the file
            media_type: Declared media type (guessed from the extension if omitted)
            validator: File validator

        Raises:
            FileNotFoundError: If file doesn't exist
            ValueError: If path is not a regular file or is empty
        """
        validator = validator or FileValidator()
        self._path, self._size = validator.validate(file_path)
        self._media_type = (
            media_type
            or mimetypes.guess_type(str(self._path))[0]
            or DEFAULT_MEDIA_TYPE
        )
        self._handle = None
        self._logger = get_logger('tubeload.upload.file')

    @property
    def path(self) -> Path:
        return self._path

    @property
    def size(self) -> int:
        return self._size

    @property
    def media_type(self) -> str:
        return self._media_type

    @property
    def name(self) -> str:
        return self._path.name

    async def open(self) -> None:
        """Open file for reading. Call this before reading windows."""
        if self._handle is None:
            self._handle = await aiofiles.open(self._path, 'rb')

    async def close(self) -> None:
        """Close the file handle if open."""
        if self._handle is not None:
            await self._handle.close()
            self._handle = None

    async def read(self, start: int, end: int) -> bytes:
        """
        Read a window from the file.

        Reuses the open handle when available, otherwise opens and closes
        the file for this read.

        Args:
            start: Start position in bytes
            end: End position in bytes (exclusive)

        Returns:
            Window data

        Raises:
            OSError: If the file cannot be read
            ValueError: If the file shrank since the size was captured
        """
        if self._handle is not None:
            await self._handle.seek(start)
            data = await self._handle.read(end - start)
        else:
            async with aiofiles.open(self._path, 'rb') as f:
                await f.seek(start)
                data = await f.read(end - start)

        if len(data) != end - start:
            raise ValueError(
                f"Short read at {start}-{end}: got {len(data)} bytes; "
                "file changed during upload"
            )
        self._logger.debug(f"Read window: {start}-{end} ({len(data)} bytes)")
        return data

    def __repr__(self) -> str:
        return f"FilePayload(path={str(self._path)!r}, size={self._size}, media_type={self._media_type!r})"
