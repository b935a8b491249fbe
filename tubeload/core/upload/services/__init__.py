"""Upload services module."""
from .file_service import FileValidator, FilePayload, BytesPayload
from .session_service import SessionNegotiator
from .chunk_service import ChunkUploader, ChunkResponse, RESUME_INCOMPLETE

__all__ = [
    'FileValidator',
    'FilePayload',
    'BytesPayload',
    'SessionNegotiator',
    'ChunkUploader',
    'ChunkResponse',
    'RESUME_INCOMPLETE',
]
