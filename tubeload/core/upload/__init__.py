"""
Upload module for resumable video uploads.

Provides the session negotiator, the chunked transfer engine and the
coordinator that ties them to a token provider. Strategies are pluggable.
"""
from .coordinator import UploadCoordinator, UploadStatus, UploadStep
from .engine import ChunkedTransferEngine, TransferState, TransferPhase
from .models import (
    PrivacyStatus,
    UploadRequest,
    UploadSession,
    UploadProgress,
    UploadResult,
    ChunkInfo,
    parse_tags
)
from .services import (
    FileValidator,
    FilePayload,
    BytesPayload,
    SessionNegotiator,
    ChunkUploader,
    ChunkResponse
)
from .strategies import FixedSizeChunkingStrategy
from .protocols import (
    ChunkingStrategy,
    MediaPayloadProtocol,
    SessionNegotiatorProtocol,
    TransferEngineProtocol,
    TokenSourceProtocol
)

__all__ = [
    # Main classes
    'UploadCoordinator',
    'UploadStatus',
    'UploadStep',
    'ChunkedTransferEngine',
    'TransferState',
    'TransferPhase',
    'SessionNegotiator',
    'ChunkUploader',
    'ChunkResponse',

    # Models
    'PrivacyStatus',
    'UploadRequest',
    'UploadSession',
    'UploadProgress',
    'UploadResult',
    'ChunkInfo',
    'parse_tags',

    # Payloads
    'FileValidator',
    'FilePayload',
    'BytesPayload',

    # Strategies
    'FixedSizeChunkingStrategy',

    # Protocols
    'ChunkingStrategy',
    'MediaPayloadProtocol',
    'SessionNegotiatorProtocol',
    'TransferEngineProtocol',
    'TokenSourceProtocol',
]
