"""Upload models."""
from .upload_models import (
    PrivacyStatus,
    UploadRequest,
    UploadSession,
    ChunkInfo,
    UploadProgress,
    UploadResult,
    parse_tags,
    format_publish_at,
    DEFAULT_MEDIA_TYPE,
    DEFAULT_CATEGORY_ID
)

__all__ = [
    'PrivacyStatus',
    'UploadRequest',
    'UploadSession',
    'ChunkInfo',
    'UploadProgress',
    'UploadResult',
    'parse_tags',
    'format_publish_at',
    'DEFAULT_MEDIA_TYPE',
    'DEFAULT_CATEGORY_ID',
]
