"""
Data models for upload module.

Uses dataclasses for immutable, type-safe data structures.
"""
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Dict, Any, Optional, Tuple

from ..protocols import MediaPayloadProtocol


DEFAULT_MEDIA_TYPE = 'video/*'
DEFAULT_CATEGORY_ID = '22'  # People & Blogs


class PrivacyStatus(str, Enum):
    """Video visibility."""
    PRIVATE = 'private'
    UNLISTED = 'unlisted'
    PUBLIC = 'public'


def parse_tags(value: Optional[str]) -> Tuple[str, ...]:
    """
    Split a comma-separated tag string.

    Example:
        >>> parse_tags("tech, vlog,, coding ")
        ('tech', 'vlog', 'coding')
    """
    if not value:
        return ()
    return tuple(tag.strip() for tag in value.split(',') if tag.strip())


def format_publish_at(value: datetime) -> str:
    """
    Format a publish instant as UTC ISO-8601 with millisecond precision.

    Naive datetimes are taken as local time.
    """
    utc = value.astimezone(timezone.utc)
    return utc.isoformat(timespec='milliseconds').replace('+00:00', 'Z')


@dataclass(frozen=True)
class UploadRequest:
    """
    Immutable description of one upload attempt.

    Attributes:
        payload: Media payload (size fixed for the whole transfer)
        title: Video title (required)
        description: Free-text description
        tags: Tags; blank entries are discarded
        privacy: Visibility
        publish_at: Optional scheduled publication instant
        category_id: Provider category classification
        made_for_kids: Audience declaration, always sent

    Example:
        >>> request = UploadRequest(
        ...     payload=FilePayload("clip.mp4"),
        ...     title="My clip",
        ...     tags=parse_tags("tech, vlog")
        ... )
    """
    payload: MediaPayloadProtocol
    title: str
    description: str = ''
    tags: Tuple[str, ...] = ()
    privacy: PrivacyStatus = PrivacyStatus.PRIVATE
    publish_at: Optional[datetime] = None
    category_id: str = DEFAULT_CATEGORY_ID
    made_for_kids: bool = False

    def __post_init__(self):
        """Validate and normalize request."""
        if not self.title or not self.title.strip():
            raise ValueError("Title is required")
        if self.payload.size <= 0:
            raise ValueError("Cannot upload empty file")
        object.__setattr__(self, 'tags', tuple(t for t in self.tags if t and t.strip()))
        object.__setattr__(self, 'privacy', PrivacyStatus(self.privacy))

    @property
    def total_bytes(self) -> int:
        return self.payload.size

    @property
    def media_type(self) -> str:
        return self.payload.media_type

    def to_metadata(self) -> Dict[str, Any]:
        """Build the video resource metadata document."""
        status: Dict[str, Any] = {'privacyStatus': self.privacy.value}
        if self.publish_at is not None:
            status['publishAt'] = format_publish_at(self.publish_at)
        status['selfDeclaredMadeForKids'] = self.made_for_kids

        return {
            'snippet': {
                'title': self.title,
                'description': self.description,
                'tags': list(self.tags),
                'categoryId': self.category_id,
            },
            'status': status,
        }


@dataclass(frozen=True)
class UploadSession:
    """
    Resumable upload session.

    Attributes:
        url: Session locator issued by the provider
        request: Request the session was opened for
    """
    url: str
    request: UploadRequest

    def __repr__(self) -> str:
        # The locator carries an upload id that grants write access
        return f"UploadSession(request={self.request.title!r})"


@dataclass(frozen=True)
class ChunkInfo:
    """
    Information about a payload window.

    Attributes:
        index: Chunk index
        start: Start position in bytes
        end: End position in bytes (exclusive)
    """
    index: int
    start: int
    end: int

    @property
    def size(self) -> int:
        """Returns chunk size."""
        return self.end - self.start

    def content_range(self, total: int) -> str:
        """Returns the Content-Range header value for this window."""
        return f"bytes {self.start}-{self.end - 1}/{total}"


@dataclass
class UploadProgress:
    """
    Upload progress information.

    Attributes:
        total_bytes: Total payload size
        uploaded_bytes: Bytes acknowledged by the provider
        uploaded_chunks: Chunk calls acknowledged so far
        completed: True once the provider returned the resource
    """
    total_bytes: int
    uploaded_bytes: int = 0
    uploaded_chunks: int = 0
    completed: bool = False

    @property
    def percentage(self) -> int:
        """Integer percentage; 100 only once completed."""
        if self.completed:
            return 100
        if self.total_bytes <= 0:
            return 0
        return min(99, self.uploaded_bytes * 100 // self.total_bytes)

    @property
    def is_complete(self) -> bool:
        return self.completed


@dataclass(frozen=True)
class UploadResult:
    """
    Result of a successful upload.

    Attributes:
        video_id: Identifier of the created video
        file_size: Size of uploaded payload
        resource: Raw video resource returned by the provider
    """
    video_id: str
    file_size: int
    resource: Dict[str, Any] = field(default_factory=dict)

    @property
    def watch_url(self) -> str:
        """Public watch URL for the video."""
        return f"https://www.youtube.com/watch?v={self.video_id}"

    @property
    def privacy_status(self) -> Optional[str]:
        return self.resource.get('status', {}).get('privacyStatus')

    @classmethod
    def from_resource(cls, resource: Dict[str, Any], file_size: int) -> 'UploadResult':
        """Create from the provider's video resource."""
        return cls(
            video_id=str(resource.get('id') or ''),
            file_size=file_size,
            resource=resource
        )
