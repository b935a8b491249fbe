"""Tests for upload models."""
import pytest
from datetime import datetime, timezone, timedelta

from tubeload.core.upload.models import (
    PrivacyStatus,
    UploadRequest,
    UploadSession,
    ChunkInfo,
    UploadProgress,
    UploadResult,
    parse_tags,
    format_publish_at
)
from tubeload.core.upload.services import BytesPayload


def payload(data=b'video-bytes', media_type='video/mp4'):
    return BytesPayload(data, media_type, 'clip.mp4')


class TestParseTags:
    """Test suite for parse_tags."""

    def test_splits_and_trims(self):
        assert parse_tags("tech, vlog,coding ") == ('tech', 'vlog', 'coding')

    def test_discards_empty_entries(self):
        assert parse_tags("a,, ,b,") == ('a', 'b')

    def test_empty(self):
        assert parse_tags("") == ()
        assert parse_tags(None) == ()


class TestFormatPublishAt:
    """Test suite for format_publish_at."""

    def test_utc_with_milliseconds(self):
        value = datetime(2025, 3, 1, 12, 30, tzinfo=timezone.utc)

        assert format_publish_at(value) == '2025-03-01T12:30:00.000Z'

    def test_converts_offset_to_utc(self):
        value = datetime(2025, 3, 1, 14, 30, tzinfo=timezone(timedelta(hours=2)))

        assert format_publish_at(value) == '2025-03-01T12:30:00.000Z'

    def test_naive_is_local_time(self):
        value = datetime(2025, 3, 1, 12, 30)
        expected = value.astimezone(timezone.utc)

        assert format_publish_at(value).startswith(expected.strftime('%Y-%m-%dT%H:%M'))


class TestUploadRequest:
    """Test suite for UploadRequest."""

    def test_create_basic(self):
        request = UploadRequest(payload=payload(), title="My video")

        assert request.title == "My video"
        assert request.privacy is PrivacyStatus.PRIVATE
        assert request.total_bytes == 11
        assert request.media_type == 'video/mp4'
        assert request.publish_at is None

    def test_tags_filtered(self):
        request = UploadRequest(payload=payload(), title="t", tags=('a', '', '  ', 'b'))

        assert request.tags == ('a', 'b')

    def test_privacy_from_string(self):
        request = UploadRequest(payload=payload(), title="t", privacy='unlisted')

        assert request.privacy is PrivacyStatus.UNLISTED

    def test_invalid_privacy(self):
        with pytest.raises(ValueError):
            UploadRequest(payload=payload(), title="t", privacy='friends')

    def test_empty_title_raises(self):
        with pytest.raises(ValueError, match="Title"):
            UploadRequest(payload=payload(), title="  ")

    def test_empty_payload_raises(self):
        with pytest.raises(ValueError, match="empty"):
            UploadRequest(payload=payload(b''), title="t")

    def test_is_immutable(self):
        request = UploadRequest(payload=payload(), title="t")

        with pytest.raises(AttributeError):
            request.title = "other"

    def test_metadata_document(self):
        request = UploadRequest(
            payload=payload(),
            title="My video",
            description="About",
            tags=('tech', 'vlog'),
            privacy=PrivacyStatus.PUBLIC
        )

        assert request.to_metadata() == {
            'snippet': {
                'title': 'My video',
                'description': 'About',
                'tags': ['tech', 'vlog'],
                'categoryId': '22',
            },
            'status': {
                'privacyStatus': 'public',
                'selfDeclaredMadeForKids': False,
            },
        }

    def test_metadata_omits_publish_at_when_unscheduled(self):
        request = UploadRequest(payload=payload(), title="t")

        assert 'publishAt' not in request.to_metadata()['status']

    def test_metadata_includes_publish_at(self):
        when = datetime(2030, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
        request = UploadRequest(payload=payload(), title="t", publish_at=when)

        assert request.to_metadata()['status']['publishAt'] == '2030-01-02T03:04:05.000Z'


class TestUploadSession:
    """Test suite for UploadSession."""

    def test_repr_hides_locator(self):
        session = UploadSession(
            url='https://upload.example/?upload_id=secret',
            request=UploadRequest(payload=payload(), title="t")
        )

        assert 'secret' not in repr(session)


class TestChunkInfo:
    """Test suite for ChunkInfo."""

    def test_size(self):
        chunk = ChunkInfo(index=0, start=100, end=200)

        assert chunk.size == 100

    def test_content_range_is_inclusive(self):
        chunk = ChunkInfo(index=0, start=0, end=8 * 1024 * 1024)

        assert chunk.content_range(17825792) == 'bytes 0-8388607/17825792'


class TestUploadProgress:
    """Test suite for UploadProgress."""

    def test_percentage(self):
        progress = UploadProgress(total_bytes=1000, uploaded_bytes=500)

        assert progress.percentage == 50

    def test_percentage_floors(self):
        progress = UploadProgress(total_bytes=3, uploaded_bytes=2)

        assert progress.percentage == 66

    def test_percentage_capped_until_complete(self):
        progress = UploadProgress(total_bytes=1000, uploaded_bytes=1000)

        assert progress.percentage == 99
        assert not progress.is_complete

    def test_complete(self):
        progress = UploadProgress(total_bytes=1000, uploaded_bytes=1000, completed=True)

        assert progress.percentage == 100
        assert progress.is_complete


class TestUploadResult:
    """Test suite for UploadResult."""

    def test_from_resource(self, video_resource):
        result = UploadResult.from_resource(video_resource, 42)

        assert result.video_id == 'dQw4w9WgXcQ'
        assert result.file_size == 42
        assert result.privacy_status == 'private'
        assert result.watch_url == 'https://www.youtube.com/watch?v=dQw4w9WgXcQ'

    def test_from_resource_without_id(self):
        result = UploadResult.from_resource({}, 1)

        assert result.video_id == ''
        assert result.privacy_status is None
