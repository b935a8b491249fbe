"""Tests for the command line interface."""
import os
import tempfile
from pathlib import Path
from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from tubeload.cli.main import app
from tubeload.core.exceptions import SessionError, UploadError
from tubeload.core.upload.models import UploadResult, PrivacyStatus


runner = CliRunner()


@pytest.fixture
def video_file():
    fd, path = tempfile.mkstemp(suffix='.mp4')
    os.write(fd, b"v" * 10)
    os.close(fd)
    yield Path(path)
    os.unlink(path)


class FakeUploader:
    """Stands in for YouTubeUploader and records what the command asked for."""

    instances = []

    def __init__(self, client_id=None, client_secret=None, config=None):
        self.config = config
        self.requests = []
        self.error = None
        FakeUploader.instances.append(self)

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        return None

    def build_request(self, source, **kwargs):
        kwargs['source'] = source
        return kwargs

    async def upload(self, request, on_status=None, on_progress=None):
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        on_status('Uploading video...')
        on_progress(100)
        return UploadResult(video_id='abc123', file_size=10)


@pytest.fixture
def fake_uploader():
    FakeUploader.instances = []
    with patch('tubeload.YouTubeUploader', FakeUploader):
        yield FakeUploader


class TestUploadCommand:
    """Test suite for the upload command."""

    def test_requires_client_id(self, video_file):
        result = runner.invoke(app, ['upload', str(video_file)], env={'TUBELOAD_CLIENT_ID': ''})

        assert result.exit_code == 1
        assert 'TUBELOAD_CLIENT_ID' in result.output

    def test_missing_file(self):
        result = runner.invoke(app, ['upload', '/nonexistent/video.mp4', '--client-id', 'abc'])

        assert result.exit_code != 0

    def test_upload(self, fake_uploader, video_file):
        result = runner.invoke(app, [
            'upload', str(video_file),
            '--client-id', 'abc',
            '--title', 'Holiday',
            '--tags', 'sun, sea,,',
            '--privacy', 'unlisted',
            '--chunk-size', '4',
        ])

        assert result.exit_code == 0, result.output
        assert 'abc123' in result.output
        assert 'https://www.youtube.com/watch?v=abc123' in result.output

        uploader = fake_uploader.instances[0]
        assert uploader.config.oauth.client_id == 'abc'
        assert uploader.config.chunk_size == 4 * 1024 * 1024
        request = uploader.requests[0]
        assert request['title'] == 'Holiday'
        assert request['tags'] == ('sun', 'sea')
        assert request['privacy'] is PrivacyStatus.UNLISTED
        assert request['publish_at'] is None

    def test_client_id_from_environment(self, fake_uploader, video_file):
        result = runner.invoke(app, ['upload', str(video_file)], env={'TUBELOAD_CLIENT_ID': 'from-env'})

        assert result.exit_code == 0, result.output
        assert fake_uploader.instances[0].config.oauth.client_id == 'from-env'

    def test_publish_at(self, fake_uploader, video_file):
        result = runner.invoke(app, [
            'upload', str(video_file),
            '--client-id', 'abc',
            '--publish-at', '2030-01-02T03:04',
        ])

        assert result.exit_code == 0, result.output
        publish_at = fake_uploader.instances[0].requests[0]['publish_at']
        assert (publish_at.year, publish_at.hour, publish_at.minute) == (2030, 3, 4)
        assert 'Scheduled for' in result.output

    def test_invalid_privacy(self, video_file):
        result = runner.invoke(app, [
            'upload', str(video_file),
            '--client-id', 'abc',
            '--privacy', 'friends',
        ])

        assert result.exit_code != 0

    def test_rejects_zero_chunk_size(self, fake_uploader, video_file):
        result = runner.invoke(app, [
            'upload', str(video_file),
            '--client-id', 'abc',
            '--chunk-size', '0',
        ])

        assert result.exit_code == 2
        assert not isinstance(result.exception, ValueError)
        assert fake_uploader.instances == []

    def test_upload_error_exits_with_failure(self, fake_uploader, video_file):
        original_init = FakeUploader.__init__

        def failing_init(self, *args, **kwargs):
            original_init(self, *args, **kwargs)
            self.error = UploadError('negotiate', SessionError("Failed to create upload session: 403 forbidden"))

        with patch.object(FakeUploader, '__init__', failing_init):
            result = runner.invoke(app, ['upload', str(video_file), '--client-id', 'abc'])

        assert result.exit_code == 1
        assert '403 forbidden' in result.output


class TestAuthorizeCommand:
    """Test suite for the authorize command."""

    def test_requires_client_id(self):
        result = runner.invoke(app, ['authorize'], env={'TUBELOAD_CLIENT_ID': ''})

        assert result.exit_code == 1
