"""Tests for the installed-app token client."""
from datetime import datetime, timedelta, timezone
from unittest.mock import patch, MagicMock

import pytest

from tubeload.core.api import SCOPES
from tubeload.core.auth import InstalledAppTokenClient


FLOW = 'tubeload.core.auth.installed_app.InstalledAppFlow'


@pytest.fixture
def deliveries():
    return []


@pytest.fixture
def client(deliveries):
    return InstalledAppTokenClient(
        '1234.apps.googleusercontent.com',
        SCOPES,
        deliveries.append,
        client_secret='shh'
    )


def fake_flow(creds=None, error=None):
    flow = MagicMock()
    if error is not None:
        flow.run_local_server.side_effect = error
    else:
        flow.run_local_server.return_value = creds
    return flow


class TestInstalledAppTokenClient:
    """Test suite for InstalledAppTokenClient."""

    def test_requires_client_id(self):
        with pytest.raises(ValueError):
            InstalledAppTokenClient('', SCOPES, print)

    def test_client_config(self, client):
        installed = client.client_config()['installed']

        assert installed['client_id'] == '1234.apps.googleusercontent.com'
        assert installed['client_secret'] == 'shh'
        assert installed['token_uri'] == 'https://oauth2.googleapis.com/token'

    def test_client_config_without_secret(self, deliveries):
        client = InstalledAppTokenClient('abc', SCOPES, deliveries.append)

        assert 'client_secret' not in client.client_config()['installed']

    def test_successful_flow(self, client, deliveries):
        creds = MagicMock(token='ya29.token', scopes=list(SCOPES))
        creds.expiry = datetime.now(timezone.utc).replace(tzinfo=None) + timedelta(hours=1)

        with patch(FLOW) as flow_cls:
            flow_cls.from_client_config.return_value = fake_flow(creds)
            client._run_flow('consent')

        flow = flow_cls.from_client_config.return_value
        assert flow.run_local_server.call_args[1]['prompt'] == 'consent'
        response = deliveries[0]
        assert response['access_token'] == 'ya29.token'
        assert response['scope'] == ' '.join(SCOPES)
        assert 3500 < response['expires_in'] <= 3600

    def test_silent_flow_passes_no_prompt(self, client, deliveries):
        creds = MagicMock(token='ya29.token', scopes=None, expiry=None)

        with patch(FLOW) as flow_cls:
            flow_cls.from_client_config.return_value = fake_flow(creds)
            client._run_flow('')

        flow = flow_cls.from_client_config.return_value
        assert 'prompt' not in flow.run_local_server.call_args[1]
        assert 'expires_in' not in deliveries[0]

    def test_flow_error_is_delivered(self, client, deliveries):
        with patch(FLOW) as flow_cls:
            flow_cls.from_client_config.return_value = fake_flow(error=RuntimeError("access_denied"))
            client._run_flow('consent')

        assert deliveries == [{'error': 'RuntimeError', 'error_description': 'access_denied'}]

    def test_no_token_is_denial(self, client, deliveries):
        with patch(FLOW) as flow_cls:
            flow_cls.from_client_config.return_value = fake_flow(MagicMock(token=None))
            client._run_flow('consent')

        assert deliveries == [None]

    def test_request_runs_in_background_thread(self, client):
        with patch('tubeload.core.auth.installed_app.threading.Thread') as thread_cls:
            client.request_access_token(prompt='consent')

        kwargs = thread_cls.call_args[1]
        assert kwargs['args'] == ('consent',)
        assert kwargs['daemon'] is True
        thread_cls.return_value.start.assert_called_once_with()
