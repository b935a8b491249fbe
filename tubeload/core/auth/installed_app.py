"""
Installed-app token client.

Runs Google's loopback OAuth flow (browser consent, local redirect server)
in a worker thread and delivers the result through a callback.
"""
import threading
from datetime import datetime, timezone
from typing import Optional, Sequence, Dict, Any

from google_auth_oauthlib.flow import InstalledAppFlow

from .protocols import TokenCallback
from ..logging import get_logger


AUTH_URI = 'https://accounts.google.com/o/oauth2/auth'
TOKEN_URI = 'https://oauth2.googleapis.com/token'


class InstalledAppTokenClient:
    """
    Token client backed by google-auth-oauthlib's InstalledAppFlow.

    request_access_token() returns immediately; the callback receives a
    dict with 'access_token' on success or 'error' on failure.
    """

    def __init__(
        self,
        client_id: str,
        scopes: Sequence[str],
        callback: TokenCallback,
        client_secret: Optional[str] = None,
        port: int = 0,
        open_browser: bool = True
    ):
        """
        Initialize token client.

        Args:
            client_id: OAuth client identifier
            scopes: Scopes to request
            callback: Delivery callback, invoked once per grant
            client_secret: OAuth client secret (desktop clients have one)
            port: Loopback redirect port (0 picks a free port)
            open_browser: Open the consent page in the default browser
        """
        if not client_id:
            raise ValueError("client_id is required")
        self._client_id = client_id
        self._client_secret = client_secret
        self._scopes = list(scopes)
        self._callback = callback
        self._port = port
        self._open_browser = open_browser
        self._logger = get_logger('tubeload.auth.installed_app')

    def client_config(self) -> Dict[str, Any]:
        """Returns the client configuration in client_secrets.json layout."""
        installed = {
            'client_id': self._client_id,
            'auth_uri': AUTH_URI,
            'token_uri': TOKEN_URI,
            'redirect_uris': ['http://localhost'],
        }
        if self._client_secret:
            installed['client_secret'] = self._client_secret
        return {'installed': installed}

    def request_access_token(self, prompt: str = '') -> None:
        """Start the consent flow in a background thread."""
        thread = threading.Thread(
            target=self._run_flow,
            args=(prompt,),
            name='tubeload-oauth',
            daemon=True
        )
        thread.start()

    def _run_flow(self, prompt: str) -> None:
        flow = InstalledAppFlow.from_client_config(self.client_config(), self._scopes)
        kwargs = {'prompt': prompt} if prompt else {}
        try:
            creds = flow.run_local_server(
                port=self._port,
                open_browser=self._open_browser,
                **kwargs
            )
        except Exception as e:
            self._logger.error(f"OAuth flow failed: {e}")
            self._callback({'error': type(e).__name__, 'error_description': str(e)})
            return

        if not creds or not creds.token:
            self._callback(None)
            return

        response: Dict[str, Any] = {
            'access_token': creds.token,
            'token_type': 'Bearer',
            'scope': ' '.join(creds.scopes or self._scopes),
        }
        if creds.expiry is not None:
            # expiry is a naive UTC datetime
            now = datetime.now(timezone.utc).replace(tzinfo=None)
            response['expires_in'] = max(0, int((creds.expiry - now).total_seconds()))
        self._callback(response)
