"""
Token provider.

Obtains and caches the bearer credential used by the upload pipeline.
The identity provider delivers tokens through a callback, so every grant is
represented by one future that the callback settles exactly once.
"""
import asyncio
import functools
from typing import Optional

from .models import Credential
from .protocols import TokenClientFactory, TokenClientProtocol, TokenResponse
from .installed_app import InstalledAppTokenClient
from ..api.config import OAuthConfig
from ..exceptions import AuthorizationError
from ..logging import get_logger


class TokenProvider:
    """
    Provides a valid bearer credential, running an interactive grant if needed.

    One instance per application session. The credential lives in memory
    only and is replaced (never mutated) on re-authorization.

    Concurrent callers of ensure_token() share one in-flight grant, so the
    user never sees two consent prompts for the same request.

    Example:
        >>> provider = TokenProvider(OAuthConfig(client_id="...apps.googleusercontent.com"))
        >>> if provider.ready:
        ...     credential = await provider.ensure_token()
    """

    CONSENT_PROMPT = 'consent'
    SILENT_PROMPT = ''

    def __init__(
        self,
        config: OAuthConfig,
        token_client_factory: Optional[TokenClientFactory] = None
    ):
        """
        Initialize token provider.

        Args:
            config: OAuth client configuration
            token_client_factory: Builds the interactive token client
                (defaults to the installed-app loopback flow)
        """
        self._config = config
        self._factory = token_client_factory or functools.partial(
            InstalledAppTokenClient,
            client_secret=config.client_secret
        )
        self._token_client: Optional[TokenClientProtocol] = None
        self._client_generation = 0
        self._init_error: Optional[Exception] = None
        self._credential: Optional[Credential] = None
        self._granted_once = False
        self._pending: Optional[asyncio.Future] = None
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._logger = get_logger('tubeload.auth')

    @property
    def ready(self) -> bool:
        """Returns True once a client id is configured and the token client exists."""
        return self._get_token_client() is not None

    @property
    def credential(self) -> Optional[Credential]:
        """Returns the cached credential, if any."""
        return self._credential

    @property
    def scopes(self):
        return self._config.scopes

    def invalidate(self) -> None:
        """
        Drop the cached credential.

        The next grant is still silent because consent was given once.
        """
        if self._credential is not None:
            self._logger.info("Cached access token invalidated")
        self._credential = None

    async def ensure_token(self) -> Credential:
        """
        Return a valid credential.

        Returns the cached credential without any interactive step when one
        exists; otherwise runs a grant (forced consent on the very first one).

        Returns:
            Credential

        Raises:
            AuthorizationError: If the token client is not ready, the grant is
                denied or fails, or the provider does not answer in time
        """
        credential = self._credential
        if credential is not None:
            return credential
        return await self._grant()

    async def reauthorize(self) -> Credential:
        """
        Run a new grant and replace the cached credential.

        Returns:
            The new Credential

        Raises:
            AuthorizationError: If the grant fails
        """
        return await self._grant()

    async def _grant(self) -> Credential:
        """Join the in-flight grant or start a new one."""
        if self._pending is None or self._pending.done():
            self._pending = self._start_grant()
        # Shield so a cancelled waiter does not cancel the shared grant
        return await asyncio.shield(self._pending)

    def _start_grant(self) -> asyncio.Future:
        client = self._get_token_client()
        if client is None:
            if not self._config.is_configured:
                raise AuthorizationError("Google Identity not initialized: no client id configured")
            raise AuthorizationError(
                f"Google Identity not initialized: {self._init_error}"
            ) from self._init_error

        loop = asyncio.get_running_loop()
        self._loop = loop
        future = loop.create_future()
        timer = loop.call_later(
            self._config.grant_timeout,
            self._expire,
            future
        )
        future.add_done_callback(lambda _: timer.cancel())

        prompt = self.SILENT_PROMPT if self._granted_once else self.CONSENT_PROMPT
        self._logger.info(
            f"Requesting access token ({'silent' if prompt == self.SILENT_PROMPT else 'consent'})"
        )
        try:
            client.request_access_token(prompt=prompt)
        except Exception as e:
            self._logger.error(f"Token request failed to start: {e}")
            future.set_exception(AuthorizationError(f"GIS token client unavailable: {e}"))
        return future

    def _get_token_client(self) -> Optional[TokenClientProtocol]:
        """Lazily build the token client once a client id is available."""
        if self._token_client is not None:
            return self._token_client
        if not self._config.is_configured:
            return None
        try:
            self._token_client = self._factory(
                self._config.client_id,
                self._config.scopes,
                functools.partial(self._on_token_response, self._client_generation)
            )
            self._init_error = None
        except Exception as e:
            self._logger.warning(f"Could not initialize token client: {e}")
            self._init_error = e
        return self._token_client

    def _retire_token_client(self) -> None:
        """Forget the current token client; its later deliveries are ignored."""
        self._token_client = None
        self._client_generation += 1

    def _on_token_response(self, generation: int, response: TokenResponse) -> None:
        """Delivery callback handed to the token client; may run on any thread."""
        loop = self._loop
        if loop is None or loop.is_closed():
            self._logger.warning("Token delivered with no grant in progress; ignoring")
            return
        loop.call_soon_threadsafe(self._settle, generation, response)

    def _settle(self, generation: int, response: TokenResponse) -> None:
        """Resolve the pending grant from a delivery (event loop thread only)."""
        if generation != self._client_generation:
            self._logger.debug("Ignoring token delivery from a superseded token client")
            return

        future = self._pending
        if future is None or future.done():
            self._logger.debug("Ignoring duplicate or late token delivery")
            return

        if not response:
            self._logger.warning("Authorization was denied")
            future.set_exception(AuthorizationError("Authorization was denied"))
            return

        if response.get('error'):
            detail = response.get('error_description') or ''
            message = f"Authorization failed: {response['error']} {detail}".rstrip()
            self._logger.error(message)
            future.set_exception(AuthorizationError(message))
            return

        if not response.get('access_token'):
            self._logger.error("Token delivery carried no access token")
            future.set_exception(AuthorizationError("Authorization returned no access token"))
            return

        credential = Credential.from_response(response, self._config.scopes)
        self._credential = credential
        self._granted_once = True
        self._logger.info("Access token obtained")
        future.set_result(credential)

    def _expire(self, future: asyncio.Future) -> None:
        if not future.done():
            self._logger.error(
                f"No token delivered within {self._config.grant_timeout:.0f}s"
            )
            # Late answers from this client must not settle the next grant
            self._retire_token_client()
            future.set_exception(AuthorizationError("Timed out waiting for authorization"))
