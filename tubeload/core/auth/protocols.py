"""
Protocol definitions for the identity handshake.

The identity provider is an external collaborator: a token client is built
with a delivery callback, asked to request a token, and later invokes the
callback exactly once per grant.
"""
from typing import Protocol, Callable, Dict, Any, Optional, Sequence


TokenResponse = Optional[Dict[str, Any]]
TokenCallback = Callable[[TokenResponse], None]


class TokenClientProtocol(Protocol):
    """Interactive token client."""

    def request_access_token(self, prompt: str = '') -> None:
        """
        Start an interactive grant.

        Must return immediately. The client later calls its delivery
        callback with a dict holding 'access_token' (or 'error'), or None
        when the user denied access.

        Args:
            prompt: 'consent' to force the consent screen, '' for silent
        """
        ...


class TokenClientFactory(Protocol):
    """Builds a token client bound to a delivery callback."""

    def __call__(
        self,
        client_id: str,
        scopes: Sequence[str],
        callback: TokenCallback
    ) -> TokenClientProtocol:
        ...
