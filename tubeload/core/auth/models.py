"""Authorization models."""
from dataclasses import dataclass
from typing import Dict, Any, Optional, Tuple


@dataclass(frozen=True)
class Credential:
    """
    Bearer credential for the upload scopes.

    Held in memory only and replaced as a whole on re-authorization.

    Attributes:
        access_token: Opaque bearer token
        scopes: Scopes the token was requested for
        token_type: Token type reported by the provider
        expires_in: Lifetime in seconds as reported by the provider (informational)
    """
    access_token: str
    scopes: Tuple[str, ...] = ()
    token_type: str = 'Bearer'
    expires_in: Optional[int] = None

    @property
    def authorization_header(self) -> str:
        """Returns the value for the Authorization header."""
        return f"Bearer {self.access_token}"

    @classmethod
    def from_response(cls, response: Dict[str, Any], scopes: Tuple[str, ...]) -> 'Credential':
        """
        Create from a token client delivery.

        Args:
            response: Delivered payload containing 'access_token'
            scopes: Scopes that were requested

        Returns:
            New Credential
        """
        expires_in = response.get('expires_in')
        return cls(
            access_token=response['access_token'],
            scopes=tuple(scopes),
            token_type=response.get('token_type') or 'Bearer',
            expires_in=int(expires_in) if expires_in is not None else None
        )

    def __repr__(self) -> str:
        return f"Credential(token_type={self.token_type!r}, scopes={self.scopes!r}, expires_in={self.expires_in!r})"
