"""Authorization: bearer credential acquisition and caching."""
from .models import Credential
from .protocols import TokenClientProtocol, TokenClientFactory, TokenCallback
from .token_provider import TokenProvider
from .installed_app import InstalledAppTokenClient

__all__ = [
    'Credential',
    'TokenProvider',
    'TokenClientProtocol',
    'TokenClientFactory',
    'TokenCallback',
    'InstalledAppTokenClient',
]
