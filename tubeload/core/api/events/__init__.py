"""Event emitter using Observer Pattern."""
from .event_emitter import EventEmitter, UPLOAD_EVENTS

__all__ = [
    'EventEmitter',
    'UPLOAD_EVENTS',
]
