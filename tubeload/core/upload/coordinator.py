"""
Upload coordinator.

Orchestrates authorize, negotiate and transfer using injected dependencies.
Depends on abstractions, not concretions.
"""
from enum import Enum
from typing import Optional

from .models import UploadRequest, UploadResult
from .protocols import (
    SessionNegotiatorProtocol,
    TransferEngineProtocol,
    TokenSourceProtocol,
    ProgressCallback,
    StatusCallback
)
from ..api.events import EventEmitter
from ..exceptions import UploadException, UploadError, SessionError
from ..logging import get_logger


logger = get_logger('tubeload.upload.coordinator')


class UploadStatus(str, Enum):
    """Coarse status transitions reported while an upload runs."""
    REQUESTING_TOKEN = 'Requesting access token...'
    CREATING_SESSION = 'Creating upload session...'
    UPLOADING = 'Uploading video...'
    COMPLETED = 'Upload completed'


class UploadStep(str, Enum):
    """Step names recorded on UploadError."""
    AUTHORIZE = 'authorize'
    NEGOTIATE = 'negotiate'
    TRANSFER = 'transfer'


class UploadCoordinator:
    """
    Coordinates one upload: ensure token, open session, transfer.

    Uses dependency injection for all components, making it:
    - Testable (mock dependencies)
    - Extensible (swap negotiator or engine)

    Listeners may subscribe to 'status', 'progress' and 'error' events in
    addition to the per-call callbacks.
    """

    def __init__(
        self,
        negotiator: SessionNegotiatorProtocol,
        engine: TransferEngineProtocol,
        events: Optional[EventEmitter] = None
    ):
        """
        Initialize upload coordinator.

        Args:
            negotiator: Opens resumable sessions
            engine: Transfers payloads into sessions
            events: Optional event emitter shared with the caller
        """
        self._negotiator = negotiator
        self._engine = engine
        self._events = events or EventEmitter()

    @property
    def events(self) -> EventEmitter:
        return self._events

    def on(self, event: str, callback) -> 'UploadCoordinator':
        """Register an event handler."""
        self._events.on(event, callback)
        return self

    async def run(
        self,
        request: UploadRequest,
        token_provider: TokenSourceProtocol,
        on_status: Optional[StatusCallback] = None,
        on_progress: Optional[ProgressCallback] = None
    ) -> UploadResult:
        """
        Execute the complete upload.

        The request must carry a non-empty payload and title.

        Args:
            request: Upload request
            token_provider: Source of bearer credentials
            on_status: Optional callback for status transitions
            on_progress: Optional callback for integer percentages

        Returns:
            UploadResult for the created video

        Raises:
            UploadError: If any step fails; carries the step and the cause
        """
        def status(value: UploadStatus) -> None:
            logger.info(value.value)
            if on_status is not None:
                on_status(value.value)
            self._events.emit('status', value)

        def progress(percentage: int) -> None:
            if on_progress is not None:
                on_progress(percentage)
            self._events.emit('progress', percentage)

        progress(0)

        status(UploadStatus.REQUESTING_TOKEN)
        try:
            credential = await token_provider.ensure_token()
        except UploadException as e:
            raise self._failed(UploadStep.AUTHORIZE, e) from e

        status(UploadStatus.CREATING_SESSION)
        try:
            session = await self._negotiator.open(credential, request)
        except SessionError as e:
            if e.status == 401:
                # Stale token: the next run grants a fresh one
                token_provider.invalidate()
            raise self._failed(UploadStep.NEGOTIATE, e) from e
        except UploadException as e:
            raise self._failed(UploadStep.NEGOTIATE, e) from e

        status(UploadStatus.UPLOADING)
        try:
            result = await self._engine.transfer(session, on_progress=progress)
        except UploadException as e:
            raise self._failed(UploadStep.TRANSFER, e) from e

        status(UploadStatus.COMPLETED)
        return result

    def _failed(self, step: UploadStep, cause: UploadException) -> UploadError:
        logger.error(f"Upload failed during {step.value}: {cause}")
        error = UploadError(step.value, cause)
        self._events.emit('error', error)
        return error
