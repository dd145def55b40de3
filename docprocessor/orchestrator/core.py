"""Core orchestrator - owns the workflow state and drives submissions."""
import asyncio
import logging
from typing import Callable, Iterable, Optional

from ..errors import FALLBACK_ERROR_MESSAGE, ApplicationError, TransportError, ValidationError
from ..models import (
    FileHandle,
    SubmissionOutcome,
    UploadConfig,
    WorkflowState,
)
from ..protocols import IProcessingClient
from ..services.api_client import HTTPProcessingClient
from ..services.projector import ResultsView, project_state
from ..utils.events import EventEmitter, SUBMIT_FAILED, SUBMIT_STARTED, SUBMIT_SUCCEEDED
from ..validation import build_request, validate

logger = logging.getLogger(__name__)


class UploadOrchestrator:
    """
    Orchestrates one form session against the processing endpoint.

    State machine: IDLE -> SUBMITTING -> SUCCEEDED | FAILED, re-entrant for
    later submissions. At most one request is in flight; edits made while
    submitting are ignored.

    Usage:
        async with UploadOrchestrator(config=UploadConfig(api_url=url)) as orchestrator:
            orchestrator.set_document_type("Invoice")
            orchestrator.set_files([FileHandle.from_path(path)])
            outcome = await orchestrator.submit()
            view = orchestrator.view()
    """

    def __init__(
        self,
        config: Optional[UploadConfig] = None,
        client: Optional[IProcessingClient] = None,
    ):
        """
        Initialize orchestrator with dependencies.

        Args:
            config: Endpoint configuration
            client: Pre-built processing client; an HTTPProcessingClient is
                created in __aenter__ when omitted
        """
        self._config = config or UploadConfig()
        self._external_client = client
        self._client: Optional[IProcessingClient] = client
        self._http_client: Optional[HTTPProcessingClient] = None
        self._state = WorkflowState()
        self._events = EventEmitter()

    async def __aenter__(self):
        if self._external_client is None:
            self._http_client = HTTPProcessingClient(self._config)
            await self._http_client.__aenter__()
            self._client = self._http_client
        return self

    async def __aexit__(self, *args):
        if self._http_client:
            await self._http_client.__aexit__(*args)
            self._http_client = None
            self._client = None

    @property
    def state(self) -> WorkflowState:
        return self._state

    @property
    def config(self) -> UploadConfig:
        return self._config

    def on(self, event_name: str, callback: Callable) -> None:
        self._events.on(event_name, callback)

    def off(self, event_name: str, callback: Callable) -> None:
        self._events.off(event_name, callback)

    def set_document_type(self, document_type: str) -> bool:
        """Change the document type. Returns False when ignored during a submission."""
        if self._state.is_submitting:
            logger.debug("Ignoring document type change while submitting")
            return False
        self._state.document_type = document_type
        self._state.invalidate()
        return True

    def set_files(self, files: Iterable[FileHandle]) -> bool:
        """Replace the file selection. Returns False when ignored during a submission."""
        if self._state.is_submitting:
            logger.debug("Ignoring file selection change while submitting")
            return False
        self._state.selected_files = list(files)
        self._state.invalidate()
        return True

    def view(self) -> Optional[ResultsView]:
        return project_state(self._state)

    async def submit(self) -> SubmissionOutcome:
        """
        Validate, send one request and settle the state.

        Never raises for validation, application or transport failures; the
        outcome and the state both carry the message.
        """
        state = self._state
        if state.is_submitting:
            logger.info("Submission already in progress, ignoring submit")
            return SubmissionOutcome.busy()

        validation = validate(state.document_type, state.selected_files)
        if not validation.ok:
            state.fail(validation.reason)
            logger.info("Submission rejected: %s", validation.reason)
            return SubmissionOutcome.fail(validation.reason, ValidationError.kind)

        if self._client is None:
            raise RuntimeError("UploadOrchestrator not initialized. Use 'async with' context.")

        request = build_request(state.document_type, state.selected_files)
        state.begin_submission()

        try:
            await self._events.emit(SUBMIT_STARTED, request)
            results = await self._client.submit(request)
        except asyncio.CancelledError:
            state.fail(FALLBACK_ERROR_MESSAGE)
            logger.warning("Submission cancelled while in flight")
            raise
        except (ApplicationError, TransportError) as exc:
            state.fail(exc.message)
            logger.warning("Submission failed (%s): %s", exc.kind, exc.message)
            outcome = SubmissionOutcome.fail(exc.message, exc.kind)
            await self._events.emit(SUBMIT_FAILED, outcome)
            return outcome
        except Exception as exc:
            message = str(exc).strip() or FALLBACK_ERROR_MESSAGE
            state.fail(message)
            logger.error("Unexpected error during submission: %s", message, exc_info=True)
            outcome = SubmissionOutcome.fail(message, TransportError.kind)
            await self._events.emit(SUBMIT_FAILED, outcome)
            return outcome

        state.succeed(results)
        logger.info("Submission succeeded: %d result(s)", len(results))
        outcome = SubmissionOutcome.ok(results)
        await self._events.emit(SUBMIT_SUCCEEDED, outcome)
        return outcome
