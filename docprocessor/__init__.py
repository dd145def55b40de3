"""
docprocessor - client for the OCR + AI prompt document processing endpoint.

A document type label and one or more images are uploaded in a single
multipart request; the endpoint answers with, per file, the OCR text, the
extraction prompt (newly created or reused for that document type) and
the extracted key-value pairs.

Usage:
    from docprocessor import UploadOrchestrator, UploadConfig, FileHandle

    async with UploadOrchestrator(config=UploadConfig(api_url=url)) as orchestrator:
        orchestrator.set_document_type("Invoice")
        orchestrator.set_files([FileHandle.from_path(Path("scan.png"))])
        outcome = await orchestrator.submit()

    if outcome.success:
        for file_view in orchestrator.view().files:
            print(file_view.file_name, file_view.key_values_text)
    else:
        print(outcome.error)
"""
from .orchestrator import UploadOrchestrator, FileCollector
from .models import (
    FileHandle,
    FileResult,
    StructuredKeyValues,
    SubmissionOutcome,
    SubmissionRequest,
    TextKeyValues,
    UploadConfig,
    WorkflowState,
    WorkflowStatus,
)
from .errors import (
    ApplicationError,
    DocumentProcessingError,
    TransportError,
    ValidationError,
)
from .validation import validate
from .services import HTTPProcessingClient, RequestBuilder, ResponseMapper

__version__ = "0.1.0"
__all__ = [
    # Main
    "UploadOrchestrator",
    "FileCollector",
    # Models
    "FileHandle",
    "FileResult",
    "StructuredKeyValues",
    "SubmissionOutcome",
    "SubmissionRequest",
    "TextKeyValues",
    "UploadConfig",
    "WorkflowState",
    "WorkflowStatus",
    # Errors
    "ApplicationError",
    "DocumentProcessingError",
    "TransportError",
    "ValidationError",
    # Services
    "validate",
    "HTTPProcessingClient",
    "RequestBuilder",
    "ResponseMapper",
]
