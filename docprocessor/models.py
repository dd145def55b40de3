"""
Models for docprocessor module.

Immutable dataclasses for everything that crosses a boundary; the only
mutable object is the per-session WorkflowState.
"""
from dataclasses import dataclass, field
from typing import Optional, List, Tuple, Any, Union
from pathlib import Path
from enum import Enum


DEFAULT_API_URL = "http://localhost:5000"
DEFAULT_UPLOAD_PATH = "/api/upload"
DEFAULT_TIMEOUT_SECONDS = 180.0
ACCEPTED_EXTENSIONS = (".png", ".tif", ".tiff", ".jpg", ".jpeg")


class WorkflowStatus(Enum):
    """Submission state machine status."""
    IDLE = "idle"
    SUBMITTING = "submitting"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass(frozen=True)
class FileHandle:
    """Reference to a locally selected file. Bytes are read at upload time."""
    name: str
    path: Optional[Path] = None
    content: Optional[bytes] = None

    @classmethod
    def from_path(cls, path: Path, name: Optional[str] = None):
        path = Path(path)
        return cls(name=name or path.name, path=path)

    @classmethod
    def from_bytes(cls, name: str, content: bytes):
        return cls(name=name, content=content)

    @property
    def suffix(self) -> str:
        return Path(self.name).suffix.lower()

    def read(self) -> bytes:
        if self.content is not None:
            return self.content
        if self.path is None:
            raise ValueError(f"FileHandle {self.name!r} has neither path nor content")
        return self.path.read_bytes()


@dataclass(frozen=True)
class TextKeyValues:
    """Key-value extraction returned by the server as plain text."""
    text: str


@dataclass(frozen=True)
class StructuredKeyValues:
    """Key-value extraction returned by the server as a JSON value (usually a mapping)."""
    value: Any = field(hash=False)


KeyValues = Union[TextKeyValues, StructuredKeyValues]


@dataclass(frozen=True)
class FileResult:
    """Processing result for one uploaded file."""
    file_name: str
    extracted_text: str = ""
    prompt: str = ""
    prompt_created: bool = False
    key_values: KeyValues = TextKeyValues("")

    @property
    def prompt_reused(self) -> bool:
        return not self.prompt_created


@dataclass(frozen=True)
class SubmissionRequest:
    """Validated input for one submission. Not retained after the request is sent."""
    document_type: str
    files: Tuple[FileHandle, ...]


@dataclass(frozen=True)
class SubmissionOutcome:
    """Immutable result of a submit() call."""
    status: WorkflowStatus
    results: Tuple[FileResult, ...] = ()
    error: Optional[str] = None
    error_kind: Optional[str] = None  # validation, application, transport, busy

    @property
    def success(self) -> bool:
        return self.status == WorkflowStatus.SUCCEEDED

    @classmethod
    def ok(cls, results):
        return cls(status=WorkflowStatus.SUCCEEDED, results=tuple(results))

    @classmethod
    def fail(cls, error: str, error_kind: str):
        return cls(status=WorkflowStatus.FAILED, error=error, error_kind=error_kind)

    @classmethod
    def busy(cls):
        return cls(
            status=WorkflowStatus.SUBMITTING,
            error="A submission is already in progress.",
            error_kind="busy",
        )


@dataclass
class WorkflowState:
    """
    Mutable state of one form session.

    Only the orchestrator mutates it; the transition helpers keep
    `results` and `last_error` mutually exclusive.
    """
    document_type: str = ""
    selected_files: List[FileHandle] = field(default_factory=list)
    status: WorkflowStatus = WorkflowStatus.IDLE
    last_error: Optional[str] = None
    results: Optional[List[FileResult]] = None

    @property
    def is_submitting(self) -> bool:
        return self.status == WorkflowStatus.SUBMITTING

    def invalidate(self) -> None:
        """Drop results and error from a previous submission."""
        self.results = None
        self.last_error = None
        if not self.is_submitting:
            self.status = WorkflowStatus.IDLE

    def begin_submission(self) -> None:
        self.results = None
        self.last_error = None
        self.status = WorkflowStatus.SUBMITTING

    def succeed(self, results: List[FileResult]) -> None:
        self.results = list(results)
        self.last_error = None
        self.status = WorkflowStatus.SUCCEEDED

    def fail(self, message: str) -> None:
        self.results = None
        self.last_error = message
        self.status = WorkflowStatus.FAILED


@dataclass(frozen=True)
class UploadConfig:
    """Immutable configuration for the processing endpoint."""
    api_url: str = DEFAULT_API_URL
    upload_path: str = DEFAULT_UPLOAD_PATH
    timeout: float = DEFAULT_TIMEOUT_SECONDS
    files_field: str = "files"
    document_type_field: str = "documentType"
    accepted_extensions: Tuple[str, ...] = ACCEPTED_EXTENSIONS

    @property
    def endpoint_url(self) -> str:
        return self.api_url.rstrip("/") + "/" + self.upload_path.lstrip("/")

    def is_accepted(self, name: str) -> bool:
        """Advisory extension check used by the file selection layer."""
        return Path(name).suffix.lower() in self.accepted_extensions
