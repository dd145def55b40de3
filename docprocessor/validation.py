"""Input validation for submissions."""
from dataclasses import dataclass
from typing import Optional, Sequence

from .models import FileHandle, SubmissionRequest


DOCUMENT_TYPE_REQUIRED = "Please enter a Document Type."
FILES_REQUIRED = "Please select at least one file."


@dataclass(frozen=True)
class ValidationResult:
    """Ok, or Err carrying the first failure reason."""
    reason: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.reason is None

    @classmethod
    def passed(cls):
        return cls()

    @classmethod
    def failed(cls, reason: str):
        return cls(reason=reason)


def validate(document_type: str, selected_files: Sequence[FileHandle]) -> ValidationResult:
    """
    Decide whether a submission may proceed.

    Document type is checked before the file list, so when both are
    invalid only the document type message is reported.
    """
    if not (document_type or "").strip():
        return ValidationResult.failed(DOCUMENT_TYPE_REQUIRED)
    if len(selected_files) == 0:
        return ValidationResult.failed(FILES_REQUIRED)
    return ValidationResult.passed()


def build_request(document_type: str, selected_files: Sequence[FileHandle]) -> SubmissionRequest:
    """Build a SubmissionRequest from already validated input."""
    return SubmissionRequest(
        document_type=document_type.strip(),
        files=tuple(selected_files),
    )
