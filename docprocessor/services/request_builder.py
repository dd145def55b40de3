"""Multipart request assembly for the processing endpoint."""
from __future__ import annotations

import logging
import mimetypes
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from ..models import SubmissionRequest, UploadConfig

logger = logging.getLogger(__name__)

DEFAULT_CONTENT_TYPE = "application/octet-stream"

# (field name, (filename, content, content type)), the shape httpx accepts for repeated fields
FilePart = Tuple[str, Tuple[str, bytes, str]]


def guess_content_type(name: str) -> str:
    content_type, _ = mimetypes.guess_type(name)
    return content_type or DEFAULT_CONTENT_TYPE


@dataclass(frozen=True)
class MultipartPayload:
    """Wire-level multipart body: repeated file parts plus scalar form fields."""
    files: List[FilePart] = field(default_factory=list)
    data: Dict[str, str] = field(default_factory=dict)

    @property
    def file_names(self) -> List[str]:
        return [part[1][0] for part in self.files]


class RequestBuilder:
    """
    Turns a validated SubmissionRequest into a MultipartPayload.

    Extensions are not checked here: whatever the selection layer handed
    over is sent.
    """

    def __init__(self, config: Optional[UploadConfig] = None):
        self._config = config or UploadConfig()

    def build(self, request: SubmissionRequest) -> MultipartPayload:
        files: List[FilePart] = []
        for handle in request.files:
            files.append(
                (
                    self._config.files_field,
                    (handle.name, handle.read(), guess_content_type(handle.name)),
                )
            )
        logger.debug(
            "Built multipart payload: %d file(s), %s=%r",
            len(files),
            self._config.document_type_field,
            request.document_type,
        )
        return MultipartPayload(
            files=files,
            data={self._config.document_type_field: request.document_type.strip()},
        )
